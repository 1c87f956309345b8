#!/usr/bin/env python3
"""
Generate JSON Schemas, YAML variants and the function-tool index from Pydantic models.

Outputs under igsocial/specs/:
 - schemas/*.json (and *.yaml)
 - tools.yaml
 - function_tools.json
"""
from __future__ import annotations

import json
import sys
from pathlib import Path

try:
    import yaml  # type: ignore
except ImportError:  # pragma: no cover
    print("PyYAML is required: pip install pyyaml", file=sys.stderr)
    raise


ROOT = Path(__file__).resolve().parents[1]
PKG = ROOT / "igsocial"
SPECS = PKG / "specs"
SCHEMAS_DIR = SPECS / "schemas"

sys.path.insert(0, str(ROOT))

from igsocial.specs.models import SCHEMA_MODELS  # noqa: E402
from igsocial.specs.tools_registry import TOOLS, ToolDef  # noqa: E402
from igsocial.tools.registry import build_function_tools  # noqa: E402


def write_json_yaml(obj: dict, json_path: Path) -> None:
    json_path.parent.mkdir(parents=True, exist_ok=True)
    with json_path.open("w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)
    yaml_path = json_path.with_suffix(".yaml")
    with yaml_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def write_yaml(obj: dict, yaml_path: Path) -> None:
    yaml_path.parent.mkdir(parents=True, exist_ok=True)
    with yaml_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(obj, f, sort_keys=False)


def generate_model_schemas() -> None:
    for filename, model in SCHEMA_MODELS.items():
        schema = model.model_json_schema()
        write_json_yaml(schema, SCHEMAS_DIR / filename)


def generate_tools_yaml() -> None:
    # Build a reverse map from model -> schema filename
    reverse = {model: filename for filename, model in SCHEMA_MODELS.items()}
    tools: list[dict] = []
    for t in TOOLS:
        assert isinstance(t, ToolDef)
        in_fname = reverse.get(t.input_model)
        out_fname = reverse.get(t.output_model)
        if not in_fname or not out_fname:
            raise KeyError(
                f"Schema filename not found for tool {t.name}: "
                f"input={t.input_model.__name__}, output={t.output_model.__name__}"
            )
        tools.append(
            {
                "name": t.name,
                "description": t.description,
                "input": {"$ref": f"./schemas/{in_fname}"},
                "output": {"$ref": f"./schemas/{out_fname}"},
            }
        )

    doc = {"kind": "function-tools", "version": "0.1.0", "channel": "instagram", "tools": tools}
    write_yaml(doc, SPECS / "tools.yaml")


def generate_function_tools() -> None:
    with (SPECS / "function_tools.json").open("w", encoding="utf-8") as f:
        json.dump(build_function_tools(), f, indent=2, ensure_ascii=False)


def main() -> None:
    generate_model_schemas()
    generate_tools_yaml()
    generate_function_tools()
    print("Specs generated under igsocial/specs/")


if __name__ == "__main__":
    main()
