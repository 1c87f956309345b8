from __future__ import annotations

import asyncio
import importlib
import json
import logging
import pkgutil
import time
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, List, Optional, Tuple

from igsocial.specs.tools_registry import ToolDef
from igsocial.specs.models.tools import ErrorInfo, ToolResultEnvelope

if TYPE_CHECKING:
    from igsocial.manager import InstagramManager

Executor = Callable[..., Awaitable[Any]]


@lru_cache(maxsize=1)
def _discover() -> Tuple[List[ToolDef], Dict[str, Executor]]:
    """Discover tool modules in the igsocial.tools package.

    Each tool module should export:
      - TOOL_DEF: ToolDef
      - async execute(args: dict, manager: InstagramManager, logger: Optional[Logger]) -> PublishResult
    """
    tool_defs: List[ToolDef] = []
    executors: Dict[str, Executor] = {}

    import igsocial.tools as tools_pkg

    for modinfo in sorted(pkgutil.iter_modules(tools_pkg.__path__), key=lambda m: m.name):
        name = modinfo.name
        if not name.endswith("_tool"):
            continue
        module = importlib.import_module(f"igsocial.tools.{name}")
        tool_def = getattr(module, "TOOL_DEF", None)
        execute = getattr(module, "execute", None)
        if tool_def and execute:
            tool_defs.append(tool_def)
            executors[tool_def.name] = execute

    return tool_defs, executors


def list_tool_defs() -> List[ToolDef]:
    defs, _ = _discover()
    return list(defs)


def build_function_tools() -> List[dict]:
    """Return agent function tool specs derived from discovered ToolDefs.

    Uses Pydantic model JSON schema as tool parameters. Adjust the key
    from `parameters` to `input_schema` if required by your SDK variant.
    """
    defs, _ = _discover()
    tools: List[dict] = []
    for t in defs:
        tools.append(
            {
                "type": "function",
                "function": {
                    "name": t.name,
                    "description": t.description,
                    "parameters": t.input_model.model_json_schema(),
                },
            }
        )
    return tools


def _unknown_tool(name: str) -> str:
    err = ErrorInfo(code="UnknownTool", message=f"Tool '{name}' not implemented")
    return ToolResultEnvelope(status="failed", result=None, error=err).model_dump_json()


async def execute_tool(
    name: str,
    args: Optional[dict],
    *,
    manager: Optional[InstagramManager] = None,
    logger: Optional[logging.Logger] = None,
) -> str:
    """Validate args, run the tool and return its result as a JSON string.

    Unknown tools return a standardized failed envelope. Validation and
    Graph errors raised by the tool propagate to the caller.
    """
    log = logger or logging.getLogger("igsocial")
    _, executors = _discover()
    handler = executors.get(name)
    if not handler:
        log.warning("execute_tool: unknown tool name=%s", name)
        return _unknown_tool(name)

    owned = manager is None
    if owned:
        from igsocial.manager import InstagramManager

        manager = InstagramManager.from_env()

    start = time.perf_counter()
    try:
        resp = await handler(dict(args or {}), manager, log)
    except Exception as exc:
        dur_ms = int((time.perf_counter() - start) * 1000)
        log.warning("execute_tool: failed name=%s durationMs=%s err=%s", name, dur_ms, exc)
        raise
    finally:
        # A manager built here is ours to close
        if owned:
            manager.close()
    dur_ms = int((time.perf_counter() - start) * 1000)
    log.info("execute_tool: done name=%s status=%s durationMs=%s", name, getattr(resp, "status", None), dur_ms)
    if hasattr(resp, "model_dump_json"):
        return resp.model_dump_json()
    return json.dumps(resp)


def execute_tool_sync(
    name: str,
    args: Optional[dict],
    *,
    manager: Optional[InstagramManager] = None,
    logger: Optional[logging.Logger] = None,
) -> str:
    """Blocking variant for agent runtimes that dispatch tools from worker threads."""
    return asyncio.run(execute_tool(name, args, manager=manager, logger=logger))


__all__ = [
    "list_tool_defs",
    "build_function_tools",
    "execute_tool",
    "execute_tool_sync",
]
