import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from igsocial.specs.common.errors import ConfigurationError


DEFAULT_API_VERSION = "v22.0"
DEFAULT_GRAPH_BASE_URL = "https://graph.facebook.com"

_TRUTHY = {"1", "true", "yes", "on"}


class InstagramSettings(BaseModel):
    """Read-only configuration shared by the transport and every operation."""

    model_config = ConfigDict(frozen=True)

    access_token: str = Field(min_length=1)
    ig_user_id: str = Field(min_length=1)
    api_version: str = Field(default=DEFAULT_API_VERSION, min_length=1)
    # Token used for container creation; some content types need a page token
    container_access_token: Optional[str] = None
    graph_base_url: str = DEFAULT_GRAPH_BASE_URL
    request_timeout_seconds: float = Field(default=30.0, gt=0)
    readiness_max_attempts: int = Field(default=15, ge=1)
    readiness_interval_seconds: float = Field(default=2.0, ge=0)
    strict_readiness: bool = False

    @property
    def publishing_token(self) -> str:
        return self.container_access_token or self.access_token

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "InstagramSettings":
        """Build settings from the process environment.

        Raises ConfigurationError naming every missing required variable.
        """
        env = os.environ if environ is None else environ
        access_token = env.get("INSTAGRAM_ACCESS_TOKEN") or env.get("META_PAGE_ACCESS_TOKEN")
        ig_user_id = env.get("INSTAGRAM_IG_USER_ID") or env.get("INSTAGRAM_ACCOUNT_ID")
        if not (access_token and ig_user_id):
            missing = [
                k for k, v in [
                    ("INSTAGRAM_ACCESS_TOKEN (or META_PAGE_ACCESS_TOKEN)", access_token),
                    ("INSTAGRAM_IG_USER_ID (or INSTAGRAM_ACCOUNT_ID)", ig_user_id),
                ]
                if not v
            ]
            raise ConfigurationError(
                f"Missing Instagram env vars: {', '.join(missing)}",
                details={"missing": missing},
            )

        kwargs = {
            "access_token": access_token,
            "ig_user_id": ig_user_id,
            "api_version": env.get("META_GRAPH_API_VERSION") or DEFAULT_API_VERSION,
            "container_access_token": env.get("INSTAGRAM_CONTAINER_ACCESS_TOKEN") or None,
            "graph_base_url": env.get("META_GRAPH_BASE_URL") or DEFAULT_GRAPH_BASE_URL,
            "strict_readiness": (env.get("INSTAGRAM_STRICT_READINESS") or "").lower() in _TRUTHY,
        }
        timeout = env.get("META_GRAPH_TIMEOUT")
        if timeout:
            try:
                kwargs["request_timeout_seconds"] = float(timeout)
            except ValueError:
                raise ConfigurationError(f"META_GRAPH_TIMEOUT must be a number, got {timeout!r}")
        return cls(**kwargs)
