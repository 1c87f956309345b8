from __future__ import annotations

import logging
from typing import Optional

from igsocial.manager import InstagramManager
from igsocial.specs.models.instagram import PostReelRequest
from igsocial.specs.models.tools import PublishResult
from igsocial.specs.tools_registry import ToolDef, get_tool_def


TOOL_DEF: ToolDef = get_tool_def("post_reel")


async def execute(
    args: dict,
    manager: InstagramManager,
    logger: Optional[logging.Logger] = None,
) -> PublishResult:
    """Publish a reel; may wait up to the readiness budget (15 x 2s by default)."""
    log = logger or logging.getLogger("igsocial")
    req = PostReelRequest(**args)
    result = await manager.post_reel(req)
    if getattr(result, "readiness", None) != "ready":
        log.warning("post_reel: published without confirmed readiness creationId=%s", getattr(result, "creationId", None))
    return result
