from __future__ import annotations

import logging
from typing import Optional

from igsocial.manager import InstagramManager
from igsocial.specs.models.instagram import DeleteCommentRequest
from igsocial.specs.models.tools import PublishResult
from igsocial.specs.tools_registry import ToolDef, get_tool_def


TOOL_DEF: ToolDef = get_tool_def("delete_comment")


async def execute(
    args: dict,
    manager: InstagramManager,
    logger: Optional[logging.Logger] = None,
) -> PublishResult:
    req = DeleteCommentRequest(**args)
    return await manager.delete_comment(req)
