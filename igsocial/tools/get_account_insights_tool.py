from __future__ import annotations

import logging
from typing import Optional

from igsocial.manager import InstagramManager
from igsocial.specs.models.instagram import AccountInsightsRequest
from igsocial.specs.models.tools import PublishResult
from igsocial.specs.tools_registry import ToolDef, get_tool_def


TOOL_DEF: ToolDef = get_tool_def("get_account_insights")


async def execute(
    args: dict,
    manager: InstagramManager,
    logger: Optional[logging.Logger] = None,
) -> PublishResult:
    """Adapter for centralized tool registry.

    Graph failures come back as a status="error" result; a blank metric raises.
    """
    req = AccountInsightsRequest(**args)
    return await manager.get_account_insights(req)
