from typing import Any, Dict, Iterable, Optional

from igsocial.shared.graph_client import GraphClient, call_graph
from igsocial.shared.logging_utils import info as log_info, warning as log_warning
from igsocial.specs.common.enums import ResultStatus
from igsocial.specs.common.errors import TransportError
from igsocial.specs.models.instagram import ResolvePermalinkRequest
from igsocial.specs.models.tools import PublishResult


RECENT_MEDIA_SCAN_FIELDS = "id,permalink,caption,timestamp,media_type"
RECENT_MEDIA_SCAN_LIMIT = 25


def _strip_slash(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


def find_by_permalink(items: Iterable[Any], permalink_url: str) -> Optional[str]:
    """Id of the first item whose permalink matches, ignoring one trailing slash."""
    target = _strip_slash(permalink_url)
    for item in items:
        if not isinstance(item, dict):
            continue
        permalink = item.get("permalink")
        if isinstance(permalink, str) and _strip_slash(permalink) == target:
            return item.get("id")
    return None


async def resolve_permalink(
    client: GraphClient,
    ig_user_id: str,
    req: ResolvePermalinkRequest,
) -> PublishResult:
    """Translate a public post URL into a Graph media id.

    Tries the oEmbed endpoint first; when that call fails, scans the
    account's most recent media. An unmatched URL resolves to mediaId=None.
    """
    strategy = "oembed"
    try:
        result: Dict[str, Any] = await call_graph(
            client,
            "GET",
            "instagram_oembed",
            {"url": req.permalink_url, "omitscript": True},
        )
        media_id = result.get("media_id")
    except TransportError as exc:
        log_warning(req.runTraceId, "instagram:permalink:oembed_failed", error=str(exc))
        strategy = "recent_media"
        result = await call_graph(
            client,
            "GET",
            f"{ig_user_id}/media",
            {"fields": RECENT_MEDIA_SCAN_FIELDS, "limit": RECENT_MEDIA_SCAN_LIMIT},
        )
        data = result.get("data")
        media_id = find_by_permalink(data if isinstance(data, list) else [], req.permalink_url)

    log_info(
        req.runTraceId,
        "instagram:permalink:resolved",
        strategy=strategy,
        matched=media_id is not None,
    )
    return PublishResult(
        status=ResultStatus.RESOLVED.value,
        permalinkUrl=req.permalink_url,
        mediaId=media_id,
        strategy=strategy,
        result=result,
    )
