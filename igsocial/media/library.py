from igsocial.shared.graph_client import GraphClient, call_graph
from igsocial.shared.logging_utils import info as log_info
from igsocial.specs.common.enums import ResultStatus
from igsocial.specs.models.instagram import (
    DeleteMediaRequest,
    GetRecentMediaRequest,
    SchedulePostRequest,
    UpdateCaptionRequest,
)
from igsocial.specs.models.tools import PublishResult


RECENT_MEDIA_FIELDS = "id,caption,media_type,media_url,permalink,timestamp,like_count,comments_count"

SCHEDULE_NOTE = "Instagram scheduling is handled by an external scheduler; nothing was published."


class MediaLibrary:
    """Operations on media that is already published."""

    def __init__(self, client: GraphClient, ig_user_id: str) -> None:
        self.client = client
        self.ig_user_id = ig_user_id

    async def recent_media(self, req: GetRecentMediaRequest) -> PublishResult:
        resp = await call_graph(
            self.client,
            "GET",
            f"{self.ig_user_id}/media",
            {"fields": RECENT_MEDIA_FIELDS, "limit": req.limit},
        )
        return PublishResult(status=ResultStatus.OK.value, media=resp.get("data") or [])

    async def update_caption(self, req: UpdateCaptionRequest) -> PublishResult:
        resp = await call_graph(self.client, "POST", req.media_id, {"caption": req.caption})
        log_info(req.runTraceId, "instagram:media:caption_updated", mediaId=req.media_id)
        return PublishResult(status=ResultStatus.UPDATED.value, mediaId=req.media_id, result=resp)

    async def delete_media(self, req: DeleteMediaRequest) -> PublishResult:
        resp = await call_graph(self.client, "DELETE", req.media_id)
        log_info(req.runTraceId, "instagram:media:deleted", mediaId=req.media_id)
        return PublishResult(status=ResultStatus.DELETED.value, mediaId=req.media_id, result=resp)

    async def schedule(self, req: SchedulePostRequest) -> PublishResult:
        # Acknowledgement only; no Graph call is made
        return PublishResult(
            status=ResultStatus.SCHEDULED.value,
            note=SCHEDULE_NOTE,
            scheduledAt=req.scheduled_at.isoformat(),
            payload=req.model_dump(mode="json", exclude={"runTraceId"}),
        )
