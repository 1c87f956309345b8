from igsocial.shared.graph_client import GraphClient, call_graph
from igsocial.shared.logging_utils import info as log_info
from igsocial.specs.common.enums import ResultStatus
from igsocial.specs.models.instagram import DeleteCommentRequest, GetCommentsRequest, ReplyCommentRequest
from igsocial.specs.models.tools import PublishResult


COMMENT_FIELDS = "id,timestamp,text,username,like_count,replies,user"


class CommentOperations:
    """Single-call comment moderation on a media object."""

    def __init__(self, client: GraphClient) -> None:
        self.client = client

    async def list_comments(self, req: GetCommentsRequest) -> PublishResult:
        resp = await call_graph(
            self.client,
            "GET",
            f"{req.media_id}/comments",
            {"fields": COMMENT_FIELDS, "limit": req.limit},
        )
        comments = resp.get("data") or []
        log_info(req.runTraceId, "instagram:comments:listed", mediaId=req.media_id, count=len(comments))
        return PublishResult(status=ResultStatus.OK.value, mediaId=req.media_id, comments=comments, result=resp)

    async def reply(self, req: ReplyCommentRequest) -> PublishResult:
        resp = await call_graph(self.client, "POST", f"{req.comment_id}/replies", {"message": req.message})
        log_info(req.runTraceId, "instagram:comments:replied", commentId=req.comment_id, replyId=resp.get("id"))
        return PublishResult(status=ResultStatus.OK.value, commentId=req.comment_id, result=resp)

    async def delete(self, req: DeleteCommentRequest) -> PublishResult:
        resp = await call_graph(self.client, "DELETE", req.comment_id)
        log_info(req.runTraceId, "instagram:comments:deleted", commentId=req.comment_id)
        return PublishResult(status=ResultStatus.DELETED.value, commentId=req.comment_id, result=resp)
