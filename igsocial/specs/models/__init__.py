from __future__ import annotations

from typing import Dict, Type

from pydantic import BaseModel

from .tools import ErrorInfo, ToolResultEnvelope, PublishResult
from .instagram import (
    UserTag,
    PostPhotoRequest,
    PostStoryRequest,
    PostCarouselRequest,
    PostReelRequest,
    GetCommentsRequest,
    ReplyCommentRequest,
    DeleteCommentRequest,
    GetRecentMediaRequest,
    GetMediaInsightsRequest,
    AccountInsightsRequest,
    ResolvePermalinkRequest,
    UpdateCaptionRequest,
    DeleteMediaRequest,
    SchedulePostRequest,
)


# Registry mapping output schema filenames to models for generation
SCHEMA_MODELS: Dict[str, Type[BaseModel]] = {
    "tool.envelope.schema.json": ToolResultEnvelope,
    "error.info.schema.json": ErrorInfo,
    "publish.result.schema.json": PublishResult,
    "user_tag.schema.json": UserTag,
    "post_photo.request.schema.json": PostPhotoRequest,
    "post_story.request.schema.json": PostStoryRequest,
    "post_carousel.request.schema.json": PostCarouselRequest,
    "post_reel.request.schema.json": PostReelRequest,
    "get_comments.request.schema.json": GetCommentsRequest,
    "reply_comment.request.schema.json": ReplyCommentRequest,
    "delete_comment.request.schema.json": DeleteCommentRequest,
    "get_recent_media.request.schema.json": GetRecentMediaRequest,
    "get_media_insights.request.schema.json": GetMediaInsightsRequest,
    "get_account_insights.request.schema.json": AccountInsightsRequest,
    "resolve_permalink.request.schema.json": ResolvePermalinkRequest,
    "update_caption.request.schema.json": UpdateCaptionRequest,
    "delete_media.request.schema.json": DeleteMediaRequest,
    "schedule_post.request.schema.json": SchedulePostRequest,
}

__all__ = [
    "ErrorInfo",
    "ToolResultEnvelope",
    "PublishResult",
    "UserTag",
    "PostPhotoRequest",
    "PostStoryRequest",
    "PostCarouselRequest",
    "PostReelRequest",
    "GetCommentsRequest",
    "ReplyCommentRequest",
    "DeleteCommentRequest",
    "GetRecentMediaRequest",
    "GetMediaInsightsRequest",
    "AccountInsightsRequest",
    "ResolvePermalinkRequest",
    "UpdateCaptionRequest",
    "DeleteMediaRequest",
    "SchedulePostRequest",
    "SCHEMA_MODELS",
]
