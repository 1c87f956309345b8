from __future__ import annotations

import json
from datetime import datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from urllib.parse import urlparse

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from igsocial.specs.common.errors import InvalidParameterError


DEFAULT_ACCOUNT_METRICS = "views,follower_count,follows_and_unfollows"
MEDIA_INSIGHT_METRICS = ("impressions", "reach", "engagement", "saved")

CAROUSEL_MIN_ITEMS = 2
CAROUSEL_MAX_ITEMS = 10


def _check_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"'{value}' is not a valid http(s) URL")
    return value


HttpUrlStr = Annotated[str, AfterValidator(_check_url)]


class ToolRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    # Optional trace correlation; include when available
    runTraceId: Optional[str] = None


def _json_number(value: float) -> Union[int, float]:
    # whole numbers serialize without a trailing ".0"
    return int(value) if value.is_integer() else value


class UserTag(BaseModel):
    username: str = Field(min_length=1)
    x: float = Field(default=0.5, ge=0.0, le=1.0)
    y: float = Field(default=0.5, ge=0.0, le=1.0)

    def to_graph(self) -> Dict[str, Any]:
        return {"username": self.username, "x": _json_number(self.x), "y": _json_number(self.y)}


class PostPhotoRequest(ToolRequest):
    image_url: HttpUrlStr
    caption: Optional[str] = None
    user_tags: Optional[List[UserTag]] = Field(
        default=None,
        description="Array of users to tag with x/y coordinates (0.0 to 1.0)",
    )
    location_id: Optional[str] = Field(default=None, description="Facebook Page ID of the location")

    def serialized_user_tags(self) -> Optional[str]:
        """JSON array string expected by the container call, or None when untagged."""
        if not self.user_tags:
            return None
        return json.dumps([tag.to_graph() for tag in self.user_tags], separators=(",", ":"))


class PostStoryRequest(ToolRequest):
    image_url: HttpUrlStr


class PostCarouselRequest(ToolRequest):
    image_urls: List[HttpUrlStr] = Field(min_length=CAROUSEL_MIN_ITEMS, max_length=CAROUSEL_MAX_ITEMS)
    caption: Optional[str] = None
    location_id: Optional[str] = None


class PostReelRequest(ToolRequest):
    video_url: HttpUrlStr
    caption: Optional[str] = None
    cover_url: Optional[HttpUrlStr] = None
    location_id: Optional[str] = None
    share_to_feed: bool = True


class GetCommentsRequest(ToolRequest):
    media_id: str = Field(min_length=1)
    limit: int = Field(default=25, ge=1, le=50)


class ReplyCommentRequest(ToolRequest):
    comment_id: str = Field(min_length=1)
    message: str = Field(min_length=1)


class DeleteCommentRequest(ToolRequest):
    comment_id: str = Field(min_length=1)


class GetRecentMediaRequest(ToolRequest):
    limit: int = Field(default=25, ge=1, le=50)


class GetMediaInsightsRequest(ToolRequest):
    media_id: str = Field(min_length=1)


class AccountInsightsRequest(ToolRequest):
    metric: str = Field(default=DEFAULT_ACCOUNT_METRICS, description="Comma-separated metric names")
    period: Literal["day", "lifetime"] = "day"
    metric_type: Literal["total_value", "time_series"] = "total_value"
    timeframe: Optional[str] = None
    breakdown: Optional[str] = None
    since: Optional[str] = None
    until: Optional[str] = None

    def to_params(self) -> Dict[str, Any]:
        """Graph query parameters; rejects a blank metric before any network call."""
        if not self.metric or not self.metric.strip():
            raise InvalidParameterError("metric parameter must be a non-empty string")
        params: Dict[str, Any] = {
            "metric": self.metric,
            "period": self.period,
            "metric_type": self.metric_type,
        }
        for key in ("timeframe", "breakdown", "since", "until"):
            value = getattr(self, key)
            if value:
                params[key] = value
        return params


class ResolvePermalinkRequest(ToolRequest):
    permalink_url: HttpUrlStr


class UpdateCaptionRequest(ToolRequest):
    media_id: str = Field(min_length=1)
    caption: str = Field(min_length=1)


class DeleteMediaRequest(ToolRequest):
    media_id: str = Field(min_length=1)


class SchedulePostRequest(ToolRequest):
    image_url: HttpUrlStr
    caption: Optional[str] = None
    scheduled_at: datetime = Field(description="ISO-8601 publish time")


__all__ = [
    "DEFAULT_ACCOUNT_METRICS",
    "MEDIA_INSIGHT_METRICS",
    "CAROUSEL_MIN_ITEMS",
    "CAROUSEL_MAX_ITEMS",
    "ToolRequest",
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
]
