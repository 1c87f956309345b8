from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from igsocial.media.comments import CommentOperations
from igsocial.media.insights import InsightsQuery
from igsocial.media.library import MediaLibrary
from igsocial.media.permalink import resolve_permalink
from igsocial.media.publish_workflow import MediaPublishWorkflow
from igsocial.shared.graph_client import GraphClient
from igsocial.shared.settings import InstagramSettings
from igsocial.specs.models.instagram import (
    AccountInsightsRequest,
    DeleteCommentRequest,
    DeleteMediaRequest,
    GetCommentsRequest,
    GetMediaInsightsRequest,
    GetRecentMediaRequest,
    PostCarouselRequest,
    PostPhotoRequest,
    PostReelRequest,
    PostStoryRequest,
    ReplyCommentRequest,
    ResolvePermalinkRequest,
    SchedulePostRequest,
    UpdateCaptionRequest,
)
from igsocial.specs.models.tools import PublishResult


class InstagramManager:
    """Single entry point for every Instagram operation exposed as a tool.

    Holds one settings value and one Graph client; no other state is kept
    between calls.
    """

    def __init__(
        self,
        settings: InstagramSettings,
        client: Optional[GraphClient] = None,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.settings = settings
        self.client = client or GraphClient(settings)
        self.publisher = MediaPublishWorkflow(self.client, settings, sleep=sleep)
        self.comments = CommentOperations(self.client)
        self.insights = InsightsQuery(self.client, settings.ig_user_id)
        self.library = MediaLibrary(self.client, settings.ig_user_id)

    @classmethod
    def from_env(cls) -> "InstagramManager":
        return cls(InstagramSettings.from_env())

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "InstagramManager":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    async def post_photo(self, req: PostPhotoRequest) -> PublishResult:
        return await self.publisher.post_photo(req)

    async def post_story(self, req: PostStoryRequest) -> PublishResult:
        return await self.publisher.post_story(req)

    async def post_carousel(self, req: PostCarouselRequest) -> PublishResult:
        return await self.publisher.post_carousel(req)

    async def post_reel(self, req: PostReelRequest) -> PublishResult:
        return await self.publisher.post_reel(req)

    async def get_comments(self, req: GetCommentsRequest) -> PublishResult:
        return await self.comments.list_comments(req)

    async def reply_comment(self, req: ReplyCommentRequest) -> PublishResult:
        return await self.comments.reply(req)

    async def delete_comment(self, req: DeleteCommentRequest) -> PublishResult:
        return await self.comments.delete(req)

    async def get_recent_media(self, req: GetRecentMediaRequest) -> PublishResult:
        return await self.library.recent_media(req)

    async def get_media_insights(self, req: GetMediaInsightsRequest) -> PublishResult:
        return await self.insights.media_insights(req)

    async def get_account_insights(self, req: AccountInsightsRequest) -> PublishResult:
        return await self.insights.account_insights(req)

    async def resolve_permalink(self, req: ResolvePermalinkRequest) -> PublishResult:
        return await resolve_permalink(self.client, self.settings.ig_user_id, req)

    async def update_caption(self, req: UpdateCaptionRequest) -> PublishResult:
        return await self.library.update_caption(req)

    async def delete_media(self, req: DeleteMediaRequest) -> PublishResult:
        return await self.library.delete_media(req)

    async def schedule_post(self, req: SchedulePostRequest) -> PublishResult:
        return await self.library.schedule(req)
