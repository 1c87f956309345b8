from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional

from igsocial.media.readiness import ReadinessResult, wait_for_container
from igsocial.shared.graph_client import GraphClient, call_graph
from igsocial.shared.logging_utils import info as log_info, warning as log_warning
from igsocial.shared.settings import InstagramSettings
from igsocial.specs.common.enums import MediaType, ResultStatus
from igsocial.specs.common.errors import (
    ContainerCreationError,
    InsufficientCarouselItemsError,
    InvalidParameterError,
    MediaProcessingError,
)
from igsocial.specs.models.instagram import (
    CAROUSEL_MAX_ITEMS,
    CAROUSEL_MIN_ITEMS,
    PostCarouselRequest,
    PostPhotoRequest,
    PostReelRequest,
    PostStoryRequest,
)
from igsocial.specs.models.tools import PublishResult


class MediaPublishWorkflow:
    """Container creation, optional readiness wait and publish for each content type.

    Every container id is owned by the invocation that created it and is
    published at most once. Errors propagate to the caller; only the reel
    readiness wait is best effort (see `post_reel`).
    """

    def __init__(
        self,
        client: GraphClient,
        settings: InstagramSettings,
        *,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.client = client
        self.settings = settings
        self._sleep = sleep

    @property
    def _media_endpoint(self) -> str:
        return f"{self.settings.ig_user_id}/media"

    async def _create_container(
        self,
        params: Dict[str, Any],
        *,
        media_type: str,
        run_trace_id: Optional[str],
        access_token: Optional[str] = None,
    ) -> str:
        resp = await call_graph(self.client, "POST", self._media_endpoint, params, access_token)
        container_id = resp.get("id")
        if not container_id:
            raise ContainerCreationError(
                f"Failed to create {media_type} media container",
                details={"mediaType": media_type, "response": resp},
            )
        log_info(run_trace_id, "instagram:container:created", mediaType=media_type, containerId=container_id)
        return str(container_id)

    async def publish(self, creation_id: str, *, run_trace_id: Optional[str] = None) -> Dict[str, Any]:
        """Finalize a container; returns the raw Graph response."""
        resp = await call_graph(
            self.client,
            "POST",
            f"{self.settings.ig_user_id}/media_publish",
            {"creation_id": creation_id},
        )
        log_info(run_trace_id, "instagram:media:published", creationId=creation_id, mediaId=resp.get("id"))
        return resp

    async def _publish_result(
        self, creation_id: str, media_type: MediaType, run_trace_id: Optional[str], **extra: Any
    ) -> PublishResult:
        resp = await self.publish(creation_id, run_trace_id=run_trace_id)
        return PublishResult(
            status=ResultStatus.PUBLISHED.value,
            mediaType=media_type.value,
            creationId=creation_id,
            mediaId=resp.get("id"),
            graphResponse=resp,
            **extra,
        )

    async def post_photo(self, req: PostPhotoRequest) -> PublishResult:
        params: Dict[str, Any] = {
            "image_url": req.image_url,
            "media_type": MediaType.IMAGE.value,
            "caption": req.caption,
            "location_id": req.location_id,
            "user_tags": req.serialized_user_tags(),
        }
        # Photo containers always carry the publishing token explicitly
        creation_id = await self._create_container(
            params,
            media_type=MediaType.IMAGE.value,
            run_trace_id=req.runTraceId,
            access_token=self.settings.publishing_token,
        )
        return await self._publish_result(creation_id, MediaType.IMAGE, req.runTraceId)

    async def post_story(self, req: PostStoryRequest) -> PublishResult:
        params = {"image_url": req.image_url, "media_type": MediaType.STORIES.value}
        creation_id = await self._create_container(
            params, media_type=MediaType.STORIES.value, run_trace_id=req.runTraceId
        )
        return await self._publish_result(creation_id, MediaType.STORIES, req.runTraceId)

    async def post_carousel(self, req: PostCarouselRequest) -> PublishResult:
        urls = list(req.image_urls)
        if not CAROUSEL_MIN_ITEMS <= len(urls) <= CAROUSEL_MAX_ITEMS:
            raise InvalidParameterError(
                f"Carousel requires {CAROUSEL_MIN_ITEMS}-{CAROUSEL_MAX_ITEMS} images, got {len(urls)}"
            )

        children: List[str] = []
        for index, url in enumerate(urls):
            resp = await call_graph(
                self.client,
                "POST",
                self._media_endpoint,
                {"image_url": url, "is_carousel_item": True},
            )
            child_id = resp.get("id")
            if not child_id:
                log_warning(req.runTraceId, "instagram:carousel:item_skipped", index=index, imageUrl=url)
                continue
            children.append(str(child_id))

        if len(children) < CAROUSEL_MIN_ITEMS:
            raise InsufficientCarouselItemsError(len(children), len(urls))

        params = {
            "media_type": MediaType.CAROUSEL.value,
            # Graph wants a comma-joined list here, not a JSON array
            "children": ",".join(children),
            "caption": req.caption,
            "location_id": req.location_id,
        }
        creation_id = await self._create_container(
            params, media_type=MediaType.CAROUSEL.value, run_trace_id=req.runTraceId
        )
        return await self._publish_result(creation_id, MediaType.CAROUSEL, req.runTraceId, children=children)

    async def wait_until_ready(self, container_id: str, *, run_trace_id: Optional[str] = None) -> ReadinessResult:
        return await wait_for_container(
            self.client,
            container_id,
            max_attempts=self.settings.readiness_max_attempts,
            interval_seconds=self.settings.readiness_interval_seconds,
            sleep=self._sleep,
            run_trace_id=run_trace_id,
        )

    async def post_reel(self, req: PostReelRequest) -> PublishResult:
        """Create a reel container, wait for processing, then publish.

        A container that reports ERROR, fails its status check or never
        finishes is still published unless `strict_readiness` is set; the
        outcome is reported as `readiness` on the result.
        """
        params = {
            "media_type": MediaType.REELS.value,
            "video_url": req.video_url,
            "caption": req.caption,
            "cover_url": req.cover_url,
            "location_id": req.location_id,
            "share_to_feed": req.share_to_feed,
        }
        creation_id = await self._create_container(
            params, media_type=MediaType.REELS.value, run_trace_id=req.runTraceId
        )

        readiness = await self.wait_until_ready(creation_id, run_trace_id=req.runTraceId)
        if not readiness.ready:
            if self.settings.strict_readiness:
                if isinstance(readiness.error, MediaProcessingError):
                    raise readiness.error
                raise MediaProcessingError(
                    creation_id,
                    f"Media container {creation_id} not ready after {readiness.attempts} checks "
                    f"({readiness.outcome.value})",
                    details={"attempts": readiness.attempts, "cause": str(readiness.error or "")},
                )
            log_warning(
                req.runTraceId,
                "instagram:reel:publishing_unconfirmed",
                containerId=creation_id,
                readiness=readiness.outcome.value,
            )

        return await self._publish_result(
            creation_id,
            MediaType.REELS,
            req.runTraceId,
            readiness=readiness.outcome.value,
            readinessAttempts=readiness.attempts,
        )
