import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from igsocial.shared.graph_client import GraphClient, call_graph
from igsocial.shared.logging_utils import info as log_info, warning as log_warning
from igsocial.shared.poll_utils import poll_until
from igsocial.specs.common.enums import ContainerStatus, ReadinessOutcome
from igsocial.specs.common.errors import InstagramToolError, MediaProcessingError, TransportError


_TERMINAL = {ContainerStatus.FINISHED.value, ContainerStatus.ERROR.value}


@dataclass(frozen=True)
class ReadinessResult:
    container_id: str
    outcome: ReadinessOutcome
    attempts: int
    status_code: Optional[str] = None
    error: Optional[InstagramToolError] = None

    @property
    def ready(self) -> bool:
        return self.outcome is ReadinessOutcome.READY


async def wait_for_container(
    client: GraphClient,
    container_id: str,
    *,
    max_attempts: int = 15,
    interval_seconds: float = 2.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    run_trace_id: Optional[str] = None,
) -> ReadinessResult:
    """Poll a container's status_code until FINISHED, ERROR or the budget runs out.

    Never raises: an ERROR status or a transport failure yields FAILED,
    exhausting the budget yields TIMED_OUT. The caller decides what to do next.
    """
    attempts = 0

    async def fetch_status() -> Optional[str]:
        nonlocal attempts
        attempts += 1
        resp = await call_graph(client, "GET", container_id, {"fields": "status_code"})
        return resp.get("status_code")

    try:
        polled = await poll_until(
            fetch_status,
            lambda status: status in _TERMINAL,
            attempts=max_attempts,
            delay=interval_seconds,
            sleep=sleep,
        )
    except TransportError as exc:
        log_warning(
            run_trace_id,
            "instagram:readiness:transport_failed",
            containerId=container_id,
            attempts=attempts,
            error=str(exc),
        )
        return ReadinessResult(container_id, ReadinessOutcome.FAILED, attempts, error=exc)

    if not polled.terminal:
        log_warning(
            run_trace_id,
            "instagram:readiness:timed_out",
            containerId=container_id,
            attempts=polled.attempts,
            statusCode=polled.value,
        )
        return ReadinessResult(container_id, ReadinessOutcome.TIMED_OUT, polled.attempts, status_code=polled.value)

    if polled.value == ContainerStatus.ERROR.value:
        err = MediaProcessingError(container_id, details={"attempts": polled.attempts})
        log_warning(run_trace_id, "instagram:readiness:error_status", containerId=container_id, attempts=polled.attempts)
        return ReadinessResult(
            container_id, ReadinessOutcome.FAILED, polled.attempts, status_code=polled.value, error=err
        )

    log_info(run_trace_id, "instagram:readiness:finished", containerId=container_id, attempts=polled.attempts)
    return ReadinessResult(container_id, ReadinessOutcome.READY, polled.attempts, status_code=polled.value)
