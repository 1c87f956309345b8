import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class PollResult(Generic[T]):
    value: Optional[T]
    attempts: int
    terminal: bool


async def poll_until(
    operation: Callable[[], Awaitable[T]],
    is_terminal: Callable[[T], bool],
    *,
    attempts: int = 15,
    delay: float = 2.0,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> PollResult[T]:
    """Await `operation` until `is_terminal` accepts its value or `attempts` run out.

    Sleeps `delay` seconds between attempts, never after the last one.
    Exceptions raised by `operation` propagate to the caller.
    """
    last: Optional[T] = None
    for attempt in range(1, attempts + 1):
        last = await operation()
        if is_terminal(last):
            return PollResult(value=last, attempts=attempt, terminal=True)
        if attempt < attempts:
            await sleep(delay)
    return PollResult(value=last, attempts=attempts, terminal=False)
