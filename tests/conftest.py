from __future__ import annotations

from collections import defaultdict, deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, List, Optional, Tuple, Union

import pytest

from igsocial.manager import InstagramManager
from igsocial.shared.graph_client import encode_params
from igsocial.shared.settings import InstagramSettings


IG_USER_ID = "ig-1"

Reply = Union[Dict[str, Any], Exception]


@dataclass
class Call:
    method: str
    endpoint: str
    params: Dict[str, Any]
    access_token: Optional[str]


class FakeGraphClient:
    """Records Graph calls and answers them from per-endpoint queues."""

    def __init__(self) -> None:
        self.calls: List[Call] = []
        self.close_count = 0
        self._replies: Dict[Tuple[str, str], Deque[Reply]] = defaultdict(deque)

    def queue(self, method: str, endpoint: str, *replies: Reply) -> "FakeGraphClient":
        self._replies[(method, endpoint)].extend(replies)
        return self

    def request(self, method, endpoint, params=None, access_token=None):
        self.calls.append(Call(method, endpoint, encode_params(params), access_token))
        pending = self._replies.get((method, endpoint))
        if not pending:
            raise AssertionError(f"unexpected Graph call {method} {endpoint}")
        reply = pending.popleft()
        if isinstance(reply, Exception):
            raise reply
        return reply

    def close(self) -> None:
        self.close_count += 1

    def calls_to(self, method: str, endpoint: str) -> List[Call]:
        return [c for c in self.calls if c.method == method and c.endpoint == endpoint]


class SleepRecorder:
    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def settings() -> InstagramSettings:
    return InstagramSettings(
        access_token="user-token",
        ig_user_id=IG_USER_ID,
        container_access_token="page-token",
    )


@pytest.fixture
def graph() -> FakeGraphClient:
    return FakeGraphClient()


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def manager(settings, graph, sleeper) -> InstagramManager:
    return InstagramManager(settings, graph, sleep=sleeper)
