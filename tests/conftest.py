"""Shared fixtures: an in-memory bus serving canned Clone replies."""

import asyncio
from typing import Any, List, Optional, Sequence

import pytest

from deemodel.settings import DeeModelSettings


def clone_reply(
    column_types: Sequence[str],
    rows: Sequence[Sequence[Any]],
    seqnum_after: int = 7,
    seqnum_before: Optional[int] = None,
    swarm_name: str = "com.example.Model.Swarm",
) -> tuple:
    """Build a Clone reply body the way the bus hands it over."""
    if seqnum_before is None:
        seqnum_before = seqnum_after - 1
    return (
        swarm_name,
        list(column_types),
        [list(row) for row in rows],
        list(range(len(rows))),
        [0] * len(rows),
        [seqnum_before, seqnum_after],
    )


class FakeRemoteObject:
    """Remote object double answering each call with the next canned reply."""

    def __init__(self, *replies: Any, error: Optional[Exception] = None, delay: float = 0):
        self.replies = list(replies)
        self.error = error
        self.delay = delay
        self.calls: List[tuple] = []
        self.cancelled = False

    async def call(self, method: str, *args: Any):
        self.calls.append((method, args))
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        if self.error is not None:
            raise self.error
        if len(self.replies) > 1:
            return self.replies.pop(0)
        return self.replies[0]


class FakeBus:
    """Bus double recording every object it binds."""

    def __init__(self, remote: Optional[FakeRemoteObject] = None):
        self.remote = remote or FakeRemoteObject(clone_reply([], []))
        self.bound: List[tuple] = []

    def get_object(self, service_name: str, object_path: str, interface: str):
        self.bound.append((service_name, object_path, interface))
        return self.remote


@pytest.fixture
def settings():
    return DeeModelSettings(clone_timeout_seconds=None)


@pytest.fixture
def fake_bus():
    return FakeBus()
