"""Shared test fixtures."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from tracelite.core.config import TraceConfig
from tracelite.core.trace import Trace


class FakeClock:
    """Manually advanced clock for exact millisecond assertions."""

    def __init__(self) -> None:
        self.now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def trace(clock: FakeClock) -> Trace:
    t = Trace("t", clock=clock)
    t.enable()
    return t


@pytest.fixture
def make_trace(clock: FakeClock):
    def _make(name: str = "t", **config: bool) -> Trace:
        return Trace(name, TraceConfig(enabled=True, **config), clock=clock)

    return _make
