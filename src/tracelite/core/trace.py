"""Trace -- named buckets of timestamped marks, collected into per-segment costs."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

from tracelite.core.config import TraceConfig
from tracelite.core.types import BucketResult, CollectionResult, Mark, Segment
from tracelite.output.formatters import to_json
from tracelite.utils.logging import get_logger

logger = get_logger(__name__)

BEGIN_ACTION = "Begin"

Formatter = Callable[[CollectionResult], str]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _elapsed_ms(start: datetime, end: datetime) -> int:
    """Whole milliseconds from *start* to *end*, truncated toward zero."""
    micros = (end - start) // timedelta(microseconds=1)
    millis = abs(micros) // 1000
    return millis if micros >= 0 else -millis


class _Bucket:
    __slots__ = ("name", "tags", "marks")

    def __init__(self, name: str, tags: dict[str, Any]) -> None:
        self.name = name
        self.tags = tags
        self.marks: list[Mark] = []

    def summarize(self) -> BucketResult:
        segments: list[Segment] = []
        cost = 0
        for prev, cur in zip(self.marks, self.marks[1:]):
            elapsed = _elapsed_ms(prev.captured_at, cur.captured_at)
            cost += elapsed
            segments.append(
                Segment(cur.action, elapsed, cur.annotation, cur.captured_at)
            )
        # Tags and segments are fresh copies; build without revalidating them.
        return BucketResult.model_construct(
            bucket_cost=cost, tags=dict(self.tags), segments=segments
        )


class Trace:
    """Timing breakdown for a single unit of work.

    A trace owns any number of named buckets.  Each bucket is a flat list of
    marks; collecting the trace turns every pair of consecutive marks into a
    segment whose cost is the time between them in milliseconds.

    Tracing is off until :meth:`enable` is called (or the trace is built with
    ``TraceConfig(enabled=True)``).  While off, recording and collection do
    nothing.  One lock serializes every operation, so a trace can be shared
    freely between threads.

    Usage::

        trace = Trace("GET /orders")
        trace.enable()
        trace.begin_bucket("db", {"op": "query"})
        rows = run_query()
        trace.mark("db", "fetched", f"{len(rows)} rows")
        print(trace.collect_formatted())

    Args:
        name: Name reported as ``trace_name`` in the result.
        config: Optional :class:`TraceConfig`.
        clock: Zero-argument callable returning an aware UTC ``datetime``.
            Defaults to the wall clock.
    """

    def __init__(
        self,
        name: str,
        config: TraceConfig | None = None,
        *,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._config = config or TraceConfig()
        self._clock = clock or _utcnow
        self._lock = threading.Lock()
        self._name = name
        self._tags: dict[str, Any] = {}
        self._buckets: dict[str, _Bucket] = {}
        self._enabled = self._config.enabled

    # ------------------------------------------------------------------ #
    # Gate and tags
    # ------------------------------------------------------------------ #

    @property
    def name(self) -> str:
        return self._name

    @property
    def enabled(self) -> bool:
        with self._lock:
            return self._enabled

    @property
    def tags(self) -> dict[str, Any]:
        """A copy of the top-level tags."""
        with self._lock:
            return dict(self._tags)

    def enable(self) -> None:
        """Turn tracing on."""
        with self._lock:
            self._enabled = True
        logger.debug("trace_enabled", trace=self._name)

    def disable(self) -> None:
        """Turn tracing off.  Recorded marks are kept."""
        with self._lock:
            self._enabled = False
        logger.debug("trace_disabled", trace=self._name)

    def set_tags(self, tags: dict[str, Any] | None) -> None:
        """Replace the top-level tags.  ``None`` clears them."""
        with self._lock:
            self._tags = tags if tags is not None else {}

    # ------------------------------------------------------------------ #
    # Recording
    # ------------------------------------------------------------------ #

    def begin_bucket(self, bucket_name: str, tags: dict[str, Any] | None = None) -> None:
        """Open bucket *bucket_name* and record its ``"Begin"`` mark.

        Tags are only taken from the first call for a given name.  Calling
        this again for an existing bucket appends another ``"Begin"`` mark
        unless the trace was configured with ``idempotent_begin``.
        """
        with self._lock:
            if not self._enabled:
                return
            bucket = self._buckets.get(bucket_name)
            created = bucket is None
            if bucket is None:
                bucket = _Bucket(bucket_name, tags if tags is not None else {})
                self._buckets[bucket_name] = bucket
            elif self._config.idempotent_begin:
                return
            bucket.marks.append(Mark(BEGIN_ACTION, "", self._clock()))
        if created:
            logger.debug("bucket_created", trace=self._name, bucket=bucket_name)

    def mark(self, bucket_name: str, action: str, annotation: str = "") -> None:
        """Append a mark to an existing bucket.

        The timestamp is taken before waiting on the lock.  Marks for a
        bucket that was never begun are dropped.
        """
        now = self._clock()
        with self._lock:
            if not self._enabled:
                return
            bucket = self._buckets.get(bucket_name)
            if bucket is not None:
                bucket.marks.append(Mark(action, annotation, now))
                return
        logger.debug(
            "mark_dropped", trace=self._name, bucket=bucket_name, action=action
        )

    # ------------------------------------------------------------------ #
    # Collection
    # ------------------------------------------------------------------ #

    def collect(self) -> CollectionResult | None:
        """Summarize every bucket, or return ``None`` while tracing is off.

        Collecting does not reset anything; each call reflects every mark
        recorded so far.
        """
        with self._lock:
            if not self._enabled:
                return None
            names = list(self._buckets)
            if self._config.sort_buckets:
                names.sort()
            entries = [{name: self._buckets[name].summarize()} for name in names]
            result = CollectionResult.model_construct(
                name=self._name,
                tags=dict(self._tags),
                total_cost=sum(r.bucket_cost for e in entries for r in e.values()),
                buckets=entries,
            )
        logger.debug(
            "trace_collected",
            trace=self._name,
            buckets=len(entries),
            total_cost=result.total_cost,
        )
        return result

    def collect_formatted(self, fmt: Formatter | None = None) -> str:
        """Collect and render the result with *fmt*.

        Returns ``""`` while tracing is off.  *fmt* defaults to
        :func:`tracelite.output.formatters.to_json`; whatever it returns is
        passed through unchanged and whatever it raises propagates.
        """
        result = self.collect()
        if result is None:
            return ""
        return (fmt or to_json)(result)

    def __repr__(self) -> str:
        return f"Trace(name={self._name!r}, enabled={self.enabled!r})"
