from __future__ import annotations

from datetime import datetime
from typing import Any, NamedTuple

from pydantic import BaseModel, Field


class Mark(NamedTuple):
    """One timestamped point recorded within a bucket."""

    action: str
    annotation: str
    captured_at: datetime


class Segment(NamedTuple):
    """The interval ending at a mark, measured from the mark before it.

    Serialized as a four-element array:
    ``[action, cost_ms, annotation, captured_at]``.
    """

    action: str
    cost_ms: int
    annotation: str
    captured_at: datetime


class BucketResult(BaseModel):
    """Collected timings for a single bucket."""

    model_config = {"populate_by_name": True, "frozen": True}

    bucket_cost: int = Field(default=0, alias="trace_cost")
    tags: dict[str, Any] = Field(default_factory=dict)
    segments: list[Segment] = Field(default_factory=list, alias="list")


class CollectionResult(BaseModel):
    """Detached snapshot of a :class:`~tracelite.core.trace.Trace`.

    ``buckets`` holds one single-entry mapping per bucket, in the order the
    trace emitted them.  Serialize with :meth:`to_wire` to get the field
    names existing consumers expect (``trace_name``, ``TotalCost``,
    ``trace_set``, ``trace_cost``, ``list``).
    """

    model_config = {"populate_by_name": True, "frozen": True}

    name: str = Field(alias="trace_name")
    tags: dict[str, Any] = Field(default_factory=dict)
    total_cost: int = Field(default=0, alias="TotalCost")
    buckets: list[dict[str, BucketResult]] = Field(
        default_factory=list, alias="trace_set"
    )

    @property
    def bucket_names(self) -> list[str]:
        """Bucket names in emitted order."""
        return [name for entry in self.buckets for name in entry]

    def bucket(self, name: str) -> BucketResult | None:
        """Return the result for bucket *name*, or ``None`` if absent."""
        for entry in self.buckets:
            if name in entry:
                return entry[name]
        return None

    def to_wire(self) -> dict[str, Any]:
        """Return the JSON-compatible wire form of this result.

        Raises:
            pydantic_core.PydanticSerializationError: If a tag value has no
                JSON representation.  :func:`tracelite.output.formatters.to_json`
                converts this into a :class:`FormattingError`.
        """
        return self.model_dump(mode="json", by_alias=True)
