"""Formatters turning a :class:`CollectionResult` into text.

Either function can be passed to :meth:`Trace.collect_formatted`; any other
``Callable[[CollectionResult], str]`` works the same way.
"""

from __future__ import annotations

from typing import Any

from pydantic_core import PydanticSerializationError

from tracelite.core.exceptions import FormattingError
from tracelite.core.types import CollectionResult
from tracelite.utils.logging import get_logger

logger = get_logger(__name__)


def to_json(result: CollectionResult, indent: int | None = None) -> str:
    """Render *result* in its JSON wire form.

    Raises:
        FormattingError: If a tag value cannot be encoded as JSON.
    """
    try:
        return result.model_dump_json(by_alias=True, indent=indent)
    except (PydanticSerializationError, TypeError, ValueError) as exc:
        logger.warning("format_failed", trace=result.name, error=str(exc))
        raise FormattingError(
            f"Cannot serialize trace '{result.name}' to JSON: {exc}",
            code="FORMAT_JSON",
            details={"trace": result.name},
        ) from exc


def _render_tags(tags: dict[str, Any]) -> str:
    return " ".join(f"{key}={tags[key]}" for key in sorted(tags))


def to_text(result: CollectionResult) -> str:
    """Render *result* as an indented, human-readable breakdown.

    Example output::

        GET /orders total=12ms user=42
          db 12ms op=query
            done 12ms 2026-01-01T00:00:00.012000+00:00 3 rows
    """
    header = [result.name, f"total={result.total_cost}ms"]
    if result.tags:
        header.append(_render_tags(result.tags))
    lines = [" ".join(header)]
    for entry in result.buckets:
        for name, bucket in entry.items():
            row = [f"  {name}", f"{bucket.bucket_cost}ms"]
            if bucket.tags:
                row.append(_render_tags(bucket.tags))
            lines.append(" ".join(row))
            for seg in bucket.segments:
                row = [f"    {seg.action}", f"{seg.cost_ms}ms", seg.captured_at.isoformat()]
                if seg.annotation:
                    row.append(seg.annotation)
                lines.append(" ".join(row))
    return "\n".join(lines)
