"""tracelite -- per-request timing breakdowns from named buckets of marks."""

from tracelite.__version__ import __version__
from tracelite.core.config import TraceConfig
from tracelite.core.exceptions import FormattingError, TraceliteError
from tracelite.core.trace import Trace
from tracelite.core.types import BucketResult, CollectionResult, Mark, Segment
from tracelite.output.formatters import to_json, to_text
from tracelite.utils.logging import configure_logging, get_logger

__all__ = [
    "BucketResult",
    "CollectionResult",
    "FormattingError",
    "Mark",
    "Segment",
    "Trace",
    "TraceConfig",
    "TraceliteError",
    "__version__",
    "configure_logging",
    "get_logger",
    "to_json",
    "to_text",
]
