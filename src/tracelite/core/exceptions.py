from __future__ import annotations

from typing import Any


class TraceliteError(Exception):
    """Base exception for all tracelite errors.

    Recording and collection never raise; errors only surface from the
    output helpers.

    Attributes:
        code: Optional machine-readable error code (e.g. ``"FORMAT_JSON"``).
        details: Arbitrary key/value context about the error.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class FormattingError(TraceliteError):
    """A :class:`CollectionResult` could not be rendered by a formatter.

    Typically raised when a tag holds a value the JSON encoder cannot
    handle.  The underlying exception is available as ``__cause__``.
    """
