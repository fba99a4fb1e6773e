"""Exception types for WDC geomagnetic index handling.

Every error derives from :class:`SpaceIndicesError` and from the built-in
exception callers would otherwise expect (``ValueError`` for bad data or
arguments, ``RuntimeError`` for querying before initialization), so
existing ``except ValueError`` handlers keep working.
"""

from __future__ import annotations

from pathlib import Path


class SpaceIndicesError(Exception):
    """Base class for all spaceindices errors."""


class ParseError(SpaceIndicesError, ValueError):
    """A WDC file or line could not be parsed.

    Attributes:
        filepath: File being parsed, or ``None`` for a standalone line.
        line_number: 1-based line number, or ``None`` for file-level errors.
    """

    def __init__(
        self,
        message: str,
        filepath: str | Path | None = None,
        line_number: int | None = None,
    ) -> None:
        self.filepath = None if filepath is None else str(filepath)
        self.line_number = line_number
        self.reason = message

        if self.filepath is not None and line_number is not None:
            message = f"{self.filepath}:{line_number}: {message}"
        elif self.filepath is not None:
            message = f"{self.filepath}: {message}"
        super().__init__(message)


class BuildError(SpaceIndicesError, ValueError):
    """Parsed records cannot form an index table (empty, ragged, duplicate days)."""


class RangeError(SpaceIndicesError, ValueError):
    """Invalid averaging window or query mode arguments."""


class UninitializedError(SpaceIndicesError, RuntimeError):
    """A query was made against space indices that were never loaded."""
