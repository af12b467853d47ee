"""Exception types and the result container returned by the CSV parser."""

from dataclasses import dataclass
from pathlib import Path
from typing import Generic, List, Optional, Sequence, TypeVar, Union

T = TypeVar("T")


class CardWikiError(Exception):
    """Base exception for all card-wiki errors."""


class ParseError(CardWikiError):
    """A CSV document could not be turned into records.

    ``kind`` is one of the ``ParseError.*`` constants. Missing-header errors
    carry ``missing``; row errors carry ``line`` and, for shape mismatches,
    ``expected`` and ``actual`` field counts.
    """

    EMPTY_INPUT = "empty_input"
    MISSING_HEADERS = "missing_headers"
    ROW_SHAPE = "row_shape"
    UNEXPECTED = "unexpected"

    def __init__(
        self,
        kind: str,
        message: str,
        missing: Sequence[str] = (),
        line: Optional[int] = None,
        expected: Optional[int] = None,
        actual: Optional[int] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.missing: List[str] = list(missing)
        self.line = line
        self.expected = expected
        self.actual = actual

    @classmethod
    def empty_input(cls) -> "ParseError":
        return cls(cls.EMPTY_INPUT, "CSV data is empty")

    @classmethod
    def missing_headers(cls, missing: Sequence[str]) -> "ParseError":
        return cls(
            cls.MISSING_HEADERS,
            f"CSV is missing required headers: {', '.join(missing)}",
            missing=missing,
        )

    @classmethod
    def row_shape(cls, line: int, expected: int, actual: int) -> "ParseError":
        return cls(
            cls.ROW_SHAPE,
            f"CSV line {line} does not match the header: "
            f"header has {expected} fields, row has {actual}",
            line=line,
            expected=expected,
            actual=actual,
        )

    @classmethod
    def unexpected(cls, exc: Exception, line: Optional[int] = None) -> "ParseError":
        where = f" on line {line}" if line is not None else ""
        error = cls(
            cls.UNEXPECTED,
            f"Unexpected error while parsing CSV{where}: {exc}",
            line=line,
        )
        error.__cause__ = exc
        return error


class CardDataError(CardWikiError):
    """Card or ruling data failed to load, so the site cannot be built."""

    def __init__(self, source: Union[str, Path], error: ParseError):
        self.source = source
        self.error = error
        super().__init__(f"{source}: {error}")


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Either a parsed value or the error that prevented parsing."""

    value: Optional[T] = None
    error: Optional[ParseError] = None

    @classmethod
    def success(cls, value: T) -> "ParseResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ParseError) -> "ParseResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """True if parsing succeeded."""
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.value
