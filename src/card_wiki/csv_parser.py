"""Parse CSV text into card and ruling records.

Parsing happens in two layers. ``tokenize`` turns a document into a header and
lines of fields without knowing anything about cards. A ``RecordSchema`` then
checks the header for its required columns and projects each row onto a target
record type. Failures never raise: every public parse function returns a
``ParseResult`` carrying either the records or a single ``ParseError``.

Rows whose field count differs from the header are rejected outright. Short
rows are never padded.
"""

import csv
import io
import logging
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    List,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
)

from card_wiki.errors import ParseError, ParseResult
from card_wiki.models import Card, Ruling

log = logging.getLogger(__name__)

T = TypeVar("T")

BOM = "\ufeff"
QUOTE = '"'
SEPARATOR = ","


@dataclass(frozen=True)
class CsvRow:
    """One data line split into fields, with its 1-based line number."""

    line: int
    fields: List[str]


@dataclass(frozen=True)
class CsvTable:
    """A tokenized CSV document."""

    header: List[str]
    rows: List[CsvRow] = field(default_factory=list)


@dataclass(frozen=True)
class RecordSchema(Generic[T]):
    """Maps header names onto the attributes of a target record type.

    ``columns`` pairs each target attribute with the header it is read from.
    ``required`` lists the headers that must be present; it defaults to every
    header in ``columns``.
    """

    name: str
    columns: Tuple[Tuple[str, str], ...]
    factory: Callable[..., T]
    required: Optional[Tuple[str, ...]] = None

    @property
    def required_headers(self) -> Tuple[str, ...]:
        if self.required is None:
            return tuple(header for _, header in self.columns)
        return self.required

    def missing_headers(self, header: Sequence[str]) -> List[str]:
        """Return the required headers absent from ``header``, in schema order."""
        present = set(header)
        return [name for name in self.required_headers if name not in present]

    def build(self, mapping: Dict[str, str]) -> T:
        """Build a record, using an empty string for absent columns."""
        kwargs = {attr: mapping.get(header, "") for attr, header in self.columns}
        return self.factory(**kwargs)


def _build_ruling(ruling_id: str, card: str, content: str) -> Ruling:
    return Ruling(ruling_id=int(ruling_id), card=card, content=content)


CARD_SCHEMA: RecordSchema[Card] = RecordSchema(
    name="card",
    columns=(
        ("id", "id"),
        ("name", "name"),
        ("kind", "kind"),
        ("type", "type"),
        ("effect", "effect"),
        ("tags", "tags"),
    ),
    factory=Card,
)

RULING_SCHEMA: RecordSchema[Ruling] = RecordSchema(
    name="ruling",
    columns=(
        ("ruling_id", "裁定ID"),
        ("card", "該当カード"),
        ("content", "内容"),
    ),
    factory=_build_ruling,
)


def normalize_text(raw_text: str) -> str:
    """Remove byte-order marks and convert CRLF and CR line endings to LF."""
    text = raw_text.replace(BOM, "")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_csv_line(line: str) -> List[str]:
    """Split one CSV line into trimmed fields, honouring double quotes.

    Inside a quoted field, ``""`` stands for one literal quote and commas are
    kept as content. Every field is stripped of surrounding whitespace once
    extracted, including whitespace that was inside the quotes.
    """
    fields = []
    current = []
    in_quotes = False
    i = 0
    length = len(line)

    while i < length:
        char = line[i]
        if char == QUOTE:
            if in_quotes and i + 1 < length and line[i + 1] == QUOTE:
                current.append(QUOTE)
                i += 2
                continue
            in_quotes = not in_quotes
        elif char == SEPARATOR and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields


def tokenize(raw_text: str) -> ParseResult[CsvTable]:
    """Split a CSV document into a header and non-blank data rows."""
    try:
        lines = normalize_text(raw_text).strip().split("\n")
        if not lines[0].strip():
            return ParseResult.failure(ParseError.empty_input())

        header = split_csv_line(lines[0])
        rows = [
            CsvRow(line=number, fields=split_csv_line(line))
            for number, line in enumerate(lines[1:], start=2)
            if line.strip()
        ]
        return ParseResult.success(CsvTable(header=header, rows=rows))
    except Exception as e:
        return ParseResult.failure(ParseError.unexpected(e))


RowMappings = List[Tuple[int, Dict[str, str]]]


def _row_mappings(table: CsvTable) -> Tuple[RowMappings, Optional[ParseError]]:
    mappings = []
    for row in table.rows:
        if len(row.fields) != len(table.header):
            error = ParseError.row_shape(
                row.line, len(table.header), len(row.fields)
            )
            return [], error
        mappings.append((row.line, dict(zip(table.header, row.fields))))
    return mappings, None


def parse_records(raw_text: str, schema: RecordSchema[T]) -> ParseResult[List[T]]:
    """Parse a CSV document into records of the shape described by ``schema``.

    The first error encountered replaces the whole result: missing headers are
    reported before any row is looked at, and one malformed row invalidates
    the document.
    """
    tokenized = tokenize(raw_text)
    if not tokenized.ok:
        return ParseResult.failure(tokenized.error)
    table = tokenized.value

    missing = schema.missing_headers(table.header)
    if missing:
        return ParseResult.failure(ParseError.missing_headers(missing))

    mappings, error = _row_mappings(table)
    if error is not None:
        return ParseResult.failure(error)

    records = []
    for line, mapping in mappings:
        try:
            records.append(schema.build(mapping))
        except Exception as e:
            return ParseResult.failure(ParseError.unexpected(e, line=line))

    log.debug("Parsed %d %s records", len(records), schema.name)
    return ParseResult.success(records)


def parse_rows(raw_text: str) -> ParseResult[List[Dict[str, str]]]:
    """Parse a CSV document into plain dicts keyed by every header name."""
    tokenized = tokenize(raw_text)
    if not tokenized.ok:
        return ParseResult.failure(tokenized.error)

    mappings, error = _row_mappings(tokenized.value)
    if error is not None:
        return ParseResult.failure(error)
    return ParseResult.success([mapping for _, mapping in mappings])


def parse_csv_data(raw_text: str) -> ParseResult[List[Card]]:
    """Parse card CSV text into ``Card`` records."""
    return parse_records(raw_text, CARD_SCHEMA)


def parse_ruling_data(raw_text: str) -> ParseResult[List[Ruling]]:
    """Parse ruling CSV text into ``Ruling`` records."""
    return parse_records(raw_text, RULING_SCHEMA)


def format_csv(header: Sequence[str], rows: Sequence[Sequence[Any]]) -> str:
    """Write a header and rows as CSV text readable by ``parse_records``."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buffer.getvalue()


def format_records(records: Sequence[T], schema: RecordSchema[T]) -> str:
    """Write records back to CSV using the header names from ``schema``."""
    header = [name for _, name in schema.columns]
    rows = [[getattr(record, attr) for attr, _ in schema.columns] for record in records]
    return format_csv(header, rows)
