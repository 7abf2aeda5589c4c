from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .errors import MalformedNumber, MissingHeaders
from .models import Counters, Entry, LanguageCode, ParsedFeed, Topic

logger = logging.getLogger(__name__)

U32_MAX = 2**32 - 1

# Counter name -> column in the counters row. Columns 2..7 carry no counts.
COUNTER_COLUMNS: Dict[str, int] = {
    "total": 0,
    "sem": 1,
    "lat": 8,
    "iro": 9,
    "por": 10,
    "spa": 11,
    "cat": 12,
    "occ": 13,
    "fra": 14,
    "srd": 15,
    "ita": 16,
    "rom": 17,
    "eng": 18,
    "fol": 19,
    "frk": 20,
    "sla": 21,
}

ENTRY_FIXED_COLUMNS = (
    "id",
    "sem_id",
    "category",
    "topic",
    "sub_topic",
    "sub_sub_topic",
    "essential_flag",
    "basic_flag",
)
ENTRY_COLUMN_COUNT = len(ENTRY_FIXED_COLUMNS) + len(LanguageCode)

RawFeed = Union[bytes, str]

# Title, counters and reserved rows precede the entries.
HEADER_ROW_COUNT = 3


@dataclass
class RawEntry:
    """One entry row as laid out in the feed, before conversion."""

    id: int
    sem_id: Optional[int]
    category: Optional[str]
    topic: Optional[Topic]
    sub_topic: Optional[str]
    sub_sub_topic: Optional[str]
    essential_flag: Optional[str]
    basic_flag: Optional[str]
    texts: Dict[LanguageCode, Optional[str]]


class FeedParser:
    """
    Abstract feed parser. Implementations should be stateless and reusable.
    """

    def parse(self, raw: RawFeed) -> ParsedFeed:
        raise NotImplementedError


class CsvFeedParser(FeedParser):
    """
    Parses the CSV dictionary feed.

    Columns are addressed by position only. Row 1 holds titles and is skipped,
    row 2 holds the aggregate counters, row 3 is reserved, and every row after
    that is an entry. A broken entry row is dropped without failing the feed;
    a broken counters row fails the whole parse.
    """

    def __init__(self, delimiter: str = ","):
        self.delimiter = delimiter

    def parse(self, raw: RawFeed) -> ParsedFeed:
        rows = self._rows(_decode(raw))

        title = next(rows, None)
        expected_width = len(title) if title is not None else None

        logger.info("Reading counters")
        counters_row = next(rows, None)
        if counters_row is None:
            raise MissingHeaders()
        counters = read_counters(counters_row)
        logger.info("Feed counters: %s", counters)

        next(rows, None)  # reserved row

        logger.info("Reading entries")
        entries: Dict[int, Entry] = {}
        rows_read = 0
        rows_dropped = 0
        for row in rows:
            rows_read += 1
            entry = self._entry_from_row(row, expected_width)
            if entry is None:
                rows_dropped += 1
                continue
            entries[entry.id] = entry

        logger.info("Entries count %d (%d rows read, %d dropped)", len(entries), rows_read, rows_dropped)
        return ParsedFeed(entries=entries, counters=counters, rows_read=rows_read, rows_dropped=rows_dropped)

    def _rows(self, text: str) -> Iterator[List[str]]:
        reader = csv.reader(io.StringIO(text, newline=""), delimiter=self.delimiter)
        yielded = 0
        while True:
            try:
                row = next(reader)
            except StopIteration:
                return
            except csv.Error as exc:
                if yielded < HEADER_ROW_COUNT:
                    raise MissingHeaders(f"unreadable header line {reader.line_num}: {exc}") from exc
                logger.debug("Skipping unreadable feed line %d: %s", reader.line_num, exc)
                continue
            if row:
                yielded += 1
                yield row

    def _entry_from_row(self, row: List[str], expected_width: Optional[int]) -> Optional[Entry]:
        try:
            raw = deserialize_row(row, expected_width)
        except ValueError as exc:
            logger.debug("Dropping feed row %r: %s", row[:1], exc)
            return None
        try:
            return to_entry(raw)
        except (TypeError, ValueError) as exc:
            logger.debug("Dropping feed row id=%s: %s", raw.id, exc)
            return None


def parse_feed(raw: RawFeed) -> Tuple[Dict[int, Entry], Counters]:
    parsed = CsvFeedParser().parse(raw)
    return parsed.entries, parsed.counters


def read_counters(row: List[str]) -> Counters:
    values = {name: read_count(row, column) for name, column in COUNTER_COLUMNS.items()}
    return Counters(**values)


def read_count(row: List[str], column: int) -> int:
    if column >= len(row):
        raise MissingHeaders(f"counters row has no column {column}")
    cell = row[column]
    try:
        return parse_uint(cell.replace(".", ""))
    except ValueError:
        raise MalformedNumber(column, cell) from None


def parse_uint(cell: str) -> int:
    digits = cell[1:] if cell.startswith("+") else cell
    if not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"not a non-negative integer: {cell!r}")
    value = int(digits)
    if value > U32_MAX:
        raise ValueError(f"integer out of range: {cell!r}")
    return value


def deserialize_row(row: List[str], expected_width: Optional[int] = None) -> RawEntry:
    """
    Structural check of one entry row. Raises ValueError when the row does not
    fit the fixed layout.
    """
    if expected_width is not None and len(row) != expected_width:
        raise ValueError(f"expected {expected_width} columns, found {len(row)}")
    if len(row) < ENTRY_COLUMN_COUNT:
        raise ValueError(f"expected at least {ENTRY_COLUMN_COUNT} columns, found {len(row)}")

    cells = [cell if cell != "" else None for cell in row]
    if cells[0] is None:
        raise ValueError("missing id")
    sem_id = parse_uint(cells[1]) if cells[1] is not None else None
    offset = len(ENTRY_FIXED_COLUMNS)
    return RawEntry(
        id=parse_uint(cells[0]),
        sem_id=sem_id,
        category=cells[2],
        topic=Topic.from_cell(cells[3]),
        sub_topic=cells[4],
        sub_sub_topic=cells[5],
        essential_flag=cells[6],
        basic_flag=cells[7],
        texts={lang: cells[offset + i] for i, lang in enumerate(LanguageCode)},
    )


def to_entry(raw: RawEntry) -> Entry:
    texts = {lang.value: value for lang, value in raw.texts.items()}
    return Entry(
        id=raw.id,
        sem_id=raw.sem_id,
        topic=raw.topic,
        essential_flag=raw.essential_flag == "e",
        basic_flag=raw.basic_flag == "b",
        **texts,
    )


def _decode(raw: RawFeed) -> str:
    if isinstance(raw, bytes):
        return raw.decode("utf-8-sig", errors="replace")
    return raw[1:] if raw.startswith("\ufeff") else raw
