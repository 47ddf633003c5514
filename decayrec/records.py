"""Tab-delimited input parsing for interaction events.

Event rows look like:
    userId<TAB>productId<TAB>rawScore<TAB>unixTimestampSeconds

Every row, blank ones included, must parse or raises
MalformedRecordError with the source name and 1-based line number.
"""

import re
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Iterable, Iterator, Union

from decayrec.errors import MalformedRecordError

Source = Union[str, Path, Iterable[str]]

EVENT_FIELDS = ("user_id", "product_id", "raw_score", "timestamp")

# Plain ASCII digits with an optional sign; no padding or underscores
INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class InteractionEvent:
    """One user/product interaction as read from the events file."""
    user_id: str
    product_id: str
    raw_score: Decimal
    timestamp: int
    source: str = ""
    line_no: int = 0


def source_name(source: Source) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    return getattr(source, "name", "<input>")


def iter_rows(source: Source, min_fields: int) -> Iterator[tuple[int, list[str]]]:
    """Yield (line_no, columns) for each line of `source`.

    `source` is either a file path or an iterable of lines. Trailing
    columns beyond `min_fields` are kept and left for the caller to ignore.
    """
    name = source_name(source)
    if isinstance(source, (str, Path)):
        with open(source, encoding="utf-8") as f:
            yield from _split_lines(f, name, min_fields)
    else:
        yield from _split_lines(source, name, min_fields)


def _split_lines(lines: Iterable[str], name: str, min_fields: int):
    for line_no, line in enumerate(lines, 1):
        line = line.rstrip("\r\n")
        columns = line.split("\t")
        if len(columns) < min_fields:
            raise MalformedRecordError(
                name, line_no, f"expected {min_fields} tab-separated fields, got {len(columns)}"
            )
        yield line_no, columns


def parse_int(value: str, name: str, line_no: int, what: str) -> int:
    if not INTEGER.fullmatch(value):
        raise MalformedRecordError(name, line_no, f"{what} is not an integer: {value!r}")
    return int(value)


def parse_decimal(value: str, name: str, line_no: int, what: str) -> Decimal:
    try:
        number = Decimal(value.strip())
    except InvalidOperation:
        raise MalformedRecordError(name, line_no, f"{what} is not a number: {value!r}") from None
    if not number.is_finite():
        raise MalformedRecordError(name, line_no, f"{what} is not finite: {value!r}")
    return number


def read_events(source: Source) -> Iterator[InteractionEvent]:
    """Stream InteractionEvents from an events file or iterable of lines."""
    name = source_name(source)
    for line_no, columns in iter_rows(source, len(EVENT_FIELDS)):
        user_id, product_id, raw, ts = columns[:4]
        yield InteractionEvent(
            user_id=user_id,
            product_id=product_id,
            raw_score=parse_decimal(raw, name, line_no, "raw score"),
            timestamp=parse_int(ts, name, line_no, "timestamp"),
            source=name,
            line_no=line_no,
        )
