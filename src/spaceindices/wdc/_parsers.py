"""Parsers for WDC-format Kp/Ap files.

Supports the yearly World Data Centre files published by GFZ Potsdam
(``kpYYYY.wdc``), one fixed-width line per day. Column positions below are
0-indexed, end-exclusive:

- ``[2, 4)``: month, ``[4, 6)``: day
- ``[12, 28)``: eight Kp values, 2 chars each, stored as Kp x 10
- ``[31, 55)``: eight Ap values, 3 chars each

The two-digit year in ``[0, 2)`` is ambiguous across centuries and is not
read; the caller supplies the year of each file.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from spaceindices.time import date_to_mjd
from spaceindices.wdc._errors import ParseError
from spaceindices.wdc._types import DailyRecord

logger = logging.getLogger(__name__)

_MIN_LINE_LENGTH = 55
_RECORD_HOUR = 12.0

_KP_START = 12
_KP_WIDTH = 2
_AP_START = 31
_AP_WIDTH = 3
_N_INTERVALS = 8


def _parse_int(line: str, start: int, end: int, name: str) -> int:
    """Parse a required integer from a fixed-width field.

    Args:
        line: The data line.
        start: Start column (0-indexed).
        end: End column (exclusive).
        name: Field name used in the error message.

    Returns:
        Parsed int value.

    Raises:
        ParseError: If the field is blank or not an integer.
    """
    field = line[start:end]
    digits = field.strip()
    # int() alone would also take signs and underscores
    if not (digits.isascii() and digits.isdigit()):
        raise ParseError(f"non-numeric {name} field {field!r} at columns {start + 1}-{end}")
    return int(digits)


def parse_wdc_line(line: str, year: int) -> DailyRecord:
    """Parse a single WDC data line.

    Args:
        line: One line of a WDC file, with or without trailing newline.
        year: Calendar year the line belongs to.

    Returns:
        The day's record, time-stamped at local noon.

    Raises:
        ParseError: If the line is too short, a field is not numeric, or
            the month/day do not form a valid date. The error carries no
            file context; :func:`parse_wdc_file` adds it.
    """
    line = line.rstrip("\r\n")
    if len(line) < _MIN_LINE_LENGTH:
        raise ParseError(
            f"line has {len(line)} characters, expected at least {_MIN_LINE_LENGTH}"
        )

    month = _parse_int(line, 2, 4, "month")
    day = _parse_int(line, 4, 6, "day")

    # Noon keeps every query within a calendar day nearest to that day's record.
    try:
        mjd = date_to_mjd(year, month, day, _RECORD_HOUR)
    except ValueError:
        raise ParseError(f"invalid date {year:04d}-{month:02d}-{day:02d}") from None

    kp = []
    for i in range(_N_INTERVALS):
        start = _KP_START + i * _KP_WIDTH
        kp.append(_parse_int(line, start, start + _KP_WIDTH, f"Kp[{i}]") / 10.0)

    ap = []
    for i in range(_N_INTERVALS):
        start = _AP_START + i * _AP_WIDTH
        ap.append(_parse_int(line, start, start + _AP_WIDTH, f"Ap[{i}]"))

    return DailyRecord(mjd=mjd, kp=tuple(kp), ap=tuple(ap))


def parse_wdc_file(filepath: str | Path, year: int) -> list[DailyRecord]:
    """Parse an entire WDC file into daily records.

    The file is read as ASCII. Blank lines are skipped. Any other line must
    parse; the first bad line aborts the file.

    Args:
        filepath: Path to the WDC file.
        year: Calendar year covered by the file.

    Returns:
        Records in file order.

    Raises:
        FileNotFoundError: If the file does not exist.
        ParseError: On the first malformed or non-ASCII line, or if the file
            holds no data lines.
    """
    records: list[DailyRecord] = []

    with open(filepath, "rb") as f:
        for line_number, raw in enumerate(f, start=1):
            try:
                line = raw.decode("ascii")
            except UnicodeDecodeError as err:
                raise ParseError(
                    f"non-ASCII byte {raw[err.start]:#04x} at column {err.start + 1}",
                    filepath,
                    line_number,
                ) from None
            if not line.strip():
                continue
            try:
                records.append(parse_wdc_line(line, year))
            except ParseError as err:
                raise ParseError(err.reason, filepath, line_number) from None

    if not records:
        raise ParseError("no WDC data lines found", filepath)

    logger.debug("Parsed %d daily records for %d from %s", len(records), year, filepath)
    return records


def parse_wdc_files(files: Iterable[tuple[str | Path, int]]) -> list[DailyRecord]:
    """Parse several WDC files, one per year.

    Args:
        files: ``(path, year)`` pairs.

    Returns:
        Records of all files concatenated, in the order given.

    Raises:
        FileNotFoundError: If a file does not exist.
        ParseError: On the first malformed file.
    """
    records: list[DailyRecord] = []
    for filepath, year in files:
        records.extend(parse_wdc_file(filepath, year))
    return records
