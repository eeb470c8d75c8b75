"""
Core normalization logic.

Responsibilities:
- input encoding detection (UTF-8 first, charset-normalizer best guess otherwise)
- flexible CSV parsing (ragged rows are kept ragged)
- header passthrough
- per-column rules: trim, digits-only, date canonicalization
"""

from __future__ import annotations

import csv
import io
import logging
import re
from datetime import date, datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Union

from charset_normalizer import from_bytes

from .models import NormalizeSummary
from .rules import (
    CSV_DELIMITER,
    CSV_FIELD_SIZE_LIMIT,
    DATE_INPUT_FORMATS,
    OUTPUT_ENCODING,
    OUTPUT_LINE_TERMINATOR,
    Rule,
    rule_for,
)

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_NON_DIGITS = re.compile(r"[^0-9]")
# strptime also takes non-ASCII digits and space-padded numbers
_DATE_CHARS = re.compile(r"[0-9/-]+")


class NormalizeError(Exception):
    """Base class for errors that abort a normalization run."""


class CsvParseError(NormalizeError):
    def __init__(self, line: int, message: str):
        super().__init__(f"line {line}: {message}")
        self.line = line


class InputEncodingError(NormalizeError):
    pass


def normalize_digits(value: str) -> str:
    return _NON_DIGITS.sub("", value)


def _parse_date(value: str) -> Optional[date]:
    if not _DATE_CHARS.fullmatch(value):
        return None
    for fmt in DATE_INPUT_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


def normalize_date(value: str) -> str:
    """
    Reformat a date as MM/DD/YYYY.

    Accepts MM/DD/YYYY or DD-MM-YYYY. Anything else is returned as-is.
    """
    parsed = _parse_date(value)
    if parsed is None:
        return value
    return f"{parsed.month:02d}/{parsed.day:02d}/{parsed.year:04d}"


def _passthrough(value: str) -> str:
    return value


_RULE_FUNCS: Dict[Rule, Callable[[str], str]] = {
    Rule.DIGITS: normalize_digits,
    Rule.DATE: normalize_date,
    Rule.PASSTHROUGH: _passthrough,
}


def normalize_field(index: int, value: str) -> str:
    return _RULE_FUNCS[rule_for(index)](value.strip())


def normalize_record(record: Sequence[str]) -> List[str]:
    return [normalize_field(i, field) for i, field in enumerate(record)]


def detect_encoding(raw: bytes) -> str:
    """
    Pick the codec used to read the input.

    Valid UTF-8 is read as utf-8-sig so a leading BOM never ends up in the
    first header field. Otherwise charset-normalizer's best guess is used.
    """
    try:
        raw.decode("utf-8")
        return "utf-8-sig"
    except UnicodeDecodeError:
        pass

    match = from_bytes(raw).best()
    if match is None:
        raise InputEncodingError("could not determine the input file encoding")
    return match.encoding


def _count_unparsed_dates(fields: Sequence[str], line: int) -> int:
    count = 0
    for i, field in enumerate(fields):
        if field and rule_for(i) is Rule.DATE and _parse_date(field) is None:
            logger.debug("line %d, column %d: unparsed date %r passed through", line, i, field)
            count += 1
    return count


def process_csv(input_path: PathLike, output_path: PathLike) -> NormalizeSummary:
    """
    Normalize `input_path` into `output_path`.

    The first row is copied verbatim. Every following row goes through
    normalize_record. The output is overwritten; on failure it is left as
    far as it got.

    The input is read into memory once, for encoding detection, and parsed
    from that copy; output rows are written as they are produced.
    """
    input_path = Path(input_path)
    output_path = Path(output_path)

    with open(input_path, "rb") as fh:
        raw = fh.read()
    encoding = detect_encoding(raw)
    logger.info("normalizing %s (encoding: %s)", input_path, encoding)

    summary = NormalizeSummary(input_path=input_path, output_path=output_path, encoding=encoding)

    csv.field_size_limit(CSV_FIELD_SIZE_LIMIT)

    with io.StringIO(raw.decode(encoding), newline="") as inp, \
            open(output_path, "w", encoding=OUTPUT_ENCODING, newline="") as outp:
        reader = csv.reader(inp, delimiter=CSV_DELIMITER, strict=True)
        writer = csv.writer(outp, delimiter=CSV_DELIMITER, lineterminator=OUTPUT_LINE_TERMINATOR)

        try:
            for row in reader:
                # blank lines carry no record
                if not row:
                    continue

                if not summary.header_written:
                    writer.writerow(row)
                    summary.header_written = True
                    continue

                normalized = normalize_record(row)
                summary.dates_unparsed += _count_unparsed_dates(normalized, reader.line_num)
                writer.writerow(normalized)
                summary.rows += 1
        except csv.Error as exc:
            raise CsvParseError(reader.line_num, str(exc)) from exc

        outp.flush()

    logger.info(
        "wrote %d rows to %s (%d unparsed dates passed through)",
        summary.rows,
        output_path,
        summary.dates_unparsed,
    )
    return summary
