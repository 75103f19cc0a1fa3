"""Web Log Analytics - Record parser"""

import csv
import logging
from datetime import datetime
from typing import Iterable, Iterator, List, Optional

from .errors import InvalidTimestamp, MalformedRecord
from .models import LogRecord, ParseResult, ParseStats
from .patterns import (
    FIELD_COUNT,
    HEADER_FIELDS,
    MAX_STATUS,
    MIN_STATUS,
    REASON_EMPTY_FIELD,
    REASON_FIELD_COUNT,
    REASON_INVALID_STATUS,
    STATUS_PATTERN,
    TIMESTAMP_FORMAT,
    TIMESTAMP_PATTERN,
)

logger = logging.getLogger(__name__)


def split_fields(line: str) -> List[str]:
    # csv handles quoted user agents that contain commas
    try:
        row = next(csv.reader([line.rstrip('\r\n')]), [])
    except csv.Error:
        return []
    return [value.strip() for value in row]


def is_header(line: str) -> bool:
    return tuple(value.lower() for value in split_fields(line)) == HEADER_FIELDS


def parse_timestamp(value: str, line: str = '', line_number: Optional[int] = None) -> datetime:
    if not TIMESTAMP_PATTERN.match(value):
        raise InvalidTimestamp(line, line_number)
    try:
        return datetime.strptime(value, TIMESTAMP_FORMAT)
    except ValueError:
        raise InvalidTimestamp(line, line_number) from None


def parse_line(line: str, line_number: Optional[int] = None) -> LogRecord:
    """Parse one `ip,timestamp,url,status,user_agent` line.

    Raises MalformedRecord (or its InvalidTimestamp subclass); never
    returns a partially populated record.
    """
    raw = line.rstrip('\r\n')
    fields = split_fields(raw)
    if len(fields) != FIELD_COUNT:
        raise MalformedRecord(REASON_FIELD_COUNT, raw, line_number)
    if not all(fields):
        raise MalformedRecord(REASON_EMPTY_FIELD, raw, line_number)

    ip, timestamp, url, status, user_agent = fields

    if not STATUS_PATTERN.match(status) or not MIN_STATUS <= int(status) <= MAX_STATUS:
        raise MalformedRecord(REASON_INVALID_STATUS, raw, line_number)

    return LogRecord(
        ip=ip,
        timestamp=parse_timestamp(timestamp, raw, line_number),
        url=url,
        status=int(status),
        user_agent=user_agent,
    )


class RecordParser:
    """Streaming parser that skips bad lines instead of failing the batch"""

    def __init__(self):
        self.stats = ParseStats()

    def parse(self, lines: Iterable[str]) -> Iterator[LogRecord]:
        seen_content = False
        for line_number, line in enumerate(lines, 1):
            if not line.strip():
                continue

            if not seen_content:
                seen_content = True
                if is_header(line):
                    self.stats.skipped_headers += 1
                    continue

            try:
                record = parse_line(line, line_number)
            except MalformedRecord as e:
                logger.debug("Rejected %s", e)
                self.stats.record_failure(e.reason)
                continue

            self.stats.record_success()
            yield record


def parse_lines(lines: Iterable[str]) -> ParseResult:
    parser = RecordParser()
    records = tuple(parser.parse(lines))
    return ParseResult(records=records, stats=parser.stats)
