"""Web Log Analytics - Error types"""

from typing import Optional

from .patterns import REASON_INVALID_TIMESTAMP


class LogAnalyticsError(Exception):
    """Base class for all analytics errors"""


class MalformedRecord(LogAnalyticsError):
    """A raw line could not be turned into a LogRecord.

    Raised by the parser for a single line and always recovered by the
    batch parser, which counts the line as rejected and moves on.
    """

    def __init__(self, reason: str, line: str = '', line_number: Optional[int] = None):
        self.reason = reason
        self.line = line
        self.line_number = line_number
        where = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{where}{reason}: {line!r}")


class InvalidTimestamp(MalformedRecord):
    """The timestamp field is not YYYY-MM-DD HH:MM:SS"""

    def __init__(self, line: str = '', line_number: Optional[int] = None):
        super().__init__(REASON_INVALID_TIMESTAMP, line, line_number)


class ConfigurationError(LogAnalyticsError, ValueError):
    """Caller supplied an unusable setting (raised before any processing)"""
