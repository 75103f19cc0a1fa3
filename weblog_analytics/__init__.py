"""Web Log Analytics package"""

from .patterns import VERSION
from .models import LogRecord, ParseResult, ParseStats, Report
from .errors import ConfigurationError, InvalidTimestamp, LogAnalyticsError, MalformedRecord
from .config import AnalyzerConfig
from .parser import RecordParser, parse_line, parse_lines
from .sources import FileSource, LineSource, RowSource, StreamSource, open_source
from .analyzer import LogAnalyzer
from .output import print_report, render_report

__all__ = [
    'VERSION', 'LogRecord', 'ParseResult', 'ParseStats', 'Report',
    'LogAnalyticsError', 'MalformedRecord', 'InvalidTimestamp', 'ConfigurationError',
    'AnalyzerConfig', 'RecordParser', 'parse_line', 'parse_lines',
    'LineSource', 'FileSource', 'StreamSource', 'RowSource', 'open_source',
    'LogAnalyzer', 'print_report', 'render_report',
]
