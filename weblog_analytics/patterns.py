"""Web Log Analytics - Constants and patterns"""

import re

VERSION = "1.0.0"

# Input schema
HEADER_FIELDS = ('ip', 'timestamp', 'url', 'status', 'user_agent')
FIELD_COUNT = len(HEADER_FIELDS)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
MINUTE_FORMAT = "%Y-%m-%d %H:%M"
TIMESTAMP_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$', re.ASCII)
STATUS_PATTERN = re.compile(r'^\d{3}$', re.ASCII)

MIN_STATUS = 100
MAX_STATUS = 599

# Defaults
DEFAULT_TOP_N = 3
DEFAULT_THRESHOLD = 3
DEFAULT_FAILURE_STATUSES = frozenset({404, 500})

# Report section headers, in output order
SECTIONS = {
    'total': "Total Requests",
    'status': "Status Codes",
    'most_visited': "Most Visited URLs",
    'traffic_source': "Traffic Source",
    'suspicious_ips': "Suspicious IPs",
    'traffic_trend': "Traffic Trend",
}

# Rejection reasons
REASON_FIELD_COUNT = 'field_count'
REASON_EMPTY_FIELD = 'empty_field'
REASON_INVALID_STATUS = 'invalid_status'
REASON_INVALID_TIMESTAMP = 'invalid_timestamp'
