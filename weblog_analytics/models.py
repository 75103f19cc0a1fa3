"""Web Log Analytics - Data models"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Tuple

from .patterns import MINUTE_FORMAT


@dataclass(frozen=True)
class LogRecord:
    """One parsed, validated request"""
    ip: str
    timestamp: datetime
    url: str
    status: int
    user_agent: str


@dataclass
class ParseStats:
    """Diagnostics collected while parsing a batch of lines"""
    parsed: int = 0
    rejected: int = 0
    skipped_headers: int = 0
    failures_by_reason: Dict[str, int] = field(default_factory=dict)

    def record_success(self):
        self.parsed += 1

    def record_failure(self, reason: str):
        self.rejected += 1
        self.failures_by_reason[reason] = self.failures_by_reason.get(reason, 0) + 1

    def to_dict(self) -> Dict:
        return {
            'parsed': self.parsed,
            'rejected': self.rejected,
            'skipped_headers': self.skipped_headers,
            'failures_by_reason': dict(sorted(self.failures_by_reason.items())),
        }


@dataclass(frozen=True)
class ParseResult:
    records: Tuple[LogRecord, ...]
    stats: ParseStats


@dataclass(frozen=True)
class Report:
    """All six report sections, already in presentation order.

    Every sequence holds (key, count) pairs ordered the way they are
    printed; the output layer never re-sorts.
    """
    total_requests: int
    status_counts: Tuple[Tuple[int, int], ...]
    most_visited: Tuple[Tuple[str, int], ...]
    user_agents: Tuple[Tuple[str, int], ...]
    suspicious_ips: Tuple[Tuple[str, int], ...]
    traffic_trend: Tuple[Tuple[datetime, int], ...]
    stats: ParseStats = field(default_factory=ParseStats, compare=False)

    def to_dict(self) -> Dict:
        return {
            'total_requests': self.total_requests,
            'status_codes': {str(status): count for status, count in self.status_counts},
            'most_visited': [{'url': url, 'count': count} for url, count in self.most_visited],
            'traffic_source': [{'user_agent': agent, 'count': count} for agent, count in self.user_agents],
            'suspicious_ips': [{'ip': ip, 'failed': count} for ip, count in self.suspicious_ips],
            'traffic_trend': [
                {'minute': minute.strftime(MINUTE_FORMAT), 'count': count}
                for minute, count in self.traffic_trend
            ],
            'diagnostics': self.stats.to_dict(),
        }
