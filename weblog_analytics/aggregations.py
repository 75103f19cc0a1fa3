"""Web Log Analytics - Grouping primitives and report sections

Every function here is pure: it reads the records it is given, never
mutates them, and returns a fresh result. Ordering rules live here so
that the output layer can print sequences as-is.
"""

from collections import Counter
from datetime import datetime
from operator import attrgetter
from typing import Callable, Hashable, Iterable, List, Mapping, Optional, Tuple, TypeVar

from .models import LogRecord
from .patterns import DEFAULT_FAILURE_STATUSES, DEFAULT_THRESHOLD, DEFAULT_TOP_N

K = TypeVar('K', bound=Hashable)


# ---------- Primitives ----------

def count_by(records: Iterable[LogRecord], key: Callable[[LogRecord], K]) -> Counter:
    return Counter(key(record) for record in records)


def filter_count_by(
    records: Iterable[LogRecord],
    predicate: Callable[[LogRecord], bool],
    key: Callable[[LogRecord], K],
) -> Counter:
    return Counter(key(record) for record in records if predicate(record))


def truncate_to_minute(ts: datetime) -> datetime:
    return ts.replace(second=0, microsecond=0)


def bucket_count(
    records: Iterable[LogRecord],
    bucket: Callable[[datetime], datetime] = truncate_to_minute,
) -> Counter:
    """Count records per time bucket; the timestamp is bucketed before grouping"""
    return Counter(bucket(record.timestamp) for record in records)


def merge_histograms(partials: Iterable[Mapping[K, int]]) -> Counter:
    merged: Counter = Counter()
    for partial in partials:
        merged.update(partial)
    return merged


def rank_by_count(histogram: Mapping[K, int], limit: Optional[int] = None) -> List[Tuple[K, int]]:
    """Count descending, then key ascending; optionally keep the first `limit`"""
    ranked = sorted(histogram.items(), key=lambda item: (-item[1], item[0]))
    return ranked if limit is None else ranked[:limit]


def order_by_key(histogram: Mapping[K, int]) -> List[Tuple[K, int]]:
    return sorted(histogram.items())


def above_threshold(histogram: Mapping[K, int], threshold: int) -> Counter:
    """Keep keys whose count is strictly greater than `threshold`"""
    return Counter({key: count for key, count in histogram.items() if count > threshold})


# ---------- Report sections ----------
#
# Each section is a counting step followed by an ordering step. The
# ordering steps take an already counted histogram; LogAnalyzer applies
# them to merged partial counts.

by_status = attrgetter('status')
by_url = attrgetter('url')
by_user_agent = attrgetter('user_agent')
by_ip = attrgetter('ip')


def failed(failure_statuses=DEFAULT_FAILURE_STATUSES) -> Callable[[LogRecord], bool]:
    statuses = frozenset(failure_statuses)
    return lambda record: record.status in statuses


def order_statuses(statuses: Mapping[int, int]) -> List[Tuple[int, int]]:
    return order_by_key(statuses)


def top_urls(urls: Mapping[str, int], top_n: int = DEFAULT_TOP_N) -> List[Tuple[str, int]]:
    return rank_by_count(urls, limit=top_n)


def order_user_agents(user_agents: Mapping[str, int]) -> List[Tuple[str, int]]:
    return rank_by_count(user_agents)


def flag_ips(failures: Mapping[str, int], threshold: int = DEFAULT_THRESHOLD) -> List[Tuple[str, int]]:
    return order_by_key(above_threshold(failures, threshold))


def order_minutes(minutes: Mapping[datetime, int]) -> List[Tuple[datetime, int]]:
    return order_by_key(minutes)


def total_requests(records: Iterable[LogRecord]) -> int:
    return sum(1 for _ in records)


def status_histogram(records: Iterable[LogRecord]) -> List[Tuple[int, int]]:
    return order_statuses(count_by(records, by_status))


def most_visited(records: Iterable[LogRecord], top_n: int = DEFAULT_TOP_N) -> List[Tuple[str, int]]:
    return top_urls(count_by(records, by_url), top_n)


def user_agent_distribution(records: Iterable[LogRecord]) -> List[Tuple[str, int]]:
    return order_user_agents(count_by(records, by_user_agent))


def suspicious_ips(
    records: Iterable[LogRecord],
    failure_statuses=DEFAULT_FAILURE_STATUSES,
    threshold: int = DEFAULT_THRESHOLD,
) -> List[Tuple[str, int]]:
    return flag_ips(filter_count_by(records, failed(failure_statuses), by_ip), threshold)


def traffic_trend(records: Iterable[LogRecord]) -> List[Tuple[datetime, int]]:
    return order_minutes(bucket_count(records))
