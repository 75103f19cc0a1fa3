"""Web Log Analytics - Core analysis engine"""

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from rich.progress import Progress, SpinnerColumn, TextColumn

from . import aggregations as agg
from .config import AnalyzerConfig
from .models import LogRecord, ParseStats, Report
from .parser import RecordParser
from .sources import FileSource, LineSource

logger = logging.getLogger(__name__)


@dataclass
class Tally:
    """Unordered partial counts for one slice of the records.

    Counts are associative and commutative, so tallies of disjoint
    slices can be merged in any order before ranking.
    """
    total: int = 0
    statuses: Counter = field(default_factory=Counter)
    urls: Counter = field(default_factory=Counter)
    user_agents: Counter = field(default_factory=Counter)
    failures: Counter = field(default_factory=Counter)
    minutes: Counter = field(default_factory=Counter)

    @classmethod
    def from_records(cls, records: Sequence[LogRecord], failure_statuses) -> 'Tally':
        return cls(
            total=agg.total_requests(records),
            statuses=agg.count_by(records, agg.by_status),
            urls=agg.count_by(records, agg.by_url),
            user_agents=agg.count_by(records, agg.by_user_agent),
            failures=agg.filter_count_by(records, agg.failed(failure_statuses), agg.by_ip),
            minutes=agg.bucket_count(records),
        )

    @classmethod
    def merge(cls, tallies: Iterable['Tally']) -> 'Tally':
        tallies = list(tallies)
        return cls(
            total=sum(t.total for t in tallies),
            statuses=agg.merge_histograms(t.statuses for t in tallies),
            urls=agg.merge_histograms(t.urls for t in tallies),
            user_agents=agg.merge_histograms(t.user_agents for t in tallies),
            failures=agg.merge_histograms(t.failures for t in tallies),
            minutes=agg.merge_histograms(t.minutes for t in tallies),
        )


def partition(records: Sequence[LogRecord], parts: int) -> List[Sequence[LogRecord]]:
    if not records:
        return []
    size = -(-len(records) // parts)
    return [records[i:i + size] for i in range(0, len(records), size)]


class LogAnalyzer:
    """Main log analyzer class"""

    def __init__(self, config: Optional[AnalyzerConfig] = None, console=None):
        self.config = (config or AnalyzerConfig()).validate()
        self.console = console

    def tally(self, records: Sequence[LogRecord]) -> Tally:
        failure_statuses = self.config.failure_statuses
        if self.config.workers <= 1 or len(records) < 2:
            return Tally.from_records(records, failure_statuses)

        chunks = partition(records, self.config.workers)
        logger.debug("Tallying %d records in %d partitions", len(records), len(chunks))
        with ThreadPoolExecutor(max_workers=self.config.workers) as pool:
            partials = list(pool.map(lambda chunk: Tally.from_records(chunk, failure_statuses), chunks))
        return Tally.merge(partials)

    def generate_report(self, tally: Tally, stats: Optional[ParseStats] = None) -> Report:
        return Report(
            total_requests=tally.total,
            status_counts=tuple(agg.order_statuses(tally.statuses)),
            most_visited=tuple(agg.top_urls(tally.urls, self.config.top_n)),
            user_agents=tuple(agg.order_user_agents(tally.user_agents)),
            suspicious_ips=tuple(agg.flag_ips(tally.failures, self.config.threshold)),
            traffic_trend=tuple(agg.order_minutes(tally.minutes)),
            stats=stats if stats is not None else ParseStats(parsed=tally.total),
        )

    def analyze_records(self, records: Iterable[LogRecord], stats: Optional[ParseStats] = None) -> Report:
        records = tuple(records)
        if not records:
            logger.warning("No valid records to analyze")
        return self.generate_report(self.tally(records), stats)

    def analyze_lines(self, lines: Iterable[str]) -> Report:
        parser = RecordParser()
        records = self._collect(parser, lines)

        stats = parser.stats
        if stats.rejected:
            logger.warning(
                "Rejected %d of %d lines (%s)",
                stats.rejected,
                stats.parsed + stats.rejected,
                ", ".join(f"{reason}={count}" for reason, count in sorted(stats.failures_by_reason.items())),
            )
        return self.analyze_records(records, stats)

    def analyze_source(self, source: LineSource) -> Report:
        return self.analyze_lines(source.lines())

    def analyze_file(self, filepath) -> Report:
        return self.analyze_source(FileSource(filepath))

    def _collect(self, parser: RecordParser, lines: Iterable[str]) -> List[LogRecord]:
        if self.console is None:
            return list(parser.parse(lines))

        records = []
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True,
        ) as progress:
            task = progress.add_task("Parsing log lines...", total=None)
            for record in parser.parse(lines):
                records.append(record)
                progress.update(task, advance=1)
        return records
