"""Web Log Analytics - Analyzer configuration"""

from dataclasses import dataclass
from typing import FrozenSet

from .errors import ConfigurationError
from .patterns import (
    DEFAULT_FAILURE_STATUSES,
    DEFAULT_THRESHOLD,
    DEFAULT_TOP_N,
    MAX_STATUS,
    MIN_STATUS,
)


@dataclass(frozen=True)
class AnalyzerConfig:
    """Tunable knobs of the aggregation engine"""
    top_n: int = DEFAULT_TOP_N
    threshold: int = DEFAULT_THRESHOLD
    failure_statuses: FrozenSet[int] = DEFAULT_FAILURE_STATUSES
    workers: int = 1

    def validate(self) -> 'AnalyzerConfig':
        if not isinstance(self.top_n, int) or self.top_n < 1:
            raise ConfigurationError(f"top_n must be a positive integer, got {self.top_n!r}")
        if not isinstance(self.threshold, int) or self.threshold < 1:
            raise ConfigurationError(f"threshold must be a positive integer, got {self.threshold!r}")
        if not self.failure_statuses:
            raise ConfigurationError("failure_statuses must not be empty")
        for status in self.failure_statuses:
            if not isinstance(status, int) or not MIN_STATUS <= status <= MAX_STATUS:
                raise ConfigurationError(
                    f"failure status must be an integer in [{MIN_STATUS}, {MAX_STATUS}], got {status!r}"
                )
        if not isinstance(self.workers, int) or self.workers < 1:
            raise ConfigurationError(f"workers must be a positive integer, got {self.workers!r}")
        return self

    @classmethod
    def from_args(cls, args) -> 'AnalyzerConfig':
        statuses = args.failure_status or DEFAULT_FAILURE_STATUSES
        return cls(
            top_n=args.top,
            threshold=args.threshold,
            failure_statuses=frozenset(statuses),
            workers=args.workers,
        )
