"""Web Log Analytics - Line sources

A source only knows how to hand out raw text lines. Whether they come
from a local file, a pipe, or the result set of some query engine does
not matter to the parser or the aggregation engine.
"""

import csv
import gzip
import io
import sys
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Iterator, Sequence, TextIO


class LineSource(ABC):
    @abstractmethod
    def lines(self) -> Iterator[str]:
        pass

    def __iter__(self) -> Iterator[str]:
        return self.lines()


class FileSource(LineSource):
    """UTF-8 text file, gzip-compressed when the name ends in .gz"""

    def __init__(self, filepath):
        self.path = Path(filepath)
        if not self.path.exists():
            raise FileNotFoundError(f"Log file not found: {filepath}")

    def _open(self) -> TextIO:
        # utf-8-sig drops a leading byte-order mark
        if self.path.suffix == '.gz':
            return gzip.open(self.path, 'rt', encoding='utf-8-sig', errors='replace')
        return open(self.path, 'r', encoding='utf-8-sig', errors='replace')

    def lines(self) -> Iterator[str]:
        with self._open() as f:
            for line in f:
                yield line


class StreamSource(LineSource):
    """Text stream such as stdin.

    When the stream exposes its byte buffer it is re-decoded the same way
    as FileSource: a leading byte-order mark is dropped and undecodable
    bytes become U+FFFD.
    """

    def __init__(self, stream: TextIO):
        self.stream = stream

    def lines(self) -> Iterator[str]:
        buffer = getattr(self.stream, 'buffer', None)
        if buffer is None:
            yield from self.stream
            return

        wrapper = io.TextIOWrapper(buffer, encoding='utf-8-sig', errors='replace')
        try:
            yield from wrapper
        finally:
            # leave the underlying buffer open for the caller
            wrapper.detach()


class RowSource(LineSource):
    """Rows from an external result set, e.g. a SELECT over the access-log table.

    Each row is re-encoded as a CSV line so it goes through the same
    validation as file input.
    """

    def __init__(self, rows: Iterable[Sequence]):
        self.rows = rows

    def lines(self) -> Iterator[str]:
        for row in self.rows:
            buf = io.StringIO()
            csv.writer(buf, lineterminator='\n').writerow(
                '' if value is None else value for value in row
            )
            yield buf.getvalue()


def open_source(target: str) -> LineSource:
    if target == '-':
        return StreamSource(sys.stdin)
    return FileSource(target)
