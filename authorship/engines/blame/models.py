"""Data models for the blame adapter."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from datetime import datetime
from functools import cached_property
from typing import Iterator


@dataclass(frozen=True)
class BlameLine:
    """One line of raw blame output, before normalization."""

    line: int  # 1-based line number in the blamed revision
    commit_id: str
    author_email: str
    commit_date: datetime
    content: str


@dataclass(frozen=True)
class BlameEntry:
    """A run of consecutive lines last touched by the same commit."""

    start_line: int  # 1-based, inclusive
    end_line: int  # inclusive
    author_email: str
    commit_id: str
    commit_date: datetime

    @property
    def recency(self) -> tuple[datetime, str]:
        """Sort key for "most recent commit"; commit id breaks date ties."""
        return (self.commit_date, self.commit_id)


@dataclass(frozen=True)
class FileBlame:
    """Normalized blame for one file at one commit.

    ``entries`` cover lines 1..N with no gaps or overlaps.
    ``line_offsets[i]`` is the character offset at which line ``i + 1``
    starts; the final element is the file length.
    """

    path: str
    commit: str
    entries: tuple[BlameEntry, ...]
    line_offsets: tuple[int, ...]

    @cached_property
    def _entry_starts(self) -> list[int]:
        return [e.start_line for e in self.entries]

    @property
    def length(self) -> int:
        return self.line_offsets[-1] if self.line_offsets else 0

    @property
    def line_count(self) -> int:
        return max(len(self.line_offsets) - 1, 0)

    def line_at(self, offset: int) -> int:
        """Return the 1-based line containing character *offset*."""
        if offset < 0 or offset >= self.length:
            raise IndexError(f"offset {offset} outside {self.path} (length {self.length})")
        return bisect_right(self.line_offsets, offset)

    def entry_for_line(self, line: int) -> BlameEntry:
        idx = bisect_right(self._entry_starts, line) - 1
        if idx < 0 or self.entries[idx].end_line < line:
            raise IndexError(f"line {line} not covered by blame of {self.path}")
        return self.entries[idx]

    def entry_at(self, offset: int) -> BlameEntry:
        return self.entry_for_line(self.line_at(offset))

    def runs(self, start: int, end: int) -> Iterator[tuple[BlameEntry, int]]:
        """Yield ``(entry, char_count)`` pairs covering ``[start, end)``.

        The range is cut at line boundaries; each piece belongs wholly to the
        blame entry covering its line.
        """
        if start < 0 or end > self.length or start > end:
            raise IndexError(f"range [{start}, {end}) outside {self.path} (length {self.length})")
        pos = start
        while pos < end:
            line = self.line_at(pos)
            line_end = min(self.line_offsets[line], end)
            yield self.entry_for_line(line), line_end - pos
            pos = line_end
