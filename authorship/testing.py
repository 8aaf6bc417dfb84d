"""Test doubles for authorship — use in unit / integration tests.

Usage::

    from authorship.testing import FakeBlameProvider, FakeGraphProvider, blame_from_rows

    blame = blame_from_rows("a.go", [("func Foo() {", "a@x.io", "c1", d1), ...])
    provider = FakeBlameProvider({"a.go": blame})
    provider = FakeBlameProvider({"a.go": blame}, delays={"a.go": 5.0})   # slow file
    provider = FakeBlameProvider({"a.go": BlameUnavailable("a.go", "binary")})
"""

from __future__ import annotations

import asyncio
from datetime import datetime

from authorship.engines.blame.models import BlameLine, FileBlame
from authorship.engines.blame.porcelain import normalize_blame
from authorship.engines.blame.provider import BlameProvider
from authorship.engines.symbols.graph import SymbolGraphProvider
from authorship.engines.symbols.models import RefEdge, SymbolDef
from authorship.exceptions import BlameUnavailable

BlameRow = tuple[str, str, str, datetime]  # (content, author email, commit id, commit date)


def blame_from_rows(path: str, rows: list[BlameRow], commit: str = "HEAD") -> FileBlame:
    """Build a normalized :class:`FileBlame` from one row per line."""
    lines = [
        BlameLine(line=i, commit_id=cid, author_email=email, commit_date=date, content=content)
        for i, (content, email, cid, date) in enumerate(rows, start=1)
    ]
    return normalize_blame(path, commit, lines)


class FakeBlameProvider(BlameProvider):
    """In-memory blame. Unknown paths raise :class:`BlameUnavailable`.

    Parameters
    ----------
    files:
        ``path -> FileBlame`` or ``path -> exception`` to raise for that path.
    delays:
        Optional ``path -> seconds`` to sleep before answering.
    """

    def __init__(
        self,
        files: dict[str, FileBlame | Exception],
        delays: dict[str, float] | None = None,
    ) -> None:
        self._files = files
        self._delays = delays or {}
        self._calls: list[tuple[str, str]] = []

    @property
    def calls(self) -> list[tuple[str, str]]:
        """``(path, commit)`` pairs requested — useful for assertions in tests."""
        return self._calls

    async def blame(self, path: str, commit: str) -> FileBlame:
        self._calls.append((path, commit))
        delay = self._delays.get(path)
        if delay:
            await asyncio.sleep(delay)
        found = self._files.get(path)
        if found is None:
            raise BlameUnavailable(path, "path not found")
        if isinstance(found, Exception):
            raise found
        return found


class FakeGraphProvider(SymbolGraphProvider):
    """Fixed symbol and reference lists, filtered by repository."""

    def __init__(
        self,
        symbols: list[SymbolDef] | None = None,
        references: list[RefEdge] | None = None,
    ) -> None:
        self._symbols = list(symbols or [])
        self._references = list(references or [])

    async def symbols(self, repo: str, commit: str) -> list[SymbolDef]:
        return [s for s in self._symbols if s.key.repo == repo]

    async def references(self, repo: str, commit: str) -> list[RefEdge]:
        return [r for r in self._references if r.repo == repo]
