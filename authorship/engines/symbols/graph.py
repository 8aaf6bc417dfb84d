"""Symbol/reference graph providers."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from authorship.engines.symbols.models import RefEdge, SymbolDef, SymbolKey
from authorship.exceptions import SymbolGraphInconsistent

logger = logging.getLogger(__name__)


class SymbolGraphProvider(ABC):
    """Supplies symbol boundaries and reference edges for a repository commit."""

    @abstractmethod
    async def symbols(self, repo: str, commit: str) -> list[SymbolDef]:
        ...

    @abstractmethod
    async def references(self, repo: str, commit: str) -> list[RefEdge]:
        """References *made from* ``repo`` (targets may live in any repository)."""
        ...


def _key_from(data: dict[str, Any], default_repo: str) -> SymbolKey:
    return SymbolKey(
        repo=str(data.get("repo") or default_repo),
        path=str(data["path"]),
        name=str(data["name"]),
    )


def _offsets(data: dict[str, Any]) -> tuple[int, int]:
    start, end = data["start"], data["end"]
    if not isinstance(start, int) or not isinstance(end, int):
        raise TypeError("start/end must be integers")
    return start, end


def _exported(data: dict[str, Any]) -> bool:
    exported = data.get("exported", False)
    if not isinstance(exported, bool):
        raise TypeError(f"exported must be a boolean, got {exported!r}")
    return exported


class JsonGraphProvider(SymbolGraphProvider):
    """Reads a graph document produced by an external indexer.

    Format::

        {
          "repo": "github.com/org/repo",        # optional, default for entries
          "commit": "<sha>",                    # optional
          "symbols": [
            {"path": "a.go", "name": "Foo", "exported": true, "start": 10, "end": 90}
          ],
          "references": [
            {"path": "b.go", "start": 5, "end": 8,
             "target": {"repo": "github.com/org/lib", "path": "x.go", "name": "Bar"}}
          ]
        }
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._doc: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if self._doc is None:
            try:
                doc = json.loads(self.path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                raise SymbolGraphInconsistent(str(self.path), f"invalid JSON: {exc}") from exc
            if not isinstance(doc, dict):
                raise SymbolGraphInconsistent(str(self.path), "top level must be an object")
            self._doc = doc
        return self._doc

    def _check_commit(self, doc: dict[str, Any], commit: str) -> None:
        recorded = doc.get("commit")
        if recorded and recorded != commit:
            logger.warning(
                "Graph %s was built for commit %s, analysing %s", self.path, recorded, commit
            )

    async def symbols(self, repo: str, commit: str) -> list[SymbolDef]:
        doc = self._load()
        self._check_commit(doc, commit)
        default_repo = doc.get("repo") or repo
        out: list[SymbolDef] = []
        for i, entry in enumerate(doc.get("symbols", [])):
            try:
                key = _key_from(entry, default_repo)
                start, end = _offsets(entry)
                exported = _exported(entry)
            except (KeyError, TypeError, AttributeError) as exc:
                raise SymbolGraphInconsistent(f"{self.path}#symbols[{i}]", str(exc)) from exc
            if key.repo == repo:
                out.append(SymbolDef(key=key, exported=exported, start=start, end=end))
        return out

    async def references(self, repo: str, commit: str) -> list[RefEdge]:
        doc = self._load()
        self._check_commit(doc, commit)
        default_repo = doc.get("repo") or repo
        out: list[RefEdge] = []
        for i, entry in enumerate(doc.get("references", [])):
            try:
                src_repo = str(entry.get("repo") or default_repo)
                start, end = _offsets(entry)
                edge = RefEdge(
                    repo=src_repo,
                    path=str(entry["path"]),
                    start=start,
                    end=end,
                    target=_key_from(entry["target"], default_repo),
                )
            except (KeyError, TypeError, AttributeError) as exc:
                raise SymbolGraphInconsistent(f"{self.path}#references[{i}]", str(exc)) from exc
            if edge.repo == repo:
                out.append(edge)
        return out
