"""AuthorshipRunner — parallel per-file attribution, barrier, reduction, sink."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Literal

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from authorship.core.config import EngineSettings
from authorship.engines.aggregation.aggregator import aggregate_repository
from authorship.engines.aggregation.models import FilePartial, RepositoryAggregate, SkippedFile
from authorship.engines.attribution.references import attribute_references
from authorship.engines.attribution.symbols import attribute_symbol
from authorship.engines.blame.provider import BlameProvider
from authorship.engines.emitter.emitter import emit_records
from authorship.engines.emitter.records import RepositoryRecords
from authorship.engines.symbols.graph import SymbolGraphProvider
from authorship.engines.symbols.models import RefEdge, SymbolDef
from authorship.engines.symbols.resolver import resolve_symbols
from authorship.exceptions import AuthorshipError, BlameUnavailable
from authorship.identity import IdentityResolver
from authorship.services.authorship_sink import AuthorshipSink

log = structlog.get_logger("authorship.engine")

RunStatus = Literal["completed", "failed"]


@dataclass
class RunResult:
    """Summary of one repository run."""

    repo: str
    commit: str
    status: RunStatus
    records: RepositoryRecords | None = None
    written: dict[str, int] = field(default_factory=dict)
    skipped_files: list[SkippedFile] = field(default_factory=list)
    error: str | None = None


class AuthorshipRunner:
    """Integrated mode: graph + blame in, authorship records out to the sink."""

    def __init__(
        self,
        blame_provider: BlameProvider,
        graph_provider: SymbolGraphProvider,
        sink: AuthorshipSink | None = None,
        settings: EngineSettings | None = None,
        identity_resolver: IdentityResolver | None = None,
    ) -> None:
        self._blame = blame_provider
        self._graph = graph_provider
        self._sink = sink or AuthorshipSink()
        self._settings = settings or EngineSettings()
        self._resolver = identity_resolver

    # ── parallel phase ───────────────────────────────────────────────────

    async def _process_file(
        self,
        path: str,
        commit: str,
        defs: list[SymbolDef],
        edges: list[RefEdge],
    ) -> FilePartial | SkippedFile:
        """Attribute one file. Shares no state with other files."""
        try:
            blame = await asyncio.wait_for(
                self._blame.blame(path, commit), timeout=self._settings.blame_timeout
            )
        except asyncio.TimeoutError:
            log.warning("blame.timeout", path=path, timeout=self._settings.blame_timeout)
            return SkippedFile(path=path, reason="blame timed out")
        except BlameUnavailable as exc:
            log.warning("blame.unavailable", path=path, reason=exc.reason)
            return SkippedFile(path=path, reason=exc.reason)

        symbols, skipped_symbols = resolve_symbols(defs, blame.length)
        eps = self._settings.proportion_epsilon
        return FilePartial(
            path=path,
            symbols=[attribute_symbol(sym, blame, eps, self._resolver) for sym in symbols],
            references=attribute_references(edges, blame, self._resolver),
            skipped_symbols=skipped_symbols,
        )

    async def _process_files(
        self,
        commit: str,
        defs_by_file: dict[str, list[SymbolDef]],
        edges_by_file: dict[str, list[RefEdge]],
    ) -> list[FilePartial | SkippedFile]:
        sem = asyncio.Semaphore(self._settings.concurrency)

        async def _bounded(path: str) -> FilePartial | SkippedFile:
            async with sem:
                return await self._process_file(
                    path, commit, defs_by_file.get(path, []), edges_by_file.get(path, [])
                )

        files = sorted(set(defs_by_file) | set(edges_by_file))
        tasks = [asyncio.create_task(_bounded(p), name=f"attribute-{p}") for p in files]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            # Failure or cancellation: stop the remaining workers before propagating.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    # ── standalone mode ──────────────────────────────────────────────────

    async def analyze(self, repo: str, commit: str) -> RepositoryAggregate:
        """Compute the complete aggregate for *repo* at *commit* (no DB access).

        Raises :class:`AggregationIncomplete` if a file's partial is missing
        after the join.
        """
        defs = await self._graph.symbols(repo, commit)
        edges = await self._graph.references(repo, commit)

        defs_by_file: dict[str, list[SymbolDef]] = defaultdict(list)
        for d in defs:
            defs_by_file[d.key.path].append(d)
        edges_by_file: dict[str, list[RefEdge]] = defaultdict(list)
        for e in edges:
            edges_by_file[e.path].append(e)

        log.info(
            "pipeline.started",
            repo=repo,
            commit=commit,
            files=len(set(defs_by_file) | set(edges_by_file)),
            symbols=len(defs),
            references=len(edges),
        )

        outcomes = await self._process_files(commit, defs_by_file, edges_by_file)

        # Join barrier passed: every file has an outcome.
        partials = [o for o in outcomes if isinstance(o, FilePartial)]
        skipped = [o for o in outcomes if isinstance(o, SkippedFile)]
        return aggregate_repository(
            repo,
            commit,
            partials,
            expected_files=set(defs_by_file) | set(edges_by_file),
            skipped_files=skipped,
            include_self_references=self._settings.include_self_references,
        )

    async def collect(self, repo: str, commit: str) -> RunResult:
        """Analyze and emit records without persisting them."""
        aggregate = await self.analyze(repo, commit)
        return RunResult(
            repo=repo,
            commit=commit,
            status="completed",
            records=emit_records(aggregate),
            skipped_files=aggregate.skipped_files,
        )

    # ── integrated mode ──────────────────────────────────────────────────

    async def run(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        repo: str,
        commit: str,
    ) -> RunResult:
        """Full pipeline for one repository: analyze -> emit -> replace in sink.

        Nothing is written unless the whole repository aggregated cleanly.
        Cancellation propagates and leaves the stored rows untouched.
        """
        with structlog.contextvars.bound_contextvars(repo=repo, commit=commit):
            try:
                result = await self.collect(repo, commit)
            except AuthorshipError as exc:
                log.error("pipeline.failed", error=str(exc))
                return RunResult(repo=repo, commit=commit, status="failed", error=str(exc))

            async with session_factory() as session:
                async with session.begin():
                    written = await self._sink.replace_repository(session, result.records)

            result.written = written
            log.info(
                "pipeline.completed", skipped_files=len(result.skipped_files), **written
            )
            return result

    async def run_batch(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        targets: list[tuple[str, str]],
    ) -> list[RunResult]:
        """Run every ``(repo, commit)`` target in turn.

        Each repository is isolated: a failure in one does not affect others.
        """
        results: list[RunResult] = []
        for repo, commit in targets:
            try:
                results.append(await self.run(session_factory, repo, commit))
            except Exception as exc:
                log.error("pipeline.repo_failed", repo=repo, commit=commit, exc_info=True)
                results.append(
                    RunResult(repo=repo, commit=commit, status="failed", error=str(exc))
                )
        return results
