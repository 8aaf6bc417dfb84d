"""Aggregator — reduce per-file partials into repository rollups.

Every step is a commutative, associative reduction (integer sums and
"latest commit wins" by ``(date, commit id)``), and proportions are only
divided out at the very end. Reprocessing the same partials in any order
therefore yields identical aggregates.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from authorship.engines.aggregation.models import (
    Clientship,
    FilePartial,
    RepoAuthorship,
    RepositoryAggregate,
    SkippedFile,
    SymbolClientship,
)
from authorship.engines.attribution.models import (
    AuthorshipInfo,
    ClientContribution,
    ClientKey,
    SymbolAttribution,
)
from authorship.exceptions import AggregationIncomplete

log = structlog.get_logger("authorship.engine")


def _proportion(count: int, total: int) -> float:
    return count / total if total else 0.0


def check_complete(
    repo: str,
    partials: list[FilePartial],
    expected_files: Iterable[str],
    skipped_files: list[SkippedFile],
) -> None:
    """The join barrier: every expected file is accounted for exactly once.

    Raises :class:`AggregationIncomplete` otherwise.
    """
    seen: dict[str, int] = {}
    for path in [p.path for p in partials] + [s.path for s in skipped_files]:
        seen[path] = seen.get(path, 0) + 1

    problems = sorted(f"missing:{path}" for path in set(expected_files) if path not in seen)
    problems += sorted(f"duplicate:{path}" for path, n in seen.items() if n > 1)
    if problems:
        log.error("aggregation.incomplete", repo=repo, problems=problems)
        raise AggregationIncomplete(repo, problems)


def merge_clients(partials: list[FilePartial]) -> dict[ClientKey, ClientContribution]:
    merged: dict[ClientKey, ClientContribution] = {}
    for partial in partials:
        for key, contrib in partial.references.clients.items():
            prev = merged.get(key)
            merged[key] = contrib if prev is None else prev.merge(contrib)
    return merged


def rollup_authors(symbols: list[SymbolAttribution]) -> list[RepoAuthorship]:
    """Per-author symbol counts and proportions over the repository's totals."""
    total = len(symbols)
    total_exported = sum(1 for s in symbols if s.exported)

    counts: dict[str, list[int]] = {}  # author key -> [symbols, exported symbols]
    infos: dict[str, AuthorshipInfo] = {}
    for sym in symbols:
        for contrib in sym.authors:
            if contrib.chars <= 0:
                continue
            key = contrib.author_key
            c = counts.setdefault(key, [0, 0])
            c[0] += 1
            if sym.exported:
                c[1] += 1
            prev = infos.get(key)
            infos[key] = contrib.info if prev is None else prev.latest(contrib.info)

    return [
        RepoAuthorship(
            info=infos[key],
            symbol_count=counts[key][0],
            symbols_proportion=_proportion(counts[key][0], total),
            exported_symbol_count=counts[key][1],
            exported_symbols_proportion=_proportion(counts[key][1], total_exported),
        )
        for key in sorted(counts)
    ]


def rollup_clientships(
    repo: str,
    clients: dict[ClientKey, ClientContribution],
    include_self_references: bool = False,
) -> list[Clientship]:
    """Group symbol uses by (author, symbol-defining repository).

    References into ``repo`` itself are dropped unless
    *include_self_references* is set; they are still counted as symbol
    clients either way.
    """
    grouped: dict[tuple[str, str], ClientContribution] = {}
    for (target, author), contrib in clients.items():
        if target.repo == repo and not include_self_references:
            continue
        key = (author, target.repo)
        prev = grouped.get(key)
        grouped[key] = contrib if prev is None else prev.merge(contrib)

    return [
        Clientship(
            source_repo=repo,
            symbol_repo=symbol_repo,
            info=grouped[(author, symbol_repo)].info,
            ref_count=grouped[(author, symbol_repo)].use_count,
        )
        for author, symbol_repo in sorted(grouped)
    ]


def aggregate_repository(
    repo: str,
    commit: str,
    partials: list[FilePartial],
    expected_files: Iterable[str],
    skipped_files: list[SkippedFile] | None = None,
    include_self_references: bool = False,
) -> RepositoryAggregate:
    """Reduce all per-file partials of one repository.

    Must only be called after every file has been processed; raises
    :class:`AggregationIncomplete` if any expected file is unaccounted for.
    Skipped files contribute nothing to any total.
    """
    skipped_files = list(skipped_files or [])
    check_complete(repo, partials, expected_files, skipped_files)

    symbols = sorted((s for p in partials for s in p.symbols), key=lambda s: s.key)
    refs = sorted((r for p in partials for r in p.references.refs), key=lambda r: r.edge)
    clients = merge_clients(partials)

    aggregate = RepositoryAggregate(
        repo=repo,
        commit=commit,
        symbols=symbols,
        refs=refs,
        symbol_clients=[
            SymbolClientship(symbol=target, contribution=clients[(target, author)])
            for target, author in sorted(clients)
        ],
        authors=rollup_authors(symbols),
        clientships=rollup_clientships(repo, clients, include_self_references),
        total_symbols=len(symbols),
        total_exported_symbols=sum(1 for s in symbols if s.exported),
        skipped_files=sorted(skipped_files),
        skipped_symbols=sorted(
            (s for p in partials for s in p.skipped_symbols), key=lambda s: s.key
        ),
    )
    log.info(
        "aggregation.completed",
        repo=repo,
        commit=commit,
        symbols=aggregate.total_symbols,
        exported=aggregate.total_exported_symbols,
        authors=len(aggregate.authors),
        clientships=len(aggregate.clientships),
        skipped_files=len(aggregate.skipped_files),
    )
    return aggregate
