"""Record emitter — shape a repository aggregate into output records."""

from __future__ import annotations

from authorship.engines.aggregation.models import RepoAuthorship, RepositoryAggregate
from authorship.engines.emitter.records import (
    RefAuthorship,
    RepoAuthor,
    RepoContribution,
    RepositoryAuthorship,
    RepositoryClientship,
    RepositoryRecords,
    SymbolAuthor,
    SymbolAuthorship,
    SymbolClient,
)
from authorship.exceptions import EmitterError


def _repository_authorship(a: RepoAuthorship) -> RepositoryAuthorship:
    return RepositoryAuthorship(
        info=a.info,
        symbol_count=a.symbol_count,
        symbols_proportion=a.symbols_proportion,
        exported_symbol_count=a.exported_symbol_count,
        exported_symbols_proportion=a.exported_symbols_proportion,
    )


def emit_records(aggregate: RepositoryAggregate) -> RepositoryRecords:
    """Map *aggregate* onto the six record types. No computation happens here.

    Identities were resolved during attribution; each record takes the one
    carried by its authorship info.

    Raises :class:`EmitterError` if the aggregate lacks a required field.
    """
    if not aggregate.repo:
        raise EmitterError("aggregate has no repository")
    if not aggregate.commit:
        raise EmitterError(f"aggregate for {aggregate.repo} has no commit")

    repo, commit = aggregate.repo, aggregate.commit

    symbol_authors: list[SymbolAuthor] = []
    for sym in aggregate.symbols:
        if sym.total_chars <= 0:
            raise EmitterError(f"symbol {sym.key} has no characters")
        for contrib in sym.authors:
            symbol_authors.append(
                SymbolAuthor(
                    repo=repo,
                    commit=commit,
                    symbol=sym.key,
                    identity=contrib.info.identity,
                    authorship=SymbolAuthorship(
                        info=contrib.info,
                        exported=sym.exported,
                        chars=contrib.chars,
                        chars_proportion=sym.proportion(contrib),
                    ),
                    inconsistent=sym.inconsistent,
                )
            )

    authorships = [_repository_authorship(a) for a in aggregate.authors]

    return RepositoryRecords(
        repo=repo,
        commit=commit,
        symbol_authors=tuple(symbol_authors),
        symbol_clients=tuple(
            SymbolClient(
                repo=repo,
                commit=commit,
                symbol=c.symbol,
                identity=c.contribution.info.identity,
                info=c.contribution.info,
                use_count=c.contribution.use_count,
            )
            for c in aggregate.symbol_clients
        ),
        ref_authorships=tuple(
            RefAuthorship(
                repo=repo,
                commit=commit,
                ref=r.edge,
                identity=r.info.identity,
                info=r.info,
            )
            for r in aggregate.refs
        ),
        repo_authors=tuple(
            RepoAuthor(repo=repo, commit=commit, identity=a.info.identity, authorship=a)
            for a in authorships
        ),
        repo_contributions=tuple(
            RepoContribution(identity=a.info.identity, repo=repo, commit=commit, authorship=a)
            for a in authorships
        ),
        clientships=tuple(
            RepositoryClientship(
                repo=repo,
                commit=commit,
                identity=c.info.identity,
                info=c.info,
                symbol_repo=c.symbol_repo,
                ref_count=c.ref_count,
            )
            for c in aggregate.clientships
        ),
    )
