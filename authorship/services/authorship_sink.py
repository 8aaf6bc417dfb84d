"""AuthorshipSink — persist a repository's records with replace semantics."""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from authorship.dao.ref_authorship_dao import RefAuthorshipDAO
from authorship.dao.repo_author_dao import RepoAuthorDAO, RepoContributionDAO
from authorship.dao.repo_clientship_dao import RepoClientshipDAO
from authorship.dao.symbol_author_dao import SymbolAuthorDAO
from authorship.dao.symbol_client_dao import SymbolClientDAO
from authorship.engines.attribution.models import AuthorshipInfo
from authorship.engines.emitter.records import (
    RefAuthorship,
    RepoAuthor,
    RepoContribution,
    RepositoryAuthorship,
    RepositoryClientship,
    RepositoryRecords,
    SymbolAuthor,
    SymbolClient,
)
from authorship.identity import AuthorIdentity, author_key, identity_email, identity_uid

log = structlog.get_logger("authorship.sink")


def _identity_cols(identity: AuthorIdentity, info: AuthorshipInfo) -> dict[str, Any]:
    return {
        "uid": identity_uid(identity),
        "email": identity_email(identity),
        "author_key": author_key(identity),
        "author_email": info.author_email,
        "last_commit_date": info.last_commit_date,
        "last_commit_id": info.last_commit_id,
    }


def _repository_authorship_cols(a: RepositoryAuthorship) -> dict[str, Any]:
    return {
        "symbol_count": a.symbol_count,
        "symbols_proportion": a.symbols_proportion,
        "exported_symbol_count": a.exported_symbol_count,
        "exported_symbols_proportion": a.exported_symbols_proportion,
    }


def symbol_author_row(r: SymbolAuthor) -> dict[str, Any]:
    a = r.authorship
    return {
        "repo": r.repo,
        "commit_sha": r.commit,
        **_identity_cols(r.identity, a.info),
        "symbol_path": r.symbol.path,
        "symbol_name": r.symbol.name,
        "exported": a.exported,
        "chars": a.chars,
        "chars_proportion": a.chars_proportion,
        "inconsistent": r.inconsistent,
    }


def symbol_client_row(r: SymbolClient) -> dict[str, Any]:
    return {
        "repo": r.repo,
        "commit_sha": r.commit,
        **_identity_cols(r.identity, r.info),
        "symbol_repo": r.symbol.repo,
        "symbol_path": r.symbol.path,
        "symbol_name": r.symbol.name,
        "use_count": r.use_count,
    }


def ref_authorship_row(r: RefAuthorship) -> dict[str, Any]:
    return {
        "repo": r.repo,
        "commit_sha": r.commit,
        **_identity_cols(r.identity, r.info),
        "path": r.ref.path,
        "start_offset": r.ref.start,
        "end_offset": r.ref.end,
        "symbol_repo": r.ref.target.repo,
        "symbol_path": r.ref.target.path,
        "symbol_name": r.ref.target.name,
    }


def repo_author_row(r: RepoAuthor | RepoContribution) -> dict[str, Any]:
    return {
        "repo": r.repo,
        "commit_sha": r.commit,
        **_identity_cols(r.identity, r.authorship.info),
        **_repository_authorship_cols(r.authorship),
    }


def clientship_row(r: RepositoryClientship) -> dict[str, Any]:
    return {
        "repo": r.repo,
        "commit_sha": r.commit,
        **_identity_cols(r.identity, r.info),
        "symbol_repo": r.symbol_repo,
        "ref_count": r.ref_count,
    }


class AuthorshipSink:
    """Writes all six record tables for a repository as one unit.

    Rerunning a repository overwrites its previous rows; it never appends.
    The caller owns the transaction, so either every table is replaced or
    (on rollback) none is.
    """

    def __init__(
        self,
        symbol_author_dao: SymbolAuthorDAO | None = None,
        symbol_client_dao: SymbolClientDAO | None = None,
        ref_authorship_dao: RefAuthorshipDAO | None = None,
        repo_author_dao: RepoAuthorDAO | None = None,
        repo_contribution_dao: RepoContributionDAO | None = None,
        repo_clientship_dao: RepoClientshipDAO | None = None,
    ) -> None:
        self.symbol_authors = symbol_author_dao or SymbolAuthorDAO()
        self.symbol_clients = symbol_client_dao or SymbolClientDAO()
        self.ref_authorships = ref_authorship_dao or RefAuthorshipDAO()
        self.repo_authors = repo_author_dao or RepoAuthorDAO()
        self.repo_contributions = repo_contribution_dao or RepoContributionDAO()
        self.repo_clientships = repo_clientship_dao or RepoClientshipDAO()

    async def replace_repository(
        self, session: AsyncSession, records: RepositoryRecords
    ) -> dict[str, int]:
        """Replace everything stored for ``records.repo``.

        Returns the number of rows written per table.
        """
        repo = records.repo
        plan = [
            (self.symbol_authors, [symbol_author_row(r) for r in records.symbol_authors]),
            (self.symbol_clients, [symbol_client_row(r) for r in records.symbol_clients]),
            (self.ref_authorships, [ref_authorship_row(r) for r in records.ref_authorships]),
            (self.repo_authors, [repo_author_row(r) for r in records.repo_authors]),
            (self.repo_contributions, [repo_author_row(r) for r in records.repo_contributions]),
            (self.repo_clientships, [clientship_row(r) for r in records.clientships]),
        ]

        written: dict[str, int] = {}
        for dao, rows in plan:
            inserted, deleted = await dao.replace_for_repo(session, repo, rows)
            written[dao.model.__tablename__] = inserted
            log.debug(
                "sink.table_replaced",
                repo=repo,
                table=dao.model.__tablename__,
                inserted=inserted,
                deleted=deleted,
            )

        log.info("sink.repository_replaced", repo=repo, commit=records.commit, **written)
        return written
