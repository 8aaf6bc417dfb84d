"""SQLAlchemy ORM models — one file per table."""

from authorship.models.ref_authorship import RefAuthorshipRow
from authorship.models.repo_author import RepoAuthorRow, RepoContributionRow
from authorship.models.repo_clientship import RepoClientshipRow
from authorship.models.symbol_author import SymbolAuthorRow
from authorship.models.symbol_client import SymbolClientRow

__all__ = [
    "RefAuthorshipRow",
    "RepoAuthorRow",
    "RepoClientshipRow",
    "RepoContributionRow",
    "SymbolAuthorRow",
    "SymbolClientRow",
]
