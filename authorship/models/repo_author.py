"""repo_authors and repo_contributions tables."""

from sqlalchemy import UniqueConstraint

from authorship.core.database import Base, TimestampMixin
from authorship.models.columns import (
    AuthorIdentityMixin,
    AuthorshipInfoMixin,
    RepositoryAuthorshipMixin,
    RepoSnapshotMixin,
)


class RepoAuthorRow(
    RepoSnapshotMixin,
    AuthorIdentityMixin,
    AuthorshipInfoMixin,
    RepositoryAuthorshipMixin,
    TimestampMixin,
    Base,
):
    __tablename__ = "repo_authors"

    __table_args__ = (
        UniqueConstraint("repo", "author_key", name="uq_repo_authors_repo_author"),
    )


class RepoContributionRow(
    RepoSnapshotMixin,
    AuthorIdentityMixin,
    AuthorshipInfoMixin,
    RepositoryAuthorshipMixin,
    TimestampMixin,
    Base,
):
    __tablename__ = "repo_contributions"

    __table_args__ = (
        UniqueConstraint("author_key", "repo", name="uq_repo_contributions_author_repo"),
    )
