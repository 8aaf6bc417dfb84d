"""repo_clientships table."""

from sqlalchemy import Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from authorship.core.database import Base, TimestampMixin
from authorship.models.columns import AuthorIdentityMixin, AuthorshipInfoMixin, RepoSnapshotMixin


class RepoClientshipRow(
    RepoSnapshotMixin, AuthorIdentityMixin, AuthorshipInfoMixin, TimestampMixin, Base
):
    __tablename__ = "repo_clientships"

    # Repository that defines the symbols this author referred to.
    symbol_repo: Mapped[str] = mapped_column(Text, nullable=False)

    # Number of references this author made in ``repo`` to ``symbol_repo``.
    ref_count: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "repo", "author_key", "symbol_repo", name="uq_repo_clientships_author_symbol_repo"
        ),
        Index("idx_repo_clientships_symbol_repo", "symbol_repo"),
    )
