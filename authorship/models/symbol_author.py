"""symbol_authors table."""

from sqlalchemy import Boolean, Double, Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from authorship.core.database import Base, TimestampMixin
from authorship.models.columns import AuthorIdentityMixin, AuthorshipInfoMixin, RepoSnapshotMixin


class SymbolAuthorRow(
    RepoSnapshotMixin, AuthorIdentityMixin, AuthorshipInfoMixin, TimestampMixin, Base
):
    __tablename__ = "symbol_authors"

    symbol_path: Mapped[str] = mapped_column(Text, nullable=False)
    symbol_name: Mapped[str] = mapped_column(Text, nullable=False)
    exported: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    chars: Mapped[int] = mapped_column(Integer, nullable=False)
    chars_proportion: Mapped[float] = mapped_column(Double, nullable=False)
    inconsistent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    __table_args__ = (
        UniqueConstraint(
            "repo", "symbol_path", "symbol_name", "author_key",
            name="uq_symbol_authors_symbol_author",
        ),
        Index("idx_symbol_authors_author", "author_key"),
    )
