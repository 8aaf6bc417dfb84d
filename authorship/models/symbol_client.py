"""symbol_clients table."""

from sqlalchemy import Index, Integer, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from authorship.core.database import Base, TimestampMixin
from authorship.models.columns import AuthorIdentityMixin, AuthorshipInfoMixin, RepoSnapshotMixin


class SymbolClientRow(
    RepoSnapshotMixin, AuthorIdentityMixin, AuthorshipInfoMixin, TimestampMixin, Base
):
    __tablename__ = "symbol_clients"

    symbol_repo: Mapped[str] = mapped_column(Text, nullable=False)
    symbol_path: Mapped[str] = mapped_column(Text, nullable=False)
    symbol_name: Mapped[str] = mapped_column(Text, nullable=False)
    use_count: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "repo", "symbol_repo", "symbol_path", "symbol_name", "author_key",
            name="uq_symbol_clients_symbol_author",
        ),
        Index("idx_symbol_clients_symbol", "symbol_repo", "symbol_path", "symbol_name"),
    )
