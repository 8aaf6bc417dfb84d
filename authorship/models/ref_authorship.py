"""ref_authorships table — one row per reference site."""

from sqlalchemy import Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from authorship.core.database import Base, TimestampMixin
from authorship.models.columns import AuthorIdentityMixin, AuthorshipInfoMixin, RepoSnapshotMixin


class RefAuthorshipRow(
    RepoSnapshotMixin, AuthorIdentityMixin, AuthorshipInfoMixin, TimestampMixin, Base
):
    __tablename__ = "ref_authorships"

    path: Mapped[str] = mapped_column(Text, nullable=False)
    start_offset: Mapped[int] = mapped_column(Integer, nullable=False)
    end_offset: Mapped[int] = mapped_column(Integer, nullable=False)
    symbol_repo: Mapped[str] = mapped_column(Text, nullable=False)
    symbol_path: Mapped[str] = mapped_column(Text, nullable=False)
    symbol_name: Mapped[str] = mapped_column(Text, nullable=False)

    __table_args__ = (
        Index("idx_ref_authorships_symbol", "symbol_repo", "symbol_path", "symbol_name"),
    )
