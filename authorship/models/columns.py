"""Column mixins shared by the authorship tables."""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Double, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column


class RepoSnapshotMixin:
    """Primary key plus the analysed repository / commit every row is scoped to."""

    id: Mapped[uuid.UUID] = mapped_column(primary_key=True, default=uuid.uuid4)
    repo: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    commit_sha: Mapped[str] = mapped_column(Text, nullable=False)


class AuthorIdentityMixin:
    """Resolved identity (uid and/or email) plus the raw blame email.

    ``author_key`` is ``uid:<n>`` for registered authors and ``email:<addr>``
    otherwise; uniqueness is enforced on it rather than on either email.
    """

    uid: Mapped[Optional[int]] = mapped_column(BigInteger)
    email: Mapped[Optional[str]] = mapped_column(Text)
    author_key: Mapped[str] = mapped_column(Text, nullable=False)
    author_email: Mapped[str] = mapped_column(Text, nullable=False)


class AuthorshipInfoMixin:
    last_commit_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_commit_id: Mapped[str] = mapped_column(Text, nullable=False)


class RepositoryAuthorshipMixin:
    symbol_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    symbols_proportion: Mapped[float] = mapped_column(Double, nullable=False, default=0.0)
    exported_symbol_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    exported_symbols_proportion: Mapped[float] = mapped_column(
        Double, nullable=False, default=0.0
    )
