"""Generic repository-scoped DAO — bulk replace + simple reads."""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from authorship.core.database import Base

ModelT = TypeVar("ModelT", bound=Base)


class RepoScopedDAO(Generic[ModelT]):
    """Data-access object for a table whose rows all belong to one ``repo``.

    Subclasses set the ``model`` class attribute.
    """

    model: type[ModelT]

    # ── read ──────────────────────────────────────────────────────────────

    async def list_by_repo(self, session: AsyncSession, repo: str) -> list[ModelT]:
        stmt = select(self.model).where(self.model.repo == repo).order_by(self.model.id)
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_repo(self, session: AsyncSession, repo: str) -> int:
        stmt = select(func.count()).select_from(self.model).where(self.model.repo == repo)
        result = await session.execute(stmt)
        return result.scalar_one()

    async def get_by_field(self, session: AsyncSession, **filters: Any) -> ModelT | None:
        """Return the first row matching all *filters*, or None.

        Raises ``ValueError`` if called without any filters.
        """
        if not filters:
            raise ValueError("get_by_field() requires at least one filter")
        stmt = select(self.model)
        for key, val in filters.items():
            stmt = stmt.where(getattr(self.model, key) == val)
        result = await session.execute(stmt)
        return result.scalars().first()

    # ── write ─────────────────────────────────────────────────────────────

    async def bulk_create(self, session: AsyncSession, items: list[dict[str, Any]]) -> list[ModelT]:
        """Insert multiple rows in a single flush."""
        objs = [self.model(**vals) for vals in items]
        session.add_all(objs)
        await session.flush()
        return objs

    async def delete_by_repo(self, session: AsyncSession, repo: str) -> int:
        """Delete every row of *repo*. Returns the number of deleted rows."""
        result = await session.execute(delete(self.model).where(self.model.repo == repo))
        return result.rowcount

    async def replace_for_repo(
        self,
        session: AsyncSession,
        repo: str,
        items: list[dict[str, Any]],
    ) -> tuple[int, int]:
        """Replace all of *repo*'s rows with *items* in the caller's transaction.

        Every item must carry ``repo=repo``. Returns ``(inserted, deleted)``.
        """
        for vals in items:
            if vals.get("repo") != repo:
                raise ValueError(
                    f"{self.model.__tablename__}: row for {vals.get('repo')!r} "
                    f"in replace of {repo!r}"
                )
        deleted = await self.delete_by_repo(session, repo)
        await self.bulk_create(session, items)
        return len(items), deleted
