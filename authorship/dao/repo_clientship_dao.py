"""RepoClientshipDAO — repo_clientships table operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from authorship.dao.base import RepoScopedDAO
from authorship.models.repo_clientship import RepoClientshipRow


class RepoClientshipDAO(RepoScopedDAO[RepoClientshipRow]):
    model = RepoClientshipRow

    async def list_by_symbol_repo(
        self, session: AsyncSession, symbol_repo: str
    ) -> list[RepoClientshipRow]:
        """Who uses *symbol_repo*'s symbols, from which repositories."""
        stmt = (
            select(RepoClientshipRow)
            .where(RepoClientshipRow.symbol_repo == symbol_repo)
            .order_by(RepoClientshipRow.ref_count.desc(), RepoClientshipRow.repo)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
