"""RepoAuthorDAO / RepoContributionDAO — repository authorship rollups."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from authorship.dao.base import RepoScopedDAO
from authorship.models.repo_author import RepoAuthorRow, RepoContributionRow


class RepoAuthorDAO(RepoScopedDAO[RepoAuthorRow]):
    model = RepoAuthorRow

    async def list_top_authors(
        self, session: AsyncSession, repo: str, limit: int = 20
    ) -> list[RepoAuthorRow]:
        stmt = (
            select(RepoAuthorRow)
            .where(RepoAuthorRow.repo == repo)
            .order_by(RepoAuthorRow.symbol_count.desc(), RepoAuthorRow.author_email)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())


class RepoContributionDAO(RepoScopedDAO[RepoContributionRow]):
    model = RepoContributionRow

    async def list_by_author(
        self, session: AsyncSession, author_key: str
    ) -> list[RepoContributionRow]:
        """Every repository an author contributed symbols to.

        *author_key* is ``uid:<n>`` or ``email:<addr>``, see ``identity.author_key``.
        """
        stmt = (
            select(RepoContributionRow)
            .where(RepoContributionRow.author_key == author_key)
            .order_by(RepoContributionRow.repo)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
