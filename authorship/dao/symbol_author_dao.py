"""SymbolAuthorDAO — symbol_authors table operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from authorship.dao.base import RepoScopedDAO
from authorship.models.symbol_author import SymbolAuthorRow


class SymbolAuthorDAO(RepoScopedDAO[SymbolAuthorRow]):
    model = SymbolAuthorRow

    async def list_by_symbol(
        self,
        session: AsyncSession,
        repo: str,
        path: str,
        name: str,
    ) -> list[SymbolAuthorRow]:
        """Authors of one symbol, largest share first."""
        stmt = (
            select(SymbolAuthorRow)
            .where(SymbolAuthorRow.repo == repo)
            .where(SymbolAuthorRow.symbol_path == path)
            .where(SymbolAuthorRow.symbol_name == name)
            .order_by(SymbolAuthorRow.chars.desc(), SymbolAuthorRow.author_email)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())

    async def list_inconsistent(self, session: AsyncSession, repo: str) -> list[SymbolAuthorRow]:
        """Rows flagged for review because their proportions did not add up."""
        stmt = (
            select(SymbolAuthorRow)
            .where(SymbolAuthorRow.repo == repo)
            .where(SymbolAuthorRow.inconsistent.is_(True))
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
