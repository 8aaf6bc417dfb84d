"""SymbolClientDAO — symbol_clients table operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from authorship.dao.base import RepoScopedDAO
from authorship.models.symbol_client import SymbolClientRow


class SymbolClientDAO(RepoScopedDAO[SymbolClientRow]):
    model = SymbolClientRow

    async def list_by_symbol(
        self,
        session: AsyncSession,
        symbol_repo: str,
        path: str,
        name: str,
    ) -> list[SymbolClientRow]:
        """Users of one symbol across every analysed repository, most uses first."""
        stmt = (
            select(SymbolClientRow)
            .where(SymbolClientRow.symbol_repo == symbol_repo)
            .where(SymbolClientRow.symbol_path == path)
            .where(SymbolClientRow.symbol_name == name)
            .order_by(SymbolClientRow.use_count.desc(), SymbolClientRow.author_email)
        )
        result = await session.execute(stmt)
        return list(result.scalars().all())
