"""Shared fixtures for authorship tests.

Database tests run against a throwaway SQLite file (``sqlite+aiosqlite``)
per test, so no external service is needed. The production schema targets
PostgreSQL via asyncpg; both go through the same SQLAlchemy models.
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine

from authorship.core.database import create_all, make_session_factory


@pytest_asyncio.fixture
async def engine(tmp_path):
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'authorship.db'}")
    await create_all(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)
