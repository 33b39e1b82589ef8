import os
import tempfile
from datetime import timedelta

# Point the module-level engines at a throwaway file before the package is imported
os.environ.setdefault("DB_PATH", os.path.join(tempfile.gettempdir(), "shinobi_test.db"))

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from shinobi_backend import models  # noqa: F401  (registers every table)
from shinobi_backend.core.time_utils import utcnow
from shinobi_backend.models.user_model import UserData
from shinobi_backend.services.user_service import drain_background_writes


@pytest_asyncio.fixture
async def engine(tmp_path):
    test_engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await drain_background_writes()
    await test_engine.dispose()


@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def make_user(session_maker):
    """Insert a user and return its id. Keyword overrides go straight onto UserData."""
    counter = {"n": 0}

    async def _make_user(**overrides):
        counter["n"] += 1
        now = utcnow()
        fields = {
            "user_id": f"user-{counter['n']}",
            "username": f"ninja_{counter['n']}",
            "approved_tos": True,
            "regeneration": 0,
            "updated_at": now,
            "regen_at": now,
        }
        fields.update(overrides)
        async with session_maker() as session:
            session.add(UserData(**fields))
            await session.commit()
        return fields["user_id"]

    return _make_user


@pytest.fixture
def reload_user(session_maker):
    """Read a user's stored row from a fresh session."""
    async def _reload(user_id):
        await drain_background_writes()
        async with session_maker() as session:
            return await session.get(UserData, user_id)

    return _reload


def seconds_ago(seconds):
    return utcnow() - timedelta(seconds=seconds)
