import os
import logging
from sqlmodel import SQLModel, Session
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy import create_engine as create_sync_engine

from shinobi_backend.core.config import DATABASE_URL, SYNC_DATABASE_URL, DB_PATH, SQL_ECHO

logger = logging.getLogger(__name__)

# Ensure DB file exists (prevents async context errors)
if DATABASE_URL.startswith("sqlite") and not os.path.exists(DB_PATH):
    logger.info("📂 Database file not found. Creating a new one at %s", DB_PATH)
    open(DB_PATH, 'a').close()

# --- Engines ---
engine = create_async_engine(DATABASE_URL, echo=SQL_ECHO, future=True)        # Async
sync_engine = create_sync_engine(SYNC_DATABASE_URL, echo=SQL_ECHO, future=True)  # Sync

# --- Async session maker ---
async_session_maker = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


# --- Async DB session (used in routes) ---
async def get_db():
    async with async_session_maker() as session:
        yield session


# --- Initialize DB tables ---
async def init_db(bind=engine):
    """Create tables asynchronously if they don't exist."""
    # Import models so every table is registered on the metadata
    from shinobi_backend import models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


# --- Sync session for seeding/scripts ---
def get_sync_session():
    return Session(sync_engine)
