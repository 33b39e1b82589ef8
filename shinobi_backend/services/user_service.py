# shinobi_backend/services/user_service.py
# User state store: lookups, conditional (compare-and-swap) updates, regeneration
# refresh on read and transactional deletion.

import asyncio
import logging
from datetime import datetime
from typing import List, Optional, Set

from sqlalchemy import case, delete, or_, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from shinobi_backend.core.config import REGEN_REFRESH_SECONDS
from shinobi_backend.core.errors import UserNotFoundError
from shinobi_backend.core.regeneration import regenerate_pools
from shinobi_backend.core.time_utils import utcnow, seconds_passed
from shinobi_backend.models.user_model import UserData
from shinobi_backend.models.jutsu_model import UserJutsu
from shinobi_backend.models.social_model import (
    UserAttribute, HistoricalAvatar, ForumPost, ConversationComment, User2Conversation
)
from shinobi_backend.models.report_model import UserReportComment, ReportLog

logger = logging.getLogger(__name__)

# Tables whose rows belong to a single user through `user_id`
USER_OWNED_TABLES = [
    UserAttribute,
    HistoricalAvatar,
    UserReportComment,
    ForumPost,
    ConversationComment,
    User2Conversation,
    UserJutsu,
]

# In-flight regeneration write-backs. Strong references keep the tasks alive until done.
_background_writes: Set[asyncio.Task] = set()


# === LOOKUPS ===

async def fetch_user(db: AsyncSession, user_id: str) -> UserData:
    """Fetch a user or raise UserNotFoundError."""
    user = await db.get(UserData, user_id, populate_existing=True)
    if not user:
        raise UserNotFoundError(user_id)
    return user


async def fetch_attributes(db: AsyncSession, user_id: str) -> List[UserAttribute]:
    result = await db.execute(select(UserAttribute).where(UserAttribute.user_id == user_id))
    return list(result.scalars().all())


# === CONDITIONAL UPDATES ===

async def update_if(db: AsyncSession, user_id: str, *conditions, **values) -> int:
    """
    Compare-and-swap on a single user row.
    Applies `values` only if the row still matches every condition and commits.
    Returns the affected row count; 0 means the precondition failed (a lost race).
    """
    stmt = (
        update(UserData)
        .where(UserData.user_id == user_id, *conditions)
        .values(**values)
        .execution_options(synchronize_session=False)
    )
    result = await db.execute(stmt)
    await db.commit()
    return result.rowcount


# === REGENERATION REFRESH ===

def _capped(column, capacity, amount: float):
    """SQL expression for min(column + amount, capacity)."""
    return case((column + amount > capacity, capacity), else_=column + amount)


async def _persist_regeneration(
    bind,
    user_id: str,
    amount: float,
    include_energy: bool,
    previous_regen_at: datetime,
    now: datetime,
) -> None:
    """
    Write regenerated pools back as deltas on top of whatever is stored now.
    Skipped when another refresh already moved regen_at (no double counting).
    Energy only regenerates while the stored row is idle.
    """
    values = {
        "cur_health": _capped(UserData.cur_health, UserData.max_health, amount),
        "cur_stamina": _capped(UserData.cur_stamina, UserData.max_stamina, amount),
        "cur_chakra": _capped(UserData.cur_chakra, UserData.max_chakra, amount),
        "updated_at": now,
        "regen_at": now,
    }
    if include_energy:
        values["cur_energy"] = case(
            (UserData.currently_training.is_(None), _capped(UserData.cur_energy, UserData.max_energy, amount)),
            else_=UserData.cur_energy,
        )

    try:
        async with AsyncSession(bind, expire_on_commit=False) as session:
            affected = await update_if(
                session, user_id, UserData.regen_at == previous_regen_at, **values
            )
        if affected == 0:
            logger.debug("Regeneration write for %s skipped, row refreshed concurrently", user_id)
    except Exception:
        # Caller already returned the refreshed values; staleness is accepted
        logger.exception("⚠️ Regeneration write-back failed for user %s", user_id)


def _schedule_regeneration_write(bind, user_id: str, amount: float, include_energy: bool,
                                 previous_regen_at: datetime, now: datetime) -> asyncio.Task:
    task = asyncio.create_task(
        _persist_regeneration(bind, user_id, amount, include_energy, previous_regen_at, now)
    )
    _background_writes.add(task)
    task.add_done_callback(_background_writes.discard)
    return task


async def drain_background_writes() -> None:
    """Wait for every pending regeneration write-back (shutdown and tests)."""
    while _background_writes:
        await asyncio.gather(*list(_background_writes), return_exceptions=True)


async def fetch_regenerated_user(
    db: AsyncSession, user_id: str, force_regen: bool = False, wait_for_write: bool = False
) -> Optional[UserData]:
    """
    Fetch user with bloodline & village relations. Occasionally refreshes the pools with
    regeneration, or always when force_regen=True.

    The returned object is detached from the session: the bloodline bonus on `regeneration`
    and the refreshed pools live in memory only. Persisting happens in a background task
    that the caller never waits for, unless wait_for_write=True.
    """
    result = await db.execute(
        select(UserData)
        .where(UserData.user_id == user_id)
        .options(selectinload(UserData.bloodline), selectinload(UserData.village))
        .execution_options(populate_existing=True)
    )
    user = result.scalars().first()
    if not user:
        return None
    db.expunge(user)

    # Bloodline bonus is applied on read only, never written back onto the base rate
    if user.bloodline and user.bloodline.regen_increase:
        user.regeneration = user.regeneration + user.bloodline.regen_increase

    now = utcnow()
    if seconds_passed(user.updated_at, now) > REGEN_REFRESH_SECONDS or force_regen:
        elapsed = seconds_passed(user.regen_at, now)
        include_energy = user.currently_training is None
        previous_regen_at = user.regen_at

        regenerate_pools(user, user.regeneration, elapsed, include_energy=include_energy)
        user.updated_at = now
        user.regen_at = now

        amount = user.regeneration * elapsed
        if wait_for_write:
            await _persist_regeneration(db.bind, user_id, amount, include_energy, previous_regen_at, now)
        else:
            _schedule_regeneration_write(db.bind, user_id, amount, include_energy, previous_regen_at, now)

    return user


# === DELETION ===

async def delete_user(db: AsyncSession, user_id: str) -> None:
    """
    Remove a user and every dependent row in one transaction.
    Either all rows go or none do.
    """
    try:
        for model in USER_OWNED_TABLES:
            await db.execute(delete(model).where(model.user_id == user_id))
        await db.execute(
            delete(ReportLog).where(
                or_(ReportLog.target_user_id == user_id, ReportLog.staff_user_id == user_id)
            )
        )
        await db.execute(delete(UserData).where(UserData.user_id == user_id))
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info("🗑️ User %s and all dependent records deleted", user_id)
