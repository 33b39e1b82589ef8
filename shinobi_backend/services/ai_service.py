# shinobi_backend/services/ai_service.py
# Content-staff management of AI (non-player) characters.

import logging
import uuid

from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from shinobi_backend.core.config import DEFAULT_AVATAR, AI_DEFAULT_LEVEL
from shinobi_backend.core.errors import AiNotFoundError
from shinobi_backend.core.permissions import can_change_content
from shinobi_backend.core.progression import scale_user_stats
from shinobi_backend.models.user_model import UserData, ServerResponse
from shinobi_backend.models.jutsu_model import Jutsu, UserJutsu
from shinobi_backend.models.report_model import ActionLog
from shinobi_backend.models.ai_schemas import AiUpdate
from shinobi_backend.services.diff_service import human_diff
from shinobi_backend.services.discord_service import call_discord
from shinobi_backend.services.user_service import fetch_user, delete_user

logger = logging.getLogger(__name__)

# Bookkeeping columns that never belong in an audit diff
DIFF_IGNORED_FIELDS = ["updated_at", "regen_at"]


async def _load_ai(db: AsyncSession, ai_id: str):
    result = await db.execute(
        select(UserData)
        .where(UserData.user_id == ai_id, UserData.is_ai == True)
        .options(selectinload(UserData.jutsus).selectinload(UserJutsu.jutsu))
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def get_ai(db: AsyncSession, ai_id: str) -> UserData:
    ai = await _load_ai(db, ai_id)
    if not ai:
        raise AiNotFoundError(ai_id)
    return ai


async def create_ai(db: AsyncSession, actor_id: str) -> ServerResponse:
    actor = await fetch_user(db, actor_id)
    if not can_change_content(actor.role):
        return ServerResponse(success=False, message="Not allowed to create AI")

    ai_id = uuid.uuid4().hex
    ai = UserData(
        user_id=ai_id,
        username=f"New AI {ai_id[:8]}",
        gender="Unknown",
        avatar=DEFAULT_AVATAR,
        village_id=None,
        approved_tos=True,
        sector=0,
        level=AI_DEFAULT_LEVEL,
        is_ai=True,
    )
    scale_user_stats(ai)
    db.add(ai)
    await db.commit()

    logger.info("🤖 AI %s created by %s", ai_id, actor_id)
    return ServerResponse(success=True, message=ai_id)


async def delete_ai(db: AsyncSession, actor_id: str, ai_id: str) -> ServerResponse:
    actor = await fetch_user(db, actor_id)
    ai = await fetch_user(db, ai_id)
    if not (ai.is_ai and can_change_content(actor.role)):
        return ServerResponse(success=False, message="Not allowed to delete AI")

    await delete_user(db, ai.user_id)
    return ServerResponse(success=True, message="AI deleted")


async def _jutsu_changes(db: AsyncSession, old_ids, new_ids):
    """Diff lines for a jutsu list change, using names instead of ids."""
    result = await db.execute(select(Jutsu).where(Jutsu.id.in_(set(old_ids) | set(new_ids))))
    names = {j.id: j.name for j in result.scalars().all()}
    before = {"jutsus": [names.get(i, i) for i in old_ids]}
    after = {"jutsus": [names.get(i, i) for i in new_ids]}
    return human_diff(before, after, object_name="jutsu")


async def update_ai(db: AsyncSession, actor_id: str, ai_id: str, data: AiUpdate) -> ServerResponse:
    """
    Apply staff edits to an AI, re-derive its level-based pools and stats, replace its
    jutsus if they changed, and record the change in the action log and on Discord.
    """
    actor = await fetch_user(db, actor_id)
    ai = await _load_ai(db, ai_id)
    if not (ai and can_change_content(actor.role)):
        return ServerResponse(success=False, message="Not allowed to edit AI")

    # Jutsus: None leaves them untouched
    old_jutsus = sorted(j.jutsu_id for j in ai.jutsus)
    new_jutsus = sorted(data.jutsus) if data.jutsus is not None else old_jutsus
    jutsus_changed = old_jutsus != new_jutsus
    jutsu_changes = await _jutsu_changes(db, old_jutsus, new_jutsus) if jutsus_changed else []

    # Snapshot, apply edits, rescale from level
    before = ai.model_dump()
    old_username, old_avatar = ai.username, ai.avatar
    for field, value in data.model_dump(exclude_unset=True, exclude={"jutsus"}).items():
        setattr(ai, field, value)
    scale_user_stats(ai)
    after = ai.model_dump()

    diff = human_diff(before, after, object_name="user", ignore=DIFF_IGNORED_FIELDS) + jutsu_changes

    if jutsus_changed:
        await db.execute(
            delete(UserJutsu)
            .where(UserJutsu.user_id == ai.user_id)
            .execution_options(synchronize_session=False)
        )
        for jutsu_id in new_jutsus:
            db.add(UserJutsu(
                id=uuid.uuid4().hex,
                user_id=ai.user_id,
                jutsu_id=jutsu_id,
                level=ai.level,
                equipped=True,
            ))

    db.add(ai)
    db.add(ActionLog(
        user_id=actor_id,
        table_name="ai",
        changes=diff,
        related_id=ai.user_id,
        related_msg=f"Update: {old_username}",
        related_image=old_avatar,
    ))
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        logger.warning("⚠️ AI %s update rejected, username %r already taken", ai_id, data.username)
        return ServerResponse(success=False, message="Username already taken")
    logger.info("🤖 AI %s updated by %s (%s changes)", ai_id, actor_id, len(diff))

    # Audit side channel, the data is already committed
    await call_discord(actor.username, old_username, diff, old_avatar)

    return ServerResponse(success=True, message=f"Data updated: {'. '.join(diff)}")
