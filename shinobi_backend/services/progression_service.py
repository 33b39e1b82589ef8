# shinobi_backend/services/progression_service.py
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from shinobi_backend.core.progression import calc_level_requirements, calc_hp, calc_sp, calc_cp
from shinobi_backend.models.user_model import UserData
from shinobi_backend.services.user_service import fetch_user, update_if

logger = logging.getLogger(__name__)


async def level_up(db: AsyncSession, user_id: str) -> int:
    """
    Advance the user by exactly one level if they have the experience for it.
    Returns the new level, or the unchanged level when there is not enough experience
    or another request levelled the user first.
    """
    user = await fetch_user(db, user_id)
    current_level = user.level

    exp_required = calc_level_requirements(current_level) - user.experience
    if exp_required > 0:
        logger.debug("User %s needs %s more experience for level %s", user_id, exp_required, current_level + 1)
        return current_level

    new_level = current_level + 1
    affected = await update_if(
        db,
        user_id,
        UserData.level == current_level,
        level=new_level,
        max_health=calc_hp(new_level),
        max_stamina=calc_sp(new_level),
        max_chakra=calc_cp(new_level),
    )
    if affected == 0:
        return current_level

    logger.info("⬆️ User %s reached level %s", user_id, new_level)
    return new_level
