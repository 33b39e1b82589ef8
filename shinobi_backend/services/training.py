# shinobi_backend/services/training.py

"""
Training accrual engine.

A user is either idle (currently_training is None) or training one stat since
training_started_at. Stopping converts elapsed time into energy spent, and the same
integral amount is added to experience and to the trained stat.

Both transitions commit through a conditional update on the observed pre-state, so two
concurrent requests can never both start, or both cash in, the same session.
"""

import logging
import math

from sqlalchemy.ext.asyncio import AsyncSession

from shinobi_backend.core.config import ENERGY_SPENT_PER_SECOND
from shinobi_backend.core.errors import UserNotFoundError
from shinobi_backend.core.time_utils import utcnow, seconds_passed
from shinobi_backend.models.user_model import UserData, UserStatName, UserStatus, ServerResponse
from shinobi_backend.services.user_service import fetch_regenerated_user, update_if

logger = logging.getLogger(__name__)

# Trained stat -> the single column a stopped session increments
STAT_COLUMNS = {stat: getattr(UserData, stat.value) for stat in UserStatName}


def calculate_training_amount(seconds_trained: float, cur_energy: float,
                              energy_per_second: float = ENERGY_SPENT_PER_SECOND) -> int:
    """
    Whole points gained for a session: floor(rate × seconds), capped at remaining energy.
    Fractions are dropped, not carried over.
    """
    earned = math.floor(energy_per_second * max(seconds_trained, 0.0))
    return int(max(min(earned, math.floor(cur_energy)), 0))


async def start_training(db: AsyncSession, user_id: str, stat: UserStatName) -> ServerResponse:
    # Idle energy must be stored before the row stops counting as idle
    user = await fetch_regenerated_user(db, user_id, force_regen=True, wait_for_write=True)
    if not user:
        raise UserNotFoundError(user_id)

    if user.cur_energy < 1:
        return ServerResponse(success=False, message="Not enough energy")

    affected = await update_if(
        db,
        user_id,
        UserData.currently_training.is_(None),
        training_started_at=utcnow(),
        currently_training=stat,
    )
    if affected == 0:
        return ServerResponse(success=False, message="You are already training")

    logger.info("🏋️ User %s started training %s", user_id, stat.value)
    return ServerResponse(success=True, message="Started training")


async def stop_training(db: AsyncSession, user_id: str) -> ServerResponse:
    user = await fetch_regenerated_user(db, user_id, force_regen=True)
    if not user:
        raise UserNotFoundError(user_id)

    if user.status == UserStatus.BATTLE:
        return ServerResponse(success=False, message="You cannot stop training while in battle")
    if not user.training_started_at or not user.currently_training:
        return ServerResponse(success=False, message="You are not currently training anything")

    stat = user.currently_training
    amount = calculate_training_amount(seconds_passed(user.training_started_at), user.cur_energy)
    column = STAT_COLUMNS[stat]

    # Precondition: still training the same stat, and the energy being spent is still there
    affected = await update_if(
        db,
        user_id,
        UserData.currently_training == stat,
        UserData.cur_energy >= amount,
        training_started_at=None,
        currently_training=None,
        cur_energy=UserData.cur_energy - amount,
        experience=UserData.experience + amount,
        **{column.key: column + amount},
    )
    if affected == 0:
        return ServerResponse(success=False, message="You are not training")

    logger.info("📈 User %s gained %s %s from training", user_id, amount, stat.value)
    return ServerResponse(success=True, message=f"You gained {amount} {stat.value}")
