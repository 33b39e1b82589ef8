# shinobi_backend/services/account_service.py
# Self-service account deletion: a timer the user can toggle, then a confirmation.

import logging
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from shinobi_backend.core.config import DELETION_DELAY_SECONDS, TEST_MODE
from shinobi_backend.core.errors import PreconditionFailedError
from shinobi_backend.core.time_utils import utcnow
from shinobi_backend.models.user_model import UserData, ServerResponse
from shinobi_backend.services.user_service import fetch_user, update_if, delete_user

logger = logging.getLogger(__name__)


async def toggle_deletion_timer(db: AsyncSession, user_id: str) -> ServerResponse:
    """Start the deletion countdown, or cancel it if one is running."""
    user = await fetch_user(db, user_id)

    if user.deletion_at:
        affected = await update_if(db, user_id, UserData.deletion_at == user.deletion_at, deletion_at=None)
        message = "Deletion timer cancelled"
    else:
        delay = 0 if TEST_MODE else DELETION_DELAY_SECONDS
        affected = await update_if(
            db, user_id, UserData.deletion_at.is_(None),
            deletion_at=utcnow() + timedelta(seconds=delay),
        )
        message = "Deletion timer started"

    if affected == 0:
        return ServerResponse(success=False, message="Deletion timer changed by another request")
    return ServerResponse(success=True, message=message)


async def confirm_deletion(db: AsyncSession, user_id: str) -> ServerResponse:
    user = await fetch_user(db, user_id)
    if not user.deletion_at or user.deletion_at > utcnow():
        raise PreconditionFailedError("Deletion timer not passed yet")

    await delete_user(db, user_id)
    logger.info("👋 User %s confirmed account deletion", user_id)
    return ServerResponse(success=True, message="Account deleted")
