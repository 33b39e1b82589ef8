# shinobi_backend/services/notification_service.py
# Builds the logged-in user's overview: refreshed record plus navbar notifications.

import time
from typing import List

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from shinobi_backend.core.permissions import can_see_reports
from shinobi_backend.models.user_model import (
    UserData, UserStatus, NavBarLink, GetUserResponse, UserRead
)
from shinobi_backend.models.report_model import UserReport, OPEN_REPORT_STATUSES
from shinobi_backend.services.user_service import fetch_regenerated_user


async def count_open_reports(db: AsyncSession) -> int:
    result = await db.execute(
        select(func.count()).select_from(UserReport).where(UserReport.status.in_(OPEN_REPORT_STATUSES))
    )
    return result.scalar_one() or 0


async def build_notifications(db: AsyncSession, user: UserData) -> List[NavBarLink]:
    notifications = []

    # Staff: reports waiting for a decision
    if can_see_reports(user.role):
        open_reports = await count_open_reports(db)
        if open_reports > 0:
            notifications.append(NavBarLink(href="/reports", name=f"{open_reports} waiting!", color="blue"))

    if user.is_banned:
        notifications.append(NavBarLink(href="/reports", name="You are banned!", color="red"))

    if user.deletion_at:
        notifications.append(NavBarLink(href="/profile", name="Being deleted", color="red"))

    if user.status == UserStatus.BATTLE:
        notifications.append(NavBarLink(href="/combat", name="In combat", color="red"))

    if user.status == UserStatus.HOSPITALIZED:
        notifications.append(NavBarLink(href="/hospital", name="In hospital", color="red"))

    if user.inbox_news > 0:
        notifications.append(NavBarLink(href="/inbox", name=f"{user.inbox_news} new messages", color="green"))

    return notifications


async def get_user_overview(db: AsyncSession, user_id: str) -> GetUserResponse:
    """Everything the client needs on load. A missing user yields an empty overview."""
    user = await fetch_regenerated_user(db, user_id)
    notifications = await build_notifications(db, user) if user else []
    return GetUserResponse(
        user_data=UserRead.model_validate(user) if user else None,
        notifications=notifications,
        server_time=int(time.time() * 1000),
    )
