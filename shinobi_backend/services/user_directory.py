# shinobi_backend/services/user_directory.py
# Read-only lookups of other users: username checks, search and the public listing.

from typing import List, Literal, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from shinobi_backend.models.user_model import UserData, UserRole
from shinobi_backend.models.jutsu_model import UserJutsu, UserJutsuRead
from shinobi_backend.models.ai_schemas import PublicUsersPage, PublicUserListRead

SEARCH_LIMIT = 5

OrderBy = Literal["Online", "Strongest", "Weakest", "Staff"]


async def get_username(db: AsyncSession, username: str) -> Optional[str]:
    """Return the username if it is taken, otherwise None."""
    result = await db.execute(select(UserData.username).where(UserData.username == username.strip()))
    return result.scalars().first()


async def search_users(db: AsyncSession, caller_id: str, username: str, show_yourself: bool) -> List[UserData]:
    """Up to five users whose name contains `username`."""
    conditions = [
        UserData.username.contains(username.strip()),
        UserData.approved_tos == True,
    ]
    if not show_yourself:
        conditions.append(UserData.user_id != caller_id)

    result = await db.execute(select(UserData).where(*conditions).limit(SEARCH_LIMIT))
    return list(result.scalars().all())


async def get_public_user(db: AsyncSession, user_id: str) -> Optional[UserData]:
    result = await db.execute(
        select(UserData)
        .where(UserData.user_id == user_id)
        .options(selectinload(UserData.village), selectinload(UserData.bloodline))
    )
    return result.scalars().first()


def _ordering(order_by: str):
    if order_by == "Online":
        return [UserData.updated_at.desc()]
    if order_by == "Strongest":
        return [UserData.level.desc(), UserData.experience.desc()]
    if order_by == "Weakest":
        return [UserData.level.asc(), UserData.experience.asc()]
    if order_by == "Staff":
        return [UserData.role.desc()]
    raise ValueError(f"Unknown ordering '{order_by}'")


async def get_public_users(
    db: AsyncSession,
    limit: int,
    order_by: OrderBy,
    cursor: Optional[int] = None,
    is_ai: int = 0,
    username: Optional[str] = None,
) -> PublicUsersPage:
    """
    One page of the public user list. `cursor` is a page number; the returned
    next_cursor is None once a page comes back short.
    """
    current_cursor = cursor or 0
    skip = current_cursor * limit

    conditions = []
    if username is not None:
        conditions.append(UserData.username.contains(username))
    if order_by == "Staff":
        conditions.append(UserData.role != UserRole.USER)
    if is_ai == 1:
        conditions.append(UserData.is_ai == True)
    else:
        conditions.append(UserData.approved_tos == True)

    stmt = select(UserData).where(*conditions).order_by(*_ordering(order_by)).offset(skip).limit(limit)
    if is_ai == 1:
        stmt = stmt.options(selectinload(UserData.jutsus).selectinload(UserJutsu.jutsu))

    result = await db.execute(stmt)
    users = result.scalars().all()

    data = [
        PublicUserListRead(
            user_id=u.user_id,
            username=u.username,
            avatar=u.avatar,
            rank=u.rank,
            level=u.level,
            role=u.role,
            experience=u.experience,
            updated_at=u.updated_at,
            reputation_points_total=u.reputation_points_total,
            jutsus=[UserJutsuRead.model_validate(j) for j in u.jutsus] if is_ai == 1 else None,
        )
        for u in users
    ]
    next_cursor = None if len(users) < limit else current_cursor + 1
    return PublicUsersPage(data=data, next_cursor=next_cursor)
