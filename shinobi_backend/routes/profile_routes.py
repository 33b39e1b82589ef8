# profile_routes.py
# API routes for the logged-in user's profile: training, levelling, overview,
# account deletion, AI management and public user lookups.

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from shinobi_backend.core.auth import get_current_user_id
from shinobi_backend.core.database import get_db
from shinobi_backend.core.errors import UserNotFoundError, AiNotFoundError, PreconditionFailedError
from shinobi_backend.models.user_model import (
    ServerResponse, StartTrainingRequest, GetUserResponse, PublicUserRead, UserSearchRead, UsernameRead
)
from shinobi_backend.models.ai_schemas import AiUpdate, AiRead, PublicUsersPage
from shinobi_backend.services import account_service, ai_service, user_directory
from shinobi_backend.services.notification_service import get_user_overview
from shinobi_backend.services.progression_service import level_up
from shinobi_backend.services.training import start_training, stop_training
from shinobi_backend.services.user_service import fetch_attributes

router = APIRouter()


# === TRAINING ===

@router.post("/training/start", response_model=ServerResponse)
async def start_training_route(
    data: StartTrainingRequest,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Start training a stat. Fails softly when out of energy or already training."""
    try:
        return await start_training(db, user_id, data.stat)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/training/stop", response_model=ServerResponse)
async def stop_training_route(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Stop training and collect the stat/experience gained."""
    try:
        return await stop_training(db, user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# === LEVELLING ===

@router.post("/level-up")
async def level_up_route(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        new_level = await level_up(db, user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"level": new_level}


# === OVERVIEW ===

@router.get("/me", response_model=GetUserResponse)
async def get_user_route(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Logged-in user with refreshed pools, navbar notifications and server time."""
    return await get_user_overview(db, user_id)


@router.get("/attributes")
async def get_user_attributes_route(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    attributes = await fetch_attributes(db, user_id)
    return [{"id": a.id, "attribute": a.attribute} for a in attributes]


# === ACCOUNT DELETION ===

@router.post("/deletion/toggle", response_model=ServerResponse)
async def toggle_deletion_route(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await account_service.toggle_deletion_timer(db, user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("/deletion/confirm", response_model=ServerResponse)
async def confirm_deletion_route(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await account_service.confirm_deletion(db, user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PreconditionFailedError as e:
        raise HTTPException(status_code=412, detail=str(e))


# === AI MANAGEMENT ===

@router.post("/ai", response_model=ServerResponse)
async def create_ai_route(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await ai_service.create_ai(db, user_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/ai/{ai_id}", response_model=AiRead)
async def get_ai_route(
    ai_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        ai = await ai_service.get_ai(db, ai_id)
    except AiNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return AiRead.model_validate(ai)


@router.put("/ai/{ai_id}", response_model=ServerResponse)
async def update_ai_route(
    ai_id: str,
    data: AiUpdate,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await ai_service.update_ai(db, user_id, ai_id, data)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/ai/{ai_id}", response_model=ServerResponse)
async def delete_ai_route(
    ai_id: str,
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    try:
        return await ai_service.delete_ai(db, user_id, ai_id)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


# === PUBLIC LOOKUPS ===

@router.get("/username", response_model=Optional[UsernameRead])
async def get_username_route(
    username: str = Query(..., description="Username to check"),
    db: AsyncSession = Depends(get_db),
):
    """Returns the username if taken, null if it is free."""
    taken = await user_directory.get_username(db, username)
    return UsernameRead(username=taken) if taken else None


@router.get("/search", response_model=List[UserSearchRead])
async def search_users_route(
    username: str = Query(...),
    show_yourself: bool = Query(False),
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    users = await user_directory.search_users(db, user_id, username, show_yourself)
    return [UserSearchRead.model_validate(u) for u in users]


@router.get("/public", response_model=PublicUsersPage)
async def get_public_users_route(
    limit: int = Query(..., ge=1, le=100),
    order_by: user_directory.OrderBy = Query(...),
    cursor: Optional[int] = Query(None, ge=0),
    is_ai: int = Query(0, ge=0, le=1),
    username: Optional[str] = Query(
        None, pattern="^[a-zA-Z0-9_]*$",
        description="Must only contain alphanumeric characters and no spaces",
    ),
    db: AsyncSession = Depends(get_db),
):
    """Paginated public user list. Example: /profile/public?limit=20&order_by=Strongest"""
    return await user_directory.get_public_users(
        db, limit=limit, order_by=order_by, cursor=cursor, is_ai=is_ai, username=username
    )


@router.get("/public/{user_id}", response_model=Optional[PublicUserRead])
async def get_public_user_route(user_id: str, db: AsyncSession = Depends(get_db)):
    user = await user_directory.get_public_user(db, user_id)
    return PublicUserRead.model_validate(user) if user else None
