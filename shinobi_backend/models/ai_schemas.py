# shinobi_backend/models/ai_schemas.py
# Request/response schemas for AI management and the public user listing

from typing import Optional, List
from datetime import datetime
from pydantic import BaseModel, Field

from shinobi_backend.models.user_model import UserRole, UserStatus
from shinobi_backend.models.jutsu_model import UserJutsuRead


class AiUpdate(BaseModel):
    """Editable AI fields. Pools and stats are re-derived from `level` on save."""
    username: Optional[str] = None
    gender: Optional[str] = None
    avatar: Optional[str] = None
    rank: Optional[str] = None
    level: Optional[int] = Field(default=None, ge=1)
    regeneration: Optional[float] = Field(default=None, ge=0)
    status: Optional[UserStatus] = None
    village_id: Optional[str] = None
    bloodline_id: Optional[str] = None
    jutsus: Optional[List[str]] = None  # jutsu ids


class AiRead(BaseModel):
    user_id: str
    username: str
    gender: str
    avatar: Optional[str] = None
    rank: str
    level: int
    experience: int
    status: UserStatus
    regeneration: float
    max_health: float
    max_stamina: float
    max_chakra: float
    strength: float
    intelligence: float
    willpower: float
    speed: float
    ninjutsu_offence: float
    ninjutsu_defence: float
    genjutsu_offence: float
    genjutsu_defence: float
    taijutsu_offence: float
    taijutsu_defence: float
    bukijutsu_offence: float
    bukijutsu_defence: float
    village_id: Optional[str] = None
    bloodline_id: Optional[str] = None
    jutsus: List[UserJutsuRead] = []

    class Config:
        from_attributes = True


class PublicUserListRead(BaseModel):
    user_id: str
    username: str
    avatar: Optional[str] = None
    rank: str
    level: int
    role: UserRole
    experience: int
    updated_at: datetime
    reputation_points_total: int
    jutsus: Optional[List[UserJutsuRead]] = None  # only filled for AI listings

    class Config:
        from_attributes = True


class PublicUsersPage(BaseModel):
    data: List[PublicUserListRead]
    next_cursor: Optional[int] = None
