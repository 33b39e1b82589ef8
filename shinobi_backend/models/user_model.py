# shinobi_backend/models/user_model.py
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from enum import Enum
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship

from shinobi_backend.core.time_utils import utcnow

if TYPE_CHECKING:
    from .bloodline_model import Bloodline, Village
    from .jutsu_model import UserJutsu


class UserStatName(str, Enum):
    """The trainable stats. Each value is also the name of its column on UserData."""
    STRENGTH = "strength"
    INTELLIGENCE = "intelligence"
    WILLPOWER = "willpower"
    SPEED = "speed"
    NINJUTSU_OFFENCE = "ninjutsu_offence"
    NINJUTSU_DEFENCE = "ninjutsu_defence"
    GENJUTSU_OFFENCE = "genjutsu_offence"
    GENJUTSU_DEFENCE = "genjutsu_defence"
    TAIJUTSU_OFFENCE = "taijutsu_offence"
    TAIJUTSU_DEFENCE = "taijutsu_defence"
    BUKIJUTSU_OFFENCE = "bukijutsu_offence"
    BUKIJUTSU_DEFENCE = "bukijutsu_defence"


class UserStatus(str, Enum):
    AWAKE = "AWAKE"
    BATTLE = "BATTLE"
    HOSPITALIZED = "HOSPITALIZED"


class UserRole(str, Enum):
    USER = "USER"
    MODERATOR = "MODERATOR"
    CONTENT_ADMIN = "CONTENT_ADMIN"
    ADMIN = "ADMIN"


class UserData(SQLModel, table=True):
    """A player or AI character with its pools, progression and training state."""
    user_id: str = Field(primary_key=True)
    username: str = Field(index=True, unique=True)
    gender: str = "Unknown"
    avatar: Optional[str] = None
    rank: str = "STUDENT"
    role: UserRole = Field(default=UserRole.USER)
    status: UserStatus = Field(default=UserStatus.AWAKE)
    federal_status: str = "NONE"
    sector: int = 0

    village_id: Optional[str] = Field(default=None, foreign_key="village.id")
    village: Optional["Village"] = Relationship()
    bloodline_id: Optional[str] = Field(default=None, foreign_key="bloodline.id")
    bloodline: Optional["Bloodline"] = Relationship()

    # Pools (cur <= max)
    cur_health: float = Field(default=100, ge=0)
    max_health: float = Field(default=100, ge=0)
    cur_stamina: float = Field(default=100, ge=0)
    max_stamina: float = Field(default=100, ge=0)
    cur_chakra: float = Field(default=100, ge=0)
    max_chakra: float = Field(default=100, ge=0)
    cur_energy: float = Field(default=100, ge=0)
    max_energy: float = Field(default=100, ge=0)
    regeneration: float = Field(default=1, ge=0, description="Pool recovery per second")

    # Progression
    level: int = 1
    experience: int = 0

    # Trainable stats
    strength: float = 10
    intelligence: float = 10
    willpower: float = 10
    speed: float = 10
    ninjutsu_offence: float = 10
    ninjutsu_defence: float = 10
    genjutsu_offence: float = 10
    genjutsu_defence: float = 10
    taijutsu_offence: float = 10
    taijutsu_defence: float = 10
    bukijutsu_offence: float = 10
    bukijutsu_defence: float = 10

    # Training session (both set or both null)
    currently_training: Optional[UserStatName] = Field(default=None)
    training_started_at: Optional[datetime] = Field(default=None, sa_type=DateTime)

    # Timestamps
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    regen_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
    deletion_at: Optional[datetime] = Field(default=None, sa_type=DateTime)

    # Account flags
    is_ai: bool = False
    is_banned: bool = False
    approved_tos: bool = False
    inbox_news: int = 0
    reputation_points: int = 0
    reputation_points_total: int = 0
    popularity_points: int = 0

    jutsus: List["UserJutsu"] = Relationship(back_populates="user")


# -------------------------------
# Pydantic schemas for API responses
# -------------------------------
from pydantic import BaseModel


class ServerResponse(BaseModel):
    """Uniform result of every mutation; callers branch on `success`."""
    success: bool
    message: str


class StartTrainingRequest(BaseModel):
    stat: UserStatName


class BloodlineRead(BaseModel):
    id: str
    name: str
    regen_increase: float

    class Config:
        from_attributes = True


class VillageRead(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True


class UserRead(BaseModel):
    """Full view of the logged in user, pools already refreshed."""
    user_id: str
    username: str
    gender: str
    avatar: Optional[str] = None
    rank: str
    role: UserRole
    status: UserStatus
    level: int
    experience: int
    cur_health: float
    max_health: float
    cur_stamina: float
    max_stamina: float
    cur_chakra: float
    max_chakra: float
    cur_energy: float
    max_energy: float
    regeneration: float
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
    currently_training: Optional[UserStatName] = None
    training_started_at: Optional[datetime] = None
    updated_at: datetime
    regen_at: datetime
    deletion_at: Optional[datetime] = None
    is_ai: bool
    is_banned: bool
    inbox_news: int
    bloodline: Optional[BloodlineRead] = None
    village: Optional[VillageRead] = None

    class Config:
        from_attributes = True


class NavBarLink(BaseModel):
    href: str
    name: str
    color: str


class GetUserResponse(BaseModel):
    user_data: Optional[UserRead] = None
    notifications: List[NavBarLink] = []
    server_time: int  # epoch milliseconds


class PublicUserRead(BaseModel):
    user_id: str
    username: str
    gender: str
    status: UserStatus
    rank: str
    role: UserRole
    level: int
    experience: int
    cur_health: float
    max_health: float
    cur_stamina: float
    max_stamina: float
    cur_chakra: float
    max_chakra: float
    reputation_points: int
    popularity_points: int
    avatar: Optional[str] = None
    is_ai: bool
    federal_status: str
    village: Optional[VillageRead] = None
    bloodline: Optional[BloodlineRead] = None

    class Config:
        from_attributes = True


class UserSearchRead(BaseModel):
    user_id: str
    username: str
    avatar: Optional[str] = None
    rank: str
    level: int
    role: UserRole
    federal_status: str

    class Config:
        from_attributes = True


class UsernameRead(BaseModel):
    username: str
