# shinobi_backend/models/social_model.py
# Per-user records owned by a UserData row. All of them are removed with the user.

from typing import Optional
from datetime import datetime
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field

from shinobi_backend.core.time_utils import utcnow


class UserAttribute(SQLModel, table=True):
    """Cosmetic attribute picked at character creation (hair colour, eyes, ...)."""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="userdata.user_id", index=True)
    attribute: str


class HistoricalAvatar(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="userdata.user_id", index=True)
    avatar: str
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class ForumPost(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="userdata.user_id", index=True)
    thread_id: int
    content: str
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class ConversationComment(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="userdata.user_id", index=True)
    conversation_id: int
    content: str
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class User2Conversation(SQLModel, table=True):
    """Membership of a user in a conversation."""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="userdata.user_id", index=True)
    conversation_id: int
