# shinobi_backend/models/jutsu_model.py
from typing import Optional, List, TYPE_CHECKING
from sqlmodel import SQLModel, Field, Relationship
from pydantic import BaseModel

if TYPE_CHECKING:
    from .user_model import UserData


class Jutsu(SQLModel, table=True):
    id: str = Field(primary_key=True)
    name: str = Field(unique=True)


class UserJutsu(SQLModel, table=True):
    """A jutsu learned by a user (or assigned to an AI)."""
    id: str = Field(primary_key=True)
    user_id: str = Field(foreign_key="userdata.user_id", index=True)
    jutsu_id: str = Field(foreign_key="jutsu.id")
    level: int = 1
    equipped: bool = False

    user: Optional["UserData"] = Relationship(back_populates="jutsus")
    jutsu: Optional["Jutsu"] = Relationship()


class JutsuNameRead(BaseModel):
    name: str

    class Config:
        from_attributes = True


class UserJutsuRead(BaseModel):
    jutsu_id: str
    level: int
    equipped: bool
    jutsu: Optional[JutsuNameRead] = None

    class Config:
        from_attributes = True
