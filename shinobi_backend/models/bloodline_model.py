# shinobi_backend/models/bloodline_model.py
from typing import Optional
from sqlmodel import SQLModel, Field


class Bloodline(SQLModel, table=True):
    """Inherited trait. Adds a flat bonus to the owner's regeneration rate (read-only)."""
    id: str = Field(primary_key=True)
    name: str = Field(unique=True)
    regen_increase: float = Field(default=0, ge=0)
    description: Optional[str] = None


class Village(SQLModel, table=True):
    """A hidden village users may belong to."""
    id: str = Field(primary_key=True)
    name: str = Field(unique=True)
    sector: int = 0
