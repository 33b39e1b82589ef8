# shinobi_backend/models/report_model.py
from typing import Optional, List, Any
from datetime import datetime
from enum import Enum
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, JSON, Column

from shinobi_backend.core.time_utils import utcnow


class ReportStatus(str, Enum):
    UNVIEWED = "UNVIEWED"
    REPORT_CLEARED = "REPORT_CLEARED"
    BAN_ACTIVATED = "BAN_ACTIVATED"
    BAN_ESCALATED = "BAN_ESCALATED"


# Statuses that still need a moderator's attention
OPEN_REPORT_STATUSES = [ReportStatus.UNVIEWED, ReportStatus.BAN_ESCALATED]


class UserReport(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    reporter_user_id: Optional[str] = Field(default=None, index=True)
    reported_user_id: Optional[str] = Field(default=None, index=True)
    reason: str
    status: ReportStatus = Field(default=ReportStatus.UNVIEWED)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class UserReportComment(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(foreign_key="userdata.user_id", index=True)
    report_id: int = Field(foreign_key="userreport.id")
    content: str
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class ReportLog(SQLModel, table=True):
    """Moderation history. References a user either as target or as acting staff."""
    id: Optional[int] = Field(default=None, primary_key=True)
    target_user_id: Optional[str] = Field(default=None, index=True)
    staff_user_id: Optional[str] = Field(default=None, index=True)
    action: str
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)


class ActionLog(SQLModel, table=True):
    """Audit trail of content changes made by staff."""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(index=True)  # actor
    table_name: str
    changes: List[Any] = Field(default_factory=list, sa_column=Column(JSON))
    related_id: Optional[str] = None
    related_msg: Optional[str] = None
    related_image: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)
