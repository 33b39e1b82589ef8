# shinobi_backend/models/__init__.py
# Centralized imports for all database models and schemas

# Users
from .user_model import (
    UserData, UserStatName, UserStatus, UserRole, ServerResponse, StartTrainingRequest,
    UserRead, BloodlineRead, VillageRead, NavBarLink, GetUserResponse,
    PublicUserRead, UserSearchRead, UsernameRead
)

# Bloodlines and villages
from .bloodline_model import Bloodline, Village

# Jutsus
from .jutsu_model import Jutsu, UserJutsu, UserJutsuRead, JutsuNameRead

# Per-user social records
from .social_model import (
    UserAttribute, HistoricalAvatar, ForumPost, ConversationComment, User2Conversation
)

# Reports and audit
from .report_model import (
    UserReport, UserReportComment, ReportLog, ActionLog, ReportStatus, OPEN_REPORT_STATUSES
)

# AI management schemas
from .ai_schemas import AiUpdate, AiRead, PublicUsersPage, PublicUserListRead
