# shinobi_backend/core/permissions.py
from shinobi_backend.models.user_model import UserRole

CONTENT_ROLES = {UserRole.ADMIN, UserRole.CONTENT_ADMIN}
REPORT_ROLES = {UserRole.ADMIN, UserRole.MODERATOR}


def can_change_content(role: UserRole) -> bool:
    """Whether a role may create, edit or delete AI records."""
    return role in CONTENT_ROLES


def can_see_reports(role: UserRole) -> bool:
    return role in REPORT_ROLES
