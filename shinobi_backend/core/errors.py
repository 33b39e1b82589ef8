# shinobi_backend/core/errors.py
# Domain exceptions. Only raised for truly exceptional conditions; business-rule and
# race failures are returned as ServerResponse(success=False, ...) instead.


class ProfileError(Exception):
    """Base class for profile service errors."""


class UserNotFoundError(ProfileError):
    def __init__(self, user_id: str):
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class AiNotFoundError(ProfileError):
    def __init__(self, user_id: str):
        super().__init__(f"AI not found: {user_id}")
        self.user_id = user_id


class PreconditionFailedError(ProfileError):
    """A required precondition (e.g. an expired deletion timer) does not hold."""
