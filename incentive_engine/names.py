"""
User Name Resolution

Maps user ids to display names for labelling results. The roster is handed
in by the caller; nothing here fetches data.
"""

from .models import User


class UserNameResolver:
    """Resolves a user id to a display name."""

    FALLBACK_ID_LENGTH = 8

    def __init__(self, names: dict[str, str] | None = None, current_user: User | None = None):
        self.names = dict(names or {})
        self.current_user = current_user

    def resolve(self, user_id: str) -> str:
        if self.current_user is not None and user_id == self.current_user.id:
            return self.current_user.name

        name = self.names.get(user_id)
        if name:
            return name

        return f"User {str(user_id)[:self.FALLBACK_ID_LENGTH]}"

    __call__ = resolve
