"""
Admin User Repository Interface.
"""

from datetime import datetime
from typing import Optional

from roktodao.domain.repositories.base import BaseRepository
from roktodao.domain.models.admin_user import AdminUser


class AdminUserRepository(BaseRepository[AdminUser]):
    """Interface for back-office accounts."""

    def get_by_email(self, email: str) -> Optional[AdminUser]:
        """Case-insensitive lookup by login email."""
        ...

    def mark_logged_in(self, user: AdminUser, at: datetime) -> AdminUser:
        ...
