"""
Delivery Log Repository Interface.
Append-only access to NotificationAttempt records.
"""

from typing import List

from roktodao.domain.repositories.base import BaseRepository
from roktodao.domain.models.notification_attempt import NotificationAttempt


class NotificationAttemptRepository(BaseRepository[NotificationAttempt]):
    """Interface for the SMS delivery log."""

    def list_recent(self, skip: int = 0, limit: int = 50) -> List[NotificationAttempt]:
        """List attempts, newest first."""
        ...
