"""
SQLAlchemy Implementation of the Delivery Log Repository.
"""

from typing import List

from sqlalchemy.orm import Session

from roktodao.domain.models.notification_attempt import NotificationAttempt
from roktodao.domain.repositories.notification_repository import NotificationAttemptRepository
from roktodao.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyNotificationAttemptRepository(
    SQLAlchemyRepository[NotificationAttempt], NotificationAttemptRepository
):
    def __init__(self, db: Session):
        super().__init__(db, NotificationAttempt)

    def list_recent(self, skip: int = 0, limit: int = 50) -> List[NotificationAttempt]:
        return (
            self.db.query(NotificationAttempt)
            .order_by(NotificationAttempt.created_at.desc(), NotificationAttempt.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )
