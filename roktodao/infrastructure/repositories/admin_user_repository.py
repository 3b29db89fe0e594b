"""
SQLAlchemy Implementation of the Admin User Repository.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from roktodao.domain.models.admin_user import AdminUser
from roktodao.domain.repositories.admin_user_repository import AdminUserRepository
from roktodao.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyAdminUserRepository(SQLAlchemyRepository[AdminUser], AdminUserRepository):
    def __init__(self, db: Session):
        super().__init__(db, AdminUser)

    def get_by_email(self, email: str) -> Optional[AdminUser]:
        return (
            self.db.query(AdminUser)
            .filter(func.lower(AdminUser.email) == email.strip().lower())
            .first()
        )

    def mark_logged_in(self, user: AdminUser, at: datetime) -> AdminUser:
        user.last_login_at = at
        self.db.commit()
        self.db.refresh(user)
        return user
