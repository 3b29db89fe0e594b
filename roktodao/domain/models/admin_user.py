"""Back-office accounts — maps to the 'admin_users' table."""

import enum

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String
from sqlalchemy.sql import func

from roktodao.infrastructure.database import Base


class AdminRole(str, enum.Enum):
    ADMIN = "admin"
    MODERATOR = "moderator"


# Roles allowed to read the SMS delivery log
SMS_LOG_VIEWERS = frozenset({AdminRole.ADMIN})


class AdminUser(Base):
    __tablename__ = "admin_users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    display_name = Column(String(200), nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(
        Enum(AdminRole, name="admin_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=AdminRole.MODERATOR,
    )
    is_active = Column(Boolean, nullable=False, default=True)
    last_login_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def can_view_sms_logs(self) -> bool:
        return self.is_active and self.role in SMS_LOG_VIEWERS

    def __repr__(self):
        return f"<AdminUser {self.email} ({self.role})>"
