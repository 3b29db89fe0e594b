"""SMS delivery log — one row per top-level send request."""

import enum

from sqlalchemy import Column, DateTime, Enum, Integer, String, Text
from sqlalchemy.sql import func

from roktodao.infrastructure.database import Base


class DeliveryOutcome(str, enum.Enum):
    SUCCESS = "success"
    FAILURE = "failure"


class NotificationAttempt(Base):
    __tablename__ = "sms_logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipient = Column(String(20), nullable=False, index=True)
    body = Column(Text, nullable=False)
    outcome = Column(
        Enum(DeliveryOutcome, name="delivery_outcome", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    provider_used = Column(String(50), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    def __repr__(self):
        return f"<NotificationAttempt {self.recipient} - {self.outcome} via {self.provider_used}>"
