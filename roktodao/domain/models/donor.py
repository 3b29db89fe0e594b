"""Donor accounts — the registry OTP issuance and password reset look up."""

import uuid

from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func

from roktodao.infrastructure.database import Base


class Donor(Base):
    __tablename__ = "donors"

    uid = Column(String(64), primary_key=True, default=lambda: uuid.uuid4().hex)
    full_name = Column(String(200), nullable=False)
    phone_number = Column(String(20), unique=True, nullable=False, index=True)
    blood_group = Column(String(5), nullable=True)
    division = Column(String(100), nullable=True)
    district = Column(String(100), nullable=True)
    upazila = Column(String(100), nullable=True)
    password_hash = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Donor {self.phone_number} - {self.full_name}>"
