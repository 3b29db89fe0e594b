"""One-time codes — a single live slot per phone number."""

from sqlalchemy import Column, DateTime, String

from roktodao.infrastructure.database import Base


class OneTimeCode(Base):
    __tablename__ = "otp_codes"

    subject_key = Column(String(20), primary_key=True)
    code = Column(String(6), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)

    def __repr__(self):
        return f"<OneTimeCode {self.subject_key} until {self.expires_at}>"
