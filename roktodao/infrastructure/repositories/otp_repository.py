"""
SQLAlchemy Implementation of the One-Time Code Repository.

``save`` is a single ``INSERT ... ON CONFLICT (subject_key) DO UPDATE``, so two
issuances racing on the same phone number both succeed and the later write
owns the slot.
"""

from typing import Optional

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from roktodao.domain.models.one_time_code import OneTimeCode
from roktodao.domain.repositories.otp_repository import OneTimeCodeRepository

# Dialects with INSERT ... ON CONFLICT
UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SQLAlchemyOneTimeCodeRepository(OneTimeCodeRepository):
    def __init__(self, db: Session):
        self.db = db

    def get(self, subject_key: str) -> Optional[OneTimeCode]:
        return self.db.get(OneTimeCode, subject_key)

    def save(self, otp: OneTimeCode) -> OneTimeCode:
        dialect = self.db.get_bind().dialect.name
        if dialect not in UPSERT_INSERTS:
            raise NotImplementedError(f"OTP upsert is not supported on {dialect}")

        stmt = UPSERT_INSERTS[dialect](OneTimeCode).values(
            subject_key=otp.subject_key,
            code=otp.code,
            expires_at=otp.expires_at,
            created_at=otp.created_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[OneTimeCode.subject_key],
            set_={
                "code": stmt.excluded.code,
                "expires_at": stmt.excluded.expires_at,
                "created_at": stmt.excluded.created_at,
            },
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return self.db.get(OneTimeCode, otp.subject_key, populate_existing=True)

    def delete(self, subject_key: str) -> None:
        self.db.query(OneTimeCode).filter(OneTimeCode.subject_key == subject_key).delete()
        self.db.commit()
