"""OTP service — issues and verifies six-digit codes delivered by SMS.

Per phone number there is at most one live code. Issuing again overwrites
it; a correct verification or a detected expiry clears it.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Callable

import structlog

from roktodao.application.services.sms_dispatcher import SmsDispatcher
from roktodao.config import get_settings
from roktodao.core.exceptions import (
    DeliveryError,
    ExpiredError,
    MismatchError,
    NotFoundError,
    ValidationError,
)
from roktodao.domain.models.one_time_code import OneTimeCode
from roktodao.domain.repositories.donor_repository import DonorRepository
from roktodao.domain.repositories.otp_repository import OneTimeCodeRepository

settings = get_settings()
logger = structlog.get_logger(__name__)

OTP_TTL = timedelta(minutes=10)
OTP_LENGTH = 6


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def generate_code() -> str:
    return f"{secrets.randbelow(10 ** OTP_LENGTH):0{OTP_LENGTH}d}"


def format_otp_message(code: str) -> str:
    return f"Your {settings.SITE_NAME} OTP is: {code}"


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class OtpService:
    def __init__(
        self,
        codes: OneTimeCodeRepository,
        donors: DonorRepository,
        dispatcher: SmsDispatcher,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.codes = codes
        self.donors = donors
        self.dispatcher = dispatcher
        self.clock = clock

    async def issue(self, identifier: str) -> OneTimeCode:
        """Store a fresh code for ``identifier`` and send it by SMS.

        Raises:
            ValidationError: identifier is blank.
            NotFoundError: no donor account uses this phone number.
            DeliveryError: every SMS provider failed. The code stays stored.
        """
        if not identifier or not identifier.strip():
            raise ValidationError("Phone number is required.")

        if self.donors.get_by_phone(identifier) is None:
            logger.info("otp_unknown_recipient", recipient=identifier)
            raise NotFoundError("No account is associated with this phone number.")

        now = self.clock()
        otp = self.codes.save(
            OneTimeCode(
                subject_key=identifier,
                code=generate_code(),
                created_at=now,
                expires_at=now + OTP_TTL,
            )
        )
        logger.info("otp_issued", recipient=identifier, expires_at=otp.expires_at.isoformat())

        result = await self.dispatcher.dispatch(identifier, format_otp_message(otp.code))
        if not result.success:
            raise DeliveryError("Failed to send OTP SMS.")

        return otp

    def verify(self, identifier: str, code: str, purpose: str = "password_reset") -> None:
        """Consume the code for ``identifier``; returns only when it is valid.

        Raises:
            NotFoundError: no code was issued, or it was already used.
            ExpiredError: the code outlived its TTL. The record is cleared.
            MismatchError: wrong code. The record is kept.
        """
        otp = self.codes.get(identifier)
        if otp is None:
            logger.info("otp_not_found", recipient=identifier, purpose=purpose)
            raise NotFoundError("Invalid or expired OTP. Please try again.")

        if self.clock() > _as_utc(otp.expires_at):
            self.codes.delete(identifier)
            logger.info("otp_expired", recipient=identifier, purpose=purpose)
            raise ExpiredError()

        if not secrets.compare_digest(otp.code.encode(), (code or "").encode()):
            logger.info("otp_mismatch", recipient=identifier, purpose=purpose)
            raise MismatchError()

        self.codes.delete(identifier)
        logger.info("otp_verified", recipient=identifier, purpose=purpose)
