"""Password reset — OTP-verified replacement of a donor's password."""

import structlog

from roktodao.application.services.otp_service import OtpService
from roktodao.core.exceptions import NotFoundError, ValidationError
from roktodao.core.security import hash_password
from roktodao.domain.repositories.donor_repository import DonorRepository

logger = structlog.get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


class PasswordResetService:
    def __init__(self, otp_service: OtpService, donors: DonorRepository):
        self.otp_service = otp_service
        self.donors = donors

    def reset(self, identifier: str, code: str, new_secret: str) -> None:
        if not identifier or not code or not new_secret:
            raise ValidationError("Phone number, OTP, and new password are required.")
        if len(new_secret) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters.")

        self.otp_service.verify(identifier, code, purpose="password_reset")

        # The code proves control of the phone; the account comes from its own lookup
        donor = self.donors.get_by_phone(identifier)
        if donor is None:
            raise NotFoundError("User with this phone number not found.")

        self.donors.set_password_hash(donor, hash_password(new_secret))
        logger.info("password_reset", donor_uid=donor.uid)
