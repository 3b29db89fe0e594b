"""
One-Time Code Repository Interface.
One mutable slot per subject key.
"""

from typing import Optional, Protocol

from roktodao.domain.models.one_time_code import OneTimeCode


class OneTimeCodeRepository(Protocol):
    """Interface for OTP storage."""

    def get(self, subject_key: str) -> Optional[OneTimeCode]:
        """Get the live code for a subject, if any."""
        ...

    def save(self, otp: OneTimeCode) -> OneTimeCode:
        """Insert or overwrite the code for ``otp.subject_key``."""
        ...

    def delete(self, subject_key: str) -> None:
        """Clear the code for a subject. No-op when absent."""
        ...
