"""
Donor Repository Interface.
"""

from typing import Optional

from roktodao.domain.repositories.base import BaseRepository
from roktodao.domain.models.donor import Donor


class DonorRepository(BaseRepository[Donor]):
    """Interface for donor account lookups."""

    def get_by_phone(self, phone_number: str) -> Optional[Donor]:
        """Get the donor registered with this phone number."""
        ...

    def set_password_hash(self, donor: Donor, password_hash: str) -> Donor:
        """Replace the donor's password hash."""
        ...
