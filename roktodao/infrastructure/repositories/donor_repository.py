"""
SQLAlchemy Implementation of the Donor Repository.
"""

from typing import Optional

from sqlalchemy.orm import Session

from roktodao.domain.models.donor import Donor
from roktodao.domain.repositories.donor_repository import DonorRepository
from roktodao.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyDonorRepository(SQLAlchemyRepository[Donor], DonorRepository):
    def __init__(self, db: Session):
        super().__init__(db, Donor)

    def get_by_phone(self, phone_number: str) -> Optional[Donor]:
        return self.db.query(Donor).filter(Donor.phone_number == phone_number).first()

    def set_password_hash(self, donor: Donor, password_hash: str) -> Donor:
        donor.password_hash = password_hash
        self.db.commit()
        self.db.refresh(donor)
        return donor
