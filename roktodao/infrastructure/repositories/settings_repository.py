"""
SQLAlchemy Implementation of the Site Settings Repository.
"""

from typing import Optional

from sqlalchemy.orm import Session

from roktodao.domain.models.site_settings import GLOBAL_SETTINGS_ID, SiteSettings
from roktodao.domain.repositories.settings_repository import SiteSettingsRepository


class SQLAlchemySiteSettingsRepository(SiteSettingsRepository):
    def __init__(self, db: Session):
        self.db = db

    def get_global(self) -> Optional[SiteSettings]:
        return self.db.get(SiteSettings, GLOBAL_SETTINGS_ID)
