"""Site-wide settings edited from the admin panel (single row)."""

from sqlalchemy import Boolean, Column, String

from roktodao.infrastructure.database import Base

GLOBAL_SETTINGS_ID = "global"


class SiteSettings(Base):
    __tablename__ = "site_settings"

    id = Column(String(20), primary_key=True, default=GLOBAL_SETTINGS_ID)
    admin_email = Column(String(255), nullable=True)
    notify_new_donor = Column(Boolean, nullable=False, default=True)
    notify_new_request = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<SiteSettings {self.id}>"
