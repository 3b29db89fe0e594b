"""
Site Settings Repository Interface.
"""

from typing import Optional, Protocol

from roktodao.domain.models.site_settings import SiteSettings


class SiteSettingsRepository(Protocol):
    """Interface for the single global settings row."""

    def get_global(self) -> Optional[SiteSettings]:
        ...
