"""
Store Settings Store

The public store profile: description, weekly opening hours and social
media links.
"""

from typing import List, Optional

from skadam.application.stores.base_store import PersistentStore, domain_validation
from skadam.domain.entities.store_entity import (
    OpeningHours,
    SocialMediaLink,
    SocialMediaLinkPatch,
    SocialPlatform,
    StoreSettings,
    StoreSettingsPatch,
)
from skadam.infrastructure.persistence.persistence_writer import PersistenceWriter
from skadam.infrastructure.utilities.constants import StorageKeys


class StoreSettingsStore(PersistentStore):
    def __init__(self, writer: PersistenceWriter):
        super().__init__(writer)
        self._settings = StoreSettings()

    def load(self) -> None:
        stored = self._writer.load(StorageKeys.STORE_SETTINGS)
        if isinstance(stored, dict):
            try:
                self._settings = StoreSettings.from_dict(stored)
            except (KeyError, TypeError, ValueError) as e:
                self._logger.warning("⚠️ Unreadable store settings, using defaults: %s", e)

    def _save(self) -> None:
        self._writer.persist(StorageKeys.STORE_SETTINGS, self._settings.to_dict())

    @property
    def settings(self) -> StoreSettings:
        return self._settings

    def update_settings(self, patch: StoreSettingsPatch) -> StoreSettings:
        with domain_validation("opening_hours"):
            patch.apply_to(self._settings)
        self._save()
        return self._settings

    def update_opening_hours(self, hours: List[OpeningHours]) -> StoreSettings:
        return self.update_settings(StoreSettingsPatch(opening_hours=hours))

    # Social media links

    def add_social_link(
        self, platform: SocialPlatform, url: str, is_active: bool = True
    ) -> SocialMediaLink:
        with domain_validation("url"):
            link = SocialMediaLink.create(platform, url, is_active)
        self._settings.social_media_links.append(link)
        self._save()
        self._logger.info("🔗 Social link added: %s", link.platform.value)
        return link

    def update_social_link(
        self, link_id: str, patch: SocialMediaLinkPatch
    ) -> Optional[SocialMediaLink]:
        link = self._settings.get_link(link_id)
        if link is None:
            return None
        with domain_validation("url"):
            patch.apply_to(link)
        self._save()
        return link

    def delete_social_link(self, link_id: str) -> bool:
        links = self._settings.social_media_links
        remaining = [link for link in links if link.id != link_id]
        if len(remaining) == len(links):
            return False
        self._settings.social_media_links = remaining
        self._save()
        return True
