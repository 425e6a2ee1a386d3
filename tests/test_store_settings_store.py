"""
Store Settings Store Tests
"""

import pytest

from skadam.application.stores.store_settings_store import StoreSettingsStore
from skadam.domain.entities.store_entity import (
    DEFAULT_STORE_DESCRIPTION,
    OpeningHours,
    SocialMediaLinkPatch,
    SocialPlatform,
    StoreSettingsPatch,
    Weekday,
    default_opening_hours,
)
from skadam.infrastructure.utilities.constants import StorageKeys
from skadam.infrastructure.utilities.exceptions import ValidationError


def _week(**overrides):
    """Default hours with some days replaced"""
    return [overrides.get(entry.day.value, entry) for entry in default_opening_hours()]


class TestStoreProfile:
    """Description and opening hours"""

    def test_defaults(self, store_settings_store):
        settings = store_settings_store.settings
        assert settings.store_description == DEFAULT_STORE_DESCRIPTION
        assert settings.social_media_links == []
        assert [entry.day for entry in settings.opening_hours] == list(Weekday)
        sunday = settings.opening_hours[-1]
        assert sunday.is_open is False

    def test_update_description(self, storage, store_settings_store):
        store_settings_store.update_settings(StoreSettingsPatch(store_description=" Coffee & cake "))
        assert store_settings_store.settings.store_description == "Coffee & cake"
        stored = storage.get(StorageKeys.STORE_SETTINGS)["data"]
        assert stored["store_description"] == "Coffee & cake"

    def test_update_opening_hours(self, store_settings_store):
        sunday = OpeningHours(Weekday.SUNDAY, True, "10:00", "14:00")
        hours = list(reversed(_week(sunday=sunday)))

        settings = store_settings_store.update_opening_hours(hours)

        assert settings.opening_hours[0].day is Weekday.MONDAY
        assert settings.opening_hours[-1] == sunday

    def test_incomplete_week_rejected(self, store_settings_store):
        with pytest.raises(ValidationError):
            store_settings_store.update_opening_hours(default_opening_hours()[:6])
        assert len(store_settings_store.settings.opening_hours) == 7

    @pytest.mark.parametrize(
        "open_time,close_time", [("8am", "18:00"), ("08:00", "24:30"), ("18:00", "08:00")]
    )
    def test_invalid_times(self, open_time, close_time):
        with pytest.raises(ValueError):
            OpeningHours(Weekday.MONDAY, True, open_time, close_time)

    def test_closed_day_ignores_time_order(self):
        day = OpeningHours(Weekday.SUNDAY, False, "17:00", "09:00")
        assert day.is_open is False

    def test_survives_reload(self, writer, store_settings_store):
        store_settings_store.update_settings(StoreSettingsPatch(store_description="Open late"))
        store_settings_store.add_social_link(SocialPlatform.TIKTOK, "https://tiktok.com/@skadam")

        reloaded = StoreSettingsStore(writer)
        reloaded.load()

        assert reloaded.settings.store_description == "Open late"
        assert [link.platform for link in reloaded.settings.social_media_links] == [
            SocialPlatform.TIKTOK
        ]


class TestSocialLinks:
    def test_add_update_delete(self, store_settings_store):
        link = store_settings_store.add_social_link(
            SocialPlatform.INSTAGRAM, " https://instagram.com/skadam "
        )
        assert link.url == "https://instagram.com/skadam"
        assert store_settings_store.settings.active_links() == [link]

        store_settings_store.update_social_link(link.id, SocialMediaLinkPatch(is_active=False))
        assert store_settings_store.settings.active_links() == []

        assert store_settings_store.delete_social_link(link.id) is True
        assert store_settings_store.delete_social_link(link.id) is False

    def test_blank_url_rejected(self, store_settings_store):
        with pytest.raises(ValidationError):
            store_settings_store.add_social_link(SocialPlatform.FACEBOOK, "  ")

    def test_invalid_patch_leaves_link_untouched(self, store_settings_store):
        link = store_settings_store.add_social_link(SocialPlatform.FACEBOOK, "https://fb.com/skadam")
        with pytest.raises(ValidationError):
            store_settings_store.update_social_link(
                link.id, SocialMediaLinkPatch(platform="myspace", url="https://x")
            )
        assert link.platform is SocialPlatform.FACEBOOK
        assert link.url == "https://fb.com/skadam"

    def test_update_missing_link(self, store_settings_store):
        assert store_settings_store.update_social_link("nope", SocialMediaLinkPatch(url="x")) is None
