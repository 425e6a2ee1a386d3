"""
Store profile entities - description, opening hours and social media links
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from skadam.domain.entities.base import new_id

DEFAULT_STORE_DESCRIPTION = "Fresh • Local • Artisan"

_TIME_PATTERN = re.compile(r"^([01][0-9]|2[0-3]):[0-5][0-9]$")


class SocialPlatform(str, Enum):
    INSTAGRAM = "instagram"
    FACEBOOK = "facebook"
    TIKTOK = "tiktok"


class Weekday(str, Enum):
    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"


def _check_url(url: str) -> str:
    url = (url or "").strip()
    if not url:
        raise ValueError("Social media link URL cannot be empty")
    return url


@dataclass
class SocialMediaLink:
    id: str
    platform: SocialPlatform
    url: str
    is_active: bool = True

    def __post_init__(self):
        self.platform = SocialPlatform(self.platform)
        self.url = _check_url(self.url)

    @classmethod
    def create(cls, platform: SocialPlatform, url: str, is_active: bool = True) -> "SocialMediaLink":
        return cls(id=new_id(), platform=platform, url=url, is_active=is_active)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "platform": self.platform.value,
            "url": self.url,
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SocialMediaLink":
        return cls(
            id=data["id"],
            platform=SocialPlatform(data["platform"]),
            url=data["url"],
            is_active=bool(data.get("is_active", True)),
        )


@dataclass
class SocialMediaLinkPatch:
    platform: Optional[SocialPlatform] = None
    url: Optional[str] = None
    is_active: Optional[bool] = None

    def apply_to(self, link: SocialMediaLink) -> SocialMediaLink:
        # Validate everything before touching the link
        platform = SocialPlatform(self.platform) if self.platform is not None else link.platform
        url = _check_url(self.url) if self.url is not None else link.url
        link.platform = platform
        link.url = url
        if self.is_active is not None:
            link.is_active = self.is_active
        return link


@dataclass(frozen=True)
class OpeningHours:
    """One weekday; times are "HH:MM" in 24-hour form"""

    day: Weekday
    is_open: bool
    open_time: str
    close_time: str

    def __post_init__(self):
        object.__setattr__(self, "day", Weekday(self.day))
        for value in (self.open_time, self.close_time):
            if not _TIME_PATTERN.match(value or ""):
                raise ValueError(f"Invalid time '{value}', expected HH:MM")
        if self.is_open and self.close_time <= self.open_time:
            raise ValueError(f"{self.day.value}: closing time must be after opening time")

    def to_dict(self) -> dict:
        return {
            "day": self.day.value,
            "is_open": self.is_open,
            "open_time": self.open_time,
            "close_time": self.close_time,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OpeningHours":
        return cls(
            day=Weekday(data["day"]),
            is_open=bool(data.get("is_open", True)),
            open_time=data["open_time"],
            close_time=data["close_time"],
        )


def default_opening_hours() -> List[OpeningHours]:
    weekdays = [
        OpeningHours(day, True, "08:00", "18:00")
        for day in (Weekday.MONDAY, Weekday.TUESDAY, Weekday.WEDNESDAY,
                    Weekday.THURSDAY, Weekday.FRIDAY)
    ]
    return weekdays + [
        OpeningHours(Weekday.SATURDAY, True, "09:00", "17:00"),
        OpeningHours(Weekday.SUNDAY, False, "09:00", "17:00"),
    ]


def check_week(hours: List[OpeningHours]) -> List[OpeningHours]:
    """Exactly one entry per weekday, returned Monday first"""
    by_day = {entry.day: entry for entry in hours}
    if len(by_day) != len(hours) or set(by_day) != set(Weekday):
        raise ValueError("Opening hours need exactly one entry per weekday")
    return [by_day[day] for day in Weekday]


@dataclass
class StoreSettings:
    """Public store profile shown on the menu"""

    social_media_links: List[SocialMediaLink] = field(default_factory=list)
    opening_hours: List[OpeningHours] = field(default_factory=default_opening_hours)
    store_description: str = DEFAULT_STORE_DESCRIPTION

    def active_links(self) -> List[SocialMediaLink]:
        return [link for link in self.social_media_links if link.is_active]

    def get_link(self, link_id: str) -> Optional[SocialMediaLink]:
        return next((link for link in self.social_media_links if link.id == link_id), None)

    def to_dict(self) -> dict:
        return {
            "social_media_links": [link.to_dict() for link in self.social_media_links],
            "opening_hours": [entry.to_dict() for entry in self.opening_hours],
            "store_description": self.store_description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "StoreSettings":
        settings = cls()
        if "social_media_links" in data:
            settings.social_media_links = [
                SocialMediaLink.from_dict(link) for link in data["social_media_links"]
            ]
        if data.get("opening_hours"):
            settings.opening_hours = check_week(
                [OpeningHours.from_dict(entry) for entry in data["opening_hours"]]
            )
        if data.get("store_description") is not None:
            settings.store_description = data["store_description"]
        return settings


@dataclass
class StoreSettingsPatch:
    store_description: Optional[str] = None
    opening_hours: Optional[List[OpeningHours]] = None

    def apply_to(self, settings: StoreSettings) -> StoreSettings:
        if self.opening_hours is not None:
            settings.opening_hours = check_week(list(self.opening_hours))
        if self.store_description is not None:
            settings.store_description = self.store_description.strip()
        return settings
