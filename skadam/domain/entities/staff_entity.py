"""
Staff sub-user accounts for the admin panel
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from skadam.domain.entities.base import dump_datetime, load_datetime, new_id, utc_now


@dataclass
class SubUser:
    """Staff account; only the salted password hash is kept"""

    id: str
    username: str
    password_hash: str
    name: str
    is_active: bool = True
    created_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        if not self.username or not self.username.strip():
            raise ValueError("Username cannot be empty")
        self.username = self.username.strip()

    @classmethod
    def create(cls, username: str, password_hash: str, name: str) -> "SubUser":
        return cls(id=new_id(), username=username, password_hash=password_hash, name=name)

    def to_dict(self, include_secret: bool = True) -> dict:
        data = {
            "id": self.id,
            "username": self.username,
            "name": self.name,
            "is_active": self.is_active,
            "created_at": dump_datetime(self.created_at),
        }
        if include_secret:
            data["password_hash"] = self.password_hash
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "SubUser":
        return cls(
            id=data["id"],
            username=data["username"],
            password_hash=data["password_hash"],
            name=data.get("name", ""),
            is_active=bool(data.get("is_active", True)),
            created_at=load_datetime(data.get("created_at")) or utc_now(),
        )


@dataclass
class SubUserPatch:
    """Password changes arrive already hashed"""

    name: Optional[str] = None
    password_hash: Optional[str] = None
    is_active: Optional[bool] = None

    def apply_to(self, user: SubUser) -> SubUser:
        if self.name is not None:
            user.name = self.name
        if self.password_hash is not None:
            user.password_hash = self.password_hash
        if self.is_active is not None:
            user.is_active = self.is_active
        return user
