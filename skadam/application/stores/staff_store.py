"""
Staff Store

Admin login and staff sub-user accounts.
"""

import hmac
from typing import List, Optional

from skadam.application.stores.base_store import PersistentStore, domain_validation
from skadam.domain.entities.staff_entity import SubUser, SubUserPatch
from skadam.infrastructure.persistence.persistence_writer import PersistenceWriter
from skadam.infrastructure.utilities.constants import StorageKeys
from skadam.infrastructure.utilities.exceptions import DuplicateKeyError, ValidationError
from skadam.infrastructure.utilities.security import (
    hash_password,
    log_security_event,
    verify_password,
)

MIN_PASSWORD_LENGTH = 4


def _check_password(password: Optional[str]) -> str:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters", "password"
        )
    return password


class StaffStore(PersistentStore):
    def __init__(self, writer: PersistenceWriter, admin_password: str):
        super().__init__(writer)
        self._admin_password = admin_password
        self._users: List[SubUser] = []

    def load(self) -> None:
        self._users = self._load_records(StorageKeys.SUB_USERS, SubUser.from_dict) or []

    def _save(self) -> None:
        self._persist(StorageKeys.SUB_USERS, self._users)

    def _find_username(self, username: str) -> Optional[SubUser]:
        wanted = (username or "").strip()
        return next((user for user in self._users if user.username == wanted), None)

    def get_sub_user(self, user_id: str) -> Optional[SubUser]:
        return next((user for user in self._users if user.id == user_id), None)

    def list_sub_users(self) -> List[SubUser]:
        return list(self._users)

    def add_sub_user(self, username: str, password: str, name: str) -> SubUser:
        if self._find_username(username) is not None:
            raise DuplicateKeyError("username", username.strip())
        with domain_validation("username"):
            user = SubUser.create(username or "", hash_password(_check_password(password)), name)
        self._users.append(user)
        self._save()
        self._logger.info("👥 Sub-user added: %s", user.username)
        return user

    def update_sub_user(
        self,
        user_id: str,
        name: Optional[str] = None,
        password: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Optional[SubUser]:
        user = self.get_sub_user(user_id)
        if user is None:
            return None
        patch = SubUserPatch(
            name=name,
            password_hash=hash_password(_check_password(password)) if password is not None else None,
            is_active=is_active,
        )
        patch.apply_to(user)
        self._save()
        return user

    def delete_sub_user(self, user_id: str) -> bool:
        remaining = [user for user in self._users if user.id != user_id]
        if len(remaining) == len(self._users):
            return False
        self._users = remaining
        self._save()
        return True

    def authenticate(self, username: str, password: str) -> Optional[SubUser]:
        """Active sub-user matching the credentials, else None"""
        user = self._find_username(username)
        if user is None or not user.is_active or not verify_password(password or "", user.password_hash):
            log_security_event("LOGIN_FAILED", username or "<empty>")
            return None
        return user

    def authenticate_admin(self, password: str) -> bool:
        ok = hmac.compare_digest((password or "").encode("utf-8"), self._admin_password.encode("utf-8"))
        if not ok:
            log_security_event("ADMIN_LOGIN_FAILED", "admin")
        return ok
