"""
Promotion Store

Promo codes with usage caps and expiry, including quiz reward codes.
"""

import time
from datetime import datetime, timedelta
from typing import List, Optional

from skadam.application.stores.base_store import PersistentStore, domain_validation
from skadam.domain.entities.base import utc_now
from skadam.domain.entities.promotion_entity import PromoCode, PromoCodePatch, PromoOrigin
from skadam.infrastructure.persistence.persistence_writer import PersistenceWriter
from skadam.infrastructure.utilities.constants import PromotionSettings, StorageKeys
from skadam.infrastructure.utilities.exceptions import DuplicateKeyError


class PromotionStore(PersistentStore):
    """Owns promo codes; codes are unique ignoring case"""

    def __init__(self, writer: PersistenceWriter):
        super().__init__(writer)
        self._codes: List[PromoCode] = []

    def load(self) -> None:
        self._codes = self._load_records(StorageKeys.PROMO_CODES, PromoCode.from_dict) or []
        self._logger.info("🏷️ Promo codes loaded: %d", len(self._codes))

    def _save(self) -> None:
        self._persist(StorageKeys.PROMO_CODES, self._codes)

    def _find(self, code: str) -> Optional[PromoCode]:
        return next((promo for promo in self._codes if promo.matches(code)), None)

    def get_promo_code(self, promo_id: str) -> Optional[PromoCode]:
        return next((promo for promo in self._codes if promo.id == promo_id), None)

    def list_promo_codes(self) -> List[PromoCode]:
        return list(self._codes)

    def validate(self, code: str, now: Optional[datetime] = None) -> Optional[PromoCode]:
        """The matching code if it can be used right now; never mutates"""
        promo = self._find(code)
        if promo is None or not promo.is_redeemable(now):
            return None
        return promo

    def consume(self, code: str) -> bool:
        """Re-validate, then count one use"""
        promo = self.validate(code)
        if promo is None:
            return False
        promo.usage_count += 1
        self._save()
        self._logger.info(
            "🏷️ Promo code %s used (%d/%s)",
            promo.code,
            promo.usage_count,
            promo.max_usage if promo.max_usage is not None else "∞",
        )
        return True

    def create_promo_code(
        self,
        code: str,
        discount_percentage: int,
        description: str = "",
        max_usage: Optional[int] = None,
        expires_at: Optional[datetime] = None,
        created_by: PromoOrigin = PromoOrigin.ADMIN,
    ) -> PromoCode:
        with domain_validation("code"):
            promo = PromoCode.create(
                code=code or "",
                discount_percentage=discount_percentage,
                description=description,
                max_usage=max_usage,
                expires_at=expires_at,
                created_by=created_by,
            )
        if self._find(promo.code) is not None:
            raise DuplicateKeyError("code", promo.code)
        self._codes.append(promo)
        self._save()
        self._logger.info("➕ Promo code created: %s (%d%%)", promo.code, promo.discount_percentage)
        return promo

    def update_promo_code(self, promo_id: str, patch: PromoCodePatch) -> Optional[PromoCode]:
        promo = self.get_promo_code(promo_id)
        if promo is None:
            return None
        if patch.code is not None:
            clash = self._find(patch.code)
            if clash is not None and clash.id != promo_id:
                raise DuplicateKeyError("code", patch.code.strip())
        with domain_validation():
            patch.apply_to(promo)
        self._save()
        return promo

    def delete_promo_code(self, promo_id: str) -> bool:
        remaining = [promo for promo in self._codes if promo.id != promo_id]
        if len(remaining) == len(self._codes):
            return False
        self._codes = remaining
        self._save()
        return True

    def issue_quiz_reward(self) -> PromoCode:
        """Single-use 15% code for a perfect quiz score, valid for a week"""
        modulus = 10 ** PromotionSettings.QUIZ_CODE_DIGITS
        digits = int(time.time() * 1000) % modulus
        code = f"{PromotionSettings.QUIZ_CODE_PREFIX}{digits:0{PromotionSettings.QUIZ_CODE_DIGITS}d}"
        while self._find(code) is not None:
            digits = (digits + 1) % modulus
            code = f"{PromotionSettings.QUIZ_CODE_PREFIX}{digits:0{PromotionSettings.QUIZ_CODE_DIGITS}d}"

        return self.create_promo_code(
            code=code,
            discount_percentage=PromotionSettings.QUIZ_DISCOUNT_PERCENTAGE,
            description="Quiz reward - perfect score",
            max_usage=PromotionSettings.QUIZ_MAX_USAGE,
            expires_at=utc_now() + timedelta(days=PromotionSettings.QUIZ_VALIDITY_DAYS),
            created_by=PromoOrigin.QUIZ,
        )
