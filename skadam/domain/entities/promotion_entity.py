# pylint: disable=too-many-instance-attributes
"""
Promotion entities - promo codes and the rewards quiz
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from skadam.domain.entities.base import as_utc, dump_datetime, load_datetime, new_id, utc_now
from skadam.domain.value_objects.money import Money

MIN_DISCOUNT_PERCENTAGE = 1
MAX_DISCOUNT_PERCENTAGE = 100


class PromoOrigin(str, Enum):
    """Who authored a promo code"""

    ADMIN = "admin"
    QUIZ = "quiz"


def _check_discount(percentage: int) -> None:
    if isinstance(percentage, bool) or not isinstance(percentage, int):
        raise ValueError("Discount percentage must be an integer")
    if not MIN_DISCOUNT_PERCENTAGE <= percentage <= MAX_DISCOUNT_PERCENTAGE:
        raise ValueError(
            f"Discount percentage must be between {MIN_DISCOUNT_PERCENTAGE} "
            f"and {MAX_DISCOUNT_PERCENTAGE}"
        )


def normalize_code(code: str) -> str:
    """Case-insensitive comparison key"""
    return (code or "").strip().casefold()


@dataclass
class PromoCode:
    """Discount token with optional usage cap and expiry"""

    id: str
    code: str
    discount_percentage: int
    description: str = ""
    is_active: bool = True
    usage_count: int = 0
    max_usage: Optional[int] = None
    expires_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=utc_now)
    created_by: PromoOrigin = PromoOrigin.ADMIN

    def __post_init__(self):
        if not self.code or not self.code.strip():
            raise ValueError("Promo code cannot be empty")
        self.code = self.code.strip()
        _check_discount(self.discount_percentage)
        if self.max_usage is not None and self.max_usage <= 0:
            raise ValueError("Max usage must be positive")
        self.expires_at = as_utc(self.expires_at)

    @classmethod
    def create(
        cls,
        code: str,
        discount_percentage: int,
        description: str = "",
        max_usage: Optional[int] = None,
        expires_at: Optional[datetime] = None,
        created_by: PromoOrigin = PromoOrigin.ADMIN,
    ) -> "PromoCode":
        return cls(
            id=new_id(),
            code=code,
            discount_percentage=discount_percentage,
            description=description,
            max_usage=max_usage,
            expires_at=expires_at,
            created_by=created_by,
        )

    def matches(self, code: str) -> bool:
        return normalize_code(self.code) == normalize_code(code)

    def is_redeemable(self, now: Optional[datetime] = None) -> bool:
        """Active, under its usage cap and not yet expired"""
        now = as_utc(now) or utc_now()
        if not self.is_active:
            return False
        if self.max_usage is not None and self.usage_count >= self.max_usage:
            return False
        if self.expires_at is not None and self.expires_at <= now:
            return False
        return True

    def discount_for(self, total: Money) -> Money:
        return total.percentage(self.discount_percentage)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "code": self.code,
            "discount_percentage": self.discount_percentage,
            "description": self.description,
            "is_active": self.is_active,
            "usage_count": self.usage_count,
            "max_usage": self.max_usage,
            "expires_at": dump_datetime(self.expires_at),
            "created_at": dump_datetime(self.created_at),
            "created_by": self.created_by.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PromoCode":
        return cls(
            id=data["id"],
            code=data["code"],
            discount_percentage=int(data["discount_percentage"]),
            description=data.get("description", ""),
            is_active=bool(data.get("is_active", True)),
            usage_count=int(data.get("usage_count", 0)),
            max_usage=data.get("max_usage"),
            expires_at=load_datetime(data.get("expires_at")),
            created_at=load_datetime(data.get("created_at")) or utc_now(),
            created_by=PromoOrigin(data.get("created_by", PromoOrigin.ADMIN.value)),
        )


@dataclass
class PromoCodePatch:
    code: Optional[str] = None
    discount_percentage: Optional[int] = None
    description: Optional[str] = None
    is_active: Optional[bool] = None
    max_usage: Optional[int] = None
    expires_at: Optional[datetime] = None

    def apply_to(self, promo: PromoCode) -> PromoCode:
        if self.code is not None:
            if not self.code.strip():
                raise ValueError("Promo code cannot be empty")
            promo.code = self.code.strip()
        if self.discount_percentage is not None:
            _check_discount(self.discount_percentage)
            promo.discount_percentage = self.discount_percentage
        if self.description is not None:
            promo.description = self.description
        if self.is_active is not None:
            promo.is_active = self.is_active
        if self.max_usage is not None:
            if self.max_usage <= 0:
                raise ValueError("Max usage must be positive")
            promo.max_usage = self.max_usage
        if self.expires_at is not None:
            promo.expires_at = as_utc(self.expires_at)
        return promo


@dataclass
class QuizQuestion:
    """Multiple choice question of the rewards quiz"""

    id: str
    question: str
    options: List[str]
    correct_answer: int
    is_active: bool = True

    def __post_init__(self):
        if not self.question or not self.question.strip():
            raise ValueError("Question text cannot be empty")
        if len(self.options) < 2:
            raise ValueError("A question needs at least two options")
        if not 0 <= self.correct_answer < len(self.options):
            raise ValueError("Correct answer must index one of the options")

    @classmethod
    def create(cls, question: str, options: List[str], correct_answer: int) -> "QuizQuestion":
        return cls(id=new_id(), question=question, options=list(options),
                   correct_answer=correct_answer)

    def is_correct(self, answer: int) -> bool:
        return answer == self.correct_answer

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "question": self.question,
            "options": list(self.options),
            "correct_answer": self.correct_answer,
            "is_active": self.is_active,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "QuizQuestion":
        return cls(
            id=data["id"],
            question=data["question"],
            options=list(data.get("options", [])),
            correct_answer=int(data.get("correct_answer", 0)),
            is_active=bool(data.get("is_active", True)),
        )


@dataclass
class QuizQuestionPatch:
    question: Optional[str] = None
    options: Optional[List[str]] = None
    correct_answer: Optional[int] = None
    is_active: Optional[bool] = None

    def apply_to(self, question: QuizQuestion) -> QuizQuestion:
        """Validates the merged result before mutating"""
        merged = QuizQuestion(
            id=question.id,
            question=self.question if self.question is not None else question.question,
            options=list(self.options) if self.options is not None else question.options,
            correct_answer=(
                self.correct_answer if self.correct_answer is not None else question.correct_answer
            ),
            is_active=self.is_active if self.is_active is not None else question.is_active,
        )
        question.question = merged.question
        question.options = merged.options
        question.correct_answer = merged.correct_answer
        question.is_active = merged.is_active
        return question


@dataclass(frozen=True)
class QuizAttempt:
    id: str
    user_id: str
    score: int
    total_questions: int
    completed_at: datetime
    promo_code: Optional[str] = None

    @property
    def is_perfect(self) -> bool:
        return self.total_questions > 0 and self.score == self.total_questions

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "user_id": self.user_id,
            "score": self.score,
            "total_questions": self.total_questions,
            "completed_at": dump_datetime(self.completed_at),
            "promo_code": self.promo_code,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "QuizAttempt":
        return cls(
            id=data["id"],
            user_id=data["user_id"],
            score=int(data["score"]),
            total_questions=int(data["total_questions"]),
            completed_at=load_datetime(data.get("completed_at")) or utc_now(),
            promo_code=data.get("promo_code"),
        )
