"""
Quiz Store

Rewards quiz questions and attempts. A perfect score earns a promo code.
"""

from typing import Dict, List, Optional

from skadam.application.stores.base_store import PersistentStore, domain_validation
from skadam.application.stores.promotion_store import PromotionStore
from skadam.application.stores.seed_data import DEFAULT_QUIZ_QUESTIONS
from skadam.domain.entities.base import new_id, utc_now
from skadam.domain.entities.promotion_entity import QuizAttempt, QuizQuestion, QuizQuestionPatch
from skadam.infrastructure.persistence.persistence_writer import PersistenceWriter
from skadam.infrastructure.utilities.constants import StorageKeys
from skadam.infrastructure.utilities.exceptions import ValidationError


class QuizStore(PersistentStore):
    def __init__(
        self,
        writer: PersistenceWriter,
        promotions: PromotionStore,
        seed_defaults: bool = True,
    ):
        super().__init__(writer)
        self._promotions = promotions
        self._seed_defaults = seed_defaults
        self._questions: List[QuizQuestion] = []
        self._attempts: List[QuizAttempt] = []

    def load(self) -> None:
        questions = self._load_records(StorageKeys.QUIZ_QUESTIONS, QuizQuestion.from_dict)
        if questions is None and self._seed_defaults:
            questions = [QuizQuestion.from_dict(data) for data in DEFAULT_QUIZ_QUESTIONS]
        self._questions = questions or []
        self._attempts = self._load_records(StorageKeys.QUIZ_ATTEMPTS, QuizAttempt.from_dict) or []

    # Questions

    def get_question(self, question_id: str) -> Optional[QuizQuestion]:
        return next((q for q in self._questions if q.id == question_id), None)

    def list_questions(self) -> List[QuizQuestion]:
        return list(self._questions)

    def active_questions(self) -> List[QuizQuestion]:
        return [q for q in self._questions if q.is_active]

    def add_question(self, question: str, options: List[str], correct_answer: int) -> QuizQuestion:
        with domain_validation():
            created = QuizQuestion.create(question, options, correct_answer)
        self._questions.append(created)
        self._persist(StorageKeys.QUIZ_QUESTIONS, self._questions)
        return created

    def update_question(self, question_id: str, patch: QuizQuestionPatch) -> Optional[QuizQuestion]:
        question = self.get_question(question_id)
        if question is None:
            return None
        with domain_validation():
            patch.apply_to(question)
        self._persist(StorageKeys.QUIZ_QUESTIONS, self._questions)
        return question

    def delete_question(self, question_id: str) -> bool:
        remaining = [q for q in self._questions if q.id != question_id]
        if len(remaining) == len(self._questions):
            return False
        self._questions = remaining
        self._persist(StorageKeys.QUIZ_QUESTIONS, self._questions)
        return True

    # Attempts

    def score_answers(self, answers: Dict[str, int]) -> int:
        """Number of active questions answered correctly"""
        return sum(
            1 for question in self.active_questions() if question.is_correct(answers.get(question.id, -1))
        )

    def submit_attempt(self, user_id: str, score: int, total_questions: int) -> QuizAttempt:
        """Record an attempt; a perfect score is rewarded with a quiz promo code"""
        if not user_id or not str(user_id).strip():
            raise ValidationError("User id is required", "user_id")
        if total_questions <= 0 or not 0 <= score <= total_questions:
            raise ValidationError("Score must be between 0 and the number of questions", "score")

        reward_code = None
        if score == total_questions:
            reward_code = self._promotions.issue_quiz_reward().code
            self._logger.info("🏆 Perfect quiz by %s, reward %s", user_id, reward_code)

        attempt = QuizAttempt(
            id=new_id(),
            user_id=str(user_id).strip(),
            score=score,
            total_questions=total_questions,
            completed_at=utc_now(),
            promo_code=reward_code,
        )
        self._attempts.append(attempt)
        self._persist(StorageKeys.QUIZ_ATTEMPTS, self._attempts)
        return attempt

    def attempts_for(self, user_id: str) -> List[QuizAttempt]:
        return [a for a in reversed(self._attempts) if a.user_id == user_id]
