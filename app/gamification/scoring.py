"""Quiz scoring engine."""

from typing import Any, Dict, Mapping

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select
import structlog

from app.gamification.badge_engine import BadgeEngine
from app.models.quiz import QuizAttempt, QuizOption, QuizQuestion

logger = structlog.get_logger()

PASSING_SCORE = 50


class MissingAnswerKeyError(Exception):
    """The quiz has no option flagged correct, so it cannot be scored."""

    def __init__(self, quiz_id: int):
        super().__init__(f"Quiz {quiz_id} has no answer key")
        self.quiz_id = quiz_id


def _answer_text(value: Any) -> str:
    # JSON 3.0 names the same option as 3
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def calculate_score(answer_key: Mapping[str, str], answers: Mapping[str, Any]) -> int:
    """Percentage of keyed questions answered correctly, rounded half up.

    Answers are compared as strings so JSON numbers and strings both match.
    """
    total = len(answer_key)
    if total == 0:
        raise ValueError("answer key is empty")

    correct = sum(
        1 for question_id, option_id in answer_key.items()
        if question_id in answers and _answer_text(answers[question_id]) == option_id
    )
    # Integer form of floor(correct / total * 100 + 0.5)
    return (correct * 200 + total) // (2 * total)


def is_passing(score: int) -> bool:
    return score >= PASSING_SCORE


class QuizScoringEngine:
    """Scores answers against the stored key and records the attempt."""

    def __init__(self, db: AsyncSession, badge_engine: BadgeEngine):
        self.db = db
        self.badge_engine = badge_engine

    async def load_answer_key(self, quiz_id: int) -> Dict[str, str]:
        """Map question id to its correct option id.

        With several correct options on one question the highest option id wins.
        """
        result = await self.db.execute(
            select(QuizQuestion.question_id, QuizOption.option_id)
            .join(QuizOption, QuizOption.question_id == QuizQuestion.question_id)
            .where(
                QuizQuestion.quiz_id == quiz_id,
                QuizOption.is_correct.is_(True)
            )
            .order_by(QuizQuestion.question_id, QuizOption.option_id)
        )
        return {str(row.question_id): str(row.option_id) for row in result}

    async def score_attempt(
        self,
        user_id: int,
        quiz_id: int,
        answers: Mapping[str, Any]
    ) -> Dict[str, Any]:
        """Score ``answers``, then store the attempt and its badges atomically."""
        answer_key = await self.load_answer_key(quiz_id)
        if not answer_key:
            logger.warning("Quiz has no answer key", quiz_id=quiz_id)
            raise MissingAnswerKeyError(quiz_id)

        score = calculate_score(answer_key, answers)
        return await self.record_attempt(user_id, quiz_id, score)

    async def record_attempt(self, user_id: int, quiz_id: int, score: int) -> Dict[str, Any]:
        passed = is_passing(score)
        attempt = QuizAttempt(
            user_id=user_id,
            quiz_id=quiz_id,
            score=score,
            passed=passed
        )
        self.db.add(attempt)

        try:
            await self.db.flush()
            awarded = await self.badge_engine.award_quiz_badges(user_id, quiz_id, score)
            await self.db.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to record quiz attempt", user_id=user_id, quiz_id=quiz_id, error=str(e))
            await self.db.rollback()
            raise

        logger.info(
            "Quiz attempt recorded",
            user_id=user_id,
            quiz_id=quiz_id,
            score=score,
            passed=passed,
            badges_awarded=len(awarded)
        )
        return {
            "attempt_id": attempt.attempt_id,
            "score": score,
            "passed": passed,
            "badges_awarded": [badge.badge_id for badge in awarded]
        }
