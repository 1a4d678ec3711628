"""Progress tracking endpoints."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import select
import structlog

from app.core.database import conflict_insert
from app.core.dependencies import get_db
from app.models.learning import Lesson
from app.models.progress import LessonProgress
from app.models.quiz import Quiz, QuizAttempt
from app.models.gamification import Badge, UserBadge
from app.schemas.common import MessageResponse
from app.schemas.progress import (
    LessonProgressCreate, LessonCompletion, QuizAttemptRecord, EarnedBadge
)

logger = structlog.get_logger()
router = APIRouter(tags=["progress"])


@router.post("/lesson-progress", response_model=MessageResponse)
async def complete_lesson_step(
    progress: LessonProgressCreate,
    db: AsyncSession = Depends(get_db)
):
    """Mark a lesson step complete.

    Repeating the call for the same user, lesson and step is a no-op: the
    first completion time is kept.
    """
    if not progress.lesson_id or not progress.step_id:
        raise HTTPException(status_code=400, detail="lesson_id and step_id are required")

    stmt = conflict_insert(db, LessonProgress).values(
        user_id=progress.user_id,
        lesson_id=progress.lesson_id,
        step_id=progress.step_id
    ).on_conflict_do_nothing(index_elements=["user_id", "lesson_id", "step_id"])

    try:
        await db.execute(stmt)
        await db.commit()
    except SQLAlchemyError as e:
        logger.error("Failed to record lesson progress", error=str(e))
        await db.rollback()
        raise

    logger.info(
        "Lesson step completed",
        user_id=progress.user_id,
        lesson_id=progress.lesson_id,
        step_id=progress.step_id
    )
    return {"message": "Step completed"}


@router.get("/progress/lessons/{user_id}", response_model=List[LessonCompletion])
async def get_lesson_progress(user_id: int, db: AsyncSession = Depends(get_db)):
    """Get completed lesson steps, newest first."""
    result = await db.execute(
        select(
            LessonProgress.lesson_id,
            LessonProgress.step_id,
            LessonProgress.completed_at,
            Lesson.title.label("lesson_title")
        )
        .join(Lesson, LessonProgress.lesson_id == Lesson.lesson_id)
        .where(LessonProgress.user_id == user_id)
        .order_by(LessonProgress.completed_at.desc())
    )
    return [dict(row._mapping) for row in result]


@router.get("/progress/quizzes/{user_id}", response_model=List[QuizAttemptRecord])
async def get_quiz_progress(user_id: int, db: AsyncSession = Depends(get_db)):
    """Get quiz attempts, newest first."""
    result = await db.execute(
        select(
            QuizAttempt.quiz_id,
            QuizAttempt.score,
            QuizAttempt.passed,
            QuizAttempt.attempted_at,
            Quiz.title.label("quiz_title")
        )
        .join(Quiz, QuizAttempt.quiz_id == Quiz.quiz_id)
        .where(QuizAttempt.user_id == user_id)
        .order_by(QuizAttempt.attempted_at.desc(), QuizAttempt.attempt_id.desc())
    )
    return [dict(row._mapping) for row in result]


@router.get("/progress/badges/{user_id}", response_model=List[EarnedBadge])
async def get_badge_progress(user_id: int, db: AsyncSession = Depends(get_db)):
    """Get earned badges, newest first."""
    result = await db.execute(
        select(
            Badge.badge_id,
            Badge.badge_name,
            Badge.badge_image,
            UserBadge.earned_at
        )
        .select_from(UserBadge)
        .join(Badge, UserBadge.badge_id == Badge.badge_id)
        .where(UserBadge.user_id == user_id)
        .order_by(UserBadge.earned_at.desc())
    )
    return [dict(row._mapping) for row in result]
