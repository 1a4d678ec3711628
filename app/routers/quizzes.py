"""Quiz delivery and scoring endpoints."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
import structlog

from app.core.dependencies import get_db, get_scoring_engine
from app.gamification.scoring import QuizScoringEngine, MissingAnswerKeyError
from app.models.quiz import Quiz, QuizQuestion, QuizOption
from app.schemas.quiz import (
    QuizResponse, QuestionResponse, QuizAttemptCreate, QuizSubmission,
    AttemptResult, SubmissionResult
)

logger = structlog.get_logger()
router = APIRouter(tags=["quizzes"])


async def _first_quiz(db: AsyncSession, *criteria) -> Quiz:
    result = await db.execute(
        select(Quiz).where(*criteria).order_by(Quiz.quiz_id).limit(1)
    )
    quiz = result.scalar_one_or_none()
    if not quiz:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return quiz


@router.get("/quizzes/standalone", response_model=QuizResponse)
async def get_standalone_quiz(db: AsyncSession = Depends(get_db)):
    """Get the first quiz that belongs to no course."""
    return await _first_quiz(db, Quiz.course_id.is_(None))


@router.get("/quizzes/{quiz_id}", response_model=QuizResponse)
async def get_quiz(quiz_id: int, db: AsyncSession = Depends(get_db)):
    return await _first_quiz(db, Quiz.quiz_id == quiz_id)


@router.get("/courses/{course_id}/quiz", response_model=QuizResponse)
async def get_course_quiz(course_id: int, db: AsyncSession = Depends(get_db)):
    return await _first_quiz(db, Quiz.course_id == course_id)


@router.get("/quizzes/{quiz_id}/questions", response_model=List[QuestionResponse])
async def get_quiz_questions(quiz_id: int, db: AsyncSession = Depends(get_db)):
    """Get questions with their options. Correct answers are not included."""
    result = await db.execute(
        select(
            QuizQuestion.question_id,
            QuizQuestion.question_text,
            QuizQuestion.question_image,
            QuizOption.option_id,
            QuizOption.option_text
        )
        .join(QuizOption, QuizOption.question_id == QuizQuestion.question_id)
        .where(QuizQuestion.quiz_id == quiz_id)
        .order_by(QuizQuestion.question_id, QuizOption.option_id)
    )

    questions = {}
    for row in result:
        if row.question_id not in questions:
            questions[row.question_id] = {
                "question_id": row.question_id,
                "question_text": row.question_text,
                "question_image": row.question_image,
                "options": []
            }
        questions[row.question_id]["options"].append({
            "option_id": row.option_id,
            "option_text": row.option_text
        })

    return list(questions.values())


@router.post("/quizzes/{quiz_id}/attempt", response_model=AttemptResult)
async def attempt_quiz(
    quiz_id: int,
    attempt: QuizAttemptCreate,
    engine: QuizScoringEngine = Depends(get_scoring_engine)
):
    """Score submitted answers, store the attempt and award tiered badges."""
    try:
        result = await engine.score_attempt(attempt.user_id, quiz_id, attempt.answers)
    except MissingAnswerKeyError:
        raise HTTPException(status_code=400, detail="Quiz has no answer key")

    return {"score": result["score"], "passed": result["passed"]}


@router.post("/quizzes/{quiz_id}/submit", response_model=SubmissionResult)
async def submit_quiz(
    quiz_id: int,
    submission: QuizSubmission,
    engine: QuizScoringEngine = Depends(get_scoring_engine)
):
    """Submit a quiz and report the badges it unlocked.

    The score is always computed from ``answers``; a score sent by the
    client is ignored.
    """
    if submission.score is not None:
        logger.warning(
            "Ignoring client-supplied quiz score",
            user_id=submission.user_id,
            quiz_id=quiz_id,
            client_score=submission.score
        )

    try:
        result = await engine.score_attempt(submission.user_id, quiz_id, submission.answers)
    except MissingAnswerKeyError:
        raise HTTPException(status_code=400, detail="Quiz has no answer key")

    return {
        "message": "Quiz submitted",
        "score": result["score"],
        "passed": result["passed"],
        "badges_awarded": result["badges_awarded"]
    }
