"""Course, lesson and step content endpoints."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func
import structlog

from app.core.dependencies import get_db
from app.models.learning import Course, Lesson, LessonStep
from app.schemas.learning import (
    CourseResponse, LessonSummary, LessonResponse, LessonStepResponse
)

logger = structlog.get_logger()
router = APIRouter(tags=["courses"])


@router.get("/courses", response_model=List[CourseResponse])
async def list_courses(db: AsyncSession = Depends(get_db)):
    """List courses with the number of lessons in each."""
    lessons_count = (
        select(func.count(Lesson.lesson_id))
        .where(Lesson.course_id == Course.course_id)
        .correlate(Course)
        .scalar_subquery()
        .label("lessons_count")
    )
    result = await db.execute(
        select(Course, lessons_count).order_by(Course.course_id)
    )

    courses = []
    for course, count in result:
        courses.append({
            "course_id": course.course_id,
            "title": course.title,
            "description": course.description,
            "course_image": course.course_image,
            "lessons_count": count
        })
    return courses


@router.get("/courses/{course_id}/lessons", response_model=List[LessonSummary])
async def get_course_lessons(course_id: int, db: AsyncSession = Depends(get_db)):
    """Get the lessons of a course in teaching order."""
    result = await db.execute(
        select(Lesson)
        .where(Lesson.course_id == course_id)
        .order_by(Lesson.lesson_order, Lesson.lesson_id)
    )
    return result.scalars().all()


@router.get("/lessons/{lesson_id}/steps", response_model=List[LessonStepResponse])
async def get_lesson_steps(lesson_id: int, db: AsyncSession = Depends(get_db)):
    """Get the steps of a lesson in order."""
    result = await db.execute(
        select(LessonStep)
        .where(LessonStep.lesson_id == lesson_id)
        .order_by(LessonStep.step_order, LessonStep.step_id)
    )
    return result.scalars().all()


@router.get("/lessons/{lesson_id}", response_model=LessonResponse)
async def get_lesson(lesson_id: int, db: AsyncSession = Depends(get_db)):
    """Get lesson metadata."""
    lesson = await db.get(Lesson, lesson_id)
    if not lesson:
        raise HTTPException(status_code=404, detail="Lesson not found")
    return lesson
