"""Course, lesson and step schemas."""

from typing import Optional

from pydantic import BaseModel, ConfigDict


class CourseResponse(BaseModel):
    course_id: int
    title: str
    description: Optional[str] = None
    course_image: Optional[str] = None
    lessons_count: int = 0


class LessonSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    lesson_id: int
    title: str
    summary: Optional[str] = None
    lesson_order: int


class LessonResponse(LessonSummary):
    course_id: int


class LessonStepResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    step_id: int
    step_order: int
    step_text: Optional[str] = None
    step_type: Optional[str] = None
    media_link: Optional[str] = None
    question: Optional[str] = None
