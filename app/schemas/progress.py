"""Progress tracking schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

# There is no user system yet; anonymous progress is recorded against this id.
DEFAULT_USER_ID = 1


class UserScoped(BaseModel):
    user_id: int = Field(
        default=DEFAULT_USER_ID,
        description=f"Acting user; defaults to {DEFAULT_USER_ID} when omitted or null"
    )

    @field_validator("user_id", mode="before")
    def default_missing_user(cls, v):
        return DEFAULT_USER_ID if v is None else v


class LessonProgressCreate(UserScoped):
    """Mark a lesson step complete. Both ids are required but checked by the handler."""
    lesson_id: Optional[int] = None
    step_id: Optional[int] = None


class LessonCompletion(BaseModel):
    lesson_id: int
    step_id: int
    completed_at: datetime
    lesson_title: str


class QuizAttemptRecord(BaseModel):
    quiz_id: int
    score: int
    passed: bool
    attempted_at: datetime
    quiz_title: str


class EarnedBadge(BaseModel):
    badge_id: int
    badge_name: str
    badge_image: Optional[str] = None
    earned_at: datetime
