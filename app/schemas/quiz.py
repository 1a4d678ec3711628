"""Quiz schemas."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.progress import UserScoped


class QuizResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    quiz_id: int
    course_id: Optional[int] = None
    title: str
    description: Optional[str] = None


class OptionResponse(BaseModel):
    option_id: int
    option_text: str


class QuestionResponse(BaseModel):
    question_id: int
    question_text: str
    question_image: Optional[str] = None
    options: List[OptionResponse] = []


class QuizAttemptCreate(UserScoped):
    """Answers keyed by question id, valued by the chosen option id."""
    answers: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("answers", mode="before")
    def default_missing_answers(cls, v):
        return {} if v is None else v


class QuizSubmission(QuizAttemptCreate):
    # Accepted for older clients; the server always computes the score.
    score: Optional[float] = None


class AttemptResult(BaseModel):
    score: int
    passed: bool


class SubmissionResult(AttemptResult):
    message: str
    badges_awarded: List[int] = []
