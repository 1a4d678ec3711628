"""Progress tracking models."""

from datetime import datetime
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Index

from app.core.database import Base


class LessonProgress(Base):
    """Completion of one lesson step by one user."""
    __tablename__ = "lesson_progress"

    user_id = Column(Integer, primary_key=True)
    lesson_id = Column(Integer, ForeignKey("lessons.lesson_id"), primary_key=True)
    step_id = Column(Integer, ForeignKey("lesson_steps.step_id"), primary_key=True)
    completed_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        Index("ix_lesson_progress_user_completed", "user_id", "completed_at"),
    )
