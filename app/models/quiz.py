"""Quiz models."""

from datetime import datetime
from sqlalchemy import Column, String, Integer, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.core.database import Base


class Quiz(Base):
    """A quiz; ``course_id`` is null for standalone quizzes."""
    __tablename__ = "quizzes"

    quiz_id = Column(Integer, primary_key=True, autoincrement=True)
    course_id = Column(Integer, ForeignKey("courses.course_id"), nullable=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)

    # Relationships
    questions = relationship("QuizQuestion", back_populates="quiz")


class QuizQuestion(Base):
    """A multiple-choice question."""
    __tablename__ = "quiz_questions"

    question_id = Column(Integer, primary_key=True, autoincrement=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.quiz_id"), nullable=False, index=True)
    question_text = Column(Text, nullable=False)
    question_image = Column(String(255))

    # Relationships
    quiz = relationship("Quiz", back_populates="questions")
    options = relationship("QuizOption", back_populates="question")


class QuizOption(Base):
    """An answer option; ``is_correct`` never leaves the server."""
    __tablename__ = "quiz_options"

    option_id = Column(Integer, primary_key=True, autoincrement=True)
    question_id = Column(Integer, ForeignKey("quiz_questions.question_id"), nullable=False, index=True)
    option_text = Column(Text, nullable=False)
    is_correct = Column(Boolean, nullable=False, default=False)

    # Relationships
    question = relationship("QuizQuestion", back_populates="options")


class QuizAttempt(Base):
    """One scored attempt; attempts accumulate."""
    __tablename__ = "quiz_attempts"

    attempt_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False)
    quiz_id = Column(Integer, ForeignKey("quizzes.quiz_id"), nullable=False)
    score = Column(Integer, nullable=False)
    passed = Column(Boolean, nullable=False)
    attempted_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    __table_args__ = (
        Index("ix_quiz_attempts_user_attempted", "user_id", "attempted_at"),
    )
