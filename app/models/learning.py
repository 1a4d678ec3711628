"""Course content models."""

from sqlalchemy import Column, String, Integer, Text, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.core.database import Base


class Course(Base):
    """A course made of ordered lessons."""
    __tablename__ = "courses"

    course_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    course_image = Column(String(255))

    # Relationships
    lessons = relationship("Lesson", back_populates="course")


class Lesson(Base):
    """A lesson within a course."""
    __tablename__ = "lessons"

    lesson_id = Column(Integer, primary_key=True, autoincrement=True)
    course_id = Column(Integer, ForeignKey("courses.course_id"), nullable=False)
    title = Column(String(255), nullable=False)
    summary = Column(Text)
    lesson_order = Column(Integer, nullable=False, default=1)

    # Relationships
    course = relationship("Course", back_populates="lessons")
    steps = relationship("LessonStep", back_populates="lesson")

    __table_args__ = (
        Index("ix_lessons_course_order", "course_id", "lesson_order"),
    )


class LessonStep(Base):
    """A single step (text, media or question) of a lesson."""
    __tablename__ = "lesson_steps"

    step_id = Column(Integer, primary_key=True, autoincrement=True)
    lesson_id = Column(Integer, ForeignKey("lessons.lesson_id"), nullable=False)
    step_order = Column(Integer, nullable=False, default=1)
    step_text = Column(Text)
    step_type = Column(String(20))
    media_link = Column(String(255))
    question = Column(Text)

    # Relationships
    lesson = relationship("Lesson", back_populates="steps")

    __table_args__ = (
        Index("ix_lesson_steps_lesson_order", "lesson_id", "step_order"),
    )
