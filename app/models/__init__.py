"""Data models for the Adoption API."""

from app.models.animals import Animal, AnimalImage
from app.models.learning import Course, Lesson, LessonStep
from app.models.progress import LessonProgress
from app.models.quiz import Quiz, QuizQuestion, QuizOption, QuizAttempt
from app.models.gamification import Badge, UserBadge

__all__ = [
    "Animal",
    "AnimalImage",
    "Course",
    "Lesson",
    "LessonStep",
    "LessonProgress",
    "Quiz",
    "QuizQuestion",
    "QuizOption",
    "QuizAttempt",
    "Badge",
    "UserBadge"
]
