"""Shared fixtures: an in-memory database and an app bound to it."""

from datetime import date

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.core.database import Database
from app.main import create_app
from app.models import (
    Animal, AnimalImage, Course, Lesson, LessonStep,
    Quiz, QuizQuestion, QuizOption, Badge
)


@pytest.fixture
def settings():
    return Settings(
        DATABASE_URL="sqlite+aiosqlite://",
        DATABASE_AUTO_CREATE=False,
        ENABLE_METRICS=False,
        LOG_FORMAT="plain",
        ENVIRONMENT="development",
    )


@pytest.fixture
async def database():
    db = Database(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
async def client(settings, database):
    app = create_app(settings, database)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def seed(database):
    """Persist ORM objects in their own committed session."""

    async def _seed(*objects):
        async with database.session() as session:
            session.add_all(objects)
            await session.commit()
        return objects

    return _seed


@pytest.fixture
def fetch(database):
    """Run a SELECT in a short-lived session and return the ORM rows."""

    async def _fetch(stmt):
        async with database.session() as session:
            result = await session.execute(stmt)
            return result.scalars().all()

    return _fetch


@pytest.fixture
async def course(seed):
    course = Course(title="Caring for your first dog", description="Basics")
    await seed(course)
    lessons = (
        Lesson(course_id=course.course_id, title="Feeding", summary="What to feed", lesson_order=2),
        Lesson(course_id=course.course_id, title="Grooming", summary="Brushing", lesson_order=1),
    )
    await seed(*lessons)
    steps = (
        LessonStep(lesson_id=lessons[1].lesson_id, step_order=2, step_text="Brush daily", step_type="text"),
        LessonStep(lesson_id=lessons[1].lesson_id, step_order=1, step_text="Pick a brush", step_type="text"),
    )
    await seed(*steps)
    return {"course": course, "lessons": lessons, "steps": steps}


@pytest.fixture
async def quiz(seed):
    """Quiz with Q1 (correct A) and Q2 (correct B) plus two badge tiers."""
    quiz = Quiz(title="Dog basics", course_id=None)
    await seed(quiz)
    q1 = QuizQuestion(quiz_id=quiz.quiz_id, question_text="How often to feed a puppy?")
    q2 = QuizQuestion(quiz_id=quiz.quiz_id, question_text="Best brush for short coats?")
    await seed(q1, q2)
    a = QuizOption(question_id=q1.question_id, option_text="Three times a day", is_correct=True)
    x = QuizOption(question_id=q1.question_id, option_text="Once a week", is_correct=False)
    b = QuizOption(question_id=q2.question_id, option_text="Rubber curry brush", is_correct=True)
    y = QuizOption(question_id=q2.question_id, option_text="Wire rake", is_correct=False)
    await seed(a, x, b, y)
    bronze = Badge(quiz_id=quiz.quiz_id, badge_name="Bronze Pup", min_score=50)
    gold = Badge(quiz_id=quiz.quiz_id, badge_name="Gold Pup", min_score=100)
    await seed(bronze, gold)
    return {
        "quiz": quiz,
        "questions": (q1, q2),
        "correct": (a, b),
        "wrong": (x, y),
        "badges": {"bronze": bronze, "gold": gold},
    }


@pytest.fixture
def animal_payload():
    return {
        "name": "Biscuit",
        "species": "Dog",
        "breed": "Beagle",
        "date_of_birth": "2023-03-15",
        "gender": "Male",
        "temperament": "Friendly",
        "ideal_home": "House with garden",
        "lifestyle_needs": "Daily walks",
        "vaccination_status": "Up to date",
        "health_issues": "None",
        "adoption_status": "Available",
    }


@pytest.fixture
async def animal(seed):
    animal = Animal(name="Luna", species="Cat", breed="Tabby", date_of_birth=date(2022, 1, 10))
    await seed(animal)
    await seed(AnimalImage(animal_id=animal.animal_id, image_type="front", image_path="/img/luna.jpg"))
    return animal
