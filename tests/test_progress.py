"""Lesson progress and dashboard tests."""

from datetime import datetime

from sqlalchemy import select

from app.models import LessonProgress, QuizAttempt, UserBadge


async def test_mark_step_complete(client, fetch, course):
    lesson = course["lessons"][1]
    step = course["steps"][0]

    response = await client.post(
        "/api/lesson-progress",
        json={"user_id": 7, "lesson_id": lesson.lesson_id, "step_id": step.step_id}
    )

    assert response.status_code == 200
    assert response.json() == {"message": "Step completed"}
    rows = await fetch(select(LessonProgress).where(LessonProgress.user_id == 7))
    assert [(r.lesson_id, r.step_id) for r in rows] == [(lesson.lesson_id, step.step_id)]


async def test_marking_twice_keeps_first_completion_time(client, fetch, course):
    payload = {"user_id": 7, "lesson_id": course["lessons"][1].lesson_id, "step_id": course["steps"][0].step_id}

    await client.post("/api/lesson-progress", json=payload)
    first = await fetch(select(LessonProgress).where(LessonProgress.user_id == 7))
    await client.post("/api/lesson-progress", json=payload)
    second = await fetch(select(LessonProgress).where(LessonProgress.user_id == 7))

    assert len(second) == 1
    assert second[0].completed_at == first[0].completed_at


async def test_missing_user_defaults_to_placeholder(client, fetch, course):
    payload = {"lesson_id": course["lessons"][1].lesson_id, "step_id": course["steps"][0].step_id}

    await client.post("/api/lesson-progress", json=payload)
    await client.post("/api/lesson-progress", json={**payload, "user_id": None})

    rows = await fetch(select(LessonProgress))
    assert [r.user_id for r in rows] == [1]


async def test_missing_ids_are_rejected(client, fetch):
    for payload in ({"lesson_id": 1}, {"step_id": 1}, {}):
        response = await client.post("/api/lesson-progress", json=payload)

        assert response.status_code == 400
        assert response.json() == {"message": "lesson_id and step_id are required"}

    assert await fetch(select(LessonProgress)) == []


async def test_lesson_dashboard_newest_first(client, seed, course):
    lesson = course["lessons"][1]
    older, newer = course["steps"]
    await seed(
        LessonProgress(user_id=3, lesson_id=lesson.lesson_id, step_id=older.step_id,
                       completed_at=datetime(2024, 5, 1, 9, 0)),
        LessonProgress(user_id=3, lesson_id=lesson.lesson_id, step_id=newer.step_id,
                       completed_at=datetime(2024, 5, 2, 9, 0)),
        LessonProgress(user_id=4, lesson_id=lesson.lesson_id, step_id=newer.step_id),
    )

    response = await client.get("/api/progress/lessons/3")

    assert response.status_code == 200
    body = response.json()
    assert [row["step_id"] for row in body] == [newer.step_id, older.step_id]
    assert body[0]["lesson_title"] == "Grooming"
    assert body[0]["completed_at"].startswith("2024-05-02T09:00")


async def test_quiz_dashboard_newest_first(client, seed, quiz):
    quiz_id = quiz["quiz"].quiz_id
    await seed(
        QuizAttempt(user_id=3, quiz_id=quiz_id, score=40, passed=False, attempted_at=datetime(2024, 5, 1)),
        QuizAttempt(user_id=3, quiz_id=quiz_id, score=90, passed=True, attempted_at=datetime(2024, 5, 3)),
    )

    response = await client.get("/api/progress/quizzes/3")

    assert response.status_code == 200
    assert [(a["score"], a["passed"], a["quiz_title"]) for a in response.json()] == [
        (90, True, "Dog basics"),
        (40, False, "Dog basics"),
    ]


async def test_badge_dashboard_newest_first(client, seed, quiz):
    bronze, gold = quiz["badges"]["bronze"], quiz["badges"]["gold"]
    await seed(
        UserBadge(user_id=3, badge_id=bronze.badge_id, earned_at=datetime(2024, 5, 1)),
        UserBadge(user_id=3, badge_id=gold.badge_id, earned_at=datetime(2024, 6, 1)),
    )

    response = await client.get("/api/progress/badges/3")

    assert response.status_code == 200
    assert [b["badge_name"] for b in response.json()] == ["Gold Pup", "Bronze Pup"]


async def test_dashboards_are_empty_for_new_user(client):
    for kind in ("lessons", "quizzes", "badges"):
        response = await client.get(f"/api/progress/{kind}/12345")

        assert response.status_code == 200
        assert response.json() == []
