"""Badge engine tests."""

from sqlalchemy import select

from app.gamification.badge_engine import BadgeEngine
from app.models import UserBadge


async def test_reports_only_badges_it_inserted(database, seed, quiz):
    bronze, gold = quiz["badges"]["bronze"], quiz["badges"]["gold"]
    # Another request granted bronze first
    await seed(UserBadge(user_id=11, badge_id=bronze.badge_id))

    async with database.session() as session:
        awarded = await BadgeEngine(session).award_quiz_badges(11, quiz["quiz"].quiz_id, 100)
        again = await BadgeEngine(session).award_quiz_badges(11, quiz["quiz"].quiz_id, 100)
        await session.commit()

    assert [badge.badge_id for badge in awarded] == [gold.badge_id]
    assert again == []


async def test_below_every_threshold_grants_nothing(database, fetch, quiz):
    async with database.session() as session:
        awarded = await BadgeEngine(session).award_quiz_badges(12, quiz["quiz"].quiz_id, 49)
        await session.commit()

    assert awarded == []
    assert await fetch(select(UserBadge).where(UserBadge.user_id == 12)) == []
