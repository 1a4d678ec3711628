"""Badge awarding and tracking engine."""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, and_
import structlog

from app.core.database import conflict_insert
from app.models.gamification import Badge, UserBadge

logger = structlog.get_logger()


class BadgeEngine:
    """Engine for checking and awarding tiered quiz badges.

    Does not commit; callers own the transaction so that an attempt and the
    badges it unlocks are written together.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def eligible_badges(self, quiz_id: int, score: int) -> List[Badge]:
        """Badges of ``quiz_id`` whose threshold ``score`` clears."""
        result = await self.db.execute(
            select(Badge)
            .where(
                and_(
                    Badge.quiz_id == quiz_id,
                    Badge.min_score <= score
                )
            )
            .order_by(Badge.min_score, Badge.badge_id)
        )
        return list(result.scalars().all())

    async def award_quiz_badges(self, user_id: int, quiz_id: int, score: int) -> List[Badge]:
        """Grant every eligible badge; returns only the newly granted ones."""
        badges = await self.eligible_badges(quiz_id, score)
        if not badges:
            return []

        # Rows skipped on conflict are not returned, so RETURNING lists only new grants
        user_badges = UserBadge.__table__
        stmt = conflict_insert(self.db, user_badges).values(
            [{"user_id": user_id, "badge_id": badge.badge_id} for badge in badges]
        ).on_conflict_do_nothing(
            index_elements=["user_id", "badge_id"]
        ).returning(user_badges.c.badge_id)
        result = await self.db.execute(stmt)
        granted_ids = set(result.scalars().all())

        awarded = [badge for badge in badges if badge.badge_id in granted_ids]
        for badge in awarded:
            logger.info(
                "Badge awarded",
                user_id=user_id,
                quiz_id=quiz_id,
                badge_name=badge.badge_name,
                min_score=badge.min_score
            )
        return awarded
