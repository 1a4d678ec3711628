"""Gamification models."""

from datetime import datetime
from sqlalchemy import Column, String, Integer, DateTime, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship

from app.core.database import Base


class Badge(Base):
    """Badge unlocked by reaching ``min_score`` on a quiz."""
    __tablename__ = "badges"

    badge_id = Column(Integer, primary_key=True, autoincrement=True)
    quiz_id = Column(Integer, ForeignKey("quizzes.quiz_id"), nullable=False, index=True)
    badge_name = Column(String(100), nullable=False)
    badge_image = Column(String(255))
    min_score = Column(Integer, nullable=False, default=0)

    # Relationships
    user_badges = relationship("UserBadge", back_populates="badge")


class UserBadge(Base):
    """Badges earned by users."""
    __tablename__ = "user_badges"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    badge_id = Column(Integer, ForeignKey("badges.badge_id"), nullable=False)
    earned_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    badge = relationship("Badge", back_populates="user_badges")

    __table_args__ = (
        UniqueConstraint("user_id", "badge_id"),
        Index("ix_user_badge_earned", "earned_at"),
    )
