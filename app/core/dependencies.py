"""Shared dependencies for the Adoption API."""

from typing import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from app.core.database import Database
from app.gamification.badge_engine import BadgeEngine
from app.gamification.scoring import QuizScoringEngine

logger = structlog.get_logger()


def get_database(request: Request) -> Database:
    """Get the database handle attached to the running application."""
    return request.app.state.database


async def get_db(database: Database = Depends(get_database)) -> AsyncIterator[AsyncSession]:
    """Yield a session scoped to one request."""
    async with database.session() as session:
        yield session


def get_scoring_engine(db: AsyncSession = Depends(get_db)) -> QuizScoringEngine:
    """Get a quiz scoring engine bound to the request session."""
    return QuizScoringEngine(db, BadgeEngine(db))
