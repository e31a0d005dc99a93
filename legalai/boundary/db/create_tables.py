"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, legalai.boundary.db
System role: Database schema initialization

Usage:
    python -m legalai.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from legalai.boundary.db.base import Base
from legalai.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from legalai.boundary.db.models import (  # noqa: F401
    DocumentModel,
    DocumentVersionModel,
    FindingModel,
    RedlineRunModel,
    UserDecisionModel,
)

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: issues CREATE TABLE only for missing tables, so safe
    to run on every startup.

    Args:
        engine: Optional engine (defaults to the configured engine)
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created", extra={"tables": len(Base.metadata.tables)})


if __name__ == "__main__":
    asyncio.run(create_all_tables())
    print("All tables created successfully.")
