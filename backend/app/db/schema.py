"""
Schema creation on startup.
"""

from app.core.logging import get_logger
from app.db.database import get_engine
from app.models.domain import Base

logger = get_logger(__name__)


async def create_tables() -> None:
    """Create all database tables that do not exist yet."""
    engine = get_engine()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables created")


async def init_database() -> None:
    """
    Initialize the database schema.

    This should be called on application startup. Production deployments
    run the Alembic migrations first, which makes this a no-op.
    """
    logger.info("Initializing database schema")

    await create_tables()

    logger.info("Database initialization complete")
