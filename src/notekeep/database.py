# Database connection setup
from pathlib import Path
from typing import Any, AsyncIterator, Optional

from alembic import command
from alembic.config import Config
from fastapi import Request
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from .config import get_settings
from .core.logging import get_logger
from .core.models.base import BaseModel

logger = get_logger("database")

MIGRATIONS_DIR = Path(__file__).resolve().parent / "migrations"


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):  # noqa: ANN001
    # SQLite ignores ON DELETE CASCADE unless asked per connection
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


class Database:
    """Async engine plus session factory, one per process."""

    def __init__(self, url: str, echo: bool = False, **engine_kwargs: Any):
        self.url = url
        self.engine = create_async_engine(url, echo=echo, **engine_kwargs)
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )

    @classmethod
    def from_settings(cls) -> "Database":
        settings = get_settings()
        return cls(settings.database_url, echo=settings.database_echo)

    async def create_all(self) -> None:
        """Create all tables straight from the models (tests only)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db_session(request: Request) -> AsyncIterator[AsyncSession]:
    """Get database session."""
    database: Database = request.app.state.database
    async with database.session_factory() as session:
        try:
            yield session
        except SQLAlchemyError:
            await session.rollback()
            raise
        finally:
            await session.close()


def alembic_config(database_url: Optional[str] = None) -> Config:
    """Alembic config pointing at the migration scripts shipped with the package."""
    url = database_url or get_settings().database_url
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    # configparser interpolation treats % specially
    config.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    return config


def run_migrations(database_url: Optional[str] = None) -> None:
    """Upgrade the schema to the latest revision."""
    logger.info("Running database migrations")
    command.upgrade(alembic_config(database_url), "head")
    logger.info("Database schema is up to date")
