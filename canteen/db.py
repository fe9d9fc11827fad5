import logging
from contextlib import asynccontextmanager

from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from canteen.core.config import settings
from canteen.core.errors import CanteenError, StorageError
from canteen.models.base import Base

log = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(engine) -> None:
    """SQLite only enforces ON DELETE rules when asked to, per connection."""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, echo: bool = False):
    new_engine = create_async_engine(url, echo=echo, pool_pre_ping=True)
    if new_engine.dialect.name == "sqlite":
        enable_sqlite_foreign_keys(new_engine)
    return new_engine


# Create engine
engine = build_engine(settings.database_url, echo=settings.sql_echo)

# Async session maker
async_session = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


# Dependency
async def get_db():
    async with async_session() as session:
        yield session


@asynccontextmanager
async def atomic(db: AsyncSession):
    """
    Run a multi-row write as one unit: commit on success, roll back on any
    failure. Business errors pass through unchanged; driver errors surface
    as a generic StorageError.

    The rollback expires every object held by the session. Under asyncio an
    expired attribute cannot lazy-load, so callers must reload (for example
    with ``populate_existing``) before touching objects after a failure.
    Checks that may reject without writing belong outside the block.
    """
    try:
        yield db
        await db.commit()
    except CanteenError:
        await db.rollback()
        raise
    except SQLAlchemyError as exc:
        await db.rollback()
        log.exception("transaction rolled back")
        raise StorageError() from exc


async def create_db_and_tables(bind=None):
    import canteen.models  # noqa: F401  registers every mapped class

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
