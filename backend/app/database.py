"""
Exercise Tracker Backend — Database Session Management
========================================================

What:  Async SQLAlchemy engine, session factory, and FastAPI dependency.
Why:   The engine is the one process-wide persistence handle. It is created
       once, shared by every request, and disposed on shutdown.
How:   The engine owns a connection pool; each request borrows an AsyncSession
       through `get_db_session`, which commits on success and rolls back on
       error.
Who:   Route handlers (via Depends), the lifespan hooks in main.py, and the
       health check.

Concurrency:
    Requests run concurrently on one event loop. Sessions are never shared
    between requests; each single statement is atomic in the database and
    that is the only consistency guarantee the service relies on.
"""

from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Dict

from sqlalchemy import TIMESTAMP
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from app.config import settings


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _engine_options() -> Dict[str, Any]:
    """Pool options for the configured backend; SQLite picks its own pool class."""
    options: Dict[str, Any] = {"echo": settings.log_level == "DEBUG"}
    if not settings.is_sqlite:
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
        )
    return options


# ── Engine Configuration ──────────────────────────────────────────────────
# Creating the engine does not connect; the first connection is opened by the
# startup hook in main.py.
engine = create_async_engine(settings.database_url, **_engine_options())

# expire_on_commit=False: rows stay readable after the service commits
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all ORM models; its metadata drives `create_tables`."""
    pass


class TimestampMixin:
    """createdAt / updatedAt bookkeeping shared by every record type."""

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    On success the transaction is committed, on any error it is rolled back
    and the exception re-raised for the global handlers. The session is
    always closed so its connection returns to the pool.

    Example usage in a route:
        @router.get("/users")
        async def list_users(db: AsyncSession = Depends(get_db_session)):
            ...
    """
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ── Lifecycle Helpers ─────────────────────────────────────────────────────
async def create_tables() -> None:
    """Create any missing tables. There is no migration tool; this is idempotent."""
    # Import models so they register with Base.metadata
    from app.models import exercise, user  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    """Close all pooled connections; called on shutdown."""
    await engine.dispose()
