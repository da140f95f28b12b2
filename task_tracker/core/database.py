"""Database connection and session management."""

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

from .config import settings


def build_engine(url: str, echo: bool = False):
    """
    Создать async engine под конкретный драйвер.

    SQLite работает через один StaticPool (иначе in-memory БД теряет данные
    между соединениями), PostgreSQL - без пула (NullPool).
    """
    if url.startswith("sqlite"):
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(url, echo=echo, poolclass=NullPool)


engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def init_db():
    """Initialize database (create all tables)."""
    from ..models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
