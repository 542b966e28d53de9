from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base
import os
from typing import Optional
from functools import lru_cache

# Database URLs
SQLITE_DEV_DB = "sqlite+aiosqlite:///./dev.db"
SQLITE_TEST_DB = "sqlite+aiosqlite:///./test.db"
SQLITE_PROD_DB = "sqlite+aiosqlite:///./prod.db"

Base = declarative_base()

def get_database_url() -> str:
    """Resolve the database URL for the current APP_ENV"""
    env = os.getenv("APP_ENV", "development")
    if env == "test":
        return SQLITE_TEST_DB
    elif env == "production":
        return os.getenv("DATABASE_URL", SQLITE_PROD_DB)
    else:  # development
        return SQLITE_DEV_DB

@lru_cache()
def get_engine() -> AsyncEngine:
    """Get the database engine"""
    return create_async_engine(get_database_url())

def get_session_maker():
    """Get the session factory"""
    return async_sessionmaker(
        bind=get_engine(),
        autoflush=False,
        expire_on_commit=False
    )

async def get_session():
    """Get a database session"""
    SessionLocal = get_session_maker()
    async with SessionLocal() as session:
        yield session

async def create_tables(db_engine: Optional[AsyncEngine] = None):
    """Create all tables

    Args:
        db_engine: optional engine, the default engine is used when omitted
    """
    # models must be imported so their tables are registered on Base
    from cms_admin.models import comment, post, user  # noqa: F401

    engine = db_engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
