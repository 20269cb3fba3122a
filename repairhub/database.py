"""Async SQLAlchemy engine and session factory."""

from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from repairhub.config import get_settings
from repairhub.core.exceptions import ConfigurationFailure


class Base(DeclarativeBase):
    """Declarative base for all models."""


@lru_cache
def get_engine() -> AsyncEngine:
    """Create the shared engine. Raises ConfigurationFailure if DATABASE_URL is unset."""
    settings = get_settings()
    if not settings.database_url:
        raise ConfigurationFailure("Missing database configuration (DATABASE_URL)")
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
    )


@lru_cache
def get_session_maker() -> async_sessionmaker:
    return async_sessionmaker(get_engine(), expire_on_commit=False)
