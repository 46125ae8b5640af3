"""Dependency injection factories for the API."""

from typing import AsyncGenerator, Callable

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings
from domain.services.profile_service import ProfileService
from infrastructure.database.session import Database
from infrastructure.database.sqlalchemy_uow import SQLAlchemyUnitOfWork


def get_settings(request: Request) -> Settings:
    """The settings the app was created with."""
    app_settings: Settings = request.app.state.settings
    return app_settings


def get_database(request: Request) -> Database:
    """The connection pool handle built by the app factory."""
    database: Database = request.app.state.database
    return database


async def get_db_session(
    database: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Yield a raw session for endpoints that bypass the service layer."""
    async for session in database.session():
        yield session


def get_uow_factory(
    database: Database = Depends(get_database),
) -> Callable[[], SQLAlchemyUnitOfWork]:
    """Factory for creating Unit of Work instances."""

    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(database.session_factory)

    return factory


def get_profile_service(
    uow_factory: Callable[[], SQLAlchemyUnitOfWork] = Depends(get_uow_factory),
) -> ProfileService:
    """Get Profile service instance."""
    return ProfileService(uow_factory)
