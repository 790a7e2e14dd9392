"""Shared FastAPI dependencies and resource factories."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from app.config import Settings, get_settings
from app.repositories.saved_list_repository import SavedListRepository
from app.shopify.client import AdminGraphQL, ShopifyAdminClient


def create_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


def create_shopify_client(settings: Settings) -> ShopifyAdminClient:
    return ShopifyAdminClient.from_settings(settings)


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a request-scoped session; commit on success, roll back on error."""
    async with request.app.state.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


def get_shopify_client(request: Request) -> AdminGraphQL:
    return request.app.state.shopify_client


def get_shop(settings: Annotated[Settings, Depends(get_settings)]) -> str:
    """The shop every saved-list query is scoped to."""
    return settings.shopify_shop_domain


SettingsDep = Annotated[Settings, Depends(get_settings)]
DBSession = Annotated[AsyncSession, Depends(get_db_session)]
ShopifyClient = Annotated[AdminGraphQL, Depends(get_shopify_client)]
CurrentShop = Annotated[str, Depends(get_shop)]


def get_saved_list_repo(session: DBSession) -> SavedListRepository:
    return SavedListRepository(session)


SavedListRepo = Annotated[SavedListRepository, Depends(get_saved_list_repo)]
