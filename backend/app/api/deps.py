"""FastAPI dependencies wiring repositories and storage to requests."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.config import Settings, get_settings
from backend.app.db.engine import get_session
from backend.app.db.repositories import (
    ActivityRepository,
    CatalogRepository,
    UserRepository,
)
from backend.app.db.sql_repositories import (
    SqlActivityRepository,
    SqlCatalogRepository,
    SqlUserRepository,
)
from backend.app.storage.files import LocalPdfStorage


async def get_user_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> UserRepository:
    return SqlUserRepository(session)


async def get_catalog_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CatalogRepository:
    return SqlCatalogRepository(session)


async def get_activity_repository(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ActivityRepository:
    return SqlActivityRepository(session)


def get_pdf_storage(settings: Annotated[Settings, Depends(get_settings)]) -> LocalPdfStorage:
    return LocalPdfStorage(settings.pdf_storage_root, settings.pdf_public_base_url)


Users = Annotated[UserRepository, Depends(get_user_repository)]
Catalog = Annotated[CatalogRepository, Depends(get_catalog_repository)]
Activities = Annotated[ActivityRepository, Depends(get_activity_repository)]
Storage = Annotated[LocalPdfStorage, Depends(get_pdf_storage)]
AppSettings = Annotated[Settings, Depends(get_settings)]
