"""
FastAPI dependency providers.

Every service of a request shares the request's session, so all writes of one request
commit or roll back together.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.clients.osm_client import OsmClient
from app.config.settings import Settings, get_settings
from app.database.session import get_async_session
from app.services import ApprovalConfiguration, PosService, ReviewService, UserService

DbSession = Annotated[AsyncSession, Depends(get_async_session)]
AppSettings = Annotated[Settings, Depends(get_settings)]


def get_osm_client(settings: AppSettings) -> OsmClient:
    return OsmClient.from_settings(settings)


def get_pos_service(db: DbSession, osm_client: Annotated[OsmClient, Depends(get_osm_client)]) -> PosService:
    return PosService(db, osm_client=osm_client)


def get_user_service(db: DbSession) -> UserService:
    return UserService(db)


def get_review_service(db: DbSession, settings: AppSettings) -> ReviewService:
    return ReviewService(db, ApprovalConfiguration.from_settings(settings))
