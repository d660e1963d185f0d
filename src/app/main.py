"""
Application factory.

    uvicorn app.main:app
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from app.api.v1 import api_router
from app.api.v1.error_handlers import register_exception_handlers
from app.config.settings import Settings, get_settings
from app.core.logging import RequestIDMiddleware, setup_logging, stop_queue_logging
from app.database.base import Base
from app.database.session import get_engine
from app import models  # noqa: F401  registers the tables
from app.utils.logging import get_project_version

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("app.startup", extra={"env": app.state.settings.ENV})
    try:
        yield
    finally:
        await get_engine().dispose()
        logger.info("app.shutdown")
        stop_queue_logging()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title="Campus Coffee",
        version=get_project_version(),
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
