from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

import contacts_service.models  # noqa: F401
from contacts_service.api.router import api_router
from contacts_service.core.config import Settings, get_settings, redact_url, resolve_database_url
from contacts_service.core.errors import PartsConflict
from contacts_service.db.base import Base
from contacts_service.db.session import bind_engine, create_db_engine
from contacts_service.storage.registry import configure_storage

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        url = resolve_database_url(settings)
        engine = create_db_engine(url, echo=settings.sql_echo)
        bind_engine(engine)
        if settings.create_schema:
            Base.metadata.create_all(bind=engine)
        configure_storage()
        logger.info("%s ready (profile=%s, database=%s)", settings.app_name, settings.profile, redact_url(url))
        try:
            yield
        finally:
            engine.dispose()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.state.settings = settings
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.exception_handler(PartsConflict)
    async def parts_conflict_handler(request: Request, exc: PartsConflict):
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content=exc.messages)

    return app
