from __future__ import annotations
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.api import router
from app.web import router as web_router
from datastore.location_catalog import build_default_catalog
from logging_config import configure_logging
from services.dashboard import build_default_dashboard
from services.sources import build_default_source


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
    build_default_dashboard()
    try:
        yield
    finally:
        build_default_dashboard.cache_clear()
        build_default_source.cache_clear()
        build_default_catalog.cache_clear()


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(
        title="River Water Quality DSS",
        description="Water-quality alerts and treatment dosing advice for river monitoring locations.",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.include_router(router)
    app.include_router(web_router)
    return app

app = create_app()
