import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from book_catalog_api.api.errors import register_exception_handlers
from book_catalog_api.api.routes.books import router as books_router
from book_catalog_api.api.routes.health import router as health_router
from book_catalog_api.config import settings
from book_catalog_api.database import run_migrations
from book_catalog_api.logging_config import configure_logging
from book_catalog_api.middleware import RequestContextMiddleware

configure_logging(
    level=settings.log_level,
    output_format=settings.log_format,
    service_name=settings.log_service_name,
)
logger = logging.getLogger(__name__)
logger.info("Application bootstrapped")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    if settings.migrate_on_startup:
        run_migrations()
    yield


app = FastAPI(
    title=settings.app_name,
    description=settings.app_description,
    version=settings.app_version,
    lifespan=lifespan,
)
app.add_middleware(RequestContextMiddleware)
register_exception_handlers(app)
app.include_router(books_router)
app.include_router(health_router)


def run() -> None:
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
