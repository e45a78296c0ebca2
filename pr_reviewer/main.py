"""Главный модуль FastAPI приложения."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import yaml
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from pr_reviewer.api.errors import (
    http_exception_handler,
    service_exception_handler,
    validation_exception_handler,
)
from pr_reviewer.api.v1 import health, pull_requests, teams, users
from pr_reviewer.core.cache import close_cache, init_cache
from pr_reviewer.core.config import settings
from pr_reviewer.core.database import build_engine, build_session_maker, close_db, init_db
from pr_reviewer.core.exceptions import ServiceException
from pr_reviewer.core.logging import setup_logging

logger = logging.getLogger("pr-reviewer")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifecycle events: движок БД принадлежит приложению."""
    setup_logging(settings.LOG_LEVEL)
    engine = build_engine(settings)
    app.state.engine = engine
    app.state.session_maker = build_session_maker(engine)
    await init_db(engine)
    await init_cache()
    logger.info(f"Service started on {settings.APP_HOST}:{settings.APP_PORT}")
    yield
    await close_cache()
    await close_db(engine)
    logger.info("Service stopped")


app = FastAPI(
    title="PR Reviewer Assignment Service",
    version="1.0.0",
    lifespan=lifespan,
)


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema

    openapi_path = Path(__file__).parent.parent / "openapi.yml"
    with open(openapi_path, "r", encoding="utf-8") as f:
        openapi_schema = yaml.safe_load(f)

    app.openapi_schema = openapi_schema
    return app.openapi_schema


app.openapi = custom_openapi

# Регистрируем обработчики исключений
app.add_exception_handler(ServiceException, service_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)

# Регистрируем роутеры
app.include_router(health.router)
app.include_router(teams.router)
app.include_router(users.router)
app.include_router(pull_requests.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.APP_HOST, port=settings.APP_PORT)
