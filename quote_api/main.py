from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware
from contextlib import asynccontextmanager
import logging

from quote_api.core.config import settings
from quote_api.core.exceptions import register_exception_handlers
from quote_api.core.logging import setup_logging
from quote_api.routers import health, products, quotes, user, warehouse

from quote_api.core.db import (
    create_schema_if_needed,
    dispose_engine,
    get_sessionmaker,
    wait_for_db,
)
from quote_api.domain.catalog import seed_catalog

log = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    await wait_for_db()
    await create_schema_if_needed()
    if settings.SEED_CATALOG:
        async with get_sessionmaker()() as session:
            await seed_catalog(session)
    log.info("%s %s ready (%s)", settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)
    yield
    await dispose_engine()


app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)

app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health.router)
app.include_router(products.router)
app.include_router(quotes.router)
app.include_router(user.router)
app.include_router(warehouse.router)
