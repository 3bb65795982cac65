from __future__ import annotations
import asyncio
import logging
import ssl
from pathlib import Path
from typing import Any, Dict, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool
from sqlalchemy import text
from quote_api.core.config import settings

log = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


_engine: Optional[AsyncEngine] = None
_SessionLocal: Optional[async_sessionmaker[AsyncSession]] = None


def _build_ssl_context(bundle: str) -> ssl.SSLContext:
    bundle_path = Path(bundle)
    if not bundle_path.exists():
        raise RuntimeError(f"DB CA bundle not found at: {bundle_path}")
    ctx = ssl.create_default_context(cafile=str(bundle_path))
    ctx.check_hostname = True
    return ctx


def build_engine(url: str, *, ca_bundle: Optional[str] = None) -> AsyncEngine:
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        db_path = parsed.database
        if db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        # one connection per session, nothing pinned to an event loop
        return create_async_engine(url, poolclass=NullPool, echo=False)

    connect_args: Dict[str, Any] = {"timeout": 5.0}
    if ca_bundle:
        connect_args["ssl"] = _build_ssl_context(ca_bundle)

    return create_async_engine(
        url,
        connect_args=connect_args,
        pool_size=5,
        max_overflow=5,
        pool_timeout=5.0,
        pool_pre_ping=True,
        pool_recycle=1800,
        echo=False,
    )


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


def get_engine() -> AsyncEngine:
    global _engine, _SessionLocal
    if _engine is None:
        if not settings.DATABASE_URL:
            raise RuntimeError("DATABASE_URL is not set")

        log.info("Setting up database engine (%s)", make_url(settings.DATABASE_URL).get_backend_name())

        _engine = build_engine(settings.DATABASE_URL, ca_bundle=settings.DB_CA_BUNDLE)
        _SessionLocal = build_sessionmaker(_engine)
    return _engine


def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    if _SessionLocal is None:
        get_engine()
    assert _SessionLocal is not None
    return _SessionLocal


async def dispose_engine() -> None:
    global _engine, _SessionLocal
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _SessionLocal = None


async def get_db():
    session_maker = get_sessionmaker()
    async with session_maker() as session:
        yield session


async def ping_db() -> bool:
    try:
        engine = get_engine()

        async def _do_ping():
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))

        await asyncio.wait_for(_do_ping(), timeout=6.0)
        return True
    except Exception as e:
        log.warning("DB ping failed (%s): %r", type(e).__name__, e)
        return False


async def create_schema(engine: AsyncEngine) -> None:
    # model modules register their tables on Base.metadata
    import quote_api.models.account  # noqa: F401
    import quote_api.models.product  # noqa: F401
    import quote_api.models.quote_record  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def create_schema_if_needed():
    await create_schema(get_engine())


async def wait_for_db(max_attempts: int = 20, delay_seconds: float = 1.5):
    for attempt in range(1, max_attempts + 1):
        if await ping_db():
            log.info("Database is reachable")
            return
        log.info("DB not ready yet (attempt %s/%s). Retrying...", attempt, max_attempts)
        await asyncio.sleep(delay_seconds)
    raise RuntimeError("Database not reachable after retries")
