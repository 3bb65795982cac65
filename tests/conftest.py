"""
Shared fixtures.

API tests run the real application against a throwaway SQLite file; the
lifespan creates the schema and seeds the bundled catalog.
"""
import asyncio
import itertools
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from quote_api.core import db
from quote_api.core.config import settings
from quote_api.models.quote import PRICING_OPTIONS, ProductLineItem


def make_item(
    item_id: str = "item-1",
    *,
    per_license: float = 100.0,
    hardware: float = 0.0,
    quantity: int = 1,
    discounts=None,
    hardware_only=None,
) -> ProductLineItem:
    return ProductLineItem(
        id=item_id,
        productName=f"Product {item_id}",
        sku=f"SKU-{item_id}",
        quantity=quantity,
        hardware=hardware,
        perLicensePerMonth=per_license,
        discounts=discounts or {},
        isHardwareOnly=hardware_only,
    )


def line_item_payload(
    item_id: str = "item-1",
    *,
    per_license: float = 100.0,
    hardware: float = 0.0,
    quantity: int = 1,
    discounts=None,
) -> dict:
    return {
        "id": item_id,
        "productName": f"Product {item_id}",
        "sku": f"SKU-{item_id}",
        "quantity": quantity,
        "hardware": hardware,
        "perLicensePerMonth": per_license,
        "discounts": discounts or {opt.value: 0 for opt in PRICING_OPTIONS},
    }


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path}/quotes.db")
    monkeypatch.setattr(settings, "ENVIRONMENT", "dev")
    monkeypatch.setattr(settings, "SEED_CATALOG", True)
    monkeypatch.setattr(db, "_engine", None)
    monkeypatch.setattr(db, "_SessionLocal", None)

    from quote_api.main import app

    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def session_maker(tmp_path):
    engine = db.build_engine(f"sqlite+aiosqlite:///{tmp_path}/repo.db")
    asyncio.run(db.create_schema(engine))
    yield db.build_sessionmaker(engine)
    asyncio.run(engine.dispose())


@pytest.fixture
def ticking_clock():
    """Clock advancing one second per call, so write order is observable."""
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    counter = itertools.count()
    return lambda: start + timedelta(seconds=next(counter))
