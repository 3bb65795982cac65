from typing import Dict, Optional, Tuple
from uuid import uuid4
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from quote_api.data.catalog import ACCOUNTS, PRODUCTS
from quote_api.models.account import Account
from quote_api.models.product import Product
from quote_api.models.quote import PRICING_OPTIONS, CurrencyCode, ProductLineItem
from quote_api.repositories.account import AccountRepository
from quote_api.repositories.product import ProductRepository

logger = logging.getLogger(__name__)


def price_for_currency(product: Product, currency: CurrencyCode) -> Tuple[float, float]:
    """(hardware, perLicensePerMonth) from the product's price table for ``currency``."""
    table: Dict[str, Dict[str, float]] = product.prices or {}
    entry = table.get(currency.value)
    if entry:
        return (
            float(entry.get("hardware", product.hardware) or 0.0),
            float(entry.get("perLicensePerMonth", product.per_license_per_month) or 0.0),
        )
    return float(product.hardware or 0.0), float(product.per_license_per_month or 0.0)


def build_line_item(
    product: Product,
    currency: CurrencyCode,
    *,
    quantity: int = 1,
    item_id: Optional[str] = None,
) -> ProductLineItem:
    hardware, per_license = price_for_currency(product, currency)
    return ProductLineItem(
        id=item_id or f"item-{uuid4().hex[:12]}",
        productName=product.name,
        sku=product.sku,
        quantity=quantity,
        hardware=hardware,
        perLicensePerMonth=per_license,
        discounts={opt: 0.0 for opt in PRICING_OPTIONS},
        isHardwareOnly=product.is_hardware_only,
    )


async def seed_catalog(session: AsyncSession) -> None:
    if await ProductRepository(session).count() == 0:
        session.add_all([Product(**p) for p in PRODUCTS])
        logger.info("Seeded %s catalog products", len(PRODUCTS))
    if await AccountRepository(session).count() == 0:
        session.add_all([Account(**a) for a in ACCOUNTS])
        logger.info("Seeded %s accounts", len(ACCOUNTS))
    await session.commit()
