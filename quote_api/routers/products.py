from fastapi import APIRouter, Query, Depends
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
from quote_api.core.config import settings
from quote_api.core.db import get_db
from quote_api.domain.catalog import price_for_currency
from quote_api.models.product import Product
from quote_api.models.quote import CurrencyCode, Pricebook
from quote_api.schemas.catalog import AccountSchema, ProductSchema
from quote_api.schemas.responses import ApiResponse
from quote_api.repositories.account import AccountRepository
from quote_api.repositories.product import ProductRepository

router = APIRouter(prefix="/api", tags=["catalog"])


def _to_schema(product: Product, currency: Optional[CurrencyCode]) -> ProductSchema:
    schema = ProductSchema.model_validate(product)
    if currency is None:
        return schema
    hardware, per_license = price_for_currency(product, currency)
    return schema.model_copy(
        update={"hardware": hardware, "per_license_per_month": per_license}
    )


@router.get("/products", response_model=ApiResponse[List[ProductSchema]])
async def search_products(
    q: Optional[str] = Query(None, description="Search string for SKU or name"),
    pricebook: Optional[Pricebook] = Query(None),
    currency: Optional[CurrencyCode] = Query(None, description="Price the results in this currency"),
    session: AsyncSession = Depends(get_db),
) -> ApiResponse[List[ProductSchema]]:
    """
    Search products by SKU or name. Without a query, lists the pricebook
    (the default pricebook when none is given).
    """
    repo = ProductRepository(session)
    if q and q.strip():
        results = await repo.search(q, pricebook=pricebook.value if pricebook else None)
    else:
        book = pricebook.value if pricebook else settings.DEFAULT_PRICEBOOK
        results = await repo.search(pricebook=book, limit=500)
    return ApiResponse(data=[_to_schema(p, currency) for p in results])


@router.get("/accounts", response_model=ApiResponse[List[AccountSchema]])
async def search_accounts(
    q: str = Query("", description="Account name fragment"),
    exact: bool = Query(False),
    session: AsyncSession = Depends(get_db),
) -> ApiResponse[List[AccountSchema]]:
    repo = AccountRepository(session)
    if exact and q:
        account = await repo.get_by_name(q)
        accounts = [account] if account else []
    else:
        accounts = await repo.search(q)
    return ApiResponse(data=[AccountSchema.model_validate(a) for a in accounts])
