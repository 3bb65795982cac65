from typing import List, Optional
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from quote_api.auth.deps import get_current_username
from quote_api.core.db import get_db
from quote_api.deps import get_quote_service
from quote_api.domain.services import QuoteService
from quote_api.domain.views import (
    CustomerQuote,
    QuoteComparison,
    build_comparison,
    build_customer_quote,
)
from quote_api.models.quote import (
    DuplicateRequest,
    PricingOption,
    Quote,
    QuoteCreate,
    QuoteUpdate,
)
from quote_api.repositories.product import ProductRepository
from quote_api.schemas.catalog import AddProductIn
from quote_api.schemas.responses import ApiResponse, DeletedOut

router = APIRouter(prefix="/api/quotes", tags=["quotes"])
logger = logging.getLogger(__name__)


@router.get("", response_model=ApiResponse[List[Quote]])
async def list_quotes(
    service: QuoteService = Depends(get_quote_service),
) -> ApiResponse[List[Quote]]:
    quotes = await service.list_quotes()
    logger.info("Returning %s quotes", len(quotes))
    return ApiResponse(data=quotes)


@router.post(
    "", response_model=ApiResponse[Quote], status_code=status.HTTP_201_CREATED
)
async def create_quote(
    body: QuoteCreate,
    service: QuoteService = Depends(get_quote_service),
    current_user: Optional[str] = Depends(get_current_username),
) -> ApiResponse[Quote]:
    quote = await service.create_quote(body, created_by=current_user)
    return ApiResponse(data=quote)


@router.get("/{quote_id}", response_model=ApiResponse[Quote])
async def get_quote(
    quote_id: str, service: QuoteService = Depends(get_quote_service)
) -> ApiResponse[Quote]:
    return ApiResponse(data=await service.get_quote(quote_id))


@router.put("/{quote_id}", response_model=ApiResponse[Quote])
async def update_quote(
    quote_id: str,
    body: QuoteUpdate,
    service: QuoteService = Depends(get_quote_service),
) -> ApiResponse[Quote]:
    return ApiResponse(data=await service.update_quote(quote_id, body))


@router.delete("/{quote_id}", response_model=ApiResponse[DeletedOut])
async def delete_quote(
    quote_id: str, service: QuoteService = Depends(get_quote_service)
) -> ApiResponse[DeletedOut]:
    await service.delete_quote(quote_id)
    return ApiResponse(data=DeletedOut(id=quote_id))


@router.post(
    "/{quote_id}/duplicate",
    response_model=ApiResponse[Quote],
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_quote(
    quote_id: str,
    body: Optional[DuplicateRequest] = None,
    service: QuoteService = Depends(get_quote_service),
    current_user: Optional[str] = Depends(get_current_username),
) -> ApiResponse[Quote]:
    created_by = (body.createdBy if body else None) or current_user or "unknown"
    return ApiResponse(data=await service.duplicate_quote(quote_id, created_by))


@router.post("/{quote_id}/line-items", response_model=ApiResponse[Quote])
async def add_line_item(
    quote_id: str,
    body: AddProductIn,
    service: QuoteService = Depends(get_quote_service),
    session: AsyncSession = Depends(get_db),
) -> ApiResponse[Quote]:
    quote = await service.get_quote(quote_id)
    product = await ProductRepository(session).get_by_sku(body.sku, quote.pricebook.value)
    if product is None:
        raise HTTPException(
            status_code=404,
            detail=f"Product {body.sku} not found in pricebook {quote.pricebook.value}",
        )
    return ApiResponse(data=await service.add_product(quote_id, product, body.quantity))


@router.get("/{quote_id}/comparison", response_model=ApiResponse[QuoteComparison])
async def compare_quote(
    quote_id: str, service: QuoteService = Depends(get_quote_service)
) -> ApiResponse[QuoteComparison]:
    quote = await service.get_quote(quote_id)
    return ApiResponse(data=build_comparison(quote))


@router.get("/{quote_id}/view/{option}", response_model=ApiResponse[CustomerQuote])
async def customer_view(
    quote_id: str,
    option: PricingOption,
    service: QuoteService = Depends(get_quote_service),
) -> ApiResponse[CustomerQuote]:
    quote = await service.get_quote(quote_id)
    return ApiResponse(data=build_customer_quote(quote, option))
