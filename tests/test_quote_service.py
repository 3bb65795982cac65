"""QuoteService against an in-memory repository."""
import asyncio
from typing import Any, Dict, List, Optional

import pytest

from conftest import make_item
from quote_api.core.exceptions import QuoteNotFoundError, QuoteValidationError
from quote_api.domain.services import QuoteService
from quote_api.models.quote import PricingOption, Quote, QuoteCreate, QuoteUpdate


class InMemoryQuoteRepository:
    def __init__(self) -> None:
        self.docs: Dict[str, Dict[str, Any]] = {}

    async def create(self, data: Dict[str, Any]) -> Quote:
        quote_id = f"quote-{len(self.docs) + 1}"
        doc = {**data, "id": quote_id, "createdAt": "2026-01-01T00:00:00", "updatedAt": "2026-01-01T00:00:00"}
        self.docs[quote_id] = Quote.model_validate(doc).model_dump(mode="json")
        return Quote.model_validate(self.docs[quote_id])

    async def get_by_id(self, quote_id: str) -> Optional[Quote]:
        doc = self.docs.get(quote_id)
        return Quote.model_validate(doc) if doc else None

    async def update(self, quote_id: str, updates: Dict[str, Any]) -> Optional[Quote]:
        if quote_id not in self.docs:
            return None
        self.docs[quote_id] = Quote.model_validate({**self.docs[quote_id], **updates}).model_dump(mode="json")
        return Quote.model_validate(self.docs[quote_id])

    async def delete(self, quote_id: str) -> bool:
        return self.docs.pop(quote_id, None) is not None

    async def duplicate(self, quote_id: str, created_by: str) -> Optional[Quote]:
        return None

    async def list_all(self) -> List[Quote]:
        return [Quote.model_validate(d) for d in self.docs.values()]


@pytest.fixture
def service():
    return QuoteService(InMemoryQuoteRepository())


def test_create_stores_pricing_for_each_option(service):
    body = QuoteCreate(
        accountName="  Acme Corporation ",
        pricingOptions=[PricingOption.ANNUAL, PricingOption.QUARTERLY],
        termLength=12,
        productLineItems=[make_item()],
    )

    quote = asyncio.run(service.create_quote(body, created_by="rep@example.com"))

    assert quote.accountName == "Acme Corporation"
    assert quote.createdBy == "rep@example.com"
    assert [p.paymentOption for p in quote.paymentOptionPricing] == [
        PricingOption.ANNUAL,
        PricingOption.QUARTERLY,
    ]


def test_quantity_change_reprices(service):
    quote = asyncio.run(
        service.create_quote(QuoteCreate(accountName="Acme", termLength=12, productLineItems=[make_item()]))
    )
    items = [quote.productLineItems[0].with_quantity(3)]

    updated = asyncio.run(service.update_quote(quote.id, QuoteUpdate(productLineItems=items)))

    assert updated.pricing_for(PricingOption.ANNUAL).breakdown.acv == pytest.approx(3600)


def test_null_required_fields_are_left_alone(service):
    quote = asyncio.run(service.create_quote(QuoteCreate(accountName="Acme", termLength=12)))

    updated = asyncio.run(
        service.update_quote(quote.id, QuoteUpdate(termLength=None, notes="kept"))
    )

    assert updated.termLength == 12
    assert updated.notes == "kept"


def test_price_rejects_non_positive_term(service):
    with pytest.raises(QuoteValidationError):
        service.price([make_item()], [PricingOption.ANNUAL], 0, None)


def test_missing_quote(service):
    with pytest.raises(QuoteNotFoundError):
        asyncio.run(service.get_quote("quote-9"))
    with pytest.raises(QuoteNotFoundError):
        asyncio.run(service.delete_quote("quote-9"))
    with pytest.raises(QuoteNotFoundError):
        asyncio.run(service.duplicate_quote("quote-9", "someone"))
