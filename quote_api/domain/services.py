from typing import Any, Dict, List, Optional, Sequence
import logging

from quote_api.core.config import settings
from quote_api.core.exceptions import QuoteNotFoundError, QuoteValidationError
from quote_api.domain.catalog import build_line_item
from quote_api.domain.formatting import generate_deal_name
from quote_api.domain.legacy import normalize_pricing_options
from quote_api.domain.pricing import calculate_payment_option_pricing
from quote_api.models.product import Product
from quote_api.models.quote import (
    CurrencyCode,
    PaymentOptionPricing,
    Pricebook,
    PricingOption,
    ProductLineItem,
    Quote,
    QuoteCreate,
    QuoteUpdate,
    RebatesAndSubsidies,
)
from quote_api.repositories.quote import QuoteRepository

logger = logging.getLogger(__name__)

# fields whose change invalidates paymentOptionPricing
PRICING_INPUT_FIELDS = frozenset(
    {"productLineItems", "pricingOptions", "termLength", "rebatesAndSubsidies"}
)


def _json_items(items: Sequence[ProductLineItem]) -> List[Dict[str, Any]]:
    return [item.model_dump(mode="json") for item in items]


def _json_pricing(pricing: Sequence[PaymentOptionPricing]) -> List[Dict[str, Any]]:
    return [p.model_dump(mode="json") for p in pricing]


def _strip_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


class QuoteService:
    """
    Application service for the quote lifecycle.
    Pricing is recomputed here, before the single whole-record write.
    """

    def __init__(self, repository: QuoteRepository) -> None:
        self.repository = repository

    def price(
        self,
        items: Sequence[ProductLineItem],
        options: Sequence[PricingOption],
        term_length: int,
        incentives: Optional[RebatesAndSubsidies],
    ) -> List[PaymentOptionPricing]:
        if not options:
            raise QuoteValidationError("At least one pricing option is required")
        if term_length <= 0:
            raise QuoteValidationError("Term length must be greater than zero")
        logger.debug(
            "Pricing %s line items for %s over %s months",
            len(items),
            [o.value for o in options],
            term_length,
        )
        return calculate_payment_option_pricing(items, options, term_length, incentives)

    async def list_quotes(self) -> List[Quote]:
        return await self.repository.list_all()

    async def get_quote(self, quote_id: str) -> Quote:
        quote = await self.repository.get_by_id(quote_id)
        if quote is None:
            raise QuoteNotFoundError(quote_id)
        return quote

    async def create_quote(self, body: QuoteCreate, created_by: Optional[str] = None) -> Quote:
        account_name = (body.accountName or "").strip()
        if not account_name:
            raise QuoteValidationError("Account name is required")

        options = normalize_pricing_options(body.pricingOptions, body.pricingOption)
        term_length = body.termLength or settings.DEFAULT_TERM_LENGTH
        deal_name = _strip_or_none(body.dealName) or generate_deal_name(account_name)

        pricing = self.price(
            body.productLineItems, options, term_length, body.rebatesAndSubsidies
        )

        data: Dict[str, Any] = {
            "accountName": account_name,
            "dealName": deal_name,
            "opportunityId": _strip_or_none(body.opportunityId),
            "pricingOptions": [o.value for o in options],
            "pricebook": (body.pricebook or Pricebook(settings.DEFAULT_PRICEBOOK)).value,
            "currency": (body.currency or CurrencyCode(settings.DEFAULT_CURRENCY)).value,
            "termLength": term_length,
            "fleetSize": body.fleetSize,
            "negotiationPosition": (
                body.negotiationPosition.value if body.negotiationPosition else None
            ),
            "productLineItems": _json_items(body.productLineItems),
            "paymentOptionPricing": _json_pricing(pricing),
            "rebatesAndSubsidies": (
                body.rebatesAndSubsidies.model_dump(mode="json")
                if body.rebatesAndSubsidies
                else None
            ),
            "notes": _strip_or_none(body.notes),
            "pricingExpiresOn": body.pricingExpiresOn,
            "createdBy": body.createdBy or created_by or "unknown",
        }
        return await self.repository.create(data)

    async def update_quote(self, quote_id: str, body: QuoteUpdate) -> Quote:
        existing = await self.get_quote(quote_id)

        changes = body.model_dump(mode="json", exclude_unset=True)
        legacy_option = changes.pop("pricingOption", None)
        if legacy_option and "pricingOptions" not in changes:
            changes["pricingOptions"] = [legacy_option]
        # null on a required field means "leave as is"
        for key in ("pricingOptions", "termLength", "productLineItems", "accountName", "dealName"):
            if key in changes and changes[key] is None:
                changes.pop(key)

        if PRICING_INPUT_FIELDS & changes.keys():
            items = (
                body.productLineItems
                if "productLineItems" in changes
                else existing.productLineItems
            )
            options = (
                normalize_pricing_options(changes["pricingOptions"])
                if "pricingOptions" in changes
                else existing.pricingOptions
            )
            term_length = changes.get("termLength", existing.termLength)
            incentives = (
                body.rebatesAndSubsidies
                if "rebatesAndSubsidies" in changes
                else existing.rebatesAndSubsidies
            )
            pricing = self.price(items, options, term_length, incentives)
            changes["paymentOptionPricing"] = _json_pricing(pricing)
            logger.info("Recomputed pricing for quote %s", quote_id)

        updated = await self.repository.update(quote_id, changes)
        if updated is None:
            raise QuoteNotFoundError(quote_id)
        return updated

    async def add_product(self, quote_id: str, product: Product, quantity: int = 1) -> Quote:
        quote = await self.get_quote(quote_id)
        item = build_line_item(product, quote.currency, quantity=quantity)
        items = [*quote.productLineItems, item]
        return await self.update_quote(quote_id, QuoteUpdate(productLineItems=items))

    async def delete_quote(self, quote_id: str) -> None:
        if not await self.repository.delete(quote_id):
            raise QuoteNotFoundError(quote_id)

    async def duplicate_quote(self, quote_id: str, created_by: str) -> Quote:
        duplicated = await self.repository.duplicate(quote_id, created_by)
        if duplicated is None:
            raise QuoteNotFoundError(quote_id)
        return duplicated
