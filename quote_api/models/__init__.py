from .quote import (
    PricingOption,
    PRICING_OPTIONS,
    Pricebook,
    CurrencyCode,
    NegotiationPosition,
    ProductLineItem,
    RebatesAndSubsidies,
    PricingBreakdown,
    PaymentOptionPricing,
    Quote,
    QuoteCreate,
    QuoteUpdate,
    DuplicateRequest,
)

__all__ = [
    "PricingOption",
    "PRICING_OPTIONS",
    "Pricebook",
    "CurrencyCode",
    "NegotiationPosition",
    "ProductLineItem",
    "RebatesAndSubsidies",
    "PricingBreakdown",
    "PaymentOptionPricing",
    "Quote",
    "QuoteCreate",
    "QuoteUpdate",
    "DuplicateRequest",
]
