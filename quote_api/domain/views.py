"""
Read models for the comparison screen and the customer quote document.

Both are assembled from the quote's stored ``paymentOptionPricing`` and the
pricing engine helpers; nothing here computes prices on its own.
"""
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel

from quote_api.core.exceptions import PricingOptionNotSelectedError
from quote_api.domain import labels
from quote_api.domain.formatting import (
    deal_health,
    format_currency,
    format_long_date,
    format_percentage,
    generate_formatted_quote_text,
)
from quote_api.domain.pricing import (
    MONTHS_PER_YEAR,
    free_months_credit,
    frequency,
    is_hardware_only,
    post_discount_monthly_price,
    rebate_credit,
    subsidy_credit,
    value_line_item,
)
from quote_api.models.quote import PaymentOptionPricing, PricingOption, Quote


class ComparisonProduct(BaseModel):
    id: str
    productName: str
    sku: str
    quantity: int
    isHardwareOnly: bool
    prices: Dict[str, float]
    display: Dict[str, str]


class ComparisonRow(BaseModel):
    label: str
    sameForAll: bool = False
    values: Dict[str, Optional[float]]
    display: Dict[str, str]


class QuoteComparison(BaseModel):
    quoteId: str
    accountName: str
    dealName: str
    opportunityId: Optional[str] = None
    currency: str
    termLength: int
    pricebook: str
    pricingOptions: List[PricingOption]
    products: List[ComparisonProduct]
    rows: List[ComparisonRow]


class CustomerProduct(BaseModel):
    productName: str
    sku: str
    quantity: int
    isHardwareOnly: bool
    hardware: float
    monthlyPrice: float
    annualPrice: float


class CustomerSummary(BaseModel):
    blendedDiscount: float
    acv: float
    licenseTcv: float
    recurringAnnualPayment: float
    recurringPaymentLabel: str
    recurringPaymentValue: float
    firstPeriodPaymentLabel: Optional[str] = None
    firstPeriodPayment: Optional[float] = None
    discountedHardware: float
    dealHealth: Dict[str, object]


class CustomerQuote(BaseModel):
    quoteId: str
    accountName: str
    dealName: str
    paymentOption: PricingOption
    termLength: int
    date: str
    currency: str
    products: List[CustomerProduct]
    summary: CustomerSummary
    text: str
    formattedText: str


_DASH = "—"


def _pricing_by_option(quote: Quote) -> Dict[PricingOption, PaymentOptionPricing]:
    return {p.paymentOption: p for p in quote.paymentOptionPricing}


def _upfront_credits(quote: Quote, option: PricingOption, pricing: PaymentOptionPricing) -> float:
    incentives = quote.rebatesAndSubsidies
    return rebate_credit(incentives, option) + subsidy_credit(
        incentives, option, pricing.breakdown.acvWithoutUpfrontDiscounts
    )


def _free_months_value(quote: Quote, option: PricingOption) -> float:
    monthly = post_discount_monthly_price(quote.productLineItems, option, quote.termLength)
    return free_months_credit(quote.rebatesAndSubsidies, option, monthly)


def build_comparison(quote: Quote) -> QuoteComparison:
    currency = quote.currency.value
    options = list(quote.pricingOptions)
    pricing = _pricing_by_option(quote)

    def money(value: Optional[float]) -> str:
        return _DASH if value is None else format_currency(value, currency)

    products: List[ComparisonProduct] = []
    for item in quote.productLineItems:
        prices: Dict[str, float] = {}
        for option in options:
            valuation = value_line_item(item, option, quote.termLength)
            prices[option.value] = (
                valuation.discounted_hardware if valuation.hardware_only else valuation.option_price
            )
        products.append(
            ComparisonProduct(
                id=item.id,
                productName=item.productName,
                sku=item.sku,
                quantity=item.quantity,
                isHardwareOnly=is_hardware_only(item),
                prices=prices,
                display={k: money(v) for k, v in prices.items()},
            )
        )

    def row(
        label: str,
        getter: Callable[[PricingOption, PaymentOptionPricing], Optional[float]],
        *,
        percent: bool = False,
        same_for_all: bool = False,
    ) -> ComparisonRow:
        values: Dict[str, Optional[float]] = {}
        display: Dict[str, str] = {}
        for option in options:
            p = pricing.get(option)
            value = getter(option, p) if p is not None else None
            values[option.value] = value
            if value is None:
                display[option.value] = _DASH
            elif percent:
                display[option.value] = format_percentage(value)
            else:
                display[option.value] = money(value)
        return ComparisonRow(label=label, sameForAll=same_for_all, values=values, display=display)

    rows = [
        row("Annual List Value", lambda o, p: p.annualListPrice, same_for_all=True),
        row("Subsidies / Rebates", lambda o, p: _upfront_credits(quote, o, p)),
        row("Free Months", lambda o, p: _free_months_value(quote, o)),
        row("Blended Discount %", lambda o, p: p.blendedDiscount, percent=True),
        row("Discount Value", lambda o, p: p.breakdown.discountValue),
        row("Annual Contract Value", lambda o, p: p.breakdown.acv),
        row("Total Contract Value", lambda o, p: p.breakdown.licenseTcv),
        row(
            "Recurring / Upfront Payment",
            lambda o, p: labels.recurring_payment_value(p.breakdown, o),
        ),
        row("First Period Payment", lambda o, p: p.breakdown.firstPeriodPayment),
    ]

    return QuoteComparison(
        quoteId=quote.id,
        accountName=quote.accountName,
        dealName=quote.dealName,
        opportunityId=quote.opportunityId,
        currency=currency,
        termLength=quote.termLength,
        pricebook=quote.pricebook.value,
        pricingOptions=options,
        products=products,
        rows=rows,
    )


def _customer_products(quote: Quote, option: PricingOption) -> List[CustomerProduct]:
    months = frequency(option, quote.termLength)
    out: List[CustomerProduct] = []
    for item in quote.productLineItems:
        valuation = value_line_item(item, option, quote.termLength)
        monthly = valuation.option_price / months if months else 0.0
        out.append(
            CustomerProduct(
                productName=item.productName,
                sku=item.sku,
                quantity=item.quantity,
                isHardwareOnly=valuation.hardware_only,
                hardware=valuation.discounted_hardware,
                monthlyPrice=monthly,
                annualPrice=monthly * MONTHS_PER_YEAR,
            )
        )
    return out


def render_customer_text(
    quote: Quote,
    option: PricingOption,
    pricing: PaymentOptionPricing,
    products: List[CustomerProduct],
) -> str:
    currency = quote.currency.value
    lines = [
        f"QUOTE FOR {quote.accountName.upper()}",
        f"Deal: {quote.dealName}",
        f"Date: {format_long_date(quote.updatedAt)}",
        f"Payment Option: {option.value}",
        f"Term: {quote.termLength} months",
        "",
        "PRODUCTS:",
    ]
    for product in products:
        lines.append(f"- {product.productName} (SKU: {product.sku})")
        lines.append(f"  Quantity: {product.quantity}")
        if product.hardware > 0:
            lines.append(f"  Hardware: {format_currency(product.hardware, currency)}")
        if not product.isHardwareOnly:
            lines.append(f"  Monthly Price: {format_currency(product.monthlyPrice, currency)}")
            lines.append(f"  Annual Price: {format_currency(product.annualPrice, currency)}")
        lines.append("")

    lines.append("SUMMARY:")
    lines.append(f"Blended Discount: {format_percentage(pricing.blendedDiscount)}")
    lines.append(f"ACV: {format_currency(pricing.breakdown.acv, currency)}")
    lines.append(f"License TCV: {format_currency(pricing.breakdown.licenseTcv, currency)}")
    lines.append(
        f"Recurring Annual Payment: {format_currency(pricing.recurringAnnualPayment, currency)}"
    )
    first_label = labels.first_period_payment_label(option)
    if first_label and pricing.breakdown.firstPeriodPayment is not None:
        lines.append(
            f"{first_label}: {format_currency(pricing.breakdown.firstPeriodPayment, currency)}"
        )
    return "\n".join(lines) + "\n"


def build_customer_quote(quote: Quote, option: PricingOption) -> CustomerQuote:
    pricing = quote.pricing_for(option)
    if pricing is None:
        raise PricingOptionNotSelectedError(quote.id, option.value)

    products = _customer_products(quote, option)
    breakdown = pricing.breakdown
    summary = CustomerSummary(
        blendedDiscount=pricing.blendedDiscount,
        acv=breakdown.acv,
        licenseTcv=breakdown.licenseTcv,
        recurringAnnualPayment=pricing.recurringAnnualPayment,
        recurringPaymentLabel=labels.recurring_payment_label(option),
        recurringPaymentValue=labels.recurring_payment_value(breakdown, option),
        firstPeriodPaymentLabel=labels.first_period_payment_label(option),
        firstPeriodPayment=breakdown.firstPeriodPayment,
        discountedHardware=breakdown.discountedHardware,
        dealHealth=deal_health(pricing.blendedDiscount),
    )
    return CustomerQuote(
        quoteId=quote.id,
        accountName=quote.accountName,
        dealName=quote.dealName,
        paymentOption=option,
        termLength=quote.termLength,
        date=quote.updatedAt,
        currency=quote.currency.value,
        products=products,
        summary=summary,
        text=render_customer_text(quote, option, pricing, products),
        formattedText=generate_formatted_quote_text(quote, pricing),
    )
