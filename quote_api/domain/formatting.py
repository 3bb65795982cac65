from datetime import date, datetime
from typing import Dict, Optional

from quote_api.models.quote import PaymentOptionPricing, Quote


# Deal health zones on the blended discount (%)
ZONE_GREEN_MAX = 30.0
ZONE_ORANGE_MAX = 42.0


CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "CAD": "CA$",
    "MXN": "MX$",
    "GBP": "£",
    "EUR": "€",
}


def format_currency(amount: float, currency: str = "USD") -> str:
    symbol = CURRENCY_SYMBOLS.get(currency, f"{currency} ")
    sign = "-" if round(amount, 2) < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_percentage(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}%"


def generate_deal_name(account_name: str, today: Optional[date] = None) -> str:
    day = today or date.today()
    return f"{account_name} - {day.isoformat()}"


def format_date(value: str) -> str:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return parsed.strftime("%m/%d/%Y")


def format_long_date(value: str) -> str:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return f"{parsed.strftime('%B')} {parsed.day}, {parsed.year}"


def format_term(term_length: int) -> str:
    years, months = divmod(term_length, 12)
    if months > 0:
        return f"{years}-Years {months}-Months"
    return f"{years}-Years"


def deal_health_zone(blended_discount: float) -> str:
    if blended_discount <= ZONE_GREEN_MAX:
        return "Green"
    if blended_discount <= ZONE_ORANGE_MAX:
        return "Orange"
    return "Red"


def deal_health(blended_discount: float) -> Dict[str, object]:
    zone = deal_health_zone(blended_discount)
    return {
        "zone": zone,
        "blendedDiscount": blended_discount,
        "label": f"{zone}: {blended_discount:.1f}% discount",
    }


def generate_formatted_quote_text(quote: Quote, pricing: PaymentOptionPricing) -> str:
    """Tab separated rendering used for copy/paste into email and CRM notes."""
    currency = quote.currency.value

    lines = [
        f"Payment Option: {pricing.paymentOption.value}\tLicense Term: {format_term(quote.termLength)}",
        "",
        "PRODUCT\tQTY\tHARDWARE\tPER LIC/MONTH\tANNUAL TOTAL",
    ]
    for item in quote.productLineItems:
        lines.append(
            f"{item.productName} ({item.sku})\t{item.quantity}\t"
            f"{format_currency(item.hardware, currency)}\t"
            f"{format_currency(item.perLicensePerMonth, currency)}\t"
            f"{format_currency(item.annualTotal, currency)}"
        )

    lines.append("")
    lines.append("* Figures do not include tax or shipping")
    if quote.pricingExpiresOn:
        lines.append(
            f"* Pricing Expires on {format_date(quote.pricingExpiresOn)} and requires bulk shipment"
        )
    lines.append("")
    lines.append(f"Annual List Price:\t{format_currency(pricing.annualListPrice, currency)}")
    lines.append(
        f"Annual License Discount:\t{format_currency(pricing.annualLicenseDiscount, currency)}"
    )
    lines.append(f"Blended Discount:\t{format_percentage(pricing.blendedDiscount)}")
    lines.append(
        f"Recurring Annual Payment:\t{format_currency(pricing.recurringAnnualPayment, currency)}"
    )
    return "\n".join(lines) + "\n"
