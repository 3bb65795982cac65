from typing import Optional

from quote_api.models.quote import MONTHLY_OPTIONS, PricingBreakdown, PricingOption


_FIRST_PERIOD_NOUN = {
    PricingOption.ANNUAL: "Year",
    PricingOption.QUARTERLY: "Quarter",
    PricingOption.FINANCED_MONTHLY: "Month",
    PricingOption.DIRECT_MONTHLY: "Month",
}


def period_label(option: PricingOption) -> str:
    """Adjective for one settlement period, e.g. "Quarterly"."""
    if option in MONTHLY_OPTIONS:
        return "Monthly"
    return option.value


def option_list_price_label(option: PricingOption) -> str:
    return f"{period_label(option)} List Price"


def option_license_discount_label(option: PricingOption) -> str:
    return f"{period_label(option)} License Discount"


def recurring_payment_label(option: PricingOption) -> str:
    if option == PricingOption.UPFRONT:
        return "Upfront Payment"
    return f"Recurring {period_label(option)} Payment"


def recurring_payment_value(breakdown: PricingBreakdown, option: PricingOption) -> float:
    # Upfront pays the whole term at once
    if option == PricingOption.UPFRONT:
        return breakdown.licenseTcv
    return breakdown.recurringPeriodAmount


def first_period_payment_label(option: PricingOption) -> Optional[str]:
    noun = _FIRST_PERIOD_NOUN.get(option)
    if noun is None:
        return None
    return f"First {noun} Payment"
