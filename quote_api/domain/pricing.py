"""
Pricing engine for quotes.

Every figure shown for a quote (editor, comparison, customer document) comes
from ``calculate_payment_option_pricing``. Views must not re-derive numbers
with their own formulas.

Pure functions only: no I/O, no clock, no shared state.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from quote_api.models.quote import (
    MONTHLY_OPTIONS,
    PaymentOptionPricing,
    PricingBreakdown,
    PricingOption,
    ProductLineItem,
    RebatesAndSubsidies,
)


MONTHS_PER_YEAR = 12

# hardware priced as one year of license marks a bundled hardware SKU (legacy records)
HARDWARE_MATCH_TOLERANCE = 1.0

REBATE_INELIGIBLE = frozenset({PricingOption.QUARTERLY, PricingOption.FINANCED_MONTHLY})
SUBSIDY_ELIGIBLE = frozenset({PricingOption.FINANCED_MONTHLY})


def _safe_div(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator


# ------------------ frequency ------------------


def frequency(option: PricingOption, term_length: int) -> int:
    """Months covered by one settlement period of ``option``."""
    if option == PricingOption.ANNUAL:
        return 12
    if option == PricingOption.QUARTERLY:
        return 3
    if option in MONTHLY_OPTIONS:
        return 1
    return term_length


# ------------------ hardware classification ------------------


def is_hardware_only(item: ProductLineItem) -> bool:
    if item.isHardwareOnly is not None:
        return item.isHardwareOnly

    hardware = item.hardware or 0.0
    license_price = item.perLicensePerMonth or 0.0
    if hardware > 0 and license_price == 0:
        return True
    if hardware > 0 and license_price > 0:
        return abs(license_price * MONTHS_PER_YEAR - hardware) < HARDWARE_MATCH_TOLERANCE
    return False


def license_items(items: Iterable[ProductLineItem]) -> List[ProductLineItem]:
    return [item for item in items if not is_hardware_only(item)]


# ------------------ line item valuation ------------------


@dataclass(frozen=True)
class LineItemValuation:
    item_id: str
    hardware_only: bool
    list_price: float
    license_discount: float
    option_price: float
    discounted_hardware: float


@dataclass(frozen=True)
class OptionTotals:
    option_list_price: float
    option_license_discount: float
    sum_of_option_prices: float
    discounted_hardware: float


def _scale_annual_to_period(annual_amount: float, option: PricingOption, term_length: int) -> float:
    if option == PricingOption.QUARTERLY:
        return annual_amount / 4
    if option in MONTHLY_OPTIONS:
        return annual_amount / 12
    if option == PricingOption.UPFRONT:
        return annual_amount * (term_length / 12)
    return annual_amount


def discounted_item_hardware(item: ProductLineItem, option: PricingOption) -> float:
    return item.hardware * item.quantity * (1 - item.discount_for(option) / 100)


def value_line_item(item: ProductLineItem, option: PricingOption, term_length: int) -> LineItemValuation:
    """
    Per-period amounts of one line item for ``option``.

    Hardware-only items carry no license amounts; their value only shows up
    as discounted hardware.
    """
    hardware = discounted_item_hardware(item, option)
    if is_hardware_only(item):
        return LineItemValuation(
            item_id=item.id,
            hardware_only=True,
            list_price=0.0,
            license_discount=0.0,
            option_price=0.0,
            discounted_hardware=hardware,
        )

    pct = item.discount_for(option)
    months = frequency(option, term_length)
    annual_price = item.annualTotal * (1 - pct / 100)
    return LineItemValuation(
        item_id=item.id,
        hardware_only=False,
        list_price=item.perLicensePerMonth * item.quantity * months,
        license_discount=item.perLicensePerMonth * (pct / 100) * item.quantity * months,
        option_price=_scale_annual_to_period(annual_price, option, term_length),
        discounted_hardware=hardware,
    )


def value_line_items(
    items: Sequence[ProductLineItem], option: PricingOption, term_length: int
) -> List[LineItemValuation]:
    return [value_line_item(item, option, term_length) for item in items]


def calculate_discounted_hardware(items: Iterable[ProductLineItem], option: PricingOption) -> float:
    return sum((discounted_item_hardware(item, option) for item in items), 0.0)


def calculate_option_totals(
    items: Sequence[ProductLineItem], option: PricingOption, term_length: int
) -> OptionTotals:
    valuations = value_line_items(items, option, term_length)
    recurring = [v for v in valuations if not v.hardware_only]
    return OptionTotals(
        option_list_price=sum((v.list_price for v in recurring), 0.0),
        option_license_discount=sum((v.license_discount for v in recurring), 0.0),
        sum_of_option_prices=sum((v.option_price for v in recurring), 0.0),
        discounted_hardware=sum((v.discounted_hardware for v in valuations), 0.0),
    )


def calculate_annual_list_price(items: Iterable[ProductLineItem]) -> float:
    """License-only list price on a 12-month basis, hardware-only items excluded."""
    return sum(
        (item.perLicensePerMonth * item.quantity * MONTHS_PER_YEAR for item in license_items(items)),
        0.0,
    )


def calculate_hardware_list_total(items: Iterable[ProductLineItem]) -> float:
    return sum((item.hardware * item.quantity for item in items), 0.0)


def post_discount_monthly_price(
    items: Sequence[ProductLineItem], option: PricingOption, term_length: int
) -> float:
    totals = calculate_option_totals(items, option, term_length)
    return _safe_div(totals.sum_of_option_prices, frequency(option, term_length))


# ------------------ upfront credits ------------------


def rebate_credit(incentives: Optional[RebatesAndSubsidies], option: PricingOption) -> float:
    if incentives is None or option in REBATE_INELIGIBLE:
        return 0.0
    return incentives.rebate_for(option)


def subsidy_credit(
    incentives: Optional[RebatesAndSubsidies], option: PricingOption, base_amount: float
) -> float:
    if incentives is None or option not in SUBSIDY_ELIGIBLE:
        return 0.0
    if incentives.subsidyAmount is not None:
        return incentives.subsidyAmount
    if incentives.subsidyPercentage is not None:
        return base_amount * incentives.subsidyPercentage / 100
    return 0.0


def free_months_credit(
    incentives: Optional[RebatesAndSubsidies], option: PricingOption, monthly_price: float
) -> float:
    if incentives is None:
        return 0.0
    return monthly_price * incentives.free_months_for(option)


def total_credit(
    incentives: Optional[RebatesAndSubsidies],
    option: PricingOption,
    *,
    base_amount: float,
    monthly_price: float,
) -> float:
    return (
        rebate_credit(incentives, option)
        + subsidy_credit(incentives, option, base_amount)
        + free_months_credit(incentives, option, monthly_price)
    )


# ------------------ breakdown ------------------


def calculate_blended_discount(list_price: float, discounted_price: float) -> float:
    return _safe_div(list_price - discounted_price, list_price) * 100


def calculate_pricing_breakdown(
    items: Sequence[ProductLineItem],
    option: PricingOption,
    term_length: int,
    incentives: Optional[RebatesAndSubsidies] = None,
) -> PricingBreakdown:
    """
    Full financial breakdown of one pricing option.

    ``*WithoutUpfrontDiscounts`` figures ignore rebates, subsidies and free
    months. Recurring options compare the 12-month list value (license plus
    hardware) with ACV plus discounted hardware, so upfront credits leave the
    blended discount unchanged. Upfront compares the list value for the whole
    term with the license TCV, which already contains the hardware. The
    result is clamped to [0, 100].
    """
    months = frequency(option, term_length)
    is_upfront = option == PricingOption.UPFRONT
    recurring = not is_upfront and months > 0

    totals = calculate_option_totals(items, option, term_length)
    discounted_hardware = totals.discounted_hardware
    monthly = _safe_div(totals.sum_of_option_prices, months)

    free_months_value = free_months_credit(incentives, option, monthly)

    license_tcv_before_credits = max(0.0, monthly * term_length + discounted_hardware)
    if recurring:
        acv_without_upfront = monthly * MONTHS_PER_YEAR
    else:
        acv_without_upfront = license_tcv_before_credits

    credit_amount = rebate_credit(incentives, option) + subsidy_credit(
        incentives, option, acv_without_upfront
    )

    first_period_payment: Optional[float] = None
    if not is_upfront:
        first_period_payment = max(
            0.0,
            totals.sum_of_option_prices + discounted_hardware - credit_amount - free_months_value,
        )

    license_tcv = max(
        0.0,
        monthly * term_length + discounted_hardware - credit_amount - free_months_value,
    )

    acv = monthly * MONTHS_PER_YEAR if recurring else license_tcv

    annual_list_price = calculate_annual_list_price(items)
    hardware_list_total = calculate_hardware_list_total(items)
    if recurring:
        list_price = annual_list_price + hardware_list_total
        discounted_price = acv + discounted_hardware
    else:
        list_price = annual_list_price * term_length / MONTHS_PER_YEAR + hardware_list_total
        discounted_price = license_tcv
    blended_discount = min(
        100.0, max(0.0, calculate_blended_discount(list_price, discounted_price))
    )
    discount_value = (annual_list_price + hardware_list_total) * blended_discount / 100

    return PricingBreakdown(
        blendedDiscount=blended_discount,
        discountValue=discount_value,
        acv=max(0.0, acv),
        licenseTcv=license_tcv,
        acvWithoutUpfrontDiscounts=max(0.0, acv_without_upfront),
        licenseTcvWithoutUpfrontDiscounts=license_tcv_before_credits,
        discountedHardware=max(0.0, discounted_hardware),
        firstPeriodPayment=first_period_payment,
        optionListPrice=totals.option_list_price,
        optionLicenseDiscount=totals.option_license_discount,
        recurringPeriodAmount=max(0.0, totals.option_list_price - totals.option_license_discount),
    )


def annualize_license_discount(option_license_discount: float, option: PricingOption, term_length: int) -> float:
    months = frequency(option, term_length)
    if months > 0 and option != PricingOption.UPFRONT:
        return option_license_discount * (MONTHS_PER_YEAR / months)
    return option_license_discount


def calculate_payment_option_pricing(
    items: Sequence[ProductLineItem],
    options: Sequence[PricingOption],
    term_length: int,
    incentives: Optional[RebatesAndSubsidies] = None,
) -> List[PaymentOptionPricing]:
    """One ``PaymentOptionPricing`` per selected option, in the caller's order."""
    annual_list_price = calculate_annual_list_price(items)

    out: List[PaymentOptionPricing] = []
    for option in options:
        breakdown = calculate_pricing_breakdown(items, option, term_length, incentives)
        out.append(
            PaymentOptionPricing(
                paymentOption=option,
                annualListPrice=annual_list_price,
                annualLicenseDiscount=annualize_license_discount(
                    breakdown.optionLicenseDiscount, option, term_length
                ),
                blendedDiscount=breakdown.blendedDiscount,
                recurringAnnualPayment=breakdown.acv,
                breakdown=breakdown,
            )
        )
    return out
