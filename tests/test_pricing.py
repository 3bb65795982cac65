"""
Pricing engine tests.

Covers the worked scenarios, incentive eligibility per pricing option,
hardware-only classification and the engine-wide bounds.
"""
import pytest
from hypothesis import given, settings as hypothesis_settings, strategies as st

from conftest import make_item
from quote_api.domain.pricing import (
    calculate_annual_list_price,
    calculate_discounted_hardware,
    calculate_option_totals,
    calculate_payment_option_pricing,
    calculate_pricing_breakdown,
    frequency,
    is_hardware_only,
    post_discount_monthly_price,
    total_credit,
    value_line_item,
)
from quote_api.models.quote import PRICING_OPTIONS, PricingOption, RebatesAndSubsidies


ANNUAL = PricingOption.ANNUAL
QUARTERLY = PricingOption.QUARTERLY
UPFRONT = PricingOption.UPFRONT
FINANCED = PricingOption.FINANCED_MONTHLY
DIRECT = PricingOption.DIRECT_MONTHLY


# =============================================================================
# Frequency
# =============================================================================


@pytest.mark.parametrize(
    "option, expected",
    [(ANNUAL, 12), (QUARTERLY, 3), (FINANCED, 1), (DIRECT, 1), (UPFRONT, 36)],
)
def test_frequency_months_per_period(option, expected):
    assert frequency(option, 36) == expected


# =============================================================================
# Worked scenarios
# =============================================================================


class TestWorkedScenarios:
    def test_single_license_item_annual(self):
        b = calculate_pricing_breakdown([make_item()], ANNUAL, 12)

        assert b.optionListPrice == pytest.approx(1200)
        assert b.acv == pytest.approx(1200)
        assert b.licenseTcv == pytest.approx(1200)
        assert b.blendedDiscount == pytest.approx(0)
        assert b.firstPeriodPayment == pytest.approx(1200)

    def test_quarterly_with_discount(self):
        item = make_item(discounts={QUARTERLY: 10})

        b = calculate_pricing_breakdown([item], QUARTERLY, 12)

        assert b.optionListPrice == pytest.approx(300)
        assert b.optionLicenseDiscount == pytest.approx(30)
        assert b.recurringPeriodAmount == pytest.approx(270)
        assert b.acvWithoutUpfrontDiscounts == pytest.approx(1080)
        assert b.firstPeriodPayment == pytest.approx(270)
        assert b.blendedDiscount == pytest.approx(10)

    def test_annual_rebate_reduces_first_payment(self):
        incentives = RebatesAndSubsidies(rebate={ANNUAL: 100})

        b = calculate_pricing_breakdown([make_item()], ANNUAL, 12, incentives)

        assert b.firstPeriodPayment == pytest.approx(1100)
        assert b.licenseTcv == pytest.approx(1100)
        assert b.acvWithoutUpfrontDiscounts == pytest.approx(1200)

    def test_free_month_credits_one_month(self):
        incentives = RebatesAndSubsidies(freeMonths={ANNUAL: 1})

        b = calculate_pricing_breakdown([make_item()], ANNUAL, 12, incentives)

        assert b.licenseTcv == pytest.approx(1100)
        assert b.licenseTcvWithoutUpfrontDiscounts == pytest.approx(1200)

    def test_hardware_only_item_stays_out_of_recurring_figures(self):
        items = [make_item(), make_item("hw", per_license=0, hardware=500)]

        b = calculate_pricing_breakdown(items, ANNUAL, 12)

        assert b.optionListPrice == pytest.approx(1200)
        assert b.acv == pytest.approx(1200)
        assert b.discountedHardware == pytest.approx(500)
        assert b.firstPeriodPayment == pytest.approx(1700)
        assert b.licenseTcv == pytest.approx(1700)
        assert calculate_annual_list_price(items) == pytest.approx(1200)


# =============================================================================
# Blended discount and mixed items
# =============================================================================


class TestBlendedDiscount:
    def test_upfront_credits_leave_recurring_blend_unchanged(self):
        incentives = RebatesAndSubsidies(rebate={ANNUAL: 100}, freeMonths={ANNUAL: 1})

        b = calculate_pricing_breakdown([make_item()], ANNUAL, 12, incentives)

        assert b.acv == pytest.approx(1200)
        assert b.licenseTcv == pytest.approx(1000)
        assert b.blendedDiscount == pytest.approx(0)

    def test_recurring_blend_is_on_a_twelve_month_basis(self):
        items = [
            make_item(discounts={ANNUAL: 20}),
            make_item("hw", per_license=0, hardware=800, discounts={ANNUAL: 50}),
        ]

        short = calculate_pricing_breakdown(items, ANNUAL, 12)
        long = calculate_pricing_breakdown(items, ANNUAL, 60)

        # list 1200 + 800, discounted 960 + 400
        assert short.blendedDiscount == pytest.approx(32)
        assert long.blendedDiscount == pytest.approx(32)

    def test_upfront_blend_uses_the_whole_term(self):
        item = make_item(discounts={UPFRONT: 10})
        incentives = RebatesAndSubsidies(rebate={UPFRONT: 360})

        plain = calculate_pricing_breakdown([item], UPFRONT, 36)
        with_rebate = calculate_pricing_breakdown([item], UPFRONT, 36, incentives)

        assert plain.blendedDiscount == pytest.approx(10)
        assert with_rebate.blendedDiscount == pytest.approx(20)


class TestMixedItem:
    def test_option_price_includes_hardware(self):
        item = make_item(per_license=100, hardware=200)

        b = calculate_pricing_breakdown([item], ANNUAL, 12)

        assert item.annualTotal == pytest.approx(1400)
        assert b.optionListPrice == pytest.approx(1200)
        assert b.acv == pytest.approx(1400)
        assert b.discountedHardware == pytest.approx(200)
        assert b.firstPeriodPayment == pytest.approx(1600)
        assert b.blendedDiscount == pytest.approx(0)

    def test_quarterly_option_price_scales_the_annual_total(self):
        item = make_item(per_license=100, hardware=200, discounts={QUARTERLY: 10})

        v = value_line_item(item, QUARTERLY, 12)

        assert v.option_price == pytest.approx(1400 * 0.9 / 4)
        assert v.discounted_hardware == pytest.approx(180)


# =============================================================================
# Incentive eligibility
# =============================================================================


class TestIncentives:
    @pytest.mark.parametrize("option", [QUARTERLY, FINANCED])
    def test_rebate_ignored_for_ineligible_options(self, option):
        incentives = RebatesAndSubsidies(rebate={option: 100})

        with_rebate = calculate_pricing_breakdown([make_item()], option, 12, incentives)
        without = calculate_pricing_breakdown([make_item()], option, 12)

        assert with_rebate.licenseTcv == pytest.approx(without.licenseTcv)
        assert with_rebate.firstPeriodPayment == pytest.approx(without.firstPeriodPayment)

    def test_subsidy_amount_only_applies_to_financed_monthly(self):
        incentives = RebatesAndSubsidies(subsidyAmount=50)

        financed = calculate_pricing_breakdown([make_item()], FINANCED, 12, incentives)
        direct = calculate_pricing_breakdown([make_item()], DIRECT, 12, incentives)

        assert financed.firstPeriodPayment == pytest.approx(50)
        assert financed.licenseTcv == pytest.approx(1150)
        assert direct.firstPeriodPayment == pytest.approx(100)
        assert direct.licenseTcv == pytest.approx(1200)

    def test_subsidy_percentage_uses_acv_before_credits(self):
        incentives = RebatesAndSubsidies(subsidyPercentage=10)

        b = calculate_pricing_breakdown([make_item()], FINANCED, 12, incentives)

        # 10% of 1200 exceeds one month, the first payment floors at zero
        assert b.licenseTcv == pytest.approx(1080)
        assert b.firstPeriodPayment == pytest.approx(0)

    def test_both_subsidy_kinds_rejected(self):
        with pytest.raises(ValueError):
            RebatesAndSubsidies(subsidyAmount=10, subsidyPercentage=5)

    def test_switching_subsidy_kind_clears_the_other(self):
        incentives = RebatesAndSubsidies(subsidyAmount=10).with_subsidy_percentage(5)

        assert incentives.subsidyAmount is None
        assert incentives.subsidyPercentage == 5

    def test_credits_never_push_totals_below_zero(self):
        incentives = RebatesAndSubsidies(rebate={ANNUAL: 10_000}, freeMonths={ANNUAL: 24})

        b = calculate_pricing_breakdown([make_item()], ANNUAL, 12, incentives)

        assert b.licenseTcv == 0
        assert b.firstPeriodPayment == 0
        assert b.blendedDiscount == pytest.approx(0)


# =============================================================================
# Upfront
# =============================================================================


class TestUpfront:
    def test_upfront_covers_the_whole_term(self):
        b = calculate_pricing_breakdown([make_item()], UPFRONT, 36)

        assert b.optionListPrice == pytest.approx(3600)
        assert b.licenseTcv == pytest.approx(3600)
        assert b.acv == pytest.approx(3600)
        assert b.firstPeriodPayment is None

    def test_upfront_license_discount_is_not_annualized(self):
        item = make_item(discounts={UPFRONT: 10, ANNUAL: 10})

        upfront, annual = calculate_payment_option_pricing([item], [UPFRONT, ANNUAL], 36)

        assert upfront.annualLicenseDiscount == pytest.approx(360)
        assert annual.annualLicenseDiscount == pytest.approx(120)


# =============================================================================
# Hardware-only classification
# =============================================================================


class TestHardwareOnly:
    def test_zero_license_price_with_hardware(self):
        assert is_hardware_only(make_item(per_license=0, hardware=49))

    def test_hardware_matching_one_year_of_license(self):
        assert is_hardware_only(make_item(per_license=100, hardware=1200.5))
        assert not is_hardware_only(make_item(per_license=100, hardware=1202))

    def test_explicit_flag_wins_over_heuristic(self):
        assert not is_hardware_only(make_item(per_license=100, hardware=1200, hardware_only=False))
        assert is_hardware_only(make_item(per_license=15, hardware=299, hardware_only=True))

    def test_hardware_only_item_has_no_license_amounts(self):
        v = value_line_item(make_item(per_license=0, hardware=500, quantity=2), ANNUAL, 12)

        assert v.hardware_only
        assert v.option_price == 0
        assert v.discounted_hardware == pytest.approx(1000)


# =============================================================================
# Engine-wide properties
# =============================================================================


def test_one_result_per_option_in_caller_order():
    options = [DIRECT, UPFRONT, QUARTERLY]

    result = calculate_payment_option_pricing([make_item()], options, 24)

    assert [p.paymentOption for p in result] == options
    assert all(p.recurringAnnualPayment == p.breakdown.acv for p in result)


def test_recomputing_gives_identical_results():
    items = [make_item(discounts={ANNUAL: 12.5}), make_item("hw", per_license=0, hardware=300)]
    incentives = RebatesAndSubsidies(rebate={ANNUAL: 50}, freeMonths={ANNUAL: 2})

    first = calculate_payment_option_pricing(items, PRICING_OPTIONS, 36, incentives)
    second = calculate_payment_option_pricing(items, PRICING_OPTIONS, 36, incentives)

    assert [p.model_dump() for p in first] == [p.model_dump() for p in second]


def test_empty_quote_prices_to_zero():
    b = calculate_pricing_breakdown([], ANNUAL, 12)

    assert b.acv == 0
    assert b.licenseTcv == 0
    assert b.blendedDiscount == 0
    assert post_discount_monthly_price([], ANNUAL, 12) == 0


line_items = st.builds(
    make_item,
    st.uuids().map(str),
    per_license=st.floats(min_value=0, max_value=500, allow_nan=False),
    hardware=st.floats(min_value=0, max_value=2000, allow_nan=False),
    quantity=st.integers(min_value=1, max_value=50),
    discounts=st.dictionaries(
        st.sampled_from(PRICING_OPTIONS), st.floats(min_value=0, max_value=100, allow_nan=False)
    ),
)

incentive_sets = st.builds(
    RebatesAndSubsidies,
    rebate=st.dictionaries(
        st.sampled_from(PRICING_OPTIONS), st.floats(min_value=0, max_value=5000, allow_nan=False)
    ),
    subsidyAmount=st.one_of(st.none(), st.floats(min_value=0, max_value=5000, allow_nan=False)),
    freeMonths=st.dictionaries(st.sampled_from(PRICING_OPTIONS), st.integers(min_value=0, max_value=6)),
)


@hypothesis_settings(max_examples=200, deadline=None)
@given(
    items=st.lists(line_items, max_size=5),
    option=st.sampled_from(PRICING_OPTIONS),
    term_length=st.integers(min_value=1, max_value=72),
    incentives=st.one_of(st.none(), incentive_sets),
)
def test_breakdown_bounds(items, option, term_length, incentives):
    b = calculate_pricing_breakdown(items, option, term_length, incentives)

    assert 0 <= b.blendedDiscount <= 100
    assert b.licenseTcv >= 0
    assert b.acv >= 0
    assert b.discountedHardware >= 0
    assert b.licenseTcv <= b.licenseTcvWithoutUpfrontDiscounts + 1e-6
    if b.firstPeriodPayment is not None:
        totals = calculate_option_totals(items, option, term_length)
        assert 0 <= b.firstPeriodPayment <= totals.sum_of_option_prices + totals.discounted_hardware + 1e-6
    assert (b.firstPeriodPayment is None) == (option == UPFRONT)


@hypothesis_settings(max_examples=200, deadline=None)
@given(
    item=line_items,
    option=st.sampled_from(PRICING_OPTIONS),
    term_length=st.integers(min_value=1, max_value=72),
)
def test_discounted_item_never_exceeds_list(item, option, term_length):
    discounted = value_line_item(item, option, term_length)
    undiscounted = value_line_item(item.with_discount(option, 0), option, term_length)

    assert discounted.option_price <= undiscounted.option_price * (1 + 1e-9) + 1e-6
    assert discounted.license_discount <= discounted.list_price * (1 + 1e-9) + 1e-6
    assert discounted.discounted_hardware <= item.hardware * item.quantity * (1 + 1e-9) + 1e-6


# =============================================================================
# Helpers
# =============================================================================


def test_discounted_hardware_counts_every_item():
    items = [
        make_item(hardware=200, quantity=2, discounts={ANNUAL: 25}),
        make_item("hw", per_license=0, hardware=100),
    ]

    assert calculate_discounted_hardware(items, ANNUAL) == pytest.approx(400)
    assert calculate_discounted_hardware(items, QUARTERLY) == pytest.approx(500)


def test_total_credit_adds_every_incentive():
    incentives = RebatesAndSubsidies(
        rebate={FINANCED: 100}, subsidyAmount=40, freeMonths={FINANCED: 2}
    )

    # rebate is not offered on Financed Monthly
    assert total_credit(incentives, FINANCED, base_amount=1200, monthly_price=50) == pytest.approx(140)
    assert total_credit(None, ANNUAL, base_amount=1200, monthly_price=50) == 0


def test_line_item_edits_return_new_items():
    item = make_item(quantity=1)

    more = item.with_quantity(4)
    discounted = item.with_discount(ANNUAL, 15)

    assert item.quantity == 1 and item.discount_for(ANNUAL) == 0
    assert more.annualTotal == pytest.approx(4800)
    assert discounted.discount_for(ANNUAL) == 15
    assert discounted.discount_for(UPFRONT) == 0


def test_switching_to_subsidy_amount_clears_percentage():
    incentives = RebatesAndSubsidies(subsidyPercentage=5).with_subsidy_amount(75)

    assert (incentives.subsidyAmount, incentives.subsidyPercentage) == (75, None)
