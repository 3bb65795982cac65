from typing import Dict, List, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class PricingOption(str, Enum):
    UPFRONT = "Upfront"
    ANNUAL = "Annual"
    QUARTERLY = "Quarterly"
    FINANCED_MONTHLY = "Financed Monthly"
    DIRECT_MONTHLY = "Direct Monthly"


# canonical UI order
PRICING_OPTIONS: List[PricingOption] = list(PricingOption)

MONTHLY_OPTIONS = frozenset({PricingOption.FINANCED_MONTHLY, PricingOption.DIRECT_MONTHLY})


class Pricebook(str, Enum):
    FY26 = "FY26"
    FY25 = "FY25"
    LEGACY = "Legacy"


class CurrencyCode(str, Enum):
    USD = "USD"
    CAD = "CAD"
    MXN = "MXN"
    GBP = "GBP"
    EUR = "EUR"


class NegotiationPosition(str, Enum):
    FAVORABLE = "favorable"
    UNFAVORABLE = "unfavorable"


def compute_annual_total(per_license_per_month: float, hardware: float, quantity: int) -> float:
    return per_license_per_month * quantity * 12 + hardware * quantity


class ProductLineItem(BaseModel):
    id: str
    productName: str
    sku: str
    quantity: int = Field(1, ge=1)
    hardware: float = Field(0.0, ge=0)
    perLicensePerMonth: float = Field(0.0, ge=0)
    annualTotal: float = 0.0
    discounts: Dict[PricingOption, float] = Field(default_factory=dict)
    isHardwareOnly: Optional[bool] = None

    @field_validator("discounts")
    @classmethod
    def _check_discounts(cls, v: Dict[PricingOption, float]) -> Dict[PricingOption, float]:
        for option, pct in v.items():
            if pct < 0 or pct > 100:
                raise ValueError(f"discount for {option.value} must be between 0 and 100")
        return v

    @model_validator(mode="after")
    def _refresh_annual_total(self) -> "ProductLineItem":
        # cached value from the client is never trusted
        self.annualTotal = compute_annual_total(
            self.perLicensePerMonth, self.hardware, self.quantity
        )
        return self

    def discount_for(self, option: PricingOption) -> float:
        return self.discounts.get(option, 0.0) or 0.0

    def with_quantity(self, quantity: int) -> "ProductLineItem":
        data = self.model_dump()
        data["quantity"] = quantity
        return ProductLineItem.model_validate(data)

    def with_discount(self, option: PricingOption, pct: float) -> "ProductLineItem":
        data = self.model_dump()
        discounts = {opt: self.discount_for(opt) for opt in PRICING_OPTIONS}
        discounts[option] = pct
        data["discounts"] = discounts
        return ProductLineItem.model_validate(data)


class RebatesAndSubsidies(BaseModel):
    # Rebate (buyout / installation): fixed $, not for Quarterly or Financed Monthly
    rebate: Dict[PricingOption, float] = Field(default_factory=dict)
    # Financed Monthly only, $ or %
    subsidyAmount: Optional[float] = Field(None, ge=0)
    subsidyPercentage: Optional[float] = Field(None, ge=0, le=100)
    # Any option
    freeMonths: Dict[PricingOption, int] = Field(default_factory=dict)

    @field_validator("rebate")
    @classmethod
    def _check_rebate(cls, v: Dict[PricingOption, float]) -> Dict[PricingOption, float]:
        if any(amount < 0 for amount in v.values()):
            raise ValueError("rebate amounts must be non-negative")
        return v

    @field_validator("freeMonths")
    @classmethod
    def _check_free_months(cls, v: Dict[PricingOption, int]) -> Dict[PricingOption, int]:
        if any(months < 0 for months in v.values()):
            raise ValueError("free months must be non-negative")
        return v

    @model_validator(mode="after")
    def _single_subsidy_kind(self) -> "RebatesAndSubsidies":
        if self.subsidyAmount is not None and self.subsidyPercentage is not None:
            raise ValueError("set either subsidyAmount or subsidyPercentage, not both")
        return self

    def rebate_for(self, option: PricingOption) -> float:
        return self.rebate.get(option, 0.0) or 0.0

    def free_months_for(self, option: PricingOption) -> int:
        return self.freeMonths.get(option, 0) or 0

    def with_subsidy_amount(self, amount: float) -> "RebatesAndSubsidies":
        return self.model_copy(update={"subsidyAmount": amount, "subsidyPercentage": None})

    def with_subsidy_percentage(self, pct: float) -> "RebatesAndSubsidies":
        return self.model_copy(update={"subsidyPercentage": pct, "subsidyAmount": None})


class PricingBreakdown(BaseModel):
    blendedDiscount: float
    discountValue: float
    acv: float
    licenseTcv: float
    acvWithoutUpfrontDiscounts: float
    licenseTcvWithoutUpfrontDiscounts: float
    discountedHardware: float
    firstPeriodPayment: Optional[float] = None
    optionListPrice: float
    optionLicenseDiscount: float
    recurringPeriodAmount: float


class PaymentOptionPricing(BaseModel):
    paymentOption: PricingOption
    annualListPrice: float
    annualLicenseDiscount: float
    blendedDiscount: float
    recurringAnnualPayment: float
    breakdown: PricingBreakdown


class Quote(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    accountName: str
    dealName: str
    opportunityId: Optional[str] = None
    pricingOptions: List[PricingOption] = Field(..., min_length=1)
    pricebook: Pricebook = Pricebook.FY26
    currency: CurrencyCode = CurrencyCode.USD
    termLength: int = Field(..., gt=0)
    fleetSize: Optional[int] = Field(None, ge=0)
    negotiationPosition: Optional[NegotiationPosition] = None
    productLineItems: List[ProductLineItem] = Field(default_factory=list)
    paymentOptionPricing: List[PaymentOptionPricing] = Field(default_factory=list)
    rebatesAndSubsidies: Optional[RebatesAndSubsidies] = None
    notes: Optional[str] = None
    pricingExpiresOn: Optional[str] = None
    createdAt: str
    updatedAt: str
    createdBy: str

    def pricing_for(self, option: PricingOption) -> Optional[PaymentOptionPricing]:
        return next(
            (p for p in self.paymentOptionPricing if p.paymentOption == option), None
        )


class QuoteCreate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    accountName: str = ""
    dealName: Optional[str] = None
    opportunityId: Optional[str] = None
    pricingOptions: Optional[List[PricingOption]] = None
    pricingOption: Optional[PricingOption] = None  # legacy single option
    pricebook: Optional[Pricebook] = None
    currency: Optional[CurrencyCode] = None
    termLength: Optional[int] = Field(None, gt=0)
    fleetSize: Optional[int] = Field(None, ge=0)
    negotiationPosition: Optional[NegotiationPosition] = None
    productLineItems: List[ProductLineItem] = Field(default_factory=list)
    rebatesAndSubsidies: Optional[RebatesAndSubsidies] = None
    notes: Optional[str] = None
    pricingExpiresOn: Optional[str] = None
    createdBy: Optional[str] = None


class QuoteUpdate(BaseModel):
    """Partial update; paymentOptionPricing is derived and never accepted."""

    model_config = ConfigDict(extra="ignore")

    accountName: Optional[str] = None
    dealName: Optional[str] = None
    opportunityId: Optional[str] = None
    pricingOptions: Optional[List[PricingOption]] = None
    pricingOption: Optional[PricingOption] = None  # legacy single option
    pricebook: Optional[Pricebook] = None
    currency: Optional[CurrencyCode] = None
    termLength: Optional[int] = Field(None, gt=0)
    fleetSize: Optional[int] = Field(None, ge=0)
    negotiationPosition: Optional[NegotiationPosition] = None
    productLineItems: Optional[List[ProductLineItem]] = None
    rebatesAndSubsidies: Optional[RebatesAndSubsidies] = None
    notes: Optional[str] = None
    pricingExpiresOn: Optional[str] = None


class DuplicateRequest(BaseModel):
    createdBy: Optional[str] = None
