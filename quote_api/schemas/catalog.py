from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class CurrencyPrice(BaseModel):
    hardware: float
    perLicensePerMonth: float


class ProductSchema(BaseModel):
    id: int
    name: str
    sku: str
    pricebook: str
    product_type: Optional[str] = None  # maps to DB column "type"
    category: Optional[str] = None
    description: Optional[str] = None
    hardware: float
    per_license_per_month: float
    prices: Optional[Dict[str, CurrencyPrice]] = None
    is_hardware_only: bool = False

    model_config = ConfigDict(from_attributes=True)


class AccountSchema(BaseModel):
    id: str
    name: str
    industry: Optional[str] = None
    region: Optional[str] = None
    account_type: Optional[str] = None
    existing_contract_info: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AddProductIn(BaseModel):
    sku: str
    quantity: int = Field(1, ge=1)
