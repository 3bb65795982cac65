from typing import Any, Dict, Optional
from sqlalchemy import JSON, String, Float
from sqlalchemy.orm import Mapped, mapped_column
from quote_api.core.db import Base


HARDWARE_ONLY_TYPES = frozenset({"accessory", "hardware"})


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    sku: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    pricebook: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    product_type: Mapped[Optional[str]] = mapped_column(
        "type", String(100), nullable=True
    )
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    hardware: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    per_license_per_month: Mapped[float] = mapped_column(
        Float, nullable=False, default=0.0
    )
    # {"CAD": {"hardware": 1.0, "perLicensePerMonth": 2.0}, ...}
    prices: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)

    @property
    def is_hardware_only(self) -> bool:
        return (self.product_type or "").strip().lower() in HARDWARE_ONLY_TYPES
