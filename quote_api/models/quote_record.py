from typing import Any, Dict
from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column
from quote_api.core.db import Base


class QuoteRecord(Base):
    """One row per quote; the whole quote document lives in ``document``."""

    __tablename__ = "quotes"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    seq: Mapped[int] = mapped_column(unique=True, index=True, nullable=False)
    updated_at: Mapped[str] = mapped_column(String(40), index=True, nullable=False)
    document: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
