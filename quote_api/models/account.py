from typing import Optional
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from quote_api.core.db import Base


class Account(Base):
    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), index=True, nullable=False)
    industry: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    region: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    account_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    existing_contract_info: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True
    )
