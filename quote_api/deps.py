from __future__ import annotations
from typing import TYPE_CHECKING
from fastapi import Depends


if TYPE_CHECKING:
    from quote_api.adapters.warehouse_client import WarehousePort
    from quote_api.domain.services import QuoteService
    from quote_api.repositories.quote import QuoteRepository


def get_warehouse_client() -> "WarehousePort":
    from quote_api.adapters.warehouse_client import DatabricksClient
    from quote_api.core.config import settings

    return DatabricksClient(
        settings.DATABRICKS_HOST,
        settings.DATABRICKS_TOKEN,
        settings.DATABRICKS_WAREHOUSE_ID,
        wait_timeout=settings.DATABRICKS_WAIT_TIMEOUT,
        poll_interval=settings.DATABRICKS_POLL_INTERVAL,
    )


def get_quote_repository() -> "QuoteRepository":
    from quote_api.core.db import get_sessionmaker
    from quote_api.repositories.quote import SqlQuoteRepository

    return SqlQuoteRepository(get_sessionmaker())


def get_quote_service(
    repository=Depends(get_quote_repository),
) -> "QuoteService":
    from quote_api.domain.services import QuoteService

    return QuoteService(repository)
