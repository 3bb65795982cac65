from fastapi import APIRouter, Depends
import logging

from quote_api.adapters.warehouse_client import WarehousePort, summarize_result
from quote_api.core.exceptions import QuoteValidationError
from quote_api.deps import get_warehouse_client
from quote_api.schemas.responses import ApiResponse, WarehouseQueryIn, WarehouseQueryOut

router = APIRouter(prefix="/api/databricks", tags=["warehouse"])
logger = logging.getLogger(__name__)


@router.post("/query", response_model=ApiResponse[WarehouseQueryOut])
async def run_query(
    body: WarehouseQueryIn,
    warehouse: WarehousePort = Depends(get_warehouse_client),
) -> ApiResponse[WarehouseQueryOut]:
    if not body.query.strip():
        raise QuoteValidationError('Missing or invalid "query" in request body')
    data = await warehouse.execute(body.query)
    return ApiResponse(data=WarehouseQueryOut(**summarize_result(data)))
