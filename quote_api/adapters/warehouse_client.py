from typing import Protocol, Optional, Dict, List, Any
import asyncio
import logging
import time
import httpx

from quote_api.core.exceptions import WarehouseConfigError, WarehouseQueryError

logger = logging.getLogger(__name__)

PENDING_STATES = frozenset({"PENDING", "RUNNING"})
FAILED_STATES = frozenset({"FAILED", "CANCELED", "CLOSED"})


class WarehousePort(Protocol):
    async def execute(self, statement: str) -> Dict[str, Any]: ...


class DatabricksClient(WarehousePort):
    """SQL Statement Execution API: POST /api/2.0/sql/statements, then poll."""

    def __init__(
        self,
        host: Optional[str],
        token: Optional[str],
        warehouse_id: Optional[str],
        wait_timeout: int = 30,
        poll_interval: float = 1.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not host or not token or not warehouse_id:
            raise WarehouseConfigError(
                "Missing Databricks config. Set DATABRICKS_HOST, DATABRICKS_TOKEN "
                "and DATABRICKS_WAREHOUSE_ID."
            )
        base = host if host.startswith("http") else f"https://{host}"
        self.base_url = base.rstrip("/")
        self.token = token
        self.warehouse_id = warehouse_id
        self.wait_timeout = wait_timeout
        self.poll_interval = poll_interval
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {self.token}"},
            timeout=self.wait_timeout + 10,
            transport=self.transport,
        )

    @staticmethod
    def _read(resp: httpx.Response) -> Dict[str, Any]:
        if resp.is_error:
            detail = (resp.text or "")[:800]
            raise WarehouseQueryError(
                f"Databricks API error ({resp.status_code}): {detail}",
                upstream_status=resp.status_code,
            )
        return resp.json()

    async def execute(self, statement: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "warehouse_id": self.warehouse_id,
            "statement": statement,
            "wait_timeout": f"{self.wait_timeout}s",
        }
        async with self._client() as client:
            data = self._read(await client.post("/api/2.0/sql/statements", json=payload))
            state = (data.get("status") or {}).get("state")
            if state in PENDING_STATES:
                data = await self._poll(client, data["statement_id"])
            elif state in FAILED_STATES:
                raise WarehouseQueryError(f"Databricks statement failed: {state}")
            return data

    async def _poll(self, client: httpx.AsyncClient, statement_id: str) -> Dict[str, Any]:
        deadline = time.monotonic() + self.wait_timeout
        while time.monotonic() < deadline:
            data = self._read(await client.get(f"/api/2.0/sql/statements/{statement_id}"))
            state = (data.get("status") or {}).get("state")
            if state == "SUCCEEDED":
                return data
            if state in FAILED_STATES:
                raise WarehouseQueryError(f"Databricks statement failed: {state}")
            logger.debug("Statement %s still %s", statement_id, state)
            await asyncio.sleep(self.poll_interval)

        logger.warning("Statement %s timed out after %ss", statement_id, self.wait_timeout)
        raise WarehouseQueryError("Databricks statement execution timed out")


def summarize_result(data: Dict[str, Any]) -> Dict[str, Any]:
    columns: Optional[List[Dict[str, Any]]] = (
        (data.get("manifest") or {}).get("schema") or {}
    ).get("columns")
    return {
        "statementId": data.get("statement_id", ""),
        "status": (data.get("status") or {}).get("state"),
        "columns": columns,
        "rows": (data.get("result") or {}).get("data_array") or [],
    }
