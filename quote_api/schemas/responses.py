from typing import Any, Generic, List, Optional, TypeVar
from pydantic import BaseModel


T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T


class UserInfo(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None


class WarehouseQueryIn(BaseModel):
    query: str


class WarehouseColumn(BaseModel):
    name: str
    type_name: Optional[str] = None


class WarehouseQueryOut(BaseModel):
    statementId: str
    status: Optional[str] = None
    columns: Optional[List[WarehouseColumn]] = None
    rows: List[List[Any]] = []


class DeletedOut(BaseModel):
    id: str

