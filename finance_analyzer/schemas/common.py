# finance_analyzer/schemas/common.py
from typing import Generic, Optional, TypeVar
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")

class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

class ApiResponse(CamelModel, Generic[DataT]):
    success: bool
    message: str
    data: Optional[DataT] = None

    @classmethod
    def ok(cls, message: str, data: Optional[DataT] = None) -> "ApiResponse[DataT]":
        return cls(success=True, message=message, data=data)

    @classmethod
    def error(cls, message: str) -> "ApiResponse[DataT]":
        return cls(success=False, message=message)
