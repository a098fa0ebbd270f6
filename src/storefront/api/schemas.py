"""Response envelope shared by every endpoint.

Bodies look like ``{"success": true, "message": ..., "data": ...,
"pagination": ...}``; keys are camelCase on the wire and absent keys are
omitted rather than sent as null.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PaginationSchema(CamelModel):
    current: int
    pages: int
    total: int
    limit: int


class ApiResponse(CamelModel, Generic[T]):
    success: bool = True
    message: str | None = None
    data: T | None = None
    pagination: PaginationSchema | None = None
    count: int | None = None


class MessageResponse(CamelModel):
    success: bool = True
    message: str
