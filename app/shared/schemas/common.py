# app/shared/schemas/common.py
from pydantic import BaseModel, BeforeValidator, Field
from pydantic.alias_generators import to_camel
from typing import Annotated, Any, List, Optional
from datetime import datetime


def strip_text(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


# Leading and trailing whitespace is dropped before length checks
StrippedStr = Annotated[str, BeforeValidator(strip_text)]


class CamelModel(BaseModel):
    """Snake case in Python, camelCase on the wire"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class BaseResponse(CamelModel):
    success: bool = True
    message: str = ""
    timestamp: datetime = Field(default_factory=datetime.now)


class ErrorResponse(BaseResponse):
    success: bool = False
    error_code: Optional[str] = None
    details: Optional[Any] = None


class PaginationInfo(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class PaginatedResponse(CamelModel):
    items: List[Any]
    pagination: PaginationInfo
