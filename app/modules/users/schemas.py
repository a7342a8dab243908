# app/modules/users/schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from app.modules.customers.schemas import normalize_email
from app.shared.schemas.common import CamelModel, PaginatedResponse, StrippedStr


class UserCreateRequest(CamelModel):
    name: StrippedStr = Field(..., min_length=1, max_length=255)
    email: StrippedStr = Field(..., max_length=255)
    role: StrippedStr = Field("user", min_length=1, max_length=50)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        return normalize_email(v)


class UserUpdateRequest(CamelModel):
    """Partial update, omitted fields keep their value"""
    name: Optional[StrippedStr] = Field(None, min_length=1, max_length=255)
    email: Optional[StrippedStr] = Field(None, max_length=255)
    role: Optional[StrippedStr] = Field(None, min_length=1, max_length=50)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v):
        if v is None:
            return v
        return normalize_email(v)


class UserResponse(CamelModel):
    id: str
    name: str
    email: str
    role: str
    created_at: Optional[datetime] = None


class UserListResponse(PaginatedResponse):
    items: List[UserResponse]
