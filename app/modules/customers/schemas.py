# app/modules/customers/schemas.py
from datetime import datetime
from typing import List, Optional
import re

from pydantic import Field, field_validator

from app.shared.schemas.common import BaseResponse, CamelModel, PaginatedResponse, StrippedStr

EMAIL_PATTERN = re.compile(r"^\S+@\S+\.\S+$")
MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    email = email.strip().lower()
    if not EMAIL_PATTERN.match(email):
        raise ValueError("Please provide a valid email address")
    return email


class CustomerProfile(CamelModel):
    firstname: StrippedStr = Field(..., min_length=1, max_length=100)
    lastname: StrippedStr = Field(..., min_length=1, max_length=100)
    phone: StrippedStr = Field(..., min_length=1, max_length=50)
    address: StrippedStr = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return normalize_email(v)


class CustomerSignupRequest(CustomerProfile):
    customer_id: StrippedStr = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)

    class Config:
        json_schema_extra = {
            "example": {
                "customerId": "C1",
                "firstname": "Ada",
                "lastname": "Lovelace",
                "phone": "555-0100",
                "address": "12 Main St",
                "email": "ada@example.com",
                "password": "secret123"
            }
        }


class CustomerUpdateRequest(CustomerProfile):
    pass


class CustomerSaleEmployee(CamelModel):
    employee_id: str
    fname: str
    lname: str


class CustomerSaleCar(CamelModel):
    car_id: str
    make: str
    model: str
    year: int


class CustomerSaleInfo(CamelModel):
    sale_id: str
    total_price: float
    status: str
    sale_date: datetime
    employee: Optional[CustomerSaleEmployee] = None
    car: Optional[CustomerSaleCar] = None


class CustomerResponse(CamelModel):
    customer_id: str
    firstname: str
    lastname: str
    phone: str
    address: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CustomerDetailResponse(CustomerResponse):
    sales: List[CustomerSaleInfo] = []


class CustomerMutationResponse(BaseResponse):
    customer: CustomerResponse


class CustomerListResponse(PaginatedResponse):
    items: List[CustomerDetailResponse]
