# app/modules/sales/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from app.shared.database.models import SaleStatus
from app.shared.schemas.common import BaseResponse, CamelModel, PaginatedResponse, StrippedStr


class SaleCreateRequest(CamelModel):
    customer_id: StrippedStr = Field(..., min_length=1, description="Buying customer")
    employee_id: StrippedStr = Field(..., min_length=1, description="Selling employee")
    car_id: StrippedStr = Field(..., min_length=1, description="Car being sold")
    total_price: Decimal = Field(..., gt=0, description="Final sale price")
    status: Optional[SaleStatus] = Field(None, description="Defaults to COMPLETED")

    class Config:
        json_schema_extra = {
            "example": {
                "customerId": "C1",
                "employeeId": "E1",
                "carId": "6f1c1d0e-8b1a-4c55-9d7e-2f7f3f0e9a10",
                "totalPrice": 9500
            }
        }


class SaleUpdateRequest(CamelModel):
    total_price: Decimal = Field(..., gt=0)
    status: SaleStatus


class SaleCustomerInfo(CamelModel):
    customer_id: str
    firstname: str
    lastname: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class SaleEmployeeInfo(CamelModel):
    employee_id: str
    fname: str
    lname: str
    full_name: Optional[str] = None
    phone: Optional[str] = None


class SaleCarInfo(CamelModel):
    car_id: str
    make: str
    model: str
    year: int
    price: Optional[float] = None
    status: Optional[str] = None


class SaleResponse(CamelModel):
    sale_id: str
    customer_id: str
    employee_id: str
    car_id: str
    total_price: float
    status: str
    sale_date: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    customer: Optional[SaleCustomerInfo] = None
    employee: Optional[SaleEmployeeInfo] = None
    car: Optional[SaleCarInfo] = None


class SaleMutationResponse(BaseResponse):
    sale: SaleResponse


class SaleListResponse(PaginatedResponse):
    items: List[SaleResponse]
