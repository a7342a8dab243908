# app/modules/cars/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_validator

from app.shared.database.models import CarStatus
from app.shared.schemas.common import BaseResponse, CamelModel, PaginatedResponse, StrippedStr

MIN_CAR_YEAR = 1900


def validate_car_year(year: int) -> int:
    if year < MIN_CAR_YEAR or year > datetime.now().year + 1:
        raise ValueError("Please provide a valid year")
    return year


class CarCreateRequest(CamelModel):
    make: StrippedStr = Field(..., min_length=1, max_length=100)
    model: StrippedStr = Field(..., min_length=1, max_length=100)
    year: int = Field(..., description=f"{MIN_CAR_YEAR} up to next year")
    price: Decimal = Field(..., gt=0)
    status: Optional[CarStatus] = Field(None, description="Defaults to AVAILABLE")

    @field_validator("year")
    @classmethod
    def check_year(cls, v):
        return validate_car_year(v)

    class Config:
        json_schema_extra = {
            "example": {
                "make": "Toyota",
                "model": "Corolla",
                "year": 2022,
                "price": 10000
            }
        }


class CarUpdateRequest(CarCreateRequest):
    """Full update; status is optional and checked against active sales"""


class CarSaleCustomer(CamelModel):
    customer_id: str
    firstname: str
    lastname: str


class CarSaleEmployee(CamelModel):
    employee_id: str
    fname: str
    lname: str


class CarSaleInfo(CamelModel):
    sale_id: str
    total_price: float
    status: str
    sale_date: datetime
    customer: Optional[CarSaleCustomer] = None
    employee: Optional[CarSaleEmployee] = None


class CarResponse(CamelModel):
    car_id: str
    make: str
    model: str
    year: int
    price: float
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CarDetailResponse(CarResponse):
    sales: List[CarSaleInfo] = []


class CarMutationResponse(BaseResponse):
    car: CarResponse


class CarListResponse(PaginatedResponse):
    items: List[CarDetailResponse]
