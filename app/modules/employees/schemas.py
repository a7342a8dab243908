# app/modules/employees/schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.shared.database.models import EmployeeRole
from app.shared.schemas.common import BaseResponse, CamelModel, PaginatedResponse, StrippedStr


class EmployeeProfile(CamelModel):
    fname: StrippedStr = Field(..., min_length=1, max_length=100)
    lname: StrippedStr = Field(..., min_length=1, max_length=100)
    phone: StrippedStr = Field(..., min_length=1, max_length=50)
    role: EmployeeRole


class EmployeeSignupRequest(EmployeeProfile):
    employee_id: StrippedStr = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=6)

    class Config:
        json_schema_extra = {
            "example": {
                "employeeId": "E1",
                "fname": "Grace",
                "lname": "Hopper",
                "phone": "555-0101",
                "role": "SALESPERSON",
                "password": "secret123"
            }
        }


class EmployeeUpdateRequest(EmployeeProfile):
    pass


class EmployeeSaleCustomer(CamelModel):
    customer_id: str
    firstname: str
    lastname: str
    email: Optional[str] = None


class EmployeeSaleCar(CamelModel):
    car_id: str
    make: str
    model: str
    year: Optional[int] = None
    price: Optional[float] = None


class EmployeeSaleInfo(CamelModel):
    sale_id: str
    total_price: float
    status: str
    sale_date: datetime
    customer: Optional[EmployeeSaleCustomer] = None
    car: Optional[EmployeeSaleCar] = None


class EmployeeResponse(CamelModel):
    employee_id: str
    fname: str
    lname: str
    phone: str
    role: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class EmployeeDetailResponse(EmployeeResponse):
    sales: List[EmployeeSaleInfo] = []


class EmployeeMutationResponse(BaseResponse):
    employee: EmployeeResponse


class EmployeeLoginResponse(BaseResponse):
    access_token: str
    token_type: str = "bearer"
    employee: EmployeeResponse


class EmployeeListResponse(PaginatedResponse):
    items: List[EmployeeDetailResponse]
