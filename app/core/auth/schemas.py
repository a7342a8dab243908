from typing import Optional
from datetime import datetime

from pydantic import BaseModel, Field


class EmployeeLogin(BaseModel):
    employee_id: str = Field(..., min_length=1, alias="employeeId")
    password: str = Field(..., min_length=1)

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "employeeId": "EMP001",
                "password": "secret123"
            }
        }


class CustomerLogin(BaseModel):
    customer_id: str = Field(..., min_length=1, alias="customerId")
    password: str = Field(..., min_length=1)

    class Config:
        populate_by_name = True


class TokenPayload(BaseModel):
    """Claims carried by an employee access token"""
    employee_id: str
    role: str
    exp: Optional[datetime] = None
