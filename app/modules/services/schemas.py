# app/modules/services/schemas.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from app.shared.schemas.common import BaseResponse, CamelModel, PaginatedResponse, StrippedStr


class ServiceCreateRequest(CamelModel):
    service_type: StrippedStr = Field(..., min_length=1, max_length=50)
    description: StrippedStr = Field(..., min_length=1)
    cost: Decimal = Field(..., gt=0)
    customer_ids: Optional[List[str]] = Field(None, description="Customers to link to the service")

    class Config:
        json_schema_extra = {
            "example": {
                "serviceType": "OIL_CHANGE",
                "description": "Synthetic oil and filter",
                "cost": 89.9,
                "customerIds": ["C1"]
            }
        }


class ServiceUpdateRequest(ServiceCreateRequest):
    """When customerIds is sent it replaces the linked customers"""


class AddCustomerRequest(CamelModel):
    service_id: StrippedStr = Field(..., min_length=1)
    customer_id: StrippedStr = Field(..., min_length=1)


class LinkedCustomer(CamelModel):
    customer_id: str
    firstname: str
    lastname: str
    email: Optional[str] = None
    phone: Optional[str] = None


class ServiceCustomerLink(CamelModel):
    customer_id: str
    created_at: Optional[datetime] = None
    customer: Optional[LinkedCustomer] = None


class ServiceResponse(CamelModel):
    service_id: str
    service_type: str
    description: str
    cost: float
    service_date: datetime
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    customers: List[ServiceCustomerLink] = []


class ServiceSummary(CamelModel):
    service_id: str
    service_type: str
    description: str
    cost: float


class CustomerServiceResponse(CamelModel):
    id: int
    customer_id: str
    service_id: str
    created_at: Optional[datetime] = None
    service: Optional[ServiceSummary] = None
    customer: Optional[LinkedCustomer] = None


class ServiceMutationResponse(BaseResponse):
    service: ServiceResponse


class AddCustomerResponse(BaseResponse):
    customer_service: CustomerServiceResponse


class ServiceListResponse(PaginatedResponse):
    items: List[ServiceResponse]
