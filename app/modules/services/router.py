# app/modules/services/router.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_admin_employee, get_current_employee
from app.shared.database.list_query import ListParams, list_params
from app.shared.database.models import Employee
from app.shared.schemas.common import BaseResponse
from .service import ServicesService
from .schemas import (
    AddCustomerRequest, AddCustomerResponse, ServiceCreateRequest,
    ServiceListResponse, ServiceMutationResponse, ServiceResponse,
    ServiceUpdateRequest
)

router = APIRouter()


@router.get("", response_model=ServiceListResponse)
async def get_services(
    params: ListParams = Depends(list_params),
    service_type: Optional[str] = Query(None, alias="serviceType"),
    min_cost: Optional[str] = Query(None, alias="minCost"),
    max_cost: Optional[str] = Query(None, alias="maxCost"),
    db: Session = Depends(get_db)
):
    service = ServicesService(db)
    return await service.get_services(params, service_type, min_cost, max_cost)


@router.post("/add-customer", response_model=AddCustomerResponse, status_code=status.HTTP_201_CREATED)
async def add_customer_to_service(
    link_data: AddCustomerRequest,
    current_employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db)
):
    """Link a customer to a service; linking twice is a conflict"""
    service = ServicesService(db)
    return await service.add_customer(link_data)


@router.get("/{service_id}", response_model=ServiceResponse)
async def get_service(service_id: str, db: Session = Depends(get_db)):
    service = ServicesService(db)
    return await service.get_service(service_id)


@router.post("", response_model=ServiceMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_service(
    service_data: ServiceCreateRequest,
    current_employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db)
):
    service = ServicesService(db)
    return await service.create_service(service_data)


@router.put("/{service_id}", response_model=ServiceMutationResponse)
async def update_service(
    service_id: str,
    service_data: ServiceUpdateRequest,
    current_employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db)
):
    service = ServicesService(db)
    return await service.update_service(service_id, service_data)


@router.delete("/{service_id}", response_model=BaseResponse)
async def delete_service(
    service_id: str,
    current_employee: Employee = Depends(get_admin_employee),
    db: Session = Depends(get_db)
):
    service = ServicesService(db)
    return await service.delete_service(service_id)
