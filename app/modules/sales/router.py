# app/modules/sales/router.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_admin_employee, get_current_employee
from app.shared.database.list_query import ListParams, list_params
from app.shared.database.models import Employee
from app.shared.schemas.common import BaseResponse
from .service import SalesService
from .schemas import (
    SaleCreateRequest, SaleUpdateRequest, SaleResponse,
    SaleMutationResponse, SaleListResponse
)

router = APIRouter()


@router.post("", response_model=SaleMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_sale(
    sale_data: SaleCreateRequest,
    current_employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db)
):
    """
    Record a sale and mark the car SOLD.

    **Errors:**
    - 404 if the car, customer or employee does not exist
    - 400 CONFLICT if the car is not AVAILABLE (also when another sale wins the race)
    """
    service = SalesService(db)
    return await service.create_sale(sale_data)


@router.get("", response_model=SaleListResponse)
async def get_sales(
    params: ListParams = Depends(list_params),
    customer_id: Optional[str] = Query(None, alias="customerId"),
    employee_id: Optional[str] = Query(None, alias="employeeId"),
    sale_status: Optional[str] = Query(None, alias="status"),
    current_employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db)
):
    """List sales, newest first by default"""
    service = SalesService(db)
    return await service.get_sales(params, customer_id, employee_id, sale_status)


@router.get("/{sale_id}", response_model=SaleResponse)
async def get_sale(
    sale_id: str,
    current_employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db)
):
    service = SalesService(db)
    return await service.get_sale(sale_id)


@router.put("/{sale_id}", response_model=SaleMutationResponse)
async def update_sale(
    sale_id: str,
    sale_data: SaleUpdateRequest,
    current_employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db)
):
    """Update price and status; the car status is not affected"""
    service = SalesService(db)
    return await service.update_sale(sale_id, sale_data)


@router.delete("/{sale_id}", response_model=BaseResponse)
async def delete_sale(
    sale_id: str,
    current_employee: Employee = Depends(get_admin_employee),
    db: Session = Depends(get_db)
):
    """Delete a sale and release its car back to AVAILABLE (admin only)"""
    service = SalesService(db)
    return await service.delete_sale(sale_id)
