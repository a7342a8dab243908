# app/modules/cars/router.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_admin_employee
from app.shared.database.list_query import ListParams, list_params
from app.shared.database.models import Employee
from app.shared.schemas.common import BaseResponse
from .service import CarsService
from .schemas import (
    CarCreateRequest, CarUpdateRequest, CarDetailResponse,
    CarMutationResponse, CarListResponse
)

router = APIRouter()


@router.post("", response_model=CarMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_car(
    car_data: CarCreateRequest,
    current_employee: Employee = Depends(get_admin_employee),
    db: Session = Depends(get_db)
):
    """Add a car to the inventory (admin only)"""
    service = CarsService(db)
    return await service.create_car(car_data)


@router.get("", response_model=CarListResponse)
async def get_cars(
    params: ListParams = Depends(list_params),
    search: Optional[str] = Query(None, description="Matches make or model"),
    car_status: Optional[str] = Query(None, alias="status"),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    db: Session = Depends(get_db)
):
    """
    List cars

    **Filters:**
    - search: case-insensitive match on make or model
    - status: exact status
    - minPrice / maxPrice: inclusive price range
    """
    service = CarsService(db)
    return await service.get_cars(params, search, car_status, min_price, max_price)


@router.get("/{car_id}", response_model=CarDetailResponse)
async def get_car(car_id: str, db: Session = Depends(get_db)):
    service = CarsService(db)
    return await service.get_car(car_id)


@router.put("/{car_id}", response_model=CarMutationResponse)
async def update_car(
    car_id: str,
    car_data: CarUpdateRequest,
    current_employee: Employee = Depends(get_admin_employee),
    db: Session = Depends(get_db)
):
    service = CarsService(db)
    return await service.update_car(car_id, car_data)


@router.delete("/{car_id}", response_model=BaseResponse)
async def delete_car(
    car_id: str,
    current_employee: Employee = Depends(get_admin_employee),
    db: Session = Depends(get_db)
):
    service = CarsService(db)
    return await service.delete_car(car_id)
