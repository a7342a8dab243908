# app/modules/customers/router.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.schemas import CustomerLogin
from app.shared.database.list_query import ListParams, list_params
from app.shared.schemas.common import BaseResponse
from .service import CustomersService
from .schemas import (
    CustomerSignupRequest, CustomerUpdateRequest, CustomerDetailResponse,
    CustomerMutationResponse, CustomerListResponse
)

router = APIRouter()


# ==================== AUTH ====================

@router.post("/signup", response_model=CustomerMutationResponse, status_code=status.HTTP_201_CREATED)
async def customer_signup(
    signup_data: CustomerSignupRequest,
    db: Session = Depends(get_db)
):
    """
    Create a customer account

    - customerId is chosen by the customer and must be unique
    - email must be unique (stored lower-cased)
    - password needs at least 6 characters
    """
    service = CustomersService(db)
    return await service.signup(signup_data)


@router.post("/login", response_model=CustomerMutationResponse)
async def customer_login(credentials: CustomerLogin, db: Session = Depends(get_db)):
    service = CustomersService(db)
    return await service.login(credentials)


# ==================== MANAGEMENT ====================

@router.get("", response_model=CustomerListResponse)
async def get_customers(
    params: ListParams = Depends(list_params),
    search: Optional[str] = Query(None, description="Matches id, names, email or phone"),
    db: Session = Depends(get_db)
):
    service = CustomersService(db)
    return await service.get_customers(params, search)


@router.get("/{customer_id}", response_model=CustomerDetailResponse)
async def get_customer(customer_id: str, db: Session = Depends(get_db)):
    service = CustomersService(db)
    return await service.get_customer(customer_id)


@router.put("/{customer_id}", response_model=CustomerMutationResponse)
async def update_customer(
    customer_id: str,
    profile: CustomerUpdateRequest,
    db: Session = Depends(get_db)
):
    service = CustomersService(db)
    return await service.update_customer(customer_id, profile)


@router.delete("/{customer_id}", response_model=BaseResponse)
async def delete_customer(customer_id: str, db: Session = Depends(get_db)):
    service = CustomersService(db)
    return await service.delete_customer(customer_id)
