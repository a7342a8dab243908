# app/modules/employees/router.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.dependencies import get_admin_employee, get_current_employee, get_optional_employee
from app.core.auth.schemas import EmployeeLogin
from app.shared.database.list_query import ListParams, list_params
from app.shared.database.models import Employee
from app.shared.schemas.common import BaseResponse
from .service import EmployeesService
from .schemas import (
    EmployeeSignupRequest, EmployeeUpdateRequest, EmployeeDetailResponse,
    EmployeeMutationResponse, EmployeeLoginResponse, EmployeeListResponse
)

router = APIRouter()


# ==================== AUTH ====================

@router.post("/signup", response_model=EmployeeMutationResponse, status_code=status.HTTP_201_CREATED)
async def employee_signup(
    signup_data: EmployeeSignupRequest,
    current_employee: Optional[Employee] = Depends(get_optional_employee),
    db: Session = Depends(get_db)
):
    """
    Create an employee account

    ADMIN accounts need an admin bearer token, except for the very first admin.
    """
    service = EmployeesService(db)
    return await service.signup(signup_data, granted_by=current_employee)


@router.post("/login", response_model=EmployeeLoginResponse)
async def employee_login(credentials: EmployeeLogin, db: Session = Depends(get_db)):
    """
    Log in and get a bearer token

    **Returns:**
    - accessToken: JWT carrying employee_id and role
    - employee: the employee profile
    """
    service = EmployeesService(db)
    return await service.login(credentials)


# ==================== MANAGEMENT ====================

@router.get("", response_model=EmployeeListResponse)
async def get_employees(
    params: ListParams = Depends(list_params),
    search: Optional[str] = Query(None, description="Matches id, first or last name"),
    role: Optional[str] = Query(None),
    current_employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db)
):
    service = EmployeesService(db)
    return await service.get_employees(params, search, role)


@router.get("/{employee_id}", response_model=EmployeeDetailResponse)
async def get_employee(
    employee_id: str,
    current_employee: Employee = Depends(get_current_employee),
    db: Session = Depends(get_db)
):
    service = EmployeesService(db)
    return await service.get_employee(employee_id)


@router.put("/{employee_id}", response_model=EmployeeMutationResponse)
async def update_employee(
    employee_id: str,
    profile: EmployeeUpdateRequest,
    current_employee: Employee = Depends(get_admin_employee),
    db: Session = Depends(get_db)
):
    service = EmployeesService(db)
    return await service.update_employee(employee_id, profile)


@router.delete("/{employee_id}", response_model=BaseResponse)
async def delete_employee(
    employee_id: str,
    current_employee: Employee = Depends(get_admin_employee),
    db: Session = Depends(get_db)
):
    service = EmployeesService(db)
    return await service.delete_employee(employee_id)
