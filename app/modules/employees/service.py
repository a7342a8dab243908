# app/modules/employees/service.py
from typing import Optional
import logging

from sqlalchemy.orm import Session

from app.core.auth.schemas import EmployeeLogin
from app.core.auth.service import AuthService
from app.core.exceptions import AuthenticationError, AuthorizationError, ConflictError, NotFoundError
from app.shared.database.models import Employee, EmployeeRole
from app.shared.database.list_query import ListParams
from .repository import EmployeesRepository
from .schemas import (
    EmployeeSignupRequest, EmployeeUpdateRequest, EmployeeResponse,
    EmployeeDetailResponse, EmployeeMutationResponse, EmployeeLoginResponse,
    EmployeeListResponse
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid Employee ID or password"


class EmployeesService:
    def __init__(self, db: Session):
        self.db = db
        self.repository = EmployeesRepository(db)

    async def signup(
        self,
        signup_data: EmployeeSignupRequest,
        granted_by: Optional[Employee] = None
    ) -> EmployeeMutationResponse:
        """
        Create an employee account.

        Any role can sign up publicly except ADMIN: once an admin exists,
        new admins must be created by an admin (`granted_by`).
        """
        if signup_data.role == EmployeeRole.ADMIN and self.repository.count_by_role(EmployeeRole.ADMIN.value) > 0:
            if granted_by is None or granted_by.role != EmployeeRole.ADMIN.value:
                raise AuthorizationError("Only an admin can create admin accounts")

        if self.repository.get_employee(signup_data.employee_id):
            raise ConflictError("Employee ID already exists")

        employee = self.repository.create_employee({
            "employee_id": signup_data.employee_id,
            "fname": signup_data.fname,
            "lname": signup_data.lname,
            "phone": signup_data.phone,
            "role": signup_data.role.value,
            "password_hash": AuthService.get_password_hash(signup_data.password)
        })
        logger.info(f"Employee {employee.employee_id} signed up with role {employee.role}")

        return EmployeeMutationResponse(
            message="Employee account created successfully!",
            employee=EmployeeResponse.model_validate(employee)
        )

    async def login(self, credentials: EmployeeLogin) -> EmployeeLoginResponse:
        """Check the password and issue an access token"""
        employee = self.repository.get_employee(credentials.employee_id)

        if not employee or not AuthService.verify_password(credentials.password, employee.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS)

        access_token = AuthService.create_access_token({
            "employee_id": employee.employee_id,
            "role": employee.role
        })

        return EmployeeLoginResponse(
            message="Login successful!",
            access_token=access_token,
            employee=EmployeeResponse.model_validate(employee)
        )

    async def get_employees(
        self,
        params: ListParams,
        search: Optional[str] = None,
        role: Optional[str] = None
    ) -> EmployeeListResponse:
        page = self.repository.list_employees(params, search, role)
        return EmployeeListResponse(
            items=[EmployeeDetailResponse.model_validate(e) for e in page.items],
            pagination=page.pagination()
        )

    async def get_employee(self, employee_id: str) -> EmployeeDetailResponse:
        employee = self.repository.get_employee(employee_id, with_sales=True)
        if not employee:
            raise NotFoundError("Employee not found")
        return EmployeeDetailResponse.model_validate(employee)

    async def update_employee(
        self,
        employee_id: str,
        profile: EmployeeUpdateRequest
    ) -> EmployeeMutationResponse:
        employee = self.repository.get_employee(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        employee = self.repository.update_employee(employee, {
            "fname": profile.fname,
            "lname": profile.lname,
            "phone": profile.phone,
            "role": profile.role.value
        })

        return EmployeeMutationResponse(
            message="Employee updated successfully",
            employee=EmployeeResponse.model_validate(employee)
        )

    async def delete_employee(self, employee_id: str) -> dict:
        employee = self.repository.get_employee(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")

        self.repository.delete_employee(employee)

        return {
            "success": True,
            "message": "Employee deleted successfully"
        }
