from typing import List, Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.auth.schemas import TokenPayload
from app.core.auth.service import AuthService
from app.core.exceptions import AuthenticationError, AuthorizationError
from app.shared.database.models import Employee, EmployeeRole

security = HTTPBearer(auto_error=False)


async def get_current_employee(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Employee:
    """Resolve the employee behind the bearer token"""

    if credentials is None:
        raise AuthenticationError("Access token required")

    payload = AuthService.verify_token(credentials.credentials)
    if payload is None:
        raise AuthenticationError("Invalid or expired token")

    try:
        claims = TokenPayload(**payload)
    except PydanticValidationError:
        raise AuthenticationError("Invalid token payload")

    employee = db.query(Employee).filter(Employee.employee_id == claims.employee_id).first()
    if employee is None:
        raise AuthenticationError("Employee not found")

    return employee


def require_roles(allowed_roles: List[str]):
    """Factory for a dependency that only lets the given roles through"""
    def role_checker(current_employee: Employee = Depends(get_current_employee)) -> Employee:
        if current_employee.role not in allowed_roles:
            raise AuthorizationError(
                f"Role '{current_employee.role}' is not allowed. Allowed roles: {allowed_roles}"
            )
        return current_employee
    return role_checker


def get_admin_employee(
    current_employee: Employee = Depends(require_roles([EmployeeRole.ADMIN.value]))
) -> Employee:
    return current_employee


async def get_optional_employee(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> Optional[Employee]:
    """Like get_current_employee, but anonymous requests resolve to None"""
    if credentials is None:
        return None
    return await get_current_employee(credentials, db)
