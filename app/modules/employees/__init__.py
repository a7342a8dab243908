# app/modules/employees/__init__.py
"""
Employees module - staff accounts and access tokens

Layout:
- router.py: signup, login and management endpoints
- service.py: account rules and token issuing
- repository.py: data access
- schemas.py: request/response models
"""

from .router import router
from .service import EmployeesService
from .repository import EmployeesRepository

__all__ = [
    "router",
    "EmployeesService",
    "EmployeesRepository"
]
