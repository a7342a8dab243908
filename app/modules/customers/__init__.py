# app/modules/customers/__init__.py
"""
Customers module - accounts and profiles

Layout:
- router.py: signup, login and profile endpoints
- service.py: account rules (unique id and email, password hashing)
- repository.py: data access
- schemas.py: request/response models
"""

from .router import router
from .service import CustomersService
from .repository import CustomersRepository

__all__ = [
    "router",
    "CustomersService",
    "CustomersRepository"
]
