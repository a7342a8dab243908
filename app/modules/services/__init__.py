# app/modules/services/__init__.py
"""
Services module - maintenance and after-sale services

Services are linked to any number of customers through customer_services.

Layout:
- router.py: service endpoints
- service.py: business rules
- repository.py: data access, link replacement in one transaction
- schemas.py: request/response models
"""

from .router import router
from .service import ServicesService
from .repository import ServicesRepository

__all__ = [
    "router",
    "ServicesService",
    "ServicesRepository"
]
