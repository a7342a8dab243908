# app/modules/cars/__init__.py
"""
Cars module - dealership inventory

Layout:
- router.py: car endpoints (reads public, writes admin only)
- service.py: validation and status rules
- repository.py: data access
- schemas.py: request/response models
"""

from .router import router
from .service import CarsService
from .repository import CarsRepository

__all__ = [
    "router",
    "CarsService",
    "CarsRepository"
]
