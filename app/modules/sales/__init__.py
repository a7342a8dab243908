# app/modules/sales/__init__.py
"""
Sales module

Records car sales and keeps the inventory consistent with them:
- Creating a sale marks the car SOLD in the same transaction
- Deleting a sale puts the car back to AVAILABLE in the same transaction
- Listing with filters, sorting and pagination

Layout:
- router.py: sales endpoints
- service.py: business rules
- repository.py: data access and transactions
- schemas.py: request/response models
"""

from .router import router
from .service import SalesService
from .repository import SalesRepository

__all__ = [
    "router",
    "SalesService",
    "SalesRepository"
]
