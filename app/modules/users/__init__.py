# app/modules/users/__init__.py
"""
Users module - generic user records (name, email, role)

The repository is injected through get_users_repository so the storage
can be replaced without touching the routes.
"""

from .router import router
from .service import UsersService
from .repository import UsersRepository, get_users_repository

__all__ = [
    "router",
    "UsersService",
    "UsersRepository",
    "get_users_repository"
]
