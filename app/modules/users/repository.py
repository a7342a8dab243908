# app/modules/users/repository.py
from typing import Any, Dict, Optional, Protocol
import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.shared.database.list_query import ListParams, ListQueryBuilder, Page
from app.shared.database.models import User

logger = logging.getLogger(__name__)

USER_SORT_FIELDS = {
    "createdAt": "created_at",
    "name": "name",
    "email": "email",
    "role": "role",
}


class UsersStore(Protocol):
    def list_users(self, params: ListParams, search: Optional[str] = None, role: Optional[str] = None) -> Page: ...

    def get_user(self, user_id: str) -> Optional[Any]: ...

    def create_user(self, user_data: Dict[str, Any]) -> Any: ...

    def update_user(self, user: Any, changes: Dict[str, Any]) -> Any: ...

    def delete_user(self, user: Any) -> None: ...


class UsersRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_users(self, params: ListParams, search: Optional[str] = None, role: Optional[str] = None) -> Page:
        builder = ListQueryBuilder(
            User,
            sortable=USER_SORT_FIELDS,
            default_sort="createdAt",
            search_fields=("name", "email")
        )
        builder.search(search)
        builder.equals("role", role)
        return builder.paginate(self.db, params)

    def get_user(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def create_user(self, user_data: Dict[str, Any]) -> User:
        user = User(**user_data)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        logger.info(f"User {user.id} created")
        return user

    def update_user(self, user: User, changes: Dict[str, Any]) -> User:
        for field, value in changes.items():
            setattr(user, field, value)
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete_user(self, user: User) -> None:
        self.db.delete(user)
        self.db.commit()


def get_users_repository(db: Session = Depends(get_db)) -> UsersStore:
    return UsersRepository(db)
