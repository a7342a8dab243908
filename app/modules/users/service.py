# app/modules/users/service.py
from typing import Optional

from app.core.exceptions import NotFoundError
from app.shared.database.list_query import ListParams
from .repository import UsersStore
from .schemas import UserCreateRequest, UserListResponse, UserResponse, UserUpdateRequest


class UsersService:
    def __init__(self, repository: UsersStore):
        self.repository = repository

    async def get_users(
        self,
        params: ListParams,
        search: Optional[str] = None,
        role: Optional[str] = None
    ) -> UserListResponse:
        page = self.repository.list_users(params, search, role)
        return UserListResponse(
            items=[UserResponse.model_validate(user) for user in page.items],
            pagination=page.pagination()
        )

    async def get_user(self, user_id: str) -> UserResponse:
        user = self.repository.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return UserResponse.model_validate(user)

    async def create_user(self, user_data: UserCreateRequest) -> UserResponse:
        user = self.repository.create_user(user_data.model_dump())
        return UserResponse.model_validate(user)

    async def update_user(self, user_id: str, user_data: UserUpdateRequest) -> UserResponse:
        user = self.repository.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        changes = user_data.model_dump(exclude_unset=True, exclude_none=True)
        user = self.repository.update_user(user, changes)
        return UserResponse.model_validate(user)

    async def delete_user(self, user_id: str) -> dict:
        user = self.repository.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        self.repository.delete_user(user)
        return {
            "success": True,
            "message": "User deleted successfully"
        }
