# app/modules/users/router.py
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.shared.database.list_query import ListParams, list_params
from app.shared.schemas.common import BaseResponse
from .repository import UsersStore, get_users_repository
from .service import UsersService
from .schemas import UserCreateRequest, UserListResponse, UserResponse, UserUpdateRequest

router = APIRouter()


def get_users_service(repository: UsersStore = Depends(get_users_repository)) -> UsersService:
    return UsersService(repository)


@router.get("", response_model=UserListResponse)
async def get_users(
    params: ListParams = Depends(list_params),
    search: Optional[str] = Query(None),
    role: Optional[str] = Query(None),
    service: UsersService = Depends(get_users_service)
):
    return await service.get_users(params, search, role)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: str, service: UsersService = Depends(get_users_service)):
    return await service.get_user(user_id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(user_data: UserCreateRequest, service: UsersService = Depends(get_users_service)):
    return await service.create_user(user_data)


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    user_data: UserUpdateRequest,
    service: UsersService = Depends(get_users_service)
):
    """Merge the sent fields into the stored user"""
    return await service.update_user(user_id, user_data)


@router.delete("/{user_id}", response_model=BaseResponse)
async def delete_user(user_id: str, service: UsersService = Depends(get_users_service)):
    return await service.delete_user(user_id)
