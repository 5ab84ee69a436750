"""
User Management API
"""

from fastapi import APIRouter, Depends, status

from partner_calendar.core.dependencies import get_current_user_id, get_user_service
from partner_calendar.schemas.user import CreateUserRequest, UserPublic, UserResponse
from partner_calendar.services import UserService


router = APIRouter(
    prefix="/users",
    tags=["Users"]
)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_user(request: CreateUserRequest, service: UserService = Depends(get_user_service)):
    return UserResponse.model_validate(service.register_user(request))


@router.get("/me", response_model=UserResponse)
def get_me(
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    return UserResponse.model_validate(service.get_user(user_id))


@router.get("/{target_id}", response_model=UserPublic)
def get_user(
    target_id: int,
    user_id: int = Depends(get_current_user_id),
    service: UserService = Depends(get_user_service),
):
    return UserPublic.model_validate(service.get_user(target_id))
