"""
User API endpoints.

Routes:
- POST /users - Register the calling identity
- GET /users/me - Current account
- PATCH /users/me - Change display name

Dependencies: flowshare.application.services, flowshare.models
System role: Account HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from flowshare.api.deps.dependencies import (
    get_authenticated_user_id,
    get_current_user,
    get_user_service,
)
from flowshare.application.services import UserService
from flowshare.models.user import (
    RegisterUserRequest,
    UpdateProfileRequest,
    UserDocument,
    UserResponse,
)

from .router_utils import handle_service_errors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserResponse, status_code=201)
@handle_service_errors
async def register_user(
    request: RegisterUserRequest,
    user_id: str = Depends(get_authenticated_user_id),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """
    Register the identity from X-User-Id as an account.

    Raises:
        HTTPException(400): Id or email already registered
    """
    user = await user_service.register_user(
        user_id,
        request.email,
        role=request.role,
        display_name=request.display_name,
    )
    return UserResponse(**user.model_dump())


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserDocument = Depends(get_current_user)) -> UserResponse:
    """Current account."""
    return UserResponse(**current_user.model_dump())


@router.patch("/me", response_model=UserResponse)
@handle_service_errors
async def update_me(
    request: UpdateProfileRequest,
    current_user: UserDocument = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UserResponse:
    """Change the caller's display name."""
    user = await user_service.update_display_name(current_user.id, request.display_name)
    return UserResponse(**user.model_dump())
