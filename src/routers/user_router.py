from typing import List

from fastapi import APIRouter, Depends, status

from src.core.errors import ErrorResponse, ErrorResponseModel
from src.dependencies.auth import CurrentUser, get_current_user, require_admin
from src.dependencies.services import (
    get_order_service,
    get_review_service,
    get_user_service,
)
from src.models.order import OrderDB
from src.models.review import ReviewDB
from src.models.user import LoginRequest, TokenResponse, UserDB, UserRegister
from src.services import OrderService, ReviewService, UserService

router = APIRouter()


def _require_self_or_admin(user_id: str, user: CurrentUser):
    if user.owner_scope is not None and user.owner_scope != user_id:
        raise ErrorResponse("You can only access your own account.", status_code=403)


@router.post(
    "/register",
    response_model=UserDB,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponseModel}},
)
async def register(data: UserRegister, service: UserService = Depends(get_user_service)):
    """
    Create a user account.
    """
    return await service.register(data)


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponseModel}},
)
async def login(data: LoginRequest, service: UserService = Depends(get_user_service)):
    """
    Exchange email and password for a bearer token.
    """
    return await service.login(data.email, data.password)


@router.get("", response_model=List[UserDB])
async def list_users(
    service: UserService = Depends(get_user_service),
    _admin: CurrentUser = Depends(require_admin),
):
    return await service.list_users()


@router.get("/me", response_model=UserDB)
async def get_me(
    service: UserService = Depends(get_user_service),
    user: CurrentUser = Depends(get_current_user),
):
    return await service.get_user(user.user_id)


@router.get(
    "/{user_id}",
    response_model=UserDB,
    responses={404: {"model": ErrorResponseModel}},
)
async def get_user(
    user_id: str,
    service: UserService = Depends(get_user_service),
    _user: CurrentUser = Depends(get_current_user),
):
    return await service.get_user(user_id)


@router.get("/{user_id}/orders", response_model=List[OrderDB])
async def list_user_orders(
    user_id: str,
    service: OrderService = Depends(get_order_service),
    user: CurrentUser = Depends(get_current_user),
):
    _require_self_or_admin(user_id, user)
    return await service.list_user_orders(user_id)


@router.get("/{user_id}/reviews", response_model=List[ReviewDB])
async def list_user_reviews(
    user_id: str,
    service: ReviewService = Depends(get_review_service),
    user: CurrentUser = Depends(get_current_user),
):
    _require_self_or_admin(user_id, user)
    return await service.list_user_reviews(user_id)
