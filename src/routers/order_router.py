from typing import List

from fastapi import APIRouter, Depends, status

from src.core.errors import ErrorResponseModel
from src.dependencies.auth import CurrentUser, get_current_user, require_admin
from src.dependencies.services import get_order_service
from src.models.order import OrderCreate, OrderDB, OrderStatusUpdate
from src.services import OrderService

router = APIRouter()


@router.get("", response_model=List[OrderDB])
async def list_orders(
    service: OrderService = Depends(get_order_service),
    _admin: CurrentUser = Depends(require_admin),
):
    """
    All orders, newest first. Admin only.
    """
    return await service.list_orders()


@router.get("/mine", response_model=List[OrderDB])
async def list_my_orders(
    service: OrderService = Depends(get_order_service),
    user: CurrentUser = Depends(get_current_user),
):
    return await service.list_user_orders(user.user_id)


@router.get(
    "/{order_id}",
    response_model=OrderDB,
    responses={403: {"model": ErrorResponseModel}, 404: {"model": ErrorResponseModel}},
)
async def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
    user: CurrentUser = Depends(get_current_user),
):
    return await service.get_order(order_id, owner_id=user.owner_scope)


@router.post(
    "",
    response_model=OrderDB,
    status_code=status.HTTP_201_CREATED,
    responses={
        404: {"model": ErrorResponseModel},
        409: {"model": ErrorResponseModel},
    },
)
async def create_order(
    order: OrderCreate,
    service: OrderService = Depends(get_order_service),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Place an order for the authenticated user.

    Stock is reserved for every item or for none of them.
    """
    return await service.create_order(user.user_id, order)


@router.patch(
    "/{order_id}/status",
    response_model=OrderDB,
    responses={404: {"model": ErrorResponseModel}, 409: {"model": ErrorResponseModel}},
)
async def update_order_status(
    order_id: str,
    update: OrderStatusUpdate,
    service: OrderService = Depends(get_order_service),
    _admin: CurrentUser = Depends(require_admin),
):
    """
    Move an order to its next status. Admin only.
    """
    return await service.update_status(order_id, update.status, update.tracking_number)


@router.post(
    "/{order_id}/cancel",
    response_model=OrderDB,
    responses={
        403: {"model": ErrorResponseModel},
        404: {"model": ErrorResponseModel},
        409: {"model": ErrorResponseModel},
    },
)
async def cancel_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Cancel an order and restore its stock. Owner or admin.
    """
    return await service.cancel_order(order_id, owner_id=user.owner_scope)
