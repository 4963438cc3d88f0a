from typing import List

from fastapi import APIRouter, Depends, status

from src.core.errors import ErrorResponseModel
from src.dependencies.auth import CurrentUser, require_admin
from src.dependencies.services import get_category_service, get_product_service
from src.models.category import CategoryCreate, CategoryDB, CategoryUpdate
from src.models.product import ProductDB
from src.services import CategoryService, ProductService

router = APIRouter()


@router.get("", response_model=List[CategoryDB])
async def list_categories(service: CategoryService = Depends(get_category_service)):
    return await service.list_categories()


@router.get("/top", response_model=List[CategoryDB])
async def top_level_categories(service: CategoryService = Depends(get_category_service)):
    """
    Categories without a parent.
    """
    return await service.top_level_categories()


@router.get(
    "/{category_id}",
    response_model=CategoryDB,
    responses={404: {"model": ErrorResponseModel}},
)
async def get_category(category_id: str, service: CategoryService = Depends(get_category_service)):
    return await service.get_category(category_id)


@router.get(
    "/{category_id}/subcategories",
    response_model=List[CategoryDB],
    responses={404: {"model": ErrorResponseModel}},
)
async def list_subcategories(
    category_id: str, service: CategoryService = Depends(get_category_service)
):
    return await service.subcategories(category_id)


@router.get(
    "/{category_id}/products",
    response_model=List[ProductDB],
    responses={404: {"model": ErrorResponseModel}},
)
async def list_category_products(
    category_id: str, service: ProductService = Depends(get_product_service)
):
    return await service.products_in_category(category_id)


@router.post(
    "",
    response_model=CategoryDB,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponseModel}, 404: {"model": ErrorResponseModel}},
)
async def create_category(
    category: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
    _admin: CurrentUser = Depends(require_admin),
):
    return await service.create_category(category)


@router.patch(
    "/{category_id}",
    response_model=CategoryDB,
    responses={400: {"model": ErrorResponseModel}, 404: {"model": ErrorResponseModel}},
)
async def update_category(
    category_id: str,
    category: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
    _admin: CurrentUser = Depends(require_admin),
):
    """
    Update a category. Re-parenting under one of its own descendants is rejected.
    """
    return await service.update_category(category_id, category)


@router.delete(
    "/{category_id}",
    response_model=dict,
    responses={400: {"model": ErrorResponseModel}},
)
async def delete_category(
    category_id: str,
    service: CategoryService = Depends(get_category_service),
    _admin: CurrentUser = Depends(require_admin),
):
    return {"deleted": await service.delete_category(category_id)}
