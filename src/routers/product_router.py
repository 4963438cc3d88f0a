from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import ValidationError

from src.core.errors import DataValidationError, ErrorResponseModel
from src.dependencies.auth import CurrentUser, require_admin
from src.dependencies.services import get_product_service, get_review_service
from src.models.common import SortOrder
from src.models.product import (
    ProductCreate,
    ProductDB,
    ProductFilter,
    ProductSort,
    ProductSortField,
    ProductUpdate,
)
from src.models.review import ReviewDB
from src.services import ProductService, ReviewService

router = APIRouter()


@router.get(
    "",
    response_model=List[ProductDB],
    responses={400: {"model": ErrorResponseModel}},
)
async def list_products(
    category_id: Optional[str] = Query(None, description="Only products in this category"),
    min_price: Optional[float] = Query(None, ge=0, description="Minimum price"),
    max_price: Optional[float] = Query(None, ge=0, description="Maximum price"),
    brand: Optional[str] = Query(None),
    in_stock: Optional[bool] = Query(None, description="Only products with stock left"),
    tags: Optional[List[str]] = Query(None, description="Products carrying any of these tags"),
    is_active: Optional[bool] = Query(None),
    sort_field: Optional[ProductSortField] = Query(None, alias="sort"),
    sort_order: SortOrder = Query(SortOrder.ASC, alias="order"),
    limit: Optional[int] = Query(None, ge=1, description="Page size"),
    offset: int = Query(0, ge=0, description="Number of products to skip"),
    service: ProductService = Depends(get_product_service),
):
    """
    List products. Every given filter must match; pages default to
    DEFAULT_PAGE_SIZE and are capped at MAX_PAGE_SIZE.
    """
    try:
        product_filter = ProductFilter(
            category_id=category_id,
            min_price=min_price,
            max_price=max_price,
            brand=brand,
            in_stock=in_stock,
            tags=tags,
            is_active=is_active,
        )
    except ValidationError as e:
        raise DataValidationError(
            "Invalid product filter", details={"errors": [err["msg"] for err in e.errors()]}
        )

    sort = ProductSort(field=sort_field, order=sort_order) if sort_field else None
    return await service.list_products(product_filter, sort, limit=limit, offset=offset)


@router.get(
    "/search",
    response_model=List[ProductDB],
    responses={400: {"model": ErrorResponseModel}},
)
async def search_products(
    q: str = Query(..., min_length=1, description="Text to find in name, description or tags"),
    limit: Optional[int] = Query(None, ge=1, le=100),
    service: ProductService = Depends(get_product_service),
):
    return await service.search_products(q, limit=limit)


@router.get(
    "/sku/{sku}",
    response_model=ProductDB,
    responses={404: {"model": ErrorResponseModel}},
)
async def get_product_by_sku(sku: str, service: ProductService = Depends(get_product_service)):
    return await service.get_product_by_sku(sku)


@router.get(
    "/{product_id}",
    response_model=ProductDB,
    responses={404: {"model": ErrorResponseModel}},
)
async def get_product(product_id: str, service: ProductService = Depends(get_product_service)):
    """
    Get a product by ID.
    """
    return await service.get_product(product_id)


@router.get("/{product_id}/reviews", response_model=List[ReviewDB])
async def list_product_reviews(
    product_id: str, service: ReviewService = Depends(get_review_service)
):
    return await service.list_product_reviews(product_id)


@router.post(
    "",
    response_model=ProductDB,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponseModel}, 404: {"model": ErrorResponseModel}},
)
async def create_product(
    product: ProductCreate,
    service: ProductService = Depends(get_product_service),
    _admin: CurrentUser = Depends(require_admin),
):
    """
    Create a new product. Admin only.
    """
    return await service.create_product(product)


@router.patch(
    "/{product_id}",
    response_model=ProductDB,
    responses={400: {"model": ErrorResponseModel}, 404: {"model": ErrorResponseModel}},
)
async def update_product(
    product_id: str,
    product: ProductUpdate,
    service: ProductService = Depends(get_product_service),
    _admin: CurrentUser = Depends(require_admin),
):
    """
    Update a product; only the fields sent change. Admin only.
    """
    return await service.update_product(product_id, product)


@router.delete("/{product_id}", response_model=dict)
async def delete_product(
    product_id: str,
    service: ProductService = Depends(get_product_service),
    _admin: CurrentUser = Depends(require_admin),
):
    """
    Delete a product. Admin only.
    """
    return {"deleted": await service.delete_product(product_id)}
