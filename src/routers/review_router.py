from typing import List

from fastapi import APIRouter, Depends, Query, status

from src.core.errors import ErrorResponseModel
from src.dependencies.auth import CurrentUser, get_current_user
from src.dependencies.services import get_review_service
from src.models.review import ReviewCreate, ReviewDB, ReviewUpdate
from src.services import ReviewService

router = APIRouter()


@router.get("", response_model=List[ReviewDB])
async def list_reviews(
    product_id: str = Query(..., description="Product whose reviews to list"),
    service: ReviewService = Depends(get_review_service),
):
    """
    List all reviews for a product.
    """
    return await service.list_product_reviews(product_id)


@router.get(
    "/{review_id}",
    response_model=ReviewDB,
    responses={404: {"model": ErrorResponseModel}},
)
async def get_review(review_id: str, service: ReviewService = Depends(get_review_service)):
    return await service.get_review(review_id)


@router.post(
    "",
    response_model=ReviewDB,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponseModel}, 404: {"model": ErrorResponseModel}},
)
async def create_review(
    review: ReviewCreate,
    service: ReviewService = Depends(get_review_service),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Add a review as the authenticated user.
    """
    return await service.create_review(user.user_id, review)


@router.patch(
    "/{review_id}",
    response_model=ReviewDB,
    responses={403: {"model": ErrorResponseModel}, 404: {"model": ErrorResponseModel}},
)
async def update_review(
    review_id: str,
    review: ReviewUpdate,
    service: ReviewService = Depends(get_review_service),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Update a review. Only the author or an admin can update.
    """
    return await service.update_review(review_id, review, user.user_id, is_admin=user.is_admin())


@router.delete(
    "/{review_id}",
    response_model=dict,
    responses={403: {"model": ErrorResponseModel}},
)
async def delete_review(
    review_id: str,
    service: ReviewService = Depends(get_review_service),
    user: CurrentUser = Depends(get_current_user),
):
    """
    Delete a review. Only the author or an admin can delete.
    """
    deleted = await service.delete_review(review_id, user.user_id, is_admin=user.is_admin())
    return {"deleted": deleted}


@router.post(
    "/{review_id}/helpful",
    response_model=ReviewDB,
    responses={404: {"model": ErrorResponseModel}},
)
async def mark_review_helpful(
    review_id: str,
    service: ReviewService = Depends(get_review_service),
    _user: CurrentUser = Depends(get_current_user),
):
    return await service.mark_helpful(review_id)
