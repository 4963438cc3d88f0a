from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.models.common import utc_now
from src.validators.review_validators import ReviewValidatorMixin


class ReviewCreate(ReviewValidatorMixin, BaseModel):
    product_id: str
    rating: int
    comment: Optional[str] = None
    title: Optional[str] = None


class ReviewUpdate(ReviewValidatorMixin, BaseModel):
    rating: Optional[int] = None
    comment: Optional[str] = None
    title: Optional[str] = None


class ReviewDB(BaseModel):
    id: str
    user_id: str
    product_id: str
    rating: int
    comment: Optional[str] = None
    title: Optional[str] = None
    helpful: int = 0
    verified: bool = False
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None
