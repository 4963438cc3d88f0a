"""Product model and related schemas"""
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.models.common import SortOrder, utc_now


class ProductSpecifications(BaseModel):
    weight: Optional[str] = None
    dimensions: Optional[str] = None
    color: Optional[str] = None
    material: Optional[str] = None


class ProductRating(BaseModel):
    average: float = 0.0
    count: int = 0


class ProductCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1, max_length=2000)
    price: float = Field(..., gt=0)
    discount_price: Optional[float] = Field(None, gt=0)
    category_id: str
    brand: Optional[str] = Field(None, max_length=100)
    images: List[str] = Field(default_factory=list)
    stock: int = Field(0, ge=0)
    sku: str = Field(..., min_length=1, max_length=100)
    tags: List[str] = Field(default_factory=list)
    specifications: Optional[ProductSpecifications] = None

    @model_validator(mode="after")
    def discount_below_price(self):
        if self.discount_price is not None and self.discount_price > self.price:
            raise ValueError("Discount price cannot exceed price")
        return self


class ProductUpdate(BaseModel):
    # Stock moves only through orders
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1, max_length=2000)
    price: Optional[float] = Field(None, gt=0)
    discount_price: Optional[float] = Field(None, gt=0)
    category_id: Optional[str] = None
    brand: Optional[str] = Field(None, max_length=100)
    images: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    specifications: Optional[ProductSpecifications] = None
    is_active: Optional[bool] = None


class ProductDB(BaseModel):
    id: str
    name: str
    description: str
    price: float
    discount_price: Optional[float] = None
    category_id: str
    brand: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    stock: int = 0
    sku: str
    tags: List[str] = Field(default_factory=list)
    specifications: Optional[ProductSpecifications] = None
    rating: ProductRating = Field(default_factory=ProductRating)
    is_active: bool = True
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)


class ProductSortField(str, Enum):
    NAME = "NAME"
    PRICE = "PRICE"
    CREATED_AT = "CREATED_AT"
    RATING = "RATING"


# Document field backing each sort option
SORT_FIELDS = {
    ProductSortField.NAME: "name",
    ProductSortField.PRICE: "price",
    ProductSortField.CREATED_AT: "created_at",
    ProductSortField.RATING: "rating.average",
}


class ProductSort(BaseModel):
    field: ProductSortField
    order: SortOrder = SortOrder.ASC


class ProductFilter(BaseModel):
    category_id: Optional[str] = None
    min_price: Optional[float] = Field(None, ge=0)
    max_price: Optional[float] = Field(None, ge=0)
    brand: Optional[str] = None
    in_stock: Optional[bool] = None
    tags: Optional[List[str]] = None
    is_active: Optional[bool] = None

    @model_validator(mode="after")
    def price_range_valid(self):
        if (
            self.min_price is not None
            and self.max_price is not None
            and self.max_price < self.min_price
        ):
            raise ValueError("Maximum price must be greater than or equal to minimum price")
        return self
