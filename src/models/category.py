"""Category models"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.models.common import utc_now


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    image: Optional[str] = None
    parent_category_id: Optional[str] = None


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    image: Optional[str] = None
    parent_category_id: Optional[str] = None


class CategoryDB(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    image: Optional[str] = None
    parent_category_id: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: Optional[datetime] = None
