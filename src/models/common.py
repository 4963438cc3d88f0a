"""Shared model helpers and embedded sub-documents"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

from bson import ObjectId
from pydantic import BaseModel, Field

M = TypeVar("M", bound=BaseModel)


def utc_now():
    """Helper function for Pydantic default_factory to get current UTC time"""
    return datetime.now(timezone.utc)


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class Address(BaseModel):
    street: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None


class ShippingAddress(BaseModel):
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)


def stringify_ids(value: Any) -> Any:
    """
    Convert a MongoDB document into API shape: `_id` becomes `id` and every
    ObjectId (including inside embedded lists and documents) becomes a string.
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, list):
        return [stringify_ids(v) for v in value]
    if isinstance(value, dict):
        out = {}
        for key, item in value.items():
            out["id" if key == "_id" else key] = stringify_ids(item)
        return out
    return value


def doc_to_model(model_class: Type[M], doc: Dict[str, Any]) -> M:
    """Validate a stored document into its API model."""
    return model_class.model_validate(stringify_ids(doc))
