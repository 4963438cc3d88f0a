from bson.errors import InvalidId
from bson.objectid import ObjectId

from src.core.errors import DataValidationError


def validate_object_id(value: str, field: str = "id") -> ObjectId:
    """Convert a string id to an ObjectId, rejecting malformed ids."""
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise DataValidationError(
            f"Invalid {field} format", details={"field": field, "value": str(value)}
        )
