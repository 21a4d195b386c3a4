"""ObjectId format checks for path parameters."""

from bson import ObjectId


def is_valid_object_id(value: str) -> bool:
    """
    Check that a path parameter is a MongoDB ObjectId.

    Examples:
        "507f1f77bcf86cd799439011" -> True
        "507f1f77bcf86cd79943901"  -> False (23 chars)
        "not-an-id"                -> False
    """
    return isinstance(value, str) and ObjectId.is_valid(value)


def all_valid_object_ids(*values: str) -> bool:
    """True when every value is a well-formed ObjectId."""
    return all(is_valid_object_id(value) for value in values)
