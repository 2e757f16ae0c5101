"""
MongoDB document helpers.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from bson import ObjectId


def clean_mongo_value(value: Any) -> Any:
    """
    Convert one BSON-flavoured value to a JSON-serializable one.

    - ObjectId -> str
    - datetime -> ISO format string
    - Mappings, lists and tuples are processed recursively
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Mapping):
        return {key: clean_mongo_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [clean_mongo_value(item) for item in value]
    return value


def clean_mongo_doc(doc: Mapping[str, Any] | None) -> dict[str, Any] | None:
    """
    Convert a MongoDB document (or materialized model) to JSON-safe form.

    Example:
        ```python
        clean_mongo_doc({"_id": ObjectId("507f1f77bcf86cd799439011"),
                         "created_at": datetime(2024, 1, 1, 12, 0, 0)})
        # {"_id": "507f1f77bcf86cd799439011", "created_at": "2024-01-01T12:00:00"}
        ```
    """
    if doc is None:
        return None
    return {key: clean_mongo_value(value) for key, value in doc.items()}


def clean_mongo_docs(docs: list[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Apply clean_mongo_doc to each document in a list."""
    return [clean_mongo_doc(doc) for doc in docs]
