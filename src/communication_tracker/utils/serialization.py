"""Conversion helpers between API strings, BSON ObjectIds and JSON-safe documents."""

from typing import Any, Dict, List, Optional

from bson import ObjectId

from communication_tracker.errors import ValidationError


def parse_object_id(value: Any, field_name: str = "id") -> ObjectId:
    """
    Convert an API-supplied identifier into an `ObjectId`.

    Raises:
        ValidationError: If the value is not a 24-character hex ObjectId.
    """
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    raise ValidationError(
        f"Invalid {field_name}",
        [{"loc": [field_name], "msg": f"'{value}' is not a valid ObjectId", "type": "object_id"}],
    )


def serialize_document(value: Any) -> Any:
    """Recursively render ObjectIds as hex strings so a document can be returned as JSON."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {key: serialize_document(item) for key, item in value.items()}
    if isinstance(value, list):
        return [serialize_document(item) for item in value]
    return value


def serialize_documents(documents: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [serialize_document(document) for document in documents]


def serialize_optional(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    return serialize_document(document) if document is not None else None
