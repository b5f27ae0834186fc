"""Shared validation helpers for request models."""

from typing import Any, Dict, Iterable, List, Type, TypeVar

from bson import ObjectId
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from communication_tracker.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Reduce pydantic errors to JSON-safe `{loc, msg, type}` entries."""
    return [
        {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", ""), "type": error.get("type", "")}
        for error in errors
    ]


def validate_request(model_cls: Type[ModelT], payload: Any, message: str) -> ModelT:
    """
    Validate a raw request body against `model_cls`.

    Raises:
        ValidationError: With the formatted pydantic errors when the body is rejected.
    """
    if not isinstance(payload, dict):
        raise ValidationError(message, [{"loc": ["body"], "msg": "Request body must be a JSON object", "type": "dict_type"}])
    try:
        return model_cls.model_validate(payload)
    except PydanticValidationError as e:
        raise ValidationError(message, format_validation_errors(e.errors())) from e


def require_not_blank(value: Any, field_name: str) -> Any:
    if value is None:
        raise ValueError(f"{field_name} may not be null")
    if isinstance(value, str) and not value.strip():
        raise ValueError(f"{field_name} may not be blank")
    return value


def require_object_id(value: Any) -> str:
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise ValueError("companyId must be a valid ObjectId")
    return value
