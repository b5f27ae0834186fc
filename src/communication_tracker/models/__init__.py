"""
# Data Models Package

Pydantic request models and validators, organized by domain:

- **`company_models`**: Company creation/update and the email and phone number formats.
- **`communication_models`**: Logged communications and scheduled next communications.
- **`base`**: `validate_request()`, which turns pydantic failures into the API's `ValidationError`.

Request models ignore unknown fields, so only declared fields are ever persisted.
"""

from .base import validate_request
from .communication_models import (
    LogCommunicationRequest,
    NextCommunicationCreateRequest,
    NextCommunicationUpdateRequest,
)
from .company_models import CompanyCreateRequest, CompanyUpdateRequest

__all__ = [
    "CompanyCreateRequest",
    "CompanyUpdateRequest",
    "LogCommunicationRequest",
    "NextCommunicationCreateRequest",
    "NextCommunicationUpdateRequest",
    "validate_request",
]
