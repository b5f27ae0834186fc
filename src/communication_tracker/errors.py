"""Error taxonomy and JSON error bodies for the API."""

from typing import Any, Optional

from fastapi.responses import JSONResponse


class CommunicationTrackerError(Exception):
    """Base class for application errors."""


class NotFoundError(CommunicationTrackerError):
    """An id-based lookup returned nothing."""

    def __init__(self, kind: str, document_id: Any = None):
        self.kind = kind
        self.document_id = document_id
        super().__init__(f"{kind} not found")


class ValidationError(CommunicationTrackerError):
    """A document or path parameter failed shape/format validation."""

    def __init__(self, message: str, errors: Optional[list] = None):
        self.message = message
        self.errors = errors or []
        super().__init__(message)

    @property
    def detail(self) -> Any:
        return self.errors if self.errors else self.message


class StoreError(CommunicationTrackerError):
    """The document store failed or is unreachable."""


class StoreUnavailableError(StoreError):
    """The document store has not been connected yet."""


def describe_error(exc: BaseException) -> Any:
    """Return the raw detail reported alongside the static message in error bodies."""
    if isinstance(exc, ValidationError):
        return exc.detail
    return str(exc) or exc.__class__.__name__


def error_response(status_code: int, message: str, error: Optional[BaseException] = None) -> JSONResponse:
    """Build the uniform `{"message": ..., "error": ...}` error body."""
    content = {"message": message}
    if error is not None:
        content["error"] = describe_error(error)
    return JSONResponse(status_code=status_code, content=content)
