"""
# Communication Routes

- `GET /api/communications` - List communications, each with its company populated
- `POST /api/communications` - Log a communication and update the company's history
- `DELETE /api/communications/{communication_id}` - Delete a communication

Logging a communication for an unknown company returns 404 and stores nothing.
"""

from typing import Any

from fastapi import APIRouter, Body, status

from communication_tracker.errors import NotFoundError, ValidationError, error_response
from communication_tracker.managers.communication_manager import communication_manager
from communication_tracker.managers.logging_manager import get_logger
from communication_tracker.utils.serialization import (
    serialize_document,
    serialize_documents,
    serialize_optional,
)

logger = get_logger(prefix="[Communication Routes]")

router = APIRouter(prefix="/api/communications", tags=["Communications"])


@router.get("")
async def list_communications():
    """Fetch all communications with `companyId` resolved to the company document (or null)."""
    try:
        communications = await communication_manager.list_communications()
        return serialize_documents(communications)
    except Exception as e:
        logger.error("Failed to fetch communications: %s", e, exc_info=True)
        return error_response(500, "Error fetching communications", e)


@router.post("", status_code=status.HTTP_201_CREATED)
async def log_communication(payload: Any = Body(None)):
    """
    Log a communication with a company.

    The new communication's id is appended to the company's `lastCommunications` and the
    company's `nextCommunication` is replaced by the one supplied here (or cleared).

    Returns:
        dict: `{"message", "communication", "updatedCompany"}` with status 201.
    """
    try:
        result = await communication_manager.log_communication(payload)
        return {
            "message": "Communication logged successfully",
            "communication": serialize_document(result["communication"]),
            "updatedCompany": serialize_optional(result["company"]),
        }
    except NotFoundError:
        return error_response(404, "Company not found")
    except ValidationError as e:
        return error_response(400, "Error logging communication", e)
    except Exception as e:
        logger.error("Failed to log communication: %s", e, exc_info=True)
        return error_response(500, "Error logging communication", e)


@router.delete("/{communication_id}")
async def delete_communication(communication_id: str):
    """Delete a communication. The company's `lastCommunications` keeps the id."""
    try:
        communication = await communication_manager.delete_communication(communication_id)
        return {
            "message": "Communication deleted successfully",
            "deletedCommunication": serialize_document(communication),
        }
    except NotFoundError:
        return error_response(404, "Communication not found")
    except ValidationError as e:
        return error_response(400, "Error deleting communication", e)
    except Exception as e:
        logger.error("Failed to delete communication %s: %s", communication_id, e, exc_info=True)
        return error_response(500, "Error deleting communication", e)
