"""
# Next Communication Routes

- `POST /api/next-communications` - Schedule a communication
- `GET /api/next-communications` - List active (not completed) schedules, optionally `?companyId=`
- `GET /api/next-communications/{company_id}` - List active schedules for one company
- `PUT /api/next-communications/{next_communication_id}` - Patch a schedule (e.g. `isCompleted`)
- `DELETE /api/next-communications/{next_communication_id}` - Cancel (delete) a schedule
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Query, status

from communication_tracker.errors import NotFoundError, ValidationError, error_response
from communication_tracker.managers.logging_manager import get_logger
from communication_tracker.managers.next_communication_manager import next_communication_manager
from communication_tracker.utils.serialization import serialize_document, serialize_documents

logger = get_logger(prefix="[Next Communication Routes]")

router = APIRouter(prefix="/api/next-communications", tags=["Next Communications"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_next_communication(payload: Any = Body(None)):
    """Create a scheduled communication and return the stored record."""
    try:
        next_communication = await next_communication_manager.create_next_communication(payload)
        return serialize_document(next_communication)
    except ValidationError as e:
        return error_response(400, "Error creating next communication", e)
    except Exception as e:
        logger.error("Failed to create next communication: %s", e, exc_info=True)
        return error_response(500, "Error creating next communication", e)


@router.get("")
async def list_active_next_communications(
    company_id: Optional[str] = Query(None, alias="companyId", description="Only schedules for this company"),
):
    """Fetch all schedules that are not completed."""
    try:
        schedules = await next_communication_manager.list_active(company_id)
        return serialize_documents(schedules)
    except ValidationError as e:
        return error_response(400, "Error fetching schedules", e)
    except Exception as e:
        logger.error("Failed to fetch schedules: %s", e, exc_info=True)
        return error_response(500, "Error fetching schedules", e)


@router.get("/{company_id}")
async def list_company_next_communications(company_id: str):
    """Fetch the schedules of one company that are not completed."""
    try:
        schedules = await next_communication_manager.list_active(company_id)
        return serialize_documents(schedules)
    except ValidationError as e:
        return error_response(400, "Error fetching next communications", e)
    except Exception as e:
        logger.error("Failed to fetch next communications for company %s: %s", company_id, e, exc_info=True)
        return error_response(500, "Error fetching next communications", e)


@router.put("/{next_communication_id}")
async def update_next_communication(next_communication_id: str, payload: Any = Body(None)):
    """Update a scheduled communication and return the updated record."""
    try:
        updated = await next_communication_manager.update_next_communication(next_communication_id, payload)
        return serialize_document(updated)
    except NotFoundError:
        return error_response(404, "Next communication not found")
    except ValidationError as e:
        return error_response(400, "Error updating next communication", e)
    except Exception as e:
        logger.error("Failed to update next communication %s: %s", next_communication_id, e, exc_info=True)
        return error_response(500, "Error updating next communication", e)


@router.delete("/{next_communication_id}")
async def cancel_next_communication(next_communication_id: str):
    """Cancel a scheduled communication by deleting it."""
    try:
        await next_communication_manager.cancel_next_communication(next_communication_id)
        return {"message": "Next communication cancelled successfully"}
    except NotFoundError:
        return error_response(404, "Next communication not found")
    except ValidationError as e:
        return error_response(400, "Error cancelling next communication", e)
    except Exception as e:
        logger.error("Failed to cancel next communication %s: %s", next_communication_id, e, exc_info=True)
        return error_response(500, "Error cancelling next communication", e)
