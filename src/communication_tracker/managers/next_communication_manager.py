"""Scheduled (next) communications: create, list active, patch and cancel."""

from typing import Any, Dict, List, Optional

from pymongo import ReturnDocument

from communication_tracker.database import NEXT_COMMUNICATIONS_COLLECTION, db_manager
from communication_tracker.database.manager import store_operation
from communication_tracker.errors import NotFoundError
from communication_tracker.managers.logging_manager import get_logger
from communication_tracker.models import (
    NextCommunicationCreateRequest,
    NextCommunicationUpdateRequest,
    validate_request,
)
from communication_tracker.utils.serialization import parse_object_id

logger = get_logger(prefix="[NextCommunicationManager]")


class NextCommunicationManager:
    """
    Manages documents in the `next_communications` collection.

    Creating a record does not check that the company exists, and nothing here touches the
    company's cached `nextCommunication` text. A record only becomes completed when a client
    patches `isCompleted` to true.
    """

    def __init__(self):
        self.collection_name = NEXT_COMMUNICATIONS_COLLECTION

    def _collection(self):
        return db_manager.get_collection(self.collection_name)

    async def create_next_communication(self, payload: Any) -> Dict[str, Any]:
        request = validate_request(NextCommunicationCreateRequest, payload, "Invalid next communication")
        document = request.to_document()
        with store_operation("Create next communication"):
            result = await self._collection().insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("Scheduled %s for company %s on %s", request.communicationType, request.companyId, request.scheduledDate)
        return document

    async def list_active(self, company_id: Optional[str] = None) -> List[Dict[str, Any]]:
        """Return records with `isCompleted == False`, optionally for one company."""
        query: Dict[str, Any] = {"isCompleted": False}
        if company_id is not None:
            query["companyId"] = parse_object_id(company_id, "companyId")
        with store_operation("List next communications"):
            return await self._collection().find(query).to_list(length=None)

    async def update_next_communication(self, next_communication_id: str, payload: Any) -> Dict[str, Any]:
        object_id = parse_object_id(next_communication_id, "nextCommunicationId")
        request = validate_request(NextCommunicationUpdateRequest, payload, "Invalid next communication update")
        changes = request.to_update()

        with store_operation("Update next communication"):
            if changes:
                updated = await self._collection().find_one_and_update(
                    {"_id": object_id},
                    {"$set": changes},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                updated = await self._collection().find_one({"_id": object_id})
        if updated is None:
            raise NotFoundError("Next communication", next_communication_id)

        if changes.get("isCompleted"):
            logger.info("Next communication %s marked completed", next_communication_id)
        return updated

    async def cancel_next_communication(self, next_communication_id: str) -> Dict[str, Any]:
        """Hard-delete a scheduled communication."""
        object_id = parse_object_id(next_communication_id, "nextCommunicationId")
        with store_operation("Cancel next communication"):
            deleted = await self._collection().find_one_and_delete({"_id": object_id})
        if deleted is None:
            raise NotFoundError("Next communication", next_communication_id)
        logger.info("Cancelled next communication %s", next_communication_id)
        return deleted


next_communication_manager = NextCommunicationManager()
