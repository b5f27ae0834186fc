"""
# Communication Manager

Logs communications and keeps each company's summary fields in step with them.

## Logging a Communication

`log_communication()` is the only write path that touches two documents:

1.  **Lookup**: the company named by `companyId` must exist, otherwise `NotFoundError` is raised
    and nothing is written.
2.  **Insert**: the communication document is stored. If this fails the company is untouched.
3.  **Company update**: one `update_one` pushes the new id onto `lastCommunications` and sets
    `nextCommunication` to the supplied value, or `None` when it was omitted. The previous value
    is overwritten, never merged.

There is no multi-document transaction. If step 3 fails the communication has already been
stored and stays out of the company's `lastCommunications`; the failure is logged with both ids
and re-raised as `StoreError`. The `$push` is atomic per document, so concurrent logs for the same
company never drop list entries, but `nextCommunication` is last write wins.

## Deleting

`delete_communication()` removes one document and leaves its id in the owning company's
`lastCommunications`. Company reads skip ids that no longer resolve.
"""

from typing import Any, Dict, List, Optional

from communication_tracker.database import COMMUNICATIONS_COLLECTION, COMPANIES_COLLECTION, db_manager
from communication_tracker.database.manager import store_operation
from communication_tracker.errors import NotFoundError, StoreError
from communication_tracker.managers.company_manager import populate_communications
from communication_tracker.managers.logging_manager import get_logger
from communication_tracker.models import LogCommunicationRequest, validate_request
from communication_tracker.utils.serialization import parse_object_id

logger = get_logger(prefix="[CommunicationManager]")


class CommunicationManager:
    """Logging, listing and deleting communications."""

    def __init__(self):
        self.collection_name = COMMUNICATIONS_COLLECTION

    def _collection(self):
        return db_manager.get_collection(self.collection_name)

    async def list_communications(self) -> List[Dict[str, Any]]:
        """
        Return every communication with `companyId` replaced by the company document.

        A communication whose company has been deleted gets `companyId: None`.
        """
        with store_operation("List communications"):
            communications = await self._collection().find({}).to_list(length=None)
            company_ids = list({communication["companyId"] for communication in communications})
            companies: List[Dict[str, Any]] = []
            if company_ids:
                companies = await (
                    db_manager.get_collection(COMPANIES_COLLECTION)
                    .find({"_id": {"$in": company_ids}})
                    .to_list(length=None)
                )
        by_id = {company["_id"]: company for company in companies}

        for communication in communications:
            communication["companyId"] = by_id.get(communication["companyId"])
        return communications

    async def log_communication(self, payload: Any) -> Dict[str, Optional[Dict[str, Any]]]:
        """
        Store a communication and update its company's history and next communication.

        Returns:
            dict: `{"communication": <stored communication>, "company": <company populated with its history>}`

        Raises:
            ValidationError: If the payload is missing required fields or `companyId` is malformed.
            NotFoundError: If the company does not exist. No communication is stored.
            StoreError: If a store operation fails.
        """
        request = validate_request(LogCommunicationRequest, payload, "Invalid communication")
        company_id = parse_object_id(request.companyId, "companyId")
        companies = db_manager.get_collection(COMPANIES_COLLECTION)

        with store_operation("Fetch company"):
            company = await companies.find_one({"_id": company_id})
        if company is None:
            raise NotFoundError("Company", request.companyId)

        communication = request.to_document()
        with store_operation("Insert communication"):
            result = await self._collection().insert_one(communication)
        communication["_id"] = result.inserted_id

        try:
            with store_operation("Update company after logging communication"):
                update_result = await companies.update_one(
                    {"_id": company_id},
                    {
                        "$push": {"lastCommunications": communication["_id"]},
                        "$set": {"nextCommunication": request.nextCommunication},
                    },
                )
        except StoreError:
            logger.error(
                "Communication %s stored but company %s was not updated; it is missing from lastCommunications",
                communication["_id"],
                company_id,
            )
            raise

        if update_result.matched_count == 0:
            # Company deleted between the lookup and the update
            logger.warning(
                "Company %s disappeared before communication %s could be attached", company_id, communication["_id"]
            )
            raise NotFoundError("Company", request.companyId)

        logger.info("Logged %s communication %s for company %s", request.communicationType, communication["_id"], company_id)

        with store_operation("Fetch updated company"):
            updated_company = await companies.find_one({"_id": company_id})
        if updated_company is not None:
            updated_company = (await populate_communications([updated_company]))[0]

        return {"communication": communication, "company": updated_company}

    async def delete_communication(self, communication_id: str) -> Dict[str, Any]:
        """Delete one communication. Its id stays in the company's `lastCommunications`."""
        object_id = parse_object_id(communication_id, "communicationId")
        with store_operation("Delete communication"):
            communication = await self._collection().find_one_and_delete({"_id": object_id})
        if communication is None:
            raise NotFoundError("Communication", communication_id)
        logger.info("Deleted communication %s", communication_id)
        return communication


communication_manager = CommunicationManager()
