"""
# Company Manager

Business logic for the `companies` collection: CRUD plus **populate**, which resolves the ids
in a company's `lastCommunications` into the full communication documents at read time.

## Dangling References

Deleting a company does not delete its communications or next communications, and deleting a
communication does not remove its id from `lastCommunications`. Populate resolves whatever still
exists: ids that no longer match a communication are skipped in the populated output, while the
stored list is left untouched.
"""

from typing import Any, Dict, List

from pymongo import ReturnDocument

from communication_tracker.database import COMMUNICATIONS_COLLECTION, COMPANIES_COLLECTION, db_manager
from communication_tracker.database.manager import store_operation
from communication_tracker.errors import NotFoundError
from communication_tracker.managers.logging_manager import get_logger
from communication_tracker.models import CompanyCreateRequest, CompanyUpdateRequest, validate_request
from communication_tracker.utils.serialization import parse_object_id

logger = get_logger(prefix="[CompanyManager]")


async def populate_communications(companies: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Replace each company's `lastCommunications` ids with the communication documents.

    All referenced communications are fetched with a single `$in` query. Order follows the
    stored id list (oldest first); ids without a matching document are dropped.
    """
    referenced_ids = {comm_id for company in companies for comm_id in company.get("lastCommunications", [])}
    if not referenced_ids:
        return companies

    with store_operation("Populate communications"):
        communications = await (
            db_manager.get_collection(COMMUNICATIONS_COLLECTION)
            .find({"_id": {"$in": list(referenced_ids)}})
            .to_list(length=None)
        )
    by_id = {communication["_id"]: communication for communication in communications}

    for company in companies:
        company["lastCommunications"] = [
            by_id[comm_id] for comm_id in company.get("lastCommunications", []) if comm_id in by_id
        ]
    return companies


class CompanyManager:
    """CRUD operations for companies."""

    def __init__(self):
        self.collection_name = COMPANIES_COLLECTION

    def _collection(self):
        return db_manager.get_collection(self.collection_name)

    async def list_companies(self) -> List[Dict[str, Any]]:
        """Return every company with its communication history populated."""
        with store_operation("List companies"):
            companies = await self._collection().find({}).to_list(length=None)
        return await populate_communications(companies)

    async def get_company(self, company_id: str) -> Dict[str, Any]:
        """
        Fetch one company with its communication history populated.

        Raises:
            ValidationError: If `company_id` is not a valid id.
            NotFoundError: If no company has this id.
        """
        object_id = parse_object_id(company_id, "companyId")
        with store_operation("Fetch company"):
            company = await self._collection().find_one({"_id": object_id})
        if company is None:
            raise NotFoundError("Company", company_id)
        populated = await populate_communications([company])
        return populated[0]

    async def create_company(self, payload: Any) -> Dict[str, Any]:
        """Validate and insert a new company. Returns the stored document including `_id`."""
        request = validate_request(CompanyCreateRequest, payload, "Invalid company")
        document = request.to_document()
        with store_operation("Create company"):
            result = await self._collection().insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("Created company %s (%s)", result.inserted_id, document["name"])
        return document

    async def update_company(self, company_id: str, payload: Any) -> Dict[str, Any]:
        """
        Apply a partial update to a company and return the updated document.

        Every supplied field is validated with the creation rules. `lastCommunications`
        cannot be changed here.
        """
        object_id = parse_object_id(company_id, "companyId")
        request = validate_request(CompanyUpdateRequest, payload, "Invalid company update")
        changes = request.to_update()

        with store_operation("Update company"):
            if changes:
                company = await self._collection().find_one_and_update(
                    {"_id": object_id},
                    {"$set": changes},
                    return_document=ReturnDocument.AFTER,
                )
            else:
                company = await self._collection().find_one({"_id": object_id})
        if company is None:
            raise NotFoundError("Company", company_id)

        logger.info("Updated company %s fields: %s", company_id, sorted(changes))
        return company

    async def delete_company(self, company_id: str) -> Dict[str, Any]:
        """Delete a company. Its communications and next communications are left in place."""
        object_id = parse_object_id(company_id, "companyId")
        with store_operation("Delete company"):
            company = await self._collection().find_one_and_delete({"_id": object_id})
        if company is None:
            raise NotFoundError("Company", company_id)
        logger.info("Deleted company %s", company_id)
        return company


company_manager = CompanyManager()
