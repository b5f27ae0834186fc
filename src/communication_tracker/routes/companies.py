"""
# Company Routes

REST endpoints for the `companies` collection.

## API Endpoints

- `GET /api/companies` - List companies with their communication history populated
- `GET /api/companies/{company_id}` - Get one company (populated)
- `POST /api/companies` - Add a company
- `PUT /api/companies/{company_id}` - Update company fields
- `DELETE /api/companies/{company_id}` - Delete a company (no cascade)

## Error Responses

| Status | When | Body |
|---|---|---|
| 400 | Invalid body or malformed id | `{"message": ..., "error": [...]}` |
| 404 | No company with this id | `{"message": "Company not found"}` |
| 500 | Store failure | `{"message": ..., "error": "..."}` |
"""

from typing import Any

from fastapi import APIRouter, Body, status

from communication_tracker.errors import NotFoundError, ValidationError, error_response
from communication_tracker.managers.company_manager import company_manager
from communication_tracker.managers.logging_manager import get_logger
from communication_tracker.utils.serialization import serialize_document, serialize_documents

logger = get_logger(prefix="[Company Routes]")

router = APIRouter(prefix="/api/companies", tags=["Companies"])


@router.get("")
async def list_companies():
    """
    Fetch all companies, each with `lastCommunications` resolved to full communication documents.

    Returns:
        list: Company documents.
    """
    try:
        companies = await company_manager.list_companies()
        return serialize_documents(companies)
    except Exception as e:
        logger.error("Failed to fetch companies: %s", e, exc_info=True)
        return error_response(500, "Error fetching companies", e)


@router.get("/{company_id}")
async def get_company(company_id: str):
    """
    Fetch a single company by id with its communication history populated.

    Raises:
        404: If the company does not exist.
    """
    try:
        company = await company_manager.get_company(company_id)
        return serialize_document(company)
    except NotFoundError:
        return error_response(404, "Company not found")
    except ValidationError as e:
        return error_response(400, "Error fetching company", e)
    except Exception as e:
        logger.error("Failed to fetch company %s: %s", company_id, e, exc_info=True)
        return error_response(500, "Error fetching company", e)


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_company(payload: Any = Body(None)):
    """
    Add a new company.

    `name` and `location` are required. Emails and phone numbers are checked against their
    formats and stored as given.

    Returns:
        dict: `{"message": ..., "company": <created company>}` with status 201.
    """
    try:
        company = await company_manager.create_company(payload)
        return {"message": "Company added successfully", "company": serialize_document(company)}
    except ValidationError as e:
        return error_response(400, "Error adding company", e)
    except Exception as e:
        logger.error("Failed to add company: %s", e, exc_info=True)
        return error_response(500, "Error adding company", e)


@router.put("/{company_id}")
async def update_company(company_id: str, payload: Any = Body(None)):
    """Update the supplied fields of a company and return the updated document."""
    try:
        company = await company_manager.update_company(company_id, payload)
        return {"message": "Company updated successfully", "updatedCompany": serialize_document(company)}
    except NotFoundError:
        return error_response(404, "Company not found")
    except ValidationError as e:
        return error_response(400, "Error updating company", e)
    except Exception as e:
        logger.error("Failed to update company %s: %s", company_id, e, exc_info=True)
        return error_response(500, "Error updating company", e)


@router.delete("/{company_id}")
async def delete_company(company_id: str):
    """
    Delete a company.

    Its communications and scheduled communications are not deleted.
    """
    try:
        company = await company_manager.delete_company(company_id)
        return {"message": "Company deleted successfully", "deletedCompany": serialize_document(company)}
    except NotFoundError:
        return error_response(404, "Company not found")
    except ValidationError as e:
        return error_response(400, "Error deleting company", e)
    except Exception as e:
        logger.error("Failed to delete company %s: %s", company_id, e, exc_info=True)
        return error_response(500, "Error deleting company", e)
