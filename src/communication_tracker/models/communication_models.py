"""
# Communication Models

Request models for the `communications` and `next_communications` collections.

- **Communication**: a past contact event with a company. Created only by logging it,
  which also updates the owning company (see `managers.communication_manager`).
- **NextCommunication**: a planned contact event. Created, patched and cancelled on its own;
  `isCompleted` only changes through an explicit update.

Dates are free-form strings and are not parsed.
"""

from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import BaseModel, Field, field_validator

from communication_tracker.models.base import require_not_blank, require_object_id


class LogCommunicationRequest(BaseModel):
    """Request model for logging a communication with a company.

    Attributes:
        companyId (str): Id of the company the communication was with. Must exist.
        communicationType (str): Kind of contact (call, email, meeting...).
        communicationDate (str): When it happened, free-form.
        notes (Optional[str]): Notes about the conversation.
        nextCommunication (Optional[str]): What should happen next. Overwrites the company's
            `nextCommunication`; omitting it clears that field.
    """

    companyId: str = Field(..., description="Owning company id")
    communicationType: str = Field(..., min_length=1, description="Communication type")
    communicationDate: str = Field(..., min_length=1, description="Communication date (free-form)")
    notes: Optional[str] = Field(None, description="Conversation notes")
    nextCommunication: Optional[str] = Field(None, description="Next planned communication")

    @field_validator("companyId")
    @classmethod
    def check_company_id(cls, v: Any) -> str:
        return require_object_id(v)

    @field_validator("communicationType", "communicationDate")
    @classmethod
    def not_blank(cls, v: Any, info: Any) -> Any:
        return require_not_blank(v, info.field_name)

    def to_document(self) -> Dict[str, Any]:
        document = self.model_dump()
        document["companyId"] = ObjectId(self.companyId)
        return document


class NextCommunicationCreateRequest(BaseModel):
    """Request model for scheduling a future communication.

    `companyId` must be a well-formed id but is not checked against the companies collection.
    """

    companyId: str = Field(..., description="Company id")
    communicationType: str = Field(..., min_length=1, description="Planned communication type")
    scheduledDate: str = Field(..., min_length=1, description="Scheduled date (free-form)")
    isCompleted: bool = Field(False, description="Whether the communication has happened")

    @field_validator("companyId")
    @classmethod
    def check_company_id(cls, v: Any) -> str:
        return require_object_id(v)

    @field_validator("communicationType", "scheduledDate")
    @classmethod
    def not_blank(cls, v: Any, info: Any) -> Any:
        return require_not_blank(v, info.field_name)

    def to_document(self) -> Dict[str, Any]:
        document = self.model_dump()
        document["companyId"] = ObjectId(self.companyId)
        return document


class NextCommunicationUpdateRequest(BaseModel):
    """Partial update of a scheduled communication, including marking it completed."""

    companyId: Optional[str] = None
    communicationType: Optional[str] = Field(None, min_length=1)
    scheduledDate: Optional[str] = Field(None, min_length=1)
    isCompleted: Optional[bool] = None

    @field_validator("companyId")
    @classmethod
    def check_company_id(cls, v: Any) -> str:
        return require_object_id(v)

    @field_validator("communicationType", "scheduledDate", "isCompleted")
    @classmethod
    def not_blank(cls, v: Any, info: Any) -> Any:
        return require_not_blank(v, info.field_name)

    def to_update(self) -> Dict[str, Any]:
        update = self.model_dump(exclude_unset=True)
        if "companyId" in update:
            update["companyId"] = ObjectId(update["companyId"])
        return update
