"""
# Company Models

Request models and format rules for documents in the `companies` collection.

## Document Shape

```json
{
    "_id": "65a1f0c2e4b0a1b2c3d4e5f6",
    "name": "Acme",
    "location": "NY",
    "linkedInProfile": "https://www.linkedin.com/company/acme",
    "emails": ["sales@acme.com"],
    "phoneNumbers": ["5551234567"],
    "comments": "Prefers email",
    "communicationPeriodicity": "2 weeks",
    "lastCommunications": ["65a1f0c2e4b0a1b2c3d4e5f7"],
    "nextCommunication": "follow up"
}
```

`lastCommunications` is maintained by the communication manager when a communication is
logged and cannot be set through these request models.

## Format Rules

- `name`, `location`: required, not blank.
- `emails`: each entry must look like `local@domain`. Entries are stored verbatim.
- `phoneNumbers`: each entry must be exactly 10 digits.
"""

import re
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from communication_tracker.models.base import require_not_blank

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+$")
PHONE_NUMBER_PATTERN = re.compile(r"^\d{10}$")


def validate_emails(values: Optional[List[str]]) -> List[str]:
    if values is None:
        raise ValueError("emails may not be null")
    for email in values:
        if not isinstance(email, str) or not EMAIL_PATTERN.fullmatch(email):
            raise ValueError(f"'{email}' is not a valid email address")
    return values


def validate_phone_numbers(values: Optional[List[str]]) -> List[str]:
    if values is None:
        raise ValueError("phoneNumbers may not be null")
    for phone_number in values:
        if not isinstance(phone_number, str) or not PHONE_NUMBER_PATTERN.fullmatch(phone_number):
            raise ValueError(f"'{phone_number}' is not a valid phone number (expected 10 digits)")
    return values


class CompanyCreateRequest(BaseModel):
    """Request model for adding a company.

    Attributes:
        name (str): Company name.
        location (str): Where the company is based.
        linkedInProfile (Optional[str]): LinkedIn profile URL.
        emails (List[str]): Contact email addresses.
        phoneNumbers (List[str]): Contact phone numbers.
        comments (Optional[str]): Free-text notes.
        communicationPeriodicity (Optional[str]): How often to get in touch.
        nextCommunication (Optional[str]): Description of the next planned contact.
    """

    name: str = Field(..., min_length=1, description="Company name")
    location: str = Field(..., min_length=1, description="Company location")
    linkedInProfile: Optional[str] = Field(None, description="LinkedIn profile URL")
    emails: List[str] = Field(default_factory=list, description="Contact email addresses")
    phoneNumbers: List[str] = Field(default_factory=list, description="Contact phone numbers (10 digits)")
    comments: Optional[str] = Field(None, description="Free-text comments")
    communicationPeriodicity: Optional[str] = Field(None, description="Desired communication frequency")
    nextCommunication: Optional[str] = Field(None, description="Next planned communication")

    @field_validator("name", "location")
    @classmethod
    def not_blank(cls, v: Any, info: Any) -> Any:
        return require_not_blank(v, info.field_name)

    @field_validator("emails")
    @classmethod
    def check_emails(cls, v: List[str]) -> List[str]:
        return validate_emails(v)

    @field_validator("phoneNumbers")
    @classmethod
    def check_phone_numbers(cls, v: List[str]) -> List[str]:
        return validate_phone_numbers(v)

    def to_document(self) -> Dict[str, Any]:
        document = self.model_dump()
        document["lastCommunications"] = []
        return document


class CompanyUpdateRequest(BaseModel):
    """Partial update of a company. Supplied fields are checked with the same rules as creation."""

    name: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    linkedInProfile: Optional[str] = None
    emails: Optional[List[str]] = None
    phoneNumbers: Optional[List[str]] = None
    comments: Optional[str] = None
    communicationPeriodicity: Optional[str] = None
    nextCommunication: Optional[str] = None

    @field_validator("name", "location")
    @classmethod
    def not_blank(cls, v: Any, info: Any) -> Any:
        return require_not_blank(v, info.field_name)

    @field_validator("emails")
    @classmethod
    def check_emails(cls, v: Optional[List[str]]) -> List[str]:
        return validate_emails(v)

    @field_validator("phoneNumbers")
    @classmethod
    def check_phone_numbers(cls, v: Optional[List[str]]) -> List[str]:
        return validate_phone_numbers(v)

    def to_update(self) -> Dict[str, Any]:
        """Return only the fields present in the request body."""
        return self.model_dump(exclude_unset=True)
