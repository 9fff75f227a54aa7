from pydantic import BaseModel, ConfigDict
from typing import Any, Optional
from app.models.contact import CONTACT_COLUMNS


class EmailIn(BaseModel):
    email: str
    type: str = "primary"
    status: Optional[str] = None
    source: Optional[str] = None
    confidence: Optional[float] = None
    catch_all_status: Optional[str] = None
    last_verified_at: Optional[str] = None
    is_primary: bool = False
    unsubscribe: bool = False


class PhoneIn(BaseModel):
    phone: str
    type: str = "work"


class _ContactFields(BaseModel):
    # Unlisted keys are kept and stored in custom_fields
    model_config = ConfigDict(extra="allow")

    first_name: Optional[str] = None
    last_name: Optional[str] = None
    title: Optional[str] = None
    seniority: Optional[str] = None
    stage: Optional[str] = None
    lists: Optional[str] = None
    last_contacted: Optional[str] = None
    person_linkedin_url: Optional[str] = None
    owner_id: Optional[str] = None
    contact_owner: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    company_name: Optional[str] = None
    department: Optional[str] = None
    custom_fields: Optional[dict[str, Any]] = None

    def contact_values(self, only_set: bool = False) -> dict[str, Any]:
        data = self.model_dump(include=set(CONTACT_COLUMNS), exclude_unset=only_set)
        return {k: v for k, v in data.items() if k in CONTACT_COLUMNS}

    def custom_field_values(self) -> dict[str, Any]:
        values = dict(self.custom_fields or {})
        values.update(self.model_extra or {})
        return values

    def has_custom_fields(self) -> bool:
        return "custom_fields" in self.model_fields_set or bool(self.model_extra)


class ContactCreate(_ContactFields):
    emails: list[EmailIn] = []
    phones: list[PhoneIn] = []


class ContactUpdate(_ContactFields):
    emails: Optional[list[EmailIn]] = None
    phones: Optional[list[PhoneIn]] = None


class FieldOption(BaseModel):
    value: str
    label: str
    group: str
