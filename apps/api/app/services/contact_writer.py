"""
Contact Writer
Persists one fully-resolved contact: the contact row, then its email and
phone rows. Shared by the bulk import pipeline and the single-create endpoint.
"""
from __future__ import annotations

import json
import uuid
from typing import Any, Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.contact import CONTACT_COLUMNS, Contact, EmailAddress, PhoneNumber

DEFAULT_EMAIL_TYPE = "primary"
DEFAULT_PHONE_TYPE = "work"

EMAIL_DETAIL_FIELDS = ("status", "source", "confidence", "catch_all_status", "last_verified_at")


def to_column_value(value: Any) -> Optional[str]:
    """Coerce a raw cell/request value into what a text column stores.

    Empty scalars (None, "", 0, False) store NULL.
    """
    if value is None or (isinstance(value, (str, int, float)) and not value):
        return None
    return _text(value)


def _text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


def serialize_custom_fields(custom_fields: Optional[dict[str, Any]]) -> Optional[str]:
    if not custom_fields:
        return None
    return json.dumps(custom_fields, default=str)


def parse_custom_fields(raw: Optional[str]) -> Optional[dict[str, Any]]:
    """Inverse of serialize_custom_fields. Raises ValueError on malformed text."""
    if not raw:
        return None
    parsed = json.loads(raw)
    if not isinstance(parsed, dict):
        raise ValueError("custom_fields is not a JSON object")
    return parsed


def build_emails(emails: Iterable[dict[str, Any]]) -> list[EmailAddress]:
    rows = []
    for obj in emails:
        # entries are written as given; a null address fails the NOT NULL column
        rows.append(EmailAddress(
            email=_text(obj.get("email")),
            type=obj.get("type") or DEFAULT_EMAIL_TYPE,
            is_primary=bool(obj.get("is_primary") or False),
            unsubscribe=bool(obj.get("unsubscribe") or False),
            **{f: to_column_value(obj.get(f)) for f in EMAIL_DETAIL_FIELDS},
        ))
    return rows


def build_phones(phones: Iterable[dict[str, Any]]) -> list[PhoneNumber]:
    rows = []
    for obj in phones:
        rows.append(PhoneNumber(phone=_text(obj.get("phone")), type=obj.get("type") or DEFAULT_PHONE_TYPE))
    return rows


class ContactWriter:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def write(
        self,
        contact_fields: dict[str, Any],
        company_id: Optional[uuid.UUID] = None,
        department_id: Optional[uuid.UUID] = None,
        custom_fields: Optional[dict[str, Any]] = None,
        emails: Iterable[dict[str, Any]] = (),
        phones: Iterable[dict[str, Any]] = (),
    ) -> Contact:
        unknown = sorted(set(contact_fields) - CONTACT_COLUMNS)
        if unknown:
            raise ValueError(f"Unknown contact field(s): {', '.join(unknown)}")

        contact = Contact(
            company_id=company_id,
            department_id=department_id,
            custom_fields=serialize_custom_fields(custom_fields),
            **{k: to_column_value(v) for k, v in contact_fields.items()},
        )
        contact.emails = build_emails(emails)
        contact.phones = build_phones(phones)

        self.db.add(contact)
        await self.db.flush()
        return contact
