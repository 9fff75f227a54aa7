import logging
import math
import uuid
from typing import Any, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.dependencies import CurrentUser
from app.errors import AuthorizationError, NotFoundError
from app.models.company import COMPANY_ATTRIBUTES, Company
from app.models.contact import CONTACT_COLUMNS, Contact
from app.schemas.contact import ContactCreate, ContactUpdate
from app.services.contact_writer import (
    ContactWriter,
    build_emails,
    build_phones,
    parse_custom_fields,
    serialize_custom_fields,
    to_column_value,
)
from app.services.entity_resolver import EntityResolver

logger = logging.getLogger(__name__)

_CONTACT_OPTIONS = (
    selectinload(Contact.company),
    selectinload(Contact.department),
    selectinload(Contact.emails),
    selectinload(Contact.phones),
)


def _read_custom_fields(contact: Contact) -> Optional[dict[str, Any]]:
    try:
        return parse_custom_fields(contact.custom_fields)
    except ValueError:
        logger.warning(f"[Contacts] Unreadable custom_fields on contact {contact.id}, returning empty")
        return {}


def _company_out(co: Optional[Company]) -> Optional[dict]:
    if co is None:
        return None
    out = {"id": str(co.id), "name": co.name}
    out.update({attr: getattr(co, attr) for attr in sorted(COMPANY_ATTRIBUTES)})
    return out


def _contact_out(c: Contact) -> dict:
    out: dict[str, Any] = {"id": str(c.id)}
    out.update({col: getattr(c, col) for col in sorted(CONTACT_COLUMNS)})
    out.update({
        "company_id": str(c.company_id) if c.company_id else None,
        "department_id": str(c.department_id) if c.department_id else None,
        "company_name": c.company.name if c.company else None,
        "company": _company_out(c.company),
        "department": c.department.name if c.department else None,
        "custom_fields": _read_custom_fields(c),
        "emails": [
            {
                "id": str(e.id),
                "email": e.email,
                "type": e.type,
                "status": e.status,
                "source": e.source,
                "confidence": e.confidence,
                "catch_all_status": e.catch_all_status,
                "last_verified_at": e.last_verified_at,
                "is_primary": e.is_primary,
                "unsubscribe": e.unsubscribe,
            }
            for e in c.emails
        ],
        "phones": [{"id": str(p.id), "phone": p.phone, "type": p.type} for p in c.phones],
        "created_at": c.created_at.isoformat() if c.created_at else None,
        "updated_at": c.updated_at.isoformat() if c.updated_at else None,
    })
    return out


class ContactService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.resolver = EntityResolver(db)
        self.writer = ContactWriter(db)

    async def _load(self, contact_id: uuid.UUID) -> Contact:
        result = await self.db.execute(
            select(Contact)
            .where(Contact.id == contact_id)
            .options(*_CONTACT_OPTIONS)
            .execution_options(populate_existing=True)
        )
        contact = result.scalar_one_or_none()
        if not contact:
            raise NotFoundError("Contact not found")
        return contact

    @staticmethod
    def _check_owner(contact: Contact, user: CurrentUser, action: str) -> None:
        if contact.owner_id != user.id and not user.is_privileged:
            raise AuthorizationError(f"Access denied. You can only {action} your own contacts.")

    async def get_contact(self, contact_id: uuid.UUID) -> dict:
        return _contact_out(await self._load(contact_id))

    async def list_contacts(self, page: int = 1, limit: int = 10, search: str = "") -> dict:
        q = select(Contact)
        count_q = select(func.count()).select_from(Contact)
        if search:
            term = f"%{search}%"
            cond = or_(
                Contact.first_name.ilike(term),
                Contact.last_name.ilike(term),
                Contact.title.ilike(term),
                Contact.person_linkedin_url.ilike(term),
            )
            q = q.where(cond)
            count_q = count_q.where(cond)

        total = (await self.db.execute(count_q)).scalar_one()
        result = await self.db.execute(
            q.options(*_CONTACT_OPTIONS)
            .order_by(Contact.created_at.desc())
            .limit(limit)
            .offset((page - 1) * limit)
        )
        return {
            "contacts": [_contact_out(c) for c in result.scalars().all()],
            "pagination": {
                "current_page": page,
                "per_page": limit,
                "total": total,
                "total_pages": math.ceil(total / limit) if limit else 0,
            },
        }

    async def create_contact(self, payload: ContactCreate, owner_id: Optional[str] = None) -> dict:
        fields = payload.contact_values()
        if not fields.get("owner_id") and owner_id:
            fields["owner_id"] = owner_id

        company_id = await self.resolver.resolve_company(payload.company_name)
        department_id = await self.resolver.resolve_department(payload.department)
        contact = await self.writer.write(
            fields,
            company_id=company_id,
            department_id=department_id,
            custom_fields=payload.custom_field_values(),
            emails=[e.model_dump() for e in payload.emails],
            phones=[p.model_dump() for p in payload.phones],
        )
        await self.db.commit()
        logger.info(f"[Contacts] Created contact {contact.id} (owner={fields.get('owner_id')})")
        return await self.get_contact(contact.id)

    async def update_contact(
        self, contact_id: uuid.UUID, payload: ContactUpdate, user: CurrentUser
    ) -> dict:
        contact = await self._load(contact_id)
        self._check_owner(contact, user, "edit")

        for field, value in payload.contact_values(only_set=True).items():
            setattr(contact, field, to_column_value(value))
        if "company_name" in payload.model_fields_set:
            contact.company_id = await self.resolver.resolve_company(payload.company_name)
        if "department" in payload.model_fields_set:
            contact.department_id = await self.resolver.resolve_department(payload.department)
        if payload.has_custom_fields():
            contact.custom_fields = serialize_custom_fields(payload.custom_field_values())
        if payload.emails is not None:
            contact.emails = build_emails(e.model_dump() for e in payload.emails)
        if payload.phones is not None:
            contact.phones = build_phones(p.model_dump() for p in payload.phones)

        await self.db.commit()
        logger.info(f"[Contacts] Updated contact {contact_id} by {user.id}")
        return await self.get_contact(contact_id)

    async def delete_contact(self, contact_id: uuid.UUID, user: CurrentUser) -> None:
        contact = await self._load(contact_id)
        self._check_owner(contact, user, "delete")
        await self.db.delete(contact)
        await self.db.commit()
        logger.info(f"[Contacts] Deleted contact {contact_id} by {user.id}")
