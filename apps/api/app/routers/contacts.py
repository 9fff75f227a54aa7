"""
Contacts Router
Contact CRUD, the mapping-wizard field catalog and spreadsheet bulk import.
"""
import logging
import uuid
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import CurrentUser, get_current_user, get_db
from app.errors import AuthorizationError, ImportValidationError, NotFoundError
from app.schemas.contact import ContactCreate, ContactUpdate, FieldOption
from app.services.contact_service import ContactService
from app.services.field_catalog import mappable_fields
from app.services.import_service import BatchImporter

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/fields")
async def get_contact_fields(
    current_user: CurrentUser = Depends(get_current_user),
) -> dict[str, list[FieldOption]]:
    """Canonical fields the import wizard can map source columns onto."""
    return {"fields": [FieldOption(**f) for f in mappable_fields()]}


@router.get("")
async def list_contacts(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=500),
    search: str = Query("", max_length=200),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    svc = ContactService(db)
    return await svc.list_contacts(page=page, limit=limit, search=search)


@router.post("/import")
async def import_contacts(
    payload: Any = Body(...),
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    """Bulk import rows from one or more parsed spreadsheets.

    Body: {"files": [[row, ...], ...], "mappings": [{column: token}, ...]}
    where mappings[i] applies to files[i]. Row failures are reported in
    `errors` and never abort the rest of the import.
    """
    if not isinstance(payload, dict):
        payload = {}
    importer = BatchImporter(db)
    try:
        result = await importer.import_files(payload.get("files"), payload.get("mappings"))
    except ImportValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"[Import] Import failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to import contacts")
    logger.info(f"[Import] {result.total_imported} contacts imported by {current_user.id}")
    return result.as_response()


@router.get("/{contact_id}")
async def get_contact(
    contact_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    svc = ContactService(db)
    try:
        return {"contact": await svc.get_contact(contact_id)}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", status_code=201)
async def create_contact(
    payload: ContactCreate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    svc = ContactService(db)
    try:
        contact = await svc.create_contact(payload, owner_id=current_user.id or None)
    except Exception as e:
        logger.exception(f"[Contacts] Create failed: {e}")
        raise HTTPException(status_code=500, detail="Failed to create contact")
    return {"message": "Contact created successfully", "contact": contact}


@router.put("/{contact_id}")
async def update_contact(
    contact_id: uuid.UUID,
    payload: ContactUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    svc = ContactService(db)
    try:
        contact = await svc.update_contact(contact_id, payload, current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AuthorizationError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return {"message": "Contact updated successfully", "contact": contact}


@router.delete("/{contact_id}")
async def delete_contact(
    contact_id: uuid.UUID,
    db: AsyncSession = Depends(get_db),
    current_user: CurrentUser = Depends(get_current_user),
):
    svc = ContactService(db)
    try:
        await svc.delete_contact(contact_id, current_user)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AuthorizationError as e:
        raise HTTPException(status_code=403, detail=str(e))
    return {"message": "Contact deleted successfully"}
