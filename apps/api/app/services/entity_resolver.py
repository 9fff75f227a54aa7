"""
Entity Resolver
Find-or-create for the organisational records a contact points at.
Companies and departments are deduplicated by exact name; the unique
constraint on `name` makes the insert safe when two imports race.
"""
from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.company import COMPANY_ATTRIBUTES, Company, Department

logger = logging.getLogger(__name__)


def _entity_name(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return value if isinstance(value, str) else str(value)


def _company_values(attributes: Optional[dict[str, Any]]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for key, value in (attributes or {}).items():
        if value is None:
            continue
        if key not in COMPANY_ATTRIBUTES:
            raise ValueError(f"Unknown company attribute '{key}'")
        values[key] = value if isinstance(value, str) else str(value)
    return values


class EntityResolver:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve_company(
        self, name: Any, attributes: Optional[dict[str, Any]] = None
    ) -> Optional[uuid.UUID]:
        """Return the id of the company called `name`, creating it if needed.

        `attributes` only apply when this call creates the company; an
        existing company is never modified.
        """
        name = _entity_name(name)
        if name is None:
            return None
        company_id = await self._find(Company, name)
        if company_id is not None:
            return company_id
        return await self._insert_or_fetch(Company, name, _company_values(attributes))

    async def resolve_department(self, name: Any) -> Optional[uuid.UUID]:
        name = _entity_name(name)
        if name is None:
            return None
        department_id = await self._find(Department, name)
        if department_id is not None:
            return department_id
        return await self._insert_or_fetch(Department, name, {})

    async def _find(self, model, name: str) -> Optional[uuid.UUID]:
        result = await self.db.execute(select(model.id).where(model.name == name))
        return result.scalar_one_or_none()

    async def _insert_or_fetch(self, model, name: str, values: dict[str, Any]) -> uuid.UUID:
        new_id = uuid.uuid4()
        try:
            async with self.db.begin_nested():
                await self.db.execute(insert(model).values(id=new_id, name=name, **values))
        except IntegrityError:
            # Another importer created it between our lookup and insert
            existing = await self._find(model, name)
            if existing is None:
                raise
            logger.info(f"[Entities] {model.__name__} '{name}' created concurrently, reusing {existing}")
            return existing
        logger.info(f"[Entities] Created {model.__name__.lower()} '{name}' (id={new_id})")
        return new_id
