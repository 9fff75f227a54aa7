"""
Bulk Import Service
Merges spreadsheet exports into contacts/companies/departments.

  1. Flatten every (file, row, mapping) into one ordered work list
  2. Process it in fixed-size chunks, committing after each chunk
  3. Each row runs transform -> resolve -> write inside its own savepoint;
     a failing row is rolled back, recorded, and the batch carries on
"""
from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Sequence

from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.errors import ImportValidationError
from app.services.contact_writer import ContactWriter
from app.services.entity_resolver import EntityResolver
from app.services.mapping import ColumnDirectives, resolve_mapping
from app.services.row_transformer import RowPayload, transform_row

logger = logging.getLogger(__name__)


@dataclass
class ImportRow:
    file_index: int
    row_index: int
    row: Any
    directives: ColumnDirectives


@dataclass
class ImportResult:
    total_imported: int = 0
    errors: list[str] = field(default_factory=list)

    def record_failure(self, item: ImportRow, exc: Exception) -> None:
        self.errors.append(
            f"File {item.file_index + 1}, Row {item.row_index + 1}: {_error_message(exc)}"
        )

    def as_response(self) -> dict:
        return {
            "message": "Import completed",
            "total_imported": self.total_imported,
            "errors": self.errors or None,
        }


def _error_message(exc: Exception) -> str:
    # Driver errors read better without SQLAlchemy's statement dump
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


def build_work_list(files: Any, mappings: Any) -> list[ImportRow]:
    """Validate the request shape and flatten it, keeping file/row positions."""
    if not isinstance(files, list) or not isinstance(mappings, list):
        raise ImportValidationError("Invalid request format")

    work: list[ImportRow] = []
    for file_index, rows in enumerate(files):
        mapping = mappings[file_index] if file_index < len(mappings) else None
        if not isinstance(rows, list) or not isinstance(mapping, Mapping):
            continue
        directives = resolve_mapping(mapping)
        for row_index, row in enumerate(rows):
            work.append(ImportRow(file_index, row_index, row, directives))
    return work


def chunked(items: Sequence[ImportRow], size: int) -> Iterator[Sequence[ImportRow]]:
    for start in range(0, len(items), size):
        yield items[start:start + size]


class ImportPipeline:
    """The per-row stages. Each stage may raise; the caller isolates failures."""

    def __init__(self, resolver: EntityResolver, writer: ContactWriter):
        self.resolver = resolver
        self.writer = writer

    def transform(self, item: ImportRow) -> RowPayload:
        return transform_row(item.row, item.directives)

    async def resolve(self, payload: RowPayload) -> tuple[Optional[uuid.UUID], Optional[uuid.UUID]]:
        company_id = None
        department_id = None
        if payload.company_name:
            company_id = await self.resolver.resolve_company(
                payload.company_name, payload.company_attributes or None
            )
        if payload.department_name:
            department_id = await self.resolver.resolve_department(payload.department_name)
        return company_id, department_id

    async def write(
        self, payload: RowPayload, company_id: Optional[uuid.UUID], department_id: Optional[uuid.UUID]
    ) -> uuid.UUID:
        contact = await self.writer.write(
            payload.contact_fields,
            company_id=company_id,
            department_id=department_id,
            custom_fields=payload.custom_fields,
            emails=payload.emails,
            phones=payload.phones,
        )
        return contact.id

    async def run(self, item: ImportRow) -> uuid.UUID:
        payload = self.transform(item)
        company_id, department_id = await self.resolve(payload)
        return await self.write(payload, company_id, department_id)


class BatchImporter:
    def __init__(
        self,
        db: AsyncSession,
        pipeline: Optional[ImportPipeline] = None,
        batch_size: Optional[int] = None,
    ):
        self.db = db
        self.pipeline = pipeline or ImportPipeline(EntityResolver(db), ContactWriter(db))
        self.batch_size = batch_size or settings.IMPORT_BATCH_SIZE

    async def import_files(self, files: Any, mappings: Any) -> ImportResult:
        work = build_work_list(files, mappings)
        result = ImportResult()
        logger.info(f"[Import] Starting import: {len(work)} rows from {len(files)} file(s)")

        for chunk_no, chunk in enumerate(chunked(work, self.batch_size), start=1):
            for item in chunk:
                try:
                    async with self.db.begin_nested():
                        await self.pipeline.run(item)
                except Exception as e:
                    result.record_failure(item, e)
                    logger.debug(f"[Import] {result.errors[-1]}")
                    continue
                result.total_imported += 1
            await self.db.commit()
            logger.info(f"[Import] Chunk {chunk_no} committed ({len(chunk)} rows)")

        logger.info(
            f"[Import] Done: {result.total_imported} imported, {len(result.errors)} failed"
        )
        return result
