"""
Row Transformer
Pure step of the import pipeline: one raw spreadsheet row plus its file's
directives in, one structured payload out. No database access.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Optional

from app.models.contact import CONTACT_COLUMNS
from app.services.mapping import (
    ColumnDirectives,
    CompanyAttribute,
    CompanyName,
    ContactField,
    CustomField,
    DepartmentName,
    EmailField,
    Ignore,
    PhoneField,
)


@dataclass
class RowPayload:
    contact_fields: dict[str, Any] = field(default_factory=dict)
    custom_fields: dict[str, Any] = field(default_factory=dict)
    emails: list[dict[str, Any]] = field(default_factory=list)
    phones: list[dict[str, Any]] = field(default_factory=list)
    company_name: Optional[Any] = None
    department_name: Optional[Any] = None
    company_attributes: dict[str, Any] = field(default_factory=dict)


def transform_row(row: Mapping[str, Any], directives: ColumnDirectives) -> RowPayload:
    if not isinstance(row, Mapping):
        raise TypeError(f"Row must be an object, got {type(row).__name__}")

    payload = RowPayload()
    for column, directive in directives:
        # A missing key is "not provided"; an explicit null is still a value
        if column not in row or isinstance(directive, Ignore):
            continue
        value = row[column]

        if isinstance(directive, CustomField):
            payload.custom_fields[directive.name] = value
        elif isinstance(directive, EmailField):
            payload.emails.append({"email": value, "type": directive.type})
        elif isinstance(directive, PhoneField):
            payload.phones.append({"phone": value, "type": directive.type})
        elif isinstance(directive, CompanyName):
            payload.company_name = value
        elif isinstance(directive, DepartmentName):
            payload.department_name = value
        elif isinstance(directive, CompanyAttribute):
            payload.company_attributes[directive.name] = value
        elif isinstance(directive, ContactField):
            if directive.name in CONTACT_COLUMNS:
                payload.contact_fields[directive.name] = value
            else:
                payload.custom_fields[directive.name] = value

    return payload
