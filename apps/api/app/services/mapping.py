"""
Mapping Resolver
Turns the column -> token mapping chosen in the import wizard into typed
directives describing what each source column holds.

Precedence matters: several tokens share prefixes/suffixes, so the checks in
classify_token() run in a fixed order and the first match wins. For example
`company_phone` is a phone (suffix rule) and never a company attribute.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Union

from app.config import settings

CUSTOM_FIELD_PREFIX = "custom_fields."
COMPANY_PREFIX = "company_"
PHONE_SUFFIX = "_phone"
EMAIL_SUFFIX = "_email"

EMAIL_TOKENS = ("email", "secondary_email", "tertiary_email")

CONTACT_ADDRESS_ALIASES = {
    "contact_address": "address",
    "contact_city": "city",
    "contact_state": "state",
    "contact_country": "country",
    "contact_postal_code": "postal_code",
}


# ---------------------------------------------------------------------------
# Directive types
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Ignore:
    pass


@dataclass(frozen=True)
class ContactField:
    name: str


@dataclass(frozen=True)
class CustomField:
    name: str


@dataclass(frozen=True)
class EmailField:
    type: str


@dataclass(frozen=True)
class PhoneField:
    type: str


@dataclass(frozen=True)
class CompanyName:
    pass


@dataclass(frozen=True)
class CompanyAttribute:
    name: str


@dataclass(frozen=True)
class DepartmentName:
    pass


Directive = Union[
    Ignore, ContactField, CustomField, EmailField, PhoneField,
    CompanyName, CompanyAttribute, DepartmentName,
]

# (source column, directive) in mapping order
ColumnDirectives = list[tuple[str, Directive]]


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

def classify_token(token: Optional[str], ignore_token: Optional[str] = None) -> Directive:
    """Classify one canonical-field token. Total: unknown tokens become ContactField."""
    if ignore_token is None:
        ignore_token = settings.IMPORT_IGNORE_TOKEN
    if not token or token == ignore_token:
        return Ignore()

    if token.startswith(CUSTOM_FIELD_PREFIX):
        return CustomField(token[len(CUSTOM_FIELD_PREFIX):])
    if token in EMAIL_TOKENS:
        return EmailField("primary" if token == "email" else token[: -len(EMAIL_SUFFIX)])
    if token.endswith(PHONE_SUFFIX):
        return PhoneField(token[: -len(PHONE_SUFFIX)])
    if token == "company_name":
        return CompanyName()
    if token == "department":
        return DepartmentName()
    if token == "personal_email":
        return EmailField("personal")
    if token in CONTACT_ADDRESS_ALIASES:
        return ContactField(CONTACT_ADDRESS_ALIASES[token])
    if token.startswith(COMPANY_PREFIX):
        return CompanyAttribute(token[len(COMPANY_PREFIX):])
    return ContactField(token)


def resolve_mapping(
    mapping: Mapping[str, Optional[str]], ignore_token: Optional[str] = None
) -> ColumnDirectives:
    """Classify a whole file mapping once, dropping ignored columns."""
    directives: ColumnDirectives = []
    for column, token in mapping.items():
        directive = classify_token(token if isinstance(token, str) else None, ignore_token)
        if isinstance(directive, Ignore):
            continue
        directives.append((column, directive))
    return directives
