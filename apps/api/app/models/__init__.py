from app.models.company import Company, Department
from app.models.contact import Contact, EmailAddress, PhoneNumber

__all__ = [
    "Company",
    "Department",
    "Contact",
    "EmailAddress",
    "PhoneNumber",
]
