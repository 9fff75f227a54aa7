"""
Unit tests for transform_row: how one spreadsheet row is split into contact
fields, custom fields, emails, phones and organisation references.
"""

import unittest

from tests.helpers import root_dir  # noqa: F401
from app.services.mapping import resolve_mapping
from app.services.row_transformer import RowPayload, transform_row


def _transform(row, mapping):
    return transform_row(row, resolve_mapping(mapping))


class TestTransformRow(unittest.TestCase):

    def test_lovelace_row(self):
        payload = _transform(
            {"First": "Ada", "Last": "Lovelace", "CompanyCol": "Acme Corp", "E1": "ada@acme.com"},
            {"First": "first_name", "Last": "last_name", "CompanyCol": "company_name", "E1": "email"},
        )
        self.assertEqual(payload.contact_fields, {"first_name": "Ada", "last_name": "Lovelace"})
        self.assertEqual(payload.company_name, "Acme Corp")
        self.assertEqual(payload.emails, [{"email": "ada@acme.com", "type": "primary"}])
        self.assertEqual(payload.phones, [])
        self.assertEqual(payload.custom_fields, {})
        self.assertEqual(payload.company_attributes, {})
        self.assertIsNone(payload.department_name)

    def test_absent_column_produces_nothing(self):
        payload = _transform({"First": "Ada"}, {"First": "first_name", "E1": "email"})
        self.assertEqual(payload.emails, [])
        self.assertEqual(payload.contact_fields, {"first_name": "Ada"})

    def test_ignored_column_produces_nothing(self):
        payload = _transform({"First": "Ada", "Junk": "x"}, {"First": "first_name", "Junk": "-- Ignore --"})
        self.assertEqual(payload, RowPayload(contact_fields={"first_name": "Ada"}))

    def test_explicit_null_is_kept(self):
        payload = _transform({"T": None}, {"T": "title"})
        self.assertEqual(payload.contact_fields, {"title": None})

    def test_emails_phones_and_types(self):
        payload = _transform(
            {"A": "a@x.io", "B": "b@x.io", "C": "c@home.io", "P1": "555-1", "P2": "555-2"},
            {"A": "email", "B": "secondary_email", "C": "personal_email",
             "P1": "work_phone", "P2": "company_phone"},
        )
        self.assertEqual(
            payload.emails,
            [
                {"email": "a@x.io", "type": "primary"},
                {"email": "b@x.io", "type": "secondary"},
                {"email": "c@home.io", "type": "personal"},
            ],
        )
        self.assertEqual(
            payload.phones,
            [{"phone": "555-1", "type": "work"}, {"phone": "555-2", "type": "company"}],
        )
        self.assertEqual(payload.company_attributes, {})

    def test_custom_fields_and_unknown_contact_fields(self):
        payload = _transform(
            {"B": "1815-12-10", "Topic": "AI", "City": "London"},
            {"B": "custom_fields.birthday", "Topic": "primary_intent_topic", "City": "contact_city"},
        )
        self.assertEqual(payload.custom_fields, {"birthday": "1815-12-10", "primary_intent_topic": "AI"})
        self.assertEqual(payload.contact_fields, {"city": "London"})

    def test_company_attributes_and_department(self):
        payload = _transform(
            {"Org": "Acme", "Ind": "Software", "Web": "acme.io", "Dept": "R&D"},
            {"Org": "company_name", "Ind": "company_industry", "Web": "company_website", "Dept": "department"},
        )
        self.assertEqual(payload.company_name, "Acme")
        self.assertEqual(payload.company_attributes, {"industry": "Software", "website": "acme.io"})
        self.assertEqual(payload.department_name, "R&D")

    def test_non_mapping_row_raises(self):
        with self.assertRaises(TypeError):
            _transform("not a row", {"A": "first_name"})


if __name__ == "__main__":
    unittest.main()
