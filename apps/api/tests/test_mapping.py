"""
Unit tests for the mapping resolver: token classification precedence and
whole-mapping resolution. Pure functions, no database.
"""

import unittest

from tests.helpers import root_dir  # noqa: F401  (puts the api package on sys.path)
from app.services.mapping import (
    CompanyAttribute,
    CompanyName,
    ContactField,
    CustomField,
    DepartmentName,
    EmailField,
    Ignore,
    PhoneField,
    classify_token,
    resolve_mapping,
)


# ============================================================
# TEST CLASS: classify_token
# ============================================================

class TestClassifyToken(unittest.TestCase):

    def test_custom_field_prefix(self):
        self.assertEqual(classify_token("custom_fields.birthday"), CustomField("birthday"))

    def test_custom_field_wins_over_other_rules(self):
        """A custom field named like a phone is still a custom field."""
        self.assertEqual(classify_token("custom_fields.home_phone"), CustomField("home_phone"))
        self.assertEqual(classify_token("custom_fields.company_x"), CustomField("company_x"))

    def test_email_types(self):
        self.assertEqual(classify_token("email"), EmailField("primary"))
        self.assertEqual(classify_token("secondary_email"), EmailField("secondary"))
        self.assertEqual(classify_token("tertiary_email"), EmailField("tertiary"))
        self.assertEqual(classify_token("personal_email"), EmailField("personal"))

    def test_phone_suffix(self):
        self.assertEqual(classify_token("work_phone"), PhoneField("work"))
        self.assertEqual(classify_token("mobile_phone"), PhoneField("mobile"))
        self.assertEqual(classify_token("corporate_phone"), PhoneField("corporate"))

    def test_company_phone_is_a_phone_not_a_company_attribute(self):
        self.assertEqual(classify_token("company_phone"), PhoneField("company"))

    def test_company_name_and_department(self):
        self.assertEqual(classify_token("company_name"), CompanyName())
        self.assertEqual(classify_token("department"), DepartmentName())

    def test_contact_address_aliases(self):
        self.assertEqual(classify_token("contact_address"), ContactField("address"))
        self.assertEqual(classify_token("contact_city"), ContactField("city"))
        self.assertEqual(classify_token("contact_state"), ContactField("state"))
        self.assertEqual(classify_token("contact_country"), ContactField("country"))
        self.assertEqual(classify_token("contact_postal_code"), ContactField("postal_code"))

    def test_company_attributes(self):
        self.assertEqual(classify_token("company_industry"), CompanyAttribute("industry"))
        self.assertEqual(classify_token("company_city"), CompanyAttribute("city"))
        self.assertEqual(
            classify_token("company_latest_funding_amount"),
            CompanyAttribute("latest_funding_amount"),
        )

    def test_unknown_tokens_fall_through_to_contact_field(self):
        self.assertEqual(classify_token("first_name"), ContactField("first_name"))
        self.assertEqual(classify_token("email_status"), ContactField("email_status"))
        self.assertEqual(classify_token("whatever it is"), ContactField("whatever it is"))

    def test_ignore_token_and_empty(self):
        self.assertEqual(classify_token("-- Ignore --"), Ignore())
        self.assertEqual(classify_token(""), Ignore())
        self.assertEqual(classify_token(None), Ignore())

    def test_custom_ignore_token(self):
        self.assertEqual(classify_token("skip", ignore_token="skip"), Ignore())
        self.assertEqual(classify_token("-- Ignore --", ignore_token="skip"), ContactField("-- Ignore --"))


# ============================================================
# TEST CLASS: resolve_mapping
# ============================================================

class TestResolveMapping(unittest.TestCase):

    def test_keeps_column_order_and_drops_ignored(self):
        mapping = {
            "First": "first_name",
            "Skip": "-- Ignore --",
            "Mail": "email",
            "Blank": None,
            "Org": "company_name",
        }
        self.assertEqual(
            resolve_mapping(mapping),
            [
                ("First", ContactField("first_name")),
                ("Mail", EmailField("primary")),
                ("Org", CompanyName()),
            ],
        )

    def test_non_string_tokens_are_ignored(self):
        self.assertEqual(resolve_mapping({"A": 42, "B": ["email"]}), [])


if __name__ == "__main__":
    unittest.main()
