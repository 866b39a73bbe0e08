"""Unit tests for access rules, exemptions and bearer header parsing."""

import unittest

from invoice_registry.api.access import (
    AUTHENTICATED,
    OPEN,
    ROLE_ADMIN,
    ROLE_USER,
    any_role,
    is_exempt,
)
from invoice_registry.core.errors import ErrorKind
from invoice_registry.middleware.authenticator import extract_bearer_token
from invoice_registry.services.principal import Principal


def _principal(*roles: str) -> Principal:
    return Principal(subject="a", user_id=1, username="a", roles=frozenset(roles))


class TestAccessRule(unittest.TestCase):
    def test_open_admits_anyone(self) -> None:
        self.assertIsNone(OPEN.evaluate(None))
        self.assertIsNone(OPEN.evaluate(_principal()))

    def test_anonymous_is_unauthenticated(self) -> None:
        for rule in (AUTHENTICATED, any_role(ROLE_USER)):
            with self.subTest(rule=rule):
                self.assertEqual(rule.evaluate(None).kind, ErrorKind.UNAUTHENTICATED)

    def test_authenticated_admits_principal_without_roles(self) -> None:
        self.assertIsNone(AUTHENTICATED.evaluate(_principal()))

    def test_roles_need_an_intersection(self) -> None:
        rule = any_role(ROLE_ADMIN, ROLE_USER)
        self.assertIsNone(rule.evaluate(_principal(ROLE_USER)))
        self.assertIsNone(rule.evaluate(_principal(ROLE_ADMIN, "ROLE_AUDITOR")))
        self.assertEqual(rule.evaluate(_principal("ROLE_AUDITOR")).kind, ErrorKind.FORBIDDEN)
        self.assertEqual(rule.evaluate(_principal()).kind, ErrorKind.FORBIDDEN)

    def test_admin_only(self) -> None:
        rule = any_role(ROLE_ADMIN)
        self.assertEqual(rule.evaluate(_principal(ROLE_USER)).kind, ErrorKind.FORBIDDEN)
        self.assertIsNone(rule.evaluate(_principal(ROLE_ADMIN)))

    def test_any_role_requires_names(self) -> None:
        with self.assertRaises(ValueError):
            any_role()


class TestExemptions(unittest.TestCase):
    def test_preflight_and_docs_are_exempt(self) -> None:
        self.assertTrue(is_exempt("OPTIONS", "/api/v1/invoices"))
        self.assertTrue(is_exempt("options", "/anything"))
        for path in ("/docs", "/redoc", "/openapi.json", "/docs/oauth2-redirect"):
            with self.subTest(path=path):
                self.assertTrue(is_exempt("GET", path))

    def test_api_routes_are_not_exempt(self) -> None:
        self.assertFalse(is_exempt("GET", "/api/v1/invoices"))
        self.assertFalse(is_exempt("POST", "/docs-but-not-really"))


class TestExtractBearerToken(unittest.TestCase):
    def test_bearer_header(self) -> None:
        self.assertEqual(extract_bearer_token("Bearer abc.def.ghi"), "abc.def.ghi")

    def test_absent_or_other_schemes(self) -> None:
        for value in (None, "", "Basic dXNlcjpwYXNz", "bearer abc", "Bearer ", "Token abc"):
            with self.subTest(value=value):
                self.assertIsNone(extract_bearer_token(value))


if __name__ == "__main__":
    unittest.main()
