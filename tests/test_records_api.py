"""Customer and invoice routes: CRUD behaviour and per-route role requirements."""

import unittest
from decimal import Decimal

from invoice_registry.api.access import ROLE_ADMIN, ROLE_USER
from invoice_registry.schemas.invoice import format_euro
from tests.support import add_user, bearer, make_client, make_codec, make_session_factory

CUSTOMERS = "/api/v1/customers"
INVOICES = "/api/v1/invoices"


def _customer(**overrides: object) -> dict:
    body = {"name": "Acme Ltd", "phone": "2101234567", "email": "info@x.com", "vatNumber": "123456789"}
    body.update(overrides)
    return body


def _invoice(customer_id: int, **overrides: object) -> dict:
    body = {
        "number": "INV-0001",
        "date": "2025-03-01",
        "status": "ISSUED",
        "description": "Consulting",
        "totalAmount": "1234.5",
        "customerId": customer_id,
    }
    body.update(overrides)
    return body


class RecordsTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.factory = make_session_factory()
        self.codec = make_codec()
        self.client = make_client(self.factory, self.codec)
        add_user(self.factory, "clerk", "pw", [ROLE_USER])
        add_user(self.factory, "boss", "pw", [ROLE_ADMIN])
        self.user = bearer(self.codec.issue("clerk"))
        self.admin = bearer(self.codec.issue("boss"))

    def create_customer(self, **overrides: object) -> dict:
        resp = self.client.post(CUSTOMERS, json=_customer(**overrides), headers=self.user)
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()


class TestCustomers(RecordsTestCase):
    def test_user_can_manage_customers(self) -> None:
        created = self.create_customer()
        self.assertEqual(created["vatNumber"], "123456789")
        cid = created["id"]

        resp = self.client.get(f"{CUSTOMERS}/{cid}", headers=self.user)
        self.assertEqual(resp.json()["name"], "Acme Ltd")

        resp = self.client.put(f"{CUSTOMERS}/{cid}", json=_customer(name="Acme SA"), headers=self.user)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Acme SA")

        resp = self.client.get(CUSTOMERS, headers=self.admin)
        self.assertEqual([c["id"] for c in resp.json()], [cid])

        resp = self.client.delete(f"{CUSTOMERS}/{cid}", headers=self.user)
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(self.client.get(f"{CUSTOMERS}/{cid}", headers=self.user).status_code, 404)

    def test_duplicate_vat_number(self) -> None:
        self.create_customer()
        resp = self.client.post(CUSTOMERS, json=_customer(name="Other"), headers=self.user)
        self.assertEqual(resp.status_code, 409)

    def test_update_to_another_customers_vat_number(self) -> None:
        self.create_customer()
        second = self.create_customer(vatNumber="987654321")
        resp = self.client.put(f"{CUSTOMERS}/{second['id']}", json=_customer(), headers=self.user)
        self.assertEqual(resp.status_code, 409)

    def test_validation(self) -> None:
        for bad in (_customer(name="Ab"), _customer(phone="123"), _customer(vatNumber="12AB")):
            with self.subTest(body=bad):
                resp = self.client.post(CUSTOMERS, json=bad, headers=self.user)
                self.assertEqual(resp.status_code, 422)

    def test_missing_customer(self) -> None:
        self.assertEqual(self.client.get(f"{CUSTOMERS}/99", headers=self.user).status_code, 404)
        self.assertEqual(self.client.delete(f"{CUSTOMERS}/99", headers=self.user).status_code, 404)
        resp = self.client.put(f"{CUSTOMERS}/99", json=_customer(), headers=self.user)
        self.assertEqual(resp.status_code, 404)

    def test_customer_with_invoices_cannot_be_deleted(self) -> None:
        cid = self.create_customer()["id"]
        resp = self.client.post(INVOICES, json=_invoice(cid), headers=self.admin)
        self.assertEqual(resp.status_code, 201, resp.text)
        resp = self.client.delete(f"{CUSTOMERS}/{cid}", headers=self.user)
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["detail"], "Customer has existing invoices")


class TestInvoices(RecordsTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.customer_id = self.create_customer()["id"]

    def test_admin_writes_user_reads(self) -> None:
        resp = self.client.post(INVOICES, json=_invoice(self.customer_id), headers=self.admin)
        self.assertEqual(resp.status_code, 201)
        invoice = resp.json()
        self.assertEqual(invoice["totalAmount"], "€1,234.50")
        self.assertEqual(invoice["customerId"], self.customer_id)

        resp = self.client.get(f"{INVOICES}/{invoice['id']}", headers=self.user)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["number"], "INV-0001")
        self.assertEqual(len(self.client.get(INVOICES, headers=self.user).json()), 1)

        resp = self.client.put(
            f"{INVOICES}/{invoice['id']}",
            json=_invoice(self.customer_id, status="PAID"),
            headers=self.admin,
        )
        self.assertEqual(resp.json()["status"], "PAID")

        resp = self.client.delete(f"{INVOICES}/{invoice['id']}", headers=self.admin)
        self.assertEqual(resp.status_code, 204)

    def test_user_cannot_write(self) -> None:
        resp = self.client.post(INVOICES, json=_invoice(self.customer_id), headers=self.user)
        self.assertEqual(resp.status_code, 403)
        created = self.client.post(INVOICES, json=_invoice(self.customer_id), headers=self.admin).json()
        for method in ("put", "delete"):
            with self.subTest(method=method):
                kwargs = {"json": _invoice(self.customer_id)} if method == "put" else {}
                resp = getattr(self.client, method)(
                    f"{INVOICES}/{created['id']}", headers=self.user, **kwargs
                )
                self.assertEqual(resp.status_code, 403)

    def test_duplicate_number_and_missing_customer(self) -> None:
        self.client.post(INVOICES, json=_invoice(self.customer_id), headers=self.admin)
        resp = self.client.post(INVOICES, json=_invoice(self.customer_id), headers=self.admin)
        self.assertEqual(resp.status_code, 409)
        resp = self.client.post(INVOICES, json=_invoice(999, number="INV-0002"), headers=self.admin)
        self.assertEqual(resp.status_code, 404)

    def test_date_must_be_iso(self) -> None:
        resp = self.client.post(
            INVOICES, json=_invoice(self.customer_id, date="01/03/2025"), headers=self.admin
        )
        self.assertEqual(resp.status_code, 422)


class TestFormatEuro(unittest.TestCase):
    def test_format(self) -> None:
        self.assertEqual(format_euro(Decimal("1234567.8")), "€1,234,567.80")
        self.assertEqual(format_euro(Decimal("0")), "€0.00")
        self.assertIsNone(format_euro(None))


if __name__ == "__main__":
    unittest.main()
