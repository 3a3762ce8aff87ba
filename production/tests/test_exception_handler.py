from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import DatabaseError
from django.test import SimpleTestCase
from rest_framework.exceptions import NotAuthenticated

from production.exceptions import (
    InsufficientInventoryError,
    NotFoundError,
    PersistenceError,
    ReferencedRecordError,
    api_exception_handler,
)


class ExceptionHandlerTests(SimpleTestCase):
    context = {"request": None}

    def test_not_found(self):
        resp = api_exception_handler(NotFoundError("Job order 9 not found"), self.context)
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.data, {"error": "Job order 9 not found"})

    def test_insufficient_inventory_carries_figures(self):
        exc = InsufficientInventoryError("HDPE", Decimal("40.000"), Decimal("60.000"))
        resp = api_exception_handler(exc, self.context)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(
            resp.data["error"],
            "Not enough HDPE in inventory. Available: 40kg, Required: 60kg",
        )
        self.assertEqual(resp.data["material"], "HDPE")
        self.assertEqual(resp.data["required"], Decimal("60.000"))

    def test_validation_error(self):
        resp = api_exception_handler(ValidationError("Quantity must be a number."), self.context)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data, {"error": "Quantity must be a number."})

    def test_referenced_record(self):
        resp = api_exception_handler(ReferencedRecordError("in use"), self.context)
        self.assertEqual(resp.status_code, 409)

    def test_persistence_failures_are_500(self):
        with self.assertLogs("production.exceptions", level="ERROR"):
            resp = api_exception_handler(PersistenceError("boom"), self.context)
        self.assertEqual(resp.status_code, 500)
        with self.assertLogs("production.exceptions", level="ERROR"):
            resp = api_exception_handler(DatabaseError("locked"), self.context)
        self.assertEqual(resp.status_code, 500)

    def test_drf_exceptions_use_stock_handler(self):
        resp = api_exception_handler(NotAuthenticated(), self.context)
        self.assertIn(resp.status_code, (401, 403))

    def test_unknown_exception_is_left_alone(self):
        self.assertIsNone(api_exception_handler(RuntimeError("x"), self.context))
