from decimal import Decimal
from io import StringIO

import pytest
from django.contrib.auth import get_user_model
from django.core.management import CommandError, call_command
from django.test import TestCase
from rest_framework.test import APIClient

from inventory.models import MATERIAL_TYPES, Material, Mix
from inventory.services import ledger
from production.models import Customer, Machine, Order


class InventoryApiTests(TestCase):
    def setUp(self):
        self.user = get_user_model().objects.create_user(username="storekeeper", password="pass")
        self.client = APIClient()
        self.client.force_authenticate(self.user)

    def create_material(self, name="HDPE 7000F", start="100"):
        resp = self.client.post(
            "/api/materials/", {"name": name, "starting_balance_kg": start}, format="json"
        )
        self.assertEqual(resp.status_code, 201, resp.data)
        return resp.data

    def test_create_material_generates_identifier(self):
        data = self.create_material(start="75")
        self.assertTrue(data["identifier"].startswith("MAT-"))
        self.assertEqual(data["current_balance_kg"], Decimal("75"))

    def test_starting_balance_is_immutable(self):
        data = self.create_material()
        resp = self.client.patch(f"/api/materials/{data['id']}/", {"starting_balance_kg": "5"}, format="json")
        self.assertEqual(resp.status_code, 400)
        resp = self.client.patch(
            f"/api/materials/{data['id']}/", {"current_balance_kg": "5", "name": "HDPE B"}, format="json"
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["current_balance_kg"], Decimal("100"))
        self.assertEqual(resp.data["name"], "HDPE B")

    def test_material_input_endpoints(self):
        material = self.create_material(start="10")
        resp = self.client.post(
            "/api/material-inputs/", {"material": material["id"], "quantity_kg": "15"}, format="json"
        )
        self.assertEqual(resp.status_code, 201, resp.data)
        self.assertTrue(resp.data["input_identifier"].startswith("INP-"))
        input_id = resp.data["id"]
        self.assertEqual(Material.objects.get(pk=material["id"]).current_balance_kg, Decimal("25"))

        resp = self.client.get("/api/material-inputs/", {"material": material["id"]})
        self.assertEqual([row["id"] for row in resp.data], [input_id])

        resp = self.client.delete(f"/api/material-inputs/{input_id}/")
        self.assertEqual(resp.status_code, 204)
        self.assertEqual(Material.objects.get(pk=material["id"]).current_balance_kg, Decimal("10"))

    def test_material_input_rejects_zero(self):
        material = self.create_material()
        resp = self.client.post(
            "/api/material-inputs/", {"material": material["id"], "quantity_kg": "0"}, format="json"
        )
        self.assertEqual(resp.status_code, 400)

    def test_delete_referenced_material_conflicts(self):
        material = self.create_material()
        ledger.create_material_input(material["id"], Decimal("1"))
        resp = self.client.delete(f"/api/materials/{material['id']}/")
        self.assertEqual(resp.status_code, 409)
        self.assertIn("error", resp.data)

        free = self.create_material(name="Regrind")
        self.assertEqual(self.client.delete(f"/api/materials/{free['id']}/").status_code, 204)

    def test_mix_create_and_shortfall(self):
        material = self.create_material(start="100")
        resp = self.client.post(
            "/api/mixes/",
            {"items": [{"material": material["id"], "quantity_kg": "60", "material_type": "HDPE"}]},
            format="json",
        )
        self.assertEqual(resp.status_code, 201, resp.data)
        self.assertTrue(resp.data["batch_number"].startswith("MIX-"))
        self.assertEqual(resp.data["created_by"], self.user.pk)
        self.assertEqual(resp.data["total_quantity_kg"], Decimal("60"))

        resp = self.client.post(
            "/api/mixes/",
            {"items": [{"material": material["id"], "quantity_kg": "60"}]},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.data["material"], "HDPE 7000F")
        self.assertEqual(resp.data["available"], Decimal("40"))
        self.assertEqual(resp.data["required"], Decimal("60"))
        self.assertEqual(Mix.objects.count(), 1)

    def test_mix_rejects_unknown_material_type(self):
        material = self.create_material()
        resp = self.client.post(
            "/api/mixes/",
            {"items": [{"material": material["id"], "quantity_kg": "1", "material_type": "Unobtainium"}]},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)

    def test_mix_items_are_immutable_but_header_is_not(self):
        material = self.create_material()
        mix = ledger.create_mix([{"material": material["id"], "quantity_kg": Decimal("5")}])
        resp = self.client.patch(
            f"/api/mixes/{mix.pk}/",
            {"items": [{"material": material["id"], "quantity_kg": "1"}]},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)
        resp = self.client.patch(f"/api/mixes/{mix.pk}/", {"status": Mix.COMPLETED}, format="json")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.data["status"], Mix.COMPLETED)
        resp = self.client.put(f"/api/mixes/{mix.pk}/", {"status": Mix.PENDING}, format="json")
        self.assertEqual(resp.status_code, 405)

    def test_mix_filters_and_delete(self):
        material = self.create_material()
        customer = Customer.objects.create(name="Acme")
        order = Order.objects.create(customer=customer)
        machine = Machine.objects.create(section=Machine.EXTRUSION, code="EX-1", production_date="2020-01-01")
        linked = ledger.create_mix(
            [{"material": material["id"], "quantity_kg": Decimal("5")}], orders=[order], machines=[machine]
        )
        ledger.create_mix([{"material": material["id"], "quantity_kg": Decimal("5")}])

        resp = self.client.get("/api/mixes/", {"order": order.pk})
        self.assertEqual([row["id"] for row in resp.data], [linked.pk])
        resp = self.client.get("/api/mixes/", {"machine": machine.pk})
        self.assertEqual([row["id"] for row in resp.data], [linked.pk])

        self.assertEqual(self.client.delete(f"/api/mixes/{linked.pk}/").status_code, 204)
        self.assertEqual(Material.objects.get(pk=material["id"]).current_balance_kg, Decimal("95"))

    def test_material_types(self):
        resp = self.client.get("/api/material-types/")
        self.assertEqual(resp.data, MATERIAL_TYPES)


@pytest.mark.django_db
def test_check_material_balances_command():
    material = Material.objects.create(name="HDPE", starting_balance_kg=Decimal("10"))
    ledger.create_material_input(material.pk, Decimal("5"))
    out = StringIO()
    call_command("check_material_balances", stdout=out)
    assert "0 mismatch" in out.getvalue()

    Material.objects.filter(pk=material.pk).update(current_balance_kg=Decimal("3"))
    with pytest.raises(CommandError):
        call_command("check_material_balances", stdout=StringIO())

    call_command("check_material_balances", "--fix", stdout=StringIO())
    material.refresh_from_db()
    assert material.current_balance_kg == Decimal("15")
