from decimal import Decimal
from unittest import mock

import pytest
from django.db import DatabaseError
from django.test import TestCase

from production.models import Customer, Order, JobOrder, Roll
from production.serializers import JobOrderSerializer
from production.services import ledger


def setup_job_order(quantity=100):
    customer = Customer.objects.create(name="Acme Plastics", phone="+966500000000")
    order = Order.objects.create(customer=customer)
    return JobOrder.objects.create(order=order, customer=customer, quantity=quantity)


class ProductionLedgerTests(TestCase):
    def setUp(self):
        self.jo = setup_job_order(quantity=10)

    def test_pending_roll_then_received(self):
        roll = Roll.objects.create(
            job_order=self.jo, extruding_qty=Decimal("10"), status="Pending"
        )
        self.jo.refresh_from_db()
        self.assertEqual(self.jo.produced_quantity, Decimal("0"))
        self.assertEqual(self.jo.waste_quantity, Decimal("0"))
        self.assertEqual(self.jo.production_status, JobOrder.NOT_STARTED)

        roll.status = Roll.RECEIVED
        roll.cutting_qty = Decimal("7")
        roll.save()
        self.jo.refresh_from_db()
        self.assertEqual(self.jo.produced_quantity, Decimal("7"))
        self.assertEqual(self.jo.waste_quantity, Decimal("3"))
        self.assertEqual(self.jo.production_status, JobOrder.IN_PROGRESS)

    def test_extrusion_status_follows_extruded_total(self):
        Roll.objects.create(job_order=self.jo, extruding_qty=Decimal("4"))
        self.jo.refresh_from_db()
        self.assertEqual(self.jo.status, JobOrder.STATUS_IN_PROGRESS)

        Roll.objects.create(job_order=self.jo, extruding_qty=Decimal("6"))
        self.jo.refresh_from_db()
        self.assertEqual(self.jo.status, JobOrder.STATUS_COMPLETED)
        # the extrusion status does not drive production_status
        self.assertEqual(self.jo.production_status, JobOrder.NOT_STARTED)

    def test_roll_without_extrusion_leaves_status_alone(self):
        Roll.objects.create(job_order=self.jo)
        self.jo.refresh_from_db()
        self.assertEqual(self.jo.status, JobOrder.STATUS_PENDING)

    def test_changing_cutting_of_received_roll_is_reflected(self):
        roll = Roll.objects.create(
            job_order=self.jo, extruding_qty=Decimal("5"), cutting_qty=Decimal("4"), status=Roll.RECEIVED
        )
        self.jo.refresh_from_db()
        self.assertEqual(self.jo.produced_quantity, Decimal("4"))

        roll.cutting_qty = Decimal("4.5")
        roll.save()
        self.jo.refresh_from_db()
        self.assertEqual(self.jo.produced_quantity, Decimal("4.5"))
        self.assertEqual(self.jo.waste_quantity, Decimal("0.5"))

    def test_deleting_a_roll_recomputes(self):
        keep = Roll.objects.create(
            job_order=self.jo, extruding_qty=Decimal("5"), cutting_qty=Decimal("5"), status=Roll.RECEIVED
        )
        drop = Roll.objects.create(
            job_order=self.jo, extruding_qty=Decimal("5"), cutting_qty=Decimal("3"), status=Roll.RECEIVED
        )
        self.jo.refresh_from_db()
        self.assertEqual(self.jo.produced_quantity, Decimal("8"))

        drop.delete()
        self.jo.refresh_from_db()
        self.assertEqual(self.jo.produced_quantity, Decimal("5"))
        self.assertEqual(self.jo.waste_quantity, Decimal("0"))
        self.assertTrue(Roll.objects.filter(pk=keep.pk).exists())

    def test_editing_a_stale_job_order_keeps_ledger_fields(self):
        jo = setup_job_order(quantity=20)
        stale = JobOrder.objects.get(pk=jo.pk)
        Roll.objects.create(
            job_order=jo, extruding_qty=Decimal("10"), cutting_qty=Decimal("7"), status=Roll.RECEIVED
        )

        serializer = JobOrderSerializer(stale, data={"notes": "rush"}, partial=True)
        self.assertTrue(serializer.is_valid(), serializer.errors)
        serializer.save()
        stale.size_details = "50x70"
        stale.save()

        jo.refresh_from_db()
        self.assertEqual(jo.notes, "rush")
        self.assertEqual(jo.size_details, "50x70")
        self.assertEqual(jo.produced_quantity, Decimal("7"))
        self.assertEqual(jo.waste_quantity, Decimal("3"))
        self.assertEqual(jo.production_status, JobOrder.IN_PROGRESS)
        self.assertEqual(jo.status, JobOrder.STATUS_IN_PROGRESS)

    def test_status_sent_by_the_client_is_saved(self):
        serializer = JobOrderSerializer(
            self.jo, data={"status": JobOrder.STATUS_CANCELLED}, partial=True
        )
        self.assertTrue(serializer.is_valid(), serializer.errors)
        serializer.save()
        self.jo.refresh_from_db()
        self.assertEqual(self.jo.status, JobOrder.STATUS_CANCELLED)

    def test_missing_job_order_is_logged_and_skipped(self):
        with self.assertLogs("production.services.ledger", level="WARNING") as logs:
            self.assertIsNone(ledger.recompute(987654))
        self.assertIn("987654", logs.output[0])

    def test_database_error_does_not_block_roll_write(self):
        with mock.patch(
            "production.services.ledger.produced_from_rolls",
            side_effect=DatabaseError("boom"),
        ):
            with self.assertLogs("production.services.ledger", level="ERROR"):
                roll = Roll.objects.create(job_order=self.jo, extruding_qty=Decimal("3"))
        self.assertTrue(Roll.objects.filter(pk=roll.pk).exists())
        self.jo.refresh_from_db()
        self.assertEqual(self.jo.produced_quantity, Decimal("0"))

    def test_job_order_waste(self):
        Roll.objects.create(
            job_order=self.jo, extruding_qty=Decimal("10"), cutting_qty=Decimal("8"), status=Roll.RECEIVED
        )
        result = ledger.job_order_waste(self.jo)
        self.assertEqual(result["waste"], Decimal("2"))
        self.assertEqual(result["waste_percentage"], Decimal("20.00"))


@pytest.mark.django_db
@pytest.mark.parametrize(
    "cut, expected",
    [
        (None, JobOrder.NOT_STARTED),
        (Decimal("50"), JobOrder.IN_PROGRESS),
        (Decimal("100"), JobOrder.COMPLETED),
        (Decimal("120"), JobOrder.OVERPRODUCED),
    ],
)
def test_production_status_for_quantity_100(cut, expected):
    jo = setup_job_order(quantity=100)
    if cut is not None:
        Roll.objects.create(job_order=jo, extruding_qty=cut, cutting_qty=cut, status=Roll.RECEIVED)
    jo.refresh_from_db()
    assert jo.production_status == expected


@pytest.mark.django_db
def test_produced_equals_sum_of_received_cutting():
    jo = setup_job_order(quantity=100)
    for cut in ("10", "20.5", "7.25"):
        Roll.objects.create(
            job_order=jo, extruding_qty=Decimal("30"), cutting_qty=Decimal(cut), status=Roll.RECEIVED
        )
    Roll.objects.create(job_order=jo, extruding_qty=Decimal("30"), cutting_qty=Decimal("29"))
    jo.refresh_from_db()
    assert jo.produced_quantity == Decimal("37.75")
    assert jo.waste_quantity == Decimal("120") - Decimal("37.75")


@pytest.mark.django_db
def test_waste_never_negative_when_cut_exceeds_extruded():
    jo = setup_job_order(quantity=100)
    Roll.objects.create(
        job_order=jo, extruding_qty=Decimal("10"), cutting_qty=Decimal("15"), status=Roll.RECEIVED
    )
    jo.refresh_from_db()
    assert jo.waste_quantity == Decimal("0")


@pytest.mark.django_db
def test_recompute_all_repairs_drifted_aggregates():
    jo = setup_job_order(quantity=10)
    Roll.objects.create(job_order=jo, extruding_qty=Decimal("10"), cutting_qty=Decimal("9"), status=Roll.RECEIVED)
    JobOrder.objects.filter(pk=jo.pk).update(produced_quantity=Decimal("0"), production_status=JobOrder.NOT_STARTED)

    assert ledger.recompute_all([jo.pk]) == 1
    jo.refresh_from_db()
    assert jo.produced_quantity == Decimal("9")
    assert jo.production_status == JobOrder.IN_PROGRESS


@pytest.mark.django_db
def test_fully_scrapped_received_roll_is_waste():
    jo = setup_job_order(quantity=10)
    Roll.objects.create(job_order=jo, extruding_qty=Decimal("10"))
    Roll.objects.create(
        job_order=jo, extruding_qty=Decimal("6"), cutting_qty=Decimal("0"), status=Roll.RECEIVED
    )
    jo.refresh_from_db()
    assert jo.produced_quantity == Decimal("0")
    assert jo.waste_quantity == Decimal("16")
    assert jo.production_status == JobOrder.NOT_STARTED
