from decimal import Decimal
from io import StringIO

import pytest
from django.core.management import call_command

from inventory.models import Material, Mix
from inventory.services.ledger import audit_balance
from maintenance.models import MaintenanceRequest
from production.models import Customer, JobOrder, Order, Roll


@pytest.mark.django_db
def test_recompute_job_orders_command():
    customer = Customer.objects.create(name="Acme")
    order = Order.objects.create(customer=customer)
    jo = JobOrder.objects.create(order=order, customer=customer, quantity=20)
    Roll.objects.create(job_order=jo, extruding_qty=Decimal("20"), cutting_qty=Decimal("20"), status=Roll.RECEIVED)
    JobOrder.objects.filter(pk=jo.pk).update(
        produced_quantity=0, production_status=JobOrder.NOT_STARTED, status=JobOrder.STATUS_PENDING
    )

    out = StringIO()
    call_command("recompute_job_orders", "--with-status", stdout=out)
    assert "Recomputed 1 job order(s)." in out.getvalue()
    jo.refresh_from_db()
    assert jo.production_status == JobOrder.COMPLETED
    assert jo.status == JobOrder.STATUS_COMPLETED


@pytest.mark.django_db
def test_seed_demo_builds_consistent_data():
    call_command("seed_demo", stdout=StringIO())
    assert JobOrder.objects.count() == 2
    assert Roll.objects.count() == 8
    assert Mix.objects.count() == 1
    assert MaintenanceRequest.objects.count() == 1
    for material in Material.objects.all():
        assert audit_balance(material)["ok"]
    for jo in JobOrder.objects.all():
        # two received rolls of 27.5 kg each
        assert jo.produced_quantity == Decimal("55")
        assert jo.production_status == JobOrder.IN_PROGRESS
