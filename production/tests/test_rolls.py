from decimal import Decimal

import pytest

from production.models import Customer, Order, JobOrder, Roll


def setup_job_orders():
    customer = Customer.objects.create(name="Acme")
    order = Order.objects.create(customer=customer)
    first = JobOrder.objects.create(order=order, customer=customer, quantity=50)
    second = JobOrder.objects.create(order=order, customer=customer, quantity=50)
    return first, second


@pytest.mark.django_db
def test_roll_numbers_are_per_job_order():
    first, second = setup_job_orders()
    a = Roll.objects.create(job_order=first)
    b = Roll.objects.create(job_order=first)
    c = Roll.objects.create(job_order=second)
    assert (a.roll_number, b.roll_number, c.roll_number) == (1, 2, 1)


@pytest.mark.django_db
def test_roll_number_is_not_reused_after_a_gap():
    first, _ = setup_job_orders()
    rolls = [Roll.objects.create(job_order=first) for _ in range(3)]
    rolls[1].delete()
    new = Roll.objects.create(job_order=first)
    assert new.roll_number == 4


@pytest.mark.django_db
def test_highest_roll_number_is_freed_when_that_roll_is_deleted():
    first, _ = setup_job_orders()
    rolls = [Roll.objects.create(job_order=first) for _ in range(3)]
    rolls[-1].delete()
    assert Roll.objects.create(job_order=first).roll_number == 3


@pytest.mark.django_db
def test_roll_identification_is_generated_and_unique():
    first, _ = setup_job_orders()
    a = Roll.objects.create(job_order=first, extruding_qty=Decimal("1"))
    b = Roll.objects.create(job_order=first, extruding_qty=Decimal("1"))
    assert a.roll_identification.startswith("ROLL-")
    assert a.roll_identification != b.roll_identification


@pytest.mark.django_db
def test_new_roll_defaults_to_for_printing():
    first, _ = setup_job_orders()
    roll = Roll.objects.create(job_order=first)
    assert roll.status == Roll.FOR_PRINTING
