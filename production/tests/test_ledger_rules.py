from decimal import Decimal

from production.models import JobOrder, Roll
from production.services.ledger import (
    derive_extrusion_status,
    derive_production_status,
    derive_waste,
    extruded_from_rolls,
    produced_from_rolls,
    roll_waste,
    waste_percentage,
)


def make_roll(status=Roll.FOR_PRINTING, extruding=None, cutting=None):
    return Roll(status=status, extruding_qty=extruding, cutting_qty=cutting)


def test_produced_counts_only_received_rolls():
    rolls = [
        make_roll(Roll.RECEIVED, Decimal("10"), Decimal("8")),
        make_roll(Roll.RECEIVED, Decimal("10"), None),
        make_roll(Roll.FOR_CUTTING, Decimal("10"), Decimal("9")),
    ]
    assert produced_from_rolls(rolls) == Decimal("8")
    assert extruded_from_rolls(rolls) == Decimal("30")


def test_production_status_thresholds():
    assert derive_production_status(Decimal("0"), 100) == JobOrder.NOT_STARTED
    assert derive_production_status(Decimal("50"), 100) == JobOrder.IN_PROGRESS
    assert derive_production_status(Decimal("100"), 100) == JobOrder.COMPLETED
    assert derive_production_status(Decimal("120"), 100) == JobOrder.OVERPRODUCED


def test_waste_is_never_negative():
    assert derive_waste(Decimal("10"), Decimal("12")) == Decimal("0")
    assert derive_waste(Decimal("10"), Decimal("7")) == Decimal("3")


def test_waste_is_zero_before_any_roll_is_received():
    assert derive_waste(Decimal("10"), Decimal("0"), received=False) == Decimal("0")


def test_scrapped_received_roll_is_all_waste():
    assert derive_waste(Decimal("10"), Decimal("0")) == Decimal("10")


def test_extrusion_status_rule():
    assert derive_extrusion_status(Decimal("100"), 100, "pending") == JobOrder.STATUS_COMPLETED
    assert derive_extrusion_status(Decimal("40"), 100, "pending") == JobOrder.STATUS_IN_PROGRESS
    assert derive_extrusion_status(Decimal("0"), 100, "pending") == "pending"
    assert derive_extrusion_status(None, 100, "cancelled") == "cancelled"


def test_roll_waste():
    assert roll_waste(make_roll(extruding=Decimal("10"), cutting=Decimal("7.5"))) == Decimal("2.5")
    assert roll_waste(make_roll(extruding=Decimal("10"), cutting=Decimal("11"))) == Decimal("0")
    assert roll_waste(make_roll(extruding=None, cutting=Decimal("5"))) == Decimal("0")
    assert roll_waste(make_roll(extruding=Decimal("5"), cutting=None)) == Decimal("0")


def test_waste_percentage():
    assert waste_percentage(Decimal("3"), Decimal("10")) == Decimal("30.00")
    assert waste_percentage(Decimal("0"), Decimal("0")) == Decimal("0.00")
