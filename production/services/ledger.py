"""Production ledger.

Job order aggregates (``produced_quantity``, ``waste_quantity`` and
``production_status``) are rebuilt from the full set of rolls every time a
roll changes. The extrusion driven ``status`` follows its own rule and is
only touched when extruded quantities move.
"""
import logging
from decimal import Decimal, ROUND_HALF_UP

from django.db import DatabaseError, transaction
from django.db.models import Sum

from production.models import JobOrder, Roll

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _q(x):
    return Decimal(x or 0).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)


# --- pure derivations ---------------------------------------------------------


def produced_from_rolls(rolls):
    """Sum of cutting quantities over received rolls; missing values count as 0."""
    return _q(
        sum(
            (_q(r.cutting_qty) for r in rolls if r.status == Roll.RECEIVED),
            ZERO,
        )
    )


def extruded_from_rolls(rolls):
    return _q(sum((_q(r.extruding_qty) for r in rolls), ZERO))


def any_received(rolls):
    return any(r.status == Roll.RECEIVED for r in rolls)


def derive_waste(total_extruded, produced, received=True):
    # no roll has been received yet, so nothing counts as wasted
    if not received:
        return ZERO
    return max(ZERO, _q(total_extruded) - _q(produced))


def derive_production_status(produced, quantity):
    produced = _q(produced)
    quantity = _q(quantity)
    if produced == ZERO:
        return JobOrder.NOT_STARTED
    if produced < quantity:
        return JobOrder.IN_PROGRESS
    if produced == quantity:
        return JobOrder.COMPLETED
    return JobOrder.OVERPRODUCED


def derive_extrusion_status(total_extruded, quantity, current):
    total_extruded = _q(total_extruded)
    if total_extruded >= _q(quantity):
        return JobOrder.STATUS_COMPLETED
    if total_extruded > ZERO:
        return JobOrder.STATUS_IN_PROGRESS
    return current


def roll_waste(roll):
    if roll.extruding_qty is None or roll.cutting_qty is None:
        return ZERO
    return max(ZERO, _q(roll.extruding_qty) - _q(roll.cutting_qty))


def waste_percentage(waste, total_extruded):
    total_extruded = _q(total_extruded)
    if total_extruded == ZERO:
        return Decimal("0.00")
    return (_q(waste) / total_extruded * 100).quantize(
        Decimal("0.01"), rounding=ROUND_HALF_UP
    )


# --- persistence --------------------------------------------------------------


@transaction.atomic
def recompute(job_order_id):
    """Rebuild the derived aggregates of one job order.

    Returns the refreshed job order, or ``None`` when it does not exist.
    """
    job_order = JobOrder.objects.select_for_update().filter(pk=job_order_id).first()
    if job_order is None:
        logger.warning("Skipping recompute: job order %s does not exist", job_order_id)
        return None

    rolls = list(
        Roll.objects.filter(job_order_id=job_order_id).only(
            "status", "extruding_qty", "cutting_qty"
        )
    )
    produced = produced_from_rolls(rolls)
    waste = derive_waste(extruded_from_rolls(rolls), produced, any_received(rolls))
    production_status = derive_production_status(produced, job_order.quantity)

    JobOrder.objects.filter(pk=job_order_id).update(
        produced_quantity=produced,
        waste_quantity=waste,
        production_status=production_status,
    )
    job_order.produced_quantity = produced
    job_order.waste_quantity = waste
    job_order.production_status = production_status
    logger.debug(
        "Job order %s recomputed: produced=%s waste=%s status=%s",
        job_order_id, produced, waste, production_status,
    )
    return job_order


@transaction.atomic
def apply_extrusion_status(job_order_id):
    job_order = JobOrder.objects.select_for_update().filter(pk=job_order_id).first()
    if job_order is None:
        logger.warning(
            "Skipping extrusion status: job order %s does not exist", job_order_id
        )
        return None

    total = Roll.objects.filter(job_order_id=job_order_id).aggregate(
        t=Sum("extruding_qty")
    )["t"]
    new_status = derive_extrusion_status(total, job_order.quantity, job_order.status)
    if new_status != job_order.status:
        JobOrder.objects.filter(pk=job_order_id).update(status=new_status)
        job_order.status = new_status
    return job_order


def job_order_waste(job_order):
    rolls = list(job_order.rolls.only("status", "extruding_qty", "cutting_qty"))
    total_extruded = extruded_from_rolls(rolls)
    waste = derive_waste(total_extruded, produced_from_rolls(rolls), any_received(rolls))
    return {
        "waste": waste,
        "waste_percentage": waste_percentage(waste, total_extruded),
    }


# --- roll triggers ------------------------------------------------------------


def _guarded(func, job_order_id):
    # the roll write must survive a failed ledger update
    try:
        with transaction.atomic():
            return func(job_order_id)
    except DatabaseError:
        logger.exception("Ledger update failed for job order %s", job_order_id)
        return None


def roll_created(roll):
    if roll.extruding_qty is None and roll.status != Roll.RECEIVED:
        return
    _guarded(recompute, roll.job_order_id)
    if _q(roll.extruding_qty) > ZERO:
        _guarded(apply_extrusion_status, roll.job_order_id)


def _changed(old, new):
    if (old is None) != (new is None):
        return True
    return _q(old) != _q(new)


def roll_updated(roll, previous_status, previous_extruding_qty, previous_cutting_qty=None):
    became_received = (
        roll.status == Roll.RECEIVED and previous_status != Roll.RECEIVED
    )
    extruding_changed = _changed(previous_extruding_qty, roll.extruding_qty)
    # received rolls already count towards produced_quantity
    received_touched = previous_status == Roll.RECEIVED and (
        roll.status != Roll.RECEIVED
        or _changed(previous_cutting_qty, roll.cutting_qty)
    )
    if became_received or extruding_changed or received_touched:
        _guarded(recompute, roll.job_order_id)
    if extruding_changed:
        _guarded(apply_extrusion_status, roll.job_order_id)


def roll_deleted(job_order_id):
    _guarded(recompute, job_order_id)


def recompute_all(job_order_ids=None):
    """Rebuild aggregates for many job orders; returns how many were updated."""
    qs = JobOrder.objects.all()
    if job_order_ids:
        qs = qs.filter(pk__in=job_order_ids)
    count = 0
    for pk in qs.values_list("pk", flat=True):
        if recompute(pk) is not None:
            count += 1
    return count
