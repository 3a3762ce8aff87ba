from collections import OrderedDict
from decimal import Decimal

from django.db.models import Q
from django.utils import timezone

from production.models import Roll
from production.services.ledger import ZERO, _q, roll_waste, waste_percentage


def waste_by_timeframe(start, end):
    """Per-day waste for rolls created between ``start`` and ``end`` (inclusive dates)."""
    rolls = (
        Roll.objects.filter(created_date__date__gte=start, created_date__date__lte=end)
        .only("created_date", "extruding_qty", "cutting_qty")
        .order_by("created_date")
    )
    days = OrderedDict()
    for roll in rolls:
        day = timezone.localtime(roll.created_date).date()
        row = days.setdefault(day, {"waste": ZERO, "total_extruded": ZERO})
        if roll.extruding_qty is None:
            continue
        row["total_extruded"] += _q(roll.extruding_qty)
        row["waste"] += roll_waste(roll)

    return [
        {
            "date": day.isoformat(),
            "waste": row["waste"],
            "total_extruded": row["total_extruded"],
            "waste_percentage": waste_percentage(row["waste"], row["total_extruded"]),
        }
        for day, row in days.items()
    ]


def _stage_waste(pairs):
    total = ZERO
    waste = ZERO
    for before, after in pairs:
        total += _q(before)
        waste += max(ZERO, _q(before) - _q(after))
    return {
        "waste": waste,
        "total_extruded": total,
        "waste_percentage": waste_percentage(waste, total),
    }


def waste_by_user(user):
    """Waste attributed to ``user`` per production stage.

    Extrusion loss is extruded minus printed, printing loss is printed minus
    cut. Cutting is the last stage and has nothing downstream to compare
    against, so it always reports zero.
    """
    rolls = list(
        Roll.objects.filter(Q(extruded_by=user) | Q(printed_by=user) | Q(cut_by=user))
    )
    extrusion = _stage_waste(
        (r.extruding_qty, r.printing_qty)
        for r in rolls
        if r.extruded_by_id == user.pk
        and r.extruding_qty is not None
        and r.printing_qty is not None
    )
    printing = _stage_waste(
        (r.printing_qty, r.cutting_qty)
        for r in rolls
        if r.printed_by_id == user.pk
        and r.printing_qty is not None
        and r.cutting_qty is not None
    )
    cutting = {
        "waste": ZERO,
        "total_extruded": ZERO,
        "waste_percentage": Decimal("0.00"),
    }
    return [
        {"stage": "Extrusion", **extrusion},
        {"stage": "Printing", **printing},
        {"stage": "Cutting", **cutting},
    ]
