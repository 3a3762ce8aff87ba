"""Material ledger.

Every movement of a material balance goes through this module: inputs add
stock, mixes consume it. Balances are changed with ``F()`` updates while the
material rows are locked so concurrent requests cannot interleave a
check-then-write.
"""
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from functools import partial

from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import F, Sum
from django.utils import timezone

from inventory.models import Material, MaterialInput, Mix, MixItem
from production.exceptions import InsufficientInventoryError, NotFoundError, PersistenceError
from production.models import generate_token

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _q(x):
    return Decimal(x).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)


def _quantity(value, label="Quantity"):
    try:
        qty = _q(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{label} must be a number.")
    if qty <= ZERO:
        raise ValidationError(f"{label} must be greater than zero.")
    return qty


def _pk(value):
    return value.pk if isinstance(value, Material) else int(value)


@transaction.atomic
def create_material_input(material_id, quantity_kg, input_date=None):
    qty = _quantity(quantity_kg)
    material = Material.objects.select_for_update().filter(pk=material_id).first()
    if material is None:
        raise NotFoundError(f"Material {material_id} not found")

    try:
        with transaction.atomic():
            material_input = MaterialInput.objects.create(
                material=material,
                quantity_kg=qty,
                input_identifier=generate_token("INP"),
                input_date=input_date or timezone.now(),
            )
    except IntegrityError as exc:
        raise PersistenceError(f"Could not record input for {material.identifier}") from exc
    Material.objects.filter(pk=material.pk).update(
        current_balance_kg=F("current_balance_kg") + qty,
        updated_at=timezone.now(),
    )
    logger.info("Input %s: +%s kg %s", material_input.input_identifier, qty, material.identifier)
    return material_input


@transaction.atomic
def delete_material_input(input_id):
    material_input = MaterialInput.objects.select_for_update().filter(pk=input_id).first()
    if material_input is None:
        raise NotFoundError(f"Material input {input_id} not found")

    material = Material.objects.select_for_update().get(pk=material_input.material_id)
    qty = _q(material_input.quantity_kg)
    if _q(material.current_balance_kg) < qty:
        raise ValidationError(
            f"Cannot remove input {material_input.input_identifier}: only "
            f"{_q(material.current_balance_kg)} kg of {material.name} is left."
        )
    deleted, _ = MaterialInput.objects.filter(pk=material_input.pk).delete()
    if not deleted:
        # removed by another request while we waited for the material lock
        raise NotFoundError(f"Material input {input_id} not found")
    Material.objects.filter(pk=material.pk).update(
        current_balance_kg=F("current_balance_kg") - qty,
        updated_at=timezone.now(),
    )
    logger.info("Input %s removed: -%s kg %s", material_input.input_identifier, qty, material.identifier)


@transaction.atomic
def create_mix(items, created_by=None, status=Mix.PENDING, notes="", mix_date=None,
               orders=(), machines=()):
    """Create a mix and consume its materials.

    ``items`` is an iterable of mappings with ``material`` (pk or instance),
    ``quantity_kg`` and optional ``material_type``/``notes``. Items naming the
    same material are checked against its balance as one total. Nothing is
    written unless every material can cover its total.
    """
    items = list(items or [])
    if not items:
        raise ValidationError("A mix needs at least one item.")

    required = {}
    rows = []
    for item in items:
        material_id = _pk(item["material"])
        qty = _quantity(item["quantity_kg"])
        required[material_id] = required.get(material_id, ZERO) + qty
        rows.append((material_id, qty, item.get("material_type") or "Material", item.get("notes") or ""))

    materials = {
        m.pk: m
        for m in Material.objects.select_for_update().filter(pk__in=required).order_by("pk")
    }
    missing = sorted(set(required) - set(materials))
    if missing:
        raise NotFoundError(f"Material {missing[0]} not found")

    for material_id in sorted(required):
        material = materials[material_id]
        available = _q(material.current_balance_kg)
        if available < required[material_id]:
            raise InsufficientInventoryError(material.name, available, required[material_id])

    mix = Mix.objects.create(
        batch_number=generate_token("MIX"),
        created_by=created_by,
        status=status,
        notes=notes,
        mix_date=mix_date or timezone.now(),
    )

    now = timezone.now()
    for material_id in sorted(required):
        qty = required[material_id]
        updated = Material.objects.filter(
            pk=material_id, current_balance_kg__gte=qty
        ).update(current_balance_kg=F("current_balance_kg") - qty, updated_at=now)
        if updated != 1:
            # another writer got there first; the atomic block rolls everything back
            fresh = Material.objects.get(pk=material_id)
            raise InsufficientInventoryError(fresh.name, _q(fresh.current_balance_kg), qty)

    MixItem.objects.bulk_create(
        [
            MixItem(mix=mix, material_id=material_id, quantity_kg=qty, material_type=mtype, notes=item_notes)
            for material_id, qty, mtype, item_notes in rows
        ]
    )
    if orders:
        mix.orders.set(orders)
    if machines:
        mix.machines.set(machines)

    logger.info(
        "Mix %s created consuming %s",
        mix.batch_number,
        ", ".join(f"{materials[pk].identifier}={qty}" for pk, qty in sorted(required.items())),
    )
    transaction.on_commit(partial(_queue_low_stock_alert, sorted(required)))
    return mix


def _queue_low_stock_alert(material_ids):
    from inventory.tasks import send_low_stock_alert

    send_low_stock_alert.delay(material_ids)


@transaction.atomic
def delete_mix(mix_id):
    mix = Mix.objects.select_for_update().filter(pk=mix_id).first()
    if mix is None:
        raise NotFoundError(f"Mix {mix_id} not found")

    returned = {}
    for material_id, qty in mix.items.values_list("material_id", "quantity_kg"):
        returned[material_id] = returned.get(material_id, ZERO) + _q(qty)

    list(Material.objects.select_for_update().filter(pk__in=returned).order_by("pk"))
    now = timezone.now()
    for material_id in sorted(returned):
        Material.objects.filter(pk=material_id).update(
            current_balance_kg=F("current_balance_kg") + returned[material_id],
            updated_at=now,
        )
    batch_number = mix.batch_number
    mix.delete()
    logger.info("Mix %s deleted; stock returned to %d material(s)", batch_number, len(returned))


@transaction.atomic
def delete_material(material_id):
    """Delete a material unless inputs or mix items still reference it.

    Returns ``False`` when the material is referenced.
    """
    material = Material.objects.select_for_update().filter(pk=material_id).first()
    if material is None:
        raise NotFoundError(f"Material {material_id} not found")
    if material.inputs.exists() or material.mix_items.exists():
        return False
    material.delete()
    return True


def expected_balance(material):
    inputs = material.inputs.aggregate(t=Sum("quantity_kg"))["t"] or ZERO
    consumed = material.mix_items.aggregate(t=Sum("quantity_kg"))["t"] or ZERO
    return _q(material.starting_balance_kg) + _q(inputs) - _q(consumed)


def audit_balance(material):
    expected = expected_balance(material)
    actual = _q(material.current_balance_kg)
    return {
        "material": material.identifier,
        "expected": expected,
        "actual": actual,
        "ok": expected == actual,
    }
