# models.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from production.models import fields_except, generate_token, quantity_field

MATERIAL_TYPES = [
    "HDPE",
    "LDPE",
    "LLDPE",
    "Regrind",
    "Filler",
    "Color",
    "D2w",
    "Material",
]
MATERIAL_TYPE_CHOICES = [(t, t) for t in MATERIAL_TYPES]


def generate_material_identifier(name):
    """``MAT-<time token>-<first two letters of the name>``."""
    millis = str(int(timezone.now().timestamp() * 1000))
    prefix = "".join(ch for ch in (name or "") if ch.isalnum())[:2].upper().ljust(2, "X")
    return f"MAT-{millis[-4:]}{uuid.uuid4().hex[:4].upper()}-{prefix}"


class Material(models.Model):
    """Raw material with a running balance.

    ``current_balance_kg`` is only moved by :mod:`inventory.services.ledger`;
    it always equals the starting balance plus inputs minus mix consumption.
    """

    identifier = models.CharField(max_length=40, unique=True, editable=False)
    name = models.CharField(max_length=200)
    starting_balance_kg = quantity_field(default=Decimal("0"))
    current_balance_kg = quantity_field(default=Decimal("0"))
    low_stock_threshold_kg = quantity_field(default=Decimal("0"))
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.identifier})"

    def save(self, *args, **kwargs):
        if self._state.adding:
            if not self.identifier:
                self.identifier = generate_material_identifier(self.name)
            self.current_balance_kg = self.starting_balance_kg
        elif kwargs.get("update_fields") is None:
            # the balance loaded with this row may already be stale
            kwargs["update_fields"] = fields_except(self, ("current_balance_kg",))
        super().save(*args, **kwargs)

    @property
    def is_low(self):
        return (
            self.low_stock_threshold_kg > 0
            and self.current_balance_kg < self.low_stock_threshold_kg
        )


class MaterialInput(models.Model):
    material = models.ForeignKey(Material, on_delete=models.PROTECT, related_name="inputs")
    quantity_kg = quantity_field()
    input_identifier = models.CharField(max_length=40, unique=True, editable=False)
    input_date = models.DateTimeField(default=timezone.now)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-input_date", "-id"]

    def __str__(self):
        return f"{self.input_identifier}: {self.quantity_kg} kg {self.material.name}"


class Mix(models.Model):
    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (IN_PROGRESS, "In Progress"),
        (COMPLETED, "Completed"),
    ]

    batch_number = models.CharField(max_length=40, unique=True, editable=False)
    mix_date = models.DateTimeField(default=timezone.now)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="mixes",
    )
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    notes = models.TextField(blank=True)
    orders = models.ManyToManyField("production.Order", blank=True, related_name="mixes")
    machines = models.ManyToManyField("production.Machine", blank=True, related_name="mixes")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-mix_date", "-id"]
        verbose_name_plural = "mixes"

    def __str__(self):
        return self.batch_number

    def save(self, *args, **kwargs):
        if not self.batch_number:
            self.batch_number = generate_token("MIX")
        super().save(*args, **kwargs)

    @property
    def total_quantity_kg(self):
        return sum((item.quantity_kg for item in self.items.all()), Decimal("0"))


class MixItem(models.Model):
    mix = models.ForeignKey(Mix, on_delete=models.CASCADE, related_name="items")
    material = models.ForeignKey(Material, on_delete=models.PROTECT, related_name="mix_items")
    material_type = models.CharField(max_length=20, choices=MATERIAL_TYPE_CHOICES, default="Material")
    quantity_kg = quantity_field()
    notes = models.TextField(blank=True)

    class Meta:
        ordering = ["mix", "id"]

    def __str__(self):
        return f"{self.mix.batch_number}: {self.quantity_kg} kg {self.material.name}"
