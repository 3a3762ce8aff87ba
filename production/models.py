# models.py

import uuid
from decimal import Decimal

from django.conf import settings
from django.db import models, transaction
from django.db.models import Max
from django.utils import timezone

QTY_MAX_DIGITS = 12
QTY_DECIMAL_PLACES = 3


def generate_token(prefix):
    """Short time-based token with a random tail, e.g. ``ROLL-1718000000123-9f2c1a``."""
    millis = int(timezone.now().timestamp() * 1000)
    return f"{prefix}-{millis}-{uuid.uuid4().hex[:6]}"


def quantity_field(**kwargs):
    return models.DecimalField(
        max_digits=QTY_MAX_DIGITS, decimal_places=QTY_DECIMAL_PLACES, **kwargs
    )


def fields_except(instance, excluded):
    """Concrete field names of ``instance`` for ``save(update_fields=...)``, minus ``excluded``."""
    return [
        f.name
        for f in instance._meta.concrete_fields
        if not f.primary_key and f.name not in excluded
    ]


#
# ——————————————————————————————————————
# Customers & Orders
# ——————————————————————————————————————
#
class Customer(models.Model):
    name = models.CharField(max_length=200)
    arabic_name = models.CharField(max_length=200, blank=True)
    drawer_no = models.CharField(max_length=50, blank=True)
    phone = models.CharField(max_length=32, blank=True, help_text="Used for SMS notifications")
    email = models.EmailField(blank=True)
    address = models.TextField(blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class Order(models.Model):
    PENDING = "pending"
    FOR_PRODUCTION = "for_production"
    HOLD = "hold"
    FINISH = "finish"
    STATUS_CHOICES = [
        (PENDING, "Pending"),
        (FOR_PRODUCTION, "For production"),
        (HOLD, "Hold"),
        (FINISH, "Finish"),
    ]

    customer = models.ForeignKey(Customer, on_delete=models.PROTECT, related_name="orders")
    order_date = models.DateTimeField(default=timezone.now)
    notes = models.TextField(blank=True)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)

    class Meta:
        ordering = ["-order_date", "-id"]

    def __str__(self):
        return f"Order #{self.pk} – {self.customer}"


class JobOrder(models.Model):
    """Production target derived from an order.

    ``produced_quantity``, ``waste_quantity``, ``production_status`` and the
    extrusion ``status`` are written only by :mod:`production.services.ledger`,
    unless a caller names ``status`` in ``update_fields``.
    """

    # production_status (driven by received/cut quantity)
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    OVERPRODUCED = "Overproduced"
    PRODUCTION_STATUS_CHOICES = [
        (NOT_STARTED, "Not Started"),
        (IN_PROGRESS, "In Progress"),
        (COMPLETED, "Completed"),
        (OVERPRODUCED, "Overproduced"),
    ]

    # status (driven by extruded quantity)
    STATUS_PENDING = "pending"
    STATUS_IN_PROGRESS = "In Progress"
    STATUS_COMPLETED = "Completed"
    STATUS_CANCELLED = "cancelled"

    LEDGER_FIELDS = ("produced_quantity", "waste_quantity", "production_status", "status")

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="job_orders")
    customer = models.ForeignKey(Customer, on_delete=models.PROTECT, related_name="job_orders")
    size_details = models.CharField(max_length=200, blank=True)
    thickness = models.DecimalField(max_digits=8, decimal_places=3, null=True, blank=True)
    cylinder_inch = models.DecimalField(max_digits=8, decimal_places=3, null=True, blank=True)
    cutting_length_cm = models.DecimalField(max_digits=8, decimal_places=3, null=True, blank=True)
    raw_material = models.CharField(max_length=100, blank=True)
    master_batch = models.CharField(max_length=100, blank=True)
    is_printed = models.BooleanField(default=False)
    cutting_unit = models.CharField(max_length=50, blank=True)
    unit_weight_kg = models.DecimalField(max_digits=10, decimal_places=3, null=True, blank=True)
    packing = models.CharField(max_length=100, blank=True)
    punching = models.CharField(max_length=100, blank=True)
    cover = models.CharField(max_length=100, blank=True)
    notes = models.TextField(blank=True)
    quantity = models.PositiveIntegerField()
    produced_quantity = quantity_field(default=Decimal("0"))
    waste_quantity = quantity_field(default=Decimal("0"))
    production_status = models.CharField(
        max_length=20, choices=PRODUCTION_STATUS_CHOICES, default=NOT_STARTED
    )
    status = models.CharField(max_length=20, default=STATUS_PENDING)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-id"]

    def __str__(self):
        return f"JO-{self.pk} ({self.quantity})"

    def save(self, *args, **kwargs):
        # an existing row never writes back the ledger-owned columns it loaded
        if not self._state.adding and kwargs.get("update_fields") is None:
            kwargs["update_fields"] = fields_except(self, self.LEDGER_FIELDS)
        super().save(*args, **kwargs)


#
# ——————————————————————————————————————
# Machines
# ——————————————————————————————————————
#
class MachineOption(models.Model):
    option_details = models.CharField(max_length=200)
    section = models.CharField(max_length=20)

    class Meta:
        ordering = ["section", "option_details"]

    def __str__(self):
        return f"{self.section}: {self.option_details}"


class Machine(models.Model):
    EXTRUSION = "Extrusion"
    PRINTING = "Printing"
    CUTTING = "Cutting"
    SECTION_CHOICES = [
        (EXTRUSION, "Extrusion"),
        (PRINTING, "Printing"),
        (CUTTING, "Cutting"),
    ]

    identification = models.CharField(max_length=100, blank=True)
    section = models.CharField(max_length=20, choices=SECTION_CHOICES)
    code = models.CharField(max_length=50)
    production_date = models.DateField()
    serial_number = models.CharField(max_length=100, blank=True)
    manufacturer_code = models.CharField(max_length=100, blank=True)
    manufacturer_name = models.CharField(max_length=200, blank=True)
    options = models.ManyToManyField(MachineOption, blank=True, related_name="machines")

    class Meta:
        ordering = ["section", "code"]

    def __str__(self):
        return f"{self.code} ({self.section})"


#
# ——————————————————————————————————————
# Production rolls
# ——————————————————————————————————————
#
class Roll(models.Model):
    FOR_PRINTING = "For Printing"
    FOR_CUTTING = "For Cutting"
    FOR_RECEIVING = "For Receiving"
    RECEIVED = "Received"

    roll_identification = models.CharField(max_length=40, unique=True, editable=False)
    job_order = models.ForeignKey(JobOrder, on_delete=models.CASCADE, related_name="rolls")
    roll_number = models.PositiveIntegerField()
    extruding_qty = quantity_field(null=True, blank=True)
    printing_qty = quantity_field(null=True, blank=True)
    cutting_qty = quantity_field(null=True, blank=True)
    status = models.CharField(max_length=30, default=FOR_PRINTING)
    notes = models.TextField(blank=True)
    created_date = models.DateTimeField(default=timezone.now)
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="rolls_created",
    )
    extruded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="rolls_extruded",
    )
    printed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="rolls_printed",
    )
    cut_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="rolls_cut",
    )
    extruded_date = models.DateTimeField(null=True, blank=True)
    printed_date = models.DateTimeField(null=True, blank=True)
    cut_date = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["job_order", "roll_number"]
        unique_together = ("job_order", "roll_number")

    def __str__(self):
        return f"{self.roll_identification} (#{self.roll_number})"

    def save(self, *args, **kwargs):
        if not self.roll_identification:
            self.roll_identification = generate_token("ROLL")
        # numbers are max + 1, so gaps stay gaps; deleting the highest roll
        # frees its number for the next one
        if self._state.adding and not self.roll_number:
            with transaction.atomic():
                # serialise numbering per job order
                JobOrder.objects.select_for_update().filter(pk=self.job_order_id).first()
                last = (
                    Roll.objects.filter(job_order_id=self.job_order_id)
                    .aggregate(m=Max("roll_number"))["m"]
                    or 0
                )
                self.roll_number = last + 1
                return super().save(*args, **kwargs)
        return super().save(*args, **kwargs)


class ReceivingOrder(models.Model):
    received_date = models.DateTimeField(default=timezone.now)
    job_order = models.ForeignKey(JobOrder, on_delete=models.PROTECT, related_name="receiving_orders")
    roll = models.ForeignKey(
        Roll, on_delete=models.SET_NULL, null=True, blank=True, related_name="receiving_orders"
    )
    received_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="receiving_orders",
    )
    received_quantity = quantity_field()
    notes = models.TextField(blank=True)
    status = models.CharField(max_length=20, default="received")
    created_date = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-received_date", "-id"]

    def __str__(self):
        return f"Receipt {self.pk} – JO-{self.job_order_id}"


#
# ——————————————————————————————————————
# Notifications
# ——————————————————————————————————————
#
class SmsMessage(models.Model):
    QUEUED = "queued"
    SENT = "sent"
    FAILED = "failed"
    STATUS_CHOICES = [
        (QUEUED, "Queued"),
        (SENT, "Sent"),
        (FAILED, "Failed"),
    ]

    MANUAL = "manual"
    ORDER_STATUS = "order_status"
    LOW_STOCK = "low_stock"
    CATEGORY_CHOICES = [
        (MANUAL, "Manual"),
        (ORDER_STATUS, "Order status"),
        (LOW_STOCK, "Low stock"),
    ]

    recipient = models.CharField(max_length=32)
    body = models.TextField()
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES, default=MANUAL)
    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=QUEUED)
    error = models.TextField(blank=True)
    provider_message_id = models.CharField(max_length=100, blank=True)
    customer = models.ForeignKey(
        Customer, on_delete=models.SET_NULL, null=True, blank=True, related_name="sms_messages"
    )
    order = models.ForeignKey(
        Order, on_delete=models.SET_NULL, null=True, blank=True, related_name="sms_messages"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    sent_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"SMS to {self.recipient} ({self.status})"
