from django.conf import settings
from django.db import models
from django.utils import timezone

from production.models import Machine

PART_TYPES = [
    "Shaft",
    "Screw",
    "Roller",
    "Gear",
    "Motor",
    "Servo",
    "Blade",
    "Contactor",
    "Filter",
    "Heater",
    "Sealer",
    "Valve",
    "Hose",
    "Rubber",
    "Die",
    "Bearing",
    "Other",
]
ACTION_TYPES = ["Workshop", "Replacement", "Adjustments"]


class MaintenanceRequest(models.Model):
    NEW = "New"
    UNDER_MAINTAIN = "Under Maintain"
    FIXED = "Fixed"
    STATUS_CHOICES = [
        (NEW, "New"),
        (UNDER_MAINTAIN, "Under Maintain"),
        (FIXED, "Fixed"),
    ]

    machine = models.ForeignKey(Machine, on_delete=models.PROTECT, related_name="maintenance_requests")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="maintenance_requests",
    )
    request_date = models.DateTimeField(default=timezone.now)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=NEW)
    description = models.TextField()
    notes = models.TextField(blank=True)

    class Meta:
        ordering = ["-request_date", "-id"]

    def __str__(self):
        return f"MR-{self.pk} {self.machine.code} ({self.status})"


class MaintenanceAction(models.Model):
    request = models.ForeignKey(MaintenanceRequest, on_delete=models.CASCADE, related_name="actions")
    machine = models.ForeignKey(Machine, on_delete=models.PROTECT, related_name="maintenance_actions")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True,
        related_name="maintenance_actions",
    )
    action_date = models.DateTimeField(default=timezone.now)
    part_type = models.CharField(max_length=20, choices=[(p, p) for p in PART_TYPES])
    action_type = models.CharField(max_length=20, choices=[(a, a) for a in ACTION_TYPES])
    description = models.TextField(blank=True)
    notes = models.TextField(blank=True)

    class Meta:
        ordering = ["-action_date", "-id"]

    def __str__(self):
        return f"{self.action_type} {self.part_type} on {self.machine.code}"
