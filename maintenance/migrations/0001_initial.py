import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

PART_TYPE_CHOICES = [
    (p, p)
    for p in [
        "Shaft", "Screw", "Roller", "Gear", "Motor", "Servo", "Blade", "Contactor", "Filter",
        "Heater", "Sealer", "Valve", "Hose", "Rubber", "Die", "Bearing", "Other",
    ]
]
ACTION_TYPE_CHOICES = [("Workshop", "Workshop"), ("Replacement", "Replacement"), ("Adjustments", "Adjustments")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("production", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="MaintenanceRequest",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("request_date", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "status",
                    models.CharField(
                        choices=[("New", "New"), ("Under Maintain", "Under Maintain"), ("Fixed", "Fixed")],
                        default="New",
                        max_length=20,
                    ),
                ),
                ("description", models.TextField()),
                ("notes", models.TextField(blank=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="maintenance_requests",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "machine",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="maintenance_requests",
                        to="production.machine",
                    ),
                ),
            ],
            options={"ordering": ["-request_date", "-id"]},
        ),
        migrations.CreateModel(
            name="MaintenanceAction",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("action_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("part_type", models.CharField(choices=PART_TYPE_CHOICES, max_length=20)),
                ("action_type", models.CharField(choices=ACTION_TYPE_CHOICES, max_length=20)),
                ("description", models.TextField(blank=True)),
                ("notes", models.TextField(blank=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="maintenance_actions",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "machine",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="maintenance_actions",
                        to="production.machine",
                    ),
                ),
                (
                    "request",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="actions",
                        to="maintenance.maintenancerequest",
                    ),
                ),
            ],
            options={"ordering": ["-action_date", "-id"]},
        ),
    ]
