from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("arabic_name", models.CharField(blank=True, max_length=200)),
                ("drawer_no", models.CharField(blank=True, max_length=50)),
                ("phone", models.CharField(blank=True, help_text="Used for SMS notifications", max_length=32)),
                ("email", models.EmailField(blank=True, max_length=254)),
                ("address", models.TextField(blank=True)),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="MachineOption",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("option_details", models.CharField(max_length=200)),
                ("section", models.CharField(max_length=20)),
            ],
            options={"ordering": ["section", "option_details"]},
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("order_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("notes", models.TextField(blank=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("for_production", "For production"),
                            ("hold", "Hold"),
                            ("finish", "Finish"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="production.customer",
                    ),
                ),
            ],
            options={"ordering": ["-order_date", "-id"]},
        ),
        migrations.CreateModel(
            name="Machine",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("identification", models.CharField(blank=True, max_length=100)),
                (
                    "section",
                    models.CharField(
                        choices=[("Extrusion", "Extrusion"), ("Printing", "Printing"), ("Cutting", "Cutting")],
                        max_length=20,
                    ),
                ),
                ("code", models.CharField(max_length=50)),
                ("production_date", models.DateField()),
                ("serial_number", models.CharField(blank=True, max_length=100)),
                ("manufacturer_code", models.CharField(blank=True, max_length=100)),
                ("manufacturer_name", models.CharField(blank=True, max_length=200)),
                (
                    "options",
                    models.ManyToManyField(blank=True, related_name="machines", to="production.machineoption"),
                ),
            ],
            options={"ordering": ["section", "code"]},
        ),
        migrations.CreateModel(
            name="JobOrder",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("size_details", models.CharField(blank=True, max_length=200)),
                ("thickness", models.DecimalField(blank=True, decimal_places=3, max_digits=8, null=True)),
                ("cylinder_inch", models.DecimalField(blank=True, decimal_places=3, max_digits=8, null=True)),
                ("cutting_length_cm", models.DecimalField(blank=True, decimal_places=3, max_digits=8, null=True)),
                ("raw_material", models.CharField(blank=True, max_length=100)),
                ("master_batch", models.CharField(blank=True, max_length=100)),
                ("is_printed", models.BooleanField(default=False)),
                ("cutting_unit", models.CharField(blank=True, max_length=50)),
                ("unit_weight_kg", models.DecimalField(blank=True, decimal_places=3, max_digits=10, null=True)),
                ("packing", models.CharField(blank=True, max_length=100)),
                ("punching", models.CharField(blank=True, max_length=100)),
                ("cover", models.CharField(blank=True, max_length=100)),
                ("notes", models.TextField(blank=True)),
                ("quantity", models.PositiveIntegerField()),
                ("produced_quantity", models.DecimalField(decimal_places=3, default=Decimal("0"), max_digits=12)),
                ("waste_quantity", models.DecimalField(decimal_places=3, default=Decimal("0"), max_digits=12)),
                (
                    "production_status",
                    models.CharField(
                        choices=[
                            ("Not Started", "Not Started"),
                            ("In Progress", "In Progress"),
                            ("Completed", "Completed"),
                            ("Overproduced", "Overproduced"),
                        ],
                        default="Not Started",
                        max_length=20,
                    ),
                ),
                ("status", models.CharField(default="pending", max_length=20)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="job_orders",
                        to="production.customer",
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="job_orders",
                        to="production.order",
                    ),
                ),
            ],
            options={"ordering": ["-id"]},
        ),
        migrations.CreateModel(
            name="Roll",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("roll_identification", models.CharField(editable=False, max_length=40, unique=True)),
                ("roll_number", models.PositiveIntegerField()),
                ("extruding_qty", models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True)),
                ("printing_qty", models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True)),
                ("cutting_qty", models.DecimalField(blank=True, decimal_places=3, max_digits=12, null=True)),
                ("status", models.CharField(default="For Printing", max_length=30)),
                ("notes", models.TextField(blank=True)),
                ("created_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("extruded_date", models.DateTimeField(blank=True, null=True)),
                ("printed_date", models.DateTimeField(blank=True, null=True)),
                ("cut_date", models.DateTimeField(blank=True, null=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="rolls_created",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "extruded_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="rolls_extruded",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "printed_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="rolls_printed",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "cut_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="rolls_cut",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "job_order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="rolls",
                        to="production.joborder",
                    ),
                ),
            ],
            options={
                "ordering": ["job_order", "roll_number"],
                "unique_together": {("job_order", "roll_number")},
            },
        ),
        migrations.CreateModel(
            name="ReceivingOrder",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("received_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("received_quantity", models.DecimalField(decimal_places=3, max_digits=12)),
                ("notes", models.TextField(blank=True)),
                ("status", models.CharField(default="received", max_length=20)),
                ("created_date", models.DateTimeField(auto_now_add=True)),
                (
                    "job_order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="receiving_orders",
                        to="production.joborder",
                    ),
                ),
                (
                    "received_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="receiving_orders",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "roll",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="receiving_orders",
                        to="production.roll",
                    ),
                ),
            ],
            options={"ordering": ["-received_date", "-id"]},
        ),
        migrations.CreateModel(
            name="SmsMessage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("recipient", models.CharField(max_length=32)),
                ("body", models.TextField()),
                (
                    "category",
                    models.CharField(
                        choices=[("manual", "Manual"), ("order_status", "Order status"), ("low_stock", "Low stock")],
                        default="manual",
                        max_length=20,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("queued", "Queued"), ("sent", "Sent"), ("failed", "Failed")],
                        default="queued",
                        max_length=10,
                    ),
                ),
                ("error", models.TextField(blank=True)),
                ("provider_message_id", models.CharField(blank=True, max_length=100)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("sent_at", models.DateTimeField(blank=True, null=True)),
                (
                    "customer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="sms_messages",
                        to="production.customer",
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="sms_messages",
                        to="production.order",
                    ),
                ),
            ],
            options={"ordering": ["-created_at", "-id"]},
        ),
    ]
