from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

MATERIAL_TYPE_CHOICES = [
    ("HDPE", "HDPE"),
    ("LDPE", "LDPE"),
    ("LLDPE", "LLDPE"),
    ("Regrind", "Regrind"),
    ("Filler", "Filler"),
    ("Color", "Color"),
    ("D2w", "D2w"),
    ("Material", "Material"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("production", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Material",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("identifier", models.CharField(editable=False, max_length=40, unique=True)),
                ("name", models.CharField(max_length=200)),
                ("starting_balance_kg", models.DecimalField(decimal_places=3, default=Decimal("0"), max_digits=12)),
                ("current_balance_kg", models.DecimalField(decimal_places=3, default=Decimal("0"), max_digits=12)),
                ("low_stock_threshold_kg", models.DecimalField(decimal_places=3, default=Decimal("0"), max_digits=12)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={"ordering": ["name"]},
        ),
        migrations.CreateModel(
            name="MaterialInput",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("quantity_kg", models.DecimalField(decimal_places=3, max_digits=12)),
                ("input_identifier", models.CharField(editable=False, max_length=40, unique=True)),
                ("input_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "material",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="inputs",
                        to="inventory.material",
                    ),
                ),
            ],
            options={"ordering": ["-input_date", "-id"]},
        ),
        migrations.CreateModel(
            name="Mix",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("batch_number", models.CharField(editable=False, max_length=40, unique=True)),
                ("mix_date", models.DateTimeField(default=django.utils.timezone.now)),
                (
                    "status",
                    models.CharField(
                        choices=[("Pending", "Pending"), ("In Progress", "In Progress"), ("Completed", "Completed")],
                        default="Pending",
                        max_length=20,
                    ),
                ),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="mixes",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                ("machines", models.ManyToManyField(blank=True, related_name="mixes", to="production.machine")),
                ("orders", models.ManyToManyField(blank=True, related_name="mixes", to="production.order")),
            ],
            options={"ordering": ["-mix_date", "-id"], "verbose_name_plural": "mixes"},
        ),
        migrations.CreateModel(
            name="MixItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "material_type",
                    models.CharField(choices=MATERIAL_TYPE_CHOICES, default="Material", max_length=20),
                ),
                ("quantity_kg", models.DecimalField(decimal_places=3, max_digits=12)),
                ("notes", models.TextField(blank=True)),
                (
                    "material",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="mix_items",
                        to="inventory.material",
                    ),
                ),
                (
                    "mix",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="inventory.mix",
                    ),
                ),
            ],
            options={"ordering": ["mix", "id"]},
        ),
    ]
