from rest_framework import serializers

from production.models import Machine, Order

from .models import MATERIAL_TYPE_CHOICES, Material, MaterialInput, Mix, MixItem
from .services import ledger


class MaterialSerializer(serializers.ModelSerializer):
    is_low = serializers.BooleanField(read_only=True)

    class Meta:
        model = Material
        fields = [
            "id",
            "identifier",
            "name",
            "starting_balance_kg",
            "current_balance_kg",
            "low_stock_threshold_kg",
            "is_low",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["identifier", "current_balance_kg", "created_at", "updated_at"]

    def validate_starting_balance_kg(self, value):
        if self.instance is not None and value != self.instance.starting_balance_kg:
            raise serializers.ValidationError("Starting balance cannot be changed after creation.")
        if value < 0:
            raise serializers.ValidationError("Starting balance cannot be negative.")
        return value

    def validate_low_stock_threshold_kg(self, value):
        if value < 0:
            raise serializers.ValidationError("Threshold cannot be negative.")
        return value


class MaterialInputSerializer(serializers.ModelSerializer):
    material_name = serializers.CharField(source="material.name", read_only=True)

    class Meta:
        model = MaterialInput
        fields = [
            "id",
            "material",
            "material_name",
            "quantity_kg",
            "input_identifier",
            "input_date",
            "created_at",
        ]
        read_only_fields = ["input_identifier", "created_at"]

    def create(self, validated_data):
        return ledger.create_material_input(
            validated_data["material"].pk,
            validated_data["quantity_kg"],
            input_date=validated_data.get("input_date"),
        )


class MixItemSerializer(serializers.ModelSerializer):
    material_name = serializers.CharField(source="material.name", read_only=True)
    material_type = serializers.ChoiceField(choices=MATERIAL_TYPE_CHOICES, default="Material")

    class Meta:
        model = MixItem
        fields = ["id", "material", "material_name", "material_type", "quantity_kg", "notes"]


class MixSerializer(serializers.ModelSerializer):
    items = MixItemSerializer(many=True)
    orders = serializers.PrimaryKeyRelatedField(many=True, queryset=Order.objects.all(), required=False)
    machines = serializers.PrimaryKeyRelatedField(many=True, queryset=Machine.objects.all(), required=False)
    total_quantity_kg = serializers.DecimalField(max_digits=14, decimal_places=3, read_only=True)

    class Meta:
        model = Mix
        fields = [
            "id",
            "batch_number",
            "mix_date",
            "created_by",
            "status",
            "notes",
            "orders",
            "machines",
            "items",
            "total_quantity_kg",
            "created_at",
        ]
        read_only_fields = ["batch_number", "created_by", "created_at"]

    def validate_items(self, value):
        if self.instance is not None:
            raise serializers.ValidationError("Mix items cannot be changed once the mix exists.")
        if not value:
            raise serializers.ValidationError("A mix needs at least one item.")
        return value

    def create(self, validated_data):
        return ledger.create_mix(
            validated_data["items"],
            created_by=validated_data.get("created_by"),
            status=validated_data.get("status", Mix.PENDING),
            notes=validated_data.get("notes", ""),
            mix_date=validated_data.get("mix_date"),
            orders=validated_data.get("orders", ()),
            machines=validated_data.get("machines", ()),
        )

    def update(self, instance, validated_data):
        validated_data.pop("items", None)
        return super().update(instance, validated_data)
