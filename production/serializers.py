from rest_framework import serializers

from .models import (
    Customer,
    Order,
    JobOrder,
    Machine,
    MachineOption,
    Roll,
    ReceivingOrder,
    SmsMessage,
)
from .services.ledger import roll_waste


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = ["id", "name", "arabic_name", "drawer_no", "phone", "email", "address"]


class OrderSerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(source="customer.name", read_only=True)

    class Meta:
        model = Order
        fields = ["id", "customer", "customer_name", "order_date", "notes", "status"]


class JobOrderSerializer(serializers.ModelSerializer):
    class Meta:
        model = JobOrder
        fields = [
            "id",
            "order",
            "customer",
            "size_details",
            "thickness",
            "cylinder_inch",
            "cutting_length_cm",
            "raw_material",
            "master_batch",
            "is_printed",
            "cutting_unit",
            "unit_weight_kg",
            "packing",
            "punching",
            "cover",
            "notes",
            "quantity",
            "produced_quantity",
            "waste_quantity",
            "production_status",
            "status",
            "created_at",
        ]
        read_only_fields = [
            "produced_quantity",
            "waste_quantity",
            "production_status",
            "created_at",
        ]
        extra_kwargs = {"customer": {"required": False}}

    def validate_quantity(self, value):
        if self.instance is not None and value != self.instance.quantity:
            raise serializers.ValidationError("Quantity cannot be changed once the job order exists.")
        if value <= 0:
            raise serializers.ValidationError("Quantity must be greater than zero.")
        return value

    def validate(self, attrs):
        order = attrs.get("order") or getattr(self.instance, "order", None)
        customer = attrs.get("customer")
        if order is not None and customer is None and self.instance is None:
            attrs["customer"] = order.customer
        return attrs

    def update(self, instance, validated_data):
        # only the columns the client sent; the ledger owns the rest
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save(update_fields=list(validated_data))
        return instance


class MachineOptionSerializer(serializers.ModelSerializer):
    class Meta:
        model = MachineOption
        fields = ["id", "option_details", "section"]


class MachineSerializer(serializers.ModelSerializer):
    options = serializers.PrimaryKeyRelatedField(
        many=True, queryset=MachineOption.objects.all(), required=False
    )

    class Meta:
        model = Machine
        fields = [
            "id",
            "identification",
            "section",
            "code",
            "production_date",
            "serial_number",
            "manufacturer_code",
            "manufacturer_name",
            "options",
        ]


class RollSerializer(serializers.ModelSerializer):
    waste = serializers.SerializerMethodField()

    class Meta:
        model = Roll
        fields = [
            "id",
            "roll_identification",
            "job_order",
            "roll_number",
            "extruding_qty",
            "printing_qty",
            "cutting_qty",
            "status",
            "notes",
            "created_date",
            "created_by",
            "extruded_by",
            "printed_by",
            "cut_by",
            "extruded_date",
            "printed_date",
            "cut_date",
            "waste",
        ]
        read_only_fields = ["roll_identification", "roll_number", "created_by"]

    def get_waste(self, obj):
        return roll_waste(obj)

    def validate(self, attrs):
        for field in ("extruding_qty", "printing_qty", "cutting_qty"):
            value = attrs.get(field)
            if value is not None and value < 0:
                raise serializers.ValidationError({field: "Quantity cannot be negative."})
        if self.instance is not None and "job_order" in attrs and attrs["job_order"] != self.instance.job_order:
            raise serializers.ValidationError({"job_order": "A roll cannot move to another job order."})
        return attrs


class ReceivingOrderSerializer(serializers.ModelSerializer):
    class Meta:
        model = ReceivingOrder
        fields = [
            "id",
            "received_date",
            "job_order",
            "roll",
            "received_by",
            "received_quantity",
            "notes",
            "status",
            "created_date",
        ]
        read_only_fields = ["received_by", "created_date"]

    def validate_received_quantity(self, value):
        if value < 0:
            raise serializers.ValidationError("Received quantity cannot be negative.")
        return value

    def validate(self, attrs):
        roll = attrs.get("roll")
        if roll is not None and roll.job_order_id != attrs["job_order"].pk:
            raise serializers.ValidationError({"roll": "Roll belongs to a different job order."})
        return attrs


class SmsMessageSerializer(serializers.ModelSerializer):
    class Meta:
        model = SmsMessage
        fields = [
            "id",
            "recipient",
            "body",
            "category",
            "status",
            "error",
            "provider_message_id",
            "customer",
            "order",
            "created_at",
            "sent_at",
        ]
        read_only_fields = [
            "status",
            "error",
            "provider_message_id",
            "created_at",
            "sent_at",
        ]
