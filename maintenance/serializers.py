from rest_framework import serializers

from .models import MaintenanceAction, MaintenanceRequest


class MaintenanceRequestSerializer(serializers.ModelSerializer):
    machine_code = serializers.CharField(source="machine.code", read_only=True)

    class Meta:
        model = MaintenanceRequest
        fields = [
            "id",
            "machine",
            "machine_code",
            "created_by",
            "request_date",
            "status",
            "description",
            "notes",
        ]
        read_only_fields = ["created_by"]

    def validate_description(self, value):
        if not value.strip():
            raise serializers.ValidationError("Description is required.")
        return value


class MaintenanceActionSerializer(serializers.ModelSerializer):
    class Meta:
        model = MaintenanceAction
        fields = [
            "id",
            "request",
            "machine",
            "created_by",
            "action_date",
            "part_type",
            "action_type",
            "description",
            "notes",
        ]
        read_only_fields = ["created_by"]
        extra_kwargs = {"machine": {"required": False}}

    def validate(self, attrs):
        request = attrs.get("request") or getattr(self.instance, "request", None)
        if request is not None and self.instance is None and "machine" not in attrs:
            attrs["machine"] = request.machine
        return attrs
