from rest_framework import permissions, viewsets
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from .models import ACTION_TYPES, PART_TYPES, MaintenanceAction, MaintenanceRequest
from .serializers import MaintenanceActionSerializer, MaintenanceRequestSerializer


class MaintenanceRequestViewSet(viewsets.ModelViewSet):
    serializer_class = MaintenanceRequestSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        qs = MaintenanceRequest.objects.select_related("machine")
        status_param = self.request.query_params.get("status")
        machine = self.request.query_params.get("machine")
        if status_param:
            qs = qs.filter(status=status_param)
        if machine:
            qs = qs.filter(machine_id=machine)
        return qs

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)


class MaintenanceActionViewSet(viewsets.ModelViewSet):
    serializer_class = MaintenanceActionSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        qs = MaintenanceAction.objects.select_related("request", "machine")
        request_id = self.request.query_params.get("request")
        if request_id:
            qs = qs.filter(request_id=request_id)
        return qs

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def part_types(request):
    return Response(PART_TYPES)


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def action_types(request):
    return Response(ACTION_TYPES)
