from rest_framework import mixins, permissions, viewsets
from rest_framework.decorators import api_view, permission_classes
from rest_framework.response import Response

from production.exceptions import ReferencedRecordError

from .models import MATERIAL_TYPES, Material, MaterialInput, Mix
from .serializers import MaterialSerializer, MaterialInputSerializer, MixSerializer
from .services import ledger


class MaterialViewSet(viewsets.ModelViewSet):
    queryset = Material.objects.all()
    serializer_class = MaterialSerializer
    permission_classes = [permissions.IsAuthenticated]

    def perform_destroy(self, instance):
        if not ledger.delete_material(instance.pk):
            raise ReferencedRecordError(
                f"Material {instance.identifier} is referenced by inputs or mixes and cannot be deleted"
            )


class MaterialInputViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = MaterialInputSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        qs = MaterialInput.objects.select_related("material")
        material = self.request.query_params.get("material")
        if material:
            qs = qs.filter(material_id=material)
        return qs

    def perform_destroy(self, instance):
        ledger.delete_material_input(instance.pk)


class MixViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = MixSerializer
    permission_classes = [permissions.IsAuthenticated]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_queryset(self):
        qs = Mix.objects.prefetch_related("items__material", "orders", "machines")
        order = self.request.query_params.get("order")
        machine = self.request.query_params.get("machine")
        if order:
            qs = qs.filter(orders__id=order)
        if machine:
            qs = qs.filter(machines__id=machine)
        return qs.distinct()

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)

    def perform_destroy(self, instance):
        ledger.delete_mix(instance.pk)


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def material_types(request):
    return Response(MATERIAL_TYPES)
