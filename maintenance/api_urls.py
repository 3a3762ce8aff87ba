from django.urls import path
from rest_framework.routers import SimpleRouter

from . import views

router = SimpleRouter()
router.register("maintenance-requests", views.MaintenanceRequestViewSet, basename="maintenance-request")
router.register("maintenance-actions", views.MaintenanceActionViewSet, basename="maintenance-action")

urlpatterns = router.urls + [
    path("maintenance/part-types/", views.part_types, name="maintenance-part-types"),
    path("maintenance/action-types/", views.action_types, name="maintenance-action-types"),
]
