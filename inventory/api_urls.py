from django.urls import path
from rest_framework.routers import SimpleRouter

from . import views

router = SimpleRouter()
router.register("materials", views.MaterialViewSet)
router.register("material-inputs", views.MaterialInputViewSet, basename="material-input")
router.register("mixes", views.MixViewSet, basename="mix")

urlpatterns = router.urls + [
    path("material-types/", views.material_types, name="material-types"),
]
