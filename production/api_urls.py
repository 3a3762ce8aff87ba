from django.urls import path
from rest_framework.routers import DefaultRouter

from . import views

router = DefaultRouter()
router.register("customers", views.CustomerViewSet)
router.register("orders", views.OrderViewSet, basename="order")
router.register("job-orders", views.JobOrderViewSet, basename="job-order")
router.register("rolls", views.RollViewSet, basename="roll")
router.register("receiving-orders", views.ReceivingOrderViewSet, basename="receiving-order")
router.register("machines", views.MachineViewSet)
router.register("machine-options", views.MachineOptionViewSet)
router.register("sms-messages", views.SmsMessageViewSet)

urlpatterns = router.urls + [
    path("waste/roll/<int:pk>/", views.roll_waste, name="waste-roll"),
    path("waste/job-order/<int:pk>/", views.job_order_waste, name="waste-job-order"),
    path("waste/timeframe/", views.waste_by_timeframe, name="waste-timeframe"),
    path("waste/user/<int:pk>/", views.waste_by_user, name="waste-user"),
]
