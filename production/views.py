from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.utils.dateparse import parse_date
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.response import Response

from .exceptions import NotFoundError
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
from .notifications import order_status_message, send_sms
from .serializers import (
    CustomerSerializer,
    OrderSerializer,
    JobOrderSerializer,
    MachineSerializer,
    MachineOptionSerializer,
    RollSerializer,
    ReceivingOrderSerializer,
    SmsMessageSerializer,
)
from .services import ledger, reports
from .tasks import send_sms_message


class CustomerViewSet(viewsets.ModelViewSet):
    queryset = Customer.objects.all()
    serializer_class = CustomerSerializer
    permission_classes = [permissions.IsAuthenticated]


class OrderViewSet(viewsets.ModelViewSet):
    serializer_class = OrderSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        qs = Order.objects.select_related("customer")
        customer = self.request.query_params.get("customer")
        if customer:
            qs = qs.filter(customer_id=customer)
        return qs

    @action(detail=True, methods=["post"], url_path="notify-status")
    def notify_status(self, request, pk=None):
        order = self.get_object()
        phone = order.customer.phone
        if not phone:
            return Response({"error": "Customer has no phone number"}, status=400)
        body = request.data.get("message") or order_status_message(order)
        message = send_sms(
            phone,
            body,
            category=SmsMessage.ORDER_STATUS,
            customer=order.customer,
            order=order,
        )
        return Response(SmsMessageSerializer(message).data, status=status.HTTP_201_CREATED)


class JobOrderViewSet(viewsets.ModelViewSet):
    serializer_class = JobOrderSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        qs = JobOrder.objects.select_related("order", "customer")
        order = self.request.query_params.get("order")
        if order:
            qs = qs.filter(order_id=order)
        return qs

    @action(detail=True, methods=["get"])
    def rolls(self, request, pk=None):
        job_order = self.get_object()
        serializer = RollSerializer(job_order.rolls.all(), many=True)
        return Response(serializer.data)

    @action(detail=True, methods=["post"])
    def recompute(self, request, pk=None):
        job_order = ledger.recompute(self.get_object().pk)
        job_order = ledger.apply_extrusion_status(job_order.pk)
        return Response(self.get_serializer(job_order).data)


class RollViewSet(viewsets.ModelViewSet):
    serializer_class = RollSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        qs = Roll.objects.all()
        job_order = self.request.query_params.get("job_order")
        status_param = self.request.query_params.get("status")
        if job_order:
            qs = qs.filter(job_order_id=job_order)
        if status_param:
            qs = qs.filter(status=status_param)
        return qs

    def perform_create(self, serializer):
        serializer.save(created_by=self.request.user)


class ReceivingOrderViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = ReceivingOrderSerializer
    permission_classes = [permissions.IsAuthenticated]

    def get_queryset(self):
        qs = ReceivingOrder.objects.select_related("job_order", "roll")
        job_order = self.request.query_params.get("job_order")
        if job_order:
            qs = qs.filter(job_order_id=job_order)
        return qs

    def perform_create(self, serializer):
        serializer.save(received_by=self.request.user)


class MachineOptionViewSet(viewsets.ModelViewSet):
    queryset = MachineOption.objects.all()
    serializer_class = MachineOptionSerializer
    permission_classes = [permissions.IsAuthenticated]


class MachineViewSet(viewsets.ModelViewSet):
    queryset = Machine.objects.prefetch_related("options")
    serializer_class = MachineSerializer
    permission_classes = [permissions.IsAuthenticated]

    @action(detail=True, methods=["get", "post"])
    def options(self, request, pk=None):
        machine = self.get_object()
        if request.method == "POST":
            option_ids = request.data.get("options")
            if option_ids is None and request.data.get("option") is not None:
                option_ids = [request.data.get("option")]
            if not isinstance(option_ids, list) or not option_ids:
                return Response({"error": "Provide 'option' or a list of 'options'"}, status=400)
            try:
                wanted = {int(o) for o in option_ids}
            except (TypeError, ValueError):
                return Response({"error": "Option ids must be integers"}, status=400)
            found = list(MachineOption.objects.filter(pk__in=wanted))
            if len(found) != len(wanted):
                return Response({"error": "Unknown machine option"}, status=400)
            machine.options.add(*found)
        serializer = MachineOptionSerializer(machine.options.all(), many=True)
        return Response(serializer.data)


class SmsMessageViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    queryset = SmsMessage.objects.all()
    serializer_class = SmsMessageSerializer
    permission_classes = [permissions.IsAuthenticated]

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        message = send_sms(
            data["recipient"],
            data["body"],
            category=data.get("category", SmsMessage.MANUAL),
            customer=data.get("customer"),
            order=data.get("order"),
        )
        return Response(self.get_serializer(message).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"])
    def resend(self, request, pk=None):
        message = self.get_object()
        send_sms_message.delay(message.pk)
        message.refresh_from_db()
        return Response(self.get_serializer(message).data)


# --- waste reports ------------------------------------------------------------


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def roll_waste(request, pk):
    roll = Roll.objects.filter(pk=pk).first()
    if roll is None:
        raise NotFoundError(f"Roll {pk} not found")
    return Response({"roll": roll.pk, "waste": ledger.roll_waste(roll)})


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def job_order_waste(request, pk):
    job_order = JobOrder.objects.filter(pk=pk).first()
    if job_order is None:
        raise NotFoundError(f"Job order {pk} not found")
    return Response({"job_order": job_order.pk, **ledger.job_order_waste(job_order)})


def _date_param(request, name):
    try:
        return parse_date(request.query_params.get(name) or "")
    except ValueError:
        return None


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def waste_by_timeframe(request):
    start = _date_param(request, "start")
    end = _date_param(request, "end")
    if start is None or end is None:
        raise ValidationError("Both 'start' and 'end' must be dates (YYYY-MM-DD).")
    if start > end:
        raise ValidationError("'start' must not be after 'end'.")
    return Response(reports.waste_by_timeframe(start, end))


@api_view(["GET"])
@permission_classes([permissions.IsAuthenticated])
def waste_by_user(request, pk):
    user = get_user_model().objects.filter(pk=pk).first()
    if user is None:
        raise NotFoundError(f"User {pk} not found")
    return Response(reports.waste_by_user(user))
