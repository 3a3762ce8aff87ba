import logging

from celery import shared_task

from .models import Order, SmsMessage
from .notifications import deliver, order_status_message, send_sms

logger = logging.getLogger(__name__)


@shared_task
def notify_order_status(order_id):
    """Text the customer that their order moved to a new status."""
    order = Order.objects.select_related("customer").filter(pk=order_id).first()
    if order is None:
        logger.warning("Order %s vanished before its status SMS was sent", order_id)
        return None
    phone = order.customer.phone
    if not phone:
        logger.info("Customer %s has no phone number; skipping SMS", order.customer_id)
        return None
    message = send_sms(
        phone,
        order_status_message(order),
        category=SmsMessage.ORDER_STATUS,
        customer=order.customer,
        order=order,
    )
    return message.pk


@shared_task
def send_sms_message(message_id):
    message = SmsMessage.objects.filter(pk=message_id).first()
    if message is None:
        logger.warning("SMS message %s does not exist", message_id)
        return None
    deliver(message)
    return message.status
