from __future__ import annotations

import logging
import uuid
from typing import Optional

from django.conf import settings
from django.utils import timezone
from django.utils.module_loading import import_string

from .models import SmsMessage

logger = logging.getLogger(__name__)

ORDER_STATUS_TEMPLATE = (
    "Dear {name}, your order #{order_id} has been updated to status: {status}. "
    "Thank you for your business."
)


class BaseSmsBackend:
    """Delivers a single :class:`SmsMessage`.

    ``send`` returns ``(ok, provider_message_id_or_error)``.
    """

    def __init__(self, sender_id: Optional[str] = None):
        self.sender_id = sender_id or getattr(settings, "SMS_SENDER_ID", "")

    def send(self, message: SmsMessage):
        raise NotImplementedError


class ConsoleSmsBackend(BaseSmsBackend):
    def send(self, message):
        logger.info("SMS [%s] -> %s: %s", self.sender_id, message.recipient, message.body)
        return True, f"console-{uuid.uuid4().hex[:12]}"


class LocmemSmsBackend(BaseSmsBackend):
    """Keeps sent messages in ``LocmemSmsBackend.outbox``.

    The outbox is shared by every instance; the test suite empties it before
    each test through an autouse fixture in ``conftest.py``.
    """

    outbox: list = []

    @classmethod
    def reset(cls):
        cls.outbox = []

    def send(self, message):
        if not message.recipient:
            return False, "Missing recipient"
        LocmemSmsBackend.outbox.append(
            {"recipient": message.recipient, "body": message.body, "sender": self.sender_id}
        )
        return True, f"locmem-{len(LocmemSmsBackend.outbox)}"


def get_backend(path: Optional[str] = None) -> BaseSmsBackend:
    return import_string(path or settings.SMS_BACKEND)()


def deliver(message: SmsMessage, backend: Optional[BaseSmsBackend] = None) -> SmsMessage:
    backend = backend or get_backend()
    ok, detail = backend.send(message)
    if ok:
        message.status = SmsMessage.SENT
        message.provider_message_id = detail or ""
        message.sent_at = timezone.now()
        message.error = ""
    else:
        message.status = SmsMessage.FAILED
        message.error = detail or "Unknown error"
        logger.warning("SMS %s to %s failed: %s", message.pk, message.recipient, message.error)
    message.save(update_fields=["status", "provider_message_id", "sent_at", "error"])
    return message


def send_sms(recipient, body, category=SmsMessage.MANUAL, customer=None, order=None):
    """Record an outgoing SMS and hand it to the configured backend."""
    message = SmsMessage.objects.create(
        recipient=recipient,
        body=body,
        category=category,
        customer=customer,
        order=order,
    )
    return deliver(message)


def order_status_message(order) -> str:
    return ORDER_STATUS_TEMPLATE.format(
        name=order.customer.name,
        order_id=order.pk,
        status=order.get_status_display(),
    )
