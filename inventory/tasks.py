import logging

from celery import shared_task
from django.conf import settings

from production.models import SmsMessage
from production.notifications import send_sms

from .models import Material
from .services.ledger import audit_balance

logger = logging.getLogger(__name__)


def low_stock_message(material):
    return (
        f"Low stock: {material.name} ({material.identifier}) is at "
        f"{material.current_balance_kg} kg, below the {material.low_stock_threshold_kg} kg threshold."
    )


@shared_task
def send_low_stock_alert(material_ids):
    """Alert the configured recipients about materials that dropped below threshold."""
    recipients = getattr(settings, "LOW_STOCK_ALERT_RECIPIENTS", [])
    low = [m for m in Material.objects.filter(pk__in=material_ids) if m.is_low]
    if not low:
        return 0
    if not recipients:
        logger.warning(
            "Low stock on %s but LOW_STOCK_ALERT_RECIPIENTS is empty",
            ", ".join(m.identifier for m in low),
        )
        return 0
    sent = 0
    for material in low:
        body = low_stock_message(material)
        for recipient in recipients:
            send_sms(recipient, body, category=SmsMessage.LOW_STOCK)
            sent += 1
    return sent


@shared_task
def audit_material_balances():
    """Log every material whose balance disagrees with its inputs and mixes."""
    mismatched = []
    for material in Material.objects.order_by("pk"):
        result = audit_balance(material)
        if not result["ok"]:
            logger.error(
                "Balance mismatch on %s: expected %s kg, found %s kg",
                result["material"], result["expected"], result["actual"],
            )
            mismatched.append(result["material"])
    return mismatched
