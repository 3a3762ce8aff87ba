from functools import partial

from django.conf import settings
from django.db import transaction
from django.db.models.signals import post_delete, post_save, pre_save
from django.dispatch import receiver

from .models import Order, Roll
from .services import ledger


@receiver(pre_save, sender=Roll)
def capture_roll_state(sender, instance, **kwargs):
    instance._prev_status = None
    instance._prev_extruding_qty = None
    instance._prev_cutting_qty = None
    if instance.pk:
        old = (
            Roll.objects.filter(pk=instance.pk)
            .values("status", "extruding_qty", "cutting_qty")
            .first()
        )
        if old:
            instance._prev_status = old["status"]
            instance._prev_extruding_qty = old["extruding_qty"]
            instance._prev_cutting_qty = old["cutting_qty"]


@receiver(post_save, sender=Roll)
def update_job_order_ledger(sender, instance, created, raw=False, **kwargs):
    if raw:
        return
    if created:
        ledger.roll_created(instance)
    else:
        ledger.roll_updated(
            instance,
            getattr(instance, "_prev_status", None),
            getattr(instance, "_prev_extruding_qty", None),
            getattr(instance, "_prev_cutting_qty", None),
        )


@receiver(post_delete, sender=Roll)
def recompute_after_roll_delete(sender, instance, **kwargs):
    ledger.roll_deleted(instance.job_order_id)


@receiver(pre_save, sender=Order)
def capture_order_status(sender, instance, **kwargs):
    if instance.pk:
        instance._prev_status = (
            Order.objects.filter(pk=instance.pk).values_list("status", flat=True).first()
        )
    else:
        instance._prev_status = None


@receiver(post_save, sender=Order)
def queue_order_status_sms(sender, instance, created, raw=False, **kwargs):
    if raw or created or not getattr(settings, "SMS_NOTIFY_ORDER_STATUS", False):
        return
    previous = getattr(instance, "_prev_status", None)
    if previous is not None and previous != instance.status:
        from .tasks import notify_order_status

        transaction.on_commit(partial(notify_order_status.delay, instance.pk))
