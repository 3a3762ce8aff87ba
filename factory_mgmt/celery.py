# factory_mgmt/celery.py
import os
from celery import Celery

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'factory_mgmt.settings')

app = Celery('factory_mgmt')
app.config_from_object('django.conf:settings', namespace='CELERY')
app.autodiscover_tasks()

app.conf.beat_schedule = {
    'audit-material-balances-nightly': {
        'task': 'inventory.tasks.audit_material_balances',
        'schedule': 24 * 60 * 60.0,
    },
}
