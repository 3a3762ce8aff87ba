from django.core.management.base import BaseCommand

from production.models import JobOrder
from production.services.ledger import apply_extrusion_status, recompute_all


class Command(BaseCommand):
    help = "Rebuild produced/waste/status aggregates of job orders from their rolls."

    def add_arguments(self, parser):
        parser.add_argument("ids", nargs="*", type=int, help="Job order ids (default: all)")
        parser.add_argument(
            "--with-status",
            action="store_true",
            help="Also re-apply the extrusion status rule",
        )

    def handle(self, *args, **opts):
        ids = opts["ids"] or None
        count = recompute_all(ids)
        if opts["with_status"]:
            qs = JobOrder.objects.all()
            if ids:
                qs = qs.filter(pk__in=ids)
            for pk in qs.values_list("pk", flat=True):
                apply_extrusion_status(pk)
        self.stdout.write(self.style.SUCCESS(f"Recomputed {count} job order(s)."))
