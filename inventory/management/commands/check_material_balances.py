from django.core.management.base import BaseCommand, CommandError

from inventory.models import Material
from inventory.services.ledger import audit_balance


class Command(BaseCommand):
    help = "Verify every material balance against its inputs and mix consumption."

    def add_arguments(self, parser):
        parser.add_argument(
            "--fix",
            action="store_true",
            help="Overwrite mismatched balances with the expected value",
        )

    def handle(self, *args, **opts):
        mismatched = 0
        for material in Material.objects.order_by("pk"):
            result = audit_balance(material)
            if result["ok"]:
                continue
            mismatched += 1
            self.stdout.write(
                self.style.WARNING(
                    f"{result['material']}: expected {result['expected']} kg, "
                    f"found {result['actual']} kg"
                )
            )
            if opts["fix"]:
                Material.objects.filter(pk=material.pk).update(current_balance_kg=result["expected"])

        if mismatched and not opts["fix"]:
            raise CommandError(f"{mismatched} material balance(s) out of line.")
        self.stdout.write(self.style.SUCCESS(f"Checked balances; {mismatched} mismatch(es)."))
