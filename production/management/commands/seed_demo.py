from datetime import date
from decimal import Decimal

from django.contrib.auth.models import User
from django.core.management.base import BaseCommand
from django.db import transaction

from inventory.models import Material
from inventory.services.ledger import create_material_input, create_mix
from maintenance.models import MaintenanceRequest
from production.models import (
    Customer, Order, JobOrder, Machine, MachineOption, Roll
)


class Command(BaseCommand):
    help = "Populate the database with demo customers, orders, rolls, materials and machines."

    def add_arguments(self, parser):
        parser.add_argument('--rolls', type=int, default=4, help='Rolls to create per job order')

    @transaction.atomic
    def handle(self, *args, **opts):
        self.stdout.write(self.style.NOTICE('Seeding demo data...'))

        operator, created = User.objects.get_or_create(username='operator', defaults={'email': 'operator@example.com'})
        if created:
            operator.set_password('demo1234')
            operator.save()

        # 1) Machines
        machines = {}
        for section, code in ((Machine.EXTRUSION, 'EX-01'), (Machine.PRINTING, 'PR-01'), (Machine.CUTTING, 'CT-01')):
            machine, _ = Machine.objects.get_or_create(
                code=code,
                defaults={'section': section, 'production_date': date(2020, 1, 1), 'manufacturer_name': 'Demo'},
            )
            option, _ = MachineOption.objects.get_or_create(section=section, option_details=f'{section} standard')
            machine.options.add(option)
            machines[section] = machine

        # 2) Customers, orders, job orders
        job_orders = []
        for name in ('Al Noor Bakery', 'Gulf Supermarket'):
            customer, _ = Customer.objects.get_or_create(name=name, defaults={'phone': '+966500000000'})
            order = Order.objects.create(customer=customer, status=Order.FOR_PRODUCTION, notes='demo')
            job_orders.append(
                JobOrder.objects.create(
                    order=order,
                    customer=customer,
                    size_details='40x60',
                    raw_material='HDPE',
                    quantity=100,
                )
            )

        # 3) Rolls through the three stages
        for jo in job_orders:
            for i in range(opts['rolls']):
                roll = Roll.objects.create(
                    job_order=jo,
                    extruding_qty=Decimal('30'),
                    extruded_by=operator,
                    created_by=operator,
                )
                if i % 2 == 0:
                    roll.printing_qty = Decimal('29')
                    roll.cutting_qty = Decimal('27.5')
                    roll.printed_by = operator
                    roll.cut_by = operator
                    roll.status = Roll.RECEIVED
                    roll.save()

        # 4) Materials, inputs and a mix
        hdpe = Material.objects.create(name='HDPE 7000F', starting_balance_kg=Decimal('500'),
                                       low_stock_threshold_kg=Decimal('100'))
        color = Material.objects.create(name='White masterbatch', starting_balance_kg=Decimal('50'))
        create_material_input(hdpe.pk, Decimal('250'))
        create_mix(
            [
                {'material': hdpe, 'quantity_kg': Decimal('200'), 'material_type': 'HDPE'},
                {'material': color, 'quantity_kg': Decimal('5'), 'material_type': 'Color'},
            ],
            created_by=operator,
            orders=[jo.order for jo in job_orders],
            machines=[machines[Machine.EXTRUSION]],
        )

        # 5) A maintenance request
        MaintenanceRequest.objects.create(
            machine=machines[Machine.CUTTING],
            created_by=operator,
            description='Blade dull, uneven cuts',
        )

        self.stdout.write(self.style.SUCCESS(
            f'Seeded {len(job_orders)} job orders, {Roll.objects.count()} rolls, {Material.objects.count()} materials.'
        ))
