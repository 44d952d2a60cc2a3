"""
Management command to set up a fresh shop.

Usage:
    python manage.py seed_shop
    python manage.py seed_shop --with-users

This creates (skipping anything that already exists):
- Role groups: admin, manager, user
- Default pricing configuration
- Main branch (code MAIN)
- With --with-users: admin@example.com, manager@example.com and
  user@example.com (password: password123)
"""

from decimal import Decimal

from django.contrib.auth.models import Group
from django.core.management.base import BaseCommand
from django.db import transaction

from apps.accounts.models import User
from apps.accounts.services import list_shop_permissions, resolve_permissions
from apps.branches.models import Branch
from apps.configuration.services import find_configuration, save_configuration

ROLE_PERMISSIONS = {
    'manager': [
        'bookings.access_pos',
        'bookings.update_booking_status',
        'bookings.view_reports',
        'bookings.view_booking',
        'catalog.view_item',
        'catalog.add_item',
        'catalog.change_item',
        'catalog.view_problem',
        'catalog.add_problem',
        'catalog.change_problem',
        'customers.view_customer',
        'customers.add_customer',
        'customers.change_customer',
        'configuration.view_pricingconfiguration',
        'branches.view_branch',
    ],
    'user': [
        'bookings.access_pos',
        'bookings.view_booking',
        'catalog.view_item',
        'catalog.view_problem',
        'customers.view_customer',
        'branches.view_branch',
    ],
}

DEFAULT_CONFIGURATION = {
    'sales_tax_percentage': Decimal('5.00'),
    'number_of_days_for_normal': 3,
    'number_of_days_for_urgent': 1,
    'urgent_charges_percentage': Decimal('50.00'),
    'same_day_urgent_charges_percentage': Decimal('100.00'),
    'hanger_charge_per_unit': Decimal('0.00'),
    'ntn_number': '',
}

SAMPLE_PASSWORD = 'password123'


class Command(BaseCommand):
    help = 'Create role groups, default pricing configuration and the main branch'

    def add_arguments(self, parser):
        parser.add_argument(
            '--with-users',
            action='store_true',
            help='Also create one sample account per role',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        groups = self.create_groups()
        self.create_configuration()
        branch = self.create_main_branch()

        if options['with_users']:
            self.create_users(groups, branch)

        self.stdout.write(self.style.SUCCESS('Shop seeded successfully!'))

    def create_groups(self):
        """Create the role groups and (re)assign their permissions."""
        groups = {}

        admin, _ = Group.objects.get_or_create(name='admin')
        admin.permissions.set(list_shop_permissions())
        groups['admin'] = admin

        for name, permission_names in ROLE_PERMISSIONS.items():
            group, _ = Group.objects.get_or_create(name=name)
            group.permissions.set(resolve_permissions(permission_names))
            groups[name] = group

        self.stdout.write(f'  Role groups: {", ".join(sorted(groups))}')
        return groups

    def create_configuration(self):
        if find_configuration() is not None:
            self.stdout.write('  Pricing configuration already exists')
            return
        save_configuration(data=DEFAULT_CONFIGURATION)
        self.stdout.write('  Created default pricing configuration')

    def create_main_branch(self):
        branch, created = Branch.objects.get_or_create(
            code='MAIN',
            defaults={'name': 'Main Branch'}
        )
        if created:
            self.stdout.write('  Created branch MAIN')
        return branch

    def create_users(self, groups, branch):
        accounts = [
            ('admin@example.com', 'Admin', 'admin', True),
            ('manager@example.com', 'Manager', 'manager', False),
            ('user@example.com', 'Counter User', 'user', False),
        ]

        for email, display_name, role, is_staff in accounts:
            if User.objects.filter(email=email).exists():
                continue
            user = User.objects.create_user(
                email=email,
                password=SAMPLE_PASSWORD,
                display_name=display_name,
                branch=branch,
                is_staff=is_staff,
            )
            user.groups.add(groups[role])
            self.stdout.write(f'  Created {email} ({role})')
