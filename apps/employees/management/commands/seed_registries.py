"""
Management command to load the default departments and designations
Usage: python manage.py seed_registries [--dry-run]
"""

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.employees.models import Department, Designation
from apps.employees.services import RegistryService


DEFAULT_DEPARTMENTS = [
    {'name': 'Engineering', 'code': 'ENG', 'description': 'Engineering and Technical Services'},
    {'name': 'IT', 'code': 'IT', 'description': 'Information Technology'},
    {'name': 'HR', 'code': 'HR', 'description': 'Human Resources'},
    {'name': 'Administration', 'code': 'ADMIN', 'description': 'Administrative Services'},
    {'name': 'Finance', 'code': 'FIN', 'description': 'Finance and Accounts'},
    {'name': 'Legal', 'code': 'LEGAL', 'description': 'Legal Affairs'},
    {'name': 'Operations', 'code': 'OPS', 'description': 'Operations Management'},
]

DEFAULT_DESIGNATIONS = {
    'ENG': [
        'Junior Engineer', 'Assistant Engineer', 'Engineer', 'Senior Engineer',
        'Assistant Manager', 'Manager', 'Deputy Director Engineering',
    ],
    'IT': ['Software Developer', 'Senior Software Developer', 'IT Manager'],
    'HR': ['HR Officer', 'Senior HR Officer', 'HR Manager'],
    'ADMIN': ['Administrative Officer', 'Senior Administrative Officer', 'Administrative Manager'],
    'FIN': ['Accounts Officer', 'Senior Accounts Officer', 'Finance Manager'],
    'LEGAL': ['Legal Officer', 'Senior Legal Officer', 'Legal Manager'],
    'OPS': ['Operations Officer', 'Senior Operations Officer', 'Operations Manager'],
}


class Command(BaseCommand):
    help = 'Create the default departments and designations that are missing'

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Show what would be created without making changes',
        )

    def handle(self, *args, **options):
        dry_run = options['dry_run']
        created = {'departments': 0, 'designations': 0}

        if dry_run:
            self.stdout.write(self.style.NOTICE('DRY RUN MODE - No changes will be made'))

        with transaction.atomic():
            for entry in DEFAULT_DEPARTMENTS:
                department = Department.objects.filter(code=entry['code']).first()
                if department is None:
                    created['departments'] += 1
                    self.stdout.write(f"  + department {entry['name']}")
                    if not dry_run:
                        department = Department.objects.create(**entry)

                for level, name in enumerate(DEFAULT_DESIGNATIONS[entry['code']], start=1):
                    if department is not None and Designation.objects.filter(department=department, name=name).exists():
                        continue
                    created['designations'] += 1
                    self.stdout.write(f"  + designation {name} ({entry['code']}, level {level})")
                    if not dry_run:
                        Designation.objects.create(department=department, name=name, level=level)

        RegistryService.invalidate()
        self.stdout.write(self.style.SUCCESS(
            f"Departments created: {created['departments']}, designations created: {created['designations']}"
        ))
