"""
Registry Services - Departments and Designations

Lookups are served from the Django cache. Every write through this service
drops the cached lists, and model signals do the same for writes that go
around it (admin, shell, fixtures).
"""

import logging
from typing import Dict, List, Optional

from django.conf import settings
from django.core.cache import cache
from django.db import IntegrityError, transaction
from django.db.models import Count, Q

from apps.core.exceptions import ConflictException, ResourceNotFoundException

from ..models import Department, Designation, Employee, EmploymentRecord
from ..serializers import DepartmentSerializer, DesignationSerializer


logger = logging.getLogger(__name__)

DEPARTMENTS_CACHE_KEY = 'registry:departments'
DESIGNATIONS_CACHE_KEY = 'registry:designations'


def _cache_timeout() -> int:
    return getattr(settings, 'REGISTRY_CACHE_TIMEOUT', 600)


class RegistryService:
    """Keyed lookup and guarded writes for the two reference registries."""

    @staticmethod
    def invalidate() -> None:
        cache.delete_many([DEPARTMENTS_CACHE_KEY, DESIGNATIONS_CACHE_KEY])

    # Departments

    @classmethod
    def list_departments(cls) -> List[Dict]:
        cached = cache.get(DEPARTMENTS_CACHE_KEY)
        if cached is None:
            queryset = Department.objects.order_by('id')
            cached = [dict(row) for row in DepartmentSerializer(queryset, many=True).data]
            cache.set(DEPARTMENTS_CACHE_KEY, cached, _cache_timeout())
        return cached

    @classmethod
    def department_map(cls) -> Dict[int, Dict]:
        return {row['id']: row for row in cls.list_departments()}

    @classmethod
    def get_department(cls, department_id) -> Dict:
        department = cls.department_map().get(department_id)
        if department is None:
            raise ResourceNotFoundException('Department', department_id)
        return department

    @classmethod
    def create_department(cls, data: Dict) -> Dict:
        name = data['name']
        code = data.get('code') or None
        cls._check_department_unique(name, code)
        try:
            with transaction.atomic():
                department = Department.objects.create(
                    name=name,
                    code=code,
                    description=data.get('description') or '',
                )
        except IntegrityError:
            raise ConflictException('Department with this name or code already exists')
        cls.invalidate()
        logger.info("department_created id=%s name=%s", department.id, department.name)
        return dict(DepartmentSerializer(department).data)

    @classmethod
    def update_department(cls, department_id, data: Dict) -> Dict:
        try:
            with transaction.atomic():
                department = Department.objects.select_for_update().filter(pk=department_id).first()
                if department is None:
                    raise ResourceNotFoundException('Department', department_id)
                name = data.get('name', department.name)
                code = (data.get('code') or None) if 'code' in data else department.code
                cls._check_department_unique(name, code, exclude_id=department.id)
                department.name = name
                department.code = code
                if 'description' in data:
                    department.description = data['description'] or ''
                department.save()
        except IntegrityError:
            raise ConflictException('Another department with this name or code already exists')
        cls.invalidate()
        logger.info("department_updated id=%s", department.id)
        return dict(DepartmentSerializer(department).data)

    @classmethod
    def delete_department(cls, department_id) -> None:
        with transaction.atomic():
            department = Department.objects.select_for_update().filter(pk=department_id).first()
            if department is None:
                raise ResourceNotFoundException('Department', department_id)
            if cls.department_in_use(department.id):
                raise ConflictException(
                    'Cannot delete department while employees, employment records or designations reference it'
                )
            department.delete()
        cls.invalidate()
        logger.info("department_deleted id=%s", department_id)

    @staticmethod
    def department_in_use(department_id) -> bool:
        return (
            Employee.objects.filter(department_id=department_id).exists()
            or EmploymentRecord.objects.filter(department_id=department_id).exists()
            or Designation.objects.filter(department_id=department_id).exists()
        )

    @staticmethod
    def _check_department_unique(name, code, exclude_id=None):
        condition = Q(name__iexact=name)
        if code:
            condition |= Q(code__iexact=code)
        clashes = Department.objects.filter(condition)
        if exclude_id is not None:
            clashes = clashes.exclude(pk=exclude_id)
        if clashes.exists():
            raise ConflictException('Department with this name or code already exists')

    # Designations

    @classmethod
    def list_designations(cls, department_id: Optional[int] = None) -> List[Dict]:
        cached = cache.get(DESIGNATIONS_CACHE_KEY)
        if cached is None:
            queryset = Designation.objects.order_by('id')
            cached = [dict(row) for row in DesignationSerializer(queryset, many=True).data]
            cache.set(DESIGNATIONS_CACHE_KEY, cached, _cache_timeout())
        if department_id is not None:
            return [row for row in cached if row['department_id'] == department_id]
        return cached

    @classmethod
    def designation_map(cls) -> Dict[int, Dict]:
        return {row['id']: row for row in cls.list_designations()}

    @classmethod
    def get_designation(cls, designation_id) -> Dict:
        designation = cls.designation_map().get(designation_id)
        if designation is None:
            raise ResourceNotFoundException('Designation', designation_id)
        return designation

    @classmethod
    def create_designation(cls, data: Dict) -> Dict:
        department_id = data.get('department_id')
        if department_id is not None:
            cls.get_department(department_id)
        cls._check_designation_unique(data['name'], department_id)
        try:
            with transaction.atomic():
                designation = Designation.objects.create(
                    name=data['name'],
                    department_id=department_id,
                    level=data.get('level'),
                )
        except IntegrityError:
            raise ConflictException('Designation with this name already exists in the department')
        cls.invalidate()
        logger.info("designation_created id=%s name=%s", designation.id, designation.name)
        return dict(DesignationSerializer(designation).data)

    @classmethod
    def update_designation(cls, designation_id, data: Dict) -> Dict:
        try:
            with transaction.atomic():
                designation = Designation.objects.select_for_update().filter(pk=designation_id).first()
                if designation is None:
                    raise ResourceNotFoundException('Designation', designation_id)
                department_id = data.get('department_id', designation.department_id)
                if department_id != designation.department_id:
                    if department_id is not None:
                        cls.get_department(department_id)
                    # Moving a referenced designation would detach it from its employees' department
                    if cls.designation_in_use(designation.id):
                        raise ConflictException(
                            'Cannot move a designation to another department while it is referenced'
                        )
                name = data.get('name', designation.name)
                cls._check_designation_unique(name, department_id, exclude_id=designation.id)
                designation.name = name
                designation.department_id = department_id
                if 'level' in data:
                    designation.level = data['level']
                designation.save()
        except IntegrityError:
            raise ConflictException('Designation with this name already exists in the department')
        cls.invalidate()
        logger.info("designation_updated id=%s", designation.id)
        return dict(DesignationSerializer(designation).data)

    @classmethod
    def delete_designation(cls, designation_id) -> None:
        with transaction.atomic():
            designation = Designation.objects.select_for_update().filter(pk=designation_id).first()
            if designation is None:
                raise ResourceNotFoundException('Designation', designation_id)
            if cls.designation_in_use(designation.id):
                raise ConflictException('Cannot delete designation while employees or employment records reference it')
            designation.delete()
        cls.invalidate()
        logger.info("designation_deleted id=%s", designation_id)

    @staticmethod
    def designation_in_use(designation_id) -> bool:
        return (
            Employee.objects.filter(designation_id=designation_id).exists()
            or EmploymentRecord.objects.filter(designation_id=designation_id).exists()
        )

    @staticmethod
    def _check_designation_unique(name, department_id, exclude_id=None):
        clashes = Designation.objects.filter(name__iexact=name, department_id=department_id)
        if exclude_id is not None:
            clashes = clashes.exclude(pk=exclude_id)
        if clashes.exists():
            raise ConflictException('Designation with this name already exists in the department')

    # Aggregates

    @classmethod
    def statistics(cls) -> Dict:
        departments = Department.objects.order_by('id').annotate(
            designation_count=Count('designations', distinct=True),
            employee_count=Count('employees', distinct=True),
            employment_count=Count('employment_records', distinct=True),
        )
        rows = [
            {
                'id': department.id,
                'name': department.name,
                'code': department.code,
                'designation_count': department.designation_count,
                'employee_count': department.employee_count,
                'employment_count': department.employment_count,
            }
            for department in departments
        ]
        return {'total_departments': len(rows), 'departments': rows}

    @classmethod
    def designation_statistics(cls) -> Dict:
        designations = Designation.objects.select_related('department').order_by('id').annotate(
            employee_count=Count('employees', distinct=True),
            employment_count=Count('employment_records', distinct=True),
        )
        by_department = {}
        rows = []
        for designation in designations:
            department = designation.department.name if designation.department else 'No Department'
            by_department[department] = by_department.get(department, 0) + 1
            rows.append({
                'id': designation.id,
                'name': designation.name,
                'department': department,
                'level': designation.level,
                'employee_count': designation.employee_count,
                'employment_count': designation.employment_count,
            })
        return {'total_designations': len(rows), 'by_department': by_department, 'designations': rows}

    @staticmethod
    def employment_statistics() -> Dict:
        """Counts over every employment record; open-ended records are current."""
        records = EmploymentRecord.objects.all()
        by_organization = records.values('organization').annotate(count=Count('id')).order_by('organization')
        by_department = (
            records.filter(department_id__isnull=False)
            .values('department_id')
            .annotate(count=Count('id'))
            .order_by('department_id')
        )
        return {
            'total_records': records.count(),
            'current_employees': records.filter(effective_till__isnull=True).count(),
            'by_organization': {row['organization']: row['count'] for row in by_organization},
            'by_department': {row['department_id']: row['count'] for row in by_department},
        }

    @classmethod
    def form_options(cls) -> Dict:
        """Option lists for the employment form."""
        return {
            'departments': [
                {'value': row['id'], 'label': row['name'], 'code': row['code']}
                for row in cls.list_departments()
            ],
            'designations': [
                {
                    'value': row['id'],
                    'label': row['name'],
                    'department_id': row['department_id'],
                    'level': row['level'],
                }
                for row in cls.list_designations()
            ],
            'organizations': [
                {'value': value, 'label': label}
                for value, label in EmploymentRecord.ORGANIZATION_CHOICES
            ],
            'employmentTypes': [
                {'value': value, 'label': value, 'description': description}
                for value, description in EmploymentRecord.TYPE_CHOICES
            ],
        }
