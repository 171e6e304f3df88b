"""
Registry service tests: cached lookups and guarded writes.
"""

from datetime import date

import pytest
from django.core.cache import cache

from apps.core.exceptions import ConflictException, ResourceNotFoundException
from apps.employees.models import Department, Designation, EmploymentRecord
from apps.employees.services import RegistryService
from apps.employees.services.registry import DEPARTMENTS_CACHE_KEY, DESIGNATIONS_CACHE_KEY
from tests.factories import DepartmentFactory, DesignationFactory, EmployeeFactory


pytestmark = pytest.mark.django_db


class TestCache:

    def test_list_is_cached(self):
        DepartmentFactory(name='Engineering')
        assert [d['name'] for d in RegistryService.list_departments()] == ['Engineering']
        assert cache.get(DEPARTMENTS_CACHE_KEY) is not None

    def test_model_writes_invalidate(self):
        RegistryService.list_departments()
        RegistryService.list_designations()
        department = DepartmentFactory(name='Finance')
        assert cache.get(DEPARTMENTS_CACHE_KEY) is None
        assert cache.get(DESIGNATIONS_CACHE_KEY) is None
        assert RegistryService.get_department(department.id)['name'] == 'Finance'

    def test_queryset_delete_invalidates(self):
        department = DepartmentFactory()
        RegistryService.list_departments()
        Department.objects.filter(pk=department.pk).delete()
        with pytest.raises(ResourceNotFoundException):
            RegistryService.get_department(department.id)


class TestDepartments:

    def test_create(self):
        department = RegistryService.create_department({'name': 'Legal', 'code': 'LEGAL'})
        assert department['name'] == 'Legal'
        assert department['code'] == 'LEGAL'
        assert department['description'] == ''
        assert RegistryService.get_department(department['id']) == department

    def test_duplicate_name_ignores_case(self):
        DepartmentFactory(name='Finance', code='FIN')
        with pytest.raises(ConflictException):
            RegistryService.create_department({'name': 'finance'})
        with pytest.raises(ConflictException):
            RegistryService.create_department({'name': 'Accounts', 'code': 'fin'})

    def test_blank_codes_do_not_clash(self):
        RegistryService.create_department({'name': 'A', 'code': ''})
        RegistryService.create_department({'name': 'B', 'code': ''})
        assert Department.objects.filter(code__isnull=True).count() == 2

    def test_update(self):
        department = DepartmentFactory(name='Ops', code='OPS')
        updated = RegistryService.update_department(department.id, {'name': 'Operations'})
        assert updated['name'] == 'Operations'
        assert updated['code'] == 'OPS'

    def test_update_into_existing_name(self):
        DepartmentFactory(name='HR')
        department = DepartmentFactory(name='Admin')
        with pytest.raises(ConflictException):
            RegistryService.update_department(department.id, {'name': 'hr'})

    def test_missing(self):
        with pytest.raises(ResourceNotFoundException):
            RegistryService.get_department(9999)
        with pytest.raises(ResourceNotFoundException):
            RegistryService.update_department(9999, {'name': 'X'})
        with pytest.raises(ResourceNotFoundException):
            RegistryService.delete_department(9999)

    def test_delete_unused(self):
        department = DepartmentFactory()
        RegistryService.delete_department(department.id)
        assert not Department.objects.filter(pk=department.pk).exists()

    def test_delete_blocked_by_employee(self):
        employee = EmployeeFactory()
        with pytest.raises(ConflictException):
            RegistryService.delete_department(employee.department_id)
        assert RegistryService.department_in_use(employee.department_id)

    def test_delete_blocked_by_designation(self):
        designation = DesignationFactory()
        with pytest.raises(ConflictException):
            RegistryService.delete_department(designation.department_id)

    def test_delete_blocked_by_employment_record(self):
        employee = EmployeeFactory()
        other = DepartmentFactory()
        EmploymentRecord.objects.create(employee=employee, organization='PSBA', department=other)
        with pytest.raises(ConflictException):
            RegistryService.delete_department(other.id)


class TestDesignations:

    def test_create_and_filter_by_department(self):
        engineering = DepartmentFactory()
        finance = DepartmentFactory()
        engineer = RegistryService.create_designation({'name': 'Engineer', 'department_id': engineering.id, 'level': 3})
        RegistryService.create_designation({'name': 'Accountant', 'department_id': finance.id})
        RegistryService.create_designation({'name': 'Advisor'})

        assert engineer['level'] == 3
        assert [d['name'] for d in RegistryService.list_designations(engineering.id)] == ['Engineer']
        assert len(RegistryService.list_designations()) == 3

    def test_unknown_department(self):
        with pytest.raises(ResourceNotFoundException):
            RegistryService.create_designation({'name': 'Engineer', 'department_id': 9999})

    def test_name_unique_within_department(self):
        engineering = DepartmentFactory()
        finance = DepartmentFactory()
        DesignationFactory(name='Manager', department=engineering)
        with pytest.raises(ConflictException):
            RegistryService.create_designation({'name': 'manager', 'department_id': engineering.id})
        RegistryService.create_designation({'name': 'Manager', 'department_id': finance.id})
        assert Designation.objects.filter(name='Manager').count() == 2

    def test_rename_referenced_designation(self):
        employee = EmployeeFactory()
        updated = RegistryService.update_designation(employee.designation_id, {'name': 'Senior Engineer'})
        assert updated['name'] == 'Senior Engineer'

    def test_move_referenced_designation_blocked(self):
        employee = EmployeeFactory()
        other = DepartmentFactory()
        with pytest.raises(ConflictException):
            RegistryService.update_designation(employee.designation_id, {'department_id': other.id})
        assert Designation.objects.get(pk=employee.designation_id).department_id == employee.department_id

    def test_move_unreferenced_designation(self):
        designation = DesignationFactory()
        other = DepartmentFactory()
        updated = RegistryService.update_designation(designation.id, {'department_id': other.id})
        assert updated['department_id'] == other.id

    def test_delete(self):
        designation = DesignationFactory()
        RegistryService.delete_designation(designation.id)
        assert not Designation.objects.filter(pk=designation.pk).exists()

        employee = EmployeeFactory()
        with pytest.raises(ConflictException):
            RegistryService.delete_designation(employee.designation_id)
        assert RegistryService.designation_in_use(employee.designation_id)


class TestAggregates:

    def test_statistics(self):
        engineering = DepartmentFactory(name='Engineering')
        DepartmentFactory(name='Legal')
        engineer = DesignationFactory(department=engineering)
        DesignationFactory(department=engineering)
        employee = EmployeeFactory(department=engineering, designation=engineer)
        EmployeeFactory(department=engineering, designation=engineer)
        EmploymentRecord.objects.create(employee=employee, organization='MBWO', department=engineering)

        stats = RegistryService.statistics()

        assert stats['total_departments'] == 2
        rows = {row['name']: row for row in stats['departments']}
        assert rows['Engineering']['designation_count'] == 2
        assert rows['Engineering']['employee_count'] == 2
        assert rows['Engineering']['employment_count'] == 1
        assert rows['Legal']['employee_count'] == 0

    def test_designation_statistics(self):
        engineering = DepartmentFactory(name='Engineering')
        engineer = DesignationFactory(name='Engineer', department=engineering, level=3)
        DesignationFactory(name='Surveyor', department=engineering)
        DesignationFactory(name='Advisor', department=None)
        employee = EmployeeFactory(department=engineering, designation=engineer)
        EmploymentRecord.objects.create(employee=employee, organization='PSBA', designation=engineer)

        stats = RegistryService.designation_statistics()

        assert stats['total_designations'] == 3
        assert stats['by_department'] == {'Engineering': 2, 'No Department': 1}
        rows = {row['name']: row for row in stats['designations']}
        assert rows['Engineer'] == {
            'id': engineer.id, 'name': 'Engineer', 'department': 'Engineering',
            'level': 3, 'employee_count': 1, 'employment_count': 1,
        }
        assert rows['Advisor']['department'] == 'No Department'

    def test_employment_statistics(self):
        engineering = DepartmentFactory(name='Engineering')
        employee = EmployeeFactory()
        EmploymentRecord.objects.create(employee=employee, organization='PSBA', department=engineering)
        EmploymentRecord.objects.create(employee=employee, organization='PSBA')
        EmploymentRecord.objects.create(
            employee=employee, organization='MBWO', department=engineering,
            effective_from=date(2018, 1, 1), effective_till=date(2020, 6, 30),
        )

        stats = RegistryService.employment_statistics()

        assert stats == {
            'total_records': 3,
            'current_employees': 2,
            'by_organization': {'MBWO': 1, 'PSBA': 2},
            'by_department': {engineering.id: 2},
        }

    def test_employment_statistics_empty(self):
        assert RegistryService.employment_statistics() == {
            'total_records': 0, 'current_employees': 0, 'by_organization': {}, 'by_department': {},
        }

    def test_form_options(self):
        department = DepartmentFactory(name='IT', code='IT')
        DesignationFactory(name='Developer', department=department, level=2)

        options = RegistryService.form_options()

        assert options['departments'] == [{'value': department.id, 'label': 'IT', 'code': 'IT'}]
        assert options['designations'][0]['department_id'] == department.id
        assert [o['value'] for o in options['organizations']] == ['MBWO', 'PMBMC', 'PSBA']
        assert [o['value'] for o in options['employmentTypes']] == ['Regular', 'Contract', 'Probation', 'Internship']
