import pytest

from apps.employees.models import Department, Designation, Document, StatusChange
from apps.employees.services import RelationResolver
from tests.factories import DepartmentFactory, DesignationFactory, EmployeeFactory


pytestmark = pytest.mark.django_db


def test_resolves_registry_entries_and_collections():
    employee = EmployeeFactory()
    Document.objects.create(employee=employee, file_path='b.pdf')
    Document.objects.create(employee=employee, file_path='a.pdf')
    StatusChange.objects.create(employee=employee, from_status='active', to_status='suspended')

    view = RelationResolver.resolve(employee)

    assert view.id == employee.id
    assert view.department['id'] == employee.department_id
    assert view.department['name'] == employee.department.name
    assert view.designation['department_id'] == employee.department_id
    assert [d.file_path for d in view.documents] == ['b.pdf', 'a.pdf']
    assert len(view.status_history) == 1
    assert view.warnings == []


def test_dangling_reference_becomes_stub_with_warning():
    department = DepartmentFactory()
    designation = DesignationFactory(department=None)
    employee = EmployeeFactory(department=department, designation=designation)
    department_id = department.id

    # Removed behind the registry service's back
    Department.objects.filter(pk=department_id).delete()

    view = RelationResolver.resolve(employee)

    assert view.department == {'id': department_id}
    assert view.designation['id'] == designation.id
    assert [w.as_dict()['field'] for w in view.warnings] == ['department_id']
    assert view.warnings[0].reference_id == department_id


def test_both_references_dangling():
    employee = EmployeeFactory()
    Designation.objects.filter(pk=employee.designation_id).delete()
    Department.objects.filter(pk=employee.department_id).delete()

    view = RelationResolver.resolve(employee)

    assert view.department == {'id': employee.department_id}
    assert view.designation == {'id': employee.designation_id}
    assert [w.field for w in view.warnings] == ['department_id', 'designation_id']
