import factory

from apps.employees.models import Department, Designation, Employee


class DepartmentFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Department
    name = factory.Sequence(lambda n: f'Department {n}')
    code = factory.Sequence(lambda n: f'D{n:03d}')
    description = factory.Faker('sentence')


class DesignationFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Designation
    name = factory.Sequence(lambda n: f'Designation {n}')
    department = factory.SubFactory(DepartmentFactory)
    level = 1


class EmployeeFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Employee
    cnic = factory.Sequence(lambda n: f'{3520100000000 + n}')
    full_name = factory.Faker('name')
    department = factory.SubFactory(DepartmentFactory)
    designation = factory.SubFactory(
        DesignationFactory, department=factory.SelfAttribute('..department')
    )
    status = Employee.STATUS_ACTIVE


def employee_payload(department, designation, **overrides):
    """Minimal valid create body for ``department``/``designation``."""
    payload = {
        'full_name': 'Ali Raza',
        'cnic': '35202-1234567-1',
        'department_id': department.id,
        'designation_id': designation.id,
    }
    payload.update(overrides)
    return payload
