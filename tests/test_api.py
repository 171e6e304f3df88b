"""
HTTP API tests

Every response uses the {success, <resource>, message} envelope; errors
carry {success: false, code, message, errors}.
"""

import pytest
from rest_framework import status
from rest_framework.test import APIClient

from apps.employees.models import Department, Document, Employee, EmploymentRecord, StatusChange
from tests.factories import DepartmentFactory, DesignationFactory, EmployeeFactory, employee_payload


pytestmark = pytest.mark.django_db


@pytest.fixture
def client():
    return APIClient()


@pytest.fixture
def department():
    return DepartmentFactory(name='Engineering', code='ENG')


@pytest.fixture
def designation(department):
    return DesignationFactory(name='Engineer', department=department)


class TestEmployeeCreate:

    def test_create_with_collections(self, client, department, designation):
        payload = employee_payload(
            department, designation,
            gender='Male',
            password='s3cret-pass',
            documents=[{'file_path': 'docs/cnic.pdf', 'document_name': 'CNIC'}],
            educationQualifications=[{'education_level': 'masters', 'institution_name': 'PU'}],
            employmentRecords=[{'organization': 'PSBA', 'department_id': department.id}],
        )
        response = client.post('/api/employees', payload, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body['success'] is True
        assert body['message'] == 'Employee created successfully.'
        employee = body['employee']
        assert employee['cnic'] == '3520212345671'
        assert employee['status'] == 'active'
        assert employee['gender'] == 'male'
        assert employee['department']['name'] == 'Engineering'
        assert employee['designation']['name'] == 'Engineer'
        assert employee['documents'][0]['document_name'] == 'CNIC'
        assert employee['educationQualifications'][0]['institution_name'] == 'PU'
        assert employee['employmentRecords'][0]['employment_type'] == 'Regular'
        assert employee['employmentRecords'][0]['is_current'] is True
        assert employee['pastExperiences'] == []
        assert employee['statusHistory'] == []
        assert employee['warnings'] == []
        assert 'password' not in employee
        assert 'createdAt' in employee

    def test_validation_errors_listed(self, client, department, designation):
        payload = employee_payload(department, designation, cnic='123', full_name='', email='nope')
        response = client.post('/api/employees', payload, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        body = response.json()
        assert body['success'] is False
        assert body['code'] == 'validation_error'
        assert {e['field'] for e in body['errors']} == {'cnic', 'full_name', 'email'}
        assert Employee.objects.count() == 0

    def test_duplicate_cnic_conflict(self, client, department, designation):
        EmployeeFactory(cnic='3520212345671', department=department, designation=designation)
        response = client.post('/api/employees', employee_payload(department, designation), format='json')
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()['code'] == 'conflict'

    def test_unknown_department_not_found(self, client, designation):
        payload = employee_payload(DepartmentFactory.build(id=9999), designation)
        response = client.post('/api/employees', payload, format='json')
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()['message'] == 'Department with ID 9999 not found'

    def test_collection_must_be_list(self, client, department, designation):
        payload = employee_payload(department, designation, documents='a.pdf')
        response = client.post('/api/employees', payload, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['errors'][0]['field'].startswith('documents')

    def test_non_ascii_digit_reference_is_a_validation_error(self, client, department, designation):
        payload = employee_payload(department, designation, department_id='\u00b2')
        response = client.post('/api/employees', payload, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert [e['field'] for e in response.json()['errors']] == ['department_id']

    def test_unhashable_entry_id_is_a_validation_error(self, client, department, designation):
        payload = employee_payload(department, designation, documents=[{'id': [1], 'file_path': 'a.pdf'}])
        response = client.post('/api/employees', payload, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['errors'] == [
            {'field': 'documents[0].id', 'message': 'Must be a positive integer id.'},
        ]

    def test_oversized_file_size_is_a_validation_error(self, client, department, designation):
        payload = employee_payload(department, designation, documents=[{'file_path': 'a.pdf', 'file_size': 2 ** 70}])
        response = client.post('/api/employees', payload, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert [e['field'] for e in response.json()['errors']] == ['documents[0].file_size']
        assert Employee.objects.count() == 0


class TestEmployeeRead:

    def test_list_and_filters(self, client, department, designation):
        other = DesignationFactory()
        first = EmployeeFactory(department=department, designation=designation, full_name='Sana Zulfiqarova')
        EmployeeFactory(department=other.department, designation=other)
        EmployeeFactory(department=department, designation=designation, status='terminated')

        body = client.get('/api/employees').json()
        assert body['success'] is True
        assert len(body['employees']) == 3

        body = client.get('/api/employees', {'department': department.id, 'status': 'active'}).json()
        assert [e['id'] for e in body['employees']] == [first.id]

        body = client.get('/api/employees', {'cnic': f'{first.cnic[:5]}-{first.cnic[5:12]}-{first.cnic[12]}'}).json()
        assert [e['id'] for e in body['employees']] == [first.id]

        body = client.get('/api/employees', {'full_name': 'zulfiqarova'}).json()
        assert [e['id'] for e in body['employees']] == [first.id]

    def test_list_rejects_unknown_status(self, client):
        response = client.get('/api/employees', {'status': 'fired'})
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_retrieve(self, client, department, designation):
        employee = EmployeeFactory(department=department, designation=designation)
        Document.objects.create(employee=employee, file_path='a.pdf')

        body = client.get(f'/api/employees/{employee.id}').json()
        assert body['employee']['id'] == employee.id
        assert body['employee']['department']['id'] == department.id
        assert len(body['employee']['documents']) == 1

    def test_retrieve_reports_dangling_reference(self, client):
        designation = DesignationFactory(department=None)
        department = DepartmentFactory()
        employee = EmployeeFactory(department=department, designation=designation)
        Department.objects.filter(pk=department.pk).delete()

        response = client.get(f'/api/employees/{employee.id}')
        assert response.status_code == status.HTTP_200_OK
        body = response.json()['employee']
        assert body['department'] == {'id': department.id}
        assert body['warnings'][0]['field'] == 'department_id'

    def test_not_found(self, client):
        assert client.get('/api/employees/9999').status_code == status.HTTP_404_NOT_FOUND
        response = client.get('/api/employees/abc')
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()['success'] is False


class TestEmployeeUpdate:

    @pytest.fixture
    def employee(self, department, designation):
        return EmployeeFactory(department=department, designation=designation, city='Lahore')

    def test_patch(self, client, employee):
        response = client.patch(f'/api/employees/{employee.id}', {'city': 'Multan'}, format='json')
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body['message'] == 'Employee updated successfully.'
        assert body['employee']['city'] == 'Multan'
        assert body['employee']['full_name'] == employee.full_name

    def test_put_is_partial(self, client, employee):
        response = client.put(f'/api/employees/{employee.id}', {'mobile_number': '03001234567'}, format='json')
        assert response.status_code == status.HTTP_200_OK
        assert response.json()['employee']['city'] == 'Lahore'

    def test_collection_replace_and_clear(self, client, employee):
        kept = Document.objects.create(employee=employee, file_path='a.pdf')
        Document.objects.create(employee=employee, file_path='b.pdf')

        response = client.patch(
            f'/api/employees/{employee.id}',
            {'documents': [{'id': kept.id, 'document_name': 'Kept'}]},
            format='json',
        )
        documents = response.json()['employee']['documents']
        assert [(d['id'], d['file_path'], d['document_name']) for d in documents] == [(kept.id, 'a.pdf', 'Kept')]

        response = client.patch(f'/api/employees/{employee.id}', {'documents': None}, format='json')
        assert response.json()['employee']['documents'] == []

    def test_invalid_update_changes_nothing(self, client, employee):
        response = client.patch(
            f'/api/employees/{employee.id}',
            {'city': 'Multan', 'cnic': 'abc'},
            format='json',
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        employee.refresh_from_db()
        assert employee.city == 'Lahore'

    def test_status_change_in_history(self, client, employee):
        client.patch(f'/api/employees/{employee.id}', {'status': 'suspended'}, format='json')
        body = client.get(f'/api/employees/{employee.id}').json()
        history = body['employee']['statusHistory']
        assert [(h['from_status'], h['to_status']) for h in history] == [('active', 'suspended')]


class TestEmployeeLifecycle:

    def test_terminate(self, client, department, designation):
        employee = EmployeeFactory(department=department, designation=designation)
        response = client.post(
            f'/api/employees/{employee.id}/terminate',
            {'reason': 'Contract ended', 'date': '2024-06-30'},
            format='json',
        )
        assert response.status_code == status.HTTP_200_OK
        body = response.json()['employee']
        assert body['status'] == 'terminated'
        assert body['termination_or_suspend_date'] == '2024-06-30'
        assert body['termination_reason'] == 'Contract ended'
        assert len(body['statusHistory']) == 1

        client.post(f'/api/employees/{employee.id}/terminate', {'reason': 'Contract ended'}, format='json')
        assert StatusChange.objects.filter(employee=employee).count() == 1

    def test_terminate_rejects_bad_status(self, client, department, designation):
        employee = EmployeeFactory(department=department, designation=designation)
        response = client.post(f'/api/employees/{employee.id}/terminate', {'status': 'active'}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete(self, client, department, designation):
        bare = EmployeeFactory(department=department, designation=designation)
        response = client.delete(f'/api/employees/{bare.id}')
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {'success': True, 'message': 'Employee deleted successfully.'}
        assert not Employee.objects.filter(pk=bare.pk).exists()

    def test_delete_with_owned_records_conflicts(self, client, department, designation):
        employee = EmployeeFactory(department=department, designation=designation)
        Document.objects.create(employee=employee, file_path='a.pdf')
        response = client.delete(f'/api/employees/{employee.id}')
        assert response.status_code == status.HTTP_409_CONFLICT
        assert Employee.objects.filter(pk=employee.pk).exists()


class TestRegistries:

    def test_department_crud(self, client):
        response = client.post('/api/departments', {'name': 'Finance', 'code': 'FIN'}, format='json')
        assert response.status_code == status.HTTP_201_CREATED
        department = response.json()['department']
        assert department['name'] == 'Finance'

        response = client.post('/api/departments', {'name': 'FINANCE'}, format='json')
        assert response.status_code == status.HTTP_409_CONFLICT

        response = client.patch(f"/api/departments/{department['id']}", {'description': 'Accounts'}, format='json')
        assert response.json()['department']['description'] == 'Accounts'

        body = client.get('/api/departments').json()
        assert [d['code'] for d in body['departments']] == ['FIN']

        assert client.get(f"/api/departments/{department['id']}").json()['department']['name'] == 'Finance'

        response = client.delete(f"/api/departments/{department['id']}")
        assert response.status_code == status.HTTP_200_OK
        assert client.get(f"/api/departments/{department['id']}").status_code == status.HTTP_404_NOT_FOUND

    def test_department_name_required(self, client):
        response = client.post('/api/departments', {'code': 'X'}, format='json')
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()['errors'][0]['field'] == 'name'

    def test_department_in_use(self, client):
        employee = EmployeeFactory()
        response = client.delete(f'/api/departments/{employee.department_id}')
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_statistics(self, client):
        EmployeeFactory()
        body = client.get('/api/departments/statistics').json()
        assert body['statistics']['total_departments'] == 1
        assert body['statistics']['departments'][0]['employee_count'] == 1

    def test_designations(self, client, department):
        response = client.post(
            '/api/designations',
            {'name': 'Engineer', 'department_id': department.id, 'level': 2},
            format='json',
        )
        assert response.status_code == status.HTTP_201_CREATED
        designation = response.json()['designation']
        DesignationFactory()

        body = client.get('/api/designations', {'department': department.id}).json()
        assert [d['id'] for d in body['designations']] == [designation['id']]
        assert len(client.get('/api/designations').json()['designations']) == 2

        response = client.put(f"/api/designations/{designation['id']}", {'level': 4}, format='json')
        assert response.json()['designation']['level'] == 4

        assert client.get('/api/designations', {'department': 'abc'}).status_code == status.HTTP_400_BAD_REQUEST
        assert client.delete(f"/api/designations/{designation['id']}").status_code == status.HTTP_200_OK

    def test_designation_statistics(self, client, designation):
        body = client.get('/api/designations/statistics').json()
        assert body['success'] is True
        assert body['statistics']['total_designations'] == 1
        assert body['statistics']['by_department'] == {'Engineering': 1}
        assert body['statistics']['designations'][0]['id'] == designation.id

    def test_employment_statistics(self, client, department):
        employee = EmployeeFactory()
        EmploymentRecord.objects.create(employee=employee, organization='PMBMC', department=department)
        body = client.get('/api/employment/statistics').json()
        assert body['statistics'] == {
            'total_records': 1,
            'current_employees': 1,
            'by_organization': {'PMBMC': 1},
            'by_department': {str(department.id): 1},
        }

    def test_form_options(self, client, designation):
        body = client.get('/api/employment/form-options').json()
        options = body['options']
        assert options['departments'][0]['value'] == designation.department_id
        assert options['designations'][0]['value'] == designation.id
        assert len(options['organizations']) == 3
        assert options['employmentTypes'][0] == {
            'value': 'Regular', 'label': 'Regular', 'description': 'Permanent employment',
        }


class TestProbes:

    def test_health_has_correlation_id(self, client):
        response = client.get('/api/health', HTTP_X_CORRELATION_ID='req-1')
        assert response.status_code == 200
        assert response['X-Correlation-ID'] == 'req-1'

    def test_readiness(self, client):
        response = client.get('/api/readiness')
        assert response.status_code == 200
        assert response.json() == {'success': True, 'db': 'ok', 'cache': 'ok'}
