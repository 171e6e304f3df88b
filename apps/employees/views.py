"""
Employee Views
"""

import logging

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.views import APIView
from django.db import transaction
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import OpenApiParameter, extend_schema

from apps.core.exceptions import ResourceNotFoundException, ValidationException
from apps.core.response import created_response, deleted_response, success_response

import apps.employees.serializers as emp_serializers
from .filters import EmployeeFilter
from .services import EmployeeRepository, RegistryService

logger = logging.getLogger(__name__)


def _pk(value, resource_type):
    """URL ids are integers; anything else cannot name a record."""
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ResourceNotFoundException(resource_type, value)


class EmployeeViewSet(viewsets.GenericViewSet):
    """
    Employee records.

    Create and update decode the body into a typed candidate and hand it to
    the repository; PUT and PATCH are both partial updates.
    """

    serializer_class = emp_serializers.EmployeeListSerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = EmployeeFilter
    repository = EmployeeRepository()

    def get_queryset(self):
        return self.repository.list()

    def _detail(self, view):
        return emp_serializers.EmployeeDetailSerializer(view).data

    def list(self, request):
        queryset = self.filter_queryset(self.get_queryset())
        serializer = emp_serializers.EmployeeListSerializer(queryset, many=True)
        return success_response(employees=serializer.data)

    def retrieve(self, request, pk=None):
        view = self.repository.get_by_id(_pk(pk, 'Employee'))
        return success_response(employee=self._detail(view))

    @extend_schema(request=emp_serializers.EmployeeWriteSerializer)
    @transaction.atomic
    def create(self, request):
        serializer = emp_serializers.EmployeeWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        view = self.repository.create(serializer.to_candidate())
        return created_response(message='Employee created successfully.', employee=self._detail(view))

    @extend_schema(request=emp_serializers.EmployeeWriteSerializer)
    @transaction.atomic
    def update(self, request, pk=None):
        employee_id = _pk(pk, 'Employee')
        serializer = emp_serializers.EmployeeWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        view = self.repository.update(employee_id, serializer.to_patch())
        return success_response(message='Employee updated successfully.', employee=self._detail(view))

    @extend_schema(request=emp_serializers.EmployeeWriteSerializer)
    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        self.repository.delete(_pk(pk, 'Employee'))
        return deleted_response('Employee deleted successfully.')

    @extend_schema(request=emp_serializers.TerminateSerializer)
    @action(detail=True, methods=['post'])
    def terminate(self, request, pk=None):
        """Move the employee to terminated (or another off-duty status)"""
        employee_id = _pk(pk, 'Employee')
        serializer = emp_serializers.TerminateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        view = self.repository.soft_terminate(
            employee_id,
            reason=serializer.validated_data.get('reason'),
            date=serializer.validated_data.get('date'),
            status=serializer.validated_data['status'],
        )
        return success_response(message='Employee status updated successfully.', employee=self._detail(view))


class DepartmentViewSet(viewsets.ViewSet):
    """Department registry"""

    def list(self, request):
        return success_response(departments=RegistryService.list_departments())

    def retrieve(self, request, pk=None):
        return success_response(department=RegistryService.get_department(_pk(pk, 'Department')))

    @extend_schema(request=emp_serializers.DepartmentSerializer)
    def create(self, request):
        serializer = emp_serializers.DepartmentSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        department = RegistryService.create_department(serializer.validated_data)
        return created_response(message='Department created successfully.', department=department)

    @extend_schema(request=emp_serializers.DepartmentSerializer)
    def update(self, request, pk=None):
        department_id = _pk(pk, 'Department')
        serializer = emp_serializers.DepartmentSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        department = RegistryService.update_department(department_id, serializer.validated_data)
        return success_response(message='Department updated successfully.', department=department)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        RegistryService.delete_department(_pk(pk, 'Department'))
        return deleted_response('Department deleted successfully.')

    @extend_schema(responses=emp_serializers.DepartmentStatisticsSerializer(many=True))
    @action(detail=False, methods=['get'])
    def statistics(self, request):
        return success_response(statistics=RegistryService.statistics())


class DesignationViewSet(viewsets.ViewSet):
    """Designation registry"""

    @extend_schema(parameters=[OpenApiParameter('department', int, required=False)])
    def list(self, request):
        department = request.query_params.get('department')
        department_id = None
        if department not in (None, ''):
            try:
                department_id = int(department)
            except ValueError:
                raise ValidationException([{'field': 'department', 'message': 'Must be an integer id.'}])
        return success_response(designations=RegistryService.list_designations(department_id))

    def retrieve(self, request, pk=None):
        return success_response(designation=RegistryService.get_designation(_pk(pk, 'Designation')))

    @extend_schema(request=emp_serializers.DesignationSerializer)
    def create(self, request):
        serializer = emp_serializers.DesignationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        designation = RegistryService.create_designation(serializer.validated_data)
        return created_response(message='Designation created successfully.', designation=designation)

    @extend_schema(request=emp_serializers.DesignationSerializer)
    def update(self, request, pk=None):
        designation_id = _pk(pk, 'Designation')
        serializer = emp_serializers.DesignationSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        designation = RegistryService.update_designation(designation_id, serializer.validated_data)
        return success_response(message='Designation updated successfully.', designation=designation)

    def partial_update(self, request, pk=None):
        return self.update(request, pk=pk)

    def destroy(self, request, pk=None):
        RegistryService.delete_designation(_pk(pk, 'Designation'))
        return deleted_response('Designation deleted successfully.')

    @extend_schema(responses=emp_serializers.DesignationStatisticsSerializer)
    @action(detail=False, methods=['get'])
    def statistics(self, request):
        return success_response(statistics=RegistryService.designation_statistics())


class FormOptionsView(APIView):
    """Option lists for the employment form"""

    @extend_schema(responses=emp_serializers.FormOptionsSerializer)
    def get(self, request):
        return success_response(options=RegistryService.form_options())


class EmploymentStatisticsView(APIView):
    """Employment record counts by organization and department"""

    @extend_schema(responses=emp_serializers.EmploymentStatisticsSerializer)
    def get(self, request):
        return success_response(statistics=RegistryService.employment_statistics())
