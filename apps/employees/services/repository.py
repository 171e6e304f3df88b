"""
Employee Repository - CRUD over the employee aggregate

Every write runs normalization, validation, the reference and CNIC checks
and the persistence of the root row plus its owned collections inside one
transaction, so a failed write leaves nothing behind.
"""

import datetime
import logging
from typing import Dict, List, Optional

from django.contrib.auth.hashers import make_password
from django.db import IntegrityError, transaction
from django.db.models import QuerySet
from django.utils import timezone

from apps.core.exceptions import ConflictException, ResourceNotFoundException, ValidationException
from apps.core.logging import mask_cnic

from ..domain import EmployeeCandidate, EmployeePatch, ValidatedEmployee
from ..models import Employee, StatusChange
from ..normalizers import ROOT_FIELDS, normalize, normalize_collections
from ..validators import COLLECTION_FIELDS, COLLECTION_MODELS, EmployeeValidator
from .registry import RegistryService
from .resolver import EmployeeView, RelationResolver


logger = logging.getLogger(__name__)

SNAPSHOT_FIELDS = [name for name in ROOT_FIELDS if name != 'password']

OFF_DUTY_STATUSES = (Employee.STATUS_SUSPENDED,) + Employee.TERMINAL_STATUSES

CNIC_CONFLICT_MESSAGE = 'An active or suspended employee with this CNIC already exists'


class EmployeeRepository:
    """
    Create, read, update and retire employee records.

    Reads return an ``EmployeeView`` expanded by the relation resolver;
    ``list`` returns a plain queryset of root rows.
    """

    validator_class = EmployeeValidator
    resolver = RelationResolver

    # Reads

    def get_by_id(self, employee_id) -> EmployeeView:
        employee = Employee.objects.filter(pk=employee_id).first()
        if employee is None:
            raise ResourceNotFoundException('Employee', employee_id)
        return self.resolver.resolve(employee)

    def list(self, department=None, designation=None, status=None) -> QuerySet:
        queryset = Employee.objects.order_by('id')
        if department is not None:
            queryset = queryset.filter(department_id=department)
        if designation is not None:
            queryset = queryset.filter(designation_id=designation)
        if status is not None:
            queryset = queryset.filter(status=status)
        return queryset

    # Writes

    def create(self, candidate: EmployeeCandidate) -> EmployeeView:
        data = normalize(candidate.values)
        collections = normalize_collections(candidate.collections)
        collections = self._merge_entries(None, collections)
        validated = self.validator_class().validate(data, collections)
        self._check_references(validated)

        fields = validated.to_model_fields()
        password = fields.pop('password', None)

        try:
            with transaction.atomic():
                self._check_cnic_unique(fields['cnic'], fields['status'])
                employee = Employee(**fields)
                employee.password = make_password(password) if password else None
                employee.save()
                for name, entries in validated.collections.items():
                    self._sync_collection(employee, name, entries)
        except IntegrityError:
            raise ConflictException(CNIC_CONFLICT_MESSAGE)

        logger.info("employee_created id=%s cnic=%s", employee.id, mask_cnic(employee.cnic))
        return self.get_by_id(employee.id)

    def update(self, employee_id, patch: EmployeePatch) -> EmployeeView:
        try:
            with transaction.atomic():
                employee = self._lock(employee_id)
                previous_status = employee.status

                data = normalize(patch.values, existing=self._snapshot(employee))
                collections = normalize_collections(patch.collections)
                collections = self._merge_entries(employee, collections)
                validated = self.validator_class().validate(data, collections)
                self._check_references(validated)

                fields = validated.to_model_fields()
                password_set = 'password' in fields
                password = fields.pop('password', None)

                self._check_cnic_unique(fields['cnic'], fields['status'], exclude_id=employee.id)
                for name, value in fields.items():
                    setattr(employee, name, value)
                moved_off_duty = employee.status != previous_status and employee.status in OFF_DUTY_STATUSES
                if moved_off_duty and employee.termination_or_suspend_date is None:
                    employee.termination_or_suspend_date = timezone.localdate()
                if password_set:
                    employee.password = make_password(password) if password else None
                employee.save()

                for name, entries in validated.collections.items():
                    self._sync_collection(employee, name, entries)

                if employee.status != previous_status:
                    self._record_status_change(
                        employee,
                        previous_status,
                        reason=employee.termination_reason if employee.status in OFF_DUTY_STATUSES else None,
                        effective_date=employee.termination_or_suspend_date,
                    )
        except IntegrityError:
            raise ConflictException(CNIC_CONFLICT_MESSAGE)

        logger.info("employee_updated id=%s fields=%s", employee.id, sorted(patch.values) + sorted(patch.collections))
        return self.get_by_id(employee.id)

    def soft_terminate(
        self,
        employee_id,
        reason: Optional[str] = None,
        date: Optional[datetime.date] = None,
        status: str = Employee.STATUS_TERMINATED,
    ) -> EmployeeView:
        """
        Move an employee off duty without removing anything.

        Only the lifecycle fields change. Repeating the call with the same
        arguments leaves the record as it was and adds no history row.
        """
        if status not in OFF_DUTY_STATUSES:
            raise ValidationException([
                {'field': 'status', 'message': f'"{status}" is not an off-duty status.'}
            ])

        try:
            with transaction.atomic():
                employee = self._lock(employee_id)
                previous_status = employee.status

                if status == Employee.STATUS_SUSPENDED and employee.is_terminal:
                    self._check_cnic_unique(employee.cnic, status, exclude_id=employee.id)

                if date is None:
                    if previous_status == status and employee.termination_or_suspend_date:
                        date = employee.termination_or_suspend_date
                    else:
                        date = timezone.localdate()

                employee.status = status
                employee.termination_or_suspend_date = date
                if reason is not None:
                    employee.termination_reason = reason.strip() or None
                employee.save(update_fields=[
                    'status', 'termination_or_suspend_date', 'termination_reason', 'updated_at'
                ])

                if status != previous_status:
                    self._record_status_change(employee, previous_status, reason=employee.termination_reason,
                                               effective_date=date)
        except IntegrityError:
            raise ConflictException(CNIC_CONFLICT_MESSAGE)

        logger.info("employee_status id=%s %s->%s", employee.id, previous_status, status)
        return self.get_by_id(employee.id)

    def delete(self, employee_id, purge: bool = False) -> None:
        """
        Remove an employee row.

        Without ``purge`` the delete is refused while documents,
        qualifications, employment records or past experience exist;
        ``purge`` removes the employee with every owned row.
        """
        with transaction.atomic():
            employee = self._lock(employee_id)
            if not purge and employee.has_owned_records():
                raise ConflictException(
                    'Employee has owned records; terminate the employee instead of deleting'
                )
            employee.delete()
        logger.info("employee_deleted id=%s purge=%s", employee_id, purge)

    # Helpers

    @staticmethod
    def _lock(employee_id) -> Employee:
        employee = Employee.objects.select_for_update().filter(pk=employee_id).first()
        if employee is None:
            raise ResourceNotFoundException('Employee', employee_id)
        return employee

    @staticmethod
    def _snapshot(employee: Employee) -> Dict:
        return {name: getattr(employee, name) for name in SNAPSHOT_FIELDS}

    @staticmethod
    def _check_references(validated: ValidatedEmployee) -> None:
        RegistryService.get_department(validated.fields['department_id'])
        RegistryService.get_designation(validated.fields['designation_id'])
        for entry in validated.collections.get('employment_records') or []:
            if entry.get('department_id') is not None:
                RegistryService.get_department(entry['department_id'])
            if entry.get('designation_id') is not None:
                RegistryService.get_designation(entry['designation_id'])

    @staticmethod
    def _check_cnic_unique(cnic, status, exclude_id=None) -> None:
        if status not in Employee.LIVE_STATUSES:
            return
        clashes = Employee.objects.filter(cnic=cnic, status__in=Employee.LIVE_STATUSES)
        if exclude_id is not None:
            clashes = clashes.exclude(pk=exclude_id)
        if clashes.exists():
            raise ConflictException(CNIC_CONFLICT_MESSAGE)

    @staticmethod
    def _merge_entries(employee: Optional[Employee], collections: Dict) -> Dict:
        """
        Overlay entries that carry an ``id`` onto the stored row they name.

        An id that is not one of this employee's rows (or is listed twice)
        is a validation error.
        """
        errors = []
        merged = {}
        for name, entries in collections.items():
            if name not in COLLECTION_MODELS or not isinstance(entries, list):
                merged[name] = entries
                continue
            owned = {}
            if employee is not None:
                owned = {row.id: row for row in getattr(employee, name).all()}
            seen = set()
            result = []
            for index, entry in enumerate(entries):
                entry_id = entry.get('id') if isinstance(entry, dict) else None
                if entry_id is None:
                    result.append(entry)
                    continue
                if isinstance(entry_id, bool) or not isinstance(entry_id, int) or entry_id <= 0:
                    errors.append({'field': f'{name}[{index}].id', 'message': 'Must be a positive integer id.'})
                    continue
                if entry_id not in owned:
                    errors.append({
                        'field': f'{name}[{index}].id',
                        'message': f'{entry_id} is not a record of this employee.',
                    })
                    continue
                if entry_id in seen:
                    errors.append({'field': f'{name}[{index}].id', 'message': f'{entry_id} is listed more than once.'})
                    continue
                seen.add(entry_id)
                stored = {field: getattr(owned[entry_id], field) for field in COLLECTION_FIELDS[name]}
                stored.update(entry)
                result.append(stored)
            merged[name] = result
        if errors:
            raise ValidationException(errors)
        return merged

    @staticmethod
    def _sync_collection(employee: Employee, name: str, entries: Optional[List[Dict]]) -> None:
        model = COLLECTION_MODELS[name]
        existing = {row.id: row for row in getattr(employee, name).all()}

        if entries is None:
            model.objects.filter(employee=employee).delete()
            return

        kept = set()
        for entry in entries:
            values = {key: value for key, value in entry.items() if key != 'id'}
            entry_id = entry.get('id')
            if entry_id is None:
                model.objects.create(employee=employee, **values)
                continue
            row = existing[entry_id]
            for key, value in values.items():
                setattr(row, key, value)
            row.save()
            kept.add(entry_id)

        stale = set(existing) - kept
        if stale:
            model.objects.filter(employee=employee, id__in=stale).delete()

    @staticmethod
    def _record_status_change(employee, previous_status, reason=None, effective_date=None) -> None:
        StatusChange.objects.create(
            employee=employee,
            from_status=previous_status,
            to_status=employee.status,
            reason=reason,
            effective_date=effective_date,
        )
