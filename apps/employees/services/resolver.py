"""Relation resolution for employee reads"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..models import Employee
from .registry import RegistryService


logger = logging.getLogger(__name__)


@dataclass
class IntegrityWarning:
    field: str
    reference_id: Optional[int]
    message: str

    def as_dict(self) -> Dict:
        return {'field': self.field, 'reference_id': self.reference_id, 'message': self.message}


@dataclass
class EmployeeView:
    employee: Employee
    department: Optional[Dict] = None
    designation: Optional[Dict] = None
    documents: List = field(default_factory=list)
    education_qualifications: List = field(default_factory=list)
    employment_records: List = field(default_factory=list)
    past_experiences: List = field(default_factory=list)
    status_history: List = field(default_factory=list)
    warnings: List[IntegrityWarning] = field(default_factory=list)

    @property
    def id(self):
        return self.employee.id


class RelationResolver:
    """
    Expands an employee with its registry entries and owned collections.

    A reference whose registry row is gone becomes an ``{'id': ...}`` stub
    plus an ``IntegrityWarning``; the read itself never fails on it.
    """

    @classmethod
    def resolve(cls, employee: Employee) -> EmployeeView:
        view = EmployeeView(employee=employee)

        view.department = cls._reference(
            view, 'department_id', employee.department_id, RegistryService.department_map(), 'Department'
        )
        view.designation = cls._reference(
            view, 'designation_id', employee.designation_id, RegistryService.designation_map(), 'Designation'
        )

        view.documents = list(employee.documents.order_by('id'))
        view.education_qualifications = list(employee.education_qualifications.order_by('id'))
        view.employment_records = list(employee.employment_records.order_by('id'))
        view.past_experiences = list(employee.past_experiences.order_by('id'))
        view.status_history = list(employee.status_changes.order_by('id'))
        return view

    @staticmethod
    def _reference(view, field_name, reference_id, lookup, label):
        if reference_id is None:
            return None
        entry = lookup.get(reference_id)
        if entry is not None:
            return entry
        warning = IntegrityWarning(
            field=field_name,
            reference_id=reference_id,
            message=f"{label} {reference_id} referenced by employee {view.employee.id} does not exist",
        )
        view.warnings.append(warning)
        logger.warning("integrity_warning employee=%s %s", view.employee.id, warning.message)
        return {'id': reference_id}
