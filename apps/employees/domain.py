"""
Typed write objects for the employee aggregate.

``EmployeeCandidate`` carries a create request, ``EmployeePatch`` a partial
update. Both keep root fields and owned collections apart; in a patch the
presence of a key is what marks a field as set, so an explicit ``None``
clears a value while an absent key leaves it alone.

``ValidatedEmployee`` is what the validator hands to the repository. The
gated field groups are optional sub-records, so a guardian name without a
relationship (or a disability type without the flag) cannot be expressed.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# Owned collections, keyed by the related name on Employee
COLLECTIONS = (
    'documents',
    'education_qualifications',
    'employment_records',
    'past_experiences',
)

# Fields that only exist inside a gated sub-record once validated
GUARDIAN_FIELDS = ('father_husband_name', 'relationship_type')
DISABILITY_FIELDS = ('has_disability', 'disability_type', 'disability_description')
MEDICAL_FIELDS = ('medical_fitness_status', 'medical_fitness_file')


@dataclass
class EmployeeCandidate:
    values: Dict[str, Any] = field(default_factory=dict)
    collections: Dict[str, Optional[List[dict]]] = field(default_factory=dict)


@dataclass
class EmployeePatch:
    values: Dict[str, Any] = field(default_factory=dict)
    collections: Dict[str, Optional[List[dict]]] = field(default_factory=dict)

    def is_set(self, name: str) -> bool:
        return name in self.values or name in self.collections

    def __bool__(self):
        return bool(self.values or self.collections)


@dataclass
class GuardianRelation:
    name: str
    relationship_type: str


@dataclass
class Disability:
    disability_type: str
    description: Optional[str] = None


@dataclass
class MedicalFitness:
    file: Optional[str] = None


@dataclass
class ValidatedEmployee:
    fields: Dict[str, Any]
    guardian: Optional[GuardianRelation] = None
    disability: Optional[Disability] = None
    medical_fitness: Optional[MedicalFitness] = None
    # False and None both mean "no fitness certificate on record"
    medical_fitness_status: Optional[bool] = None
    collections: Dict[str, Optional[List[dict]]] = field(default_factory=dict)

    def to_model_fields(self) -> Dict[str, Any]:
        """Flatten the sub-records back into Employee column values."""
        data = dict(self.fields)
        data['father_husband_name'] = self.guardian.name if self.guardian else None
        data['relationship_type'] = self.guardian.relationship_type if self.guardian else None
        data['has_disability'] = self.disability is not None
        data['disability_type'] = self.disability.disability_type if self.disability else None
        data['disability_description'] = self.disability.description if self.disability else None
        if self.medical_fitness is not None:
            data['medical_fitness_status'] = True
            data['medical_fitness_file'] = self.medical_fitness.file
        else:
            data['medical_fitness_status'] = self.medical_fitness_status
            data['medical_fitness_file'] = None
        return data
