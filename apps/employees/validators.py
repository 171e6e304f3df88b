"""
Employee Validator

Accepts or rejects a normalized employee record. Every violation found is
collected and raised together as one ``ValidationException``; nothing is
written when validation fails. Uniqueness and reference existence need the
database and are checked by the repository instead.
"""

import re
from datetime import date

from django.core.exceptions import FieldDoesNotExist, ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.utils import timezone

from apps.core.exceptions import ValidationException

from .domain import (
    COLLECTIONS,
    DISABILITY_FIELDS,
    GUARDIAN_FIELDS,
    MEDICAL_FIELDS,
    Disability,
    GuardianRelation,
    MedicalFitness,
    ValidatedEmployee,
)
from .models import Document, EducationQualification, Employee, EmploymentRecord, PastExperience
from .normalizers import (
    BOOLEAN_FIELDS,
    COLLECTION_ENUMS,
    DATE_FIELDS,
    ENUM_FIELDS,
    FILE_LIST_FIELDS,
    REFERENCE_FIELDS,
    ROOT_FIELDS,
    TEXT_FIELDS,
)


REQUIRED_FIELDS = ('full_name', 'cnic', 'department_id', 'designation_id', 'status')
CNIC_PATTERN = re.compile(r'^\d{13}$')
MIN_YEAR = 1900
# Upper bound of PositiveBigIntegerField
MAX_FILE_SIZE = 9223372036854775807

COLLECTION_MODELS = {
    'documents': Document,
    'education_qualifications': EducationQualification,
    'employment_records': EmploymentRecord,
    'past_experiences': PastExperience,
}

COLLECTION_FIELDS = {
    'documents': ('id', 'file_path', 'file_type', 'document_name', 'file_size', 'mime_type'),
    'education_qualifications': ('id', 'education_level', 'institution_name', 'year_of_completion', 'marks_gpa'),
    'employment_records': (
        'id', 'organization', 'department_id', 'designation_id', 'employment_type',
        'effective_from', 'effective_till', 'role_tag', 'office_location', 'scale_grade',
        'remarks', 'is_on_probation', 'probation_end_date',
    ),
    'past_experiences': ('id', 'company_name', 'position', 'start_date', 'end_date', 'description'),
}
COLLECTION_REQUIRED = {
    'documents': ('file_path',),
    'education_qualifications': ('education_level',),
    'employment_records': ('organization',),
    'past_experiences': ('company_name',),
}
COLLECTION_RANGES = {
    'employment_records': ('effective_from', 'effective_till'),
    'past_experiences': ('start_date', 'end_date'),
}


def _is_int(value):
    return isinstance(value, int) and not isinstance(value, bool)


def _max_length(name, model=Employee):
    try:
        return model._meta.get_field(name).max_length
    except FieldDoesNotExist:
        return None


class EmployeeValidator:
    """Validates one normalized employee record and its owned collections."""

    def __init__(self):
        self.errors = []

    def add_error(self, field, message):
        self.errors.append({'field': field, 'message': message})

    def validate(self, data, collections=None):
        """
        Return a ``ValidatedEmployee`` for ``data`` or raise
        ``ValidationException`` listing every field-level violation.
        """
        self.errors = []
        collections = collections or {}

        for name in data:
            if name not in ROOT_FIELDS:
                self.add_error(name, 'Unknown field.')

        for name in REQUIRED_FIELDS:
            if data.get(name) is None:
                self.add_error(name, 'This field is required.')

        self._check_fields(data)
        self._check_cross_fields(data)

        for name, entries in collections.items():
            self._check_collection(name, entries)

        if self.errors:
            raise ValidationException(self.errors)

        return self._build(data, collections)

    # Per-field checks

    def _check_fields(self, data):
        cnic = data.get('cnic')
        if cnic is not None and not (isinstance(cnic, str) and CNIC_PATTERN.match(cnic)):
            self.add_error('cnic', 'CNIC must be exactly 13 digits.')

        for name, vocabulary in ENUM_FIELDS.items():
            value = data.get(name)
            if value is not None and value not in vocabulary:
                self.add_error(name, f'"{value}" is not a valid choice.')

        for name in TEXT_FIELDS:
            value = data.get(name)
            if value is None:
                continue
            if not isinstance(value, str):
                self.add_error(name, 'Must be a string.')
                continue
            max_length = _max_length(name)
            if max_length and len(value) > max_length:
                self.add_error(name, f'Ensure this field has no more than {max_length} characters.')

        email = data.get('email')
        if isinstance(email, str):
            try:
                validate_email(email)
            except DjangoValidationError:
                self.add_error('email', 'Enter a valid email address.')

        for name in DATE_FIELDS:
            value = data.get(name)
            if value is not None and not isinstance(value, date):
                self.add_error(name, 'Enter a valid date (YYYY-MM-DD).')

        for name in BOOLEAN_FIELDS:
            value = data.get(name)
            if value is not None and not isinstance(value, bool):
                self.add_error(name, 'Must be a boolean.')

        for name in REFERENCE_FIELDS:
            value = data.get(name)
            if value is not None and not (_is_int(value) and value > 0):
                self.add_error(name, 'Must be a positive integer id.')

        for name in FILE_LIST_FIELDS:
            value = data.get(name)
            if value is None:
                continue
            if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
                self.add_error(name, 'Must be a list of file references.')

        password = data.get('password')
        if password is not None and not isinstance(password, str):
            self.add_error('password', 'Must be a string.')

    def _check_cross_fields(self, data):
        guardian_name = data.get('father_husband_name')
        relationship = data.get('relationship_type')
        if guardian_name is not None and relationship is None:
            self.add_error('relationship_type', 'Required when father_husband_name is set.')
        if relationship is not None and guardian_name is None:
            self.add_error('father_husband_name', 'Required when relationship_type is set.')

        if data.get('has_disability') is True and data.get('disability_type') is None:
            self.add_error('disability_type', 'Required when has_disability is true.')

        today = timezone.localdate()
        birth = data.get('date_of_birth')
        if isinstance(birth, date) and birth > today:
            self.add_error('date_of_birth', 'Date of birth cannot be in the future.')

        issued = data.get('cnic_issue_date')
        expires = data.get('cnic_expiry_date')
        if isinstance(issued, date) and isinstance(expires, date) and issued >= expires:
            self.add_error('cnic_expiry_date', 'CNIC expiry date must be after the issue date.')

    # Owned collections

    def _check_collection(self, name, entries):
        if name not in COLLECTIONS:
            self.add_error(name, 'Unknown collection.')
            return
        if entries is None:
            return
        if not isinstance(entries, (list, tuple)):
            self.add_error(name, 'Expected a list.')
            return
        for index, entry in enumerate(entries):
            self._check_entry(name, f'{name}[{index}]', entry)

    def _check_entry(self, collection, path, entry):
        if not isinstance(entry, dict):
            self.add_error(path, 'Expected an object.')
            return

        allowed = COLLECTION_FIELDS[collection]
        for key in entry:
            if key not in allowed:
                self.add_error(f'{path}.{key}', 'Unknown field.')

        for key in COLLECTION_REQUIRED[collection]:
            if entry.get(key) is None:
                self.add_error(f'{path}.{key}', 'This field is required.')

        entry_id = entry.get('id')
        if entry_id is not None and not (_is_int(entry_id) and entry_id > 0):
            self.add_error(f'{path}.id', 'Must be a positive integer id.')

        for key, vocabulary in COLLECTION_ENUMS.get(collection, {}).items():
            value = entry.get(key)
            if value is not None and value not in vocabulary:
                self.add_error(f'{path}.{key}', f'"{value}" is not a valid choice.')

        for key in ('department_id', 'designation_id'):
            value = entry.get(key)
            if key in allowed and value is not None and not (_is_int(value) and value > 0):
                self.add_error(f'{path}.{key}', 'Must be a positive integer id.')

        for key in ('effective_from', 'effective_till', 'probation_end_date', 'start_date', 'end_date'):
            value = entry.get(key)
            if key in allowed and value is not None and not isinstance(value, date):
                self.add_error(f'{path}.{key}', 'Enter a valid date (YYYY-MM-DD).')

        bounds = COLLECTION_RANGES.get(collection)
        if bounds:
            start, end = entry.get(bounds[0]), entry.get(bounds[1])
            if isinstance(start, date) and isinstance(end, date) and start > end:
                self.add_error(f'{path}.{bounds[1]}', f'Must not be before {bounds[0]}.')

        if collection == 'documents':
            size = entry.get('file_size')
            if size is not None and not (_is_int(size) and 0 <= size <= MAX_FILE_SIZE):
                self.add_error(f'{path}.file_size', f'Must be an integer between 0 and {MAX_FILE_SIZE}.')

        if collection == 'education_qualifications':
            year = entry.get('year_of_completion')
            if year is not None and not (_is_int(year) and MIN_YEAR <= year <= timezone.localdate().year):
                self.add_error(f'{path}.year_of_completion', 'Enter a valid year that is not in the future.')

        if collection == 'employment_records':
            probation = entry.get('is_on_probation')
            if probation is not None and not isinstance(probation, bool):
                self.add_error(f'{path}.is_on_probation', 'Must be a boolean.')

        enums = COLLECTION_ENUMS.get(collection, {})
        for key, value in entry.items():
            if key not in allowed:
                continue
            if isinstance(value, (list, dict)):
                self.add_error(f'{path}.{key}', 'Must be a scalar value.')
            elif isinstance(value, str) and key not in enums:
                max_length = _max_length(key, COLLECTION_MODELS[collection])
                if max_length and len(value) > max_length:
                    self.add_error(f'{path}.{key}', f'Ensure this field has no more than {max_length} characters.')

    # Domain object

    def _build(self, data, collections):
        gated = GUARDIAN_FIELDS + DISABILITY_FIELDS + MEDICAL_FIELDS
        fields = {name: value for name, value in data.items() if name not in gated}

        guardian = None
        if data.get('father_husband_name') is not None:
            guardian = GuardianRelation(
                name=data['father_husband_name'],
                relationship_type=data['relationship_type'],
            )

        disability = None
        if data.get('has_disability') is True:
            disability = Disability(
                disability_type=data['disability_type'],
                description=data.get('disability_description'),
            )

        medical_fitness = None
        if data.get('medical_fitness_status') is True:
            medical_fitness = MedicalFitness(file=data.get('medical_fitness_file'))

        if fields.get('same_address') is True:
            fields['permanent_address'] = fields.get('present_address')

        return ValidatedEmployee(
            fields=fields,
            guardian=guardian,
            disability=disability,
            medical_fitness=medical_fitness,
            medical_fitness_status=data.get('medical_fitness_status'),
            collections=dict(collections),
        )


def validate(data, collections=None):
    return EmployeeValidator().validate(data, collections)
