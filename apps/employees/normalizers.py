"""
Employee Normalizer

Shapes a raw employee payload into canonical form before validation:
trims text, turns blank strings into None, canonicalizes enumeration case,
strips CNIC separators, coerces boolean-like strings and collapses the
gated field groups. It never raises; anything it cannot canonicalize is
passed through unchanged so the validator can report it.
"""

import re
from datetime import datetime

from django.utils.dateparse import parse_date, parse_datetime

from .domain import COLLECTIONS
from .models import (
    QUALIFICATION_CHOICES,
    EmploymentRecord,
    Employee,
)


TEXT_FIELDS = (
    'full_name', 'mother_name', 'father_husband_name', 'nationality',
    'mobile_number', 'whatsapp_number', 'email', 'present_address',
    'permanent_address', 'district', 'city', 'termination_reason',
    'grade_scale', 'special_duty_note', 'document_missing_note',
    'disability_description', 'medical_fitness_file', 'profile_picture_file',
    'cnic_front_file', 'cnic_back_file', 'domicile_certificate_file',
)
DATE_FIELDS = (
    'date_of_birth', 'cnic_issue_date', 'cnic_expiry_date', 'joining_date_mwo',
    'joining_date_pmbmc', 'joining_date_psba', 'termination_or_suspend_date',
)
BOOLEAN_FIELDS = ('same_address', 'has_disability', 'medical_fitness_status')
REFERENCE_FIELDS = ('department_id', 'designation_id')
FILE_LIST_FIELDS = ('educational_certificates_files', 'other_documents_files')


def _values(choices):
    return tuple(value for value, _label in choices)


ENUM_FIELDS = {
    'relationship_type': _values(Employee.RELATIONSHIP_CHOICES),
    'gender': _values(Employee.GENDER_CHOICES),
    'marital_status': _values(Employee.MARITAL_STATUS_CHOICES),
    'religion': _values(Employee.RELIGION_CHOICES),
    'blood_group': _values(Employee.BLOOD_GROUP_CHOICES),
    'domicile_district': _values(Employee.DISTRICT_CHOICES),
    'disability_type': _values(Employee.DISABILITY_CHOICES),
    'filer_status': _values(Employee.FILER_STATUS_CHOICES),
    'filer_active_status': _values(Employee.FILER_ACTIVE_CHOICES),
    'latest_qualification': _values(QUALIFICATION_CHOICES),
    'status': _values(Employee.STATUS_CHOICES),
}

ENUM_ALIASES = {
    'religion': {'islam': 'muslim', 'christian': 'maseehi', 'christianity': 'maseehi'},
    'latest_qualification': {'bachelor': 'bachelors', 'master': 'masters', 'doctorate': 'phd'},
    'filer_status': {'nonfiler': 'non_filer'},
}

ROOT_FIELDS = (
    ('cnic', 'password', 'relationship_type', 'gender', 'marital_status',
     'religion', 'blood_group', 'domicile_district', 'disability_type',
     'filer_status', 'filer_active_status', 'latest_qualification', 'status')
    + TEXT_FIELDS + DATE_FIELDS + BOOLEAN_FIELDS + REFERENCE_FIELDS + FILE_LIST_FIELDS
)

_TRUE_STRINGS = {'true', '1', 'yes', 'y', 'on'}
_FALSE_STRINGS = {'false', '0', 'no', 'n', 'off'}
_CNIC_SEPARATORS = re.compile(r'[\s\-]')
_ASCII_DIGITS = re.compile(r'[0-9]+')
_ISO_TIMESTAMP = re.compile(r'\d{4}-\d{1,2}-\d{1,2}[T ]\d{1,2}:\d{2}')


def normalize_text(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def normalize_boolean(value):
    if isinstance(value, bool) or value is None:
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
        if not lowered:
            return None
    return value


def normalize_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        # A bare date or a full ISO timestamp; nothing else is accepted
        try:
            parsed = parse_date(text)
            if parsed is None and _ISO_TIMESTAMP.match(text):
                moment = parse_datetime(text)
                parsed = moment.date() if moment else None
        except ValueError:
            return text
        return parsed or text
    return value


def normalize_reference(value):
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        return int(text) if _ASCII_DIGITS.fullmatch(text) else text
    return value


def normalize_cnic(value):
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if isinstance(value, str):
        stripped = _CNIC_SEPARATORS.sub('', value)
        return stripped or None
    return value


def normalize_choice(value, vocabulary, aliases=None):
    """
    Map ``value`` onto ``vocabulary`` ignoring case, spaces and hyphens.

    Returns the trimmed input unchanged when no canonical form matches.
    """
    value = normalize_text(value)
    if not isinstance(value, str):
        return value
    if value in vocabulary:
        return value
    folded = {choice.lower(): choice for choice in vocabulary}
    key = re.sub(r'[\s\-]+', '_', value.lower())
    if aliases and key in aliases:
        key = aliases[key]
    if key in folded:
        return folded[key]
    compact = value.replace(' ', '').lower()
    return folded.get(compact, value)


def normalize_file_list(value):
    if isinstance(value, (list, tuple)):
        return [normalize_text(item) for item in value if normalize_text(item) is not None]
    return normalize_text(value)


def normalize_field(name, value):
    if name == 'cnic':
        return normalize_cnic(value)
    if name == 'password':
        return value if value != '' else None
    if name in ENUM_FIELDS:
        return normalize_choice(value, ENUM_FIELDS[name], ENUM_ALIASES.get(name))
    if name in BOOLEAN_FIELDS:
        return normalize_boolean(value)
    if name in DATE_FIELDS:
        return normalize_date(value)
    if name in REFERENCE_FIELDS:
        return normalize_reference(value)
    if name in FILE_LIST_FIELDS:
        return normalize_file_list(value)
    return normalize_text(value)


def apply_gates(data):
    """Collapse address and gated groups on an already merged record."""
    for flag in ('same_address', 'has_disability'):
        if flag in data and data[flag] is None:
            data[flag] = False
    if data.get('same_address') is True:
        data['permanent_address'] = data.get('present_address')
    if data.get('has_disability') is False:
        data['disability_type'] = None
        data['disability_description'] = None
    if data.get('medical_fitness_status') in (False, None):
        data['medical_fitness_file'] = None
    return data


def normalize(raw_input, existing=None):
    """
    Return the canonical root fields for ``raw_input``.

    With ``existing`` the result is ``existing`` overlaid with every key
    present in ``raw_input``; keys set to None clear the prior value.
    """
    canonical = {name: normalize_field(name, value) for name, value in (raw_input or {}).items()}
    if existing is not None:
        merged = dict(existing)
        merged.update(canonical)
        canonical = merged
    else:
        canonical.setdefault('same_address', False)
        canonical.setdefault('has_disability', False)
    return apply_gates(canonical)


# Owned collections

COLLECTION_ENUMS = {
    'education_qualifications': {'education_level': _values(QUALIFICATION_CHOICES)},
    'employment_records': {
        'organization': _values(EmploymentRecord.ORGANIZATION_CHOICES),
        'employment_type': _values(EmploymentRecord.TYPE_CHOICES),
    },
}
COLLECTION_DATES = {
    'employment_records': ('effective_from', 'effective_till', 'probation_end_date'),
    'past_experiences': ('start_date', 'end_date'),
}
COLLECTION_REFERENCES = {
    'employment_records': ('department_id', 'designation_id'),
}
COLLECTION_BOOLEANS = {
    'employment_records': ('is_on_probation',),
}


def normalize_entry(collection, entry):
    if not isinstance(entry, dict):
        return entry
    enums = COLLECTION_ENUMS.get(collection, {})
    result = {}
    for name, value in entry.items():
        if name in ('id', 'file_size', 'year_of_completion'):
            result[name] = normalize_reference(value)
        elif name in enums:
            result[name] = normalize_choice(value, enums[name])
        elif name in COLLECTION_DATES.get(collection, ()):
            result[name] = normalize_date(value)
        elif name in COLLECTION_REFERENCES.get(collection, ()):
            result[name] = normalize_reference(value)
        elif name in COLLECTION_BOOLEANS.get(collection, ()):
            result[name] = normalize_boolean(value)
        else:
            result[name] = normalize_text(value)
    if collection == 'employment_records':
        # New rows and explicit nulls fall back to the column defaults
        if result.get('employment_type') is None and ('employment_type' in result or result.get('id') is None):
            result['employment_type'] = EmploymentRecord.TYPE_REGULAR
        if 'is_on_probation' in result and result['is_on_probation'] is None:
            result['is_on_probation'] = False
    return result


def normalize_collections(collections):
    """Normalize every supplied owned collection; None stays None."""
    normalized = {}
    for name, entries in (collections or {}).items():
        if name not in COLLECTIONS or entries is None or not isinstance(entries, (list, tuple)):
            normalized[name] = entries
            continue
        normalized[name] = [normalize_entry(name, entry) for entry in entries]
    return normalized
