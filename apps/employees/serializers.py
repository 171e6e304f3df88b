"""
Employee Serializers

Write serializers only decode the request into a typed candidate; the
normalizer and validator own every rule. Read serializers render model
rows and resolved views with ``createdAt``/``updatedAt`` audit keys.
"""

from rest_framework import serializers

from .domain import COLLECTIONS, EmployeeCandidate, EmployeePatch
from .models import (
    Employee, Department, Designation,
    Document, EducationQualification, EmploymentRecord, PastExperience,
    StatusChange,
)
from .normalizers import ROOT_FIELDS


class AuditFieldsMixin(serializers.Serializer):
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)


# =========================
# REGISTRIES
# =========================

class DepartmentSerializer(AuditFieldsMixin, serializers.ModelSerializer):
    code = serializers.CharField(max_length=20, required=False, allow_null=True, allow_blank=True)

    class Meta:
        model = Department
        fields = ['id', 'name', 'code', 'description', 'createdAt', 'updatedAt']
        read_only_fields = ['id']
        # Duplicates are reported as conflicts by the registry service
        validators = []
        extra_kwargs = {'name': {'validators': []}}


class DesignationSerializer(AuditFieldsMixin, serializers.ModelSerializer):
    department_id = serializers.IntegerField(required=False, allow_null=True)

    class Meta:
        model = Designation
        fields = ['id', 'name', 'department_id', 'level', 'createdAt', 'updatedAt']
        read_only_fields = ['id']
        validators = []


class DepartmentStatisticsSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    code = serializers.CharField(allow_null=True)
    designation_count = serializers.IntegerField()
    employee_count = serializers.IntegerField()
    employment_count = serializers.IntegerField()


class DesignationStatisticsSerializer(serializers.Serializer):
    total_designations = serializers.IntegerField()
    by_department = serializers.DictField(child=serializers.IntegerField())
    designations = serializers.ListField(child=serializers.DictField())


class EmploymentStatisticsSerializer(serializers.Serializer):
    total_records = serializers.IntegerField()
    current_employees = serializers.IntegerField()
    by_organization = serializers.DictField(child=serializers.IntegerField())
    by_department = serializers.DictField(child=serializers.IntegerField())


# =========================
# OWNED COLLECTIONS (READ)
# =========================

class DocumentSerializer(AuditFieldsMixin, serializers.ModelSerializer):
    class Meta:
        model = Document
        fields = ['id', 'file_path', 'file_type', 'document_name', 'file_size', 'mime_type', 'createdAt', 'updatedAt']


class EducationQualificationSerializer(AuditFieldsMixin, serializers.ModelSerializer):
    class Meta:
        model = EducationQualification
        fields = ['id', 'education_level', 'institution_name', 'year_of_completion', 'marks_gpa', 'createdAt', 'updatedAt']


class EmploymentRecordSerializer(AuditFieldsMixin, serializers.ModelSerializer):
    department_id = serializers.IntegerField(read_only=True)
    designation_id = serializers.IntegerField(read_only=True)
    is_current = serializers.BooleanField(read_only=True)

    class Meta:
        model = EmploymentRecord
        fields = [
            'id', 'organization', 'department_id', 'designation_id', 'employment_type',
            'effective_from', 'effective_till', 'role_tag', 'office_location', 'scale_grade',
            'remarks', 'is_on_probation', 'probation_end_date', 'is_current',
            'createdAt', 'updatedAt',
        ]


class PastExperienceSerializer(AuditFieldsMixin, serializers.ModelSerializer):
    class Meta:
        model = PastExperience
        fields = ['id', 'company_name', 'position', 'start_date', 'end_date', 'description', 'createdAt', 'updatedAt']


class StatusChangeSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = StatusChange
        fields = ['id', 'from_status', 'to_status', 'reason', 'effective_date', 'createdAt']


# =========================
# EMPLOYEE (READ)
# =========================

READ_FIELDS = [
    name for name in ROOT_FIELDS if name != 'password'
]


class EmployeeListSerializer(AuditFieldsMixin, serializers.ModelSerializer):
    """List form: root fields only, no resolved relations."""

    department_id = serializers.IntegerField(read_only=True)
    designation_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Employee
        fields = ['id'] + READ_FIELDS + ['createdAt', 'updatedAt']


class EmployeeDetailSerializer(serializers.Serializer):
    """Renders an ``EmployeeView`` produced by the relation resolver."""

    def to_representation(self, view):
        data = EmployeeListSerializer(view.employee).data
        data['department'] = view.department
        data['designation'] = view.designation
        data['documents'] = DocumentSerializer(view.documents, many=True).data
        data['educationQualifications'] = EducationQualificationSerializer(
            view.education_qualifications, many=True
        ).data
        data['employmentRecords'] = EmploymentRecordSerializer(view.employment_records, many=True).data
        data['pastExperiences'] = PastExperienceSerializer(view.past_experiences, many=True).data
        data['statusHistory'] = StatusChangeSerializer(view.status_history, many=True).data
        data['warnings'] = [warning.as_dict() for warning in view.warnings]
        return data


# =========================
# EMPLOYEE (WRITE)
# =========================

class _LooseEntrySerializer(serializers.Serializer):
    """Accepts the listed keys as raw JSON values."""

    entry_fields = ()

    def get_fields(self):
        fields = super().get_fields()
        for name in self.entry_fields:
            fields[name] = serializers.JSONField(required=False, allow_null=True)
        return fields


class DocumentWriteSerializer(_LooseEntrySerializer):
    entry_fields = ('id', 'file_path', 'file_type', 'document_name', 'file_size', 'mime_type')


class EducationQualificationWriteSerializer(_LooseEntrySerializer):
    entry_fields = ('id', 'education_level', 'institution_name', 'year_of_completion', 'marks_gpa')


class EmploymentRecordWriteSerializer(_LooseEntrySerializer):
    entry_fields = (
        'id', 'organization', 'department_id', 'designation_id', 'employment_type',
        'effective_from', 'effective_till', 'role_tag', 'office_location', 'scale_grade',
        'remarks', 'is_on_probation', 'probation_end_date',
    )


class PastExperienceWriteSerializer(_LooseEntrySerializer):
    entry_fields = ('id', 'company_name', 'position', 'start_date', 'end_date', 'description')


class EmployeeWriteSerializer(serializers.Serializer):
    """
    Decodes an employee request body into ``EmployeeCandidate`` (create)
    or ``EmployeePatch`` (update). Unknown keys are dropped; keys sent as
    null are kept so a patch can clear them.
    """

    documents = DocumentWriteSerializer(many=True, required=False, allow_null=True)
    educationQualifications = EducationQualificationWriteSerializer(
        many=True, required=False, allow_null=True, source='education_qualifications'
    )
    employmentRecords = EmploymentRecordWriteSerializer(
        many=True, required=False, allow_null=True, source='employment_records'
    )
    pastExperiences = PastExperienceWriteSerializer(
        many=True, required=False, allow_null=True, source='past_experiences'
    )

    def get_fields(self):
        fields = super().get_fields()
        for name in ROOT_FIELDS:
            fields[name] = serializers.JSONField(required=False, allow_null=True)
        return fields

    def _split(self):
        values, collections = {}, {}
        for key, value in self.validated_data.items():
            if key in COLLECTIONS:
                collections[key] = [dict(entry) for entry in value] if value is not None else None
            else:
                values[key] = value
        return values, collections

    def to_candidate(self):
        values, collections = self._split()
        if 'status' not in values:
            values['status'] = Employee.STATUS_ACTIVE
        return EmployeeCandidate(values=values, collections=collections)

    def to_patch(self):
        values, collections = self._split()
        return EmployeePatch(values=values, collections=collections)


class TerminateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[Employee.STATUS_TERMINATED, Employee.STATUS_SUSPENDED,
                 Employee.STATUS_RESIGNED, Employee.STATUS_RETIRED],
        default=Employee.STATUS_TERMINATED,
    )
    reason = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    date = serializers.DateField(required=False, allow_null=True)


class FormOptionsSerializer(serializers.Serializer):
    departments = serializers.ListField(child=serializers.DictField())
    designations = serializers.ListField(child=serializers.DictField())
    organizations = serializers.ListField(child=serializers.DictField())
    employmentTypes = serializers.ListField(child=serializers.DictField())
