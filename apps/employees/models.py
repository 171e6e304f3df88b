"""
Employee Models - Personnel records and their reference registries
"""

from django.db import models
from django.db.models import Q
from apps.core.models import TimeStampedModel


QUALIFICATION_CHOICES = [
    ('matric', 'Matric'),
    ('intermediate', 'Intermediate'),
    ('bachelors', 'Bachelors'),
    ('masters', 'Masters'),
    ('phd', 'PhD'),
    ('diploma', 'Diploma'),
    ('certificate', 'Certificate'),
    ('other', 'Other'),
]


class Department(TimeStampedModel):
    """Department registry entry"""

    name = models.CharField(max_length=100, unique=True)
    code = models.CharField(max_length=20, unique=True, null=True, blank=True)
    description = models.TextField(blank=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return self.name


class Designation(TimeStampedModel):
    """Job Title/Designation registry entry"""

    name = models.CharField(max_length=100)
    department = models.ForeignKey(
        Department,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='designations'
    )

    # Level for hierarchy
    level = models.PositiveSmallIntegerField(null=True, blank=True)

    class Meta:
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(
                fields=['department', 'name'],
                name='uq_designation_department_name'
            )
        ]

    def __str__(self):
        return self.name


class Employee(TimeStampedModel):
    """
    Employee master record.

    Department and designation are stored as plain references without a
    database constraint so a registry row removed outside the service layer
    leaves a dangling id that reads report instead of failing on.
    """

    # Lifecycle
    STATUS_ACTIVE = 'active'
    STATUS_SUSPENDED = 'suspended'
    STATUS_TERMINATED = 'terminated'
    STATUS_RESIGNED = 'resigned'
    STATUS_RETIRED = 'retired'

    STATUS_CHOICES = [
        (STATUS_ACTIVE, 'Active'),
        (STATUS_SUSPENDED, 'Suspended'),
        (STATUS_TERMINATED, 'Terminated'),
        (STATUS_RESIGNED, 'Resigned'),
        (STATUS_RETIRED, 'Retired'),
    ]
    TERMINAL_STATUSES = (STATUS_TERMINATED, STATUS_RESIGNED, STATUS_RETIRED)
    LIVE_STATUSES = (STATUS_ACTIVE, STATUS_SUSPENDED)

    RELATIONSHIP_CHOICES = [
        ('father', 'Father'),
        ('husband', 'Husband'),
    ]
    GENDER_CHOICES = [
        ('male', 'Male'),
        ('female', 'Female'),
        ('other', 'Other'),
    ]
    MARITAL_STATUS_CHOICES = [
        ('single', 'Single'),
        ('married', 'Married'),
        ('divorced', 'Divorced'),
        ('widowed', 'Widowed'),
    ]
    RELIGION_CHOICES = [
        ('muslim', 'Muslim'),
        ('non_muslim', 'Non-Muslim'),
        ('maseehi', 'Maseehi'),
    ]
    BLOOD_GROUP_CHOICES = [
        (group, group) for group in ('A+', 'A-', 'B+', 'B-', 'AB+', 'AB-', 'O+', 'O-')
    ]
    DISTRICT_CHOICES = [
        ('lahore', 'Lahore'),
        ('karachi', 'Karachi'),
        ('islamabad', 'Islamabad'),
        ('faisalabad', 'Faisalabad'),
        ('multan', 'Multan'),
        ('peshawar', 'Peshawar'),
        ('quetta', 'Quetta'),
        ('gujranwala', 'Gujranwala'),
        ('hyderabad', 'Hyderabad'),
        ('bahawalpur', 'Bahawalpur'),
    ]
    DISABILITY_CHOICES = [
        ('hearing_impairment', 'Hearing Impairment'),
        ('visual_impairment', 'Visual Impairment'),
        ('physical_disability', 'Physical Disability'),
        ('learning_disability', 'Learning Disability'),
        ('speech_impairment', 'Speech Impairment'),
        ('other', 'Other'),
    ]
    FILER_STATUS_CHOICES = [
        ('filer', 'Filer'),
        ('non_filer', 'Non-Filer'),
    ]
    FILER_ACTIVE_CHOICES = [
        ('active', 'Active'),
        ('inactive', 'Inactive'),
    ]

    # Identity
    cnic = models.CharField(max_length=13, db_index=True)
    full_name = models.CharField(max_length=255)
    mother_name = models.CharField(max_length=255, null=True, blank=True)
    cnic_issue_date = models.DateField(null=True, blank=True)
    cnic_expiry_date = models.DateField(null=True, blank=True)

    # Guardian
    father_husband_name = models.CharField(max_length=255, null=True, blank=True)
    relationship_type = models.CharField(max_length=10, choices=RELATIONSHIP_CHOICES, null=True, blank=True)

    # Demographics
    date_of_birth = models.DateField(null=True, blank=True)
    gender = models.CharField(max_length=10, choices=GENDER_CHOICES, null=True, blank=True)
    marital_status = models.CharField(max_length=10, choices=MARITAL_STATUS_CHOICES, null=True, blank=True)
    nationality = models.CharField(max_length=50, null=True, blank=True)
    religion = models.CharField(max_length=20, choices=RELIGION_CHOICES, null=True, blank=True)
    blood_group = models.CharField(max_length=3, choices=BLOOD_GROUP_CHOICES, null=True, blank=True)
    domicile_district = models.CharField(max_length=30, choices=DISTRICT_CHOICES, null=True, blank=True)
    latest_qualification = models.CharField(max_length=20, choices=QUALIFICATION_CHOICES, null=True, blank=True)

    # Contact / address
    mobile_number = models.CharField(max_length=20, null=True, blank=True)
    whatsapp_number = models.CharField(max_length=20, null=True, blank=True)
    email = models.EmailField(null=True, blank=True)
    present_address = models.TextField(null=True, blank=True)
    permanent_address = models.TextField(null=True, blank=True)
    same_address = models.BooleanField(default=False)
    district = models.CharField(max_length=100, null=True, blank=True)
    city = models.CharField(max_length=100, null=True, blank=True)

    # Employment linkage
    department = models.ForeignKey(
        Department,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='employees'
    )
    designation = models.ForeignKey(
        Designation,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name='employees'
    )
    joining_date_mwo = models.DateField(null=True, blank=True)
    joining_date_pmbmc = models.DateField(null=True, blank=True)
    joining_date_psba = models.DateField(null=True, blank=True)
    termination_or_suspend_date = models.DateField(null=True, blank=True)
    termination_reason = models.TextField(null=True, blank=True)
    grade_scale = models.CharField(max_length=20, null=True, blank=True)
    special_duty_note = models.TextField(null=True, blank=True)
    document_missing_note = models.TextField(null=True, blank=True)

    # Disability / medical
    has_disability = models.BooleanField(default=False)
    disability_type = models.CharField(max_length=30, choices=DISABILITY_CHOICES, null=True, blank=True)
    disability_description = models.TextField(null=True, blank=True)
    medical_fitness_status = models.BooleanField(null=True, blank=True)
    medical_fitness_file = models.CharField(max_length=500, null=True, blank=True)

    # Tax
    filer_status = models.CharField(max_length=10, choices=FILER_STATUS_CHOICES, null=True, blank=True)
    filer_active_status = models.CharField(max_length=10, choices=FILER_ACTIVE_CHOICES, null=True, blank=True)

    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=STATUS_ACTIVE, db_index=True)

    # File references (opaque storage keys)
    profile_picture_file = models.CharField(max_length=500, null=True, blank=True)
    cnic_front_file = models.CharField(max_length=500, null=True, blank=True)
    cnic_back_file = models.CharField(max_length=500, null=True, blank=True)
    domicile_certificate_file = models.CharField(max_length=500, null=True, blank=True)
    educational_certificates_files = models.JSONField(null=True, blank=True)
    other_documents_files = models.JSONField(null=True, blank=True)

    # Hashed, never serialized
    password = models.CharField(max_length=128, null=True, blank=True)

    class Meta:
        ordering = ['id']
        constraints = [
            models.UniqueConstraint(
                fields=['cnic'],
                condition=Q(status__in=['active', 'suspended']),
                name='uq_employee_live_cnic'
            )
        ]
        indexes = [
            models.Index(fields=['department', 'status'], name='emp_dept_status_idx'),
            models.Index(fields=['designation'], name='emp_desig_idx'),
        ]

    def __str__(self):
        return f"{self.cnic} - {self.full_name}"

    @property
    def is_terminal(self):
        return self.status in self.TERMINAL_STATUSES

    def has_owned_records(self):
        return (
            self.documents.exists()
            or self.education_qualifications.exists()
            or self.employment_records.exists()
            or self.past_experiences.exists()
        )


class Document(TimeStampedModel):
    """File attached to an employee"""

    employee = models.ForeignKey(
        Employee,
        on_delete=models.CASCADE,
        related_name='documents'
    )
    file_path = models.CharField(max_length=500)
    file_type = models.CharField(max_length=50, null=True, blank=True)
    document_name = models.CharField(max_length=255, null=True, blank=True)
    file_size = models.PositiveBigIntegerField(null=True, blank=True)
    mime_type = models.CharField(max_length=100, null=True, blank=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.employee_id} - {self.document_name or self.file_path}"


class EducationQualification(TimeStampedModel):
    """Employee Education History"""

    employee = models.ForeignKey(
        Employee,
        on_delete=models.CASCADE,
        related_name='education_qualifications'
    )
    education_level = models.CharField(max_length=20, choices=QUALIFICATION_CHOICES)
    institution_name = models.CharField(max_length=255, null=True, blank=True)
    year_of_completion = models.PositiveSmallIntegerField(null=True, blank=True)
    marks_gpa = models.CharField(max_length=20, null=True, blank=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.employee_id} - {self.education_level}"


class EmploymentRecord(TimeStampedModel):
    """Posting of an employee within one of the organizations"""

    ORG_MBWO = 'MBWO'
    ORG_PMBMC = 'PMBMC'
    ORG_PSBA = 'PSBA'

    ORGANIZATION_CHOICES = [
        (ORG_MBWO, 'Model Bazaar Welfare Organization'),
        (ORG_PMBMC, 'Punjab Model Bazaars Management Company'),
        (ORG_PSBA, 'Punjab Sahulat Bazaars Authority'),
    ]

    TYPE_REGULAR = 'Regular'
    TYPE_CONTRACT = 'Contract'
    TYPE_PROBATION = 'Probation'
    TYPE_INTERNSHIP = 'Internship'

    TYPE_CHOICES = [
        (TYPE_REGULAR, 'Permanent employment'),
        (TYPE_CONTRACT, 'Fixed-term contract'),
        (TYPE_PROBATION, 'Probationary period'),
        (TYPE_INTERNSHIP, 'Internship program'),
    ]

    employee = models.ForeignKey(
        Employee,
        on_delete=models.CASCADE,
        related_name='employment_records'
    )
    organization = models.CharField(max_length=10, choices=ORGANIZATION_CHOICES)
    department = models.ForeignKey(
        Department,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='employment_records'
    )
    designation = models.ForeignKey(
        Designation,
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='employment_records'
    )
    employment_type = models.CharField(max_length=20, choices=TYPE_CHOICES, default=TYPE_REGULAR)
    effective_from = models.DateField(null=True, blank=True)
    effective_till = models.DateField(null=True, blank=True)
    role_tag = models.CharField(max_length=100, null=True, blank=True)
    office_location = models.CharField(max_length=255, null=True, blank=True)
    scale_grade = models.CharField(max_length=20, null=True, blank=True)
    remarks = models.TextField(null=True, blank=True)
    is_on_probation = models.BooleanField(default=False)
    probation_end_date = models.DateField(null=True, blank=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.employee_id} - {self.organization}"

    @property
    def is_current(self):
        return self.effective_till is None


class PastExperience(TimeStampedModel):
    """Employment before joining"""

    employee = models.ForeignKey(
        Employee,
        on_delete=models.CASCADE,
        related_name='past_experiences'
    )
    company_name = models.CharField(max_length=255)
    position = models.CharField(max_length=255, null=True, blank=True)
    start_date = models.DateField(null=True, blank=True)
    end_date = models.DateField(null=True, blank=True)
    description = models.TextField(null=True, blank=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.employee_id} - {self.company_name}"


class StatusChange(models.Model):
    """Audit row appended whenever an employee's status changes"""

    employee = models.ForeignKey(
        Employee,
        on_delete=models.CASCADE,
        related_name='status_changes'
    )
    from_status = models.CharField(max_length=20, null=True, blank=True)
    to_status = models.CharField(max_length=20, choices=Employee.STATUS_CHOICES)
    reason = models.TextField(null=True, blank=True)
    effective_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.employee_id}: {self.from_status} -> {self.to_status}"
