"""
Employee Admin
"""

from django.contrib import admin
from .models import (
    Employee, Department, Designation,
    Document, EducationQualification, EmploymentRecord, PastExperience,
    StatusChange,
)
from .services import RegistryService


# =====================
# REGISTRIES
# =====================

@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'code', 'created_at']
    search_fields = ['name', 'code']
    ordering = ['id']

    def has_delete_permission(self, request, obj=None):
        if obj is not None and RegistryService.department_in_use(obj.id):
            return False
        return super().has_delete_permission(request, obj)

    def delete_queryset(self, request, queryset):
        for department in queryset:
            RegistryService.delete_department(department.id)


@admin.register(Designation)
class DesignationAdmin(admin.ModelAdmin):
    list_display = ['id', 'name', 'department', 'level', 'created_at']
    list_filter = ['department']
    search_fields = ['name']
    ordering = ['id']

    def has_delete_permission(self, request, obj=None):
        if obj is not None and RegistryService.designation_in_use(obj.id):
            return False
        return super().has_delete_permission(request, obj)

    def delete_queryset(self, request, queryset):
        for designation in queryset:
            RegistryService.delete_designation(designation.id)


# =====================
# INLINES (SAFE VIA PARENT)
# =====================

class DocumentInline(admin.TabularInline):
    model = Document
    extra = 0


class EducationQualificationInline(admin.TabularInline):
    model = EducationQualification
    extra = 0


class EmploymentRecordInline(admin.TabularInline):
    model = EmploymentRecord
    extra = 0
    raw_id_fields = ['department', 'designation']


class PastExperienceInline(admin.TabularInline):
    model = PastExperience
    extra = 0


class StatusChangeInline(admin.TabularInline):
    model = StatusChange
    extra = 0
    can_delete = False
    readonly_fields = ['from_status', 'to_status', 'reason', 'effective_date', 'created_at']

    def has_add_permission(self, request, obj=None):
        return False


# =====================
# MAIN ADMINS
# =====================

@admin.register(Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ['id', 'cnic', 'full_name', 'department', 'designation', 'status', 'created_at']
    list_filter = ['status', 'department', 'designation', 'gender']
    search_fields = ['cnic', 'full_name', 'email', 'mobile_number']
    raw_id_fields = ['department', 'designation']
    exclude = ['password']
    ordering = ['id']

    inlines = [
        DocumentInline,
        EducationQualificationInline,
        EmploymentRecordInline,
        PastExperienceInline,
        StatusChangeInline,
    ]

    fieldsets = (
        ('Identity', {'fields': ('cnic', 'full_name', 'mother_name', 'cnic_issue_date', 'cnic_expiry_date')}),
        ('Guardian', {'fields': ('father_husband_name', 'relationship_type')}),
        ('Personal', {'fields': (
            'date_of_birth', 'gender', 'marital_status', 'nationality', 'religion',
            'blood_group', 'domicile_district', 'latest_qualification',
        )}),
        ('Contact', {'fields': (
            'mobile_number', 'whatsapp_number', 'email', 'present_address',
            'permanent_address', 'same_address', 'district', 'city',
        )}),
        ('Employment', {'fields': (
            'department', 'designation', 'status', 'joining_date_mwo', 'joining_date_pmbmc',
            'joining_date_psba', 'termination_or_suspend_date', 'termination_reason',
            'grade_scale', 'special_duty_note', 'document_missing_note',
        )}),
        ('Disability & Medical', {'fields': (
            'has_disability', 'disability_type', 'disability_description',
            'medical_fitness_status', 'medical_fitness_file',
        )}),
        ('Tax', {'fields': ('filer_status', 'filer_active_status')}),
        ('Files', {'fields': (
            'profile_picture_file', 'cnic_front_file', 'cnic_back_file',
            'domicile_certificate_file', 'educational_certificates_files', 'other_documents_files',
        )}),
    )

    def has_delete_permission(self, request, obj=None):
        if obj is not None and obj.has_owned_records():
            return False
        return super().has_delete_permission(request, obj)
