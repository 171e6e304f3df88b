"""Employee app filters."""
import django_filters
from .models import Employee


class EmployeeFilter(django_filters.FilterSet):
    department = django_filters.NumberFilter(field_name='department_id')
    designation = django_filters.NumberFilter(field_name='designation_id')
    status = django_filters.ChoiceFilter(choices=Employee.STATUS_CHOICES)
    cnic = django_filters.CharFilter(method='filter_cnic')
    full_name = django_filters.CharFilter(lookup_expr='icontains')

    class Meta:
        model = Employee
        fields = ['department', 'designation', 'status', 'cnic', 'full_name']

    def filter_cnic(self, queryset, name, value):
        digits = ''.join(ch for ch in value if ch.isdigit())
        return queryset.filter(cnic=digits)
