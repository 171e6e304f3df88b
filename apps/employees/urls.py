"""
Employee URLs
"""

from django.urls import path, include
from rest_framework.routers import DefaultRouter
from .views import (
    EmployeeViewSet, DepartmentViewSet, DesignationViewSet, EmploymentStatisticsView, FormOptionsView,
)

router = DefaultRouter(trailing_slash=False)
router.register('departments', DepartmentViewSet, basename='department')
router.register('designations', DesignationViewSet, basename='designation')
router.register('employees', EmployeeViewSet, basename='employee')

urlpatterns = [
    path('employment/form-options', FormOptionsView.as_view(), name='employment-form-options'),
    path('employment/statistics', EmploymentStatisticsView.as_view(), name='employment-statistics'),
    path('', include(router.urls)),
]
