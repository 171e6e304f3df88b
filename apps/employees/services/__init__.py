"""
Employee Services Package
Re-exports the service classes so ``from .services import X`` works.
"""

from .registry import RegistryService
from .resolver import EmployeeView, IntegrityWarning, RelationResolver
from .repository import EmployeeRepository

__all__ = [
    'RegistryService',
    'EmployeeView',
    'IntegrityWarning',
    'RelationResolver',
    'EmployeeRepository',
]
