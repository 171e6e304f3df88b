from contextvars import ContextVar
from typing import Optional

# Async-safe storage for correlation ID
_correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)

def set_correlation_id(correlation_id: Optional[str]) -> None:
    _correlation_id_var.set(correlation_id)

def get_correlation_id() -> Optional[str]:
    return _correlation_id_var.get()

def mask_cnic(cnic: Optional[str]) -> str:
    """Keep only the last four digits of a CNIC for log lines."""
    if not cnic:
        return '-'
    return '*' * max(len(cnic) - 4, 0) + cnic[-4:]

class CorrelationIdFilter:
    def filter(self, record):
        record.correlation_id = get_correlation_id() or 'unknown'
        return True
