import pytest
from django.core.cache import cache


@pytest.fixture(autouse=True)
def clear_cache():
    """Registry lookups are cached; start every test cold."""
    cache.clear()
    yield
    cache.clear()
