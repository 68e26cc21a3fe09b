import pytest

from identity_hash.settings import get_log_settings, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    get_log_settings.cache_clear()
    yield
    get_settings.cache_clear()
    get_log_settings.cache_clear()
