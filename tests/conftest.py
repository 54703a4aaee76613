import pytest

from config import Settings, get_settings


@pytest.fixture
def verify_settings():
    """Small, deterministic verification settings that ignore any .env file."""
    return Settings(_env_file=None, sample_count=300, native_sample_bound=1000)


@pytest.fixture
def fresh_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
