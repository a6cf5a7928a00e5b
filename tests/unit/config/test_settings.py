"""
Unit tests for client settings and logging setup.
"""

import logging

import pytest
from pydantic import ValidationError

from clinic_scheduling.config import Settings, configure_logging


@pytest.mark.unit
def test_defaults():
    """Test default booking grid and page size."""
    settings = Settings()

    assert settings.SLOT_GRANULARITY_MINUTES == 15
    assert settings.SHIFT_PAGE_SIZE >= 50


@pytest.mark.unit
def test_env_overrides(monkeypatch):
    """Test that environment variables override defaults."""
    monkeypatch.setenv("CLINIC_API_BASE_URL", "https://clinic.example/api/v1/")
    monkeypatch.setenv("SHIFT_PAGE_SIZE", "200")

    settings = Settings()

    assert settings.CLINIC_API_BASE_URL == "https://clinic.example/api/v1"
    assert settings.SHIFT_PAGE_SIZE == 200


@pytest.mark.unit
@pytest.mark.parametrize("page_size", [10, 49, 1000])
def test_page_size_bounds(page_size):
    """Test that page sizes that could truncate a month are refused."""
    with pytest.raises(ValidationError):
        Settings(SHIFT_PAGE_SIZE=page_size)


@pytest.mark.unit
@pytest.mark.parametrize("granularity", [0, 7, 45])
def test_granularity_must_divide_hour(granularity):
    """Test the booking grid validation."""
    with pytest.raises(ValidationError):
        Settings(SLOT_GRANULARITY_MINUTES=granularity)


@pytest.mark.unit
def test_log_level_is_normalized():
    """Test log level normalization and rejection of unknown levels."""
    assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"
    with pytest.raises(ValidationError):
        Settings(LOG_LEVEL="chatty")


@pytest.mark.unit
def test_configure_logging_quiets_httpx():
    """Test that request lines from httpx are not logged at INFO."""
    configure_logging(Settings(LOG_LEVEL="INFO"))

    assert logging.getLogger("httpx").level == logging.WARNING
