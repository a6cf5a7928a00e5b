"""
Shared pytest fixtures for all tests.

This module provides the in-memory clinic backend, settings, capability
sets and wired scheduling components.
"""

import os

import pytest
import pytest_asyncio

from clinic_scheduling.config.settings import Settings
from clinic_scheduling.container import SchedulingContainer
from clinic_scheduling.domains.scheduling.domain.value_objects import CapabilitySet
from tests.utils.fake_backend import FakeClinicBackend

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"


# ============================================================================
# SETTINGS
# ============================================================================


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the fake backend."""
    return Settings(
        CLINIC_API_BASE_URL="http://clinic.test/api/v1/",
        CLINIC_API_TOKEN="test-token",
        SHIFT_PAGE_SIZE=50,
        ENVIRONMENT="test",
    )


# ============================================================================
# CAPABILITIES
# ============================================================================


@pytest.fixture
def admin_capabilities() -> CapabilitySet:
    """Capabilities of a clinic manager."""
    return CapabilitySet.from_permissions(
        ["MANAGE_APPOINTMENT", "MANAGE_WORK_SHIFTS", "VIEW_SCHEDULE_ALL"],
        employee_id=1,
    )


@pytest.fixture
def receptionist_capabilities() -> CapabilitySet:
    """Capabilities of a receptionist: reschedule and view, no shift edits."""
    return CapabilitySet.from_permissions(["MANAGE_APPOINTMENT", "VIEW_SCHEDULE_ALL"], employee_id=2)


# ============================================================================
# BACKEND
# ============================================================================


@pytest.fixture
def backend() -> FakeClinicBackend:
    """Empty in-memory clinic backend."""
    return FakeClinicBackend()


@pytest_asyncio.fixture
async def container(backend: FakeClinicBackend, settings: Settings, admin_capabilities: CapabilitySet):
    """Scheduling container wired to the fake backend with manager capabilities."""
    async with SchedulingContainer(
        admin_capabilities,
        settings=settings,
        transport=backend.transport(),
    ) as scheduling:
        yield scheduling
