"""Test utilities and helpers."""

from tests.utils.builders import AppointmentBuilder, EmployeeShiftBuilder
from tests.utils.fake_backend import FakeClinicBackend

__all__ = [
    # Builders
    "AppointmentBuilder",
    "EmployeeShiftBuilder",
    # Fakes
    "FakeClinicBackend",
]
