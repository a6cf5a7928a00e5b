"""Clinic scheduling client core.

Appointment rescheduling coupled to staff shift availability, on top of the
clinic backend REST API.
"""

__version__ = "0.1.0"
