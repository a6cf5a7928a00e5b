# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Scheduling)
# Description: Clinic REST API client module.
# ============================================================================
"""Clinic API Client Module.

Provides the async REST client for the clinic backend.

Usage:
    from clinic_scheduling.domains.scheduling.infrastructure.external.clinic_api import (
        ClinicApiClient,
    )

    async with ClinicApiClient(base_url="https://clinic.example/api/v1", token=token) as client:
        response = await client.get_shift("EMS251001001")
"""

from .client import ClinicApiClient
from .response_parser import JsonResponseParser

__all__ = [
    "ClinicApiClient",
    "JsonResponseParser",
]
