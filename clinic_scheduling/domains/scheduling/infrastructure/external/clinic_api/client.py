# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Scheduling)
# Description: Clinic REST API client implementation.
# ============================================================================
"""Clinic API Client.

Async client for the clinic backend REST API.

Components:
- JsonResponseParser: Unwraps the backend envelope
- httpx.AsyncClient: Transport, replaceable through ``transport`` for tests

Requests are never retried: reschedule is not idempotent, and reads are
superseded by newer reads instead of being repeated.
"""

import logging
from datetime import date
from typing import Any

import httpx

from clinic_scheduling.core.domain.exceptions import IntegrationException

from ....application.ports import ExternalResponse, IAppointmentGateway, IShiftGateway
from .response_parser import JsonResponseParser

logger = logging.getLogger(__name__)


class ClinicApiClient(IShiftGateway, IAppointmentGateway):
    """Async REST client for the clinic backend.

    Implements IShiftGateway and IAppointmentGateway.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        response_parser: JsonResponseParser | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize REST client.

        Args:
            base_url: API base URL including the version prefix (e.g. ".../api/v1").
            token: Bearer token sent on every request. Never logged.
            timeout: Request timeout in seconds.
            response_parser: Optional custom response parser.
            transport: Optional httpx transport (e.g. httpx.MockTransport in tests).
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._token = token
        self._parser = response_parser or JsonResponseParser()
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    def __repr__(self) -> str:
        return f"ClinicApiClient(base_url={self.base_url!r}, authenticated={self._token is not None})"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {"Accept": "application/json"}
            if self._token:
                headers["Authorization"] = f"Bearer {self._token}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers=headers,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ClinicApiClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> ExternalResponse:
        """Send one request and parse the response.

        Args:
            method: HTTP method.
            path: Path relative to the base URL.
            params: Query parameters. None values are dropped.
            json: JSON body.

        Returns:
            ExternalResponse with result or backend error.

        Raises:
            IntegrationException: The backend could not be reached.
        """
        client = await self._get_client()
        query = {key: value for key, value in (params or {}).items() if value is not None}

        logger.debug(f"{method} {path} params={query}")
        try:
            response = await client.request(method, path, params=query or None, json=json)
        except httpx.RequestError as e:
            logger.error(f"Request error calling {method} {path}: {e.__class__.__name__}")
            raise IntegrationException("clinic_api", f"Could not reach the clinic server ({method} {path})", e) from e

        return self._parser.parse(response)

    # =========================================================================
    # IShiftGateway implementation
    # =========================================================================

    async def list_shifts(
        self,
        start_date: date,
        end_date: date,
        employee_id: int | None = None,
        status: str | None = None,
        page: int = 0,
        size: int = 50,
        sort: str | None = None,
    ) -> ExternalResponse:
        """List one page of shifts.

        Returns:
            ExternalResponse whose data is a page envelope.
        """
        return await self._request(
            "GET",
            "/shifts",
            params={
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
                "employee_id": employee_id,
                "status": status,
                "page": page,
                "size": size,
                "sort": sort,
            },
        )

    async def get_shift(self, shift_id: str) -> ExternalResponse:
        return await self._request("GET", f"/shifts/{shift_id}")

    async def get_shift_summary(
        self,
        start_date: date,
        end_date: date,
        employee_id: int | None = None,
    ) -> ExternalResponse:
        return await self._request(
            "GET",
            "/shifts/summary",
            params={
                "start_date": start_date.isoformat(),
                "end_date": end_date.isoformat(),
                "employee_id": employee_id,
            },
        )

    async def create_shift(
        self,
        employee_id: int,
        work_date: date,
        work_shift_id: str,
        notes: str | None = None,
    ) -> ExternalResponse:
        body: dict[str, Any] = {
            "employee_id": employee_id,
            "work_date": work_date.isoformat(),
            "work_shift_id": work_shift_id,
        }
        if notes:
            body["notes"] = notes
        return await self._request("POST", "/shifts", json=body)

    async def update_shift(
        self,
        shift_id: str,
        status: str | None = None,
        notes: str | None = None,
    ) -> ExternalResponse:
        body: dict[str, Any] = {}
        if status is not None:
            body["status"] = status
        if notes is not None:
            body["notes"] = notes
        return await self._request("PATCH", f"/shifts/{shift_id}", json=body)

    async def delete_shift(self, shift_id: str) -> ExternalResponse:
        return await self._request("DELETE", f"/shifts/{shift_id}")

    async def list_work_shifts(self) -> ExternalResponse:
        return await self._request("GET", "/work-shifts")

    # =========================================================================
    # IAppointmentGateway implementation
    # =========================================================================

    async def get_appointment(self, appointment_code: str) -> ExternalResponse:
        return await self._request("GET", f"/appointments/{appointment_code}")

    async def reschedule_appointment(self, appointment_code: str, payload: dict[str, Any]) -> ExternalResponse:
        """Submit the combined cancel-and-create request.

        Args:
            appointment_code: Code of the appointment being replaced.
            payload: Request body in backend field names.

        Returns:
            ExternalResponse with ``{cancelledAppointment, newAppointment}`` or error.
        """
        logger.info(f"Submitting reschedule of appointment {appointment_code}")
        return await self._request("POST", f"/appointments/{appointment_code}/reschedule", json=payload)
