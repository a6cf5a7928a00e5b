# ============================================================================
# SCOPE: GLOBAL
# Description: Container for scheduling dependencies of one session.
#              Wires the API client, shift store, resolver and use cases.
# ============================================================================
"""
Scheduling Container.

Provides dependency injection for the scheduling core. One container serves
one authenticated session: capabilities are computed once from the
principal's permissions and handed explicitly to every component.
"""

import logging
from typing import Iterable

import httpx

from clinic_scheduling.config.settings import Settings, get_settings
from clinic_scheduling.domains.scheduling.application.services import (
    AvailabilityResolver,
    CalendarProjector,
    ConflictClassifier,
    ShiftProjectionCache,
    ShiftStore,
)
from clinic_scheduling.domains.scheduling.application.use_cases import RescheduleAppointmentUseCase
from clinic_scheduling.domains.scheduling.domain.value_objects import CapabilitySet
from clinic_scheduling.domains.scheduling.infrastructure.external.clinic_api import ClinicApiClient

logger = logging.getLogger(__name__)


class SchedulingContainer:
    """Container for scheduling dependencies.

    Single Responsibility: Wire scheduling dependencies for one session.
    """

    def __init__(
        self,
        capabilities: CapabilitySet,
        token: str | None = None,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize container.

        Args:
            capabilities: Capabilities of the authenticated principal.
            token: Bearer token. Falls back to CLINIC_API_TOKEN.
            settings: Optional settings (defaults to get_settings()).
            transport: Optional httpx transport, used by tests.
        """
        self.settings = settings or get_settings()
        self.capabilities = capabilities

        self._client = ClinicApiClient(
            base_url=self.settings.CLINIC_API_BASE_URL,
            token=token if token is not None else self.settings.CLINIC_API_TOKEN,
            timeout=self.settings.CLINIC_API_TIMEOUT,
            transport=transport,
        )
        self._classifier = ConflictClassifier()
        self._cache = ShiftProjectionCache()

        # Lazily created
        self._shift_store: ShiftStore | None = None
        self._resolver: AvailabilityResolver | None = None
        self._reschedule: RescheduleAppointmentUseCase | None = None

        logger.info(f"SchedulingContainer initialized for {self._client.base_url}")

    @classmethod
    def for_principal(
        cls,
        permissions: Iterable[str],
        employee_id: int | None = None,
        token: str | None = None,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "SchedulingContainer":
        """Build a container from the principal's backend permission strings."""
        capabilities = CapabilitySet.from_permissions(permissions, employee_id=employee_id)
        return cls(capabilities, token=token, settings=settings, transport=transport)

    @property
    def client(self) -> ClinicApiClient:
        return self._client

    @property
    def classifier(self) -> ConflictClassifier:
        return self._classifier

    def get_shift_store(self) -> ShiftStore:
        if self._shift_store is None:
            self._shift_store = ShiftStore(
                gateway=self._client,
                capabilities=self.capabilities,
                classifier=self._classifier,
                page_size=self.settings.SHIFT_PAGE_SIZE,
            )
        return self._shift_store

    def get_availability_resolver(self) -> AvailabilityResolver:
        if self._resolver is None:
            self._resolver = AvailabilityResolver(self.get_shift_store(), cache=self._cache)
        return self._resolver

    def get_reschedule_use_case(self) -> RescheduleAppointmentUseCase:
        if self._reschedule is None:
            self._reschedule = RescheduleAppointmentUseCase(
                appointment_gateway=self._client,
                capabilities=self.capabilities,
                classifier=self._classifier,
                slot_granularity_minutes=self.settings.SLOT_GRANULARITY_MINUTES,
            )
        return self._reschedule

    def create_calendar_projector(self) -> CalendarProjector:
        return CalendarProjector()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.close()

    async def __aenter__(self) -> "SchedulingContainer":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
