# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Use case for rescheduling an appointment.
# ============================================================================
"""Reschedule Appointment Use Case.

Replaces one active appointment with a new one in a single backend request:
the original is cancelled with a reason code and a brand-new appointment is
created. The backend performs the swap atomically; this use case checks the
request before sending it and verifies the returned pair afterwards.
"""

import logging
from typing import TYPE_CHECKING, Any

from ...domain.entities.appointment import Appointment
from ...domain.value_objects.capability import Capability, CapabilitySet
from ..dto.reschedule_dtos import RescheduleAppointmentRequest, RescheduleResult
from ..dto.wire_models import AppointmentWire, RescheduleResponseWire, parse_wire
from ..exceptions import (
    ReschedulePreconditionError,
    RescheduleInProgressError,
    RescheduleIntegrityError,
    SchedulingError,
)
from ..services.conflict_classifier import ConflictClassifier

if TYPE_CHECKING:
    from ..ports import IAppointmentGateway

logger = logging.getLogger(__name__)


class RescheduleAppointmentUseCase:
    """Use case for rescheduling an appointment.

    Never retries. A second submit for an appointment whose reschedule is
    still outstanding is refused.
    """

    def __init__(
        self,
        appointment_gateway: "IAppointmentGateway",
        capabilities: CapabilitySet,
        classifier: ConflictClassifier | None = None,
        slot_granularity_minutes: int = 15,
    ) -> None:
        """Initialize use case.

        Args:
            appointment_gateway: Appointment gateway (DIP).
            capabilities: Capabilities of the authenticated principal.
            classifier: Conflict classifier for rejections.
            slot_granularity_minutes: Booking grid; start minutes must be a multiple of it.
        """
        self._gateway = appointment_gateway
        self._capabilities = capabilities
        self._classifier = classifier or ConflictClassifier()
        self._granularity = slot_granularity_minutes
        self._in_flight: set[str] = set()

    def is_in_flight(self, appointment_code: str) -> bool:
        return appointment_code in self._in_flight

    async def execute(self, request: RescheduleAppointmentRequest) -> RescheduleResult:
        """Execute the reschedule.

        Args:
            request: Reschedule request.

        Returns:
            RescheduleResult with the cancelled original and the new appointment.

        Raises:
            SchedulingError: Missing capability or appointment not reschedulable (not sent),
                or backend rejection.
            ReschedulePreconditionError: Request failed client-side checks (not sent).
            RescheduleInProgressError: A reschedule of the same appointment is outstanding.
            RescheduleIntegrityError: The backend's answer breaks the reschedule contract.
        """
        if not self._capabilities.has(Capability.RESCHEDULE_APPOINTMENT):
            logger.warning(f"Refusing reschedule of {request.appointment_code}: missing capability")
            conflict = self._classifier.classify(
                "FORBIDDEN", f"Missing capability {Capability.RESCHEDULE_APPOINTMENT.value}"
            )
            raise SchedulingError(conflict, sent=False)

        self._check_preconditions(request)

        code = request.appointment_code
        if code in self._in_flight:
            raise RescheduleInProgressError(code)

        self._in_flight.add(code)
        try:
            return await self._reschedule(request)
        finally:
            self._in_flight.discard(code)

    async def get_appointment(self, appointment_code: str) -> Appointment:
        """Fetch appointment detail.

        Raises:
            SchedulingError: RESOURCE_NOT_FOUND, FORBIDDEN, ...
        """
        response = await self._gateway.get_appointment(appointment_code)
        if not response.success:
            raise SchedulingError(self._classifier.classify_response(response))
        return parse_wire(AppointmentWire, response.get_dict(), "appointment").to_entity()

    async def _reschedule(self, request: RescheduleAppointmentRequest) -> RescheduleResult:
        code = request.appointment_code

        original = await self.get_appointment(code)
        if not original.is_active():
            logger.info(f"Appointment {code} is {original.status.value}, not submitting reschedule")
            conflict = self._classifier.classify(
                "APPOINTMENT_NOT_RESCHEDULABLE",
                f"Appointment {code} is {original.status.value} and cannot be rescheduled",
            )
            raise SchedulingError(conflict, sent=False)

        payload = self._build_payload(request)
        logger.info(
            f"Rescheduling appointment {code} to {payload['newStartTime']} "
            f"(doctor={request.new_employee_code}, room={request.new_room_code}, reason={request.reason_code.value})"
        )

        response = await self._gateway.reschedule_appointment(code, payload)
        if not response.success:
            conflict = self._classifier.classify_response(response)
            logger.warning(f"Reschedule of {code} rejected: {conflict.kind.value} ({conflict.code})")
            raise SchedulingError(conflict)

        pair = parse_wire(RescheduleResponseWire, response.get_dict(), "reschedule result")
        result = RescheduleResult(
            cancelled_appointment=pair.cancelled_appointment.to_entity(),
            new_appointment=pair.new_appointment.to_entity(),
        )
        self._verify_pair(request, original, result)

        logger.info(
            f"Appointment {code} rescheduled: cancelled={result.cancelled_appointment.appointment_code} "
            f"new={result.new_appointment.appointment_code}"
        )
        return result

    # =========================================================================
    # Preconditions
    # =========================================================================

    def _check_preconditions(self, request: RescheduleAppointmentRequest) -> None:
        """Reject requests that cannot succeed, before any network call."""
        for field_name, value in (
            ("appointment_code", request.appointment_code),
            ("new_employee_code", request.new_employee_code),
            ("new_room_code", request.new_room_code),
        ):
            if not value or not str(value).strip():
                raise ReschedulePreconditionError(f"{field_name} is required", field=field_name)

        if request.new_start_time is None:
            raise ReschedulePreconditionError("new_start_time is required", field="new_start_time")
        if request.reason_code is None:
            raise ReschedulePreconditionError("reason_code is required", field="reason_code")

        start = request.new_start_time
        if start.minute % self._granularity != 0 or start.second != 0 or start.microsecond != 0:
            raise ReschedulePreconditionError(
                f"Start time {start.strftime('%H:%M:%S')} is not on the {self._granularity}-minute grid",
                field="new_start_time",
                details={"minute": start.minute, "granularity": self._granularity},
            )

        if request.reason_code.requires_notes and not (request.cancel_notes or "").strip():
            raise ReschedulePreconditionError(
                f"cancel_notes are required for reason {request.reason_code.value}",
                field="cancel_notes",
            )

    # =========================================================================
    # Payload
    # =========================================================================

    def _build_payload(self, request: RescheduleAppointmentRequest) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "newStartTime": request.new_start_time.strftime("%Y-%m-%dT%H:%M:%S"),
            "newEmployeeCode": request.new_employee_code.strip(),
            "newRoomCode": request.new_room_code.strip(),
            "reasonCode": request.reason_code.value,
        }
        payload.update(self._participant_codes_payload(request.new_participant_codes))
        payload.update(self._service_ids_payload(request.new_service_ids))
        notes = (request.cancel_notes or "").strip()
        if notes:
            payload["cancelNotes"] = notes
        return payload

    @staticmethod
    def _service_ids_payload(service_ids: tuple[int, ...] | None) -> dict[str, Any]:
        """Services: omitted means the backend reuses the original services.

        The field is left out entirely; an empty list is never sent.
        """
        if not service_ids:
            return {}
        return {"newServiceIds": list(service_ids)}

    @staticmethod
    def _participant_codes_payload(participant_codes: tuple[str, ...] | None) -> dict[str, Any]:
        """Participants: omitted means the new appointment has none.

        Nothing is carried over from the original appointment.
        """
        if not participant_codes:
            return {}
        unique = list(dict.fromkeys(code.strip() for code in participant_codes if code and code.strip()))
        return {"newParticipantCodes": unique} if unique else {}

    # =========================================================================
    # Result verification
    # =========================================================================

    @staticmethod
    def _verify_pair(
        request: RescheduleAppointmentRequest,
        original: Appointment,
        result: RescheduleResult,
    ) -> None:
        code = request.appointment_code
        cancelled = result.cancelled_appointment
        created = result.new_appointment

        if cancelled.appointment_code != code:
            raise RescheduleIntegrityError(code, f"cancelled appointment is {cancelled.appointment_code}")
        if not cancelled.is_cancelled():
            raise RescheduleIntegrityError(code, f"original appointment is {cancelled.status.value}, not CANCELLED")
        if created.appointment_code == code:
            raise RescheduleIntegrityError(code, "new appointment reuses the original code")

        if not request.new_service_ids and sorted(created.service_codes) != sorted(original.service_codes):
            raise RescheduleIntegrityError(
                code,
                f"services not reused: expected {original.service_codes}, got {created.service_codes}",
            )

        if not request.new_participant_codes and created.participants:
            raise RescheduleIntegrityError(
                code,
                f"participants carried over without being requested: {created.participant_codes}",
            )
