# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Capability-aware access to employee shifts.
# ============================================================================
"""Shift Store.

Reads and edits employee shifts through the shift gateway. Every call
checks the session's capabilities first, list calls follow the page
envelope until the last page, and every rejection (backend or client-side
guard) is raised as a classified SchedulingError.
"""

import calendar
import logging
from datetime import date
from typing import TYPE_CHECKING

from ...domain.entities.shift import EmployeeShift, ShiftSummaryRow, WorkShiftTemplate
from ...domain.services.shift_transition_policy import ShiftRuleViolation, ShiftTransitionPolicy
from ...domain.value_objects.capability import Capability, CapabilitySet
from ...domain.value_objects.shift_status import ShiftStatus
from ..dto.shift_dtos import CreateShiftRequest, ListShiftsQuery, UpdateShiftRequest
from ..dto.wire_models import EmployeeShiftWire, PageWire, ShiftSummaryWire, WorkShiftWire, parse_wire
from ..exceptions import SchedulingError
from .conflict_classifier import ConflictClassifier

if TYPE_CHECKING:
    from ..ports import ExternalResponse, IShiftGateway

logger = logging.getLogger(__name__)

MIN_PAGE_SIZE = 50
# Upper bound on followed pages, guards against a backend that never reports `last`
MAX_PAGES = 200


class ShiftStore:
    """Employee shift access for one authenticated session.

    Attributes:
        page_size: Page size used for list calls (never below 50).
    """

    def __init__(
        self,
        gateway: "IShiftGateway",
        capabilities: CapabilitySet,
        classifier: ConflictClassifier | None = None,
        page_size: int = 100,
    ) -> None:
        """Initialize the store.

        Args:
            gateway: Shift gateway (DIP).
            capabilities: Capabilities of the authenticated principal.
            classifier: Conflict classifier for rejections.
            page_size: Page size for list calls. Raised to 50 when smaller.
        """
        self._gateway = gateway
        self._capabilities = capabilities
        self._classifier = classifier or ConflictClassifier()
        self.page_size = max(page_size, MIN_PAGE_SIZE)

    # =========================================================================
    # Reads
    # =========================================================================

    async def list_shifts(self, query: ListShiftsQuery) -> list[EmployeeShift]:
        """List every shift matching the query, across all pages.

        Returns:
            Shifts ordered by work date, then start time.

        Raises:
            SchedulingError: Missing view capability or backend rejection.
        """
        if not self._capabilities.can_view_shifts_of(query.employee_id):
            raise self._forbidden("view shifts", Capability.VIEW_SHIFTS_ALL)

        shifts: list[EmployeeShift] = []
        page_number = 0
        while page_number < MAX_PAGES:
            response = await self._gateway.list_shifts(
                start_date=query.start_date,
                end_date=query.end_date,
                employee_id=query.employee_id,
                status=query.status.value if query.status else None,
                page=page_number,
                size=self.page_size,
                sort=query.sort,
            )
            self._raise_for_rejection(response)

            if isinstance(response.data, list):
                # Unpaged backend answer
                shifts.extend(parse_wire(EmployeeShiftWire, item, "shift").to_entity() for item in response.data)
                break

            page = parse_wire(PageWire, response.data or {}, "shift page")
            shifts.extend(parse_wire(EmployeeShiftWire, item, "shift").to_entity() for item in page.content)

            if page.last or not page.content or page_number + 1 >= page.total_pages:
                break
            page_number += 1
        else:
            logger.warning(f"Stopped following shift pages after {MAX_PAGES} pages for {query}")

        shifts.sort(key=lambda shift: (shift.work_date, shift.work_shift.start_time))
        logger.debug(f"Loaded {len(shifts)} shifts for {query.start_date}..{query.end_date}")
        return shifts

    async def list_month(
        self,
        employee_id: int,
        year: int,
        month: int,
        status: ShiftStatus | None = ShiftStatus.SCHEDULED,
    ) -> list[EmployeeShift]:
        """List one employee's shifts for a calendar month."""
        last_day = calendar.monthrange(year, month)[1]
        return await self.list_shifts(
            ListShiftsQuery(
                start_date=date(year, month, 1),
                end_date=date(year, month, last_day),
                employee_id=employee_id,
                status=status,
            )
        )

    async def get_shift(self, shift_id: str) -> EmployeeShift:
        """Get one shift by id.

        Raises:
            SchedulingError: RESOURCE_NOT_FOUND, FORBIDDEN, ...
        """
        self._require_any_view()
        response = await self._gateway.get_shift(shift_id)
        self._raise_for_rejection(response)
        return parse_wire(EmployeeShiftWire, response.get_dict(), "shift").to_entity()

    async def get_summary(
        self,
        start_date: date,
        end_date: date,
        employee_id: int | None = None,
    ) -> list[ShiftSummaryRow]:
        """Per-date shift counts for a date range."""
        if not self._capabilities.can_view_shifts_of(employee_id):
            raise self._forbidden("view shift summary", Capability.VIEW_SHIFTS_ALL)

        response = await self._gateway.get_shift_summary(start_date, end_date, employee_id)
        self._raise_for_rejection(response)
        rows = [parse_wire(ShiftSummaryWire, item, "shift summary").to_entity() for item in response.get_list()]
        return sorted(rows, key=lambda row: row.work_date)

    async def list_work_shifts(self) -> list[WorkShiftTemplate]:
        """List work shift templates, ordered by start time."""
        self._require_any_view()
        response = await self._gateway.list_work_shifts()
        self._raise_for_rejection(response)
        templates = [parse_wire(WorkShiftWire, item, "work shift").to_entity() for item in response.get_list()]
        return sorted(templates, key=lambda template: template.start_time)

    # =========================================================================
    # Edits
    # =========================================================================

    async def create_shift(self, request: CreateShiftRequest) -> EmployeeShift:
        """Create a manual shift.

        Raises:
            SchedulingError: HOLIDAY_CONFLICT, SLOT_CONFLICT, RESOURCE_NOT_FOUND, FORBIDDEN.
        """
        self._require(Capability.CREATE_SHIFTS, "create shifts")

        logger.info(
            f"Creating shift for employee {request.employee_id} on {request.work_date} ({request.work_shift_id})"
        )
        response = await self._gateway.create_shift(
            employee_id=request.employee_id,
            work_date=request.work_date,
            work_shift_id=request.work_shift_id,
            notes=request.notes,
        )
        self._raise_for_rejection(response)
        return parse_wire(EmployeeShiftWire, response.get_dict(), "shift").to_entity()

    async def update_shift(self, request: UpdateShiftRequest, current: EmployeeShift | None = None) -> EmployeeShift:
        """Update a shift's status and/or notes.

        The edit is checked against the shift state machine before it is
        sent. When ``current`` is not given the shift is fetched first.

        Args:
            request: Target status and/or notes.
            current: The shift as last read, if the caller has it.

        Raises:
            SchedulingError: SHIFT_FINALIZED, ILLEGAL_STATUS_TRANSITION, FORBIDDEN, RESOURCE_NOT_FOUND.
        """
        self._require(Capability.UPDATE_SHIFTS, "update shifts")

        shift = current if current is not None else await self.get_shift(request.shift_id)
        self._raise_for_violation(ShiftTransitionPolicy.check_update(shift, request.status))

        target = request.status.value if request.status else None
        logger.info(f"Updating shift {request.shift_id}: status={target} notes_changed={request.notes is not None}")
        response = await self._gateway.update_shift(
            shift_id=request.shift_id,
            status=request.status.value if request.status else None,
            notes=request.notes,
        )
        self._raise_for_rejection(response)
        return parse_wire(EmployeeShiftWire, response.get_dict(), "shift").to_entity()

    async def cancel_shift(self, shift_id: str, current: EmployeeShift | None = None) -> None:
        """Cancel (soft delete) a shift.

        Raises:
            SchedulingError: CANNOT_CANCEL_BATCH, SHIFT_FINALIZED, ILLEGAL_STATUS_TRANSITION,
                FORBIDDEN, RESOURCE_NOT_FOUND.
        """
        self._require(Capability.DELETE_SHIFTS, "cancel shifts")

        shift = current if current is not None else await self.get_shift(shift_id)
        self._raise_for_violation(ShiftTransitionPolicy.check_cancel(shift))

        logger.info(f"Cancelling shift {shift_id}")
        response = await self._gateway.delete_shift(shift_id)
        self._raise_for_rejection(response)

    # =========================================================================
    # Helpers
    # =========================================================================

    def _require(self, capability: Capability, action: str) -> None:
        if not self._capabilities.has(capability):
            raise self._forbidden(action, capability)

    def _require_any_view(self) -> None:
        if not (
            self._capabilities.has(Capability.VIEW_SHIFTS_ALL) or self._capabilities.has(Capability.VIEW_SHIFTS_OWN)
        ):
            raise self._forbidden("view shifts", Capability.VIEW_SHIFTS_OWN)

    def _forbidden(self, action: str, capability: Capability) -> SchedulingError:
        logger.warning(f"Refusing to {action}: missing capability {capability.value}")
        conflict = self._classifier.classify("FORBIDDEN", f"Missing capability {capability.value} to {action}")
        return SchedulingError(conflict, sent=False)

    def _raise_for_violation(self, violation: ShiftRuleViolation | None) -> None:
        if violation is None:
            return
        logger.info(f"Shift edit blocked before sending: {violation.code}")
        raise SchedulingError(self._classifier.classify(violation.code, violation.message), sent=False)

    def _raise_for_rejection(self, response: "ExternalResponse") -> None:
        if response.success:
            return
        raise SchedulingError(self._classifier.classify_response(response), sent=True)
