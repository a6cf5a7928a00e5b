# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Resolves bookable shift windows for an employee and a date.
# ============================================================================
"""Availability Resolver.

Given an employee and a date, produces the SCHEDULED shift windows that make
the employee bookable on that date.

The Shift Store is queried once per (employee, month) and the result is
filtered to the date client-side. Each selection slot (the doctor, every
participant) is resolved independently, and a newer resolution for a slot
supersedes any older one still in flight.
"""

import asyncio
import logging
from datetime import date, datetime

from ...domain.entities.shift import EmployeeShift
from ..dto.shift_dtos import AvailabilityResult
from ..exceptions import SchedulingError
from .projection_cache import MonthKey, RequestSequencer, ShiftProjectionCache
from .shift_store import ShiftStore

logger = logging.getLogger(__name__)

DOCTOR_SLOT = "doctor"


def participant_slot(employee_id: int) -> str:
    """Selection slot name for a participant."""
    return f"participant:{employee_id}"


class AvailabilityResolver:
    """Per-slot availability lookups backed by the month projection cache."""

    def __init__(self, shift_store: ShiftStore, cache: ShiftProjectionCache | None = None) -> None:
        """Initialize resolver.

        Args:
            shift_store: Shift store used for month fetches.
            cache: Month projection cache. A private one is created when omitted.
        """
        self._store = shift_store
        self._cache = cache or ShiftProjectionCache()
        self._slots = RequestSequencer()
        self._selection: dict[str, MonthKey] = {}

    @property
    def cache(self) -> ShiftProjectionCache:
        return self._cache

    async def resolve(
        self,
        employee_id: int,
        target_date: date,
        slot: str = DOCTOR_SLOT,
        requested_start: datetime | None = None,
    ) -> AvailabilityResult | None:
        """Resolve one employee's bookable windows on one date.

        Changing the (employee, month) selected in a slot invalidates the
        projection that slot held before.

        Args:
            employee_id: Employee to resolve.
            target_date: Date to resolve.
            slot: Selection slot the lookup belongs to.
            requested_start: Optional start time checked against the windows.

        Returns:
            AvailabilityResult, or None when a newer lookup for the same slot
            superseded this one while it was in flight, whether it succeeded or failed.

        Raises:
            SchedulingError: The month fetch was rejected and this lookup is still the latest.
        """
        key = MonthKey.of(employee_id, target_date)
        self._select(slot, key)
        ticket = self._slots.issue(slot)

        month_shifts = self._cache.get(key)
        if month_shifts is None:
            try:
                month_shifts = await self._fetch_month(key)
            except SchedulingError as e:
                if not self._slots.is_latest(slot, ticket):
                    logger.debug(f"Discarding superseded {e.kind.value} for slot {slot} ({key})")
                    return None
                raise

        if not self._slots.is_latest(slot, ticket):
            logger.debug(f"Discarding superseded availability for slot {slot} ({key})")
            return None

        return self._build_result(employee_id, target_date, month_shifts, requested_start)

    async def resolve_all(
        self,
        doctor_id: int,
        participant_ids: list[int],
        target_date: date,
        requested_start: datetime | None = None,
    ) -> dict[str, AvailabilityResult | None]:
        """Resolve the doctor and every participant independently.

        Returns:
            Results keyed by slot name (``"doctor"``, ``"participant:<id>"``).
        """
        slots = [(DOCTOR_SLOT, doctor_id)] + [(participant_slot(pid), pid) for pid in participant_ids]
        results = await asyncio.gather(
            *(self.resolve(employee_id, target_date, slot, requested_start) for slot, employee_id in slots)
        )
        return {slot: result for (slot, _), result in zip(slots, results)}

    def release(self, slot: str) -> None:
        """Forget a slot (e.g. a participant removed from the form)."""
        key = self._selection.pop(slot, None)
        self._slots.issue(slot)
        if key is not None and key not in self._selection.values():
            self._cache.invalidate(key)

    def invalidate(self, employee_id: int | None = None) -> None:
        """Drop cached months, for one employee or all of them."""
        if employee_id is None:
            self._cache.clear()
        else:
            self._cache.invalidate_employee(employee_id)

    async def _fetch_month(self, key: MonthKey) -> list[EmployeeShift]:
        sequence = self._cache.begin(key)
        shifts = await self._store.list_month(key.employee_id, key.year, key.month)
        self._cache.apply(key, sequence, shifts)
        return shifts

    def _select(self, slot: str, key: MonthKey) -> None:
        previous = self._selection.get(slot)
        if previous == key:
            return
        self._selection[slot] = key
        if previous is not None and previous not in self._selection.values():
            logger.debug(f"Selection change in slot {slot}: invalidating {previous}")
            self._cache.invalidate(previous)

    @staticmethod
    def _build_result(
        employee_id: int,
        target_date: date,
        month_shifts: list[EmployeeShift],
        requested_start: datetime | None,
    ) -> AvailabilityResult:
        bookable = [shift for shift in month_shifts if shift.is_bookable()]
        day_shifts = sorted(
            (shift for shift in bookable if shift.work_date == target_date),
            key=lambda shift: shift.work_shift.start_time,
        )
        outside_shift = False
        if requested_start is not None and day_shifts:
            outside_shift = not any(shift.covers(requested_start) for shift in day_shifts)

        if not day_shifts:
            logger.info(f"Employee {employee_id} has no shift scheduled on {target_date}")

        return AvailabilityResult(
            employee_id=employee_id,
            target_date=target_date,
            shifts=day_shifts,
            dates_with_shifts=sorted({shift.work_date for shift in bookable}),
            outside_shift=outside_shift,
        )
