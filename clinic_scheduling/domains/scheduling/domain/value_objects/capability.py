"""Capability Value Objects.

Scheduling capabilities derived once from the authenticated principal's
permission strings and then passed explicitly to the operations that need them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable


class Capability(str, Enum):
    """Operations a principal may perform in the scheduling core."""

    RESCHEDULE_APPOINTMENT = "RESCHEDULE_APPOINTMENT"
    VIEW_SHIFTS_ALL = "VIEW_SHIFTS_ALL"
    VIEW_SHIFTS_OWN = "VIEW_SHIFTS_OWN"
    CREATE_SHIFTS = "CREATE_SHIFTS"
    UPDATE_SHIFTS = "UPDATE_SHIFTS"
    DELETE_SHIFTS = "DELETE_SHIFTS"


# Backend permission string -> capabilities it grants
PERMISSION_CAPABILITIES: dict[str, tuple[Capability, ...]] = {
    "MANAGE_APPOINTMENT": (Capability.RESCHEDULE_APPOINTMENT,),
    "MANAGE_WORK_SHIFTS": (
        Capability.CREATE_SHIFTS,
        Capability.UPDATE_SHIFTS,
        Capability.DELETE_SHIFTS,
    ),
    "VIEW_SCHEDULE_ALL": (Capability.VIEW_SHIFTS_ALL,),
    "VIEW_SCHEDULE_OWN": (Capability.VIEW_SHIFTS_OWN,),
}


@dataclass(frozen=True)
class CapabilitySet:
    """Immutable set of capabilities held by one principal.

    Attributes:
        capabilities: Granted capabilities.
        employee_id: Employee id of the principal, used for own-schedule access.
    """

    capabilities: frozenset[Capability] = field(default_factory=frozenset)
    employee_id: int | None = None

    @classmethod
    def from_permissions(cls, permissions: Iterable[str], employee_id: int | None = None) -> "CapabilitySet":
        """Build the capability set from backend permission strings.

        Unknown permission strings are ignored.

        Args:
            permissions: Permission names attached to the authenticated principal.
            employee_id: The principal's own employee id, if any.

        Returns:
            CapabilitySet for the principal.
        """
        granted: set[Capability] = set()
        for permission in permissions:
            granted.update(PERMISSION_CAPABILITIES.get(permission.strip().upper(), ()))
        return cls(capabilities=frozenset(granted), employee_id=employee_id)

    @classmethod
    def all(cls, employee_id: int | None = None) -> "CapabilitySet":
        """Every capability, for administrative principals."""
        return cls(capabilities=frozenset(Capability), employee_id=employee_id)

    def has(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def can_view_shifts_of(self, employee_id: int | None) -> bool:
        """Check whether shifts of the given employee may be listed.

        A query without an employee filter needs the view-all capability.
        """
        if self.has(Capability.VIEW_SHIFTS_ALL):
            return True
        if not self.has(Capability.VIEW_SHIFTS_OWN):
            return False
        return employee_id is not None and employee_id == self.employee_id
