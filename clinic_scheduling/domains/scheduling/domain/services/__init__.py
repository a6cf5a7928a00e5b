# Domain Services
from .shift_transition_policy import ShiftRuleViolation, ShiftTransitionPolicy

__all__ = ["ShiftRuleViolation", "ShiftTransitionPolicy"]
