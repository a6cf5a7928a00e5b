# ============================================================================
# SCOPE: APPLICATION LAYER (Scheduling)
# Description: Gateway result type.
# ============================================================================
"""Gateway Result Type.

Every gateway call returns an ExternalResponse: either the unwrapped
``data`` of the backend envelope, or the backend's rejection code and
message. Kept in its own module so ports and services can share it.
"""

from dataclasses import dataclass
from typing import Any


@dataclass
class ExternalResponse:
    """Outcome of one clinic backend call.

    Attributes:
        success: True for a 2xx answer.
        data: Envelope ``data``: an object, a list, or a page ``{content, ...}``.
        error_code: Backend rejection code (``error`` field), e.g. "HOLIDAY_CONFLICT".
        error_message: Backend rejection text. Shown, never parsed.
        status_code: HTTP status of the answer.
    """

    success: bool
    data: dict[str, Any] | list[Any] | None = None
    error_code: str | None = None
    error_message: str | None = None
    status_code: int | None = None

    @classmethod
    def ok(cls, data: dict[str, Any] | list[Any] | None = None, status_code: int = 200) -> "ExternalResponse":
        return cls(success=True, data=data, status_code=status_code)

    @classmethod
    def error(cls, code: str, message: str, status_code: int | None = None) -> "ExternalResponse":
        return cls(success=False, error_code=code, error_message=message, status_code=status_code)

    @property
    def is_page(self) -> bool:
        """Whether data is a page envelope."""
        return isinstance(self.data, dict) and isinstance(self.data.get("content"), list)

    def get_dict(self) -> dict[str, Any]:
        """Single-object data. Empty when the answer carried no object."""
        return self.data if isinstance(self.data, dict) else {}

    def get_list(self) -> list[Any]:
        """List data, with page envelopes unwrapped to their ``content``."""
        if self.is_page:
            return self.data["content"]
        if isinstance(self.data, list):
            return self.data
        return []
