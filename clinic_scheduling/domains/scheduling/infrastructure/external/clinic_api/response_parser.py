# ============================================================================
# SCOPE: INFRASTRUCTURE LAYER (Scheduling)
# Description: JSON response parser for the clinic REST API.
# ============================================================================
"""Clinic API Response Parser.

Unwraps the backend envelope ``{statusCode, error, message, data}``.
Single responsibility: HTTP response to ExternalResponse.
"""

import logging
from typing import Any

import httpx

from clinic_scheduling.core.domain.exceptions import IntegrationException

from ....application.ports import ExternalResponse

logger = logging.getLogger(__name__)

# Used only when an error body carries no machine-readable code
STATUS_FALLBACK_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "RESOURCE_NOT_FOUND",
    409: "CONFLICT",
}


class JsonResponseParser:
    """Parses clinic API responses into ExternalResponse."""

    ENVELOPE_KEYS = frozenset({"statusCode", "status_code"})

    def parse(self, response: httpx.Response) -> ExternalResponse:
        """Parse an HTTP response.

        Args:
            response: Response from the clinic API.

        Returns:
            ExternalResponse with the unwrapped data, or the backend error.

        Raises:
            IntegrationException: A successful status with a body that is not JSON.
        """
        status = response.status_code
        body = self._decode(response)

        if response.is_success:
            if body is _NOT_JSON:
                raise IntegrationException(
                    "clinic_api",
                    f"Expected JSON from {response.request.method} {response.request.url.path}, got non-JSON body",
                    status_code=status,
                )
            return ExternalResponse.ok(self._unwrap(body), status_code=status)

        if isinstance(body, dict):
            code = self._first(body, "error", "errorCode", "error_code", "code")
            message = self._first(body, "message", "detail", "title")
        else:
            code, message = None, None

        code = code or STATUS_FALLBACK_CODES.get(status) or f"HTTP_{status}"
        message = message or response.reason_phrase or f"HTTP {status}"
        logger.info(f"Clinic API rejected {response.request.method} {response.request.url.path}: {status} {code}")
        return ExternalResponse.error(code, message, status_code=status)

    def _unwrap(self, body: Any) -> Any:
        if isinstance(body, dict) and self.ENVELOPE_KEYS & body.keys() and "data" in body:
            return body["data"]
        return body

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return _NOT_JSON

    @staticmethod
    def _first(body: dict[str, Any], *keys: str) -> str | None:
        for key in keys:
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value
        return None


_NOT_JSON = object()
