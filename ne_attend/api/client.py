from __future__ import annotations

import logging
from typing import Any

import requests

from ..models.upload_result import UploadKind, UploadResult

"""REST client for the NE-ATTEND bulk account endpoints.

POST {base_url}/users/bulk-students     {"students": [...], "rowErrors": [...]}
POST {base_url}/users/bulk-instructors  {"instructors": [...], "rowErrors": [...]}

The backend answers ``{"success", "message", "data": {"createdCount",
"failedCount", "failures": [{"rowIndex", "reason"}]}}``.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "BackendError",
    "BulkUploadClient",
]

DEFAULT_FAILURE_MESSAGE = "Failed to process bulk upload."

_ENDPOINTS: dict[UploadKind, str] = {
    UploadKind.STUDENTS: "users/bulk-students",
    UploadKind.INSTRUCTORS: "users/bulk-instructors",
}


class BackendError(Exception):
    """Raised when the backend rejects a submission or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _json_or_empty(response: requests.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


class BulkUploadClient:
    """Submit validated upload records to the backend.

    A ``requests.Session`` may be injected (tests pass a mock); otherwise one
    is created per client.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = 30.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def endpoint_url(self, kind: UploadKind) -> str:
        return f"{self.base_url}/{_ENDPOINTS[kind]}"

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def submit(self, kind: UploadKind, result: UploadResult) -> dict[str, Any]:
        """Post the valid records of ``result``; return the decoded response body.

        Raises:
            BackendError: transport failure or non-2xx response
        """
        payload = {
            kind.value: [record.to_payload() for record in result.valid_records],
            "rowErrors": [err.to_payload() for err in result.row_errors],
        }
        url = self.endpoint_url(kind)
        logger.debug("POST %s records=%d", url, len(result.valid_records))
        try:
            response = self.session.post(url, json=payload, headers=self._headers(), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise BackendError(f"request to {url} failed: {e}") from e

        body = _json_or_empty(response)
        if not response.ok:
            message = body.get("message") or body.get("error") or DEFAULT_FAILURE_MESSAGE
            raise BackendError(message, status_code=response.status_code)
        return body
