"""
HTTP client for the clinic backend.

The backend owns patients, medicines, expenses and user accounts; the desk only
reads and writes them through this client. Field names on the wire are camelCase.
"""
import logging
from typing import Any, Dict, Optional

import requests

from clinic_desk.core.config import settings
from clinic_desk.helpers.exception_handler import CustomException

logger = logging.getLogger(__name__)


class ClinicApiError(CustomException):
    """Backend call failed. 4xx statuses pass through, everything else becomes 502."""

    def __init__(self, http_code: int, message: str, upstream_status: Optional[int] = None):
        super().__init__(http_code=http_code, code=str(http_code), message=message)
        self.upstream_status = upstream_status


class ClinicApiClient:
    """Synchronous client for the clinic backend REST API"""

    def __init__(self, base_url: Optional[str] = None, token: Optional[str] = None,
                 timeout: Optional[float] = None, session: Optional[requests.Session] = None):
        self.base_url = (base_url or settings.CLINIC_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.CLINIC_API_TIMEOUT
        self.session = session or requests.Session()
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None,
                json: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        if params:
            params = {key: value for key, value in params.items() if value is not None and value != ''}

        try:
            response = self.session.request(method, url, params=params, json=json, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Clinic backend unreachable: {method} {url}: {e}")
            raise ClinicApiError(http_code=502, message="Clinic backend is unreachable")

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.warning(f"Clinic backend {method} {path} failed with {response.status_code}: {message}")
            http_code = response.status_code if response.status_code < 500 else 502
            raise ClinicApiError(http_code=http_code, message=message, upstream_status=response.status_code)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"Clinic backend returned {response.status_code}"
        if isinstance(body, dict):
            return body.get("error") or body.get("message") or f"Clinic backend returned {response.status_code}"
        return str(body)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        return self.request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)

    def close(self):
        self.session.close()


def get_public_clinic_client():
    """Client without credentials, used for logging in."""
    client = ClinicApiClient()
    try:
        yield client
    finally:
        client.close()
