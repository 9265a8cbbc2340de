"""
REST client for the WaterX backend
Thin wrapper over httpx that unwraps the {success, data, error} envelope
"""

import logging
from typing import Any, Optional

import httpx

from waterx_admin.config import DEFAULT_API_TIMEOUT


class ApiError(Exception):
    """Raised for transport failures, error statuses and rejected envelopes."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ApiClient:
    """
    Client for the WaterX REST API.

    Supports:
    - JSON requests with any HTTP method
    - Envelope unwrapping ({success, data, error})
    - Raw responses for callers that interpret the body themselves
    """

    def __init__(self, base_url: str, timeout: float = DEFAULT_API_TIMEOUT,
                 transport: Optional[httpx.BaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Content-Type": "application/json",
                "Accept": "application/json",
            },
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self):
        """Close the HTTP client."""
        self._client.close()

    def send(self, path: str, method: str = "GET", json: Any = None) -> httpx.Response:
        """Issue a request and return the raw response; only transport errors raise."""
        logging.debug(f"API {method} {path}")
        try:
            if json is None:
                return self._client.request(method, path)
            return self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logging.warning(f"API {method} {path} failed: {e}")
            raise ApiError(f"Network error: {e}") from e

    def api(self, path: str, method: str = "GET", json: Any = None) -> Any:
        """
        Issue a request and return the decoded payload

        Args:
            path: Endpoint path relative to the base URL
            method: HTTP method
            json: Request body, serialized as JSON when given

        Returns:
            The envelope's ``data`` when the body is an envelope, else the body

        Raises:
            ApiError: on transport failure, non-2xx status, undecodable body
                or an envelope with ``success: false``
        """
        response = self.send(path, method, json)
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error:
            message = _error_message(payload) or f"Request failed with status {response.status_code}"
            logging.warning(f"API {method} {path} -> {response.status_code}: {message}")
            raise ApiError(message, response.status_code)

        if payload is None:
            if not response.content:
                return None
            raise ApiError("Invalid response from server", response.status_code)

        if isinstance(payload, dict) and "success" in payload:
            if not payload.get("success"):
                message = _error_message(payload) or "Request failed"
                logging.warning(f"API {method} {path} rejected: {message}")
                raise ApiError(message, response.status_code)
            return payload.get("data")
        return payload


def _error_message(payload: Any) -> Optional[str]:
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, str) and error:
            return error
    return None
