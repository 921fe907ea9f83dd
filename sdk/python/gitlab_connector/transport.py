"""
HTTP Transport for the GitLab connector.

Handles HTTP communication with the GitLab REST API, token authentication
and error handling. Requests are made exactly once; failures are raised as
typed exceptions.
"""

import time
from typing import Any

import httpx

from gitlab_connector.exceptions import (
    AuthenticationError,
    AuthorizationError,
    GitlabError,
    NotFoundError,
    RateLimitedError,
    RequestError,
    ServerError,
    TransportError,
)
from gitlab_connector.logging import log_http_request, log_http_response

API_PREFIX = "/api/v4"
TOKEN_HEADER = "PRIVATE-TOKEN"

_DEFAULT_CODES = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    409: "CONFLICT",
    422: "UNPROCESSABLE_ENTITY",
    429: "RATE_LIMITED",
}


class HTTPTransport:
    """
    HTTP transport layer bound to one GitLab host.

    Handles:
    - PRIVATE-TOKEN authentication when a token is given
    - Request/response debug logging with credentials masked
    - Error response parsing into typed exceptions
    """

    def __init__(
        self,
        host: str,
        token: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize HTTP transport.

        Args:
            host: Scheme and authority of the GitLab instance (e.g., "https://gitlab.com")
            token: Private or personal access token (None for unauthenticated calls)
            timeout: Request timeout in seconds
        """
        self.host = host.rstrip("/")
        self.base_url = self.host + API_PREFIX
        self.timeout = timeout

        headers = {"Accept": "application/json"}
        if token is not None:
            headers[TOKEN_HEADER] = token

        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            headers=headers,
        )

    def close(self) -> None:
        """Close the HTTP client."""
        self._client.close()

    def __enter__(self) -> "HTTPTransport":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make a request against the GitLab API.

        Args:
            method: HTTP method
            path: API path relative to /api/v4 (e.g., "/user")
            params: Query parameters
            body: Form body (for POST/PUT)

        Returns:
            Parsed JSON response

        Raises:
            GitlabError: On API or network errors
        """
        log_http_request(method, self.base_url + path, dict(self._client.headers), body)

        started = time.monotonic()
        try:
            response = self._client.request(method, path, params=params, data=body)
        except httpx.RequestError as e:
            raise TransportError("CONNECTION_ERROR", str(e) or type(e).__name__) from e

        log_http_response(
            response.status_code,
            self.base_url + path,
            elapsed_ms=(time.monotonic() - started) * 1000,
        )

        if response.status_code >= 400:
            raise self._parse_error_response(response)

        try:
            return response.json()
        except ValueError as e:
            raise ServerError(
                "INVALID_RESPONSE",
                f"Expected JSON from {path}, got {response.headers.get('Content-Type')}",
            ) from e

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request."""
        return self.request("GET", path, params=params)

    def post(self, path: str, body: dict[str, Any] | None = None) -> Any:
        """Make a POST request."""
        return self.request("POST", path, body=body)

    def _parse_error_response(self, response: httpx.Response) -> GitlabError:
        """
        Parse an error response into a typed exception.

        GitLab answers with either ``{"message": ...}`` or
        ``{"error": ..., "error_description": ...}``.

        Args:
            response: HTTP response with error status

        Returns:
            Appropriate GitlabError subclass
        """
        try:
            data = response.json()
        except Exception:
            data = {}
        if not isinstance(data, dict):
            data = {}

        status_code = response.status_code
        code = _DEFAULT_CODES.get(status_code, f"HTTP_{status_code}")
        message = f"HTTP {status_code}"

        if isinstance(data.get("error"), str):
            code = data["error"].upper()
            message = data.get("error_description") or data["error"]
        if "message" in data:
            message = str(data["message"])

        request_id = response.headers.get("X-Request-Id")

        if status_code == 401:
            return AuthenticationError(code, message, request_id)
        elif status_code == 403:
            return AuthorizationError(code, message, request_id)
        elif status_code == 404:
            return NotFoundError(code, message, request_id)
        elif status_code == 429:
            retry_after_str = response.headers.get("Retry-After", "60")
            try:
                retry_after = int(retry_after_str)
            except ValueError:
                retry_after = 60
            return RateLimitedError(code, message, retry_after, request_id)
        elif status_code >= 500:
            return ServerError(code, message, request_id)
        else:
            return RequestError(code, message, status_code, request_id)
