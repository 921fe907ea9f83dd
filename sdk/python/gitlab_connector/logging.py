"""
GitLab connector logging utilities.

Provides configurable logging for HTTP requests/responses and connection cache
activity. Ensures no credentials (passwords, private tokens) are logged.
"""

import logging
import re
from typing import Any

# Create connector-specific loggers
_connector_logger = logging.getLogger("gitlab_connector")
_http_logger = logging.getLogger("gitlab_connector.http")
_cache_logger = logging.getLogger("gitlab_connector.cache")

# Patterns for sensitive data that should be masked
_SENSITIVE_PATTERNS = [
    # PRIVATE-TOKEN header as rendered by httpx or dict reprs
    (re.compile(r"(private[-_]token)(['\"]?\s*[:=]\s*)['\"]?[^'\"\s,}&]+['\"]?", re.IGNORECASE), r"\1\2[REDACTED]"),
    # Query string credentials
    (re.compile(r"([?&](?:password|private_token|access_token)=)[^&\s]+", re.IGNORECASE), r"\1[REDACTED]"),
    # Secret/token patterns
    (re.compile(r"(secret|token|password|api_key)['\"]?\s*[:=]\s*['\"][^'\"]+['\"]", re.IGNORECASE), r"\1: [REDACTED]"),
]

_DEFAULT_SENSITIVE_KEYS = {
    "password",
    "private_token",
    "private-token",
    "token",
    "secret",
    "api_key",
    "authorization",
}


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    cache_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure GitLab connector logging.

    Args:
        level: Default log level for all connector loggers (default: INFO)
        http_level: Log level for HTTP request/response logging (default: same as level)
        cache_level: Log level for connection cache activity (default: same as level)
        handler: Custom handler to use (default: StreamHandler to stderr)
        format_string: Custom format string (default: includes timestamp, level, logger name)

    Example:
        ```python
        import logging
        from gitlab_connector.logging import configure_logging

        # Trace every GitLab API call
        configure_logging(level=logging.INFO, http_level=logging.DEBUG)
        ```
    """
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    formatter = logging.Formatter(format_string)

    if handler is None:
        handler = logging.StreamHandler()

    handler.setFormatter(formatter)

    _connector_logger.setLevel(level)
    _connector_logger.addHandler(handler)

    _http_logger.setLevel(http_level if http_level is not None else level)

    _cache_logger.setLevel(cache_level if cache_level is not None else level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a GitLab connector logger.

    Args:
        name: Logger name suffix (e.g., "http", "cache"). If None, returns the main logger.

    Returns:
        Logger instance
    """
    if name is None:
        return _connector_logger
    return logging.getLogger(f"gitlab_connector.{name}")


def mask_sensitive_data(text: str) -> str:
    """
    Mask credentials in a string.

    Args:
        text: Text that may contain passwords or tokens

    Returns:
        Text with sensitive data masked
    """
    result = text
    for pattern, replacement in _SENSITIVE_PATTERNS:
        result = pattern.sub(replacement, result)
    return result


def safe_log_dict(data: dict[str, Any], sensitive_keys: set[str] | None = None) -> dict[str, Any]:
    """
    Create a copy of a dictionary with sensitive values masked.

    Args:
        data: Dictionary that may contain sensitive values
        sensitive_keys: Set of keys to mask (default: password, token, private-token, ...)

    Returns:
        Dictionary with sensitive values replaced with "[REDACTED]"
    """
    if sensitive_keys is None:
        sensitive_keys = _DEFAULT_SENSITIVE_KEYS

    result: dict[str, Any] = {}
    for key, value in data.items():
        key_lower = key.lower()
        if key_lower in sensitive_keys or any(sk in key_lower for sk in sensitive_keys):
            result[key] = "[REDACTED]"
        elif isinstance(value, dict):
            result[key] = safe_log_dict(value, sensitive_keys)
        elif isinstance(value, list):
            result[key] = [
                safe_log_dict(item, sensitive_keys) if isinstance(item, dict) else item
                for item in value
            ]
        else:
            result[key] = value

    return result


def log_http_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    body: dict[str, Any] | None = None,
) -> None:
    """
    Log an HTTP request at DEBUG level with sensitive data masked.

    Args:
        method: HTTP method (GET, POST, etc.)
        url: Request URL
        headers: Request headers (optional)
        body: Request body (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{method} {mask_sensitive_data(url)}"]

    if headers:
        log_parts.append(f"headers={safe_log_dict(headers)}")

    if body:
        log_parts.append(f"body={safe_log_dict(body)}")

    _http_logger.debug(" | ".join(log_parts))


def log_http_response(
    status_code: int,
    url: str,
    elapsed_ms: float | None = None,
) -> None:
    """
    Log an HTTP response at DEBUG level.

    Args:
        status_code: HTTP status code
        url: Request URL
        elapsed_ms: Request duration in milliseconds (optional)
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"Response {status_code} from {mask_sensitive_data(url)}"]

    if elapsed_ms is not None:
        log_parts.append(f"elapsed={elapsed_ms:.2f}ms")

    _http_logger.debug(" | ".join(log_parts))


def log_cache_event(event: str, url: str, username: str | None = None) -> None:
    """
    Log a connection cache event at DEBUG level.

    Only the repository URL and username are logged, never the cache key,
    which embeds a password digest.

    Args:
        event: Event name (e.g., "hit", "miss", "refresh", "store")
        url: Repository URL of the descriptor
        username: Username of the descriptor (optional)
    """
    if not _cache_logger.isEnabledFor(logging.DEBUG):
        return

    log_parts = [f"{event}: url={mask_sensitive_data(url)}"]

    if username:
        log_parts.append(f"username={username}")

    _cache_logger.debug(" | ".join(log_parts))


__all__ = [
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "log_http_request",
    "log_http_response",
    "log_cache_event",
]
