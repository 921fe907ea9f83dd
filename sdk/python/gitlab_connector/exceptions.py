"""GitLab connector exception classes."""

import httpx


class GitlabError(Exception):
    """Base exception for all GitLab connector errors."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        super().__init__(f"[{code}] {message}")


class ConfigurationError(GitlabError):
    """Raised when connector configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class InvalidProjectURLError(GitlabError):
    """Raised when a repository URL cannot be split into host and project path."""

    def __init__(self, message: str = "Invalid project URL!") -> None:
        super().__init__("INVALID_PROJECT_URL", message)


class UnknownProjectError(GitlabError):
    """Raised when authentication succeeded but the project does not exist."""

    def __init__(self, project_path: str) -> None:
        super().__init__("UNKNOWN_PROJECT", f"Unknown project: {project_path}")
        self.project_path = project_path


class AuthenticationError(GitlabError):
    """Raised when credentials or a token are rejected."""

    pass


class AuthorizationError(AuthenticationError):
    """Raised when access is denied."""

    pass


class TransportError(GitlabError):
    """Raised on network or I/O failures while talking to GitLab."""

    pass


class RateLimitedError(TransportError):
    """Raised when rate limited."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.retry_after = retry_after


class ServerError(TransportError):
    """Raised on server errors (5xx)."""

    pass


class UnexpectedError(GitlabError):
    """Raised for any failure that fits no other category."""

    pass


class RequestError(UnexpectedError):
    """Raised when GitLab rejects a request with an unexpected 4xx status."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)
        self.status_code = status_code


class NotFoundError(RequestError):
    """Raised when a resource is not found."""

    def __init__(
        self, code: str, message: str, request_id: str | None = None
    ) -> None:
        super().__init__(code, message, 404, request_id)


def handle_exception(exc: BaseException) -> GitlabError:
    """
    Convert an arbitrary exception into a GitlabError.

    GitlabError instances are returned unchanged. Network failures become
    TransportError, everything else UnexpectedError. The original exception
    is attached as ``__cause__``.

    Args:
        exc: The exception to convert

    Returns:
        A GitlabError suitable for raising
    """
    if isinstance(exc, GitlabError):
        return exc

    if isinstance(exc, (httpx.TransportError, OSError)):
        error: GitlabError = TransportError("CONNECTION_ERROR", str(exc) or type(exc).__name__)
    else:
        error = UnexpectedError(
            "UNEXPECTED_ERROR", f"{type(exc).__name__}: {exc}"
        )

    error.__cause__ = exc
    return error
