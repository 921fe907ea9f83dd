"""
Connection resolver.

Turns a RepositoryDescriptor into a validated, authenticated and cached
ConnectionHandle.
"""

import os
import re
from collections.abc import Callable
from typing import Any

from gitlab_connector.api import DEFAULT_TIMEOUT, GitlabAPI
from gitlab_connector.cache import ConnectionCache, cache_key
from gitlab_connector.connection import ConnectionHandle
from gitlab_connector.descriptor import RepositoryDescriptor
from gitlab_connector.exceptions import (
    AuthenticationError,
    ConfigurationError,
    GitlabError,
    InvalidProjectURLError,
    UnknownProjectError,
    handle_exception,
)
from gitlab_connector.logging import get_logger, log_cache_event, mask_sensitive_data
from gitlab_connector.mapper import AttributeMapper

logger = get_logger()

# scheme://authority, then a path holding at least one "/"
_URL_PATTERN = re.compile(r"((?:http|https)://(?:[^/]*))/((?:.*?)/(?:[^/]*?))$")

_GIT_SUFFIX = ".git"


def split_project_url(url: str, base_url_override: str = "") -> tuple[str, str]:
    """
    Split a project URL into host and project path.

    With a base URL override the override is the host and must be a literal
    prefix of ``url``; the path is the rest of the URL without a leading
    ``/``. Without one, the host is the scheme and authority of ``url``.

    Args:
        url: Project URL (e.g., "https://gitlab.com/group/project.git")
        base_url_override: Base URL of the GitLab instance, or "" to derive it

    Returns:
        Tuple of (host, project path)

    Raises:
        InvalidProjectURLError: If the URL does not fit
    """
    base_url = base_url_override.strip()
    if base_url:
        if not url.startswith(base_url):
            raise InvalidProjectURLError(
                f"Project URL {mask_sensitive_data(url)} does not start with {base_url}"
            )
        path = url[len(base_url):]
        if path.startswith("/"):
            path = path[1:]
        return base_url, path

    match = _URL_PATTERN.search(url)
    if match is None:
        raise InvalidProjectURLError(f"Invalid project URL: {mask_sensitive_data(url)}")
    return match.group(1), match.group(2)


def normalize_project_path(path: str) -> str:
    """Strip one trailing ``.git`` from a project path."""
    if path.endswith(_GIT_SUFFIX):
        return path[: -len(_GIT_SUFFIX)]
    return path


def split_project_path(path: str) -> tuple[str, str]:
    """
    Split a normalized project path at its last ``/``.

    Returns:
        Tuple of (namespace, project name)

    Raises:
        InvalidProjectURLError: If the path has no namespace or no name
    """
    namespace, separator, name = path.rpartition("/")
    if not separator or not namespace or not name:
        raise InvalidProjectURLError(
            f"Project path {path!r} is not of the form <namespace>/<project>"
        )
    return namespace, name


class ConnectionResolver:
    """
    Resolves repository descriptors into cached GitLab connections.

    A resolver owns no global state: the cache is passed in (or created per
    resolver), so every resolver sharing a cache shares its connections.

    Example:
        ```python
        from gitlab_connector import ConnectionCache, ConnectionResolver, RepositoryDescriptor

        resolver = ConnectionResolver(ConnectionCache())
        descriptor = RepositoryDescriptor(
            url="https://gitlab.com/group/project.git",
            username="jdoe",
            password="glpat-...",
            use_static_token=True,
        )
        handle = resolver.get(descriptor)
        print(handle.project.web_url)
        ```
    """

    def __init__(
        self,
        cache: ConnectionCache | None = None,
        connector: Any = GitlabAPI,
        mapper_factory: Callable[[RepositoryDescriptor], AttributeMapper] = AttributeMapper,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            cache: Cache shared with other resolvers (default: a new private cache)
            connector: Provides ``connect_with_token`` and ``connect_with_password``
                (default: GitlabAPI)
            mapper_factory: Builds the attribute mapper for a descriptor
            timeout: Request timeout in seconds for every GitLab call
        """
        self.cache = cache if cache is not None else ConnectionCache()
        self.connector = connector
        self.mapper_factory = mapper_factory
        self.timeout = timeout

    @classmethod
    def from_env(
        cls, cache: ConnectionCache | None = None, connector: Any = GitlabAPI
    ) -> "ConnectionResolver":
        """
        Create a resolver configured from environment variables.

        Environment variables:
            GITLAB_TIMEOUT: Request timeout in seconds (optional, default: 30)

        Raises:
            ConfigurationError: If GITLAB_TIMEOUT is not a positive number
        """
        raw_timeout = os.environ.get("GITLAB_TIMEOUT")
        timeout = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid GITLAB_TIMEOUT: {raw_timeout}. Must be a number"
                ) from None
            if timeout <= 0:
                raise ConfigurationError(
                    f"Invalid GITLAB_TIMEOUT: {raw_timeout}. Must be positive"
                )
        return cls(cache=cache, connector=connector, timeout=timeout)

    def get(
        self, descriptor: RepositoryDescriptor, force_refresh: bool = False
    ) -> ConnectionHandle:
        """
        Return a valid connection for ``descriptor``.

        A cached connection is returned as is unless ``force_refresh`` is set.
        Otherwise the descriptor is validated, the new connection replaces any
        cached one and its metadata is refreshed once.

        Args:
            descriptor: The repository to connect to
            force_refresh: Validate again even if a connection is cached

        Returns:
            ConnectionHandle

        Raises:
            GitlabError: If validation or the refresh fails
        """
        try:
            key = cache_key(descriptor)

            with self.cache.locked(key):
                if not force_refresh:
                    cached = self.cache.get(key)
                    if cached is not None:
                        log_cache_event("hit", descriptor.url, descriptor.username)
                        return cached

                log_cache_event(
                    "refresh" if force_refresh else "miss", descriptor.url, descriptor.username
                )
                handle = self.validate(descriptor)
                self.cache.put(key, handle)
                log_cache_event("store", descriptor.url, descriptor.username)
                handle.update()
        except GitlabError:
            raise
        except Exception as e:
            raise handle_exception(e) from e

        return handle

    def get_or_none(self, descriptor: RepositoryDescriptor) -> ConnectionHandle | None:
        """
        Return the connection for ``descriptor``, or None if it cannot be made.
        """
        try:
            return self.get(descriptor)
        except GitlabError as e:
            logger.info(
                "GitLab repository %s unavailable: %s", mask_sensitive_data(str(descriptor.url)), e
            )
            return None

    def validate(self, descriptor: RepositoryDescriptor) -> ConnectionHandle:
        """
        Check a descriptor against GitLab and build a connection for it.

        Args:
            descriptor: The repository to validate

        Returns:
            A new, uncached ConnectionHandle

        Raises:
            InvalidProjectURLError: If the URL cannot be split into host and project
            AuthenticationError: If the credentials are rejected
            TransportError: On network failures
            UnknownProjectError: If the project does not exist
        """
        try:
            host, project_path = split_project_url(
                descriptor.url, descriptor.base_url_override
            )
            token = self._authenticate(host, descriptor)

            project_path = normalize_project_path(project_path)
            namespace, project_name = split_project_path(project_path)

            with self.connector.connect_with_token(host, token, timeout=self.timeout) as api:
                project = api.get_project(namespace, project_name)

            if project is None:
                raise UnknownProjectError(project_path)

            logger.debug("Resolved %s on %s", project.path_with_namespace, host)
            return ConnectionHandle(
                host=host,
                project=project,
                token=token,
                mapper=self.mapper_factory(descriptor),
                timeout=self.timeout,
                connector=self.connector,
            )
        except GitlabError:
            raise
        except Exception as e:
            raise handle_exception(e) from e

    def _authenticate(self, host: str, descriptor: RepositoryDescriptor) -> str:
        """Authenticate against ``host`` and return the effective token."""
        if descriptor.use_static_token:
            with self.connector.connect_with_token(
                host, descriptor.password, timeout=self.timeout
            ) as api:
                api.current_session()
            return descriptor.password

        session = self.connector.connect_with_password(
            host, descriptor.username, descriptor.password, timeout=self.timeout
        )
        if not session.private_token:
            raise AuthenticationError(
                "NO_PRIVATE_TOKEN", f"Session for {descriptor.username} carries no token"
            )
        return session.private_token
