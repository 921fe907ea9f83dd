"""GitLab connector - cached, authenticated connections to GitLab projects."""

from gitlab_connector.api import GitlabAPI
from gitlab_connector.cache import ConnectionCache, cache_key
from gitlab_connector.connection import ConnectionHandle
from gitlab_connector.descriptor import RepositoryDescriptor
from gitlab_connector.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
    GitlabError,
    InvalidProjectURLError,
    NotFoundError,
    RateLimitedError,
    RequestError,
    ServerError,
    TransportError,
    UnexpectedError,
    UnknownProjectError,
    handle_exception,
)
from gitlab_connector.logging import configure_logging, get_logger
from gitlab_connector.mapper import AttributeMapper
from gitlab_connector.resolver import ConnectionResolver
from gitlab_connector.transport import HTTPTransport

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # Resolution
    "ConnectionResolver",
    "ConnectionCache",
    "ConnectionHandle",
    "RepositoryDescriptor",
    "AttributeMapper",
    "cache_key",
    # Remote client
    "GitlabAPI",
    "HTTPTransport",
    # Exceptions
    "GitlabError",
    "ConfigurationError",
    "InvalidProjectURLError",
    "UnknownProjectError",
    "AuthenticationError",
    "AuthorizationError",
    "TransportError",
    "RateLimitedError",
    "ServerError",
    "UnexpectedError",
    "RequestError",
    "NotFoundError",
    "handle_exception",
    # Logging
    "configure_logging",
    "get_logger",
]
