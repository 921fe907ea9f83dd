"""
Repository descriptor.

The caller-supplied record of a GitLab repository: its URL, the credentials
to use, and the connection flags stored with the task repository.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from gitlab_connector.exceptions import ConfigurationError

# Task repository property names
BASE_URL_PROPERTY = "gitlabBaseUrl"
USE_PRIVATE_TOKEN_PROPERTY = "usePrivateToken"

_TRUE_VALUES = {"true", "1", "yes"}


@dataclass(frozen=True)
class RepositoryDescriptor:
    """
    URL, credentials and flags of one GitLab task repository.

    ``password`` holds the account password, or the private token when
    ``use_static_token`` is set. An empty ``base_url_override`` means the
    host is derived from ``url``.
    """

    url: str
    username: str
    password: str = field(repr=False)
    base_url_override: str = ""
    use_static_token: bool = False

    @classmethod
    def from_properties(
        cls,
        url: str,
        username: str,
        password: str,
        properties: Mapping[str, str | None],
    ) -> "RepositoryDescriptor":
        """
        Build a descriptor from task repository properties.

        Args:
            url: Repository URL
            username: Repository user name
            password: Password or private token
            properties: Stored repository properties; reads ``gitlabBaseUrl``
                and ``usePrivateToken``

        Returns:
            RepositoryDescriptor
        """
        base_url = (properties.get(BASE_URL_PROPERTY) or "").strip()
        use_token = properties.get(USE_PRIVATE_TOKEN_PROPERTY) == "true"
        return cls(
            url=url,
            username=username,
            password=password,
            base_url_override=base_url,
            use_static_token=use_token,
        )

    @classmethod
    def from_env(cls) -> "RepositoryDescriptor":
        """
        Create a descriptor from environment variables.

        Environment variables:
            GITLAB_REPOSITORY_URL: URL of the project (required)
            GITLAB_PASSWORD: Password or private token (required)
            GITLAB_USERNAME: User name (optional, default: empty)
            GITLAB_BASE_URL: Base URL of the GitLab instance (optional)
            GITLAB_USE_PRIVATE_TOKEN: "true" to treat GITLAB_PASSWORD as a token (optional)

        Returns:
            RepositoryDescriptor

        Raises:
            ConfigurationError: If required environment variables are missing
        """
        url = os.environ.get("GITLAB_REPOSITORY_URL")
        password = os.environ.get("GITLAB_PASSWORD")

        if not url:
            raise ConfigurationError("GITLAB_REPOSITORY_URL environment variable not set")

        if password is None:
            raise ConfigurationError("GITLAB_PASSWORD environment variable not set")

        use_token = os.environ.get("GITLAB_USE_PRIVATE_TOKEN", "false").strip().lower()

        return cls(
            url=url,
            username=os.environ.get("GITLAB_USERNAME", ""),
            password=password,
            base_url_override=os.environ.get("GITLAB_BASE_URL", "").strip(),
            use_static_token=use_token in _TRUE_VALUES,
        )
