"""Authenticated connection to one GitLab project."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from gitlab_connector.api import DEFAULT_TIMEOUT, GitlabAPI
from gitlab_connector.types import Project

if TYPE_CHECKING:
    from gitlab_connector.mapper import AttributeMapper


@dataclass(frozen=True)
class ConnectionHandle:
    """
    The resolved, authenticated representation of a GitLab project.

    Handles are immutable and shared read-only between all callers that
    resolve the same repository. ``token`` is the effective token usable for
    API calls, which may differ from the password the descriptor carried.
    """

    host: str
    project: Project
    token: str = field(repr=False)
    mapper: "AttributeMapper"
    timeout: float = DEFAULT_TIMEOUT
    # Anything with GitlabAPI's connect_with_token classmethod
    connector: Any = field(default=GitlabAPI, repr=False, compare=False)

    def api(self) -> GitlabAPI:
        """
        Open a new API client authenticated with the effective token.

        The caller owns the client and should close it.
        """
        return self.connector.connect_with_token(self.host, self.token, timeout=self.timeout)

    def update(self) -> None:
        """
        Refresh the project metadata held by the attribute mapper.

        Raises:
            GitlabError: If loading the metadata fails
        """
        with self.api() as api:
            self.mapper.update(api, self.project)
