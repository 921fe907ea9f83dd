"""
GitLab API client.

Provides the small subset of the GitLab REST API needed to authenticate,
look up a project and load the metadata used for attribute mapping.
"""

from datetime import date
from typing import Any
from urllib.parse import quote

from gitlab_connector.exceptions import NotFoundError
from gitlab_connector.transport import HTTPTransport
from gitlab_connector.types import Label, Member, Milestone, Project, Session

DEFAULT_TIMEOUT = 30.0
PAGE_SIZE = 100


def _parse_session(data: dict[str, Any]) -> Session:
    return Session(
        user_id=data["id"],
        username=data["username"],
        name=data.get("name"),
        email=data.get("email"),
        private_token=data.get("private_token"),
    )


def _parse_project(data: dict[str, Any]) -> Project:
    namespace = data.get("namespace") or {}
    path_with_namespace = data["path_with_namespace"]
    return Project(
        project_id=data["id"],
        name=data["name"],
        path=data["path"],
        path_with_namespace=path_with_namespace,
        namespace=namespace.get("full_path", path_with_namespace.rpartition("/")[0]),
        web_url=data.get("web_url", ""),
        default_branch=data.get("default_branch"),
        description=data.get("description"),
    )


def _parse_label(data: dict[str, Any]) -> Label:
    return Label(
        name=data["name"],
        color=data.get("color", ""),
        description=data.get("description"),
    )


def _parse_milestone(data: dict[str, Any]) -> Milestone:
    due_date = data.get("due_date")
    return Milestone(
        milestone_id=data["id"],
        iid=data["iid"],
        title=data["title"],
        state=data.get("state", "active"),
        due_date=date.fromisoformat(due_date) if due_date else None,
    )


def _parse_member(data: dict[str, Any]) -> Member:
    return Member(
        user_id=data["id"],
        username=data["username"],
        name=data.get("name", data["username"]),
        state=data.get("state", "active"),
        access_level=data.get("access_level", 0),
    )


class GitlabAPI:
    """
    Client for one GitLab host, authenticated with a token.

    Use the ``connect_with_token`` and ``connect_with_password`` class methods
    rather than the constructor.

    Example:
        ```python
        from gitlab_connector.api import GitlabAPI

        session = GitlabAPI.connect_with_password("https://gitlab.com", "jdoe", "secret")
        with GitlabAPI.connect_with_token("https://gitlab.com", session.private_token) as api:
            project = api.get_project("group/sub", "project")
        ```
    """

    def __init__(self, transport: HTTPTransport) -> None:
        """
        Initialize the API client.

        Args:
            transport: HTTP transport bound to the GitLab host
        """
        self._transport = transport

    @classmethod
    def connect_with_token(
        cls, host: str, token: str, timeout: float = DEFAULT_TIMEOUT
    ) -> "GitlabAPI":
        """
        Create a client that authenticates every call with ``token``.

        No request is made; use ``current_session`` to check the token.
        """
        return cls(HTTPTransport(host, token=token, timeout=timeout))

    @classmethod
    def connect_with_password(
        cls,
        host: str,
        username: str,
        password: str,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Session:
        """
        Open a session with username and password.

        Args:
            host: Scheme and authority of the GitLab instance
            username: Login name or email
            password: Account password
            timeout: Request timeout in seconds

        Returns:
            Session carrying the user's private token

        Raises:
            AuthenticationError: If the credentials are rejected
            TransportError: On network failures
        """
        with HTTPTransport(host, timeout=timeout) as transport:
            data = transport.post("/session", body={"login": username, "password": password})
        return _parse_session(data)

    @property
    def host(self) -> str:
        """The GitLab host this client talks to."""
        return self._transport.host

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    def current_session(self) -> Session:
        """
        Get the user the token belongs to.

        Raises:
            AuthenticationError: If the token is rejected
        """
        return _parse_session(self._transport.get("/user"))

    def get_project(self, namespace: str, name: str) -> Project | None:
        """
        Look up a project by namespace and name.

        Args:
            namespace: Full namespace path (e.g., "group/subgroup")
            name: Project path within the namespace

        Returns:
            The project, or None if it does not exist or is not visible
        """
        project_id = quote(f"{namespace}/{name}", safe="")
        try:
            data = self._transport.get(f"/projects/{project_id}")
        except NotFoundError:
            return None
        return _parse_project(data)

    def get_labels(self, project_id: int) -> list[Label]:
        """List all labels of a project."""
        return [_parse_label(item) for item in self._get_all(f"/projects/{project_id}/labels")]

    def get_milestones(self, project_id: int) -> list[Milestone]:
        """List all milestones of a project."""
        return [
            _parse_milestone(item)
            for item in self._get_all(f"/projects/{project_id}/milestones")
        ]

    def get_members(self, project_id: int) -> list[Member]:
        """List all members of a project, including inherited ones."""
        return [
            _parse_member(item)
            for item in self._get_all(f"/projects/{project_id}/members/all")
        ]

    def _get_all(self, path: str) -> list[dict[str, Any]]:
        """Fetch every page of a list endpoint."""
        items: list[dict[str, Any]] = []
        page = 1
        while True:
            batch = self._transport.get(path, params={"page": page, "per_page": PAGE_SIZE})
            items.extend(batch)
            if len(batch) < PAGE_SIZE:
                return items
            page += 1

    def close(self) -> None:
        """Close the client and release resources."""
        self._transport.close()

    def __enter__(self) -> "GitlabAPI":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()
