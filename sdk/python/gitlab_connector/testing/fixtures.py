"""
Pytest fixtures for GitLab connector testing.

Provides common fixtures for testing code that resolves GitLab connections.
"""

from collections.abc import Generator
from datetime import date

import pytest

from gitlab_connector.cache import ConnectionCache
from gitlab_connector.descriptor import RepositoryDescriptor
from gitlab_connector.resolver import ConnectionResolver
from gitlab_connector.testing.mock import MockGitlabAPI
from gitlab_connector.types import Label, Member, Milestone, Project, Session

MOCK_HOST = "https://gitlab.example.com"


# ============================================================================
# Helper Functions
# ============================================================================


def create_mock_project(
    namespace: str = "group",
    name: str = "project",
    project_id: int = 42,
    host: str = MOCK_HOST,
) -> Project:
    """
    Create a mock Project for testing.

    Args:
        namespace: Full namespace path
        name: Project path within the namespace
        project_id: Numeric project id
        host: Host used to build web_url

    Returns:
        Project
    """
    return Project(
        project_id=project_id,
        name=name,
        path=name,
        path_with_namespace=f"{namespace}/{name}",
        namespace=namespace,
        web_url=f"{host}/{namespace}/{name}",
        default_branch="main",
        description=None,
    )


def create_mock_session(
    username: str = "jdoe",
    private_token: str | None = "session-token",
) -> Session:
    """Create a mock Session for testing."""
    return Session(
        user_id=7,
        username=username,
        name="Jane Doe",
        email=f"{username}@example.com",
        private_token=private_token,
    )


def create_mock_descriptor(
    url: str = f"{MOCK_HOST}/group/project.git",
    username: str = "jdoe",
    password: str = "secret",
    base_url_override: str = "",
    use_static_token: bool = False,
) -> RepositoryDescriptor:
    """Create a RepositoryDescriptor for testing."""
    return RepositoryDescriptor(
        url=url,
        username=username,
        password=password,
        base_url_override=base_url_override,
        use_static_token=use_static_token,
    )


# ============================================================================
# Mock Connector Fixtures
# ============================================================================


@pytest.fixture
def mock_api() -> Generator[MockGitlabAPI, None, None]:
    """
    Provide a MockGitlabAPI that knows the project ``group/project``.

    Example:
        ```python
        def test_my_feature(mock_api):
            mock_api.configure_get_labels(response=[...])
            ...
            assert mock_api.was_called("get_labels")
        ```
    """
    api = MockGitlabAPI()
    api.add_project(create_mock_project())
    yield api
    api.reset()


@pytest.fixture
def connection_cache() -> ConnectionCache:
    """Provide a fresh, empty ConnectionCache."""
    return ConnectionCache()


@pytest.fixture
def resolver(
    mock_api: MockGitlabAPI, connection_cache: ConnectionCache
) -> ConnectionResolver:
    """Provide a ConnectionResolver wired to the mock connector and a fresh cache."""
    return ConnectionResolver(cache=connection_cache, connector=mock_api)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def sample_descriptor() -> RepositoryDescriptor:
    """Provide a password-mode descriptor for ``group/project``."""
    return create_mock_descriptor()


@pytest.fixture
def token_descriptor() -> RepositoryDescriptor:
    """Provide a static-token descriptor for ``group/project``."""
    return create_mock_descriptor(password="glpat-static-token", use_static_token=True)


@pytest.fixture
def sample_project() -> Project:
    """Provide a sample Project object."""
    return create_mock_project()


@pytest.fixture
def sample_session() -> Session:
    """Provide a sample Session object."""
    return create_mock_session()


@pytest.fixture
def sample_labels() -> list[Label]:
    """Provide sample Label objects."""
    return [
        Label(name="bug", color="#d9534f", description="Something is broken"),
        Label(name="feature", color="#5cb85c", description=None),
    ]


@pytest.fixture
def sample_milestones() -> list[Milestone]:
    """Provide sample Milestone objects."""
    return [
        Milestone(milestone_id=1, iid=1, title="v1.0", state="closed", due_date=date(2024, 1, 31)),
        Milestone(milestone_id=2, iid=2, title="v1.1", state="active", due_date=None),
    ]


@pytest.fixture
def sample_members() -> list[Member]:
    """Provide sample Member objects."""
    return [
        Member(user_id=7, username="jdoe", name="Jane Doe", state="active", access_level=40),
        Member(user_id=8, username="rroe", name="Richard Roe", state="active", access_level=30),
    ]
