"""GitLab connector testing utilities.

Provides a mock connector and fixtures for testing applications that resolve
GitLab connections.
"""

from gitlab_connector.testing.fixtures import (
    create_mock_descriptor,
    create_mock_project,
    create_mock_session,
)
from gitlab_connector.testing.mock import (
    MockCall,
    MockGitlabAPI,
    MockGitlabClient,
    MockResponse,
)

__all__ = [
    # Mock connector
    "MockGitlabAPI",
    "MockGitlabClient",
    "MockCall",
    "MockResponse",
    # Helper functions
    "create_mock_project",
    "create_mock_session",
    "create_mock_descriptor",
]
