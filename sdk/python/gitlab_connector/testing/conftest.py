"""
Pytest plugin for GitLab connector testing fixtures.

This module re-exports all fixtures from fixtures.py so they can be
automatically discovered by pytest when this package is installed.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["gitlab_connector.testing.conftest"]

Or import the fixtures directly:

    from gitlab_connector.testing.fixtures import mock_api, resolver
"""

# Re-export all fixtures for pytest auto-discovery
from gitlab_connector.testing.fixtures import (
    connection_cache,
    mock_api,
    resolver,
    sample_descriptor,
    sample_labels,
    sample_members,
    sample_milestones,
    sample_project,
    sample_session,
    token_descriptor,
)

__all__ = [
    "mock_api",
    "connection_cache",
    "resolver",
    "sample_descriptor",
    "token_descriptor",
    "sample_project",
    "sample_session",
    "sample_labels",
    "sample_milestones",
    "sample_members",
]
