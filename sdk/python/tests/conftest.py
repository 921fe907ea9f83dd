"""Shared fixtures for the GitLab connector tests."""

from gitlab_connector.testing.conftest import (  # noqa: F401
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
