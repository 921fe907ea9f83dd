"""GitLab connector type definitions.

This module exports all data model types returned by the GitLab API client.
"""

from gitlab_connector.types.projects import Label, Member, Milestone, Project
from gitlab_connector.types.session import Session

__all__ = [
    "Session",
    "Project",
    "Label",
    "Milestone",
    "Member",
]
