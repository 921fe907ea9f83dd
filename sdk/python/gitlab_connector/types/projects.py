"""Project-related data models."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Project:
    """GitLab project information."""

    project_id: int
    name: str
    path: str
    path_with_namespace: str
    namespace: str
    web_url: str
    default_branch: str | None
    description: str | None


@dataclass(frozen=True)
class Label:
    """Project label."""

    name: str
    color: str
    description: str | None


@dataclass(frozen=True)
class Milestone:
    """Project milestone."""

    milestone_id: int
    iid: int
    title: str
    state: str  # "active" or "closed"
    due_date: date | None


@dataclass(frozen=True)
class Member:
    """Project member."""

    user_id: int
    username: str
    name: str
    state: str
    access_level: int
