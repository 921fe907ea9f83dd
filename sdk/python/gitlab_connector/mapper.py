"""Attribute mapper holding the project metadata used for task attributes."""

import threading
from typing import TYPE_CHECKING

from gitlab_connector.descriptor import RepositoryDescriptor
from gitlab_connector.logging import get_logger
from gitlab_connector.types import Label, Member, Milestone

if TYPE_CHECKING:
    from gitlab_connector.api import GitlabAPI
    from gitlab_connector.types import Project

logger = get_logger("mapper")


class AttributeMapper:
    """
    Lookup tables for the labels, milestones and members of one project.

    The tables are empty until ``update`` loads them; each update replaces
    all three at once.
    """

    def __init__(self, descriptor: RepositoryDescriptor) -> None:
        self.descriptor = descriptor
        self._lock = threading.Lock()
        self._labels: tuple[Label, ...] = ()
        self._milestones: tuple[Milestone, ...] = ()
        self._members: tuple[Member, ...] = ()

    def update(self, api: "GitlabAPI", project: "Project") -> None:
        """
        Reload labels, milestones and members of ``project``.

        Raises:
            GitlabError: If any of the listings fails; the old tables are kept
        """
        labels = tuple(api.get_labels(project.project_id))
        milestones = tuple(api.get_milestones(project.project_id))
        members = tuple(api.get_members(project.project_id))

        with self._lock:
            self._labels = labels
            self._milestones = milestones
            self._members = members

        logger.debug(
            "Loaded %d labels, %d milestones, %d members for %s",
            len(labels),
            len(milestones),
            len(members),
            project.path_with_namespace,
        )

    @property
    def labels(self) -> tuple[Label, ...]:
        return self._labels

    @property
    def milestones(self) -> tuple[Milestone, ...]:
        return self._milestones

    @property
    def members(self) -> tuple[Member, ...]:
        return self._members

    def find_label(self, name: str) -> Label | None:
        return next((label for label in self._labels if label.name == name), None)

    def find_milestone(self, title: str) -> Milestone | None:
        return next((m for m in self._milestones if m.title == title), None)

    def find_member(self, username: str) -> Member | None:
        return next((m for m in self._members if m.username == username), None)

    def find_member_by_id(self, user_id: int) -> Member | None:
        return next((m for m in self._members if m.user_id == user_id), None)
