"""Persistence boundary for projects."""

import logging
from typing import Any, Protocol

from vfs_tools_mcp.models.project import Project

logger = logging.getLogger(__name__)


class ProjectStore(Protocol):
    async def create_project(
        self, name: str, messages: list[dict[str, Any]], data: dict[str, str]
    ) -> Project: ...

    async def list_projects(self) -> list[Project]:
        """All projects, most recently created first."""
        ...


class InMemoryProjectStore:
    """Process-local ProjectStore used when no backing store is configured."""

    def __init__(self) -> None:
        self._projects: list[Project] = []

    async def create_project(
        self, name: str, messages: list[dict[str, Any]], data: dict[str, str]
    ) -> Project:
        project = Project(name=name, messages=list(messages), data=dict(data))
        self._projects.append(project)
        logger.info(f"Created project {project.id} ({project.name})")
        return project

    async def list_projects(self) -> list[Project]:
        return list(reversed(self._projects))
