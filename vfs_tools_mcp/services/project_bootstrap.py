"""Choosing the project a session lands in right after authentication."""

import itertools
import logging
from collections.abc import Callable
from datetime import datetime

from vfs_tools_mcp.models.project import Project
from vfs_tools_mcp.services.project_store import ProjectStore
from vfs_tools_mcp.utils.anon_work_tracker import AnonymousWorkTracker

logger = logging.getLogger(__name__)


class ProjectBootstrapper:
    """
    Resolves the project for a freshly authenticated session:

    1. anonymous work with a non-empty transcript becomes a new project,
    2. otherwise the most recent existing project is reused,
    3. otherwise an empty, sequentially numbered project is created.
    """

    def __init__(
        self,
        anon_work_tracker: AnonymousWorkTracker,
        project_store: ProjectStore,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._anon_work_tracker = anon_work_tracker
        self._project_store = project_store
        self._clock = clock
        self._design_numbers = itertools.count(1)

    async def resolve_project(self, session_id: str) -> Project:
        snapshot = self._anon_work_tracker.consume(session_id)
        if snapshot is not None and snapshot.has_messages:
            name = f"Design from {self._clock():%H:%M:%S}"
            logger.info(f"Seeding project '{name}' from anonymous work of session {session_id}")
            return await self._project_store.create_project(
                name=name,
                messages=snapshot.messages,
                data=snapshot.file_system_data,
            )

        projects = await self._project_store.list_projects()
        if projects:
            logger.info(f"Reusing most recent project {projects[0].id} for session {session_id}")
            return projects[0]

        name = f"New Design #{next(self._design_numbers)}"
        logger.info(f"Creating empty project '{name}' for session {session_id}")
        return await self._project_store.create_project(name=name, messages=[], data={})
