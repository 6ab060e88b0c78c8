import logging
from typing import Any

from vfs_tools_mcp.filesystem.serializer import deserialize
from vfs_tools_mcp.models.project import Project
from vfs_tools_mcp.models.session import ProjectSession
from vfs_tools_mcp.utils.anon_work_tracker import AnonymousWorkTracker

logger = logging.getLogger(__name__)


class SessionManager:
    """Manages project sessions for all connected clients."""

    def __init__(self, anon_work_tracker: AnonymousWorkTracker) -> None:
        # Simple dict as an in-process session storage.
        self._storage: dict[str, ProjectSession] = {}
        self._anon_work_tracker = anon_work_tracker

    def get_session(self, session_id: str = "default") -> ProjectSession:
        """Returns or creates the session for a given id."""
        if session_id not in self._storage:
            logger.debug(f"Creating session {session_id}")
            self._storage[session_id] = ProjectSession(session_id=session_id)
        return self._storage[session_id]

    def record_transcript(self, session_id: str, messages: list[dict[str, Any]]) -> ProjectSession:
        """
        Store the latest transcript. While the session has no project, the
        transcript and a snapshot of its files are kept as anonymous work.
        """
        session = self.get_session(session_id)
        session.messages = list(messages)
        if session.is_anonymous and session.messages:
            files = session.request_context()["files"]
            self._anon_work_tracker.record(session_id, session.messages, files)
        return session

    def attach_project(self, session_id: str, project: Project) -> ProjectSession:
        """Bind the session to a project and load the project's files and transcript."""
        session = self.get_session(session_id)
        session.project_id = project.id
        session.file_system = deserialize(project.data)
        session.messages = list(project.messages)
        logger.info(f"Session {session_id} attached to project {project.id} ({project.name})")
        return session

    def drop_session(self, session_id: str) -> None:
        self._storage.pop(session_id, None)
        self._anon_work_tracker.clear(session_id)
