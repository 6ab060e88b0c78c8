import logging
import threading
from collections.abc import Mapping
from typing import Any

from vfs_tools_mcp.models.anon_work import AnonymousWorkSnapshot

logger = logging.getLogger(__name__)


class AnonymousWorkTracker:
    """
    Holds the last transcript and file snapshot of each session that has no
    project yet, so the work can seed a project once the user authenticates.

    One instance is shared by the process and injected where needed.
    """

    def __init__(self) -> None:
        self._snapshots: dict[str, AnonymousWorkSnapshot] = {}
        self._lock = threading.Lock()

    def record(
        self,
        session_id: str,
        messages: list[dict[str, Any]],
        file_system_data: Mapping[str, str],
    ) -> AnonymousWorkSnapshot:
        """Overwrite the session's snapshot; the last write wins."""
        snapshot = AnonymousWorkSnapshot(messages=list(messages), file_system_data=dict(file_system_data))
        with self._lock:
            self._snapshots[session_id] = snapshot
        logger.debug(
            f"Recorded anonymous work for {session_id}: {len(snapshot.messages)} messages, "
            f"{len(snapshot.file_system_data)} files"
        )
        return snapshot

    def consume(self, session_id: str) -> AnonymousWorkSnapshot | None:
        """Return the session's snapshot and clear it in one step."""
        with self._lock:
            snapshot = self._snapshots.pop(session_id, None)
        if snapshot is not None:
            logger.info(f"Consumed anonymous work for session {session_id}")
        return snapshot

    def clear(self, session_id: str) -> None:
        with self._lock:
            self._snapshots.pop(session_id, None)

    def has_work(self, session_id: str) -> bool:
        with self._lock:
            snapshot = self._snapshots.get(session_id)
        return snapshot is not None and snapshot.has_messages
