"""Per-file undo stacks."""

import logging

from vfs_tools_mcp.tools.base import HistoryEmptyError

logger = logging.getLogger(__name__)


class EditHistory:
    """Keeps prior snapshots of each file's content, most recent last.

    Stacks are unbounded. Undo is one-directional: popping never records a new
    entry, so there is no redo.
    """

    def __init__(self) -> None:
        self._stacks: dict[str, list[str]] = {}

    def push(self, path: str, prior_content: str) -> None:
        self._stacks.setdefault(path, []).append(prior_content)
        logger.debug(f"History for {path} now holds {len(self._stacks[path])} entries")

    def pop(self, path: str) -> str:
        stack = self._stacks.get(path)
        if not stack:
            raise HistoryEmptyError(f"No edit history available for {path}; nothing to undo.")
        content = stack.pop()
        if not stack:
            del self._stacks[path]
        return content

    def depth(self, path: str) -> int:
        return len(self._stacks.get(path, ()))

    def discard(self, path: str) -> None:
        self._stacks.pop(path, None)
