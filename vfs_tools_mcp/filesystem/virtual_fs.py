"""
In-memory, path-addressed file tree for a single project session.

Only files are stored. Directories are a derived view: a directory exists at
every proper prefix of a file path, and the root always exists.
"""

import asyncio
import logging

from vfs_tools_mcp.filesystem.edit_history import EditHistory
from vfs_tools_mcp.tools.base import AlreadyExistsError, NotFoundError, PathError
from vfs_tools_mcp.utils.path_utils import ROOT, is_within, normalize_path, parent_path, path_segments

logger = logging.getLogger(__name__)


class VirtualFileSystem:
    """File tree store with per-file edit history.

    Mutations are synchronous and never yield to the event loop. Callers that
    may overlap (several requests against the same session) must hold `lock`
    around read-modify-write sequences.
    """

    def __init__(self) -> None:
        self._files: dict[str, str] = {}
        self.history = EditHistory()
        self.lock = asyncio.Lock()

    # --- Queries ---

    def exists(self, path: str) -> bool:
        return self.is_file(path) or self.is_directory(path)

    def is_file(self, path: str) -> bool:
        return normalize_path(path) in self._files

    def is_directory(self, path: str) -> bool:
        path = normalize_path(path)
        if path == ROOT:
            return True
        return any(is_within(file_path, path) for file_path in self._files)

    def read(self, path: str) -> str:
        path = normalize_path(path)
        try:
            return self._files[path]
        except KeyError:
            raise NotFoundError(f"File not found: {path}") from None

    def list_paths(self) -> set[str]:
        return set(self._files)

    def list_directory(self, path: str) -> list[str]:
        """
        List the immediate children of an implied directory.

        Child directories are suffixed with '/'.

        Raises:
            NotFoundError: If no directory exists at `path`.
        """
        path = normalize_path(path)
        if not self.is_directory(path):
            raise NotFoundError(f"Directory not found: {path}")

        depth = len(path_segments(path))
        children: set[str] = set()
        for file_path in self._files:
            if not is_within(file_path, path):
                continue
            segments = path_segments(file_path)
            name = segments[depth]
            children.add(name + "/" if len(segments) > depth + 1 else name)
        return sorted(children)

    def history_depth(self, path: str) -> int:
        return self.history.depth(normalize_path(path))

    # --- Mutations ---

    def create(self, path: str, content: str) -> None:
        path = normalize_path(path)
        if path in self._files:
            raise AlreadyExistsError(f"File already exists at: {path}. Use an edit command to change it.")
        self._check_placement(path)
        self._files[path] = content
        logger.debug(f"Created {path} ({len(content)} chars)")

    def write(self, path: str, content: str) -> None:
        """Upsert `content` at `path`, recording the prior content for undo."""
        path = normalize_path(path)
        if path in self._files:
            self.history.push(path, self._files[path])
        else:
            self._check_placement(path)
        self._files[path] = content
        logger.debug(f"Wrote {path} ({len(content)} chars)")

    def undo(self, path: str) -> str:
        """Restore the most recent history entry of `path` and return it."""
        path = normalize_path(path)
        if path not in self._files:
            raise NotFoundError(f"File not found: {path}")
        content = self.history.pop(path)
        self._files[path] = content
        logger.debug(f"Reverted {path}; {self.history.depth(path)} history entries left")
        return content

    def rename(self, path: str, new_path: str) -> None:
        """
        Move a file, or every file below a directory, to `new_path`.

        Edit history is not carried over to the new location.
        """
        path = normalize_path(path)
        new_path = normalize_path(new_path)
        if path == new_path:
            if not self.exists(path):
                raise NotFoundError(f"File not found: {path}")
            return

        if path in self._files:
            moves = {path: new_path}
        elif path != ROOT and self.is_directory(path):
            if is_within(new_path, path):
                raise PathError(f"Cannot move directory {path} into itself.", reason="conflict")
            moves = {
                file_path: new_path + file_path[len(path):]
                for file_path in self._files
                if is_within(file_path, path)
            }
        else:
            raise NotFoundError(f"File not found: {path}")

        if new_path in self._files or self.is_directory(new_path):
            raise AlreadyExistsError(f"Destination already exists: {new_path}")
        self._check_placement(new_path, ignore=set(moves))

        for source, target in moves.items():
            self._files[target] = self._files.pop(source)
            self.history.discard(source)
        logger.debug(f"Renamed {path} -> {new_path} ({len(moves)} files)")

    def delete(self, path: str) -> None:
        """Remove a file, or every file below a directory, along with its history."""
        path = normalize_path(path)
        if path in self._files:
            targets = [path]
        elif path != ROOT and self.is_directory(path):
            targets = [file_path for file_path in self._files if is_within(file_path, path)]
        elif path == ROOT:
            raise PathError("The root directory cannot be deleted.", reason="conflict")
        else:
            raise NotFoundError(f"File not found: {path}")

        for target in targets:
            del self._files[target]
            self.history.discard(target)
        logger.debug(f"Deleted {path} ({len(targets)} files)")

    def _check_placement(self, path: str, ignore: set[str] | None = None) -> None:
        """A new file may not sit on a directory, on the root, or below another file."""
        ignore = ignore or set()
        if path == ROOT:
            raise PathError("The root directory is not a file path.", reason="conflict")
        if any(is_within(file_path, path) for file_path in self._files if file_path not in ignore):
            raise AlreadyExistsError(f"A directory already exists at: {path}")
        ancestor = parent_path(path)
        while ancestor != ROOT:
            if ancestor in self._files and ancestor not in ignore:
                raise PathError(f"Cannot place {path} below the file {ancestor}.", reason="conflict")
            ancestor = parent_path(ancestor)
