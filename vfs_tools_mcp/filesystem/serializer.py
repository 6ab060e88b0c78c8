"""Flattened path -> content views of a virtual file system."""

import logging
from collections.abc import Mapping

from vfs_tools_mcp.filesystem.virtual_fs import VirtualFileSystem

logger = logging.getLogger(__name__)


def serialize(file_system: VirtualFileSystem) -> dict[str, str]:
    """
    Snapshot every file as a path -> content mapping.

    The result is a copy, sorted by path, so it never reflects later edits.
    """
    return {path: file_system.read(path) for path in sorted(file_system.list_paths())}


def deserialize(data: Mapping[str, str]) -> VirtualFileSystem:
    """Build a fresh file system from serialized data. History starts empty."""
    file_system = VirtualFileSystem()
    for path, content in data.items():
        file_system.create(path, content)
    logger.debug(f"Deserialized {len(data)} files")
    return file_system
