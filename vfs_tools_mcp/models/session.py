from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from vfs_tools_mcp.filesystem.serializer import serialize
from vfs_tools_mcp.filesystem.virtual_fs import VirtualFileSystem


class ProjectSession(BaseModel):
    """Stores the virtual file system and chat state for a single session."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    session_id: str
    project_id: str | None = None
    file_system: VirtualFileSystem = Field(default_factory=VirtualFileSystem)
    messages: list[dict[str, Any]] = Field(default_factory=list)

    @property
    def is_anonymous(self) -> bool:
        return self.project_id is None

    def request_context(self) -> dict[str, Any]:
        """Context attached to every outbound model request."""
        return {
            "files": serialize(self.file_system),
            "projectId": self.project_id,
        }
