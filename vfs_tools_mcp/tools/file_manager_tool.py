import logging
from typing_extensions import override

from vfs_tools_mcp.filesystem.virtual_fs import VirtualFileSystem
from vfs_tools_mcp.models.tool_args import DeleteArgs, RenameArgs
from vfs_tools_mcp.tools.base import ToolExecResult, ToolParameter
from vfs_tools_mcp.tools.base_file_editor import BaseFileEditorTool, CommandHandler
from vfs_tools_mcp.tools.utils.constants import FILE_MANAGER

logger = logging.getLogger(__name__)

FileManagerSubCommands = ["rename", "delete"]


class FileManagerTool(BaseFileEditorTool):
    """
    Tool for moving and removing files in the virtual file system.
    Content edits go through str_replace_editor; this tool only changes where
    files live. Renaming or deleting a directory applies to every file below it.
    """

    @override
    def get_name(self) -> str:
        return FILE_MANAGER

    @override
    def get_description(self) -> str:
        return """A tool for renaming and deleting files and directories in the virtual file system.
Use `rename` with `new_path` to move a file or directory; parent directories are implied and need not exist.
Use `delete` to remove a file, or a directory together with everything in it.
Renaming a file discards its edit history, so `undo_edit` cannot reach edits made before the rename."""

    @override
    def get_parameters(self) -> list[ToolParameter]:
        return [
            ToolParameter(
                name="command",
                type="string",
                description=f"The command to run. Allowed options are: {', '.join(FileManagerSubCommands)}.",
                required=True,
                enum=FileManagerSubCommands,
            ),
            ToolParameter(
                name="path",
                type="string",
                description="Absolute path of the file or directory to operate on.",
                required=True,
            ),
            ToolParameter(
                name="new_path",
                type="string",
                description="Destination path for `rename`.",
            ),
        ]

    @override
    def get_command_handlers(self) -> dict[str, CommandHandler]:
        return {
            "rename": CommandHandler(RenameArgs, self._rename_handler),
            "delete": CommandHandler(DeleteArgs, self._delete_handler),
        }

    def _rename_handler(self, file_system: VirtualFileSystem, args: RenameArgs) -> ToolExecResult:
        path = self._resolve_and_validate_path(args.path, file_system, must_exist=True, allow_directories=True)
        if args.new_path is None:
            logger.debug(f"rename of {path} without new_path; nothing to do")
            return ToolExecResult(output=f"No new_path given; {path} was left in place.")

        new_path = self._resolve_and_validate_path(args.new_path, file_system, must_exist=False)
        file_system.rename(path, new_path)
        return ToolExecResult(output=f"Successfully renamed {path} to {new_path}")

    def _delete_handler(self, file_system: VirtualFileSystem, args: DeleteArgs) -> ToolExecResult:
        path = self._resolve_and_validate_path(args.path, file_system, must_exist=True, allow_directories=True)
        file_system.delete(path)
        return ToolExecResult(output=f"Successfully deleted {path}")
