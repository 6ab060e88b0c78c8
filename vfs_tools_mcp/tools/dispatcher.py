"""
Routes tool invocations to the command handlers of registered tools.
"""

import logging
from typing import Any

from vfs_tools_mcp.filesystem.virtual_fs import VirtualFileSystem
from vfs_tools_mcp.models.tool_invocation import ToolInvocation
from vfs_tools_mcp.tools.base import ToolExecResult
from vfs_tools_mcp.tools.base_file_editor import FILE_SYSTEM_ARGUMENT, BaseFileEditorTool, unrecognized_command
from vfs_tools_mcp.tools.utils import format_invocation_status

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """
    Resolves pending tool invocations against a session's file system.

    The dispatch table maps `(tool_name, command)` to the tool that owns the
    command. Every invocation completes: failures come back as a result with
    an error payload rather than an exception.
    """

    def __init__(self, tools: list[BaseFileEditorTool]) -> None:
        self._tools: dict[str, BaseFileEditorTool] = {}
        self._table: dict[tuple[str, str], BaseFileEditorTool] = {}
        for tool in tools:
            self.register(tool)

    def register(self, tool: BaseFileEditorTool) -> None:
        """
        Add a tool's commands to the dispatch table.

        Raises:
            ValueError: If the tool is already registered, or its handlers do
                not cover exactly the commands it advertises.
        """
        name = tool.get_name()
        if name in self._tools:
            raise ValueError(f"Tool '{name}' is already registered.")

        handlers = set(tool.get_command_handlers())
        advertised = set(tool.get_commands())
        if handlers != advertised:
            raise ValueError(
                f"Tool '{name}' advertises commands {sorted(advertised)} but handles {sorted(handlers)}."
            )

        self._tools[name] = tool
        for command in handlers:
            self._table[(name, command)] = tool
        logger.info(f"Registered tool '{name}' with commands: {', '.join(sorted(handlers))}")

    @property
    def commands(self) -> set[tuple[str, str]]:
        return set(self._table)

    def tool_definitions(self) -> list[dict[str, object]]:
        return [tool.json_definition() for tool in self._tools.values()]

    async def dispatch(self, invocation: ToolInvocation, file_system: VirtualFileSystem) -> ToolInvocation:
        """
        Apply a pending invocation and return its completed copy.

        Invocations against the same file system are serialized on its lock;
        a second caller waits until the first has finished.
        """
        if invocation.state == "complete":
            logger.debug(f"Invocation {invocation.tool_call_id} is already complete")
            return invocation

        command = invocation.command
        tool = self._table.get((invocation.tool_name, command)) if isinstance(command, str) else None
        if tool is None:
            error = unrecognized_command(invocation.tool_name, invocation.args)
            logger.warning(error.message)
            return invocation.complete(ToolExecResult.from_error(error))

        async with file_system.lock:
            result = await tool.execute({**invocation.args, FILE_SYSTEM_ARGUMENT: file_system})

        completed = invocation.complete(result)
        if result.success:
            logger.info(format_invocation_status(completed))
        else:
            logger.info(f"{format_invocation_status(completed)} failed: [{result.error_kind}] {result.error}")
        return completed

    async def execute(self, tool_name: str, args: dict[str, Any], file_system: VirtualFileSystem) -> ToolExecResult:
        """Dispatch a one-off call and return only its result."""
        completed = await self.dispatch(ToolInvocation(tool_name=tool_name, args=args), file_system)
        if completed.result is None:
            raise RuntimeError(f"Invocation {completed.tool_call_id} for {tool_name} was not completed")
        return completed.result
