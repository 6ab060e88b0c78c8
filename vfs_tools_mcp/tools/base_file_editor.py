# Copyright (c) 2025 ByteDance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""Base class for file editing tools with common functionality."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any
from typing_extensions import override

from pydantic import ValidationError

from vfs_tools_mcp.filesystem.virtual_fs import VirtualFileSystem
from vfs_tools_mcp.models.tool_args import CommandArgs
from vfs_tools_mcp.tools.base import (
    InvalidArgumentsError,
    NotFoundError,
    Tool,
    ToolCallArguments,
    ToolError,
    ToolExecResult,
    UnrecognizedCommandError,
)
from vfs_tools_mcp.utils.path_utils import normalize_path

logger = logging.getLogger(__name__)

FILE_SYSTEM_ARGUMENT = "_file_system"


@dataclass(frozen=True)
class CommandHandler:
    """One row of a tool's dispatch table."""

    args_model: type[CommandArgs]
    handler: Callable[[VirtualFileSystem, Any], ToolExecResult]


def unrecognized_command(tool_name: str, arguments: ToolCallArguments) -> UnrecognizedCommandError:
    """Build the error for a command outside the dispatch table, echoing what was sent."""
    command = arguments.get("command")
    path = arguments.get("path")
    return UnrecognizedCommandError(f"Unrecognized command for {tool_name}: {command} {path}")


class BaseFileEditorTool(Tool, ABC):
    """Base class for file editing tools with common functionality."""

    def __init__(self, model_provider: str | None = None) -> None:
        super().__init__(model_provider)

    @override
    def get_model_provider(self) -> str | None:
        return self._model_provider

    @abstractmethod
    def get_command_handlers(self) -> dict[str, CommandHandler]:
        """
        Map each supported command to its argument model and handler.

        Handlers take the file system and the validated arguments, return a
        ToolExecResult, and raise ToolError for expected failures.
        """
        pass

    def _resolve_and_validate_path(
        self,
        path_str: str,
        file_system: VirtualFileSystem,
        must_exist: bool = True,
        allow_directories: bool = False,
    ) -> str:
        """
        Normalize and validate a virtual path.

        Args:
            path_str: The path string to resolve
            file_system: The session's file system
            must_exist: Whether the path must exist
            allow_directories: Whether directories are allowed

        Returns:
            The normalized path

        Raises:
            ToolError: If validation fails
        """
        resolved_path = normalize_path(path_str)
        logger.debug(f"Resolved path: {resolved_path}")

        if must_exist and not file_system.is_file(resolved_path):
            if not file_system.is_directory(resolved_path):
                raise NotFoundError(f"The path {resolved_path} does not exist.")
            if not allow_directories:
                raise NotFoundError(
                    f"The path {resolved_path} is a directory and this operation is not allowed on directories."
                )

        return resolved_path

    def _validate_file_system(self, arguments: ToolCallArguments) -> VirtualFileSystem:
        """
        Validate and extract the VirtualFileSystem from arguments.

        Raises:
            ToolError: If the file system is not found or invalid
        """
        file_system = arguments.get(FILE_SYSTEM_ARGUMENT)
        if not isinstance(file_system, VirtualFileSystem):
            logger.error("VirtualFileSystem not found in arguments")
            raise ToolError("VirtualFileSystem not found in arguments.")
        return file_system

    def _parse_arguments(self, command_handler: CommandHandler, arguments: ToolCallArguments) -> CommandArgs:
        """Validate raw arguments against the command's model."""
        try:
            return command_handler.args_model.model_validate(
                {k: v for k, v in arguments.items() if k != FILE_SYSTEM_ARGUMENT and v is not None}
            )
        except ValidationError as e:
            command = arguments.get("command")
            problems = []
            for error in e.errors():
                field = ".".join(str(part) for part in error["loc"])
                if error["type"] == "missing":
                    problems.append(f"Parameter `{field}` is required for command: {command}")
                else:
                    problems.append(f"Parameter `{field}`: {error['msg']}")
            logger.error(f"Invalid arguments for {self.get_name()}.{command}: {problems}")
            raise InvalidArgumentsError("; ".join(problems)) from None

    def read_file(self, path: str, file_system: VirtualFileSystem) -> str:
        """
        Read the content of a file from the virtual file system.

        Raises:
            NotFoundError: If no file exists at `path`
        """
        logger.debug(f"Reading file: {path}")
        content = file_system.read(path)
        logger.debug(f"Successfully read file {path}, content length: {len(content)}")
        return content

    def write_file(self, path: str, content: str, file_system: VirtualFileSystem) -> None:
        """
        Write content to a file, recording the prior content in the edit history.
        """
        logger.debug(f"Writing file: {path}, content length: {len(content)}")
        file_system.write(path, content)
        logger.debug(f"Successfully wrote file {path}")

    @override
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        """
        Execute the tool with common validation and error handling.

        Expected failures come back as error results; nothing is raised.
        """
        try:
            file_system = self._validate_file_system(arguments)

            command = arguments.get("command")
            command_handler = self.get_command_handlers().get(command) if isinstance(command, str) else None
            if command_handler is None:
                raise unrecognized_command(self.get_name(), arguments)

            args = self._parse_arguments(command_handler, arguments)
            logger.debug(f"Executing {self.get_name()}.{command} for path '{args.path}'")
            return command_handler.handler(file_system, args)

        except ToolError as e:
            logger.error(f"Tool error in {self.get_name()}: {e}")
            return ToolExecResult.from_error(e)
        except Exception as e:
            logger.error(f"Unexpected error in {self.get_name()}: {e}", exc_info=True)
            return ToolExecResult(error=f"Unexpected error: {str(e)}", error_code=-1, error_kind="internal_error")
