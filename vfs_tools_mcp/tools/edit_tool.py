# Copyright (c) 2023 Anthropic
# Copyright (c) 2025 ByteDance Ltd. and/or its affiliates.
# SPDX-License-Identifier: MIT
#
# This file has been modified by ByteDance Ltd. and/or its affiliates. on 13 June 2025
#
# Original file was released under MIT License, with the full license text
# available at https://github.com/anthropics/anthropic-quickstarts/blob/main/LICENSE
#
# This modified file is released under the same license.

import logging
from typing_extensions import override

from vfs_tools_mcp.filesystem.virtual_fs import VirtualFileSystem
from vfs_tools_mcp.models.tool_args import CreateArgs, InsertArgs, StrReplaceArgs, UndoEditArgs, ViewArgs
from vfs_tools_mcp.tools.base import (
    LineOutOfRangeError,
    MultipleOccurrencesError,
    ToolExecResult,
    ToolParameter,
    ZeroOccurrencesError,
)
from vfs_tools_mcp.tools.base_file_editor import BaseFileEditorTool, CommandHandler
from vfs_tools_mcp.tools.utils import make_numbered_output, maybe_truncate
from vfs_tools_mcp.tools.utils.constants import MAX_RESPONSE_LEN, SNIPPET_LINES, STR_REPLACE_EDITOR

logger = logging.getLogger(__name__)

EditToolSubCommands = [
    "view",
    "create",
    "str_replace",
    "insert",
    "undo_edit",
]


class TextEditorTool(BaseFileEditorTool):
    """Tool to view, create and edit files in the virtual file system."""

    def __init__(
        self,
        model_provider: str | None = None,
        snippet_lines: int = SNIPPET_LINES,
        max_response_len: int = MAX_RESPONSE_LEN,
    ) -> None:
        super().__init__(model_provider)
        self._snippet_lines = snippet_lines
        self._max_response_len = max_response_len

    @override
    def get_name(self) -> str:
        return STR_REPLACE_EDITOR

    @override
    def get_description(self) -> str:
        return """Custom editing tool for viewing, creating and editing files in the project's virtual file system
* All paths are absolute and rooted at '/', e.g. '/App.jsx' or '/components/Button.jsx'
* If `path` is a file, `view` displays the result of applying `cat -n`. If `path` is a directory, `view` lists its entries
* The `create` command cannot be used if the specified `path` already exists. Edit the existing file instead
* The `undo_edit` command reverts the last edit made to the file at `path`
* If a `command` generates a long output, it will be truncated and marked with `<response clipped>`

Notes for using the `str_replace` command:
* The `old_str` parameter should match EXACTLY one or more consecutive lines from the original file. Be mindful of whitespaces!
* If the `old_str` parameter is not unique in the file, the replacement will not be performed. Make sure to include enough context in `old_str` to make it unique
* The `new_str` parameter should contain the edited lines that should replace the `old_str`
"""

    @override
    def get_parameters(self) -> list[ToolParameter]:
        """Get the parameters for the str_replace_editor."""
        return [
            ToolParameter(
                name="command",
                type="string",
                description=f"The commands to run. Allowed options are: {', '.join(EditToolSubCommands)}.",
                required=True,
                enum=EditToolSubCommands,
            ),
            ToolParameter(
                name="file_text",
                type="string",
                description="Required parameter of `create` command, with the content of the file to be created.",
            ),
            ToolParameter(
                name="insert_line",
                type="integer",
                description="Required parameter of `insert` command. The `new_str` will be inserted AFTER the line `insert_line` of `path`. Use 0 to insert before the first line.",
            ),
            ToolParameter(
                name="new_str",
                type="string",
                description="Required parameter of `str_replace` command containing the new string, and of `insert` command containing the string to insert.",
            ),
            ToolParameter(
                name="old_str",
                type="string",
                description="Required parameter of `str_replace` command containing the string in `path` to replace.",
            ),
            ToolParameter(
                name="path",
                type="string",
                description="Absolute path to file or directory, e.g. '/components/Button.jsx'.",
                required=True,
            ),
        ]

    @override
    def get_command_handlers(self) -> dict[str, CommandHandler]:
        return {
            "view": CommandHandler(ViewArgs, self._view_handler),
            "create": CommandHandler(CreateArgs, self._create_handler),
            "str_replace": CommandHandler(StrReplaceArgs, self._str_replace_handler),
            "insert": CommandHandler(InsertArgs, self._insert_handler),
            "undo_edit": CommandHandler(UndoEditArgs, self._undo_edit_handler),
        }

    def _view_handler(self, file_system: VirtualFileSystem, args: ViewArgs) -> ToolExecResult:
        """Implement the view command"""
        path = self._resolve_and_validate_path(args.path, file_system, must_exist=True, allow_directories=True)

        if not file_system.is_file(path):
            entries = file_system.list_directory(path)
            if not entries:
                return ToolExecResult(output=f"Directory {path} is empty.\n")
            listing = "\n".join(f"{'[DIR]' if entry.endswith('/') else '[FILE]'} {entry.rstrip('/')}" for entry in entries)
            return ToolExecResult(output=f"Here are the entries of {path}:\n{listing}\n")

        file_content = self.read_file(path, file_system)
        return ToolExecResult(output=self._make_output(file_content, path))

    def _create_handler(self, file_system: VirtualFileSystem, args: CreateArgs) -> ToolExecResult:
        path = self._resolve_and_validate_path(args.path, file_system, must_exist=False)
        logger.debug(f"_create_handler called with path={path}, file_text length={len(args.file_text)}")

        file_system.create(path, args.file_text)
        logger.debug(f"File created successfully at {path}")

        return ToolExecResult(output=f"File created successfully at: {path}")

    def _str_replace_handler(self, file_system: VirtualFileSystem, args: StrReplaceArgs) -> ToolExecResult:
        """Replace the single occurrence of old_str with new_str in the file content"""
        path = self._resolve_and_validate_path(args.path, file_system)
        old_str, new_str = args.old_str, args.new_str
        logger.debug(f"str_replace called with path={path}, old_str length={len(old_str)}, new_str length={len(new_str)}")

        file_content = self.read_file(path, file_system)

        lines = self._occurrence_lines(file_content, old_str)
        occurrences = len(lines)
        logger.debug(f"Found {occurrences} occurrences of old_str in file")

        if occurrences == 0:
            raise ZeroOccurrencesError(
                f"No replacement was performed, old_str `{old_str}` did not appear verbatim in {path}."
            )
        if occurrences > 1:
            raise MultipleOccurrencesError(
                f"No replacement was performed. Multiple occurrences of old_str `{old_str}` in lines {lines} in {path}. Please ensure it is unique"
            )

        new_file_content = file_content.replace(old_str, new_str)
        self.write_file(path, new_file_content, file_system)

        # Create a snippet of the edited section
        replacement_line = file_content.split(old_str)[0].count("\n")
        start_line = max(0, replacement_line - self._snippet_lines)
        end_line = replacement_line + self._snippet_lines + new_str.count("\n")
        snippet = "\n".join(new_file_content.split("\n")[start_line : end_line + 1])

        success_msg = f"The file {path} has been edited. "
        success_msg += self._make_output(snippet, f"a snippet of {path}", start_line + 1)
        success_msg += "Review the changes and make sure they are as expected. Edit the file again if necessary."
        return ToolExecResult(output=success_msg)

    def _insert_handler(self, file_system: VirtualFileSystem, args: InsertArgs) -> ToolExecResult:
        """Insert new_str after line `insert_line` of the file content."""
        path = self._resolve_and_validate_path(args.path, file_system)
        insert_line, new_str = args.insert_line, args.new_str
        logger.debug(f"_insert called with path={path}, insert_line={insert_line}, new_str length={len(new_str)}")

        file_text = self.read_file(path, file_system)
        file_text_lines = file_text.split("\n")
        # A trailing newline terminates the last line rather than starting a new one
        n_lines_file = len(file_text_lines) - 1 if not file_text or file_text.endswith("\n") else len(file_text_lines)

        if insert_line < 0 or insert_line > n_lines_file:
            raise LineOutOfRangeError(
                f"Invalid `insert_line` parameter: {insert_line}. It should be within the range of lines of the file: {[0, n_lines_file]}"
            )

        new_str_lines = new_str.split("\n")
        new_file_text_lines = file_text_lines[:insert_line] + new_str_lines + file_text_lines[insert_line:]
        snippet_lines = (
            file_text_lines[max(0, insert_line - self._snippet_lines) : insert_line]
            + new_str_lines
            + file_text_lines[insert_line : insert_line + self._snippet_lines]
        )

        self.write_file(path, "\n".join(new_file_text_lines), file_system)

        success_msg = f"The file {path} has been edited. "
        success_msg += self._make_output(
            "\n".join(snippet_lines),
            "a snippet of the edited file",
            max(1, insert_line - self._snippet_lines + 1),
        )
        success_msg += "Review the changes and make sure they are as expected (correct indentation, no duplicate lines, etc). Edit the file again if necessary."
        return ToolExecResult(output=success_msg)

    def _undo_edit_handler(self, file_system: VirtualFileSystem, args: UndoEditArgs) -> ToolExecResult:
        """Restore the content the file had before its most recent edit."""
        path = self._resolve_and_validate_path(args.path, file_system)
        restored = file_system.undo(path)
        remaining = file_system.history_depth(path)
        logger.debug(f"Undo on {path} restored {len(restored)} chars, {remaining} earlier versions remain")

        success_msg = f"Last edit to {path} undone successfully. "
        success_msg += self._make_output(restored, path)
        return ToolExecResult(output=success_msg)

    def _make_output(self, file_content: str, file_descriptor: str, init_line: int = 1) -> str:
        """Generate output for the model based on the content of a file."""
        return make_numbered_output(maybe_truncate(file_content, self._max_response_len), file_descriptor, init_line)

    @staticmethod
    def _occurrence_lines(file_content: str, old_str: str) -> list[int]:
        """1-based line numbers on which each occurrence of old_str starts, overlapping matches included."""
        lines = []
        start = file_content.find(old_str)
        while start != -1:
            lines.append(file_content.count("\n", 0, start) + 1)
            start = file_content.find(old_str, start + 1)
        return lines
