#!/usr/bin/env python3
"""
Unit tests for invocation labels in formatting_utils.py
"""

import pytest

from vfs_tools_mcp.models.tool_invocation import ToolInvocation
from vfs_tools_mcp.tools.base import ToolExecResult
from vfs_tools_mcp.tools.utils import LabelCategory, describe_invocation, format_invocation_status


class TestDescribeInvocation:
    @pytest.mark.parametrize(
        "command, text, past_text, category",
        [
            ("view", "Viewing /App.jsx", "Viewed /App.jsx", LabelCategory.VIEW),
            ("create", "Creating /App.jsx", "Created /App.jsx", LabelCategory.CREATE),
            ("str_replace", "Editing /App.jsx", "Edited /App.jsx", LabelCategory.EDIT),
            ("insert", "Editing /App.jsx", "Edited /App.jsx", LabelCategory.EDIT),
            ("undo_edit", "Reverting changes to /App.jsx", "Reverted changes to /App.jsx", LabelCategory.REVERT),
        ],
    )
    def test_editor_commands(self, command, text, past_text, category):
        label = describe_invocation("str_replace_editor", {"command": command, "path": "/App.jsx"})

        assert label.text == text
        assert label.past_text == past_text
        assert label.category == category

    def test_rename_with_new_path(self):
        label = describe_invocation(
            "file_manager", {"command": "rename", "path": "/old-file.jsx", "new_path": "/new-file.jsx"}
        )

        assert label.text == "Renaming /old-file.jsx to /new-file.jsx"
        assert label.category == LabelCategory.RENAME

    def test_rename_without_new_path(self):
        label = describe_invocation("file_manager", {"command": "rename", "path": "/old-file.jsx"})

        assert label.text == "Renaming /old-file.jsx"

    def test_delete(self):
        label = describe_invocation("file_manager", {"command": "delete", "path": "/unused.jsx"})

        assert label.text == "Deleting /unused.jsx"
        assert label.past_text == "Deleted /unused.jsx"
        assert label.category == LabelCategory.DELETE

    def test_unknown_command_renders_literally(self):
        label = describe_invocation("str_replace_editor", {"command": "compile", "path": "/App.jsx"})

        assert label.text == "compile /App.jsx"
        assert label.category == LabelCategory.UNKNOWN

    @pytest.mark.parametrize(
        "tool_name, args",
        [
            ("str_replace_editor", None),
            ("str_replace_editor", {"path": "/App.jsx"}),
            ("file_manager", {"command": "delete"}),
            ("custom_tool", {"command": "run", "path": "/App.jsx"}),
            ("str_replace_editor", "not a dict"),
        ],
    )
    def test_falls_back_to_tool_name(self, tool_name, args):
        label = describe_invocation(tool_name, args)

        assert label.text == tool_name
        assert label.category == LabelCategory.UNKNOWN


class TestFormatInvocationStatus:
    def test_pending_uses_present_tense(self):
        invocation = ToolInvocation(tool_name="str_replace_editor", args={"command": "create", "path": "/App.jsx"})

        assert format_invocation_status(invocation) == "Creating /App.jsx"

    def test_completed_uses_past_tense(self):
        invocation = ToolInvocation(
            tool_name="str_replace_editor", args={"command": "create", "path": "/App.jsx"}
        ).complete(ToolExecResult(output="ok"))

        assert format_invocation_status(invocation) == "Created /App.jsx"

    def test_result_requires_complete_state(self):
        with pytest.raises(ValueError):
            ToolInvocation(tool_name="file_manager", args={}, state="pending", result=ToolExecResult(output="ok"))

        with pytest.raises(ValueError):
            ToolInvocation(tool_name="file_manager", args={}, state="complete")
