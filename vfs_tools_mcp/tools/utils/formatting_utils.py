from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from .constants import MAX_RESPONSE_LEN, TRUNCATED_MESSAGE

if TYPE_CHECKING:
    from vfs_tools_mcp.models.tool_invocation import ToolInvocation


def maybe_truncate(content: str, truncate_after: int | None = MAX_RESPONSE_LEN) -> str:
    """Truncate content and append a notice if content exceeds the specified length."""
    if not truncate_after or len(content) <= truncate_after:
        return content
    return content[:truncate_after] + TRUNCATED_MESSAGE


def make_numbered_output(file_content: str, file_descriptor: str, init_line: int = 1) -> str:
    """Render content the way `cat -n` would, with a header naming what is shown."""
    numbered = "\n".join(
        [f"{i + init_line:6}\t{line}" for i, line in enumerate(file_content.split("\n"))]
    )
    return f"Here's the result of running `cat -n` on {file_descriptor}:\n" + numbered + "\n"


class LabelCategory(StrEnum):
    """Icon category a UI shows next to a tool invocation."""

    VIEW = "view"
    CREATE = "create"
    EDIT = "edit"
    REVERT = "revert"
    RENAME = "rename"
    DELETE = "delete"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class InvocationLabel:
    text: str
    past_text: str
    category: LabelCategory


# command -> (present verb, past verb, category)
_EDITOR_LABELS: dict[str, tuple[str, str, LabelCategory]] = {
    "view": ("Viewing", "Viewed", LabelCategory.VIEW),
    "create": ("Creating", "Created", LabelCategory.CREATE),
    "str_replace": ("Editing", "Edited", LabelCategory.EDIT),
    "insert": ("Editing", "Edited", LabelCategory.EDIT),
    "undo_edit": ("Reverting changes to", "Reverted changes to", LabelCategory.REVERT),
}


def describe_invocation(tool_name: str, args: Any) -> InvocationLabel:
    """
    Map a tool call to a human-readable label and icon category.

    Anything that cannot be described falls back to the raw tool name, or to
    the raw `command path` pair for unknown commands of a known tool.
    """
    fallback = InvocationLabel(tool_name, tool_name, LabelCategory.UNKNOWN)
    if not isinstance(args, dict):
        return fallback

    command = args.get("command")
    path = args.get("path")
    if not command or not path:
        return fallback

    if tool_name == "str_replace_editor":
        if command in _EDITOR_LABELS:
            present, past, category = _EDITOR_LABELS[command]
            return InvocationLabel(f"{present} {path}", f"{past} {path}", category)
        return InvocationLabel(f"{command} {path}", f"{command} {path}", LabelCategory.UNKNOWN)

    if tool_name == "file_manager":
        if command == "rename":
            new_path = args.get("new_path")
            target = f"{path} to {new_path}" if new_path else f"{path}"
            return InvocationLabel(f"Renaming {target}", f"Renamed {target}", LabelCategory.RENAME)
        if command == "delete":
            return InvocationLabel(f"Deleting {path}", f"Deleted {path}", LabelCategory.DELETE)
        return InvocationLabel(f"{command} {path}", f"{command} {path}", LabelCategory.UNKNOWN)

    return fallback


def format_invocation_status(invocation: "ToolInvocation") -> str:
    """The past-tense label once the invocation has a result, else the present-tense one."""
    label = describe_invocation(invocation.tool_name, invocation.args)
    return label.past_text if invocation.is_completed else label.text
