"""Typed arguments for each tool command.

Each model is one variant of the tagged union keyed by `command` and declares
the fields that command requires. Unknown fields are ignored so that the loose
argument dicts produced by models validate cleanly.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CommandArgs(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    command: str
    path: str


# --- str_replace_editor ---


class ViewArgs(CommandArgs):
    command: Literal["view"]


class CreateArgs(CommandArgs):
    command: Literal["create"]
    file_text: str


class StrReplaceArgs(CommandArgs):
    command: Literal["str_replace"]
    old_str: str = Field(min_length=1)
    new_str: str


class InsertArgs(CommandArgs):
    command: Literal["insert"]
    insert_line: int
    new_str: str

    @field_validator("insert_line", mode="before")
    @classmethod
    def _reject_bool(cls, value: Any) -> Any:
        # bool is an int subclass, so True would otherwise land on line 1
        if isinstance(value, bool):
            raise ValueError("must be a line number, not a boolean")
        return value


class UndoEditArgs(CommandArgs):
    command: Literal["undo_edit"]


# --- file_manager ---


class RenameArgs(CommandArgs):
    command: Literal["rename"]
    new_path: str | None = None


class DeleteArgs(CommandArgs):
    command: Literal["delete"]
