# Copyright (c) 2025 ByteDance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""Base classes shared by all tools: parameters, results and the error taxonomy."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Literal

ParamSchemaValue = str | list[str] | bool | dict[str, object]
Property = dict[str, ParamSchemaValue]

ToolCallArguments = dict[str, object]


class ToolError(Exception):
    """Base class for tool errors.

    Every subclass carries a stable ``kind`` tag which is reported back to the
    caller alongside the human-readable message.
    """

    kind: str = "tool_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message: str = message


class PathError(ToolError):
    kind = "path_error"

    def __init__(self, message: str, reason: Literal["empty", "not_absolute", "escapes", "conflict"]):
        super().__init__(message)
        self.reason = reason


class NotFoundError(ToolError):
    kind = "not_found"


class AlreadyExistsError(ToolError):
    kind = "already_exists"


class ZeroOccurrencesError(ToolError):
    kind = "zero_occurrences"


class MultipleOccurrencesError(ToolError):
    kind = "multiple_occurrences"


class LineOutOfRangeError(ToolError):
    kind = "line_out_of_range"


class HistoryEmptyError(ToolError):
    kind = "history_empty"


class UnrecognizedCommandError(ToolError):
    kind = "unrecognized_command"


class InvalidArgumentsError(ToolError):
    kind = "invalid_arguments"


@dataclass
class ToolExecResult:
    """Intermediate result of a tool execution."""

    output: str | None = None
    error: str | None = None
    error_code: int = 0
    error_kind: str | None = None

    @classmethod
    def from_error(cls, error: ToolError) -> "ToolExecResult":
        return cls(error=error.message, error_code=-1, error_kind=error.kind)

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class ToolParameter:
    """Tool parameter definition."""

    name: str
    type: str | list[str]
    description: str
    enum: list[str] | None = None
    items: dict[str, object] | None = None
    required: bool = False


class Tool(ABC):
    """Base class for all tools."""

    def __init__(self, model_provider: str | None = None) -> None:
        self._model_provider = model_provider

    @abstractmethod
    def get_model_provider(self) -> str | None:
        """Get the model provider."""
        pass

    @abstractmethod
    def get_name(self) -> str:
        """Get the tool name."""
        pass

    @abstractmethod
    def get_description(self) -> str:
        """Get the tool description."""
        pass

    @abstractmethod
    def get_parameters(self) -> list[ToolParameter]:
        """Get the tool parameters."""
        pass

    @abstractmethod
    async def execute(self, arguments: ToolCallArguments) -> ToolExecResult:
        """Execute the tool with given parameters."""
        pass

    def json_definition(self) -> dict[str, object]:
        """Get definition of tool in JSON format."""
        return {
            "name": self.get_name(),
            "description": self.get_description(),
            "parameters": self.get_input_schema(),
        }

    def get_input_schema(self) -> dict[str, object]:
        """Get the input schema for the tool."""
        schema: dict[str, object] = {
            "type": "object",
        }

        properties: dict[str, Property] = {}
        required: list[str] = []

        for param in self.get_parameters():
            param_schema: Property = {
                "type": param.type,
                "description": param.description,
            }
            if param.enum:
                param_schema["enum"] = param.enum
            if param.items:
                param_schema["items"] = param.items
            properties[param.name] = param_schema
            if param.required:
                required.append(param.name)

        schema["properties"] = properties
        if required:
            schema["required"] = required

        return schema

    def get_commands(self) -> list[str]:
        """The values advertised by the tool's `command` parameter, if it has one."""
        for param in self.get_parameters():
            if param.name == "command" and param.enum:
                return list(param.enum)
        return []
