from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator

from vfs_tools_mcp.tools.base import ToolExecResult


class ToolInvocation(BaseModel):
    """A single tool call issued by the model, as seen by the dispatcher and the UI."""

    model_config = ConfigDict(frozen=True)

    tool_call_id: str = Field(default_factory=lambda: uuid4().hex)
    tool_name: str
    args: dict[str, Any] = Field(default_factory=dict)
    state: Literal["pending", "complete"] = "pending"
    result: ToolExecResult | None = None

    @model_validator(mode="after")
    def _result_matches_state(self) -> "ToolInvocation":
        if (self.state == "complete") != (self.result is not None):
            raise ValueError("`result` must be present exactly when `state` is 'complete'")
        return self

    @property
    def command(self) -> Any:
        return self.args.get("command")

    @property
    def path(self) -> Any:
        return self.args.get("path")

    @property
    def is_completed(self) -> bool:
        return self.state == "complete" and bool(self.result)

    def complete(self, result: ToolExecResult) -> "ToolInvocation":
        """Return a completed copy carrying `result`."""
        return ToolInvocation(
            tool_call_id=self.tool_call_id,
            tool_name=self.tool_name,
            args=dict(self.args),
            state="complete",
            result=result,
        )
