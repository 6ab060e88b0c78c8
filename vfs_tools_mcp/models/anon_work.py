from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AnonymousWorkSnapshot(BaseModel):
    """Transcript and files produced before the user had a project."""

    model_config = ConfigDict(frozen=True)

    messages: list[dict[str, Any]] = Field(default_factory=list)
    file_system_data: dict[str, str] = Field(default_factory=dict)

    @property
    def has_messages(self) -> bool:
        return len(self.messages) > 0
