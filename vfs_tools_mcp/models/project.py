from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, Field


class Project(BaseModel):
    """A persisted project as exchanged with the project store."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str
    messages: list[dict[str, Any]] = Field(default_factory=list)
    data: dict[str, str] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class AuthResult(BaseModel):
    """Outcome of a sign-in or sign-up attempt."""

    success: bool
    error: str | None = None
    project_id: str | None = None
