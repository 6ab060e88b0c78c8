"""Sign-in / sign-up orchestration around an external authenticator."""

import logging
from collections.abc import Awaitable, Callable
from typing import Optional, Protocol

from vfs_tools_mcp.models.project import AuthResult, Project
from vfs_tools_mcp.services.project_bootstrap import ProjectBootstrapper

logger = logging.getLogger(__name__)


class Authenticator(Protocol):
    async def sign_in(self, email: str, password: str) -> AuthResult: ...

    async def sign_up(self, email: str, password: str) -> AuthResult: ...


class AuthFlow:
    """
    Runs an authentication action and, when it succeeds, resolves the
    project the session should continue in.

    Errors raised by the authenticator or the project store propagate to the
    caller; `is_loading` is reset either way.

    Args:
        authenticator: Performs the actual credential check.
        bootstrapper: Picks or creates the project after a successful login.
        on_project: Called with the session id and the resolved project, e.g.
            to load the project into the session.
    """

    def __init__(
        self,
        authenticator: Authenticator,
        bootstrapper: ProjectBootstrapper,
        on_project: Optional[Callable[[str, Project], object]] = None,
    ) -> None:
        self._authenticator = authenticator
        self._bootstrapper = bootstrapper
        self._on_project = on_project
        self.is_loading = False

    async def sign_in(self, session_id: str, email: str, password: str) -> AuthResult:
        return await self._authenticate(self._authenticator.sign_in, session_id, email, password)

    async def sign_up(self, session_id: str, email: str, password: str) -> AuthResult:
        return await self._authenticate(self._authenticator.sign_up, session_id, email, password)

    async def _authenticate(
        self,
        action: Callable[[str, str], Awaitable[AuthResult]],
        session_id: str,
        email: str,
        password: str,
    ) -> AuthResult:
        self.is_loading = True
        try:
            result = await action(email, password)
            if not result.success:
                logger.info(f"Authentication failed for session {session_id}: {result.error}")
                return result

            project = await self._bootstrapper.resolve_project(session_id)
            if self._on_project is not None:
                self._on_project(session_id, project)
            return result.model_copy(update={"project_id": project.id})
        finally:
            self.is_loading = False
