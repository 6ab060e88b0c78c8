"""
Configuration and dependency management for the VFS Tools MCP server.
"""

import logging
from functools import lru_cache

from vfs_tools_mcp.services.auth_flow import AuthFlow
from vfs_tools_mcp.services.authenticator import InMemoryAuthenticator
from vfs_tools_mcp.services.project_bootstrap import ProjectBootstrapper
from vfs_tools_mcp.services.project_store import InMemoryProjectStore
from vfs_tools_mcp.tools.dispatcher import ToolDispatcher
from vfs_tools_mcp.tools.edit_tool import TextEditorTool
from vfs_tools_mcp.tools.file_manager_tool import FileManagerTool
from vfs_tools_mcp.utils.anon_work_tracker import AnonymousWorkTracker
from vfs_tools_mcp.utils.config import ServiceConfig
from vfs_tools_mcp.utils.session_manager import SessionManager

logger = logging.getLogger(__name__)


@lru_cache
def get_base_config() -> ServiceConfig:
    """
    Retrieves the base server configuration from environment variables.

    This function is cached to avoid repeatedly reading and parsing environment
    variables and .env files.

    Returns:
        A cached instance of the ServiceConfig.
    """
    return ServiceConfig()


# --- Tool Providers ---


@lru_cache
def get_file_editor_tool_provider() -> TextEditorTool:
    """Returns a cached instance of the TextEditorTool."""
    logger.info("Initializing TextEditorTool singleton.")
    config = get_base_config()
    return TextEditorTool(snippet_lines=config.SNIPPET_LINES, max_response_len=config.MAX_RESPONSE_LEN)


@lru_cache
def get_file_manager_tool_provider() -> FileManagerTool:
    """Returns a cached instance of the FileManagerTool."""
    logger.info("Initializing FileManagerTool singleton.")
    return FileManagerTool()


@lru_cache
def get_dispatcher() -> ToolDispatcher:
    """Returns the dispatcher with every tool registered."""
    logger.info("Initializing ToolDispatcher singleton.")
    return ToolDispatcher([get_file_editor_tool_provider(), get_file_manager_tool_provider()])


# --- Session state ---


@lru_cache
def get_anon_work_tracker() -> AnonymousWorkTracker:
    """Returns the process-wide anonymous work tracker."""
    logger.info("Initializing AnonymousWorkTracker singleton.")
    return AnonymousWorkTracker()


@lru_cache
def get_session_manager() -> SessionManager:
    """Returns the session manager, wired to the anonymous work tracker."""
    logger.info("Initializing SessionManager singleton.")
    return SessionManager(get_anon_work_tracker())


@lru_cache
def get_project_store() -> InMemoryProjectStore:
    logger.info("Initializing InMemoryProjectStore singleton.")
    return InMemoryProjectStore()


@lru_cache
def get_project_bootstrapper() -> ProjectBootstrapper:
    """Returns the post-authentication project bootstrapper."""
    logger.info("Initializing ProjectBootstrapper singleton.")
    return ProjectBootstrapper(get_anon_work_tracker(), get_project_store())


# --- Authentication ---


@lru_cache
def get_authenticator() -> InMemoryAuthenticator:
    logger.info("Initializing InMemoryAuthenticator singleton.")
    return InMemoryAuthenticator()


@lru_cache
def get_auth_flow() -> AuthFlow:
    """Returns the sign-in / sign-up flow; a successful login loads its project into the session."""
    logger.info("Initializing AuthFlow singleton.")
    return AuthFlow(get_authenticator(), get_project_bootstrapper(), on_project=get_session_manager().attach_project)
