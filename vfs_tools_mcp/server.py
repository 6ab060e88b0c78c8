"""
MCP server definition for the VFS Tools MCP.
"""

import json
import logging
from typing import Any, Optional

from fastapi.middleware.cors import CORSMiddleware
from starlette.applications import Starlette
from starlette.middleware import Middleware

from mcp.server.fastmcp import Context, FastMCP

from vfs_tools_mcp.models.tool_invocation import ToolInvocation
from vfs_tools_mcp.prompts import get_prompts
from vfs_tools_mcp.tools.utils import format_invocation_status
from vfs_tools_mcp.tools.utils.constants import FILE_MANAGER, STR_REPLACE_EDITOR
from vfs_tools_mcp.utils.config import ServiceConfig
from vfs_tools_mcp.utils.dependencies import (
    get_auth_flow,
    get_base_config,
    get_dispatcher,
    get_project_bootstrapper,
    get_session_manager,
)


# Get a module-level logger
logger = logging.getLogger(__name__)

DEFAULT_SESSION_ID = "default"


class CustomFastMCP(FastMCP):
    """Custom FastMCP server with CORS middleware."""

    def _add_cors_middleware(self, app: Starlette) -> Starlette:
        """A helper to add CORS middleware to a Starlette app."""
        app.user_middleware.insert(
            0,
            Middleware(
                CORSMiddleware,
                allow_origin_regex=".*",  # Allow any origin
                allow_credentials=True,
                allow_methods=["*"],
                allow_headers=["*"],
            ),
        )
        app.middleware_stack = app.build_middleware_stack()
        return app

    def sse_app(self, mount_path: str | None = None) -> Starlette:
        """Overrides the default sse_app to inject CORS middleware."""
        app = super().sse_app(mount_path)
        return self._add_cors_middleware(app)

    def streamable_http_app(self) -> Starlette:
        """Overrides the default streamable_http_app to inject CORS middleware."""
        app = super().streamable_http_app()
        return self._add_cors_middleware(app)


def build_server(config: ServiceConfig) -> CustomFastMCP:
    """Build and configure the FastMCP server instance.

    Args:
        config: The server's service configuration.

    Returns:
        A configured CustomFastMCP instance.
    """
    logger.info(
        "Initializing FastMCP server",
        extra={"host": config.MCP_HOST, "port": config.MCP_PORT},
    )
    return CustomFastMCP(
        "vfs-tools-mcp",
        host=config.MCP_HOST,
        port=config.MCP_PORT,
    )


def _session_id(context: Context) -> str:
    """Sessions are keyed by the MCP client id."""
    return context.client_id or DEFAULT_SESSION_ID


def _invocation_response(invocation: ToolInvocation) -> dict[str, Any]:
    result = invocation.result
    label = format_invocation_status(invocation)
    if result is None:
        return {"status": "pending", "label": label}
    if result.error:
        return {
            "status": "error",
            "error": result.error,
            "error_kind": result.error_kind,
            "exit_code": result.error_code,
            "label": label,
        }
    return {"status": "success", "result": result.output, "exit_code": result.error_code, "label": label}


async def _dispatch(context: Context, tool_name: str, args: dict[str, Any]) -> dict[str, Any]:
    session = get_session_manager().get_session(_session_id(context))
    # Filter out None values so we don't pass them to the tool
    invocation = ToolInvocation(tool_name=tool_name, args={k: v for k, v in args.items() if v is not None})
    completed = await get_dispatcher().dispatch(invocation, session.file_system)
    return _invocation_response(completed)


# Get the base configuration for server initialization.
# This is also imported by main.py to run the server.
server_config = get_base_config()
mcp_app = build_server(server_config)


# --- Prompt Handlers ---
@mcp_app.prompt(title="Agent System Prompt for the Virtual File System")
def get_system_prompt() -> str:
    """Provides the main system prompt for the agent."""
    prompts = get_prompts()
    return prompts["agent-system-prompt"]


# --- Resources ---
@mcp_app.resource("tools://definitions", mime_type="application/json")
def tool_definitions() -> str:
    """JSON definitions of every tool the dispatcher can route to."""
    return json.dumps(get_dispatcher().tool_definitions(), indent=2)


# --- Tool Definitions ---


@mcp_app.tool(name=STR_REPLACE_EDITOR)
async def str_replace_editor(
    context: Context,
    command: str,
    path: str,
    file_text: Optional[str] = None,
    old_str: Optional[str] = None,
    new_str: Optional[str] = None,
    insert_line: Optional[int] = None,
) -> dict[str, Any]:
    """
    View, create and edit files in the project's virtual file system.

    Args:
        command: The type of operation. Can be 'view', 'create', 'str_replace', 'insert' or 'undo_edit'.
        path: The absolute path to the file or directory, e.g. '/App.jsx'.
        file_text: The content for a 'create' operation.
        old_str: The string to search for in a 'str_replace' operation. Must occur exactly once.
        new_str: The replacement string for 'str_replace' or the content for 'insert'.
        insert_line: The line number for an 'insert' operation (inserts AFTER this line, 0 for the top).

    Returns:
        A dictionary containing the result of the operation.
    """
    logger.info(f"Executing {STR_REPLACE_EDITOR} command '{command}' on path '{path}'")
    try:
        args = {
            "command": command,
            "path": path,
            "file_text": file_text,
            "old_str": old_str,
            "new_str": new_str,
            "insert_line": insert_line,
        }
        return await _dispatch(context, STR_REPLACE_EDITOR, args)

    except Exception as e:
        logger.error(f"Error executing {STR_REPLACE_EDITOR} command: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "error_kind": "internal_error", "exit_code": 1}


@mcp_app.tool(name=FILE_MANAGER)
async def file_manager(
    context: Context,
    command: str,
    path: str,
    new_path: Optional[str] = None,
) -> dict[str, Any]:
    """
    Rename or delete files and directories in the project's virtual file system.

    Args:
        command: The type of operation. Can be 'rename' or 'delete'.
        path: The absolute path to the file or directory.
        new_path: The destination path for 'rename'.

    Returns:
        A dictionary containing the result of the operation.
    """
    logger.info(f"Executing {FILE_MANAGER} command '{command}' on path '{path}'")
    try:
        args = {"command": command, "path": path, "new_path": new_path}
        return await _dispatch(context, FILE_MANAGER, args)

    except Exception as e:
        logger.error(f"Error executing {FILE_MANAGER} command: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "error_kind": "internal_error", "exit_code": 1}


@mcp_app.tool()
async def get_project_context(context: Context) -> dict[str, Any]:
    """
    Returns the serialized files of the session and its project id, to be
    attached to the next model request.
    """
    session = get_session_manager().get_session(_session_id(context))
    logger.info(f"Serializing project context for session {session.session_id}")
    return session.request_context()


@mcp_app.tool()
async def record_transcript(context: Context, messages: list[dict[str, Any]]) -> dict[str, Any]:
    """
    Stores the latest conversation transcript for the session. While the
    session has no project, the transcript and files are kept as anonymous work.

    Args:
        messages: The full transcript, oldest message first.
    """
    session_id = _session_id(context)
    logger.info(f"Recording transcript of {len(messages)} messages for session {session_id}")
    session = get_session_manager().record_transcript(session_id, messages)
    return {"status": "success", "anonymous": session.is_anonymous, "message_count": len(session.messages)}


@mcp_app.tool()
async def claim_anonymous_work(context: Context) -> dict[str, Any]:
    """
    Called once after the user authenticates. Moves the session into a
    project: one seeded from its anonymous work, the most recent existing
    project, or a new empty one.
    """
    session_id = _session_id(context)
    logger.info(f"Resolving project for authenticated session {session_id}")
    try:
        project = await get_project_bootstrapper().resolve_project(session_id)
        get_session_manager().attach_project(session_id, project)
        return {"status": "success", "project": project.model_dump(mode="json")}

    except Exception as e:
        logger.error(f"Error resolving project for session {session_id}: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": 1}


async def _authenticate(context: Context, action: str, email: str, password: str) -> dict[str, Any]:
    session_id = _session_id(context)
    flow = get_auth_flow()
    logger.info(f"Running {action} for session {session_id}")
    try:
        if action == "sign_up":
            result = await flow.sign_up(session_id, email, password)
        else:
            result = await flow.sign_in(session_id, email, password)
        if not result.success:
            return {"status": "error", "error": result.error, "exit_code": 1}
        return {"status": "success", "project_id": result.project_id}

    except Exception as e:
        logger.error(f"Error during {action} for session {session_id}: {e}", exc_info=True)
        return {"status": "error", "error": str(e), "exit_code": 1}


@mcp_app.tool()
async def sign_in(context: Context, email: str, password: str) -> dict[str, Any]:
    """
    Signs the session in. On success the session continues in a project seeded
    from its anonymous work, or in the most recent existing project.

    Args:
        email: The account email.
        password: The account password.
    """
    return await _authenticate(context, "sign_in", email, password)


@mcp_app.tool()
async def sign_up(context: Context, email: str, password: str) -> dict[str, Any]:
    """
    Registers a new account and signs the session in, carrying any anonymous
    work over into a new project.

    Args:
        email: The account email.
        password: The account password, at least 8 characters.
    """
    return await _authenticate(context, "sign_up", email, password)
