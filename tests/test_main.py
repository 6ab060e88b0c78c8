#!/usr/bin/env python3
"""
Unit tests for main.py
"""

from unittest.mock import MagicMock, patch

import pytest

from vfs_tools_mcp import main


class TestStartup:
    def test_unknown_log_level_fails_setup(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "chatty")

        with patch.object(main, "load_dotenv"):
            assert main.setup_environment() is False

    def test_dispatch_table_check_passes(self):
        assert main.check_dispatch_table() is True

    def test_dispatch_table_check_reports_registration_errors(self):
        with patch("vfs_tools_mcp.utils.dependencies.get_dispatcher", side_effect=ValueError("missing handlers")):
            assert main.check_dispatch_table() is False

    def test_run_server_exits_when_setup_fails(self):
        with patch.object(main, "setup_environment", return_value=False), pytest.raises(SystemExit) as exc_info:
            main.run_server()

        assert exc_info.value.code == 1

    def test_run_server_starts_configured_transport(self):
        mcp_app = MagicMock()
        config = MagicMock(MCP_TRANSPORT="stdio")
        with (
            patch.object(main, "setup_environment", return_value=True),
            patch.object(main, "check_dispatch_table", return_value=True),
            patch("vfs_tools_mcp.server.mcp_app", mcp_app),
            patch("vfs_tools_mcp.server.server_config", config),
        ):
            main.run_server()

        mcp_app.run.assert_called_once_with(transport="stdio")
