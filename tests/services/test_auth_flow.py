#!/usr/bin/env python3
"""
Unit tests for project_bootstrap.py, auth_flow.py and authenticator.py
"""

import re
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from vfs_tools_mcp.models.project import AuthResult, Project
from vfs_tools_mcp.services.auth_flow import AuthFlow
from vfs_tools_mcp.services.authenticator import InMemoryAuthenticator
from vfs_tools_mcp.services.project_bootstrap import ProjectBootstrapper
from vfs_tools_mcp.services.project_store import InMemoryProjectStore
from vfs_tools_mcp.utils.anon_work_tracker import AnonymousWorkTracker


@pytest.fixture
def tracker():
    return AnonymousWorkTracker()


@pytest.fixture
def store():
    return InMemoryProjectStore()


@pytest.fixture
def bootstrapper(tracker, store):
    return ProjectBootstrapper(tracker, store, clock=lambda: datetime(2025, 1, 1, 9, 5, 7))


class TestProjectBootstrapper:
    @pytest.mark.asyncio
    async def test_anonymous_work_becomes_project(self, bootstrapper, tracker, store):
        tracker.record("s1", [{"role": "user", "content": "test"}], {"/App.jsx": "code"})

        project = await bootstrapper.resolve_project("s1")

        assert project.name == "Design from 09:05:07"
        assert re.match(r"^Design from \d{1,2}:\d{2}:\d{2}", project.name)
        assert project.messages == [{"role": "user", "content": "test"}]
        assert project.data == {"/App.jsx": "code"}
        assert tracker.consume("s1") is None

    @pytest.mark.asyncio
    async def test_work_is_consumed_only_once(self, bootstrapper, tracker, store):
        tracker.record("s1", [{"role": "user", "content": "test"}], {})

        first = await bootstrapper.resolve_project("s1")
        second = await bootstrapper.resolve_project("s1")

        assert second.id == first.id
        assert len(await store.list_projects()) == 1

    @pytest.mark.asyncio
    async def test_empty_transcript_falls_back_to_latest_project(self, bootstrapper, tracker, store):
        await store.create_project("Old", [], {})
        latest = await store.create_project("Latest", [], {})
        tracker.record("s1", [], {"/App.jsx": "ignored"})

        project = await bootstrapper.resolve_project("s1")

        assert project.id == latest.id
        assert len(await store.list_projects()) == 2

    @pytest.mark.asyncio
    async def test_new_designs_are_numbered_sequentially(self, tracker):
        store = MagicMock()
        store.list_projects = AsyncMock(return_value=[])
        store.create_project = AsyncMock(side_effect=lambda name, messages, data: Project(name=name))
        bootstrapper = ProjectBootstrapper(tracker, store)

        first = await bootstrapper.resolve_project("s1")
        second = await bootstrapper.resolve_project("s2")

        assert first.name == "New Design #1"
        assert second.name == "New Design #2"
        store.create_project.assert_awaited_with(name="New Design #2", messages=[], data={})


class TestAuthFlow:
    @pytest.fixture
    def authenticator(self):
        authenticator = MagicMock()
        authenticator.sign_in = AsyncMock(return_value=AuthResult(success=True))
        authenticator.sign_up = AsyncMock(return_value=AuthResult(success=True))
        return authenticator

    @pytest.fixture
    def flow(self, authenticator, bootstrapper):
        return AuthFlow(authenticator, bootstrapper)

    def test_initial_state(self, flow):
        assert flow.is_loading is False

    @pytest.mark.asyncio
    async def test_sign_in_with_anonymous_work(self, flow, authenticator, tracker, store):
        tracker.record("s1", [{"role": "user", "content": "test"}], {"/App.jsx": "code"})

        result = await flow.sign_in("s1", "test@example.com", "password123")

        authenticator.sign_in.assert_awaited_once_with("test@example.com", "password123")
        projects = await store.list_projects()
        assert result.success
        assert result.project_id == projects[0].id
        assert projects[0].data == {"/App.jsx": "code"}
        assert flow.is_loading is False

    @pytest.mark.asyncio
    async def test_sign_up_without_work_creates_new_design(self, flow, store):
        result = await flow.sign_up("s1", "new@example.com", "password123")

        projects = await store.list_projects()
        assert projects[0].name == "New Design #1"
        assert result.project_id == projects[0].id

    @pytest.mark.asyncio
    async def test_failed_sign_in_skips_seeding(self, flow, authenticator, tracker, store):
        authenticator.sign_in.return_value = AuthResult(success=False, error="Invalid credentials")
        tracker.record("s1", [{"role": "user", "content": "test"}], {})

        result = await flow.sign_in("s1", "test@example.com", "wrong")

        assert result == AuthResult(success=False, error="Invalid credentials")
        assert await store.list_projects() == []
        assert tracker.has_work("s1")

    @pytest.mark.asyncio
    async def test_loading_is_set_during_call(self, flow, authenticator):
        observed = []

        async def sign_in(email, password):
            observed.append(flow.is_loading)
            return AuthResult(success=False)

        authenticator.sign_in.side_effect = sign_in

        await flow.sign_in("s1", "test@example.com", "password123")

        assert observed == [True]
        assert flow.is_loading is False

    @pytest.mark.asyncio
    async def test_errors_propagate_and_reset_loading(self, flow, authenticator):
        authenticator.sign_in.side_effect = ConnectionError("Network error")

        with pytest.raises(ConnectionError, match="Network error"):
            await flow.sign_in("s1", "test@example.com", "password123")

        assert flow.is_loading is False

    @pytest.mark.asyncio
    async def test_store_errors_propagate_and_reset_loading(self, authenticator, tracker):
        store = MagicMock()
        store.list_projects = AsyncMock(side_effect=RuntimeError("store unavailable"))
        flow = AuthFlow(authenticator, ProjectBootstrapper(tracker, store))

        with pytest.raises(RuntimeError, match="store unavailable"):
            await flow.sign_up("s1", "new@example.com", "password123")

        assert flow.is_loading is False

    @pytest.mark.asyncio
    async def test_resolved_project_is_handed_to_callback(self, authenticator, bootstrapper, tracker):
        attached = []
        flow = AuthFlow(
            authenticator, bootstrapper, on_project=lambda session_id, project: attached.append((session_id, project))
        )
        tracker.record("s1", [{"role": "user", "content": "test"}], {"/App.jsx": "code"})

        result = await flow.sign_in("s1", "test@example.com", "password123")

        assert [(session_id, project.id) for session_id, project in attached] == [("s1", result.project_id)]

    @pytest.mark.asyncio
    async def test_callback_skipped_on_failure(self, authenticator, bootstrapper):
        on_project = MagicMock()
        authenticator.sign_in.return_value = AuthResult(success=False, error="Invalid credentials")
        flow = AuthFlow(authenticator, bootstrapper, on_project=on_project)

        await flow.sign_in("s1", "test@example.com", "wrong")

        on_project.assert_not_called()


class TestInMemoryAuthenticator:
    @pytest.fixture
    def authenticator(self):
        return InMemoryAuthenticator()

    @pytest.mark.asyncio
    async def test_sign_up_then_sign_in(self, authenticator):
        assert (await authenticator.sign_up("Test@Example.com", "password123")).success
        assert (await authenticator.sign_in("test@example.com", "password123")).success

    @pytest.mark.asyncio
    async def test_wrong_password(self, authenticator):
        await authenticator.sign_up("test@example.com", "password123")

        result = await authenticator.sign_in("test@example.com", "password124")

        assert result == AuthResult(success=False, error="Invalid credentials")

    @pytest.mark.asyncio
    async def test_unknown_account(self, authenticator):
        result = await authenticator.sign_in("nobody@example.com", "password123")

        assert result.error == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_duplicate_sign_up(self, authenticator):
        await authenticator.sign_up("test@example.com", "password123")

        result = await authenticator.sign_up("TEST@example.com", "different456")

        assert result.error == "Email already registered"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email, password, error",
        [
            ("not-an-email", "password123", "A valid email is required"),
            ("test@example.com", "short", "Password must be at least 8 characters"),
        ],
    )
    async def test_sign_up_validation(self, authenticator, email, password, error):
        result = await authenticator.sign_up(email, password)

        assert result == AuthResult(success=False, error=error)
