#!/usr/bin/env python3
"""
Unit tests for anon_work_tracker.py and session_manager.py
"""

import pytest

from vfs_tools_mcp.models.project import Project
from vfs_tools_mcp.utils.anon_work_tracker import AnonymousWorkTracker
from vfs_tools_mcp.utils.session_manager import SessionManager


class TestAnonymousWorkTracker:
    @pytest.fixture
    def tracker(self):
        return AnonymousWorkTracker()

    def test_consume_returns_and_clears(self, tracker):
        tracker.record("s1", [{"role": "user", "content": "hi"}], {"/App.jsx": "x"})

        snapshot = tracker.consume("s1")

        assert snapshot.messages == [{"role": "user", "content": "hi"}]
        assert snapshot.file_system_data == {"/App.jsx": "x"}
        assert tracker.consume("s1") is None

    def test_last_write_wins(self, tracker):
        tracker.record("s1", [{"role": "user", "content": "first"}], {"/a.js": "1"})
        tracker.record("s1", [{"role": "user", "content": "second"}], {"/b.js": "2"})

        snapshot = tracker.consume("s1")

        assert snapshot.messages[0]["content"] == "second"
        assert snapshot.file_system_data == {"/b.js": "2"}

    def test_sessions_are_isolated(self, tracker):
        tracker.record("s1", [{"role": "user", "content": "mine"}], {})

        assert tracker.consume("s2") is None
        assert tracker.has_work("s1")
        assert not tracker.has_work("s2")

    def test_snapshot_is_a_copy(self, tracker):
        messages = [{"role": "user", "content": "hi"}]
        files = {"/App.jsx": "x"}
        tracker.record("s1", messages, files)

        messages.append({"role": "assistant", "content": "later"})
        files["/App.jsx"] = "changed"

        snapshot = tracker.consume("s1")
        assert len(snapshot.messages) == 1
        assert snapshot.file_system_data == {"/App.jsx": "x"}

    def test_clear(self, tracker):
        tracker.record("s1", [{"role": "user", "content": "hi"}], {})

        tracker.clear("s1")

        assert tracker.consume("s1") is None


class TestSessionManager:
    @pytest.fixture
    def tracker(self):
        return AnonymousWorkTracker()

    @pytest.fixture
    def manager(self, tracker):
        return SessionManager(tracker)

    def test_get_session_is_stable(self, manager):
        assert manager.get_session("s1") is manager.get_session("s1")
        assert manager.get_session("s1") is not manager.get_session("s2")

    def test_transcript_recorded_as_anonymous_work(self, manager, tracker):
        session = manager.get_session("s1")
        session.file_system.create("/App.jsx", "x")

        manager.record_transcript("s1", [{"role": "user", "content": "make a button"}])

        snapshot = tracker.consume("s1")
        assert snapshot.file_system_data == {"/App.jsx": "x"}
        assert snapshot.messages == [{"role": "user", "content": "make a button"}]

    def test_empty_transcript_not_recorded(self, manager, tracker):
        manager.record_transcript("s1", [])

        assert tracker.consume("s1") is None

    def test_sessions_with_a_project_are_not_tracked(self, manager, tracker):
        manager.attach_project("s1", Project(name="Existing", data={"/App.jsx": "saved"}))

        session = manager.record_transcript("s1", [{"role": "user", "content": "hi"}])

        assert tracker.consume("s1") is None
        assert session.messages == [{"role": "user", "content": "hi"}]

    def test_attach_project_loads_files(self, manager):
        project = Project(name="Design", messages=[{"role": "user", "content": "hi"}], data={"/App.jsx": "saved"})

        session = manager.attach_project("s1", project)

        assert session.project_id == project.id
        assert not session.is_anonymous
        assert session.request_context() == {"files": {"/App.jsx": "saved"}, "projectId": project.id}
        assert session.messages == project.messages

    def test_drop_session_clears_anonymous_work(self, manager, tracker):
        manager.record_transcript("s1", [{"role": "user", "content": "hi"}])

        manager.drop_session("s1")

        assert tracker.consume("s1") is None
        assert manager.get_session("s1").messages == []
