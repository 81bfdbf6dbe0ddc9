"""Tests for the LangChain tool wrappers."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from sessionize_agent.models import Session, SessionGroup
from sessionize_agent.tools import sessionize
from sessionize_agent.tools.dispatcher import EVENT_ID_REQUIRED, OPERATIONS, ToolDispatcher


@pytest.fixture
def dispatcher(source):
    dispatcher = ToolDispatcher(client=source)
    with patch("sessionize_agent.tools.sessionize.get_dispatcher", return_value=dispatcher):
        yield dispatcher


class TestToolRegistry:
    def test_one_tool_per_operation(self):
        assert [t.name for t in sessionize.ALL_TOOLS] == list(OPERATIONS)

    def test_argument_schemas(self):
        assert set(sessionize.find_speaker.args) == {"name", "event_id"}
        assert set(sessionize.get_sessions_by_speaker.args) == {"speaker_name", "event_id"}
        assert set(sessionize.find_session.args) == {"query", "event_id"}
        assert set(sessionize.get_schedule.args) == {"event_id"}


class TestToolInvocation:
    def test_returns_rendered_text(self, dispatcher, source):
        source.get_sessions.return_value = [
            SessionGroup(sessions=(Session(id="1", title="Rust for Pythonistas"),)),
        ]
        text = sessionize.find_session.invoke({"query": "rust", "event_id": "ev1"})
        assert text.startswith("## Rust for Pythonistas\n")
        source.get_sessions.assert_called_once_with("ev1")

    def test_error_result_comes_back_as_text(self, dispatcher):
        assert sessionize.get_speakers.invoke({}) == EVENT_ID_REQUIRED

    def test_blank_argument_message(self, dispatcher):
        text = sessionize.get_sessions_by_speaker.invoke({"speaker_name": " ", "event_id": "ev1"})
        assert text == "Required parameter is missing: speaker_name."

    def test_schedule_tool(self, dispatcher, source):
        source.get_schedule.return_value = []
        assert "No schedule configured" in sessionize.get_schedule.invoke({"event_id": "ev1"})
