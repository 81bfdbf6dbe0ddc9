"""Tests for the concierge agent routing logic.

Covers:
  - Router classification (chat vs event intent)
  - Smalltalk node behaviour (small model, no tools)
  - Conditional edges of the graph
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from sessionize_agent.agent import (
    AgentState,
    _build_router_context,
    _make_chatbot_node,
    _make_router_node,
    _make_smalltalk_node,
    route_by_intent,
    should_use_tools,
)


# ── Helpers ──────────────────────────────────────────────────────────


def _make_mock_llm(response_content: str, tool_calls: list | None = None):
    """Create a mock LLM that returns a fixed AIMessage."""
    mock_llm = MagicMock()
    ai_msg = AIMessage(content=response_content)
    if tool_calls:
        ai_msg.tool_calls = tool_calls
    mock_llm.invoke.return_value = ai_msg
    return mock_llm


def _state(*messages, intent: str = "") -> AgentState:
    return {"messages": list(messages), "intent": intent}


# ── TestRouterClassification ─────────────────────────────────────────


class TestRouterClassification:
    @patch("sessionize_agent.agent._build_router_llm")
    def test_greeting_classified_as_chat(self, mock_build):
        mock_build.return_value = _make_mock_llm("CHAT")
        router = _make_router_node()

        result = router(_state(HumanMessage(content="Hi there!")))
        assert result["intent"] == "chat"

    @patch("sessionize_agent.agent._build_router_llm")
    def test_speaker_question_classified_as_event(self, mock_build):
        mock_build.return_value = _make_mock_llm("EVENT")
        router = _make_router_node()

        result = router(_state(HumanMessage(content="Who is talking about Kubernetes?")))
        assert result["intent"] == "event"

    @patch("sessionize_agent.agent._build_router_llm")
    def test_label_is_case_and_whitespace_tolerant(self, mock_build):
        mock_build.return_value = _make_mock_llm("  chat.\n")
        router = _make_router_node()

        result = router(_state(HumanMessage(content="Thanks!")))
        assert result["intent"] == "chat"

    @patch("sessionize_agent.agent._build_router_llm")
    def test_unexpected_response_defaults_to_event(self, mock_build):
        mock_build.return_value = _make_mock_llm("MAYBE")
        router = _make_router_node()

        result = router(_state(HumanMessage(content="hmm")))
        assert result["intent"] == "event"

    @patch("sessionize_agent.agent._build_router_llm")
    def test_router_handles_llm_error_gracefully(self, mock_build):
        mock_llm = MagicMock()
        mock_llm.invoke.side_effect = RuntimeError("LLM down")
        mock_build.return_value = mock_llm
        router = _make_router_node()

        result = router(_state(HumanMessage(content="Hello")))
        assert result == {"intent": "event"}

    @patch("sessionize_agent.agent._build_router_llm")
    def test_router_only_sets_intent(self, mock_build):
        mock_build.return_value = _make_mock_llm("EVENT")
        router = _make_router_node()

        result = router(_state(HumanMessage(content="What's on Day 2?")))
        assert "messages" not in result

    @patch("sessionize_agent.agent._build_router_llm")
    def test_prompt_contains_latest_message_and_context(self, mock_build):
        mock_llm = _make_mock_llm("EVENT")
        mock_build.return_value = mock_llm
        router = _make_router_node()

        router(_state(
            HumanMessage(content="Show me the speakers"),
            AIMessage(content="Which event ID should I use?"),
            HumanMessage(content="devconf2026"),
        ))
        prompt = mock_llm.invoke.call_args[0][0][0].content
        assert "Latest message: devconf2026" in prompt
        assert "Which event ID should I use?" in prompt


# ── TestBuildRouterContext ───────────────────────────────────────────


class TestBuildRouterContext:
    def test_empty_messages_returns_empty_string(self):
        assert _build_router_context([]) == ""

    def test_single_message_returns_empty_string(self):
        assert _build_router_context([HumanMessage(content="Hello")]) == ""

    def test_excludes_latest_message(self):
        msgs = [
            HumanMessage(content="Find speaker Jane"),
            AIMessage(content="Which event?"),
            HumanMessage(content="abc123"),
        ]
        context = _build_router_context(msgs)
        assert context.startswith("Recent conversation:")
        assert "User: Find speaker Jane" in context
        assert "Assistant: Which event?" in context
        assert "abc123" not in context

    def test_skips_assistant_messages_without_text(self):
        tool_turn = AIMessage(content="")
        msgs = [HumanMessage(content="List sessions"), tool_turn, HumanMessage(content="thanks")]
        context = _build_router_context(msgs)
        assert "Assistant:" not in context

    def test_limits_to_recent_turns(self):
        msgs = [HumanMessage(content=f"message {i}") for i in range(10)]
        context = _build_router_context(msgs, max_turns=1)
        assert "message 7" in context
        assert "message 8" in context
        assert "message 6" not in context

    def test_truncates_long_messages(self):
        msgs = [HumanMessage(content="a" * 500), AIMessage(content="OK"), HumanMessage(content="x")]
        assert "a" * 201 not in _build_router_context(msgs)


# ── TestSmalltalkNode ────────────────────────────────────────────────


class TestSmalltalkNode:
    @patch("sessionize_agent.agent._build_fast_llm")
    def test_returns_single_ai_message(self, mock_build):
        mock_build.return_value = _make_mock_llm("Hi! Ask me about speakers or sessions.")
        node = _make_smalltalk_node()

        result = node(_state(HumanMessage(content="Hello"), intent="chat"))
        assert len(result["messages"]) == 1
        assert "speakers" in result["messages"][0].content

    @patch("sessionize_agent.agent._build_fast_llm")
    def test_prepends_system_prompt(self, mock_build):
        mock_llm = _make_mock_llm("Hello!")
        mock_build.return_value = mock_llm
        node = _make_smalltalk_node()

        node(_state(HumanMessage(content="Hello"), intent="chat"))
        sent = mock_llm.invoke.call_args[0][0]
        assert isinstance(sent[0], SystemMessage)
        assert sent[1].content == "Hello"

    @patch("sessionize_agent.agent._build_fast_llm")
    def test_propagates_llm_errors(self, mock_build):
        mock_llm = MagicMock()
        mock_llm.invoke.side_effect = RuntimeError("LLM down")
        mock_build.return_value = mock_llm
        node = _make_smalltalk_node()

        with pytest.raises(RuntimeError, match="LLM down"):
            node(_state(HumanMessage(content="Hello"), intent="chat"))


# ── TestChatbotNode ──────────────────────────────────────────────────


class TestChatbotNode:
    @patch("sessionize_agent.agent._build_llm")
    def test_returns_tool_calls_from_model(self, mock_build):
        mock_build.return_value = _make_mock_llm(
            "", tool_calls=[{"name": "find_speaker", "args": {"name": "Jane"}, "id": "call-1"}],
        )
        node = _make_chatbot_node()

        result = node(_state(HumanMessage(content="Tell me about Jane"), intent="event"))
        assert result["messages"][0].tool_calls[0]["name"] == "find_speaker"


# ── TestRouteByIntent ────────────────────────────────────────────────


class TestRouteByIntent:
    def test_chat_routes_to_smalltalk(self):
        assert route_by_intent(_state(HumanMessage(content="Hi"), intent="chat")) == "smalltalk"

    def test_event_routes_to_chatbot(self):
        assert route_by_intent(_state(HumanMessage(content="Agenda?"), intent="event")) == "chatbot"

    @pytest.mark.parametrize("intent", ["", "something_else"])
    def test_anything_else_routes_to_chatbot(self, intent):
        assert route_by_intent(_state(HumanMessage(content="Hello"), intent=intent)) == "chatbot"


# ── TestShouldUseTools ───────────────────────────────────────────────


class TestShouldUseTools:
    def test_message_with_tool_calls_routes_to_tools(self):
        ai_msg = AIMessage(content="")
        ai_msg.tool_calls = [{"name": "get_schedule", "args": {}, "id": "1"}]
        assert should_use_tools(_state(ai_msg, intent="event")) == "tools"

    def test_message_without_tool_calls_routes_to_end(self):
        ai_msg = AIMessage(content="Here is the schedule.")
        assert should_use_tools(_state(ai_msg, intent="event")) == "__end__"
