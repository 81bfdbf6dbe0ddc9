"""LangGraph concierge agent that answers conference questions with the
Sessionize tools.

Architecture:
  A LangGraph StateGraph with four nodes:

    1. **router**    — cheap model call that labels each message ``chat``
                       (greetings, thanks, how-to questions) or ``event``
                       (anything that needs speaker/session/schedule data)
    2. **smalltalk** — small model, no tools, for ``chat`` messages
    3. **chatbot**   — main model with the Sessionize tools bound
    4. **tools**     — executes the tool calls the chatbot requests

  Routing:
    router → (chat?)  → smalltalk → END
    router → (event?) → chatbot → (has tool calls?) → tools → chatbot (loop)
                                → (no tool calls?)  → END

  Memory:
    Conversation state is kept per session by LangGraph's MemorySaver, so a
    follow-up like "and what is she presenting?" sees the earlier turns.
"""

from __future__ import annotations

import logging
import time
from typing import Annotated

from langchain_anthropic import ChatAnthropic
from langchain_core.messages import AnyMessage, HumanMessage, SystemMessage
from langgraph.checkpoint.memory import MemorySaver
from langgraph.graph import END, StateGraph
from langgraph.graph.message import add_messages
from langgraph.prebuilt import ToolNode
from typing_extensions import TypedDict

from sessionize_agent.config import (
    FAST_MODEL_NAME,
    MODEL_NAME,
    ROUTER_MODEL_NAME,
    get_anthropic_api_key,
)
from sessionize_agent.prompts import get_system_prompt
from sessionize_agent.tools.sessionize import ALL_TOOLS

logger = logging.getLogger(__name__)


ROUTER_PROMPT = (
    "Classify the latest message sent to a conference assistant. "
    "Reply with exactly one word — either CHAT or EVENT.\n\n"
    "- CHAT: greetings, thank-you messages, questions about what the "
    "assistant can do, or anything that needs no conference data.\n"
    "- EVENT: questions about speakers, sessions, talks, topics, rooms, "
    "times or the agenda, or a reply that continues such a question "
    "(for example an event ID or a speaker name the assistant asked for).\n\n"
    "{context}Latest message: {message}\n\n"
    "Classification:"
)


class AgentState(TypedDict):
    """State flowing through the graph.

    ``intent`` is written by the router and only read by the conditional
    edge after it; it never reaches the user.
    """

    messages: Annotated[list[AnyMessage], add_messages]
    intent: str


# ── LLM builders ────────────────────────────────────────────────────


def _build_router_llm() -> ChatAnthropic:
    return ChatAnthropic(
        model=ROUTER_MODEL_NAME,
        api_key=get_anthropic_api_key(),
        temperature=0.0,
        max_tokens=10,
    )


def _build_fast_llm() -> ChatAnthropic:
    return ChatAnthropic(
        model=FAST_MODEL_NAME,
        api_key=get_anthropic_api_key(),
        temperature=0.3,
        max_tokens=512,
    )


def _build_llm() -> ChatAnthropic:
    """Main model with the Sessionize tools bound."""
    llm = ChatAnthropic(
        model=MODEL_NAME,
        api_key=get_anthropic_api_key(),
        temperature=0.1,
        max_tokens=2048,
    )
    return llm.bind_tools(ALL_TOOLS)


# ── Node: router ────────────────────────────────────────────────────


def _build_router_context(messages: list[AnyMessage], max_turns: int = 2) -> str:
    """Summarise the turns before the latest message for the router."""
    recent = messages[-(max_turns * 2 + 1):-1] if len(messages) > 1 else []
    lines = []
    for msg in recent:
        if isinstance(msg, HumanMessage):
            lines.append(f"  User: {msg.content[:200]}")
        elif isinstance(msg.content, str) and msg.content:
            lines.append(f"  Assistant: {msg.content[:200]}")
    if not lines:
        return ""
    return "\n".join(["Recent conversation:", *lines, "", ""])


def _make_router_node():
    router_llm = _build_router_llm()

    def router_node(state: AgentState) -> dict:
        last_human_msg = next(
            (m.content for m in reversed(state["messages"]) if isinstance(m, HumanMessage)),
            "",
        )
        prompt = ROUTER_PROMPT.format(
            context=_build_router_context(state["messages"]), message=last_human_msg,
        )
        t0 = time.perf_counter()
        try:
            response = router_llm.invoke([HumanMessage(content=prompt)])
        except Exception as exc:
            # Fall back to the tool path
            logger.warning("Router failed, defaulting to event path: %s", exc)
            return {"intent": "event"}

        label = str(response.content).strip().upper()
        intent = "chat" if label.startswith("CHAT") else "event"
        logger.debug(
            "Router (%s) classified as %s (raw %r, %.0fms)",
            ROUTER_MODEL_NAME, intent, label, (time.perf_counter() - t0) * 1000,
        )
        return {"intent": intent}

    return router_node


# ── Node: smalltalk / chatbot ───────────────────────────────────────


def _make_llm_node(llm, label: str):
    """Wrap *llm* as a node that answers with the system prompt prepended."""

    def llm_node(state: AgentState) -> dict:
        system = SystemMessage(content=get_system_prompt())
        t0 = time.perf_counter()
        response = llm.invoke([system] + state["messages"])
        logger.debug("%s responded in %.0fms", label, (time.perf_counter() - t0) * 1000)
        return {"messages": [response]}

    return llm_node


def _make_smalltalk_node():
    return _make_llm_node(_build_fast_llm(), "smalltalk")


def _make_chatbot_node():
    return _make_llm_node(_build_llm(), "chatbot")


# ── Conditional edges ────────────────────────────────────────────────


def route_by_intent(state: AgentState) -> str:
    return "smalltalk" if state.get("intent") == "chat" else "chatbot"


def should_use_tools(state: AgentState) -> str:
    last_message = state["messages"][-1]
    if getattr(last_message, "tool_calls", None):
        return "tools"
    return END


# ── Graph assembly ───────────────────────────────────────────────────


def create_concierge_agent():
    """Build and compile the concierge graph.

    Raises ``OSError`` when no Anthropic API key is configured.

    Invoke the result with:
        graph.invoke(
            {"messages": [HumanMessage(content="...")]},
            config={"configurable": {"thread_id": "session-123"}},
        )
    """
    graph = StateGraph(AgentState)

    graph.add_node("router", _make_router_node())
    graph.add_node("smalltalk", _make_smalltalk_node())
    graph.add_node("chatbot", _make_chatbot_node())
    graph.add_node("tools", ToolNode(ALL_TOOLS))

    graph.set_entry_point("router")
    graph.add_conditional_edges(
        "router", route_by_intent, {"smalltalk": "smalltalk", "chatbot": "chatbot"},
    )
    graph.add_edge("smalltalk", END)
    graph.add_conditional_edges("chatbot", should_use_tools, {"tools": "tools", END: END})
    graph.add_edge("tools", "chatbot")

    compiled = graph.compile(checkpointer=MemorySaver())
    logger.debug(
        "Concierge agent compiled — router: %s, smalltalk: %s, chatbot: %s, tools: %d",
        ROUTER_MODEL_NAME, FAST_MODEL_NAME, MODEL_NAME, len(ALL_TOOLS),
    )
    return compiled
