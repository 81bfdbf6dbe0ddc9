"""LangChain tools for Sessionize event data.

Each tool forwards to the shared ``ToolDispatcher`` and returns the rendered
text.  Error results come back as text as well, so the LLM can explain the
problem (or ask for an event ID) instead of the graph failing.
"""

from __future__ import annotations

import logging

from langchain_core.tools import tool

from sessionize_agent.tools.dispatcher import get_dispatcher

logger = logging.getLogger(__name__)


def _run(operation: str, event_id: str, **arguments: str) -> str:
    result = get_dispatcher().call(operation, event_id, **arguments)
    if result.is_error:
        logger.info("Tool %s returned an error: %s", operation, result.text)
    return result.text


# ── Speakers ─────────────────────────────────────────────────────────


@tool
def get_speakers(event_id: str = "") -> str:
    """List all speakers for a Sessionize event.

    Returns speaker names, taglines and bios. Use this when the user asks
    "who are the speakers?" or "show me all speakers".

    Args:
        event_id: Sessionize event ID. Leave empty to use the configured default event.
    """
    return _run("get_speakers", event_id)


@tool
def find_speaker(name: str, event_id: str = "") -> str:
    """Search for a speaker by name.

    Returns every matching speaker with bio, social links and sessions.
    Use this for questions like "tell me about speaker Jane Doe".

    Args:
        name: Full or partial speaker name (case-insensitive).
        event_id: Sessionize event ID. Leave empty to use the configured default event.
    """
    return _run("find_speaker", event_id, name=name)


@tool
def get_sessions_by_speaker(speaker_name: str, event_id: str = "") -> str:
    """Get the sessions a specific speaker is presenting.

    Only the first speaker whose name matches is used, so prefer a full name.

    Args:
        speaker_name: Full or partial speaker name (case-insensitive).
        event_id: Sessionize event ID. Leave empty to use the configured default event.
    """
    return _run("get_sessions_by_speaker", event_id, speaker_name=speaker_name)


# ── Sessions ─────────────────────────────────────────────────────────


@tool
def get_sessions(event_id: str = "") -> str:
    """List all sessions for a Sessionize event.

    Returns titles, times, rooms, speakers and descriptions.

    Args:
        event_id: Sessionize event ID. Leave empty to use the configured default event.
    """
    return _run("get_sessions", event_id)


@tool
def find_session(query: str, event_id: str = "") -> str:
    """Search sessions whose title or description mentions a topic.

    Use this for questions like "are there sessions about Kubernetes?".

    Args:
        query: Text to look for in session titles and descriptions (case-insensitive).
        event_id: Sessionize event ID. Leave empty to use the configured default event.
    """
    return _run("find_session", event_id, query=query)


# ── Schedule ─────────────────────────────────────────────────────────


@tool
def get_schedule(event_id: str = "") -> str:
    """Get the event schedule organized by day, time slot and room.

    The schedule may be empty if the organizer has not assigned times yet.

    Args:
        event_id: Sessionize event ID. Leave empty to use the configured default event.
    """
    return _run("get_schedule", event_id)


ALL_TOOLS = [
    get_speakers,
    find_speaker,
    get_sessions_by_speaker,
    get_sessions,
    find_session,
    get_schedule,
]
