"""MCP server exposing the Sessionize tools and prompt templates.

Run standalone over stdio (the transport MCP desktop clients expect):

    python -m sessionize_agent.mcp_server

Logs go to STDERR: STDOUT carries the MCP JSON-RPC stream.
"""

from __future__ import annotations

import logging
import sys

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from sessionize_agent import prompts
from sessionize_agent.tools.dispatcher import ToolResult, get_dispatcher

logger = logging.getLogger(__name__)

mcp = FastMCP("sessionize")

EVENT_ID_HELP = "Sessionize event ID. Optional if SESSIONIZE_EVENT_ID is set."


def _unwrap(result: ToolResult) -> str:
    """Return the text of a success result; raise error results as ``ToolError``."""
    if result.is_error:
        raise ToolError(result.text)
    return result.text


# ── Tools ────────────────────────────────────────────────────────────


@mcp.tool()
async def get_speakers(event_id: str = "") -> str:
    """List all speakers for a Sessionize event.

    Returns speaker names, bios and taglines. Use this when the user asks
    "who are the speakers?" or "show me all speakers".

    Args:
        event_id: Sessionize event ID. Optional if SESSIONIZE_EVENT_ID is set.
    """
    return _unwrap(await get_dispatcher().get_speakers(event_id))


@mcp.tool()
async def find_speaker(name: str, event_id: str = "") -> str:
    """Search for a speaker by name in a Sessionize event.

    Returns matching speakers with full details including bio, social links
    and sessions. Use this for "tell me about speaker X".

    Args:
        name: Speaker name to search for.
        event_id: Sessionize event ID. Optional if SESSIONIZE_EVENT_ID is set.
    """
    return _unwrap(await get_dispatcher().find_speaker(name, event_id))


@mcp.tool()
async def get_sessions_by_speaker(speaker_name: str, event_id: str = "") -> str:
    """Get all sessions for a specific speaker.

    Use this when the user asks "what is speaker Y presenting?".

    Args:
        speaker_name: Speaker name to search for.
        event_id: Sessionize event ID. Optional if SESSIONIZE_EVENT_ID is set.
    """
    return _unwrap(await get_dispatcher().get_sessions_by_speaker(speaker_name, event_id))


@mcp.tool()
async def get_sessions(event_id: str = "") -> str:
    """List all sessions for a Sessionize event.

    Returns session titles, descriptions, speakers and schedule information.

    Args:
        event_id: Sessionize event ID. Optional if SESSIONIZE_EVENT_ID is set.
    """
    return _unwrap(await get_dispatcher().get_sessions(event_id))


@mcp.tool()
async def find_session(query: str, event_id: str = "") -> str:
    """Search sessions by title or description.

    Use this for "find sessions about Kubernetes" or "sessions on AI".

    Args:
        query: Text to search in session titles and descriptions.
        event_id: Sessionize event ID. Optional if SESSIONIZE_EVENT_ID is set.
    """
    return _unwrap(await get_dispatcher().find_session(query, event_id))


@mcp.tool()
async def get_schedule(event_id: str = "") -> str:
    """Get the event schedule organized by day and time slot.

    The schedule may be empty if the event has not configured session times.

    Args:
        event_id: Sessionize event ID. Optional if SESSIONIZE_EVENT_ID is set.
    """
    return _unwrap(await get_dispatcher().get_schedule(event_id))


# ── Prompts ──────────────────────────────────────────────────────────


@mcp.prompt()
def event_overview(event_id: str = "") -> str:
    """Overview of a conference event including speaker and session counts."""
    return prompts.event_overview(event_id)


@mcp.prompt()
def find_speaker_info(speaker_name: str) -> str:
    """Detailed information about a specific speaker."""
    return prompts.find_speaker_info(speaker_name)


@mcp.prompt()
def sessions_by_topic(topic: str) -> str:
    """All sessions related to a topic or technology."""
    return prompts.sessions_by_topic(topic)


@mcp.prompt()
def conference_schedule(day: str = "") -> str:
    """The conference schedule, optionally for one day."""
    return prompts.conference_schedule(day)


@mcp.prompt()
def speaker_sessions(speaker_name: str) -> str:
    """All sessions presented by a specific speaker."""
    return prompts.speaker_sessions(speaker_name)


@mcp.prompt()
def recommend_sessions(interests: str) -> str:
    """Session recommendations based on the user's interests."""
    return prompts.recommend_sessions(interests)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
        stream=sys.stderr,
    )
    logger.info("Starting Sessionize MCP server (stdio)")
    mcp.run()


if __name__ == "__main__":
    main()
