"""System prompt for the concierge agent and reusable user-prompt templates.

The templates are exposed as MCP prompts (see ``mcp_server.py``) so that MCP
clients can offer them as ready-made questions.
"""

from datetime import UTC, datetime

from sessionize_agent.config import SESSIONIZE_EVENT_ID

SYSTEM_PROMPT_TEMPLATE = """You are **Sessie**, a friendly conference concierge.
You answer questions about a conference using live data from Sessionize.

## Current Date & Time
Today is **{current_date}** ({current_day_of_week}). The current time is **{current_time} UTC**.

## Event
{event_line}

## Your Tools
- `get_speakers` — every speaker with tagline and bio
- `find_speaker` — speakers whose name contains a search term, with links and sessions
- `get_sessions_by_speaker` — the talks one speaker is giving
- `get_sessions` — every session with time, room, speakers and description
- `find_session` — sessions whose title or description mentions a topic
- `get_schedule` — the agenda by day, time slot and room

## Guidelines
- Prefer the narrowest tool: search before listing everything.
- Searches are plain substring matches. If a topic search finds nothing, retry
  with a shorter or related keyword (e.g. "k8s" → "Kubernetes") before giving up.
- If a tool says an event ID is required, ask the user for their Sessionize event ID.
- If a tool reports that the schedule is not configured yet, say so; do not invent times.
- Keep answers short and use bullet points for lists of talks or speakers.

### Safety Rules
- **NEVER** make up speakers, sessions, rooms or times. Only share data from the tools.
- Stay on topic. If asked about things unrelated to the conference, politely redirect.
"""


def get_system_prompt() -> str:
    """Build the complete system prompt with the current date and event injected."""
    now = datetime.now(UTC)
    if SESSIONIZE_EVENT_ID:
        event_line = (
            f"The default event ID is `{SESSIONIZE_EVENT_ID}`; tools use it when "
            "you leave `event_id` empty."
        )
    else:
        event_line = "No default event is configured; pass `event_id` to every tool."
    return SYSTEM_PROMPT_TEMPLATE.format(
        event_line=event_line,
        current_date=now.strftime("%d %B %Y"),
        current_day_of_week=now.strftime("%A"),
        current_time=now.strftime("%H:%M"),
    )


# ── Prompt templates ─────────────────────────────────────────────────


def event_overview(event_id: str = "") -> str:
    if not event_id.strip():
        return (
            "Give me an overview of the conference. List how many speakers and sessions "
            "there are, and highlight any notable topics."
        )
    return (
        f"Give me an overview of the conference with event ID '{event_id}'. List how many "
        "speakers and sessions there are, and highlight any notable topics."
    )


def find_speaker_info(speaker_name: str) -> str:
    return (
        f"Find information about the speaker '{speaker_name}'. Include their bio, tagline, "
        "social links, and what sessions they are presenting."
    )


def sessions_by_topic(topic: str) -> str:
    return (
        f"Find all sessions about '{topic}'. For each session, show the title, speakers, "
        "time, and a brief description."
    )


def conference_schedule(day: str = "") -> str:
    if not day.strip():
        return (
            "Show me the full conference schedule organized by day and time slot. "
            "Include room information and session titles."
        )
    return (
        f"Show me the conference schedule for {day}. Include room information, "
        "time slots, and session titles."
    )


def speaker_sessions(speaker_name: str) -> str:
    return (
        f"What sessions is '{speaker_name}' presenting at the conference? Include the "
        "session titles, times, and rooms."
    )


def recommend_sessions(interests: str) -> str:
    return (
        f"Based on my interests in {interests}, recommend sessions I should attend at this "
        "conference. Explain why each session would be relevant."
    )
