"""The four retrieval shapes behind the Sessionize tools.

Each function makes exactly one upstream call for an already-resolved,
sanitized event ID and returns the text to show the caller.  "Nothing found"
is a normal answer here; upstream failures propagate to the dispatcher.
"""

from __future__ import annotations

from typing import Protocol

from sessionize_agent.models import ScheduleDay, SessionGroup, Speaker
from sessionize_agent.tools import formatter
from sessionize_agent.tools.normalizer import normalize_sessions, normalize_speakers

NO_SCHEDULE = (
    "No schedule configured for this event yet.\n"
    "The event organizer may not have assigned times to sessions."
)


class EventSource(Protocol):
    """What the queries need from the upstream client."""

    def get_speakers(self, event_id: str) -> list[Speaker | None] | None: ...

    def get_sessions(self, event_id: str) -> list[SessionGroup | None] | None: ...

    def get_schedule(self, event_id: str) -> list[ScheduleDay | None] | None: ...


def contains_ignore_case(text: str | None, search: str | None) -> bool:
    """Unanchored, case-insensitive substring test; ``None`` never matches."""
    return text is not None and search is not None and search.lower() in text.lower()


def no_results_for(kind: str, event_id: str) -> str:
    return f"No {kind} found for event: {event_id}"


def no_results_matching(kind: str, query: str) -> str:
    return f"No {kind} found matching: {query}"


# ── Speakers ─────────────────────────────────────────────────────────


def list_speakers(source: EventSource, event_id: str) -> str:
    speakers = normalize_speakers(source.get_speakers(event_id))
    if not speakers:
        return no_results_for("speakers", event_id)
    return formatter.join_items(speakers, formatter.speaker_summary)


def find_speakers(source: EventSource, event_id: str, name: str) -> str:
    speakers = normalize_speakers(source.get_speakers(event_id))
    if not speakers:
        return no_results_for("speakers", event_id)

    matches = [s for s in speakers if s is not None and contains_ignore_case(s.full_name, name)]
    if not matches:
        return no_results_matching("speakers", name)
    return formatter.join_items(matches, formatter.speaker_detailed)


def sessions_by_speaker(source: EventSource, event_id: str, speaker_name: str) -> str:
    """Sessions of the first speaker whose name contains *speaker_name*."""
    speakers = normalize_speakers(source.get_speakers(event_id))
    if not speakers:
        return no_results_for("speakers", event_id)

    speaker = next(
        (s for s in speakers if s is not None and contains_ignore_case(s.full_name, speaker_name)),
        None,
    )
    if speaker is None:
        return no_results_matching("speaker", speaker_name)
    return formatter.speaker_sessions(speaker)


# ── Sessions ─────────────────────────────────────────────────────────


def list_sessions(source: EventSource, event_id: str) -> str:
    sessions = normalize_sessions(source.get_sessions(event_id))
    if not sessions:
        return no_results_for("sessions", event_id)
    return formatter.join_items(sessions, formatter.session_summary)


def find_sessions(source: EventSource, event_id: str, query: str) -> str:
    """Sessions whose title or description contains *query*."""
    sessions = normalize_sessions(source.get_sessions(event_id))
    if not sessions:
        return no_results_for("sessions", event_id)

    matches = [
        s for s in sessions
        if contains_ignore_case(s.title, query) or contains_ignore_case(s.description, query)
    ]
    if not matches:
        return no_results_matching("sessions", query)
    return formatter.join_items(matches, formatter.session_summary)


# ── Schedule ─────────────────────────────────────────────────────────


def full_schedule(source: EventSource, event_id: str) -> str:
    days = source.get_schedule(event_id)
    if not days:
        return NO_SCHEDULE
    return formatter.schedule_full(days)
