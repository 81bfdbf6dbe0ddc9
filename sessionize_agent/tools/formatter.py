"""Markdown rendering for speakers, sessions and the schedule grid.

All functions are pure.  A blank or missing label is rendered as
``Unknown``; a missing optional line (tag line, room, ...) is left out.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

from sessionize_agent.models import ScheduleDay, Session, Speaker

T = TypeVar("T")

UNKNOWN = "Unknown"
SEPARATOR = "\n---\n"
NO_DESCRIPTION = "No description available."
NO_SESSIONS_ASSIGNED = "No sessions assigned."


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def safe(value: str | None) -> str:
    """Return *value*, or ``Unknown`` when it is blank."""
    return UNKNOWN if is_blank(value) else value


def _present(items: Sequence[T | None] | None) -> list[T]:
    return [item for item in items or () if item is not None]


def join_items(items: Iterable[T], render: Callable[[T], str]) -> str:
    """Render each item and join them with a horizontal rule."""
    return SEPARATOR.join(render(item) for item in items)


# ── Speakers ─────────────────────────────────────────────────────────


def speaker_summary(speaker: Speaker | None) -> str:
    if speaker is None:
        return ""
    lines = [f"## {safe(speaker.full_name)}\n"]
    if not is_blank(speaker.tag_line):
        lines.append(f"*{speaker.tag_line}*\n")
    if not is_blank(speaker.bio):
        lines.append(f"{speaker.bio}\n")
    return "".join(lines)


def speaker_detailed(speaker: Speaker | None) -> str:
    """Summary plus the speaker's links and session titles.

    Each section is omitted entirely when its source list is empty.
    """
    if speaker is None:
        return ""
    output = speaker_summary(speaker)
    if speaker.links:
        output += "\n**Links:**\n"
        output += "".join(
            f"- {safe(link.title)}: {safe(link.url)}\n" for link in _present(speaker.links)
        )
    if speaker.sessions:
        output += "\n**Sessions:**\n"
        output += "".join(f"- {safe(ref.name)}\n" for ref in _present(speaker.sessions))
    return output


def speaker_sessions(speaker: Speaker) -> str:
    output = f"## Sessions by {safe(speaker.full_name)}\n\n"
    if speaker.sessions:
        output += "".join(f"- {safe(ref.name)}\n" for ref in _present(speaker.sessions))
    else:
        output += f"{NO_SESSIONS_ASSIGNED}\n"
    return output


# ── Sessions ─────────────────────────────────────────────────────────


def session_summary(session: Session | None) -> str:
    if session is None:
        return ""
    output = f"## {safe(session.title)}\n"

    if session.starts_at is not None:
        output += f"**Time:** {session.starts_at}"
        if session.ends_at is not None:
            output += f" - {session.ends_at}"
        output += "\n"

    if not is_blank(session.room):
        output += f"**Room:** {session.room}\n"

    if session.speakers:
        names = ", ".join(safe(ref.name) for ref in _present(session.speakers))
        output += f"**Speakers:** {names}\n"

    output += "\n"
    output += session.description if session.description is not None else NO_DESCRIPTION
    return output


# ── Schedule ─────────────────────────────────────────────────────────


def schedule_full(days: Sequence[ScheduleDay | None]) -> str:
    """Render the grid as day → time slot → ``room: session`` bullets.

    Rooms without a session in a slot are skipped.
    """
    output = "# Event Schedule\n\n"
    for day in _present(days):
        output += f"## {safe(day.date)}\n\n"
        for slot in _present(day.time_slots):
            output += f"### {safe(slot.slot_start)}\n"
            for room in _present(slot.rooms):
                if room.session is None:
                    continue
                output += f"- **{safe(room.name)}**: {safe(room.session.title)}\n"
            output += "\n"
    return output
