"""Turn raw Sessionize responses into flat, null-free sequences.

Absence is never an error here: a missing view is an empty sequence.
"""

from __future__ import annotations

from collections.abc import Sequence

from sessionize_agent.models import Session, SessionGroup, Speaker


def normalize_speakers(raw: Sequence[Speaker | None] | None) -> Sequence[Speaker | None]:
    """The Speakers view is already flat; only ``None`` needs replacing."""
    if raw is None:
        return []
    return raw


def normalize_sessions(raw: Sequence[SessionGroup | None] | None) -> list[Session]:
    """Flatten session groups into one list of sessions.

    Null groups, groups without a session list and null sessions are dropped.
    Group order and in-group order are kept as received.
    """
    if raw is None:
        return []
    return [
        session
        for group in raw
        if group is not None and group.sessions is not None
        for session in group.sessions
        if session is not None
    ]
