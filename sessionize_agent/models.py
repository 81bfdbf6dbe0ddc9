"""Immutable data models for Sessionize API responses.

Sessionize serves camelCase JSON; the models expose snake_case attributes and
accept either spelling on input.  Every field except the entity ``id`` may be
missing or ``null``, and so may any element of a nested sequence.

See: https://sessionize.com/api-documentation
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, TypeAdapter
from pydantic.alias_generators import to_camel


class SessionizeModel(BaseModel):
    """Base for all Sessionize entities: frozen, camelCase aliases, extra fields ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# ── Speakers ─────────────────────────────────────────────────────────


class SessionRef(SessionizeModel):
    # Numeric in the Speakers view
    id: int | str | None = None
    name: str | None = None


class Link(SessionizeModel):
    title: str | None = None
    url: str | None = None
    link_type: str | None = None


class Speaker(SessionizeModel):
    id: str
    full_name: str | None = None
    bio: str | None = None
    tag_line: str | None = None
    profile_picture: str | None = None
    sessions: tuple[SessionRef | None, ...] | None = None
    links: tuple[Link | None, ...] | None = None


# ── Sessions ─────────────────────────────────────────────────────────


class SpeakerRef(SessionizeModel):
    id: str | None = None
    name: str | None = None


class CategoryItem(SessionizeModel):
    id: int | None = None
    name: str | None = None


class Category(SessionizeModel):
    id: int | None = None
    name: str | None = None
    category_items: tuple[CategoryItem | None, ...] | None = None


class Session(SessionizeModel):
    id: str
    title: str | None = None
    description: str | None = None
    # Opaque timestamps, rendered exactly as received
    starts_at: str | None = None
    ends_at: str | None = None
    room: str | None = None
    speakers: tuple[SpeakerRef | None, ...] | None = None
    categories: tuple[Category | None, ...] | None = None


class SessionGroup(SessionizeModel):
    """Upstream envelope grouping sessions (e.g. by day)."""

    group_name: str | None = None
    sessions: tuple[Session | None, ...] | None = None


# ── Schedule ("GridSmart" view) ──────────────────────────────────────


class RoomSession(SessionizeModel):
    title: str | None = None
    speakers: tuple[SpeakerRef | None, ...] | None = None


class RoomSlot(SessionizeModel):
    name: str | None = None
    session: RoomSession | None = None


class TimeSlot(SessionizeModel):
    slot_start: str | None = None
    rooms: tuple[RoomSlot | None, ...] | None = None


class ScheduleDay(SessionizeModel):
    date: str | None = None
    time_slots: tuple[TimeSlot | None, ...] | None = None


# ── Response adapters ────────────────────────────────────────────────
# Each view returns a JSON array, or ``null`` when the event has no data.

SPEAKERS_ADAPTER = TypeAdapter(list[Speaker | None] | None)
SESSION_GROUPS_ADAPTER = TypeAdapter(list[SessionGroup | None] | None)
SCHEDULE_ADAPTER = TypeAdapter(list[ScheduleDay | None] | None)
