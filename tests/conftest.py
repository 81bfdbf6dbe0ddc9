"""Shared test fixtures for the Sessionize agent test suite."""

from __future__ import annotations

import os
from unittest.mock import MagicMock

import pytest


def pytest_configure(config):
    """Set test environment variables BEFORE collection starts.

    This runs before any imports, so config.py reads these values (an empty
    SESSIONIZE_EVENT_ID means "no default event").  ``load_dotenv`` never
    overrides variables that are already set.
    """
    os.environ.setdefault("ANTHROPIC_API_KEY", "test-anthropic-key-123")
    os.environ["SESSIONIZE_EVENT_ID"] = ""
    os.environ["METRICS_ENABLED"] = "false"


@pytest.fixture
def mock_http_response():
    """Factory fixture for creating mock httpx responses."""

    def _make(data, status_code: int = 200):
        mock = MagicMock()
        mock.status_code = status_code
        mock.json.return_value = data
        mock.text = str(data)
        return mock

    return _make


@pytest.fixture
def source():
    """A stand-in for SessionizeClient with every view returning no data."""
    client = MagicMock()
    client.get_speakers.return_value = None
    client.get_sessions.return_value = None
    client.get_schedule.return_value = None
    return client


@pytest.fixture
def speakers_payload():
    """Speakers view as Sessionize serves it (camelCase JSON)."""
    return [
        {
            "id": "sp-1",
            "fullName": "Jane Smith",
            "bio": "Jane builds distributed systems.",
            "tagLine": "Principal Engineer",
            "profilePicture": "https://example.com/jane.png",
            "sessions": [{"id": 101, "name": "Talk A"}],
            "links": [
                {"title": "Twitter", "url": "https://twitter.com/jane", "linkType": "Twitter"},
            ],
        },
        {
            "id": "sp-2",
            "fullName": "John Doe",
            "bio": None,
            "tagLine": "",
            "sessions": [],
            "links": [],
        },
    ]


@pytest.fixture
def sessions_payload():
    """Sessions view: a list of groups, each holding sessions."""
    return [
        {
            "groupName": "Day 1",
            "sessions": [
                {
                    "id": "101",
                    "title": "Talk A",
                    "description": "Intro to Kubernetes operators",
                    "startsAt": "2026-05-01T09:00:00",
                    "endsAt": "2026-05-01T09:45:00",
                    "room": "Main Hall",
                    "speakers": [{"id": "sp-1", "name": "Jane Smith"}],
                    "categories": [
                        {
                            "id": 7,
                            "name": "Level",
                            "categoryItems": [{"id": 70, "name": "Beginner"}],
                        },
                    ],
                },
            ],
        },
        {
            "groupName": "Day 2",
            "sessions": [
                {"id": "102", "title": "Closing Keynote", "description": None},
            ],
        },
    ]


@pytest.fixture
def schedule_payload():
    """GridSmart view: days → time slots → rooms."""
    return [
        {
            "date": "2026-05-01T00:00:00",
            "timeSlots": [
                {
                    "slotStart": "09:00:00",
                    "rooms": [
                        {"id": 1, "name": "Main Hall", "session": {"title": "Talk A", "speakers": []}},
                        {"id": 2, "name": "Room 2", "session": None},
                    ],
                },
            ],
        },
    ]
