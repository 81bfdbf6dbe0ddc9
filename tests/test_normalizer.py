"""Tests for flattening and null-handling of Sessionize responses."""

from __future__ import annotations

from sessionize_agent.models import Session, SessionGroup, Speaker
from sessionize_agent.tools.normalizer import normalize_sessions, normalize_speakers


class TestNormalizeSpeakers:
    def test_none_becomes_empty(self):
        assert list(normalize_speakers(None)) == []

    def test_list_is_returned_unchanged(self):
        speakers = [Speaker(id="1", full_name="Jane"), Speaker(id="2")]
        assert normalize_speakers(speakers) is speakers


class TestNormalizeSessions:
    def test_none_becomes_empty(self):
        assert normalize_sessions(None) == []

    def test_empty_groups(self):
        assert normalize_sessions([]) == []

    def test_flattens_groups_in_order(self):
        groups = [
            SessionGroup(group_name="Day 1", sessions=(Session(id="a"), Session(id="b"))),
            SessionGroup(group_name="Day 2", sessions=(Session(id="c"),)),
        ]
        assert [s.id for s in normalize_sessions(groups)] == ["a", "b", "c"]

    def test_drops_null_groups_lists_and_sessions(self):
        groups = [
            None,
            SessionGroup(group_name="no sessions", sessions=None),
            SessionGroup(sessions=(None, Session(id="a"), None, Session(id="b"))),
            None,
            SessionGroup(sessions=(Session(id="c"), None)),
        ]
        assert [s.id for s in normalize_sessions(groups)] == ["a", "b", "c"]

    def test_does_not_sort(self):
        groups = [SessionGroup(sessions=(Session(id="z", title="Zeta"), Session(id="a", title="Alpha")))]
        assert [s.title for s in normalize_sessions(groups)] == ["Zeta", "Alpha"]
