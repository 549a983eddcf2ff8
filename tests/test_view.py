"""Tests for merging, searching, and status derivation."""

import pytest

from walkathon.attendance import AttendanceTracker
from walkathon.participant import Participant, Provenance
from walkathon.view import Status, filter_participants, merge, status, summary


@pytest.fixture
def external():
    return [
        Participant(id="gs_1", first_name="Ramesh", last_name="Patel",
                    email="Ramesh.Patel@email.com", phone="(408) 555-0123"),
        Participant(id="gs_2", first_name="Priya", last_name="Sharma",
                    email="priya.sharma@email.com", phone="(408) 987-6543"),
    ]


@pytest.fixture
def app():
    return [
        Participant(id=42, first_name="Ramesh", last_name="Patel",
                    email="ramesh.patel@email.com", phone="(408) 555-0123",
                    source=Provenance.ON_SITE_REGISTRATION),
        Participant(id=43, first_name="Kumar", last_name="Krishnan",
                    source=Provenance.ON_SITE_REGISTRATION),
    ]


class TestMerge:
    def test_external_first_without_deduplication(self, external, app):
        merged = merge(external, app)

        assert [p.id for p in merged] == ["gs_1", "gs_2", 42, 43]
        assert [p.full_name for p in merged].count("Ramesh Patel") == 2


class TestFilter:
    @pytest.mark.parametrize(
        "query,expected",
        [
            ("", ["gs_1", "gs_2", 42, 43]),
            ("ramesh patel", ["gs_1", 42]),
            ("SHARMA", ["gs_2"]),
            ("h k", [43]),
            ("ramesh.patel@", ["gs_1", 42]),
            ("987-65", ["gs_2"]),
            ("nobody", []),
        ],
    )
    def test_filter(self, external, app, query, expected):
        matches = filter_participants(merge(external, app), query)
        assert [p.id for p in matches] == expected

    def test_missing_email_and_phone_do_not_match(self, app):
        assert filter_participants([app[1]], "@") == []


class TestStatus:
    def test_status_progression(self, store, app):
        tracker = AttendanceTracker(store)
        p = app[0]
        assert status(p, tracker) is Status.REGISTERED

        tracker.check_in(42)
        assert status(p, tracker) is Status.CHECKED_IN

        tracker.check_out(42)
        assert status(p, tracker) is Status.COMPLETED

    def test_summary(self, store, external, app):
        tracker = AttendanceTracker(store)
        tracker.check_in("gs_1")
        tracker.check_in(42)
        tracker.check_out(42)

        assert summary(external, app, tracker) == {
            "pre_registered": 2,
            "registered": 2,
            "checked_in": 2,
            "completed": 1,
        }
