"""Tests for check-in/check-out tracking."""

import httpx

from walkathon import storage
from walkathon.attendance import AttendanceTracker
from walkathon.gateway import PersistenceGateway
from walkathon.remote import SupabaseStore

from conftest import SUPABASE_URL


class RecordingGateway:
    """Stands in for PersistenceGateway and records mirror calls."""

    def __init__(self):
        self.calls = []

    def update_attendance_flag(self, participant_id, field, timestamp):
        self.calls.append((participant_id, field, timestamp))


class TestAttendanceTracker:
    def test_check_in_is_idempotent(self, store, clock):
        tracker = AttendanceTracker(store, clock=clock)
        tracker.check_in(42)
        tracker.check_in(42)

        assert tracker.checked_in == {42}
        assert tracker.is_checked_in(42)
        assert not tracker.is_checked_out(42)

    def test_check_out_without_check_in(self, store, clock):
        tracker = AttendanceTracker(store, clock=clock)
        tracker.check_out(42)

        assert tracker.is_checked_out(42)
        # the implied check-in keeps every completed participant counted as arrived
        assert tracker.is_checked_in(42)

    def test_state_survives_restart(self, store, clock):
        tracker = AttendanceTracker(store, clock=clock)
        tracker.check_in(42)
        tracker.check_in("gs_2")
        tracker.check_out("gs_2")

        reloaded = AttendanceTracker(store, clock=clock)
        assert reloaded.checked_in == {42, "gs_2"}
        assert reloaded.checked_out == {"gs_2"}
        assert store.get_json(storage.CHECKED_OUT_KEY) == ["gs_2"]

    def test_snapshot_is_a_frozen_copy(self, store, clock):
        tracker = AttendanceTracker(store, clock=clock)
        tracker.check_in(1)
        checked_in, checked_out = tracker.snapshot()
        tracker.check_in(2)

        assert checked_in == frozenset({1})
        assert checked_out == frozenset()

    def test_changes_are_mirrored_once(self, store, clock):
        gateway = RecordingGateway()
        tracker = AttendanceTracker(store, gateway=gateway, clock=clock)
        tracker.check_in(7)
        tracker.check_in(7)
        tracker.check_out(7)
        tracker.check_out(7)

        assert gateway.calls == [
            (7, "checked_in", "2025-08-16T07:30:00+00:00"),
            (7, "checked_out", "2025-08-16T07:30:00+00:00"),
        ]

    def test_mirror_failure_keeps_local_state(self, store, clock, mock_http):
        client = mock_http(lambda request: httpx.Response(500))
        remote = SupabaseStore(SUPABASE_URL, "anon-key", client=client)
        gateway = PersistenceGateway(store, remote)
        tracker = AttendanceTracker(store, gateway=gateway, clock=clock)
        tracker.check_in(9)
        gateway.flush()

        assert tracker.is_checked_in(9)
        assert AttendanceTracker(store).is_checked_in(9)
