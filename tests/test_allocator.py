"""Tests for greedy zone selection and zone/coach collision flagging."""

from datetime import datetime, timezone

import pytest

from rostering.allocator import allocate_session, choose_zone
from rostering.segments import Segment, build_segments
from rostering.timeutil import add_minutes

T0 = datetime(2026, 7, 6, 6, 0, tzinfo=timezone.utc)
FLOOR, BEAM, BARS, TRAMP = 1, 2, 3, 4


def _segments(minutes=60, rotation=30, offset=0):
    start = add_minutes(T0, offset)
    return build_segments(start, add_minutes(start, minutes), rotation)


class TestZoneSelection:
    @pytest.fixture
    def schedules(self):
        return {}, {}

    def test_single_session_rotates_through_zones(self, schedules):
        zone_schedule, coach_schedule = schedules
        segs = _segments()
        sequence = allocate_session("s1", segs, [FLOOR, BEAM], [], False, zone_schedule, coach_schedule)
        assert sequence == [FLOOR, BEAM]
        assert not any(s.conflict for s in segs)

    def test_zone_order_is_not_resorted(self, schedules):
        zone_schedule, coach_schedule = schedules
        sequence = allocate_session("s1", _segments(), [BEAM, FLOOR], [], False, zone_schedule, coach_schedule)
        assert sequence == [BEAM, FLOOR]

    def test_later_session_takes_free_zone(self, schedules):
        zone_schedule, coach_schedule = schedules
        allocate_session("s1", _segments(rotation=60), [FLOOR, BEAM], [], False, zone_schedule, coach_schedule)
        segs = _segments(rotation=60)
        assert allocate_session("s2", segs, [FLOOR, BEAM], [], False, zone_schedule, coach_schedule) == [BEAM]
        assert not segs[0].conflict

    def test_no_free_zone_falls_back_and_flags_both(self, schedules):
        zone_schedule, coach_schedule = schedules
        first = _segments()
        second = _segments()
        allocate_session("s1", first, [FLOOR], [], False, zone_schedule, coach_schedule)
        allocate_session("s2", second, [FLOOR], [], False, zone_schedule, coach_schedule)
        assert [s.zone_id for s in second] == [FLOOR, FLOOR]
        assert all(s.zone_conflict for s in first + second)
        assert all(s.conflict_type == "zone" for s in first + second)

    def test_touching_sessions_do_not_conflict(self, schedules):
        zone_schedule, coach_schedule = schedules
        first = _segments()
        second = _segments(offset=60)
        allocate_session("s1", first, [FLOOR], [], False, zone_schedule, coach_schedule)
        allocate_session("s2", second, [FLOOR], [], False, zone_schedule, coach_schedule)
        assert not any(s.conflict for s in first + second)

    def test_zone_level_overlap_is_exempt(self, schedules):
        zone_schedule, coach_schedule = schedules
        first = _segments(rotation=60)
        second = _segments(rotation=60)
        overlap = {TRAMP: True}
        allocate_session("s1", first, [TRAMP], [], False, zone_schedule, coach_schedule, zone_overlap=overlap)
        allocate_session("s2", second, [TRAMP], [], False, zone_schedule, coach_schedule, zone_overlap=overlap)
        assert not any(s.conflict for s in first + second)

    def test_prefers_overlap_permitted_zone_over_conflict(self, schedules):
        zone_schedule, coach_schedule = schedules
        overlap = {TRAMP: True}
        allocate_session("s1", _segments(rotation=60), [FLOOR], [], False, zone_schedule, coach_schedule)
        allocate_session("s2", _segments(rotation=60), [TRAMP], [], False, zone_schedule, coach_schedule,
                         zone_overlap=overlap)
        segs = _segments(rotation=60)
        allocate_session("s3", segs, [FLOOR, TRAMP], [], False, zone_schedule, coach_schedule, zone_overlap=overlap)
        assert segs[0].zone_id == TRAMP
        assert not segs[0].conflict

    def test_session_overlap_takes_first_zone_unflagged(self, schedules):
        zone_schedule, coach_schedule = schedules
        first = _segments(rotation=60)
        allocate_session("s1", first, [FLOOR], [], False, zone_schedule, coach_schedule)
        second = _segments(rotation=60)
        allocate_session("s2", second, [FLOOR, BEAM], [], True, zone_schedule, coach_schedule)
        # a free zone still wins when there is one
        assert second[0].zone_id == BEAM

        third = _segments(rotation=60)
        allocate_session("s3", third, [FLOOR, BEAM], [], True, zone_schedule, coach_schedule)
        assert third[0].zone_id == FLOOR
        assert not third[0].zone_conflict
        # the session that did not permit sharing is flagged
        assert first[0].zone_conflict

    def test_choose_zone_wraps_from_rotation_index(self):
        seg = Segment(T0, add_minutes(T0, 30))
        assert choose_zone(seg, "s1", [FLOOR, BEAM, BARS], False, {}, {}, rotation_index=2) == 2
        busy = {BARS: []}
        assert choose_zone(seg, "s1", [FLOOR, BEAM, BARS], False, {}, busy, rotation_index=5) == 2

    def test_empty_zone_list_uses_fallback_zone_flagged(self, schedules):
        zone_schedule, coach_schedule = schedules
        segs = _segments()
        sequence = allocate_session("s1", segs, [], [], False, zone_schedule, coach_schedule, fallback_zone_id=FLOOR)
        assert sequence == [FLOOR, FLOOR]
        assert all(s.zone_conflict for s in segs)

    def test_empty_zone_list_without_fallback(self, schedules):
        zone_schedule, coach_schedule = schedules
        with pytest.raises(ValueError):
            allocate_session("s1", _segments(), [], [], False, zone_schedule, coach_schedule)


class TestCoachConflicts:
    def test_shared_coach_flags_both_even_in_overlap_zones(self):
        zone_schedule, coach_schedule = {}, {}
        overlap = {TRAMP: True, BARS: True}
        first = _segments(rotation=60)
        second = _segments(rotation=60)
        allocate_session("s1", first, [TRAMP], [7], True, zone_schedule, coach_schedule, zone_overlap=overlap)
        allocate_session("s2", second, [BARS], [7], True, zone_schedule, coach_schedule, zone_overlap=overlap)
        assert first[0].coach_conflict and second[0].coach_conflict
        assert not first[0].zone_conflict and not second[0].zone_conflict
        assert first[0].conflict_type == "coach"

    def test_disjoint_coaches_do_not_conflict(self):
        zone_schedule, coach_schedule = {}, {}
        first = _segments(rotation=60)
        second = _segments(rotation=60)
        allocate_session("s1", first, [FLOOR], [7], False, zone_schedule, coach_schedule)
        allocate_session("s2", second, [BEAM], [8], False, zone_schedule, coach_schedule)
        assert not any(s.conflict for s in first + second)

    def test_own_segments_never_collide(self):
        zone_schedule, coach_schedule = {}, {}
        segs = _segments(minutes=90, rotation=30)
        allocate_session("s1", segs, [FLOOR], [7, 8], False, zone_schedule, coach_schedule)
        assert not any(s.conflict for s in segs)
        assert len(coach_schedule[7]) == 3

    def test_conflicting_bookings_are_still_recorded(self):
        zone_schedule, coach_schedule = {}, {}
        for key in ("s1", "s2", "s3"):
            allocate_session(key, _segments(rotation=60), [FLOOR], [7], False, zone_schedule, coach_schedule)
        assert len(zone_schedule[FLOOR]) == 3
        assert len(coach_schedule[7]) == 3
        assert all(e.segment.conflict_type == "both" for e in zone_schedule[FLOOR])


class TestDeterminism:
    def test_same_input_same_output(self):
        def run():
            zone_schedule, coach_schedule = {}, {}
            out = []
            for key, zones, coaches in (("a", [FLOOR, BEAM], [1]), ("b", [BEAM, FLOOR], [2]), ("c", [FLOOR], [1])):
                segs = _segments(minutes=90, rotation=30)
                allocate_session(key, segs, zones, coaches, False, zone_schedule, coach_schedule)
                out.append([(s.zone_id, s.conflict_type) for s in segs])
            return out

        assert run() == run()
