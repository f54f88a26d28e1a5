"""Tests for splitting a session into rotations."""

from datetime import datetime, timezone

from rostering.segments import Segment, build_segments
from rostering.timeutil import add_minutes

START = datetime(2026, 7, 6, 6, 0, tzinfo=timezone.utc)


class TestBuildSegments:
    def test_even_split(self):
        segments = build_segments(START, add_minutes(START, 60), 30)
        assert [(s.starts_at, s.ends_at) for s in segments] == [
            (START, add_minutes(START, 30)),
            (add_minutes(START, 30), add_minutes(START, 60)),
        ]

    def test_last_segment_is_clamped(self):
        segments = build_segments(START, add_minutes(START, 50), 20)
        assert [s.minutes for s in segments] == [20, 20, 10]
        assert segments[-1].ends_at == add_minutes(START, 50)

    def test_segments_are_contiguous_and_cover_range(self):
        end = add_minutes(START, 95)
        segments = build_segments(START, end, 25)
        assert segments[0].starts_at == START
        assert segments[-1].ends_at == end
        for prev, nxt in zip(segments, segments[1:]):
            assert prev.ends_at == nxt.starts_at
        assert all(s.minutes >= 1 for s in segments)
        assert len(segments) == 4  # ceil(95 / 25)

    def test_rotation_longer_than_session(self):
        segments = build_segments(START, add_minutes(START, 45), 60)
        assert len(segments) == 1
        assert segments[0].minutes == 45

    def test_empty_or_inverted_range(self):
        assert build_segments(START, START, 30) == []
        assert build_segments(add_minutes(START, 60), START, 30) == []

    def test_non_positive_rotation_is_floored(self):
        assert len(build_segments(START, add_minutes(START, 3), 0)) == 3


class TestSegmentFlags:
    def test_conflict_type(self):
        seg = Segment(START, add_minutes(START, 30))
        assert not seg.conflict
        assert seg.conflict_type is None
        seg.zone_conflict = True
        assert seg.conflict_type == "zone"
        seg.coach_conflict = True
        assert seg.conflict_type == "both"
        seg.zone_conflict = False
        assert seg.conflict_type == "coach"
