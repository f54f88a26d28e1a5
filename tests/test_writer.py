from datetime import date

import pytest
from sqlalchemy.exc import IntegrityError

from models import db
from models.class_session import ClassSession, SessionAllowedZone, SessionCoach
from models.roster import Roster
from models.roster_slot import RosterSlot
from rostering.resolver import ResolvedSelection
from rostering.segments import Segment, build_segments
from rostering.timeutil import day_bounds, to_instant
from rostering.writer import RosterWriter

TZ = "Australia/Sydney"
DAY = date(2026, 7, 6)


def _plan(template, zone, coach, start="16:00", end="17:00"):
    return ResolvedSelection(
        template_id=template.id,
        template_name=template.name,
        rotation_minutes=30,
        allow_overlap=False,
        start_time_local=start,
        end_time_local=end,
        starts_at=to_instant(DAY, start, TZ),
        ends_at=to_instant(DAY, end, TZ),
        zone_ids=[zone.id],
        coach_ids=[coach.id],
    )


class TestRosterWriter:
    @pytest.fixture
    def writer(self, club):
        writer = RosterWriter(club.id, generated_by_id=3)
        writer.create_roster(*day_bounds(DAY, TZ))
        return writer

    def test_writes_session_with_links_and_slots(self, writer, make_zone, make_coach, make_template):
        floor = make_zone("Floor")
        coach = make_coach("Alex")
        plan = _plan(make_template(), floor, coach)
        segments = build_segments(plan.starts_at, plan.ends_at, plan.rotation_minutes)
        for segment in segments:
            segment.zone_id = floor.id

        session = writer.write_session(DAY, plan, segments)

        assert writer.slot_count == 2
        assert session.allowed_zone_ids == [floor.id]
        assert session.coach_ids == [coach.id]
        assert [s.zone_id for s in session.slots] == [floor.id, floor.id]
        assert session.generated_by_id == 3

    def test_failed_session_is_rolled_back_alone(self, writer, make_zone, make_coach, make_template):
        floor = make_zone("Floor")
        alex = make_coach("Alex")
        sam = make_coach("Sam")
        first_plan = _plan(make_template(name="A"), floor, alex)
        first_segments = build_segments(first_plan.starts_at, first_plan.ends_at, 30)
        for segment in first_segments:
            segment.zone_id = floor.id
        first = writer.write_session(DAY, first_plan, first_segments)
        first_id = first.id

        second_plan = _plan(make_template(name="B"), floor, sam, start="17:00", end="17:30")
        # zero-length slot violates the starts_at < ends_at check constraint
        broken = [Segment(starts_at=second_plan.starts_at, ends_at=second_plan.starts_at, zone_id=floor.id)]

        with pytest.raises(IntegrityError):
            writer.write_session(DAY, second_plan, broken)

        assert writer.slot_count == 2
        assert [s.id for s in ClassSession.query.all()] == [first_id]
        assert RosterSlot.query.count() == 2
        assert {s.session_id for s in RosterSlot.query.all()} == {first_id}
        assert [(c.session_id, c.coach_id) for c in SessionCoach.query.all()] == [(first_id, alex.id)]
        assert {z.session_id for z in SessionAllowedZone.query.all()} == {first_id}
        assert Roster.query.count() == 1
