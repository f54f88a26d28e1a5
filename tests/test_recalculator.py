import pytest

from models import db
from models.class_session import ClassSession, SessionCoach
from models.roster_slot import RosterSlot
from rostering import NotFoundError, TemplateSelection, generate_daily_roster, recalculate_roster_conflicts

TZ = "Australia/Sydney"
DAY = "2026-07-06"


def _flags(roster_id):
    slots = RosterSlot.query.filter_by(roster_id=roster_id).order_by(RosterSlot.id).all()
    return [(s.id, s.conflict_flag, s.conflict_type) for s in slots]


class TestRecalculate:
    @pytest.fixture
    def roster(self, club, make_zone, make_coach, make_template):
        floor = make_zone("Floor")
        beam = make_zone("Beam")
        alex = make_coach("Alex")
        sam = make_coach("Sam")
        first = make_template(name="A", zones=[floor], coaches=[alex], rotation=60)
        second = make_template(name="B", zones=[beam], coaches=[sam], rotation=60)
        result = generate_daily_roster(
            club.id, DAY,
            [TemplateSelection(template_id=first.id), TemplateSelection(template_id=second.id)],
            1, TZ,
        )
        return result

    def test_missing_roster(self, app):
        with pytest.raises(NotFoundError):
            recalculate_roster_conflicts(4040)

    def test_clean_roster_stays_clean(self, roster):
        before = _flags(roster.roster_id)
        assert recalculate_roster_conflicts(roster.roster_id) == 0
        assert _flags(roster.roster_id) == before

    def test_agrees_with_generation(self, club, make_zone, make_coach, make_template):
        floor = make_zone("Floor")
        coach = make_coach("Alex")
        template = make_template(zones=[floor], coaches=[coach])
        selection = TemplateSelection(template_id=template.id)
        result = generate_daily_roster(club.id, DAY, [selection, selection], 1, TZ)

        before = _flags(result.roster_id)
        flagged = recalculate_roster_conflicts(result.roster_id)

        assert flagged == sum(1 for _, flag, _ in before if flag)
        assert _flags(result.roster_id) == before
        assert recalculate_roster_conflicts(result.roster_id) == flagged

    def test_coach_reassignment_creates_conflict(self, roster):
        first_id, second_id = roster.session_ids
        first = db.session.get(ClassSession, first_id)
        second = db.session.get(ClassSession, second_id)
        second.coaches = [SessionCoach(coach_id=first.coach_ids[0])]
        db.session.commit()

        flagged = recalculate_roster_conflicts(roster.roster_id)

        assert flagged == 2
        assert first.conflict_flag and second.conflict_flag
        assert {s.conflict_type for s in first.slots + second.slots} == {"coach"}

    def test_zone_swap_creates_and_clears_conflict(self, roster):
        first_id, second_id = roster.session_ids
        first = db.session.get(ClassSession, first_id)
        second = db.session.get(ClassSession, second_id)
        original_zone = second.slots[0].zone_id

        second.slots[0].zone_id = first.slots[0].zone_id
        db.session.commit()
        assert recalculate_roster_conflicts(roster.roster_id) == 2
        assert second.slots[0].conflict_type == "zone"

        second.slots[0].zone_id = original_zone
        db.session.commit()
        assert recalculate_roster_conflicts(roster.roster_id) == 0
        assert not first.conflict_flag and not second.conflict_flag

    def test_session_overlap_is_honoured(self, roster):
        first_id, second_id = roster.session_ids
        first = db.session.get(ClassSession, first_id)
        second = db.session.get(ClassSession, second_id)
        second.slots[0].zone_id = first.slots[0].zone_id
        second.slots[0].allow_overlap = True
        db.session.commit()

        assert recalculate_roster_conflicts(roster.roster_id) == 1
        assert first.slots[0].conflict_flag
        assert not second.slots[0].conflict_flag
