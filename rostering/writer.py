import logging
from datetime import date, datetime
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.class_session import ClassSession, SessionAllowedZone, SessionCoach
from models.roster import Roster
from models.roster_slot import RosterSlot
from rostering.resolver import ResolvedSelection
from rostering.segments import Segment
from rostering.timeutil import to_storage

logger = logging.getLogger(__name__)


class RosterWriter:
    """
    Persists one generation run. The roster header is committed first, then
    each session is committed together with its zone/coach links and slots,
    so a failure never leaves a session with partial slot coverage. Sessions
    already written stay written.
    """

    def __init__(self, club_id: int, generated_by_id):
        self.club_id = club_id
        self.generated_by_id = generated_by_id
        self.roster = None
        self.slot_count = 0

    def create_roster(self, day_start: datetime, day_end: datetime) -> Roster:
        roster = Roster(
            club_id=self.club_id,
            scope="DAY",
            start_date=to_storage(day_start),
            end_date=to_storage(day_end),
            status="DRAFT",
            generated_at=datetime.utcnow(),
            generated_by_id=self.generated_by_id,
        )
        db.session.add(roster)
        db.session.commit()
        self.roster = roster
        return roster

    def write_session(self, day: date, plan: ResolvedSelection, segments: Sequence[Segment]) -> ClassSession:
        session = ClassSession(
            club_id=self.club_id,
            roster_id=self.roster.id,
            template_id=plan.template_id,
            date=day,
            start_time_local=plan.start_time_local,
            end_time_local=plan.end_time_local,
            starts_at=to_storage(plan.starts_at),
            ends_at=to_storage(plan.ends_at),
            rotation_minutes=plan.rotation_minutes,
            allow_overlap=plan.allow_overlap,
            assigned_zone_sequence=[s.zone_id for s in segments],
            status=self.roster.status,
            conflict_flag=any(s.conflict for s in segments),
            generated_by_id=self.generated_by_id,
        )
        session.allowed_zones = [
            SessionAllowedZone(zone_id=zone_id, position=position)
            for position, zone_id in enumerate(plan.zone_ids)
        ]
        session.coaches = [SessionCoach(coach_id=coach_id) for coach_id in plan.coach_ids]
        session.slots = [
            RosterSlot(
                club_id=self.club_id,
                roster_id=self.roster.id,
                zone_id=segment.zone_id,
                starts_at=to_storage(segment.starts_at),
                ends_at=to_storage(segment.ends_at),
                conflict_flag=segment.conflict,
                conflict_type=segment.conflict_type,
                allow_overlap=plan.allow_overlap,
            )
            for segment in segments
        ]

        db.session.add(session)
        try:
            db.session.commit()
        except SQLAlchemyError:
            db.session.rollback()
            logger.exception("Failed to write session for template %s on roster %s", plan.template_id, self.roster.id)
            raise

        self.slot_count += len(segments)
        return session
