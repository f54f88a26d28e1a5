import logging

from models import db
from models.class_session import ClassSession
from models.roster import Roster
from models.roster_slot import RosterSlot
from models.zone import Zone
from rostering.allocator import record_segment
from rostering.errors import NotFoundError
from rostering.segments import Segment

logger = logging.getLogger(__name__)


def recalculate_roster_conflicts(roster_id: int) -> int:
    """
    Recompute conflict flags for an existing roster after an out-of-band edit
    (coach reassignment, zone swap). Slots keep their zones: the schedule
    indexes are rebuilt by replaying every slot in start order and the same
    collision checks the generator uses are applied. Returns the number of
    conflicted slots.
    """
    roster = db.session.get(Roster, roster_id)
    if roster is None:
        raise NotFoundError(f"Roster {roster_id} not found")

    slots = (
        RosterSlot.query
        .filter_by(roster_id=roster.id)
        .order_by(RosterSlot.starts_at.asc(), RosterSlot.id.asc())
        .all()
    )
    sessions = {s.id: s for s in ClassSession.query.filter_by(roster_id=roster.id).all()}
    zone_ids = {slot.zone_id for slot in slots}
    zone_overlap = {}
    if zone_ids:
        zone_overlap = {z.id: z.allow_overlap for z in Zone.query.filter(Zone.id.in_(zone_ids)).all()}

    zone_schedule = {}
    coach_schedule = {}
    replayed = []
    for slot in slots:
        session = sessions.get(slot.session_id)
        coach_ids = session.coach_ids if session else []
        segment = Segment(starts_at=slot.starts_at, ends_at=slot.ends_at, zone_id=slot.zone_id)
        record_segment(
            segment,
            str(slot.session_id),
            coach_ids,
            slot.allow_overlap,
            zone_overlap,
            zone_schedule,
            coach_schedule,
        )
        replayed.append((slot, segment))

    session_flags = {session_id: False for session_id in sessions}
    flagged = 0
    for slot, segment in replayed:
        slot.conflict_flag = segment.conflict
        slot.conflict_type = segment.conflict_type
        if segment.conflict:
            flagged += 1
            session_flags[slot.session_id] = True

    for session_id, flag in session_flags.items():
        sessions[session_id].conflict_flag = flag

    db.session.commit()
    logger.info("Recalculated roster %s: %d of %d slots conflicted", roster.id, flagged, len(slots))
    return flagged
