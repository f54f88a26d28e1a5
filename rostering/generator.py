import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from flask import current_app

from rostering.allocator import allocate_session
from rostering.errors import ValidationError
from rostering.resolver import TemplateSelection, resolve_selections
from rostering.segments import build_segments
from rostering.timeutil import day_bounds, get_zone, parse_date
from rostering.writer import RosterWriter

logger = logging.getLogger(__name__)

INVALID_TIME_RANGE = "Invalid time range"
ROTATION_CONFLICT = "Conflicts detected in one or more rotations"
NO_VALID_COACHES = "No valid coaches available"


@dataclass
class ConflictSummary:
    session_id: Optional[int]
    reason: str
    template_id: Optional[int] = None

    def to_dict(self):
        return {"session_id": self.session_id, "template_id": self.template_id, "reason": self.reason}


@dataclass
class GenerationResult:
    roster_id: int
    session_ids: List[int] = field(default_factory=list)
    slot_count: int = 0
    conflicts: List[ConflictSummary] = field(default_factory=list)

    def to_dict(self):
        return {
            "roster_id": self.roster_id,
            "session_ids": list(self.session_ids),
            "slot_count": self.slot_count,
            "conflicts": [c.to_dict() for c in self.conflicts],
        }


def generate_daily_roster(
    club_id: int,
    date: str,
    selections: Sequence[TemplateSelection],
    generated_by_id,
    timezone: str,
) -> GenerationResult:
    """
    Build a DRAFT roster for one club-local day from a list of template
    selections.

    Call-level problems (bad date, no selections, no active zones, no
    resolvable template, unknown timezone) raise ValidationError before
    anything is written. A selection whose end is not after its start is
    reported in the result's conflicts and skipped; the rest of the batch
    still goes through.

    Selections are processed strictly in the order given: the zone and
    coach indexes are shared across the batch, so later selections see
    bookings made by earlier ones.
    """
    day = parse_date(date)
    if not selections:
        raise ValidationError("At least one class template selection is required")
    get_zone(timezone)

    min_rotation = current_app.config.get("MIN_ROTATION_MINUTES", 1)
    plans, club_zones = resolve_selections(club_id, day, selections, timezone, min_rotation)
    zone_overlap = {z.id: z.allow_overlap for z in club_zones}

    logger.info("Generating roster for club %s on %s (%d selections, %d resolved)",
                club_id, date, len(selections), len(plans))

    zone_schedule = {}
    coach_schedule = {}
    conflicts = []
    allocated = []

    for plan in plans:
        segments = []
        if plan.duration_minutes > 0:
            segments = build_segments(plan.starts_at, plan.ends_at, plan.rotation_minutes)
        if not segments:
            logger.warning("Template %s has an invalid time range %s-%s",
                           plan.template_id, plan.start_time_local, plan.end_time_local)
            conflicts.append(ConflictSummary(session_id=None, reason=INVALID_TIME_RANGE, template_id=plan.template_id))
            continue

        allocate_session(
            plan.session_key,
            segments,
            plan.zone_ids,
            plan.coach_ids,
            plan.allow_overlap,
            zone_schedule,
            coach_schedule,
            zone_overlap=zone_overlap,
            fallback_zone_id=club_zones[0].id,
        )
        allocated.append((plan, segments))

    # flags are final only once the whole batch is placed: a later session can
    # flag segments of an earlier one
    day_start, day_end = day_bounds(day, timezone)
    writer = RosterWriter(club_id, generated_by_id)
    roster = writer.create_roster(day_start, day_end)
    result = GenerationResult(roster_id=roster.id)

    for plan, segments in allocated:
        session = writer.write_session(day, plan, segments)
        result.session_ids.append(session.id)
        if plan.coach_issues:
            reason = f"{NO_VALID_COACHES}: {', '.join(plan.coach_issues)}"
            result.conflicts.append(ConflictSummary(session_id=session.id, reason=reason, template_id=plan.template_id))
        if session.conflict_flag:
            result.conflicts.append(ConflictSummary(session_id=session.id, reason=ROTATION_CONFLICT, template_id=plan.template_id))

    result.slot_count = writer.slot_count
    result.conflicts = conflicts + result.conflicts

    logger.info("Roster %s generated: %d sessions, %d slots, %d conflicts",
                roster.id, len(result.session_ids), result.slot_count, len(result.conflicts))
    return result
