import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import List, Optional, Sequence, Tuple

from models.class_template import ClassTemplate
from models.coach import Coach
from models.zone import Zone
from rostering.errors import ValidationError
from rostering.timeutil import minutes_of_day, to_instant, weekday_code

logger = logging.getLogger(__name__)


@dataclass
class TemplateSelection:
    """A template picked for the day, with optional per-generation overrides."""

    template_id: int
    rotation_minutes: Optional[int] = None
    allowed_zone_ids: List[int] = field(default_factory=list)
    coach_ids: List[int] = field(default_factory=list)
    allow_overlap: Optional[bool] = None
    start_time_local: Optional[str] = None
    end_time_local: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "TemplateSelection":
        if not isinstance(data, dict) or data.get("template_id") is None:
            raise ValidationError("Each selection needs a template_id")

        rotation = data.get("rotation_minutes")
        if rotation is not None and (isinstance(rotation, bool) or not isinstance(rotation, int) or rotation <= 0):
            raise ValidationError("rotation_minutes must be a positive integer")

        allow_overlap = data.get("allow_overlap")
        if allow_overlap is not None and not isinstance(allow_overlap, bool):
            raise ValidationError("allow_overlap must be a boolean")

        for key in ("allowed_zone_ids", "coach_ids"):
            if data.get(key) is not None and not isinstance(data[key], list):
                raise ValidationError(f"{key} must be a list")

        for key in ("start_time_local", "end_time_local"):
            if data.get(key):
                minutes_of_day(data[key])

        try:
            return cls(
                template_id=int(data["template_id"]),
                rotation_minutes=rotation,
                allowed_zone_ids=[int(z) for z in (data.get("allowed_zone_ids") or [])],
                coach_ids=[int(c) for c in (data.get("coach_ids") or [])],
                allow_overlap=allow_overlap,
                start_time_local=data.get("start_time_local") or None,
                end_time_local=data.get("end_time_local") or None,
            )
        except (TypeError, ValueError):
            raise ValidationError("template_id, allowed_zone_ids and coach_ids must be integers")


@dataclass
class ResolvedSelection:
    """A selection merged with its template defaults; input to the allocator."""

    template_id: int
    template_name: str
    rotation_minutes: int
    allow_overlap: bool
    start_time_local: str
    end_time_local: str
    starts_at: datetime
    ends_at: datetime
    zone_ids: List[int]
    coach_ids: List[int]
    # "Name (reason)" for each screened-out coach when none of them qualified
    coach_issues: List[str] = field(default_factory=list)
    session_key: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def duration_minutes(self) -> int:
        return minutes_of_day(self.end_time_local) - minutes_of_day(self.start_time_local)


def _is_available(coach: Coach, day_code: str, start_local: str, end_local: str) -> bool:
    """A coach with no availability rows is always available; otherwise the
    session must sit entirely inside one window on that weekday."""
    if not coach.availability:
        return True
    start = minutes_of_day(start_local)
    end = minutes_of_day(end_local)
    return any(
        minutes_of_day(window.start_time_local) <= start and end <= minutes_of_day(window.end_time_local)
        for window in coach.availability
        if window.day_of_week == day_code
    )


def _is_accredited(coach: Coach, gymsport_id: Optional[int]) -> bool:
    if gymsport_id is None:
        return True
    return gymsport_id in coach.gymsport_ids


def screen_coaches(
    coaches: Sequence[Coach],
    template: ClassTemplate,
    day_code: str,
    start_local: str,
    end_local: str,
) -> Tuple[List[int], List[str]]:
    """
    Split candidate coaches into those who can take the session and a list
    of "Name (reason)" for those who cannot. When nobody qualifies the full
    candidate list is kept and the reasons are returned for reporting.
    """
    valid = []
    issues = []
    for coach in coaches:
        if not _is_accredited(coach, template.gymsport_id):
            sport = template.gymsport.name if template.gymsport else "this gymsport"
            issues.append(f"{coach.name} (not accredited for {sport})")
        elif not _is_available(coach, day_code, start_local, end_local):
            issues.append(f"{coach.name} (not available on {day_code})")
        else:
            valid.append(coach.id)

    if coaches and not valid:
        return [c.id for c in coaches], issues
    return valid, []


def _unique(ids: Sequence[int]) -> List[int]:
    seen = set()
    out = []
    for value in ids:
        if value not in seen:
            seen.add(value)
            out.append(value)
    return out


def resolve_selections(
    club_id: int,
    day: date,
    selections: Sequence[TemplateSelection],
    tz_name: str,
    min_rotation_minutes: int = 1,
) -> Tuple[List[ResolvedSelection], List[Zone]]:
    """
    Merge each selection with its template. Selections naming a template
    that is missing, inactive or belongs to another club are skipped. Coaches
    are limited to active club coaches and screened for gymsport accreditation
    and weekday availability. Returns the resolved selections in input order
    plus the club's active zones.
    """
    club_zones = Zone.active_for_club(club_id)
    if not club_zones:
        raise ValidationError("No zones configured")
    club_zone_ids = [z.id for z in club_zones]
    active_zone_ids = set(club_zone_ids)

    template_ids = _unique([s.template_id for s in selections])
    templates = {
        t.id: t
        for t in ClassTemplate.query.filter(
            ClassTemplate.club_id == club_id,
            ClassTemplate.is_active.is_(True),
            ClassTemplate.id.in_(template_ids),
        ).all()
    }

    candidate_coach_ids = _unique(
        [c for s in selections for c in s.coach_ids]
        + [c for t in templates.values() for c in t.default_coach_ids]
    )
    club_coaches = {}
    if candidate_coach_ids:
        club_coaches = {
            c.id: c
            for c in Coach.query.filter(
                Coach.club_id == club_id,
                Coach.is_active.is_(True),
                Coach.id.in_(candidate_coach_ids),
            ).all()
        }

    day_code = weekday_code(day)
    resolved = []
    for selection in selections:
        template = templates.get(selection.template_id)
        if template is None:
            logger.info("Skipping selection for unknown or inactive template %s (club %s)",
                        selection.template_id, club_id)
            continue
        if template.active_days and day_code not in template.active_days:
            logger.info("Template %s is not scheduled on %s; generating anyway", template.id, day_code)

        rotation = selection.rotation_minutes or template.default_rotation_minutes
        rotation = max(min_rotation_minutes, int(rotation))
        allow_overlap = template.allow_overlap if selection.allow_overlap is None else selection.allow_overlap
        start_local = selection.start_time_local or template.start_time_local
        end_local = selection.end_time_local or template.end_time_local

        candidate_zones = selection.allowed_zone_ids or template.allowed_zone_ids
        zone_ids = [z for z in _unique(candidate_zones) if z in active_zone_ids]
        if not zone_ids:
            zone_ids = list(club_zone_ids)

        requested = selection.coach_ids or template.default_coach_ids
        candidates = [club_coaches[c] for c in _unique(requested) if c in club_coaches]
        coach_ids, coach_issues = screen_coaches(candidates, template, day_code, start_local, end_local)
        if coach_issues:
            logger.info("Template %s has no valid coaches: %s", template.id, ", ".join(coach_issues))

        resolved.append(ResolvedSelection(
            template_id=template.id,
            template_name=template.name,
            rotation_minutes=rotation,
            allow_overlap=bool(allow_overlap),
            start_time_local=start_local,
            end_time_local=end_local,
            starts_at=to_instant(day, start_local, tz_name),
            ends_at=to_instant(day, end_local, tz_name),
            zone_ids=zone_ids,
            coach_ids=coach_ids,
            coach_issues=coach_issues,
        ))

    if not resolved:
        raise ValidationError("No matching templates")

    return resolved, club_zones
