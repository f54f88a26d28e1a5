"""
Greedy zone/coach allocation across a generation batch.

Two schedule indexes are shared by every session of a batch and mutated as
segments are placed, so later sessions see the zone and coach usage of
earlier ones:

    zone_schedule:  zone_id  -> [ScheduleEntry, ...]
    coach_schedule: coach_id -> [ScheduleEntry, ...]

Bookings are recorded even when they conflict, so conflicts compound.
A collision flags both sides: the segment being placed and every earlier
segment it collides with.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from rostering.segments import Segment
from rostering.timeutil import overlaps


@dataclass
class ScheduleEntry:
    starts_at: datetime
    ends_at: datetime
    session_key: str
    allow_overlap: bool
    segment: Segment


Schedule = Dict[int, List[ScheduleEntry]]


def _collisions(entries: Iterable[ScheduleEntry], segment: Segment, session_key: str) -> List[ScheduleEntry]:
    return [
        e for e in entries
        if e.session_key != session_key and overlaps(segment.starts_at, segment.ends_at, e.starts_at, e.ends_at)
    ]


def choose_zone(
    segment: Segment,
    session_key: str,
    zone_ids: Sequence[int],
    allow_overlap: bool,
    zone_overlap: Mapping[int, bool],
    zone_schedule: Schedule,
    rotation_index: int = 0,
) -> int:
    """
    Returns an index into zone_ids. Zones are walked in their given order,
    starting at rotation_index and wrapping: the first collision-free zone
    wins, then the first zone where overlap is permitted (session flag or
    zone flag), then the zone at rotation_index itself. zone_ids is never
    re-sorted.
    """
    count = len(zone_ids)
    permitted = None
    for step in range(count):
        index = (rotation_index + step) % count
        zone_id = zone_ids[index]
        if not _collisions(zone_schedule.get(zone_id, []), segment, session_key):
            return index
        if permitted is None and (allow_overlap or zone_overlap.get(zone_id, False)):
            permitted = index

    if permitted is not None:
        return permitted
    return rotation_index % count


def record_segment(
    segment: Segment,
    session_key: str,
    coach_ids: Sequence[int],
    allow_overlap: bool,
    zone_overlap: Mapping[int, bool],
    zone_schedule: Schedule,
    coach_schedule: Schedule,
) -> None:
    """
    Check segment.zone_id and the session coaches against both indexes, flag
    every party to a collision, then book the segment.
    """
    zone_id = segment.zone_id
    entry = ScheduleEntry(segment.starts_at, segment.ends_at, session_key, allow_overlap, segment)

    zone_exempt = zone_overlap.get(zone_id, False)
    for other in _collisions(zone_schedule.get(zone_id, []), segment, session_key):
        if not (zone_exempt or allow_overlap):
            segment.zone_conflict = True
        if not (zone_exempt or other.allow_overlap):
            other.segment.zone_conflict = True

    # coach double-booking is never overlap-exempt
    for coach_id in coach_ids:
        for other in _collisions(coach_schedule.get(coach_id, []), segment, session_key):
            segment.coach_conflict = True
            other.segment.coach_conflict = True

    zone_schedule.setdefault(zone_id, []).append(entry)
    for coach_id in coach_ids:
        coach_schedule.setdefault(coach_id, []).append(entry)


def allocate_session(
    session_key: str,
    segments: Sequence[Segment],
    zone_ids: Sequence[int],
    coach_ids: Sequence[int],
    allow_overlap: bool,
    zone_schedule: Schedule,
    coach_schedule: Schedule,
    zone_overlap: Optional[Mapping[int, bool]] = None,
    fallback_zone_id: Optional[int] = None,
) -> List[int]:
    """
    Assign a zone to each segment in order; returns the zone sequence. Each
    rotation moves on to the zone after the one last used, so a session
    cycles through its allowed zones.
    """
    zone_overlap = zone_overlap or {}
    sequence = []
    rotation = 0
    for segment in segments:
        if zone_ids:
            index = choose_zone(segment, session_key, zone_ids, allow_overlap, zone_overlap, zone_schedule, rotation)
            segment.zone_id = zone_ids[index]
            rotation = (index + 1) % len(zone_ids)
        else:
            if fallback_zone_id is None:
                raise ValueError("no zones to allocate from")
            segment.zone_id = fallback_zone_id
            segment.zone_conflict = True

        record_segment(segment, session_key, coach_ids, allow_overlap, zone_overlap, zone_schedule, coach_schedule)
        sequence.append(segment.zone_id)
    return sequence
