from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from rostering.timeutil import add_minutes, minutes_between


@dataclass
class Segment:
    """One rotation of a session; becomes a RosterSlot row."""

    starts_at: datetime
    ends_at: datetime
    zone_id: Optional[int] = None
    zone_conflict: bool = False
    coach_conflict: bool = False

    @property
    def conflict(self) -> bool:
        return self.zone_conflict or self.coach_conflict

    @property
    def conflict_type(self) -> Optional[str]:
        if self.zone_conflict and self.coach_conflict:
            return "both"
        if self.zone_conflict:
            return "zone"
        if self.coach_conflict:
            return "coach"
        return None

    @property
    def minutes(self) -> int:
        return minutes_between(self.starts_at, self.ends_at)


def build_segments(starts_at: datetime, ends_at: datetime, rotation_minutes: int) -> List[Segment]:
    """
    Split [starts_at, ends_at) into rotation-length segments. The last one is
    clamped to ends_at and may be shorter. An empty or inverted range gives
    no segments.
    """
    rotation_minutes = max(1, int(rotation_minutes))
    segments = []
    cursor = starts_at
    while cursor < ends_at:
        step = min(rotation_minutes, max(1, minutes_between(cursor, ends_at)))
        nxt = add_minutes(cursor, step)
        if nxt > ends_at:
            nxt = ends_at
        segments.append(Segment(starts_at=cursor, ends_at=nxt))
        cursor = nxt
    return segments
