"""
Daily roster generation and conflict detection.
"""

from .errors import SchedulerError, ValidationError, NotFoundError
from .resolver import TemplateSelection
from .generator import generate_daily_roster, GenerationResult, ConflictSummary
from .recalculator import recalculate_roster_conflicts

__all__ = [
    "SchedulerError",
    "ValidationError",
    "NotFoundError",
    "TemplateSelection",
    "generate_daily_roster",
    "GenerationResult",
    "ConflictSummary",
    "recalculate_roster_conflicts",
]
