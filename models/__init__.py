from .db import db
from .club import Club
from .zone import Zone
from .gymsport import Gymsport
from .coach import Coach, CoachAvailability, CoachGymsport
from .class_template import ClassTemplate, ClassTemplateZone, ClassTemplateCoach
from .roster import Roster, ROSTER_STATUSES
from .class_session import ClassSession, SessionAllowedZone, SessionCoach
from .roster_slot import RosterSlot
from .audit_log import AuditLog
