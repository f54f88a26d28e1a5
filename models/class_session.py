from datetime import datetime
from models.db import db

class ClassSession(db.Model):
    __tablename__ = "class_sessions"

    id = db.Column(db.Integer, primary_key=True)
    club_id = db.Column(db.Integer, db.ForeignKey("clubs.id"), nullable=False, index=True)
    roster_id = db.Column(db.Integer, db.ForeignKey("rosters.id"), nullable=False, index=True)
    template_id = db.Column(db.Integer, db.ForeignKey("class_templates.id"), nullable=True)

    date = db.Column(db.Date, nullable=False)  # club-local calendar day
    start_time_local = db.Column(db.String(5), nullable=False)
    end_time_local = db.Column(db.String(5), nullable=False)
    starts_at = db.Column(db.DateTime, nullable=False)
    ends_at = db.Column(db.DateTime, nullable=False)

    rotation_minutes = db.Column(db.Integer, nullable=False)
    allow_overlap = db.Column(db.Boolean, default=False, nullable=False)
    # zone ids actually used, one per slot, in slot order
    assigned_zone_sequence = db.Column(db.JSON, nullable=False, default=list)

    status = db.Column(db.String(20), nullable=False, default="DRAFT")
    conflict_flag = db.Column(db.Boolean, default=False, nullable=False)

    generated_by_id = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    roster = db.relationship("Roster", back_populates="sessions")
    template = db.relationship("ClassTemplate")
    slots = db.relationship(
        "RosterSlot",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="RosterSlot.starts_at",
    )
    allowed_zones = db.relationship(
        "SessionAllowedZone",
        cascade="all, delete-orphan",
        order_by="SessionAllowedZone.position",
    )
    coaches = db.relationship("SessionCoach", cascade="all, delete-orphan")

    @property
    def coach_ids(self):
        return [link.coach_id for link in self.coaches]

    @property
    def allowed_zone_ids(self):
        return [link.zone_id for link in self.allowed_zones]


# Snapshots of the resolved zone/coach sets at generation time, so later
# template edits do not rewrite history.
class SessionAllowedZone(db.Model):
    __tablename__ = "session_allowed_zones"

    session_id = db.Column(db.Integer, db.ForeignKey("class_sessions.id"), primary_key=True)
    zone_id = db.Column(db.Integer, db.ForeignKey("zones.id"), primary_key=True)
    position = db.Column(db.Integer, nullable=False, default=0)


class SessionCoach(db.Model):
    __tablename__ = "session_coaches"

    session_id = db.Column(db.Integer, db.ForeignKey("class_sessions.id"), primary_key=True)
    coach_id = db.Column(db.Integer, db.ForeignKey("coaches.id"), primary_key=True)

    coach = db.relationship("Coach")
