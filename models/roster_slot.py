from datetime import datetime
from models.db import db

class RosterSlot(db.Model):
    __tablename__ = "roster_slots"

    id = db.Column(db.Integer, primary_key=True)

    club_id = db.Column(db.Integer, db.ForeignKey("clubs.id"), nullable=False, index=True)
    roster_id = db.Column(db.Integer, db.ForeignKey("rosters.id"), nullable=False, index=True)
    session_id = db.Column(db.Integer, db.ForeignKey("class_sessions.id"), nullable=False, index=True)
    zone_id = db.Column(db.Integer, db.ForeignKey("zones.id"), nullable=False, index=True)

    starts_at = db.Column(db.DateTime, nullable=False, index=True)
    ends_at = db.Column(db.DateTime, nullable=False)

    conflict_flag = db.Column(db.Boolean, default=False, nullable=False)
    conflict_type = db.Column(db.String(10), nullable=True)  # zone, coach, both
    allow_overlap = db.Column(db.Boolean, default=False, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    roster = db.relationship("Roster", back_populates="slots")
    session = db.relationship("ClassSession", back_populates="slots")
    zone = db.relationship("Zone")

    __table_args__ = (
        db.CheckConstraint("starts_at < ends_at", name="ck_roster_slots_range"),
    )
