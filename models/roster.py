from datetime import datetime
from models.db import db

ROSTER_STATUSES = ("DRAFT", "PUBLISHED")

class Roster(db.Model):
    __tablename__ = "rosters"

    id = db.Column(db.Integer, primary_key=True)
    club_id = db.Column(db.Integer, db.ForeignKey("clubs.id"), nullable=False, index=True)

    scope = db.Column(db.String(20), nullable=False, default="DAY")
    start_date = db.Column(db.DateTime, nullable=False, index=True)  # UTC instant of local midnight
    end_date = db.Column(db.DateTime, nullable=False)

    status = db.Column(db.String(20), nullable=False, default="DRAFT")
    # status values: DRAFT, PUBLISHED

    generated_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    generated_by_id = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    sessions = db.relationship(
        "ClassSession",
        back_populates="roster",
        cascade="all, delete-orphan",
        order_by="ClassSession.id",
    )
    slots = db.relationship(
        "RosterSlot",
        back_populates="roster",
        cascade="all, delete-orphan",
        order_by="RosterSlot.starts_at",
    )
