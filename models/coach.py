from datetime import datetime
from models.db import db

class Coach(db.Model):
    __tablename__ = "coaches"

    id = db.Column(db.Integer, primary_key=True)
    club_id = db.Column(db.Integer, db.ForeignKey("clubs.id"), nullable=False, index=True)

    name = db.Column(db.String(120), nullable=False)
    accreditation_number = db.Column(db.String(60), nullable=True)
    membership_number = db.Column(db.String(60), nullable=True)
    email = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(30), nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # no rows means available any time
    availability = db.relationship("CoachAvailability", cascade="all, delete-orphan", back_populates="coach")
    gymsports = db.relationship("CoachGymsport", cascade="all, delete-orphan", back_populates="coach")

    @property
    def gymsport_ids(self):
        return [link.gymsport_id for link in self.gymsports]


class CoachAvailability(db.Model):
    __tablename__ = "coach_availability"

    id = db.Column(db.Integer, primary_key=True)
    coach_id = db.Column(db.Integer, db.ForeignKey("coaches.id"), nullable=False, index=True)
    day_of_week = db.Column(db.String(3), nullable=False)  # MON..SUN
    start_time_local = db.Column(db.String(5), nullable=False)  # HH:MM
    end_time_local = db.Column(db.String(5), nullable=False)

    coach = db.relationship("Coach", back_populates="availability")


class CoachGymsport(db.Model):
    __tablename__ = "coach_gymsports"

    coach_id = db.Column(db.Integer, db.ForeignKey("coaches.id"), primary_key=True)
    gymsport_id = db.Column(db.Integer, db.ForeignKey("gymsports.id"), primary_key=True)

    coach = db.relationship("Coach", back_populates="gymsports")
    gymsport = db.relationship("Gymsport")
