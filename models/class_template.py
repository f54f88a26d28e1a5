from datetime import datetime
from models.db import db

class ClassTemplate(db.Model):
    __tablename__ = "class_templates"

    id = db.Column(db.Integer, primary_key=True)
    club_id = db.Column(db.Integer, db.ForeignKey("clubs.id"), nullable=False, index=True)

    name = db.Column(db.String(120), nullable=False)
    level = db.Column(db.String(60), nullable=True)
    length_minutes = db.Column(db.Integer, nullable=False, default=60)
    default_rotation_minutes = db.Column(db.Integer, nullable=False, default=30)
    allow_overlap = db.Column(db.Boolean, default=False, nullable=False)
    active_days = db.Column(db.JSON, nullable=False, default=list)  # ["MON", "WED", ...]
    start_time_local = db.Column(db.String(5), nullable=False)  # HH:MM
    end_time_local = db.Column(db.String(5), nullable=False)
    gymsport_id = db.Column(db.Integer, db.ForeignKey("gymsports.id"), nullable=True)  # coaches must be accredited
    notes = db.Column(db.Text, nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    gymsport = db.relationship("Gymsport")
    allowed_zones = db.relationship(
        "ClassTemplateZone",
        order_by="ClassTemplateZone.position",
        cascade="all, delete-orphan",
        back_populates="template",
    )
    default_coaches = db.relationship(
        "ClassTemplateCoach",
        cascade="all, delete-orphan",
        back_populates="template",
    )

    @property
    def allowed_zone_ids(self):
        return [link.zone_id for link in self.allowed_zones]

    @property
    def default_coach_ids(self):
        return [link.coach_id for link in self.default_coaches]


class ClassTemplateZone(db.Model):
    __tablename__ = "class_template_zones"

    template_id = db.Column(db.Integer, db.ForeignKey("class_templates.id"), primary_key=True)
    zone_id = db.Column(db.Integer, db.ForeignKey("zones.id"), primary_key=True)
    position = db.Column(db.Integer, nullable=False, default=0)  # rotation order

    template = db.relationship("ClassTemplate", back_populates="allowed_zones")


class ClassTemplateCoach(db.Model):
    __tablename__ = "class_template_coaches"

    template_id = db.Column(db.Integer, db.ForeignKey("class_templates.id"), primary_key=True)
    coach_id = db.Column(db.Integer, db.ForeignKey("coaches.id"), primary_key=True)

    template = db.relationship("ClassTemplate", back_populates="default_coaches")
