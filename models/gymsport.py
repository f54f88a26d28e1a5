from datetime import datetime
from models.db import db

class Gymsport(db.Model):
    __tablename__ = "gymsports"

    id = db.Column(db.Integer, primary_key=True)
    club_id = db.Column(db.Integer, db.ForeignKey("clubs.id"), nullable=False, index=True)
    name = db.Column(db.String(120), nullable=False)  # e.g. Women's Artistic, Trampoline

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint("club_id", "name", name="uq_gymsports_club_name"),
    )
