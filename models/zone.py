from datetime import datetime
from models.db import db

class Zone(db.Model):
    __tablename__ = "zones"

    id = db.Column(db.Integer, primary_key=True)
    club_id = db.Column(db.Integer, db.ForeignKey("clubs.id"), nullable=False, index=True)

    name = db.Column(db.String(120), nullable=False)  # e.g. Floor, Vault
    allow_overlap = db.Column(db.Boolean, default=False, nullable=False)
    is_first = db.Column(db.Boolean, default=False, nullable=False)  # listed ahead of other zones
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        db.UniqueConstraint("club_id", "name", name="uq_zones_club_name"),
    )

    @classmethod
    def active_for_club(cls, club_id):
        """Club zone listing order: priority zones first, then by name."""
        return (
            cls.query
            .filter_by(club_id=club_id, is_active=True)
            .order_by(cls.is_first.desc(), cls.name.asc())
            .all()
        )
