from datetime import datetime
from models.db import db

class Club(db.Model):
    __tablename__ = "clubs"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    timezone = db.Column(db.String(64), nullable=True)  # IANA name, e.g. Australia/Sydney

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
