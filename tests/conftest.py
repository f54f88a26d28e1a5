"""Shared fixtures: app with an in-memory database and small factories."""

import pytest

from app import create_app
from config import TestConfig
from models import db
from models.club import Club
from models.coach import Coach, CoachAvailability, CoachGymsport
from models.gymsport import Gymsport
from models.zone import Zone
from models.class_template import ClassTemplate, ClassTemplateZone, ClassTemplateCoach

TZ = "Australia/Sydney"


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def club(app):
    club = Club(name="Test Club", timezone=TZ)
    db.session.add(club)
    db.session.commit()
    return club


@pytest.fixture
def make_zone(club):
    def _make(name, allow_overlap=False, is_first=False, is_active=True, club_id=None):
        zone = Zone(
            club_id=club_id or club.id,
            name=name,
            allow_overlap=allow_overlap,
            is_first=is_first,
            is_active=is_active,
        )
        db.session.add(zone)
        db.session.commit()
        return zone
    return _make


@pytest.fixture
def make_gymsport(club):
    def _make(name):
        gymsport = Gymsport(club_id=club.id, name=name)
        db.session.add(gymsport)
        db.session.commit()
        return gymsport
    return _make


@pytest.fixture
def make_coach(club):
    def _make(name, club_id=None, is_active=True, availability=(), gymsports=()):
        coach = Coach(club_id=club_id or club.id, name=name, is_active=is_active)
        coach.availability = [
            CoachAvailability(day_of_week=day, start_time_local=start, end_time_local=end)
            for day, start, end in availability
        ]
        coach.gymsports = [CoachGymsport(gymsport_id=g.id) for g in gymsports]
        db.session.add(coach)
        db.session.commit()
        return coach
    return _make


@pytest.fixture
def make_template(club):
    def _make(name="Rec L1", start="16:00", end="17:00", rotation=30, zones=(), coaches=(),
              allow_overlap=False, club_id=None, is_active=True, gymsport=None):
        template = ClassTemplate(
            club_id=club_id or club.id,
            name=name,
            level="Level 1",
            length_minutes=60,
            default_rotation_minutes=rotation,
            allow_overlap=allow_overlap,
            active_days=["MON", "WED"],
            start_time_local=start,
            end_time_local=end,
            is_active=is_active,
            gymsport_id=gymsport.id if gymsport else None,
        )
        template.allowed_zones = [
            ClassTemplateZone(zone_id=z.id, position=i) for i, z in enumerate(zones)
        ]
        template.default_coaches = [ClassTemplateCoach(coach_id=c.id) for c in coaches]
        db.session.add(template)
        db.session.commit()
        return template
    return _make
