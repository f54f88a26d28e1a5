from models import db
from models.club import Club
from models.zone import Zone
from models.coach import Coach, CoachAvailability, CoachGymsport
from models.gymsport import Gymsport
from models.class_template import ClassTemplate, ClassTemplateZone, ClassTemplateCoach
from rostering.timeutil import minutes_of_day

DEMO_CLUB_NAME = "Elite Gymnastics Club"
DEMO_TIMEZONE = "Australia/Sydney"

DEMO_ZONES = [
    # name, allow_overlap, is_first
    ("Floor", False, True),
    ("Beam", False, False),
    ("Bars", False, False),
    ("Vault", False, False),
    ("Trampoline", True, False),
]

DEMO_GYMSPORTS = ["Women's Artistic", "Trampoline"]

DEMO_COACHES = [
    # name, accredited gymsports, weekly availability (empty = any time)
    ("Alex Morgan", ["Women's Artistic"], []),
    ("Sam Lee", ["Women's Artistic", "Trampoline"], []),
    ("Jordan Patel", ["Trampoline"], [(day, "15:00", "20:00") for day in ("MON", "WED", "FRI")]),
]

DEMO_TEMPLATES = [
    # name, level, gymsport, start, end, rotation, zones, coaches
    ("Rec L1", "Level 1", "Women's Artistic", "16:00", "17:00", 30, ["Floor", "Beam"], ["Alex Morgan"]),
    ("Rec L2", "Level 2", "Women's Artistic", "16:00", "17:30", 30, ["Bars", "Vault", "Floor"], ["Sam Lee"]),
    ("Tumbling", "Open", "Trampoline", "17:30", "18:30", 20, ["Trampoline", "Floor"], ["Jordan Patel"]),
]

def seed_demo_club():
    """Create the demo club with zones, coaches and templates (idempotent)."""
    club = Club.query.filter_by(name=DEMO_CLUB_NAME).first()
    if club:
        return club

    club = Club(name=DEMO_CLUB_NAME, timezone=DEMO_TIMEZONE)
    db.session.add(club)
    db.session.flush()

    zones = {}
    for name, allow_overlap, is_first in DEMO_ZONES:
        zones[name] = Zone(club_id=club.id, name=name, allow_overlap=allow_overlap, is_first=is_first)
        db.session.add(zones[name])

    gymsports = {}
    for name in DEMO_GYMSPORTS:
        gymsports[name] = Gymsport(club_id=club.id, name=name)
        db.session.add(gymsports[name])
    db.session.flush()

    coaches = {}
    for name, sports, windows in DEMO_COACHES:
        coach = Coach(club_id=club.id, name=name)
        coach.gymsports = [CoachGymsport(gymsport_id=gymsports[s].id) for s in sports]
        coach.availability = [
            CoachAvailability(day_of_week=day, start_time_local=start, end_time_local=end)
            for day, start, end in windows
        ]
        coaches[name] = coach
        db.session.add(coach)
    db.session.flush()

    for name, level, sport, start, end, rotation, zone_names, coach_names in DEMO_TEMPLATES:
        template = ClassTemplate(
            club_id=club.id,
            name=name,
            level=level,
            gymsport_id=gymsports[sport].id,
            start_time_local=start,
            end_time_local=end,
            length_minutes=minutes_of_day(end) - minutes_of_day(start),
            default_rotation_minutes=rotation,
            active_days=["MON", "WED", "FRI"],
        )
        template.allowed_zones = [
            ClassTemplateZone(zone_id=zones[z].id, position=i) for i, z in enumerate(zone_names)
        ]
        template.default_coaches = [ClassTemplateCoach(coach_id=coaches[c].id) for c in coach_names]
        db.session.add(template)

    db.session.commit()
    return club
