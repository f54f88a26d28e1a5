from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.club import Club
from models.coach import Coach
from models.zone import Zone
from models.roster import Roster, ROSTER_STATUSES
from models.roster_slot import RosterSlot
from models.class_session import ClassSession, SessionCoach
from rostering import (
    TemplateSelection,
    ValidationError,
    NotFoundError,
    generate_daily_roster,
    recalculate_roster_conflicts,
)
from rostering.timeutil import from_storage
from utils.audit import log_event

roster_bp = Blueprint("rosters", __name__, url_prefix="/rosters")


def _iso(dt):
    return from_storage(dt).isoformat() if dt else None


def _slot_json(slot):
    return {
        "id": slot.id,
        "session_id": slot.session_id,
        "zone_id": slot.zone_id,
        "zone_name": slot.zone.name if slot.zone else None,
        "starts_at": _iso(slot.starts_at),
        "ends_at": _iso(slot.ends_at),
        "conflict_flag": slot.conflict_flag,
        "conflict_type": slot.conflict_type,
        "allow_overlap": slot.allow_overlap,
    }


def _session_json(session):
    return {
        "id": session.id,
        "template_id": session.template_id,
        "template_name": session.template.name if session.template else None,
        "date": session.date.isoformat(),
        "start_time_local": session.start_time_local,
        "end_time_local": session.end_time_local,
        "rotation_minutes": session.rotation_minutes,
        "allow_overlap": session.allow_overlap,
        "assigned_zone_sequence": list(session.assigned_zone_sequence or []),
        "allowed_zone_ids": session.allowed_zone_ids,
        "coaches": [
            {"id": link.coach_id, "name": link.coach.name if link.coach else None}
            for link in session.coaches
        ],
        "status": session.status,
        "conflict_flag": session.conflict_flag,
    }


def _roster_summary(roster):
    return {
        "id": roster.id,
        "club_id": roster.club_id,
        "scope": roster.scope,
        "start_date": _iso(roster.start_date),
        "end_date": _iso(roster.end_date),
        "status": roster.status,
        "generated_at": _iso(roster.generated_at),
        "generated_by_id": roster.generated_by_id,
    }


# ---------- generate ----------
@roster_bp.post("/generate")
def generate_roster():
    data = request.get_json(silent=True) or {}
    club_id = data.get("club_id")
    date_str = data.get("date")
    generated_by_id = data.get("generated_by_id")
    raw_selections = data.get("templates") or []

    if not club_id or not date_str:
        return jsonify(error="club_id and date are required"), 400
    if not isinstance(raw_selections, list):
        return jsonify(error="templates must be a list"), 400

    club = db.session.get(Club, club_id)
    if not club:
        return jsonify(error="Club not found"), 404

    timezone = club.timezone or current_app.config.get("DEFAULT_CLUB_TIMEZONE")
    try:
        selections = [TemplateSelection.from_dict(item) for item in raw_selections]
        result = generate_daily_roster(club.id, date_str, selections, generated_by_id, timezone)
    except ValidationError as exc:
        return jsonify(error=str(exc)), 400

    log_event(
        "ROSTER_GENERATE",
        user_id=generated_by_id,
        club_id=club.id,
        entity="roster",
        entity_id=result.roster_id,
        metadata={"date": date_str, "slot_count": result.slot_count, "conflicts": len(result.conflicts)},
    )
    return jsonify(result.to_dict()), 201


# ---------- read ----------
@roster_bp.get("")
def list_rosters():
    club_id = request.args.get("club_id", type=int)
    status = request.args.get("status")
    if not club_id:
        return jsonify(error="club_id is required"), 400

    q = Roster.query.filter_by(club_id=club_id)
    if status:
        q = q.filter_by(status=status.strip().upper())

    rows = q.order_by(Roster.start_date.desc()).limit(200).all()
    return jsonify([_roster_summary(r) for r in rows]), 200


@roster_bp.get("/<int:roster_id>")
def get_roster(roster_id: int):
    roster = db.session.get(Roster, roster_id)
    if not roster:
        return jsonify(error="Roster not found"), 404

    out = _roster_summary(roster)
    out["sessions"] = [_session_json(s) for s in roster.sessions]
    out["slots"] = [_slot_json(s) for s in roster.slots]
    return jsonify(out), 200


# ---------- status: DRAFT -> PUBLISHED ----------
@roster_bp.patch("/<int:roster_id>/status")
def update_roster_status(roster_id: int):
    data = request.get_json(silent=True) or {}
    status = (data.get("status") or "").strip().upper()
    if status not in ROSTER_STATUSES:
        return jsonify(error="Invalid status. Must be DRAFT or PUBLISHED"), 400

    roster = db.session.get(Roster, roster_id)
    if not roster:
        return jsonify(error="Roster not found"), 404

    if roster.status == status:
        return jsonify(_roster_summary(roster)), 200
    if roster.status == "PUBLISHED":
        return jsonify(error="Published rosters cannot return to draft"), 409

    roster.status = status
    for session in roster.sessions:
        session.status = status
    db.session.commit()

    log_event("ROSTER_STATUS_UPDATE", club_id=roster.club_id, entity="roster", entity_id=roster.id,
              metadata={"status": status})
    return jsonify(_roster_summary(roster)), 200


# ---------- delete (cascades sessions and slots) ----------
@roster_bp.delete("/<int:roster_id>")
def delete_roster(roster_id: int):
    roster = db.session.get(Roster, roster_id)
    if not roster:
        return jsonify(error="Roster not found"), 404

    club_id = roster.club_id
    db.session.delete(roster)
    db.session.commit()

    log_event("ROSTER_DELETE", club_id=club_id, entity="roster", entity_id=roster_id)
    return jsonify(message="Roster deleted"), 200


# ---------- recalculate ----------
@roster_bp.post("/<int:roster_id>/recalculate")
def recalculate_roster(roster_id: int):
    try:
        flagged = recalculate_roster_conflicts(roster_id)
    except NotFoundError as exc:
        return jsonify(error=str(exc)), 404

    roster = db.session.get(Roster, roster_id)
    log_event("ROSTER_RECALCULATE", club_id=roster.club_id, entity="roster", entity_id=roster_id,
              metadata={"conflicted_slots": flagged})
    return jsonify(roster_id=roster_id, conflicted_slots=flagged), 200


# ---------- session edits (followed by recalculation) ----------
@roster_bp.patch("/sessions/<int:session_id>/coaches")
def update_session_coaches(session_id: int):
    data = request.get_json(silent=True) or {}
    coach_ids = data.get("coach_ids")
    if not isinstance(coach_ids, list):
        return jsonify(error="coach_ids must be a list"), 400

    session = db.session.get(ClassSession, session_id)
    if not session:
        return jsonify(error="Session not found"), 404

    try:
        coach_ids = list(dict.fromkeys(int(c) for c in coach_ids))
    except (TypeError, ValueError):
        return jsonify(error="coach_ids must be integers"), 400

    found = Coach.query.filter(
        Coach.club_id == session.club_id,
        Coach.is_active.is_(True),
        Coach.id.in_(coach_ids),
    ).count() if coach_ids else 0
    if found != len(coach_ids):
        return jsonify(error="One or more coaches not found"), 400

    session.coaches = [SessionCoach(coach_id=c) for c in coach_ids]
    try:
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        return jsonify(error="Failed to update coaches"), 500

    recalculate_roster_conflicts(session.roster_id)
    log_event("SESSION_COACHES_UPDATE", club_id=session.club_id, entity="class_session", entity_id=session.id,
              metadata={"coach_ids": coach_ids})
    return jsonify(_session_json(session)), 200


@roster_bp.patch("/sessions/<int:session_id>/zones")
def update_session_zones(session_id: int):
    data = request.get_json(silent=True) or {}
    changes = data.get("slots")
    if not isinstance(changes, list) or not changes:
        return jsonify(error="slots must be a non-empty list"), 400

    session = db.session.get(ClassSession, session_id)
    if not session:
        return jsonify(error="Session not found"), 404

    active_zone_ids = {z.id for z in Zone.active_for_club(session.club_id)}
    allowed_zone_ids = set(session.allowed_zone_ids)
    slots = {s.id: s for s in RosterSlot.query.filter_by(session_id=session.id).all()}
    updates = []

    for change in changes:
        slot_id = change.get("slot_id") if isinstance(change, dict) else None
        zone_id = change.get("zone_id") if isinstance(change, dict) else None
        if not isinstance(slot_id, int) or not isinstance(zone_id, int):
            return jsonify(error="slot_id and zone_id must be integers"), 400
        if slot_id not in slots:
            return jsonify(error=f"Slot {slot_id} does not belong to this session"), 400
        if zone_id not in active_zone_ids:
            return jsonify(error=f"Zone {zone_id} not found"), 400
        if zone_id not in allowed_zone_ids:
            return jsonify(error=f"Zone {zone_id} is not allowed for this session"), 400
        updates.append((slots[slot_id], zone_id))

    for slot, zone_id in updates:
        slot.zone_id = zone_id

    ordered = sorted(slots.values(), key=lambda s: s.starts_at)
    session.assigned_zone_sequence = [s.zone_id for s in ordered]
    db.session.commit()

    recalculate_roster_conflicts(session.roster_id)
    log_event("SESSION_ZONES_UPDATE", club_id=session.club_id, entity="class_session", entity_id=session.id,
              metadata={"slots": changes})
    return jsonify(_session_json(session)), 200
