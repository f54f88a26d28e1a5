import logging

import click
from flask import Flask, current_app

from config import Config
from routes import health_bp, roster_bp, audit_bp

from models import db
from flask_migrate import Migrate
from utils.logging_config import setup_logging


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)

    setup_logging(getattr(logging, app.config.get("LOG_LEVEL", "INFO"), logging.INFO))

    # Register routes
    app.register_blueprint(health_bp)
    app.register_blueprint(roster_bp)
    app.register_blueprint(audit_bp)

    # Database init
    db.init_app(app)

    # Migrations
    Migrate(app, db)

    @app.after_request
    def add_security_headers(resp):
        resp.headers["X-Content-Type-Options"] = "nosniff"
        resp.headers["X-Frame-Options"] = "DENY"
        resp.headers["Referrer-Policy"] = "no-referrer"
        resp.headers["Content-Security-Policy"] = "default-src 'none'; frame-ancestors 'none';"
        return resp

    register_cli(app)

    return app

#-------------------------
from models.club import Club
from rostering import (
    TemplateSelection,
    SchedulerError,
    generate_daily_roster,
    recalculate_roster_conflicts,
)
from utils.audit import log_event
from utils.seed import seed_demo_club

def register_cli(app):
    @app.cli.command("generate-roster")
    @click.argument("club_id", type=int)
    @click.argument("date")
    @click.option("--template", "template_ids", type=int, multiple=True, required=True,
                  help="Class template id; repeat for several, order is kept.")
    @click.option("--generated-by", "generated_by_id", type=int, default=None)
    def generate_roster(club_id, date, template_ids, generated_by_id):
        """Generate a DRAFT roster for CLUB_ID on DATE (YYYY-MM-DD)."""
        club = db.session.get(Club, club_id)
        if not club:
            raise click.ClickException("Club not found")

        timezone = club.timezone or current_app.config.get("DEFAULT_CLUB_TIMEZONE")
        selections = [TemplateSelection(template_id=t) for t in template_ids]
        try:
            result = generate_daily_roster(club.id, date, selections, generated_by_id, timezone)
        except SchedulerError as exc:
            raise click.ClickException(str(exc))

        log_event("ROSTER_GENERATE", user_id=generated_by_id, club_id=club.id,
                  entity="roster", entity_id=result.roster_id, metadata={"date": date, "source": "cli"})
        click.echo(f"Roster {result.roster_id}: {len(result.session_ids)} sessions, {result.slot_count} slots")
        for conflict in result.conflicts:
            click.echo(f"  conflict: session={conflict.session_id} template={conflict.template_id} {conflict.reason}")

    @app.cli.command("recalculate-conflicts")
    @click.argument("roster_id", type=int)
    def recalculate_conflicts(roster_id):
        """Recompute conflict flags for ROSTER_ID."""
        try:
            flagged = recalculate_roster_conflicts(roster_id)
        except SchedulerError as exc:
            raise click.ClickException(str(exc))
        click.echo(f"Roster {roster_id}: {flagged} conflicted slots")

    @app.cli.command("seed-demo")
    def seed_demo():
        """Create the demo club, zones, coaches and templates."""
        club = seed_demo_club()
        click.echo(f"Demo club ready: {club.name} (id={club.id})")

#-------------------------




if __name__ == "__main__":
    app = create_app()
    # Run locally
    app.run(host="127.0.0.1", port=5002)
