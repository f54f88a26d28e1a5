"""create club, zone, coach, template and roster tables

Revision ID: a3f1c2d4e5b6
Revises: 
Create Date: 2026-10-18 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'a3f1c2d4e5b6'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'clubs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('timezone', sa.String(length=64), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table(
        'audit_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('club_id', sa.Integer(), nullable=True),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('action', sa.String(length=80), nullable=False),
        sa.Column('entity', sa.String(length=80), nullable=True),
        sa.Column('entity_id', sa.String(length=80), nullable=True),
        sa.Column('ip', sa.String(length=64), nullable=True),
        sa.Column('user_agent', sa.String(length=255), nullable=True),
        sa.Column('metadata_json', sa.Text(), nullable=True),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table(
        'zones',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('club_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('allow_overlap', sa.Boolean(), nullable=False),
        sa.Column('is_first', sa.Boolean(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('club_id', 'name', name='uq_zones_club_name')
    )
    op.create_table(
        'coaches',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('club_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('accreditation_number', sa.String(length=60), nullable=True),
        sa.Column('membership_number', sa.String(length=60), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=30), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table(
        'class_templates',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('club_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('level', sa.String(length=60), nullable=True),
        sa.Column('length_minutes', sa.Integer(), nullable=False),
        sa.Column('default_rotation_minutes', sa.Integer(), nullable=False),
        sa.Column('allow_overlap', sa.Boolean(), nullable=False),
        sa.Column('active_days', sa.JSON(), nullable=False),
        sa.Column('start_time_local', sa.String(length=5), nullable=False),
        sa.Column('end_time_local', sa.String(length=5), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table(
        'class_template_zones',
        sa.Column('template_id', sa.Integer(), nullable=False),
        sa.Column('zone_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['template_id'], ['class_templates.id'], ),
        sa.ForeignKeyConstraint(['zone_id'], ['zones.id'], ),
        sa.PrimaryKeyConstraint('template_id', 'zone_id')
    )
    op.create_table(
        'class_template_coaches',
        sa.Column('template_id', sa.Integer(), nullable=False),
        sa.Column('coach_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['coach_id'], ['coaches.id'], ),
        sa.ForeignKeyConstraint(['template_id'], ['class_templates.id'], ),
        sa.PrimaryKeyConstraint('template_id', 'coach_id')
    )
    op.create_table(
        'rosters',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('club_id', sa.Integer(), nullable=False),
        sa.Column('scope', sa.String(length=20), nullable=False),
        sa.Column('start_date', sa.DateTime(), nullable=False),
        sa.Column('end_date', sa.DateTime(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('generated_at', sa.DateTime(), nullable=False),
        sa.Column('generated_by_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table(
        'class_sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('club_id', sa.Integer(), nullable=False),
        sa.Column('roster_id', sa.Integer(), nullable=False),
        sa.Column('template_id', sa.Integer(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('start_time_local', sa.String(length=5), nullable=False),
        sa.Column('end_time_local', sa.String(length=5), nullable=False),
        sa.Column('starts_at', sa.DateTime(), nullable=False),
        sa.Column('ends_at', sa.DateTime(), nullable=False),
        sa.Column('rotation_minutes', sa.Integer(), nullable=False),
        sa.Column('allow_overlap', sa.Boolean(), nullable=False),
        sa.Column('assigned_zone_sequence', sa.JSON(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False),
        sa.Column('conflict_flag', sa.Boolean(), nullable=False),
        sa.Column('generated_by_id', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id'], ),
        sa.ForeignKeyConstraint(['roster_id'], ['rosters.id'], ),
        sa.ForeignKeyConstraint(['template_id'], ['class_templates.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_table(
        'session_allowed_zones',
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('zone_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['session_id'], ['class_sessions.id'], ),
        sa.ForeignKeyConstraint(['zone_id'], ['zones.id'], ),
        sa.PrimaryKeyConstraint('session_id', 'zone_id')
    )
    op.create_table(
        'session_coaches',
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('coach_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['coach_id'], ['coaches.id'], ),
        sa.ForeignKeyConstraint(['session_id'], ['class_sessions.id'], ),
        sa.PrimaryKeyConstraint('session_id', 'coach_id')
    )
    op.create_table(
        'roster_slots',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('club_id', sa.Integer(), nullable=False),
        sa.Column('roster_id', sa.Integer(), nullable=False),
        sa.Column('session_id', sa.Integer(), nullable=False),
        sa.Column('zone_id', sa.Integer(), nullable=False),
        sa.Column('starts_at', sa.DateTime(), nullable=False),
        sa.Column('ends_at', sa.DateTime(), nullable=False),
        sa.Column('conflict_flag', sa.Boolean(), nullable=False),
        sa.Column('conflict_type', sa.String(length=10), nullable=True),
        sa.Column('allow_overlap', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('starts_at < ends_at', name='ck_roster_slots_range'),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id'], ),
        sa.ForeignKeyConstraint(['roster_id'], ['rosters.id'], ),
        sa.ForeignKeyConstraint(['session_id'], ['class_sessions.id'], ),
        sa.ForeignKeyConstraint(['zone_id'], ['zones.id'], ),
        sa.PrimaryKeyConstraint('id')
    )

    for table, columns in (
        ('zones', ['club_id']),
        ('coaches', ['club_id']),
        ('class_templates', ['club_id']),
        ('rosters', ['club_id']),
        ('rosters', ['start_date']),
        ('class_sessions', ['club_id']),
        ('class_sessions', ['roster_id']),
        ('roster_slots', ['club_id']),
        ('roster_slots', ['roster_id']),
        ('roster_slots', ['session_id']),
        ('roster_slots', ['zone_id']),
        ('roster_slots', ['starts_at']),
    ):
        with op.batch_alter_table(table, schema=None) as batch_op:
            batch_op.create_index(batch_op.f(f'ix_{table}_{columns[0]}'), columns, unique=False)


def downgrade():
    op.drop_table('roster_slots')
    op.drop_table('session_coaches')
    op.drop_table('session_allowed_zones')
    op.drop_table('class_sessions')
    op.drop_table('rosters')
    op.drop_table('class_template_coaches')
    op.drop_table('class_template_zones')
    op.drop_table('class_templates')
    op.drop_table('coaches')
    op.drop_table('zones')
    op.drop_table('audit_logs')
    op.drop_table('clubs')
