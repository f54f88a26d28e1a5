"""add coach availability, gymsport accreditation and active flags

Revision ID: b7c8d9e0f1a2
Revises: a3f1c2d4e5b6
Create Date: 2026-10-25 09:30:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'b7c8d9e0f1a2'
down_revision = 'a3f1c2d4e5b6'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'gymsports',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('club_id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['club_id'], ['clubs.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('club_id', 'name', name='uq_gymsports_club_name')
    )
    with op.batch_alter_table('gymsports', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_gymsports_club_id'), ['club_id'], unique=False)

    op.create_table(
        'coach_availability',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('coach_id', sa.Integer(), nullable=False),
        sa.Column('day_of_week', sa.String(length=3), nullable=False),
        sa.Column('start_time_local', sa.String(length=5), nullable=False),
        sa.Column('end_time_local', sa.String(length=5), nullable=False),
        sa.ForeignKeyConstraint(['coach_id'], ['coaches.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    with op.batch_alter_table('coach_availability', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_coach_availability_coach_id'), ['coach_id'], unique=False)

    op.create_table(
        'coach_gymsports',
        sa.Column('coach_id', sa.Integer(), nullable=False),
        sa.Column('gymsport_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['coach_id'], ['coaches.id'], ),
        sa.ForeignKeyConstraint(['gymsport_id'], ['gymsports.id'], ),
        sa.PrimaryKeyConstraint('coach_id', 'gymsport_id')
    )

    with op.batch_alter_table('coaches', schema=None) as batch_op:
        batch_op.add_column(sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()))

    with op.batch_alter_table('class_templates', schema=None) as batch_op:
        batch_op.add_column(sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()))
        batch_op.add_column(sa.Column('gymsport_id', sa.Integer(), nullable=True))
        batch_op.create_foreign_key('fk_class_templates_gymsport_id', 'gymsports', ['gymsport_id'], ['id'])


def downgrade():
    with op.batch_alter_table('class_templates', schema=None) as batch_op:
        batch_op.drop_constraint('fk_class_templates_gymsport_id', type_='foreignkey')
        batch_op.drop_column('gymsport_id')
        batch_op.drop_column('is_active')

    with op.batch_alter_table('coaches', schema=None) as batch_op:
        batch_op.drop_column('is_active')

    op.drop_table('coach_gymsports')
    with op.batch_alter_table('coach_availability', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_coach_availability_coach_id'))
    op.drop_table('coach_availability')
    with op.batch_alter_table('gymsports', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_gymsports_club_id'))
    op.drop_table('gymsports')
