"""create users, medications and medication_logs tables

Revision ID: 3c1f0d7a9b21
Revises:
Create Date: 2026-10-19 09:12:40.118342

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '3c1f0d7a9b21'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'users',
        sa.Column('user_id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('full_name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_table(
        'medications',
        sa.Column('medication_id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('user_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('person_name', sa.Text()),
        sa.Column('dosage', sa.Text()),
        sa.Column('time', sa.String(5), nullable=False),
        sa.Column('frequency', sa.Text()),
        sa.Column('days_needed', sa.Integer()),
        sa.Column('start_date', sa.DateTime(timezone=True)),
        sa.Column('end_date', sa.DateTime(timezone=True)),
        sa.Column('notes', sa.Text()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_medications_user_id', 'medications', ['user_id'])
    op.create_index('ix_medications_time', 'medications', ['time'])

    op.create_table(
        'medication_logs',
        sa.Column('log_id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('medication_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('medications.medication_id', ondelete='CASCADE'), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False),
        sa.Column('taken_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('taken_on', sa.Date(), nullable=False),
        sa.Column('scheduled_time', sa.String(5), nullable=False),
        sa.Column('marked_by', sa.Text()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint('medication_id', 'taken_on', name='uq_medication_log_day'),
    )
    op.create_index('ix_medication_logs_medication_id', 'medication_logs', ['medication_id'])
    op.create_index('ix_medication_logs_user_id', 'medication_logs', ['user_id'])
    op.create_index('ix_medication_logs_taken_at', 'medication_logs', ['taken_at'])


def downgrade():
    op.drop_table('medication_logs')
    op.drop_table('medications')
    op.drop_table('users')
