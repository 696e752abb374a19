"""users, exercise catalog, workouts, exercise instances, sets

Revision ID: 0001_workout_schema
Revises:
Create Date: 2025-09-14 19:02:11.418305

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_workout_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1) users
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('first_name', sa.String(length=120), nullable=False),
        sa.Column('last_name', sa.String(length=120), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('confirmed', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('confirmation_token', sa.String(length=64), nullable=True, unique=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
    )
    op.create_index('ix_users_id', 'users', ['id'])
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # 2) read-only exercise catalog
    op.create_table(
        'exercise_definitions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=120), nullable=False, unique=True),
    )

    # 3) workouts, one per user and day
    op.create_table(
        'workouts',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.UniqueConstraint('user_id', 'date', name='uq_workouts_user_date'),
    )

    # 4) exercise_instances
    op.create_table(
        'exercise_instances',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('workout_id', sa.Integer(), sa.ForeignKey('workouts.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('exercise_definition_id', sa.Integer(), sa.ForeignKey('exercise_definitions.id', ondelete='SET NULL'), nullable=True),
    )

    # 5) sets
    op.create_table(
        'sets',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('exercise_instance_id', sa.Integer(), sa.ForeignKey('exercise_instances.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('repetitions', sa.Integer(), nullable=False),
        sa.CheckConstraint('weight >= 0', name='ck_sets_weight_unsigned'),
        sa.CheckConstraint('repetitions >= 0', name='ck_sets_repetitions_unsigned'),
    )


def downgrade() -> None:
    # drop child tables in reverse order
    op.drop_table('sets')
    op.drop_table('exercise_instances')
    op.drop_table('workouts')
    op.drop_table('exercise_definitions')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_id', table_name='users')
    op.drop_table('users')
