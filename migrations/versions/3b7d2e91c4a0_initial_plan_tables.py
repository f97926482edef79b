"""Initial plan tables

Revision ID: 3b7d2e91c4a0
Revises:
Create Date: 2026-10-18 09:12:44.501873

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3b7d2e91c4a0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'user_profile',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('age', sa.Integer(), nullable=False),
        sa.Column('gender', sa.String(length=20), nullable=False),
        sa.Column('height', sa.Integer(), nullable=False),
        sa.Column('current_weight', sa.Integer(), nullable=False),
        sa.Column('target_weight', sa.Integer(), nullable=True),
        sa.Column('daily_meal_count', sa.Integer(), nullable=True),
        sa.Column('activity_level', sa.String(length=20), nullable=False),
        sa.Column('dietary_preferences', sa.String(length=50), nullable=False),
        sa.Column('time_availability', sa.Integer(), nullable=False),
        sa.Column('primary_goal', sa.String(length=30), nullable=True),
        sa.Column('region_preference', sa.String(length=30), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('user_profile', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_user_profile_user_id'), ['user_id'], unique=True)

    op.create_table(
        'daily_plan',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('calories_target', sa.Integer(), nullable=False),
        sa.Column('protein_target', sa.Integer(), nullable=False),
        sa.Column('calories_consumed', sa.Integer(), nullable=True),
        sa.Column('protein_consumed', sa.Integer(), nullable=True),
        sa.Column('water_intake', sa.Integer(), nullable=True),
        sa.Column('adaptation_active', sa.Boolean(), nullable=True),
        sa.Column('adaptation_days_remaining', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'date', name='uq_daily_plan_user_date'),
    )
    with op.batch_alter_table('daily_plan', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_daily_plan_user_id'), ['user_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_daily_plan_date'), ['date'], unique=False)

    op.create_table(
        'plan_meal',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('plan_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('calories', sa.Integer(), nullable=False),
        sa.Column('protein', sa.Integer(), nullable=False),
        sa.Column('carbs', sa.Integer(), nullable=True),
        sa.Column('fats', sa.Integer(), nullable=True),
        sa.Column('ingredients', sa.JSON(), nullable=True),
        sa.Column('instructions', sa.Text(), nullable=True),
        sa.Column('is_consumed', sa.Boolean(), nullable=True),
        sa.Column('consumed_at', sa.DateTime(), nullable=True),
        sa.Column('consumed_alternative', sa.Boolean(), nullable=True),
        sa.Column('alternative_description', sa.String(length=500), nullable=True),
        sa.Column('alternative_calories', sa.Integer(), nullable=True),
        sa.Column('alternative_protein', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['plan_id'], ['daily_plan.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('plan_meal', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_plan_meal_plan_id'), ['plan_id'], unique=False)

    op.create_table(
        'plan_workout',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('plan_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=30), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('difficulty', sa.String(length=30), nullable=False),
        sa.Column('exercises', sa.JSON(), nullable=True),
        sa.Column('is_completed', sa.Boolean(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('feedback', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['plan_id'], ['daily_plan.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('plan_workout', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_plan_workout_plan_id'), ['plan_id'], unique=False)

    op.create_table(
        'manual_meal',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('plan_id', sa.Integer(), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('portion_size', sa.String(length=10), nullable=False),
        sa.Column('meal_type', sa.String(length=10), nullable=False),
        sa.Column('estimated_calories_min', sa.Integer(), nullable=True),
        sa.Column('estimated_calories_max', sa.Integer(), nullable=True),
        sa.Column('estimated_protein', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['plan_id'], ['daily_plan.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    with op.batch_alter_table('manual_meal', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_manual_meal_plan_id'), ['plan_id'], unique=False)


def downgrade():
    with op.batch_alter_table('manual_meal', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_manual_meal_plan_id'))
    op.drop_table('manual_meal')

    with op.batch_alter_table('plan_workout', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_plan_workout_plan_id'))
    op.drop_table('plan_workout')

    with op.batch_alter_table('plan_meal', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_plan_meal_plan_id'))
    op.drop_table('plan_meal')

    with op.batch_alter_table('daily_plan', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_daily_plan_date'))
        batch_op.drop_index(batch_op.f('ix_daily_plan_user_id'))
    op.drop_table('daily_plan')

    with op.batch_alter_table('user_profile', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_user_profile_user_id'))
    op.drop_table('user_profile')
