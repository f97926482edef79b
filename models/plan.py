"""
Daily Plan Models

Contains the DailyPlan parent row and its PlanMeal / PlanWorkout children.
Regenerating a plan replaces the children and updates the parent in place,
so columns the engine does not write (water, consumed totals) survive.
"""

from datetime import datetime

from .base import db


class DailyPlan(db.Model):
    """One user's plan for one calendar date."""
    __table_args__ = (db.UniqueConstraint('user_id', 'date', name='uq_daily_plan_user_date'),)

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    calories_target = db.Column(db.Integer, nullable=False)
    protein_target = db.Column(db.Integer, nullable=False)  # grams
    calories_consumed = db.Column(db.Integer, default=0)
    protein_consumed = db.Column(db.Integer, default=0)
    water_intake = db.Column(db.Integer, default=0)  # ml
    adaptation_active = db.Column(db.Boolean, default=False)
    adaptation_days_remaining = db.Column(db.Integer, default=0)
    status = db.Column(db.String(20), default='active')  # 'active', 'completed'
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    meals = db.relationship('PlanMeal', backref='plan', lazy=True, cascade='all, delete-orphan',
                            order_by='PlanMeal.id')
    workouts = db.relationship('PlanWorkout', backref='plan', lazy=True, cascade='all, delete-orphan',
                               order_by='PlanWorkout.id')


class PlanMeal(db.Model):
    """A resolved meal snapshot. Holds no reference back to the catalogs."""
    id = db.Column(db.Integer, primary_key=True)
    plan_id = db.Column(db.Integer, db.ForeignKey('daily_plan.id', ondelete='CASCADE'), nullable=False, index=True)
    type = db.Column(db.String(20), nullable=False)  # 'breakfast', 'lunch', 'snack', 'dinner', 'snack_2'
    name = db.Column(db.String(200), nullable=False)
    calories = db.Column(db.Integer, nullable=False)
    protein = db.Column(db.Integer, nullable=False)
    carbs = db.Column(db.Integer, nullable=True)
    fats = db.Column(db.Integer, nullable=True)
    ingredients = db.Column(db.JSON, default=list)
    instructions = db.Column(db.Text, default='')
    is_consumed = db.Column(db.Boolean, default=False)
    consumed_at = db.Column(db.DateTime, nullable=True)
    # Set when the user ate something else instead of this meal
    consumed_alternative = db.Column(db.Boolean, default=False)
    alternative_description = db.Column(db.String(500), nullable=True)
    alternative_calories = db.Column(db.Integer, nullable=True)
    alternative_protein = db.Column(db.Integer, nullable=True)


class PlanWorkout(db.Model):
    """The day's workout session with phase-tagged exercises."""
    id = db.Column(db.Integer, primary_key=True)
    plan_id = db.Column(db.Integer, db.ForeignKey('daily_plan.id', ondelete='CASCADE'), nullable=False, index=True)
    type = db.Column(db.String(30), nullable=False)
    name = db.Column(db.String(200), nullable=False)
    duration = db.Column(db.Integer, nullable=False)  # minutes
    difficulty = db.Column(db.String(30), nullable=False)
    exercises = db.Column(db.JSON, default=list)
    is_completed = db.Column(db.Boolean, default=False)
    completed_at = db.Column(db.DateTime, nullable=True)
    feedback = db.Column(db.Text, nullable=True)
