"""
Manual Meal Model

Food eaten outside the plan, logged with a rough calorie range.
"""

from datetime import datetime

from .base import db


class ManualMeal(db.Model):
    """Off-plan entry attached to a daily plan."""
    id = db.Column(db.Integer, primary_key=True)
    plan_id = db.Column(db.Integer, db.ForeignKey('daily_plan.id', ondelete='CASCADE'), nullable=False, index=True)
    description = db.Column(db.String(500), nullable=False)
    portion_size = db.Column(db.String(10), nullable=False)  # 'small', 'medium', 'large'
    meal_type = db.Column(db.String(10), nullable=False)  # 'meal', 'snack'
    estimated_calories_min = db.Column(db.Integer, nullable=True)
    estimated_calories_max = db.Column(db.Integer, nullable=True)
    estimated_protein = db.Column(db.Integer, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    plan = db.relationship('DailyPlan', backref=db.backref('manual_meals', lazy=True, cascade='all, delete-orphan'))
