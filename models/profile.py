"""
User Profile Model

Health data collected during onboarding. Read-only to the plan engine.
"""

from datetime import datetime

from .base import db


class UserProfile(db.Model):
    """Body metrics and preferences consumed by plan generation."""
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, unique=True, nullable=False, index=True)
    age = db.Column(db.Integer, nullable=False)
    gender = db.Column(db.String(20), nullable=False)  # 'male', 'female', 'other'
    height = db.Column(db.Integer, nullable=False)  # cm
    current_weight = db.Column(db.Integer, nullable=False)  # kg
    target_weight = db.Column(db.Integer, nullable=True)  # kg
    daily_meal_count = db.Column(db.Integer, default=3)
    activity_level = db.Column(db.String(20), nullable=False, default='sedentary')
    dietary_preferences = db.Column(db.String(50), nullable=False)  # free-form, normalized on read
    time_availability = db.Column(db.Integer, nullable=False, default=30)  # minutes per day
    primary_goal = db.Column(db.String(30), default='fat_loss')
    region_preference = db.Column(db.String(30), nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
