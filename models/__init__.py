"""
Models Package

Exports all database models and the db instance for use throughout the application.
"""

from .base import db

from .profile import UserProfile
from .plan import DailyPlan, PlanMeal, PlanWorkout
from .manual import ManualMeal

__all__ = [
    'db',
    'UserProfile',
    'DailyPlan',
    'PlanMeal',
    'PlanWorkout',
    'ManualMeal',
]
