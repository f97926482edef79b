"""
Plan Storage

Flask-SQLAlchemy implementation of the storage the plan engine writes
through. Methods only stage changes on the session; ``transaction()``
commits them together or rolls all of them back.
"""

from contextlib import contextmanager

from loguru import logger

from models import db, DailyPlan, PlanMeal, PlanWorkout, UserProfile


class PlanStorage:
    """Get/put access to profiles, plans and their meal/workout children."""

    def __init__(self, session=None):
        self.session = session or db.session

    @contextmanager
    def transaction(self):
        try:
            yield self
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def get_user_profile(self, user_id):
        return UserProfile.query.filter_by(user_id=user_id).first()

    def get_plan(self, user_id, plan_date):
        return DailyPlan.query.filter_by(user_id=user_id, date=plan_date).first()

    def get_plan_by_id(self, plan_id):
        return self.session.get(DailyPlan, plan_id)

    def create_plan(self, **fields):
        plan = DailyPlan(**fields)
        self.session.add(plan)
        self.session.flush()
        return plan

    def clear_plan_children(self, plan_id):
        """Delete a plan's meals and workouts; the plan row itself is kept."""
        meals = PlanMeal.query.filter_by(plan_id=plan_id).delete(synchronize_session='fetch')
        workouts = PlanWorkout.query.filter_by(plan_id=plan_id).delete(synchronize_session='fetch')
        logger.debug(f"plan_children_cleared plan_id={plan_id} meals={meals} workouts={workouts}")
        plan = self.get_plan_by_id(plan_id)
        if plan is not None:
            self.session.expire(plan, ['meals', 'workouts'])

    def create_meal_record(self, plan_id, **fields):
        meal = PlanMeal(plan_id=plan_id, **fields)
        self.session.add(meal)
        self.session.flush()
        return meal

    def create_workout_record(self, plan_id, **fields):
        workout = PlanWorkout(plan_id=plan_id, **fields)
        self.session.add(workout)
        self.session.flush()
        return workout

    def update_plan_targets(self, plan_id, calories, protein):
        plan = self.get_plan_by_id(plan_id)
        if plan is None:
            raise LookupError(f'Plan {plan_id} not found')
        plan.calories_target = calories
        plan.protein_target = protein
        self.session.flush()
        return plan

    def set_adaptation(self, plan_id, state):
        plan = self.get_plan_by_id(plan_id)
        if plan is None:
            raise LookupError(f'Plan {plan_id} not found')
        plan.adaptation_active = state.active
        plan.adaptation_days_remaining = state.days_remaining
        self.session.flush()
        return plan

    def get_recent_meal_names(self, user_id, limit=20):
        """Names of meals on the user's latest plans, newest plan first."""
        plan_ids = [
            row.id for row in DailyPlan.query.filter_by(user_id=user_id)
            .order_by(DailyPlan.date.desc(), DailyPlan.created_at.desc())
            .limit(10)
            .all()
        ]
        if not plan_ids:
            return []
        meals = (PlanMeal.query.filter(PlanMeal.plan_id.in_(plan_ids))
                 .order_by(PlanMeal.id.desc())
                 .limit(limit)
                 .all())
        return [meal.name for meal in meals]
