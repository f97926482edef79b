"""
Plan Assembly

Combines the day's meals, workout and targets into a plan and writes it
through the storage collaborator.

Regenerating a plan for the same user and date replaces its meals and
workout but only updates the targets on the existing plan row, so water
intake and other accumulated values are kept. All writes for one
generation share a single transaction.
"""

import re
from dataclasses import dataclass, field, asdict
from datetime import timedelta

from loguru import logger

from constants import (
    CYCLE_LENGTH,
    DEFAULT_GOAL,
    DEFAULT_STEP_INSTRUCTION,
    DEFAULT_TIME_AVAILABILITY,
    FALLBACK_EXERCISES,
    FALLBACK_MEALS,
    FALLBACK_SNACKS,
    FALLBACK_WORKOUT,
    PHASE_COOLDOWN,
    PHASE_MAIN,
    PHASE_WARMUP,
    REST_DAY,
    SECONDARY_SNACK_SLOT,
    STEP_DURATION_SECONDS,
)
from .adaptation import INACTIVE, advance, from_plan
from .exceptions import PlanGenerationError, ProfileIncompleteError
from .meal_selection import select_daily_meals
from .targets import calculate_targets
from .workout_matcher import select_workout_for_profile

MEAL_SOURCE_ROTATION = 'rotation'
MEAL_SOURCE_FALLBACK = 'static_fallback'

# Dash with whitespace on both sides; hyphenated names like Push-ups stay whole
STEP_SEPARATOR = re.compile(r'\s+[-–—]\s+')


@dataclass
class GeneratedPlan:
    user_id: int
    date: object
    cycle_day: int
    meals: list
    workout: dict
    calories_total: int
    protein_total: int
    targets: object
    meal_source: str = MEAL_SOURCE_ROTATION
    adaptation: object = INACTIVE
    adaptation_bonus: int = 0
    adaptation_carried: bool = False
    plan_id: object = None
    warnings: list = field(default_factory=list)

    @property
    def used_fallback(self):
        return self.meal_source != MEAL_SOURCE_ROTATION

    def to_dict(self):
        data = asdict(self)
        data['date'] = self.date.isoformat()
        data['targets'] = dict(self.targets._asdict())
        data['adaptation'] = dict(self.adaptation._asdict())
        data['used_fallback'] = self.used_fallback
        return data


def cycle_day_for_date(plan_date):
    """Rotation day for a calendar date: day-of-year mod 28, plus 1. Same for every user."""
    return (plan_date.timetuple().tm_yday % CYCLE_LENGTH) + 1


def meal_count_for(profile):
    """Meals per day are either 3 or 5."""
    return 5 if (profile.daily_meal_count or 3) > 3 else 3


def shape_meals(selected, meal_count):
    """Keep breakfast/lunch/dinner for three meals; keep both snacks for five."""
    if meal_count > 3:
        return list(selected)
    return [meal for meal in selected if meal['type'] not in ('snack', SECONDARY_SNACK_SLOT)]


def fallback_meals(meal_count):
    meals = [dict(meal) for meal in FALLBACK_MEALS]
    if meal_count > 3:
        meals.extend(dict(snack) for snack in FALLBACK_SNACKS)
    return meals


def split_step(text):
    """'Squats - knees behind toes' -> ('Squats', 'knees behind toes')."""
    parts = STEP_SEPARATOR.split(text, maxsplit=1)
    name = parts[0] or text
    instruction = parts[1] if len(parts) > 1 and parts[1] else DEFAULT_STEP_INSTRUCTION
    return name, instruction


def step_phase(index, count):
    if index == 0:
        return PHASE_WARMUP
    if index == count - 1:
        return PHASE_COOLDOWN
    return PHASE_MAIN


def build_workout(template, profile, bonus=0):
    """Turn a catalog session (or None) into the workout stored on the plan."""
    if template is None:
        return {
            'name': FALLBACK_WORKOUT['name'],
            'type': FALLBACK_WORKOUT['type'],
            'duration': (profile.time_availability or DEFAULT_TIME_AVAILABILITY) + bonus,
            'difficulty': FALLBACK_WORKOUT['difficulty'],
            'exercises': [dict(exercise) for exercise in FALLBACK_EXERCISES],
            'is_completed': False,
        }

    is_rest = template.day_type == REST_DAY
    exercises = []
    for index, step in enumerate(template.steps):
        name, instruction = split_step(step)
        exercises.append({
            'name': name,
            'duration': 0 if is_rest else STEP_DURATION_SECONDS,
            'instruction': instruction,
            'phase': step_phase(index, len(template.steps)),
        })

    return {
        'name': template.name,
        'type': template.type,
        'duration': 0 if is_rest else template.duration_min + bonus,
        'difficulty': template.intensity or 'none',
        'exercises': exercises,
        # Rest days need no action from the user
        'is_completed': is_rest,
    }


def build_plan(user_id, plan_date, profile, previous_state=INACTIVE, store=None):
    """Compute a plan without touching storage."""
    cycle_day = cycle_day_for_date(plan_date)
    meal_count = meal_count_for(profile)
    goal = profile.primary_goal or DEFAULT_GOAL
    targets = calculate_targets(profile)
    bonus, next_state, carried = advance(previous_state)
    if carried:
        logger.info(f"adaptation_carried user_id={user_id} remaining_before={previous_state.days_remaining} "
                    f"bonus_minutes={bonus}")

    logger.info(f"plan_build user_id={user_id} date={plan_date} cycle_day={cycle_day} meal_count={meal_count}")

    warnings = []
    selected = select_daily_meals(
        profile.dietary_preferences,
        profile.age,
        goal,
        cycle_day,
        store=store,
        include_secondary_snack=meal_count > 3,
    )
    meals = shape_meals(selected, meal_count)
    meal_source = MEAL_SOURCE_ROTATION
    if not meals:
        logger.warning(f"meal_selection_empty user_id={user_id} diet={profile.dietary_preferences!r} "
                       f"using=static_fallback")
        meals = fallback_meals(meal_count)
        meal_source = MEAL_SOURCE_FALLBACK
        warnings.append('Deterministic meal selection failed; static fallback meals used.')

    template = select_workout_for_profile(
        profile.age,
        profile.current_weight,
        profile.target_weight,
        profile.height,
        plan_date.day,
        store=store,
    )
    if template is None:
        warnings.append('No workout program matched; default workout used.')
    workout = build_workout(template, profile, bonus)

    return GeneratedPlan(
        user_id=user_id,
        date=plan_date,
        cycle_day=cycle_day,
        meals=meals,
        workout=workout,
        calories_total=sum(meal['calories'] for meal in meals),
        protein_total=sum(meal['protein'] for meal in meals),
        targets=targets,
        meal_source=meal_source,
        adaptation=next_state,
        adaptation_bonus=bonus,
        adaptation_carried=carried,
        warnings=warnings,
    )


def persist_plan(plan, storage):
    """
    Write a generated plan. An existing plan for the same user and date keeps
    its row; its meals and workout are replaced and its targets updated.
    """
    with storage.transaction():
        existing = storage.get_plan(plan.user_id, plan.date)
        if existing is not None:
            logger.info(f"plan_regenerate plan_id={existing.id} user_id={plan.user_id} date={plan.date}")
            plan_id = existing.id
            storage.clear_plan_children(plan_id)
            storage.update_plan_targets(plan_id, plan.calories_total, plan.protein_total)
        else:
            created = storage.create_plan(
                user_id=plan.user_id,
                date=plan.date,
                calories_target=plan.calories_total,
                protein_target=plan.protein_total,
                status='active',
            )
            plan_id = created.id

        for meal in plan.meals:
            storage.create_meal_record(
                plan_id,
                type=meal['type'],
                name=meal['name'],
                calories=meal['calories'],
                protein=meal['protein'],
                carbs=meal.get('carbs'),
                fats=meal.get('fats'),
                ingredients=list(meal.get('ingredients') or []),
                instructions=meal.get('instructions', ''),
            )

        workout = plan.workout
        storage.create_workout_record(
            plan_id,
            type=workout['type'],
            name=workout['name'],
            duration=workout['duration'],
            difficulty=workout['difficulty'],
            exercises=workout['exercises'],
            is_completed=workout['is_completed'],
        )

        if plan.adaptation_carried:
            storage.set_adaptation(plan_id, plan.adaptation)

    plan.plan_id = plan_id
    return plan


def generate_plan(user_id, plan_date, profile, storage, store=None):
    """
    Generate and save the plan for one user and date.

    Raises:
        PlanGenerationError: when any storage call fails; nothing is committed
    """
    try:
        yesterday = storage.get_plan(user_id, plan_date - timedelta(days=1))
        previous_state = from_plan(yesterday)
        plan = build_plan(user_id, plan_date, profile, previous_state, store=store)
        persist_plan(plan, storage)
    except PlanGenerationError:
        raise
    except Exception as exc:
        logger.exception(f"plan_generation_failed user_id={user_id} date={plan_date} error={exc}")
        raise PlanGenerationError(details=str(exc)) from exc

    logger.info(f"plan_generated plan_id={plan.plan_id} user_id={user_id} date={plan_date} "
                f"meals={len(plan.meals)} meal_source={plan.meal_source}")
    return plan


def generate_plan_for_user(user_id, plan_date, storage, store=None):
    """
    Look up the user's profile and generate their plan.

    Raises:
        ProfileIncompleteError: the user has no profile yet
        PlanGenerationError: saving the plan failed
    """
    profile = storage.get_user_profile(user_id)
    if profile is None:
        logger.info(f"plan_generation_blocked user_id={user_id} reason=no_profile")
        raise ProfileIncompleteError(user_id)
    return generate_plan(user_id, plan_date, profile, storage, store=store)
