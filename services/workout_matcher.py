"""
Workout Category Matcher

Maps body metrics to a weight-category/goal bucket, finds the matching
program in the workout catalog and picks the session for a given day.
"""

import re

from loguru import logger

from constants import DEFAULT_BMI, OBESE_BMI, WEIGHT_CATEGORY_GOALS
from .content import load_workout_catalog

# Hyphen, en dash or em dash with optional surrounding whitespace
AGE_RANGE_SEPARATOR = re.compile(r'\s*[-–—]\s*')
LEADING_DIGITS = re.compile(r'\s*(\d+)')


def compute_bmi(weight_kg, height_cm):
    height_m = (height_cm or 0) / 100
    if height_m <= 0:
        return DEFAULT_BMI
    return weight_kg / (height_m * height_m)


def classify_profile(current_weight, target_weight, height):
    """
    Pick the catalog bucket for a profile.

    Returns:
        (weight_category, goal, bmi). Anyone aiming above their current
        weight is underweight/weight_gain; otherwise BMI >= 30 is
        obese/safe_fat_loss and everyone else, normal BMI included, is
        overweight/fat_loss.
    """
    bmi = compute_bmi(current_weight, height)
    if target_weight and target_weight > current_weight:
        category = 'underweight'
    elif bmi >= OBESE_BMI:
        category = 'obese'
    else:
        category = 'overweight'
    return category, WEIGHT_CATEGORY_GOALS[category], bmi


def parse_age_range(text):
    """Parse '18-30', '31 – 45' or '46-60 years' into (18, 30); None if unparseable.

    Each bound is the leading run of digits, so trailing text is ignored.
    """
    parts = AGE_RANGE_SEPARATOR.split((text or '').strip())
    if len(parts) < 2:
        return None
    low, high = LEADING_DIGITS.match(parts[0]), LEADING_DIGITS.match(parts[1])
    if not low or not high:
        return None
    return int(low.group(1)), int(high.group(1))


def find_category(catalog, age, weight_category, goal):
    """Exact bucket + age match, then bucket ignoring age, then the first entry."""
    bucket = [
        group for group in catalog.workouts
        if group.weight_category == weight_category and group.goal == goal
    ]
    for group in bucket:
        bounds = parse_age_range(group.age_range)
        if bounds and bounds[0] <= age <= bounds[1]:
            logger.debug(f"workout_category_matched age_range={group.age_range}")
            return group

    if bucket:
        logger.warning(f"workout_age_unmatched age={age} category={weight_category} goal={goal}")
        return bucket[0]

    if catalog.workouts:
        logger.warning(f"workout_bucket_unmatched age={age} category={weight_category} goal={goal} "
                       f"using=first_available")
        return catalog.workouts[0]
    return None


def select_workout_for_profile(age, current_weight, target_weight, height, day_number=1, store=None):
    """
    Workout session for a profile on a given program day.

    The matched program's options are followed in order, wrapping around, so
    day N+1 of an N-option program repeats day 1. Returns None only when the
    catalog is empty, unreadable or the matched program has no options.
    """
    try:
        catalog = load_workout_catalog(store=store)
        category, goal, bmi = classify_profile(current_weight, target_weight, height)
        logger.debug(f"workout_profile age={age} weight={current_weight} height={height} "
                     f"bmi={bmi:.1f} category={category} goal={goal}")

        group = find_category(catalog, age, category, goal)
        if group is None or not group.workout_options:
            logger.error(f"workout_options_missing category={category} goal={goal}")
            return None

        options = group.workout_options
        index = (day_number - 1) % len(options)
        selected = options[index]
        logger.debug(f"workout_selected day={day_number} index={index} name={selected.name} "
                     f"day_type={selected.day_type}")
        return selected
    except Exception as exc:
        logger.exception(f"workout_selection_failed error={exc}")
        return None


def list_workout_categories(store=None):
    """Summary of every program in the catalog."""
    catalog = load_workout_catalog(store=store)
    return [
        {
            'age': group.age_range,
            'category': group.weight_category,
            'goal': group.goal,
            'count': len(group.workout_options),
        }
        for group in catalog.workouts
    ]
