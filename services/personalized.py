"""
Personalized Plan (legacy validation path)

Random meal and workout picks over the whole catalog with a three-tier
filter: goal + diet + region, then goal + diet, then diet only. Used to
sanity-check catalog coverage; the production path is the deterministic
rotation in meal_selection. Randomness comes from an injectable
``random.Random`` so it never leaks into the deterministic path.
"""

import random

from loguru import logger

from constants import DIET_TYPES, DEFAULT_GOAL
from .content import load_meal_library, load_workout_catalog, normalize_diet_type

PERSONALIZED_SLOTS = ('breakfast', 'lunch', 'dinner')


def select_random(items, rng=None):
    """Uniform pick from ``items`` (None when empty)."""
    if not items:
        return None
    return (rng or random).choice(list(items))


def load_all_meals(store=None):
    meals = []
    for diet_type in DIET_TYPES:
        library = load_meal_library(diet_type, store=store)
        if library is not None:
            meals.extend(library.meals)
    return meals


def filter_meals(meals, goal, diet, region):
    """
    Apply the three filter tiers, stopping at the first that matches anything.

    Returns:
        (matching meals, tier number). Tier 3 may still be empty.
    """
    tier1 = [m for m in meals if goal in m.goals and m.diet_type == diet and m.region == region]
    logger.debug(f"personalized_tier tier=1 matches={len(tier1)}")
    if tier1:
        return tier1, 1

    logger.warning(f"personalized_fallback tier=2 goal={goal} diet={diet} region={region}")
    tier2 = [m for m in meals if goal in m.goals and m.diet_type == diet]
    if tier2:
        return tier2, 2

    logger.warning(f"personalized_fallback tier=3 diet={diet}")
    return [m for m in meals if m.diet_type == diet], 3


def generate_personalized_plan(profile, store=None, rng=None):
    """
    Random breakfast, lunch, dinner and workout program for a profile.

    The result carries ``fallback_tier`` (1-3), ``fallback_used`` and the
    slots that had to fall back to any meal of the user's diet.
    """
    goal = profile.primary_goal or DEFAULT_GOAL
    diet = normalize_diet_type(profile.dietary_preferences)
    region = profile.region_preference or ''

    all_meals = load_all_meals(store=store)
    filtered, tier = filter_meals(all_meals, goal, diet, region)

    result = {'fallback_tier': tier, 'slot_fallbacks': []}
    for slot in PERSONALIZED_SLOTS:
        options = [m for m in filtered if m.meal_type == slot]
        if not options:
            logger.warning(f"personalized_slot_fallback slot={slot} diet={diet}")
            options = [m for m in all_meals if m.meal_type == slot and m.diet_type == diet]
            result['slot_fallbacks'].append(slot)
        result[slot] = select_random(options, rng)

    categories = list(load_workout_catalog(store=store).workouts)
    matching = [group for group in categories if group.goal == goal]
    if not matching:
        logger.warning(f"personalized_workout_fallback goal={goal}")
    result['workout'] = select_random(matching or categories, rng)
    result['fallback_used'] = tier > 1 or bool(result['slot_fallbacks'])
    return result
