"""
Meal Selection Engine

Resolves a user's diet, age, goal and cycle day into the day's meal slots.
The rotation table decides which meal each slot gets; meals that break the
user's diet are swapped for a same-slot, same-tier meal from their own
library.
"""

from loguru import logger

from constants import (
    CYCLE_LENGTH,
    DIET_EGG,
    DIET_NON_VEG,
    DIET_TYPES,
    DIET_VEG,
    MEAL_SLOTS,
    PROTEIN_FIRST_GOALS,
    SECONDARY_SNACK_SLOT,
    SERVING_LABEL,
)
from .content import load_meal_library, normalize_diet_type
from .rotation import build_rotation
from .targets import calorie_tier


def normalize_cycle_day(day):
    """Fold any integer day onto 1..28; 29 -> 1, 0 -> 28, -1 -> 27."""
    return ((day - 1) % CYCLE_LENGTH) + 1


def is_diet_compatible(user_diet, meal_diet):
    """Non-veg eats anything, egg eats veg or egg, veg eats veg only."""
    user_diet = normalize_diet_type(user_diet)
    meal_diet = normalize_diet_type(meal_diet)
    if user_diet == DIET_NON_VEG:
        return True
    if user_diet == DIET_EGG:
        return meal_diet in (DIET_VEG, DIET_EGG)
    return meal_diet == DIET_VEG


def find_meal_by_id(meal_id, store=None):
    """Search every diet library for a meal id (ids are unique across libraries)."""
    for diet_type in DIET_TYPES:
        library = load_meal_library(diet_type, store=store)
        if library is None:
            continue
        meal = library.find(meal_id)
        if meal is not None:
            return meal
    return None


def find_replacement(original, user_diet, goal, store=None):
    """
    Pick a diet-compatible stand-in for ``original``.

    Candidates come from the user's own library, must fit the user's diet
    and must share the original's meal type and calorie tier. Protein-first
    goals take the highest-protein candidate; other goals take the
    alphabetically first name, ignoring case. When nothing qualifies the
    original meal is returned so the slot is never left empty.
    """
    library = load_meal_library(user_diet, store=store)
    if library is None:
        return original

    candidates = [
        meal for meal in library.meals
        if meal.meal_type == original.meal_type
        and meal.calorie_tier == original.calorie_tier
        and is_diet_compatible(user_diet, meal.diet_type)
    ]
    if not candidates:
        logger.warning(f"replacement_not_found meal_id={original.id} diet={normalize_diet_type(user_diet)} "
                       f"slot={original.meal_type} tier={original.calorie_tier}")
        return original

    if goal in PROTEIN_FIRST_GOALS:
        candidates.sort(key=lambda meal: -meal.protein)
    else:
        candidates.sort(key=lambda meal: meal.name.casefold())
    return candidates[0]


def to_selection(meal, slot, why):
    """Flatten a MealRecord into the shape stored on a plan."""
    prep = meal.prep or 'Standard preparation'
    return {
        'type': slot,
        'name': meal.name,
        'calories': meal.calories,
        'protein': meal.protein,
        'carbs': meal.carbs,
        'fats': meal.fats,
        'ingredients': [prep],
        'instructions': f'Preparation: {prep}.',
        'quantity': SERVING_LABEL,
        'why': why,
    }


def select_daily_meals(diet_type, age, goal, day=1, store=None, include_secondary_snack=False):
    """
    Deterministic meals for one day of the rotation.

    Args:
        diet_type: Free-form diet preference
        age: User age, picks the calorie tier
        goal: fat_loss, muscle_gain or anything else (maintenance)
        day: Cycle day; any integer is folded onto 1..28
        include_secondary_snack: Also return the rotation's second snack as 'snack_2'

    Returns:
        List of meal selections in slot order, or [] when the rotation has
        no cell for this day and tier
    """
    tier = calorie_tier(age)
    cycle_day = normalize_cycle_day(day)
    user_diet = normalize_diet_type(diet_type)

    cell = build_rotation(store=store).get(cycle_day, {}).get(tier)
    if cell is None:
        logger.error(f"rotation_cell_missing day={cycle_day} tier={tier}")
        return []

    slots = list(MEAL_SLOTS)
    if include_secondary_snack:
        slots.append(SECONDARY_SNACK_SLOT)

    why = f'Selected based on {age}y/{user_diet}/{goal} profile.'
    selected = []
    for slot in slots:
        meal_id = getattr(cell, slot)
        meal = find_meal_by_id(meal_id, store=store)
        if meal is None:
            logger.warning(f"meal_id_not_found meal_id={meal_id} slot={slot}")
            continue

        if not is_diet_compatible(user_diet, meal.diet_type):
            replacement = find_replacement(meal, user_diet, goal, store=store)
            logger.debug(f"meal_substituted slot={slot} from={meal.id} to={replacement.id}")
            meal = replacement

        selected.append(to_selection(meal, slot, why))
    return selected


def select_best_meal_for_slot(diet_type, age, slot_type, exclude_names, recent_meals=(), store=None):
    """
    Next meal for a single slot, used when the user asks for a different one.

    Filters the user's library to the slot and their calorie tier, drops
    anything named in ``exclude_names`` and returns the first remaining
    candidate, preferring one not in ``recent_meals``. Returns None when
    nothing remains.

    Skipping recently eaten meals goes beyond a plain first match: a meal
    served in the last few days only comes back once every other candidate
    for the slot has been excluded.
    """
    library = load_meal_library(diet_type, store=store)
    if library is None:
        return None

    slot = 'snack' if slot_type == SECONDARY_SNACK_SLOT else slot_type
    tier = calorie_tier(age)
    excluded = set(exclude_names or ())
    candidates = [
        meal for meal in library.meals
        if meal.meal_type == slot and meal.calorie_tier == tier and meal.name not in excluded
    ]
    if not candidates:
        return None

    recent = set(recent_meals or ())
    fresh = [meal for meal in candidates if meal.name not in recent]
    selected = (fresh or candidates)[0]
    return to_selection(selected, slot_type, 'Regenerated alternative.')
