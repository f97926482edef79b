"""
Logged Meals

What the user actually ate on a plan day, as one of three kinds:

- PlannedMeal: a plan meal marked as eaten
- AlternativeMeal: a plan meal replaced by something else
- ManualEntry: food logged outside the plan

Every consumer handles all three kinds; an unknown kind is a TypeError.
"""

from dataclasses import dataclass

from constants import (
    ALTERNATIVE_CALORIE_KEYWORDS,
    DEFAULT_ALTERNATIVE_CALORIES,
    ESTIMATED_PROTEIN_SHARE,
    MANUAL_BASE_CALORIES,
    PORTION_MULTIPLIERS,
)


@dataclass(frozen=True)
class PlannedMeal:
    meal_id: int
    name: str
    calories: int
    protein: int


@dataclass(frozen=True)
class AlternativeMeal:
    meal_id: int
    description: str
    calories: int
    protein: int


@dataclass(frozen=True)
class ManualEntry:
    manual_id: int
    description: str
    calories_min: int
    calories_max: int
    protein: int


def _protein_from_calories(calories):
    return int(round(calories * ESTIMATED_PROTEIN_SHARE / 4))


def estimate_alternative(description, portion_size):
    """Rough (calories, protein) for a described meal; first matching keyword wins."""
    text = (description or '').lower()
    base = DEFAULT_ALTERNATIVE_CALORIES
    for keyword, calories in ALTERNATIVE_CALORIE_KEYWORDS:
        if keyword in text:
            base = calories
            break
    calories = int(round(base * PORTION_MULTIPLIERS.get(portion_size, 1.0)))
    return calories, _protein_from_calories(calories)


def estimate_manual(meal_type, portion_size):
    """Conservative (calories_min, calories_max, protein) range for a manual entry."""
    base = MANUAL_BASE_CALORIES.get(meal_type, MANUAL_BASE_CALORIES['snack'])
    portion = base * PORTION_MULTIPLIERS.get(portion_size, 1.0)
    return int(round(portion * 0.8)), int(round(portion * 1.3)), _protein_from_calories(portion)


def logged_meals_for_plan(meals, manual_meals=()):
    """Build the logged view from PlanMeal and ManualMeal rows."""
    logged = []
    for meal in meals:
        if meal.consumed_alternative:
            logged.append(AlternativeMeal(
                meal_id=meal.id,
                description=meal.alternative_description or '',
                calories=meal.alternative_calories or 0,
                protein=meal.alternative_protein or 0,
            ))
        elif meal.is_consumed:
            logged.append(PlannedMeal(meal.id, meal.name, meal.calories, meal.protein))
    for entry in manual_meals:
        logged.append(ManualEntry(
            manual_id=entry.id,
            description=entry.description,
            calories_min=entry.estimated_calories_min or 0,
            calories_max=entry.estimated_calories_max or 0,
            protein=entry.estimated_protein or 0,
        ))
    return logged


def consumed_totals(logged):
    """(calories, protein) eaten. Manual entries count their upper estimate."""
    calories = protein = 0
    for item in logged:
        if isinstance(item, (PlannedMeal, AlternativeMeal)):
            calories += item.calories
        elif isinstance(item, ManualEntry):
            calories += item.calories_max
        else:
            raise TypeError(f'Unknown logged meal kind: {type(item).__name__}')
        protein += item.protein
    return calories, protein


def describe(item):
    """JSON-friendly dict with a ``kind`` tag."""
    if isinstance(item, PlannedMeal):
        return {'kind': 'planned', 'meal_id': item.meal_id, 'name': item.name,
                'calories': item.calories, 'protein': item.protein}
    if isinstance(item, AlternativeMeal):
        return {'kind': 'alternative', 'meal_id': item.meal_id, 'description': item.description,
                'calories': item.calories, 'protein': item.protein}
    if isinstance(item, ManualEntry):
        return {'kind': 'manual', 'manual_id': item.manual_id, 'description': item.description,
                'calories_min': item.calories_min, 'calories_max': item.calories_max,
                'protein': item.protein}
    raise TypeError(f'Unknown logged meal kind: {type(item).__name__}')
