"""
Catalog Records

Immutable in-memory shapes for the meal libraries and the workout catalog,
parsed from the raw JSON handed back by the content store.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class MealRecord:
    id: str
    name: str
    meal_type: str
    diet_type: str
    calorie_tier: int
    calories: int
    protein: int
    carbs: int = 0
    fats: int = 0
    prep: str = ''
    region: str = ''
    goals: tuple = ()


@dataclass(frozen=True)
class MealLibrary:
    diet_type: str
    country: str
    meals: tuple

    def find(self, meal_id):
        for meal in self.meals:
            if meal.id == meal_id:
                return meal
        return None


@dataclass(frozen=True)
class WorkoutStep:
    day_type: str
    name: str
    type: str
    intensity: str
    duration_min: int
    estimated_calories_burned: int
    steps: tuple
    week_progression: int = 1


@dataclass(frozen=True)
class WorkoutCategory:
    age_range: str
    weight_category: str
    goal: str
    workout_options: tuple
    rotation_strategy: dict = field(default_factory=dict, compare=False, hash=False)


@dataclass(frozen=True)
class WorkoutCatalog:
    meta: dict = field(default_factory=dict, compare=False, hash=False)
    workouts: tuple = ()


EMPTY_WORKOUT_CATALOG = WorkoutCatalog()


def _as_int(value, default=0):
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _string_tuple(values):
    if not isinstance(values, list):
        return tuple()
    return tuple(str(item).strip() for item in values if str(item or '').strip())


def parse_meal(raw, normalize_diet):
    """Build a MealRecord from a catalog entry, or None if required keys are missing."""
    if not isinstance(raw, dict):
        return None
    meal_id = str(raw.get('id') or '').strip()
    name = str(raw.get('name') or '').strip()
    meal_type = str(raw.get('meal_type') or '').strip().lower()
    if not meal_id or not name or not meal_type:
        return None
    return MealRecord(
        id=meal_id,
        name=name,
        meal_type=meal_type,
        diet_type=normalize_diet(str(raw.get('diet_type') or '')),
        calorie_tier=_as_int(raw.get('calorie_tier')),
        calories=_as_int(raw.get('calories')),
        protein=_as_int(raw.get('protein')),
        carbs=_as_int(raw.get('carbs')),
        fats=_as_int(raw.get('fats')),
        prep=str(raw.get('prep') or ''),
        region=str(raw.get('region') or ''),
        goals=_string_tuple(raw.get('goal')),
    )


def parse_workout_step(raw):
    if not isinstance(raw, dict) or not raw.get('name'):
        return None
    return WorkoutStep(
        day_type=str(raw.get('day_type') or 'workout').strip().lower(),
        name=str(raw['name']).strip(),
        type=str(raw.get('type') or 'strength'),
        intensity=str(raw.get('intensity') or ''),
        duration_min=_as_int(raw.get('duration_min')),
        estimated_calories_burned=_as_int(raw.get('estimated_calories_burned')),
        steps=_string_tuple(raw.get('steps')),
        week_progression=_as_int(raw.get('week_progression'), 1),
    )


def parse_workout_category(raw):
    if not isinstance(raw, dict):
        return None
    options = [parse_workout_step(item) for item in raw.get('workout_options') or []]
    return WorkoutCategory(
        age_range=str(raw.get('age_range') or ''),
        weight_category=str(raw.get('weight_category') or '').strip().lower(),
        goal=str(raw.get('goal') or '').strip().lower(),
        workout_options=tuple(option for option in options if option is not None),
        rotation_strategy=dict(raw.get('rotation_strategy') or {}),
    )
