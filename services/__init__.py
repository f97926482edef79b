"""
Services Package

The daily plan engine: content loading, targets, meal rotation and
selection, workout matching and plan assembly.
"""

from .exceptions import (
    FitplanError,
    ProfileIncompleteError,
    PlanGenerationError,
)

from .content import (
    FileContentStore,
    get_content_store,
    set_content_store,
    normalize_diet_type,
    load_meal_library,
    load_workout_catalog,
)

from .targets import (
    CalorieTargets,
    calorie_tier,
    calculate_targets,
)

from .rotation import (
    RotationCell,
    build_rotation,
)

from .meal_selection import (
    normalize_cycle_day,
    is_diet_compatible,
    find_meal_by_id,
    find_replacement,
    select_daily_meals,
    select_best_meal_for_slot,
)

from .workout_matcher import (
    classify_profile,
    parse_age_range,
    select_workout_for_profile,
    list_workout_categories,
)

from .adaptation import (
    AdaptationState,
    INACTIVE,
)

from .plan_assembly import (
    GeneratedPlan,
    cycle_day_for_date,
    build_plan,
    generate_plan,
    generate_plan_for_user,
)

from .storage import PlanStorage

__all__ = [
    # Errors
    'FitplanError',
    'ProfileIncompleteError',
    'PlanGenerationError',
    # Content
    'FileContentStore',
    'get_content_store',
    'set_content_store',
    'normalize_diet_type',
    'load_meal_library',
    'load_workout_catalog',
    # Targets
    'CalorieTargets',
    'calorie_tier',
    'calculate_targets',
    # Rotation
    'RotationCell',
    'build_rotation',
    # Meals
    'normalize_cycle_day',
    'is_diet_compatible',
    'find_meal_by_id',
    'find_replacement',
    'select_daily_meals',
    'select_best_meal_for_slot',
    # Workouts
    'classify_profile',
    'parse_age_range',
    'select_workout_for_profile',
    'list_workout_categories',
    # Adaptation
    'AdaptationState',
    'INACTIVE',
    # Assembly
    'GeneratedPlan',
    'cycle_day_for_date',
    'build_plan',
    'generate_plan',
    'generate_plan_for_user',
    # Storage
    'PlanStorage',
]
