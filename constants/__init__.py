"""
Constants Package

Meal, workout and validation constants shared by the plan engine and the API.
"""

from .meals import (
    MEAL_SLOTS,
    SECONDARY_SNACK_SLOT,
    CALORIE_TIERS,
    CYCLE_LENGTH,
    DIET_VEG,
    DIET_EGG,
    DIET_NON_VEG,
    DIET_TYPES,
    PROTEIN_FIRST_GOALS,
    DEFAULT_GOAL,
    SERVING_LABEL,
    FALLBACK_MEALS,
    FALLBACK_SNACKS,
    PORTION_MULTIPLIERS,
    ALTERNATIVE_CALORIE_KEYWORDS,
    DEFAULT_ALTERNATIVE_CALORIES,
    MANUAL_BASE_CALORIES,
    ESTIMATED_PROTEIN_SHARE,
)

from .workouts import (
    WEIGHT_CATEGORY_GOALS,
    OBESE_BMI,
    DEFAULT_BMI,
    REST_DAY,
    PHASE_WARMUP,
    PHASE_MAIN,
    PHASE_COOLDOWN,
    STEP_DURATION_SECONDS,
    DEFAULT_STEP_INSTRUCTION,
    ADAPTATION_BONUS_MINUTES,
    DEFAULT_TIME_AVAILABILITY,
    FALLBACK_WORKOUT,
    FALLBACK_EXERCISES,
)

from .validation import (
    VALID_PORTION_SIZES,
    VALID_MANUAL_MEAL_TYPES,
    ACTIVITY_MULTIPLIERS,
    MIN_CALORIES,
    MIN_CALORIES_DEFAULT,
    PROTEIN_PER_KG,
    PROTEIN_PER_KG_DEFAULT,
    DEFAULT_WATER_ML,
    MAX_LENGTHS,
)
