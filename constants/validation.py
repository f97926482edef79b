"""
Validation Constants

Contains whitelist values for validating request bodies before they
reach the plan engine or the database.
"""

# Valid portion sizes for off-plan meals
VALID_PORTION_SIZES = {'small', 'medium', 'large'}

# Valid kinds of manual entries
VALID_MANUAL_MEAL_TYPES = {'meal', 'snack'}

# Activity multipliers for the TDEE estimate (unknown levels fall back to sedentary)
ACTIVITY_MULTIPLIERS = {
    'sedentary': 1.2,
    'light': 1.375,
    'moderate': 1.55,
    'active': 1.725,
    'very': 1.725,
    'athlete': 1.9,
}

# Minimum daily calories by gender
MIN_CALORIES = {'male': 1500}
MIN_CALORIES_DEFAULT = 1200

# Protein grams per kg of body weight by goal
PROTEIN_PER_KG = {'muscle_gain': 2.2, 'recomposition': 2.0}
PROTEIN_PER_KG_DEFAULT = 1.8

# Default water added per log call, in ml
DEFAULT_WATER_ML = 250

# Maximum field lengths
MAX_LENGTHS = {
    'description': 500,
    'feedback': 1000,
}
