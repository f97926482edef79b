"""
Calorie and Macro Targets

Maps age to a calorie tier and a profile to daily calorie/protein targets.
"""

from collections import namedtuple

from constants import (
    ACTIVITY_MULTIPLIERS,
    MIN_CALORIES,
    MIN_CALORIES_DEFAULT,
    PROTEIN_PER_KG,
    PROTEIN_PER_KG_DEFAULT,
)

CalorieTargets = namedtuple('CalorieTargets', ['calories_target', 'protein_target'])

# Largest daily deficit applied for fat loss
MAX_DEFICIT = 700


def calorie_tier(age):
    """Daily calorie bucket for an age: under 30 -> 2000, 30-45 -> 1800, over 45 -> 1600."""
    if age < 30:
        return 2000
    if age <= 45:
        return 1800
    return 1600


def mifflin_st_jeor(gender, age, height_cm, weight_kg):
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base + 5 if (gender or '').lower() == 'male' else base - 161


def compute_tdee(bmr, activity_level):
    return bmr * ACTIVITY_MULTIPLIERS.get((activity_level or '').lower(), 1.2)


def calculate_targets(profile):
    """
    Daily calorie and protein targets for a profile.

    Mifflin-St Jeor BMR scaled by activity, then a 10% surplus for
    muscle_gain or a 20% deficit (at most 700 kcal) for fat_loss. Calories
    never drop below the gender floor; protein scales with body weight.
    """
    weight = profile.current_weight or 0
    bmr = mifflin_st_jeor(profile.gender, profile.age or 0, profile.height or 0, weight)
    tdee = compute_tdee(bmr, profile.activity_level)

    goal = profile.primary_goal
    if goal == 'muscle_gain':
        adjustment = tdee * 0.10
    elif goal == 'fat_loss':
        adjustment = max(-(tdee * 0.20), -MAX_DEFICIT)
    else:
        adjustment = 0

    floor = MIN_CALORIES.get((profile.gender or '').lower(), MIN_CALORIES_DEFAULT)
    calories = max(int(round(tdee + adjustment)), floor)

    protein = int(round(weight * PROTEIN_PER_KG.get(goal, PROTEIN_PER_KG_DEFAULT)))
    return CalorieTargets(calories, max(protein, 1))
