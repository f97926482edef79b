"""
Monthly Meal Rotation

Builds the 28-day x calorie-tier table of meal ids from the veg baseline
library. Rebuilt on every call so library edits take effect immediately.
"""

from collections import namedtuple

from loguru import logger

from constants import CALORIE_TIERS, CYCLE_LENGTH, DIET_VEG
from .content import load_meal_library

RotationCell = namedtuple('RotationCell', ['breakfast', 'lunch', 'snack', 'dinner', 'snack_2'])


def build_rotation(store=None):
    """
    Build the rotation table ``{cycle_day: {tier: RotationCell}}``.

    Day N takes candidate ``(N-1) % len`` from each slot's list for the tier,
    and the secondary snack takes ``N % len`` so it differs from the primary
    snack whenever the tier has more than one snack. A (day, tier) cell is
    left out when any slot has no candidates for that tier.
    """
    baseline = load_meal_library(DIET_VEG, store=store)
    if baseline is None:
        return {}

    partitions = {}
    for tier in CALORIE_TIERS:
        of_tier = [meal for meal in baseline.meals if meal.calorie_tier == tier]
        partitions[tier] = {
            slot: [meal for meal in of_tier if meal.meal_type == slot]
            for slot in ('breakfast', 'lunch', 'snack', 'dinner')
        }
        if not all(partitions[tier].values()):
            counts = {slot: len(items) for slot, items in partitions[tier].items()}
            logger.warning(f"rotation_tier_incomplete tier={tier} counts={counts}")

    table = {}
    for day in range(1, CYCLE_LENGTH + 1):
        table[day] = {}
        for tier in CALORIE_TIERS:
            slots = partitions[tier]
            if not all(slots.values()):
                continue
            snacks = slots['snack']
            table[day][tier] = RotationCell(
                breakfast=slots['breakfast'][(day - 1) % len(slots['breakfast'])].id,
                lunch=slots['lunch'][(day - 1) % len(slots['lunch'])].id,
                snack=snacks[(day - 1) % len(snacks)].id,
                dinner=slots['dinner'][(day - 1) % len(slots['dinner'])].id,
                snack_2=snacks[day % len(snacks)].id,
            )
    return table
