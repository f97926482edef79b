"""
Meal Constants

Slots, calorie tiers, cycle length and the static fallback meals used
when the rotation cannot produce a day's meals.
"""

# Primary meal slots in the order they are served
MEAL_SLOTS = ('breakfast', 'lunch', 'snack', 'dinner')

# Extra slot used when a profile eats more than three meals a day
SECONDARY_SNACK_SLOT = 'snack_2'

# Daily calorie buckets, lowest first
CALORIE_TIERS = (1600, 1800, 2000)

# Length of the repeating meal rotation
CYCLE_LENGTH = 28

# Diet classifications and the libraries searched when resolving a meal id
DIET_VEG = 'veg'
DIET_EGG = 'egg'
DIET_NON_VEG = 'non-veg'
DIET_TYPES = (DIET_VEG, DIET_NON_VEG, DIET_EGG)

# Goals that rank substitutes by protein instead of name
PROTEIN_FIRST_GOALS = {'fat_loss', 'muscle_gain'}

DEFAULT_GOAL = 'fat_loss'
SERVING_LABEL = '1 Serving'

# Served when deterministic selection yields nothing. Safe for every diet.
FALLBACK_MEALS = [
    {
        'type': 'breakfast',
        'name': 'Oats & Milk with Almonds (Fallback)',
        'calories': 400,
        'protein': 15,
        'carbs': 55,
        'fats': 12,
        'ingredients': ['Oats', 'Milk', 'Almonds'],
        'instructions': 'Boil oats in milk, top with nuts.',
    },
    {
        'type': 'lunch',
        'name': 'Dal Tadka & Rice (Fallback)',
        'calories': 600,
        'protein': 20,
        'carbs': 90,
        'fats': 14,
        'ingredients': ['Dal', 'Rice', 'Spices'],
        'instructions': 'Standard home-cooked yellow dal with steamed rice.',
    },
    {
        'type': 'dinner',
        'name': 'Mixed Veg Curry & Roti (Fallback)',
        'calories': 500,
        'protein': 12,
        'carbs': 70,
        'fats': 16,
        'ingredients': ['Mixed Vegetables', 'Whole Wheat Flour'],
        'instructions': 'Lightly spiced vegetable curry with 2 rotis.',
    },
]

# Added to the fallback triple for profiles with more than three meals
FALLBACK_SNACKS = [
    {
        'type': 'snack',
        'name': 'Roasted Chana (Fallback)',
        'calories': 200,
        'protein': 8,
        'carbs': 28,
        'fats': 4,
        'ingredients': ['Roasted Bengal Gram'],
        'instructions': 'A handful of roasted chana.',
    },
    {
        'type': 'snack_2',
        'name': 'Green Tea & Walnuts (Fallback)',
        'calories': 200,
        'protein': 5,
        'carbs': 6,
        'fats': 18,
        'ingredients': ['Green Tea', 'Walnuts'],
        'instructions': 'Warm green tea with 3-4 walnuts.',
    },
]

# Portion multipliers for off-plan meal estimates
PORTION_MULTIPLIERS = {'small': 0.7, 'medium': 1.0, 'large': 1.4}

# Keyword -> base calories for "I ate something else" estimates (first match wins)
ALTERNATIVE_CALORIE_KEYWORDS = (
    ('salad', 250),
    ('pizza', 450),
    ('burger', 550),
    ('sandwich', 400),
    ('rice', 350),
    ('pasta', 450),
    ('fruit', 150),
    ('snack', 200),
    ('dessert', 350),
    ('chicken', 350),
    ('fish', 300),
    ('soup', 200),
)
DEFAULT_ALTERNATIVE_CALORIES = 350

# Base calories for manual entries by kind
MANUAL_BASE_CALORIES = {'meal': 500, 'snack': 200}

# Share of calories assumed to come from protein in estimates
ESTIMATED_PROTEIN_SHARE = 0.15
