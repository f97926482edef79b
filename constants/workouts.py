"""
Workout Constants

Weight-category buckets, phase names and the static workout served when
the catalog has nothing for a profile.
"""

# Weight categories and the goal each one is paired with in the catalog
WEIGHT_CATEGORY_GOALS = {
    'underweight': 'weight_gain',
    'overweight': 'fat_loss',
    'obese': 'safe_fat_loss',
}

# BMI at or above this maps to the obese bucket
OBESE_BMI = 30

# Assumed when height is missing
DEFAULT_BMI = 22

REST_DAY = 'rest'

# Exercise phases
PHASE_WARMUP = 'warmup'
PHASE_MAIN = 'main'
PHASE_COOLDOWN = 'cooldown'

# Seconds allotted to each catalog step
STEP_DURATION_SECONDS = 300
DEFAULT_STEP_INSTRUCTION = 'Focus on movement and form'

# Extra minutes added while an adaptation is running
ADAPTATION_BONUS_MINUTES = 5

DEFAULT_TIME_AVAILABILITY = 30

FALLBACK_WORKOUT = {
    'name': 'Full Body Home Workout',
    'type': 'strength',
    'difficulty': 'beginner',
}

FALLBACK_EXERCISES = [
    {'name': 'Jumping Jacks', 'duration': 60, 'instruction': 'Warm up with light cardio', 'phase': PHASE_WARMUP},
    {'name': 'Push-ups', 'duration': 45, 'instruction': 'Keep back straight, core engaged', 'phase': PHASE_MAIN},
    {'name': 'Squats', 'duration': 45, 'instruction': 'Knees behind toes, go low', 'phase': PHASE_MAIN},
    {'name': 'Plank', 'duration': 30, 'instruction': 'Hold position, breathe steadily', 'phase': PHASE_MAIN},
    {'name': 'Stretching', 'duration': 60, 'instruction': 'Cool down and stretch', 'phase': PHASE_COOLDOWN},
]
