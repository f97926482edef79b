import json
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from models import db, UserProfile
from services import FileContentStore, set_content_store

SLOTS = ('breakfast', 'lunch', 'snack', 'dinner')
TIERS = (1600, 1800, 2000)
SLOT_CALORIES = {'breakfast': 400, 'lunch': 600, 'snack': 200, 'dinner': 500}

PROFILE_DEFAULTS = {
    'age': 28,
    'gender': 'female',
    'height': 165,
    'current_weight': 72,
    'target_weight': 62,
    'daily_meal_count': 3,
    'activity_level': 'light',
    'dietary_preferences': 'Vegetarian',
    'time_availability': 30,
    'primary_goal': 'fat_loss',
    'region_preference': None,
}


def write_json(path, payload):
    with open(path, 'w', encoding='utf-8') as handle:
        json.dump(payload, handle)


def make_meal(meal_id, name, meal_type, diet_type, tier, protein=10, **extra):
    meal = {
        'id': meal_id,
        'name': name,
        'meal_type': meal_type,
        'diet_type': diet_type,
        'calorie_tier': tier,
        'calories': SLOT_CALORIES[meal_type] + (tier - 1600) // 10,
        'protein': protein,
        'carbs': 40,
        'fats': 10,
        'prep': f'Cook the {name.lower()}',
    }
    meal.update(extra)
    return meal


def library_meals(prefix, diet_type, per_slot):
    meals = []
    for tier in TIERS:
        for slot in SLOTS:
            for n in range(1, per_slot + 1):
                meals.append(make_meal(
                    f'{prefix}-{tier}-{slot}-{n}',
                    f'{prefix.title()} {slot.title()} {n} ({tier})',
                    slot,
                    diet_type,
                    tier,
                    protein=5 * n + 5,
                    region='north' if n == 1 else 'south',
                    goal=['fat_loss'] if n == 1 else ['muscle_gain'],
                ))
    return meals


def workout_option(name, day_type='workout', duration=30, steps=None):
    return {
        'day_type': day_type,
        'name': name,
        'type': 'recovery' if day_type == 'rest' else 'cardio',
        'intensity': 'none' if day_type == 'rest' else 'moderate',
        'duration_min': 0 if day_type == 'rest' else duration,
        'estimated_calories_burned': 0 if day_type == 'rest' else 200,
        'steps': steps or ['Warm Up Walk - easy pace', 'Push-ups - 3 sets of 10', 'Plank', 'Stretch - 5 minutes'],
        'week_progression': 1,
    }


WORKOUT_CATALOG = {
    'meta': {'version': 1},
    'workouts': [
        {
            'age_range': '18-40',
            'weight_category': 'overweight',
            'goal': 'fat_loss',
            'rotation_strategy': {'type': 'sequential'},
            'workout_options': [
                workout_option('Cardio Blast'),
                workout_option('Mobility Flow', day_type='mobility', duration=20),
                workout_option('Rest Day', day_type='rest', steps=['Light Walk - 15 minutes', 'Hydrate']),
            ],
        },
        {
            'age_range': '41–70',
            'weight_category': 'overweight',
            'goal': 'fat_loss',
            'workout_options': [workout_option('Brisk Walk', duration=25)],
        },
        {
            'age_range': '18 - 70',
            'weight_category': 'underweight',
            'goal': 'weight_gain',
            'workout_options': [
                workout_option('Strength Builder', duration=35),
                workout_option('Rest Day', day_type='rest'),
            ],
        },
        {
            'age_range': '18—70',
            'weight_category': 'obese',
            'goal': 'safe_fat_loss',
            'workout_options': [
                workout_option('Low Impact Cardio', duration=25),
                workout_option('Chair Mobility', day_type='mobility', duration=20),
            ],
        },
    ],
}


@pytest.fixture
def content_dir(tmp_path):
    """Data directory with small, fully populated catalogs."""
    write_json(tmp_path / 'veg.json', {'diet_type': 'veg', 'country': 'India',
                                       'meals': library_meals('veg', 'veg', 2)})
    write_json(tmp_path / 'egg.json', {'diet_type': 'egg', 'country': 'India',
                                       'meals': library_meals('egg', 'egg', 1)})
    write_json(tmp_path / 'non_veg.json', {'diet_type': 'non-veg', 'country': 'India',
                                           'meals': library_meals('nonveg', 'non-veg', 1)})
    write_json(tmp_path / 'workouts_database.json', WORKOUT_CATALOG)
    return tmp_path


@pytest.fixture
def store(content_dir):
    return FileContentStore(str(content_dir))


@pytest.fixture
def make_profile():
    """Unsaved UserProfile with every field the engine reads filled in."""
    def _make(user_id=1, **overrides):
        fields = dict(PROFILE_DEFAULTS)
        fields.update(overrides)
        return UserProfile(user_id=user_id, **fields)
    return _make


@pytest.fixture
def app(content_dir):
    from app import create_app

    app = create_app('testing', {'DATA_DIR': str(content_dir)})
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()
    set_content_store(None)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def saved_profile(app, make_profile):
    def _save(user_id=1, **overrides):
        profile = make_profile(user_id, **overrides)
        db.session.add(profile)
        db.session.commit()
        return profile
    return _save
