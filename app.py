from datetime import datetime

from flask import Flask, Blueprint, jsonify, request, current_app
from flask_migrate import Migrate
from loguru import logger

from config import get_config
from constants import DEFAULT_WATER_ML, MAX_LENGTHS, VALID_MANUAL_MEAL_TYPES, VALID_PORTION_SIZES
from models import db, UserProfile, DailyPlan, PlanMeal, PlanWorkout, ManualMeal
from services import (
    FileContentStore,
    PlanGenerationError,
    PlanStorage,
    ProfileIncompleteError,
    generate_plan_for_user,
    list_workout_categories,
    select_best_meal_for_slot,
    set_content_store,
)
from services.adaptation import activate, from_plan
from services.logged_meals import (
    consumed_totals,
    describe,
    estimate_alternative,
    estimate_manual,
    logged_meals_for_plan,
)
from utils import configure_logging, parse_bool, parse_plan_date, safe_int, sanitize_text

api = Blueprint('api', __name__, url_prefix='/api')
migrate = Migrate()


class BadRequest(Exception):
    """Raised by request parsing helpers; rendered as a 400 response."""
    pass


# ============================================
# SERIALIZATION
# ============================================

def serialize_meal(meal):
    return {
        'id': meal.id,
        'type': meal.type,
        'name': meal.name,
        'calories': meal.calories,
        'protein': meal.protein,
        'carbs': meal.carbs,
        'fats': meal.fats,
        'ingredients': meal.ingredients or [],
        'instructions': meal.instructions,
        'is_consumed': meal.is_consumed,
        'consumed_at': meal.consumed_at.isoformat() if meal.consumed_at else None,
        'consumed_alternative': meal.consumed_alternative,
        'alternative_description': meal.alternative_description,
        'alternative_calories': meal.alternative_calories,
        'alternative_protein': meal.alternative_protein,
    }


def serialize_workout(workout):
    return {
        'id': workout.id,
        'type': workout.type,
        'name': workout.name,
        'duration': workout.duration,
        'difficulty': workout.difficulty,
        'exercises': workout.exercises or [],
        'is_completed': workout.is_completed,
        'completed_at': workout.completed_at.isoformat() if workout.completed_at else None,
        'feedback': workout.feedback,
    }


def serialize_manual_meal(entry):
    return {
        'id': entry.id,
        'description': entry.description,
        'portion_size': entry.portion_size,
        'meal_type': entry.meal_type,
        'estimated_calories_min': entry.estimated_calories_min,
        'estimated_calories_max': entry.estimated_calories_max,
        'estimated_protein': entry.estimated_protein,
    }


def serialize_plan(plan):
    logged = logged_meals_for_plan(plan.meals, plan.manual_meals)
    return {
        'id': plan.id,
        'user_id': plan.user_id,
        'date': plan.date.isoformat(),
        'calories_target': plan.calories_target,
        'protein_target': plan.protein_target,
        'calories_consumed': plan.calories_consumed,
        'protein_consumed': plan.protein_consumed,
        'water_intake': plan.water_intake,
        'adaptation_active': plan.adaptation_active,
        'adaptation_days_remaining': plan.adaptation_days_remaining,
        'status': plan.status,
        'meals': [serialize_meal(meal) for meal in plan.meals],
        'workouts': [serialize_workout(workout) for workout in plan.workouts],
        'manual_meals': [serialize_manual_meal(entry) for entry in plan.manual_meals],
        'logged_meals': [describe(item) for item in logged],
    }


def refresh_consumed(plan):
    """Recompute the plan's consumed totals from its logged meals."""
    calories, protein = consumed_totals(logged_meals_for_plan(plan.meals, plan.manual_meals))
    plan.calories_consumed = calories
    plan.protein_consumed = protein


# ============================================
# REQUEST HELPERS
# ============================================

def json_body():
    return request.get_json(silent=True) or {}


def require_date(value):
    plan_date = parse_plan_date(value)
    if plan_date is None:
        raise BadRequest('A valid date (YYYY-MM-DD) is required')
    return plan_date


def require_choice(value, choices, field):
    value = (value or '').strip().lower()
    if value not in choices:
        raise BadRequest(f"Invalid {field}. Expected one of: {', '.join(sorted(choices))}")
    return value


def require_text(value, field):
    text = sanitize_text(value, max_length=MAX_LENGTHS.get(field, 500))
    if not text:
        raise BadRequest(f'{field} is required')
    return text


def user_meal_or_404(user_id, meal_id):
    meal = db.session.get(PlanMeal, meal_id)
    if meal is None or meal.plan.user_id != user_id:
        return None
    return meal


# ============================================
# ROUTES - PROFILE
# ============================================

@api.put('/users/<int:user_id>/profile')
def profile_upsert(user_id):
    data = json_body()
    profile = UserProfile.query.filter_by(user_id=user_id).first()
    if profile is None:
        profile = UserProfile(user_id=user_id)
        db.session.add(profile)

    profile.age = safe_int(data.get('age'), default=profile.age or 30, min_val=13, max_val=100)
    profile.gender = sanitize_text(data.get('gender') or profile.gender or 'other', max_length=20).lower()
    profile.height = safe_int(data.get('height'), default=profile.height or 170, min_val=100, max_val=250)
    profile.current_weight = safe_int(data.get('current_weight'), default=profile.current_weight or 70,
                                      min_val=25, max_val=350)
    profile.target_weight = safe_int(data.get('target_weight'), default=profile.target_weight or 0,
                                     min_val=0, max_val=350) or None
    profile.daily_meal_count = safe_int(data.get('daily_meal_count'), default=profile.daily_meal_count or 3,
                                        min_val=3, max_val=5)
    profile.activity_level = sanitize_text(data.get('activity_level') or profile.activity_level or 'sedentary',
                                           max_length=20).lower()
    profile.dietary_preferences = sanitize_text(data.get('dietary_preferences') or profile.dietary_preferences
                                                or 'veg', max_length=50)
    profile.time_availability = safe_int(data.get('time_availability'), default=profile.time_availability or 30,
                                         min_val=0, max_val=240)
    profile.primary_goal = sanitize_text(data.get('primary_goal') or profile.primary_goal or 'fat_loss',
                                         max_length=30).lower()
    if 'region_preference' in data:
        profile.region_preference = sanitize_text(data.get('region_preference'), max_length=30) or None

    db.session.commit()
    return jsonify({'user_id': profile.user_id, 'age': profile.age, 'daily_meal_count': profile.daily_meal_count,
                    'dietary_preferences': profile.dietary_preferences, 'primary_goal': profile.primary_goal})


# ============================================
# ROUTES - PLANS
# ============================================

@api.post('/users/<int:user_id>/plans')
def plan_generate(user_id):
    plan_date = require_date(json_body().get('date'))
    storage = PlanStorage()
    generated = generate_plan_for_user(user_id, plan_date, storage)

    plan = storage.get_plan_by_id(generated.plan_id)
    payload = serialize_plan(plan)
    payload['generation'] = {
        'cycle_day': generated.cycle_day,
        'meal_source': generated.meal_source,
        'used_fallback': generated.used_fallback,
        'targets': generated.targets._asdict(),
        'adaptation_bonus': generated.adaptation_bonus,
        'warnings': generated.warnings,
    }
    return jsonify(payload), 201


@api.get('/users/<int:user_id>/plans/<plan_date>')
def plan_view(user_id, plan_date):
    plan = DailyPlan.query.filter_by(user_id=user_id, date=require_date(plan_date)).first()
    if plan is None:
        return jsonify({'message': 'Plan not found'}), 404
    return jsonify(serialize_plan(plan))


@api.patch('/users/<int:user_id>/plans/<plan_date>/water')
def plan_water(user_id, plan_date):
    plan = DailyPlan.query.filter_by(user_id=user_id, date=require_date(plan_date)).first()
    if plan is None:
        return jsonify({'message': 'Plan not found'}), 404
    amount = safe_int(json_body().get('amount'), default=DEFAULT_WATER_ML, min_val=0, max_val=5000)
    plan.water_intake = (plan.water_intake or 0) + amount
    db.session.commit()
    return jsonify(serialize_plan(plan))


# ============================================
# ROUTES - MEALS
# ============================================

@api.post('/users/<int:user_id>/meals/<int:meal_id>/regenerate')
def meal_regenerate(user_id, meal_id):
    meal = user_meal_or_404(user_id, meal_id)
    if meal is None:
        return jsonify({'message': 'Meal not found'}), 404

    storage = PlanStorage()
    profile = storage.get_user_profile(user_id)
    if profile is None:
        return jsonify({'message': 'Profile not found'}), 400

    recent = storage.get_recent_meal_names(user_id, 20)
    next_best = select_best_meal_for_slot(profile.dietary_preferences, profile.age, meal.type, {meal.name}, recent)
    if next_best is None:
        return jsonify({
            'status': 'error',
            'message': 'No alternative meals found for this slot and calorie tier.',
            'reason': 'NO_ALTERNATIVES',
        }), 404

    meal.name = next_best['name']
    meal.calories = next_best['calories']
    meal.protein = next_best['protein']
    meal.carbs = next_best['carbs']
    meal.fats = next_best['fats']
    meal.ingredients = next_best['ingredients']
    meal.instructions = next_best['instructions']
    meal.is_consumed = False
    meal.consumed_at = None
    meal.consumed_alternative = False
    refresh_consumed(meal.plan)
    db.session.commit()
    logger.info(f"meal_regenerated meal_id={meal_id} name={meal.name!r}")
    return jsonify(serialize_meal(meal))


@api.patch('/meals/<int:meal_id>/consumed')
def meal_consumed(meal_id):
    meal = db.session.get(PlanMeal, meal_id)
    if meal is None:
        return jsonify({'message': 'Meal not found'}), 404
    meal.is_consumed = parse_bool(json_body().get('is_consumed', True))
    meal.consumed_at = datetime.utcnow() if meal.is_consumed else None
    meal.consumed_alternative = False
    meal.alternative_description = None
    meal.alternative_calories = None
    meal.alternative_protein = None
    refresh_consumed(meal.plan)
    db.session.commit()
    return jsonify(serialize_meal(meal))


@api.post('/meals/<int:meal_id>/alternative')
def meal_alternative(meal_id):
    meal = db.session.get(PlanMeal, meal_id)
    if meal is None:
        return jsonify({'message': 'Meal not found'}), 404
    data = json_body()
    description = require_text(data.get('description'), 'description')
    portion_size = require_choice(data.get('portion_size') or 'medium', VALID_PORTION_SIZES, 'portion_size')

    calories, protein = estimate_alternative(description, portion_size)
    meal.is_consumed = False
    meal.consumed_at = None
    meal.consumed_alternative = True
    meal.alternative_description = description
    meal.alternative_calories = calories
    meal.alternative_protein = protein
    refresh_consumed(meal.plan)
    db.session.commit()
    return jsonify(serialize_meal(meal))


@api.post('/plans/<int:plan_id>/manual-meals')
def manual_meal_log(plan_id):
    plan = db.session.get(DailyPlan, plan_id)
    if plan is None:
        return jsonify({'message': 'Plan not found'}), 404
    data = json_body()
    description = require_text(data.get('description'), 'description')
    portion_size = require_choice(data.get('portion_size'), VALID_PORTION_SIZES, 'portion_size')
    meal_type = require_choice(data.get('meal_type'), VALID_MANUAL_MEAL_TYPES, 'meal_type')

    calories_min, calories_max, protein = estimate_manual(meal_type, portion_size)
    entry = ManualMeal(
        plan=plan,
        description=description,
        portion_size=portion_size,
        meal_type=meal_type,
        estimated_calories_min=calories_min,
        estimated_calories_max=calories_max,
        estimated_protein=protein,
    )
    db.session.add(entry)
    db.session.flush()

    # Off-plan food starts the extra-workout countdown unless one is running
    state = activate(from_plan(plan), current_app.config['ADAPTATION_DAYS'])
    plan.adaptation_active = state.active
    plan.adaptation_days_remaining = state.days_remaining
    refresh_consumed(plan)
    db.session.commit()
    return jsonify(serialize_manual_meal(entry)), 201


# ============================================
# ROUTES - WORKOUTS
# ============================================

@api.get('/workouts/categories')
def workout_categories():
    return jsonify(list_workout_categories())


@api.patch('/workouts/<int:workout_id>/complete')
def workout_complete(workout_id):
    workout = db.session.get(PlanWorkout, workout_id)
    if workout is None:
        return jsonify({'message': 'Workout not found'}), 404
    data = json_body()
    workout.is_completed = parse_bool(data.get('is_completed', True))
    workout.completed_at = datetime.utcnow() if workout.is_completed else None
    if 'feedback' in data:
        workout.feedback = sanitize_text(data.get('feedback'), max_length=MAX_LENGTHS['feedback']) or None
    db.session.commit()
    logger.info(f"workout_completed workout_id={workout.id} completed={workout.is_completed}")
    return jsonify(serialize_workout(workout))


# ============================================
# ERROR HANDLERS
# ============================================

@api.errorhandler(BadRequest)
def handle_bad_request(exc):
    return jsonify({'message': str(exc)}), 400


@api.errorhandler(ProfileIncompleteError)
def handle_profile_incomplete(exc):
    return jsonify({'message': str(exc)}), 400


@api.errorhandler(PlanGenerationError)
def handle_generation_error(exc):
    return jsonify({'message': str(exc), 'details': exc.details}), 500


# ============================================
# APP FACTORY
# ============================================

def create_app(config_name=None, config_overrides=None):
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    if config_overrides:
        app.config.update(config_overrides)

    configure_logging(app.config['LOG_LEVEL'])
    set_content_store(FileContentStore(
        app.config['DATA_DIR'],
        app.config['MEAL_LIBRARY_FILES'],
        app.config['WORKOUT_CATALOG_FILE'],
    ))

    db.init_app(app)
    migrate.init_app(app, db)
    app.register_blueprint(api)

    @app.get('/health')
    def health():
        return jsonify({'status': 'ok'})

    return app


# ============================================
# INITIALIZE DATABASE
# ============================================

def init_db(app):
    with app.app_context():
        # Enable SQLite foreign key enforcement
        from sqlalchemy import event
        from sqlalchemy.engine import Engine
        import sqlite3

        @event.listens_for(Engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            if isinstance(dbapi_connection, sqlite3.Connection):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

        db.create_all()
        logger.info(f"database_ready uri={app.config['SQLALCHEMY_DATABASE_URI']}")


if __name__ == '__main__':
    app = create_app()
    init_db(app)
    # host='0.0.0.0' allows access from other devices on the network
    app.run(debug=app.config.get('DEBUG', False), host='0.0.0.0', port=5000, use_reloader=False)
