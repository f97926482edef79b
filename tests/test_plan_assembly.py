from datetime import date

import pytest

from models import db, DailyPlan, PlanMeal, PlanWorkout
from services import (
    FileContentStore,
    PlanGenerationError,
    PlanStorage,
    ProfileIncompleteError,
    build_plan,
    cycle_day_for_date,
    generate_plan,
    generate_plan_for_user,
)
from services.adaptation import AdaptationState
from services.plan_assembly import build_workout, split_step, step_phase
from services.records import WorkoutStep

PLAN_DATE = date(2024, 3, 1)


@pytest.mark.parametrize('plan_date, cycle_day', [
    (date(2024, 1, 1), 2),
    (date(2024, 1, 27), 28),
    (date(2024, 1, 28), 1),
    (date(2024, 3, 1), 6),
    (date(2024, 12, 31), 3),
])
def test_cycle_day_for_date(plan_date, cycle_day):
    assert cycle_day_for_date(plan_date) == cycle_day


@pytest.mark.parametrize('text, expected', [
    ('Squats - 3 sets of 12', ('Squats', '3 sets of 12')),
    ('Push-ups - 3 sets of 10', ('Push-ups', '3 sets of 10')),
    ('Warrior II – hold 30 seconds', ('Warrior II', 'hold 30 seconds')),
    ('Plank', ('Plank', 'Focus on movement and form')),
])
def test_split_step(text, expected):
    assert split_step(text) == expected


def test_step_phases():
    assert [step_phase(i, 4) for i in range(4)] == ['warmup', 'main', 'main', 'cooldown']


def session(name, day_type='workout', duration=30):
    return WorkoutStep(day_type=day_type, name=name, type='cardio', intensity='moderate',
                       duration_min=duration, estimated_calories_burned=200,
                       steps=('Walk - easy', 'Squats - 3 sets', 'Stretch'))


def test_build_workout_adds_bonus(make_profile):
    workout = build_workout(session('Cardio Blast'), make_profile(), bonus=5)

    assert workout['duration'] == 35
    assert workout['is_completed'] is False
    assert [exercise['phase'] for exercise in workout['exercises']] == ['warmup', 'main', 'cooldown']
    assert workout['exercises'][1] == {'name': 'Squats', 'duration': 300, 'instruction': '3 sets', 'phase': 'main'}


def test_rest_day_is_complete_and_zero_length(make_profile):
    workout = build_workout(session('Rest Day', day_type='rest', duration=0), make_profile(), bonus=5)

    assert workout['duration'] == 0
    assert workout['is_completed'] is True
    assert all(exercise['duration'] == 0 for exercise in workout['exercises'])


def test_missing_template_uses_default_workout(make_profile):
    workout = build_workout(None, make_profile(time_availability=45), bonus=5)

    assert workout['name'] == 'Full Body Home Workout'
    assert workout['duration'] == 50
    assert workout['exercises'][0]['phase'] == 'warmup'


def test_three_meal_plan(store, make_profile):
    plan = build_plan(1, PLAN_DATE, make_profile(), store=store)

    assert plan.cycle_day == 6
    assert [meal['type'] for meal in plan.meals] == ['breakfast', 'lunch', 'dinner']
    assert plan.meals[0]['name'] == 'Veg Breakfast 2 (2000)'
    assert plan.calories_total == sum(meal['calories'] for meal in plan.meals)
    assert plan.protein_total == sum(meal['protein'] for meal in plan.meals)
    assert plan.workout['name'] == 'Cardio Blast'
    assert plan.used_fallback is False
    assert plan.warnings == []


def test_five_meal_plan(store, make_profile):
    plan = build_plan(1, PLAN_DATE, make_profile(daily_meal_count=5), store=store)
    assert [meal['type'] for meal in plan.meals] == ['breakfast', 'lunch', 'snack', 'dinner', 'snack_2']


def test_plan_is_identical_for_every_user_on_a_date(store, make_profile):
    first = build_plan(1, PLAN_DATE, make_profile(1), store=store)
    second = build_plan(2, PLAN_DATE, make_profile(2), store=store)
    assert first.meals == second.meals


def test_static_fallback_when_rotation_is_empty(tmp_path, make_profile):
    empty_store = FileContentStore(str(tmp_path))

    plan = build_plan(1, PLAN_DATE, make_profile(daily_meal_count=5), store=empty_store)

    assert plan.meal_source == 'static_fallback'
    assert plan.used_fallback is True
    assert len(plan.meals) == 5
    assert all('(Fallback)' in meal['name'] for meal in plan.meals)
    assert plan.workout['name'] == 'Full Body Home Workout'
    assert len(plan.warnings) == 2


def test_to_dict_is_serializable(store, make_profile):
    data = build_plan(1, PLAN_DATE, make_profile(), store=store).to_dict()

    assert data['date'] == '2024-03-01'
    assert data['used_fallback'] is False
    assert data['adaptation'] == {'active': False, 'days_remaining': 0}
    assert set(data['targets']) == {'calories_target', 'protein_target'}


def test_generate_plan_persists_rows(app, store, make_profile):
    plan = generate_plan(1, PLAN_DATE, make_profile(), PlanStorage(), store=store)

    row = db.session.get(DailyPlan, plan.plan_id)
    assert row.calories_target == plan.calories_total
    assert row.protein_target == plan.protein_total
    assert [meal.type for meal in row.meals] == ['breakfast', 'lunch', 'dinner']
    assert len(row.workouts) == 1
    assert row.workouts[0].exercises[0]['phase'] == 'warmup'


def test_regenerating_replaces_children_and_keeps_water(app, store, make_profile):
    storage = PlanStorage()
    first = generate_plan(1, PLAN_DATE, make_profile(), storage, store=store)
    row = db.session.get(DailyPlan, first.plan_id)
    row.water_intake = 750
    db.session.commit()

    second = generate_plan(1, PLAN_DATE, make_profile(daily_meal_count=5), storage, store=store)

    assert second.plan_id == first.plan_id
    assert DailyPlan.query.filter_by(user_id=1).count() == 1
    assert PlanMeal.query.filter_by(plan_id=first.plan_id).count() == 5
    assert PlanWorkout.query.filter_by(plan_id=first.plan_id).count() == 1
    row = db.session.get(DailyPlan, first.plan_id)
    assert row.water_intake == 750
    assert row.calories_target == second.calories_total


def test_adaptation_is_carried_from_yesterday(app, store, make_profile):
    storage = PlanStorage()
    with storage.transaction():
        storage.create_plan(user_id=1, date=date(2024, 3, 1), calories_target=1800, protein_target=90,
                            adaptation_active=True, adaptation_days_remaining=3)

    plan = generate_plan(1, date(2024, 3, 2), make_profile(), storage, store=store)

    assert plan.adaptation_bonus == 5
    assert plan.workout['name'] == 'Mobility Flow'
    assert plan.workout['duration'] == 25
    row = db.session.get(DailyPlan, plan.plan_id)
    assert row.adaptation_active is True
    assert row.adaptation_days_remaining == 2


def test_last_adaptation_day_clears_state(app, store, make_profile):
    storage = PlanStorage()
    with storage.transaction():
        storage.create_plan(user_id=1, date=date(2024, 3, 1), calories_target=1800, protein_target=90,
                            adaptation_active=True, adaptation_days_remaining=1)

    plan = generate_plan(1, date(2024, 3, 2), make_profile(), storage, store=store)

    row = db.session.get(DailyPlan, plan.plan_id)
    assert plan.adaptation_bonus == 5
    assert row.adaptation_active is False
    assert row.adaptation_days_remaining == 0


def test_failed_write_rolls_back_everything(app, store, make_profile, monkeypatch):
    storage = PlanStorage()
    first = generate_plan(1, PLAN_DATE, make_profile(), storage, store=store)
    names = [meal.name for meal in db.session.get(DailyPlan, first.plan_id).meals]

    def broken(plan_id, **fields):
        raise RuntimeError('disk full')

    monkeypatch.setattr(storage, 'create_workout_record', broken)
    with pytest.raises(PlanGenerationError) as excinfo:
        generate_plan(1, PLAN_DATE, make_profile(daily_meal_count=5), storage, store=store)

    assert excinfo.value.details == 'disk full'
    assert str(excinfo.value) == 'Failed to generate plan. Please try again.'
    meals = PlanMeal.query.filter_by(plan_id=first.plan_id).order_by(PlanMeal.id).all()
    assert [meal.name for meal in meals] == names
    assert PlanWorkout.query.filter_by(plan_id=first.plan_id).count() == 1


def test_failed_first_write_leaves_no_plan(app, store, make_profile, monkeypatch):
    storage = PlanStorage()
    monkeypatch.setattr(storage, 'create_workout_record', lambda plan_id, **fields: 1 / 0)

    with pytest.raises(PlanGenerationError):
        generate_plan(1, PLAN_DATE, make_profile(), storage, store=store)

    assert DailyPlan.query.count() == 0
    assert PlanMeal.query.count() == 0


def test_generate_for_user_requires_profile(app, store):
    with pytest.raises(ProfileIncompleteError) as excinfo:
        generate_plan_for_user(99, PLAN_DATE, PlanStorage(), store=store)
    assert str(excinfo.value) == 'Complete profile first'


def test_generate_for_user_reads_saved_profile(app, store, saved_profile):
    saved_profile(7, daily_meal_count=5, dietary_preferences='Eggetarian')

    plan = generate_plan_for_user(7, PLAN_DATE, PlanStorage(), store=store)

    assert len(plan.meals) == 5
    assert plan.plan_id is not None


def test_recent_meal_names(app, store, make_profile):
    storage = PlanStorage()
    generate_plan(1, date(2024, 3, 1), make_profile(), storage, store=store)
    generate_plan(1, date(2024, 3, 2), make_profile(), storage, store=store)

    recent = storage.get_recent_meal_names(1, limit=4)

    assert len(recent) == 4
    latest = DailyPlan.query.filter_by(user_id=1, date=date(2024, 3, 2)).one()
    assert recent[0] == latest.meals[-1].name
