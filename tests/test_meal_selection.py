import pytest

from services import (
    FileContentStore,
    find_meal_by_id,
    find_replacement,
    is_diet_compatible,
    normalize_cycle_day,
    select_best_meal_for_slot,
    select_daily_meals,
)
from tests.conftest import library_meals, make_meal, write_json


@pytest.mark.parametrize('day, expected', [(1, 1), (28, 28), (29, 1), (56, 28), (0, 28), (-1, 27)])
def test_normalize_cycle_day(day, expected):
    assert normalize_cycle_day(day) == expected


@pytest.mark.parametrize('user, meal, ok', [
    ('non-veg', 'veg', True),
    ('non-veg', 'egg', True),
    ('non-veg', 'non-veg', True),
    ('egg', 'veg', True),
    ('egg', 'egg', True),
    ('egg', 'non-veg', False),
    ('veg', 'veg', True),
    ('veg', 'egg', False),
    ('veg', 'non-veg', False),
])
def test_diet_compatibility(user, meal, ok):
    assert is_diet_compatible(user, meal) is ok


def test_daily_meals_are_deterministic(store):
    first = select_daily_meals('veg', 28, 'fat_loss', 5, store=store)
    second = select_daily_meals('veg', 28, 'fat_loss', 5, store=store)
    assert first == second


def test_daily_meals_fill_four_slots_in_order(store):
    meals = select_daily_meals('veg', 28, 'fat_loss', 1, store=store)

    assert [meal['type'] for meal in meals] == ['breakfast', 'lunch', 'snack', 'dinner']
    assert meals[0]['name'] == 'Veg Breakfast 1 (2000)'
    assert meals[0]['quantity'] == '1 Serving'
    assert meals[0]['why'] == 'Selected based on 28y/veg/fat_loss profile.'
    assert meals[0]['instructions'] == 'Preparation: Cook the veg breakfast 1 (2000).'


def test_secondary_snack_is_appended(store):
    meals = select_daily_meals('veg', 28, 'fat_loss', 1, store=store, include_secondary_snack=True)

    assert [meal['type'] for meal in meals] == ['breakfast', 'lunch', 'snack', 'dinner', 'snack_2']
    assert meals[2]['name'] != meals[4]['name']


@pytest.mark.parametrize('age, tier', [(22, 2000), (38, 1800), (60, 1600)])
def test_meals_come_from_age_tier(store, age, tier):
    meals = select_daily_meals('veg', age, 'fat_loss', 3, store=store)
    assert all(meal['name'].endswith(f'({tier})') for meal in meals)


def test_cycle_wraps_around(store):
    assert select_daily_meals('veg', 40, 'fat_loss', 29, store=store) == \
        select_daily_meals('veg', 40, 'fat_loss', 1, store=store)


def test_rotation_ignores_user_library_when_compatible(store):
    # Rotation is driven by the veg baseline, which every diet can eat
    veg = select_daily_meals('veg', 28, 'fat_loss', 1, store=store)
    egg = select_daily_meals('Eggetarian', 28, 'fat_loss', 1, store=store)
    assert [meal['name'] for meal in egg] == [meal['name'] for meal in veg]


@pytest.fixture
def mixed_store(tmp_path):
    """Veg baseline whose 2000-tier breakfast rotation starts with an egg dish.

    Other tiers hold a breakfast with more protein and one that sorts first by name.
    """
    meals = [meal for meal in library_meals('veg', 'veg', 1)
             if not (meal['calorie_tier'] == 2000 and meal['meal_type'] == 'breakfast')]
    meals[:0] = [
        make_meal('mix-egg', 'Egg Toast', 'breakfast', 'egg', 2000, protein=25),
        make_meal('mix-poha', 'Aloo Poha', 'breakfast', 'veg', 2000, protein=8),
        make_meal('mix-chilla', 'Besan Chilla', 'breakfast', 'veg', 2000, protein=18),
    ]
    meals += [
        make_meal('mix-bhurji', 'Paneer Bhurji', 'breakfast', 'veg', 1600, protein=45),
        make_meal('mix-paratha', 'Aaloo Paratha', 'breakfast', 'veg', 1800, protein=5),
    ]
    write_json(tmp_path / 'veg.json', {'meals': meals})
    write_json(tmp_path / 'egg.json', {'meals': [make_meal('egg-only', 'Boiled Eggs', 'snack', 'egg', 2000)]})
    return FileContentStore(str(tmp_path))


def test_incompatible_meal_is_substituted_by_protein(mixed_store):
    meals = select_daily_meals('veg', 25, 'fat_loss', 1, store=mixed_store)
    assert meals[0]['name'] == 'Besan Chilla'


def test_incompatible_meal_is_substituted_by_name(mixed_store):
    meals = select_daily_meals('veg', 25, 'maintenance', 1, store=mixed_store)
    assert meals[0]['name'] == 'Aloo Poha'


def test_compatible_meal_is_kept(mixed_store):
    meals = select_daily_meals('egg', 25, 'fat_loss', 1, store=mixed_store)
    assert meals[0]['name'] == 'Egg Toast'


def test_replacement_falls_back_to_original(mixed_store):
    original = find_meal_by_id('mix-egg', store=mixed_store)
    # The egg library holds no breakfasts
    assert find_replacement(original, 'egg', 'fat_loss', store=mixed_store) is original


@pytest.mark.parametrize('goal, expected', [('fat_loss', 'Besan Chilla'), ('maintain', 'Aloo Poha')])
def test_replacement_stays_in_original_tier(mixed_store, goal, expected):
    original = find_meal_by_id('mix-egg', store=mixed_store)
    replacement = find_replacement(original, 'veg', goal, store=mixed_store)

    assert replacement.name == expected
    assert replacement.calorie_tier == original.calorie_tier


def test_replacement_name_order_ignores_case(tmp_path):
    write_json(tmp_path / 'veg.json', {'meals': [
        make_meal('veg-oats', 'Banana Oats', 'breakfast', 'veg', 2000),
        make_meal('veg-upma', 'apple upma', 'breakfast', 'veg', 2000),
    ]})
    write_json(tmp_path / 'egg.json', {'meals': [make_meal('egg-bhurji', 'Egg Bhurji', 'breakfast', 'egg', 2000)]})
    store = FileContentStore(str(tmp_path))
    original = find_meal_by_id('egg-bhurji', store=store)

    assert find_replacement(original, 'veg', 'maintenance', store=store).name == 'apple upma'


def test_find_meal_by_id_searches_all_libraries(store):
    meal = find_meal_by_id('nonveg-1800-lunch-1', store=store)
    assert meal.diet_type == 'non-veg'
    assert find_meal_by_id('does-not-exist', store=store) is None


def test_missing_rotation_cell_returns_empty(tmp_path):
    meals = [meal for meal in library_meals('veg', 'veg', 1) if meal['calorie_tier'] != 2000]
    write_json(tmp_path / 'veg.json', {'meals': meals})

    assert select_daily_meals('veg', 25, 'fat_loss', 1, store=FileContentStore(str(tmp_path))) == []


def test_best_meal_skips_excluded_names(store):
    meal = select_best_meal_for_slot('veg', 28, 'lunch', {'Veg Lunch 1 (2000)'}, store=store)

    assert meal['name'] == 'Veg Lunch 2 (2000)'
    assert meal['type'] == 'lunch'
    assert meal['why'] == 'Regenerated alternative.'


def test_best_meal_prefers_meals_not_eaten_recently(store):
    meal = select_best_meal_for_slot('veg', 28, 'dinner', set(), recent_meals=['Veg Dinner 1 (2000)'], store=store)
    assert meal['name'] == 'Veg Dinner 2 (2000)'


def test_best_meal_uses_recent_meal_when_nothing_else_remains(store):
    meal = select_best_meal_for_slot('veg', 28, 'dinner', {'Veg Dinner 1 (2000)'},
                                     recent_meals=['Veg Dinner 2 (2000)'], store=store)
    assert meal['name'] == 'Veg Dinner 2 (2000)'


def test_best_meal_for_secondary_snack(store):
    meal = select_best_meal_for_slot('veg', 50, 'snack_2', set(), store=store)

    assert meal['type'] == 'snack_2'
    assert meal['name'] == 'Veg Snack 1 (1600)'


def test_best_meal_none_when_exhausted(store):
    excluded = {'Veg Lunch 1 (1800)', 'Veg Lunch 2 (1800)'}
    assert select_best_meal_for_slot('veg', 40, 'lunch', excluded, store=store) is None
