"""
Content Library Loader

Reads the static meal libraries (one per diet type) and the workout catalog
from the data directory and parses them into catalog records.

Both kinds of content are cached per file and re-read whenever the file's
modification time or size changes, so catalog edits show up without a
restart. ``FileContentStore.invalidate()`` drops the cache explicitly.
"""

import json
import os

from loguru import logger

from constants import DIET_VEG, DIET_EGG, DIET_NON_VEG
from .records import (
    EMPTY_WORKOUT_CATALOG,
    MealLibrary,
    WorkoutCatalog,
    parse_meal,
    parse_workout_category,
)

DEFAULT_MEAL_FILES = {
    DIET_VEG: 'veg.json',
    DIET_NON_VEG: 'non_veg.json',
    DIET_EGG: 'egg.json',
}
DEFAULT_WORKOUT_FILE = 'workouts_database.json'


def normalize_diet_type(value):
    """
    Map free-form diet input to 'veg', 'egg' or 'non-veg'.

    Anything mentioning "non" or "meat" is non-veg, anything mentioning
    "egg" is egg, and everything else (including empty input) is veg.
    """
    lower = (value or '').lower().strip()
    if 'non' in lower or 'meat' in lower:
        return DIET_NON_VEG
    if 'egg' in lower:
        return DIET_EGG
    return DIET_VEG


class FileContentStore:
    """JSON content read from a directory. Never raises on missing or bad files."""

    def __init__(self, data_dir, meal_files=None, workout_file=None):
        self.data_dir = data_dir
        self.meal_files = dict(meal_files or DEFAULT_MEAL_FILES)
        self.workout_file = workout_file or DEFAULT_WORKOUT_FILE
        self._cache = {}

    def read_meal_catalog(self, diet_type):
        """Raw JSON for a diet's meal library, or None when unavailable."""
        file_name = self.meal_files.get(normalize_diet_type(diet_type))
        if not file_name:
            return None
        return self._read_json(os.path.join(self.data_dir, file_name))

    def read_workout_catalog(self):
        """Raw JSON for the workout catalog, or None when unavailable."""
        return self._read_json(os.path.join(self.data_dir, self.workout_file))

    def invalidate(self):
        self._cache.clear()

    def _read_json(self, path):
        try:
            stat = os.stat(path)
        except FileNotFoundError:
            logger.warning(f"content_file_missing path={path}")
            self._cache.pop(path, None)
            return None
        except OSError as exc:
            logger.error(f"content_file_unreadable path={path} error={exc}")
            return None

        fingerprint = (stat.st_mtime_ns, stat.st_size)
        cached = self._cache.get(path)
        if cached is not None and cached[0] == fingerprint:
            return cached[1]

        try:
            with open(path, 'r', encoding='utf-8') as handle:
                payload = json.load(handle)
        except (OSError, ValueError) as exc:
            logger.error(f"content_file_invalid path={path} error={exc}")
            self._cache.pop(path, None)
            return None

        self._cache[path] = (fingerprint, payload)
        logger.debug(f"content_file_loaded path={path}")
        return payload


_default_store = None


def get_content_store():
    """Process-wide store; falls back to the configured data directory."""
    global _default_store
    if _default_store is None:
        from config import Config
        _default_store = FileContentStore(Config.DATA_DIR, Config.MEAL_LIBRARY_FILES, Config.WORKOUT_CATALOG_FILE)
    return _default_store


def set_content_store(store):
    global _default_store
    _default_store = store


def load_meal_library(diet_type, store=None):
    """
    Load the meal library for a diet type.

    Returns:
        MealLibrary, or None when the library file is missing or malformed
    """
    store = store or get_content_store()
    key = normalize_diet_type(diet_type)
    raw = store.read_meal_catalog(key)
    if raw is None:
        logger.error(f"meal_library_unavailable diet={key}")
        return None

    entries = raw.get('meals') if isinstance(raw, dict) else raw
    if not isinstance(entries, list):
        logger.error(f"meal_library_invalid diet={key} reason=expected_meal_list")
        return None

    meals = []
    for entry in entries:
        meal = parse_meal(entry, normalize_diet_type)
        if meal is None:
            logger.warning(f"meal_entry_skipped diet={key} entry={entry!r:.80}")
            continue
        meals.append(meal)

    country = raw.get('country', '') if isinstance(raw, dict) else ''
    return MealLibrary(diet_type=key, country=country, meals=tuple(meals))


def load_workout_catalog(store=None):
    """
    Load the workout catalog.

    Accepts either a bare list of categories or ``{"meta": ..., "workouts": [...]}``.
    Returns an empty catalog when the file is missing or malformed.
    """
    store = store or get_content_store()
    raw = store.read_workout_catalog()
    if raw is None:
        return EMPTY_WORKOUT_CATALOG

    if isinstance(raw, list):
        meta, entries = {}, raw
    elif isinstance(raw, dict):
        meta, entries = raw.get('meta') or {}, raw.get('workouts')
    else:
        meta, entries = {}, None

    if not isinstance(entries, list):
        logger.error("workout_catalog_invalid reason=expected_workout_list")
        return EMPTY_WORKOUT_CATALOG

    categories = []
    for entry in entries:
        category = parse_workout_category(entry)
        if category is None:
            logger.warning(f"workout_category_skipped entry={entry!r:.80}")
            continue
        categories.append(category)
    return WorkoutCatalog(meta=meta, workouts=tuple(categories))
