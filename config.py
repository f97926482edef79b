"""
Application Configuration

Centralizes all Flask, database, content and logging settings.
"""

import os

# Base directory of the application
BASE_DIR = os.path.dirname(os.path.abspath(__file__))


class Config:
    """Base configuration class."""

    # Flask settings
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-only-change-in-production')
    JSON_SORT_KEYS = False

    # SQLAlchemy settings
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///fitplan.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Content catalogs (meal libraries per diet type, one workout catalog)
    DATA_DIR = os.environ.get('FITPLAN_DATA_DIR', os.path.join(BASE_DIR, 'data'))
    MEAL_LIBRARY_FILES = {
        'veg': 'veg.json',
        'non-veg': 'non_veg.json',
        'egg': 'egg.json',
    }
    WORKOUT_CATALOG_FILE = 'workouts_database.json'

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Days of extra workout time granted after an off-plan meal is logged
    ADAPTATION_DAYS = 3


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG')


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False


class TestingConfig(Config):
    """Testing configuration."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    LOG_LEVEL = 'WARNING'


# Configuration dictionary for easy access
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}


def get_config(env=None):
    """Get configuration based on environment."""
    if env is None:
        env = os.environ.get('FLASK_ENV', 'development')
    return config.get(env, config['default'])
