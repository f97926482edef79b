"""
Database Base Module

Creates the SQLAlchemy database instance shared by the profile and plan models.
Kept separate so the storage service can import it without the app.
"""

from flask_sqlalchemy import SQLAlchemy

# Bound to the Flask app by create_app() in app.py
db = SQLAlchemy()
