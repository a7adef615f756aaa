"""Flask extension instances shared across blueprints."""
from __future__ import annotations

from flask_sqlalchemy import SQLAlchemy


db = SQLAlchemy()
