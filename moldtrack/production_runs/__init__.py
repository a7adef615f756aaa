"""Production run blueprint."""
from __future__ import annotations

from flask import Blueprint


production_runs_bp = Blueprint("production_runs", __name__)


from . import routes  # noqa: E402  # pylint: disable=wrong-import-position

__all__ = ["production_runs_bp"]
