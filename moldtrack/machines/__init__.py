"""Machine records blueprint."""
from __future__ import annotations

from flask import Blueprint


machines_bp = Blueprint("machines", __name__)


from . import routes  # noqa: E402  # pylint: disable=wrong-import-position

__all__ = ["machines_bp"]
