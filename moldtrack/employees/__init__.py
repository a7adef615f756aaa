"""Employee roster blueprint; every route requires a signed-in identity."""
from __future__ import annotations

from flask import Blueprint

from ..routes.auth import require_identity


employees_bp = Blueprint("employees", __name__)
employees_bp.before_request(require_identity)


from . import routes  # noqa: E402  # pylint: disable=wrong-import-position

__all__ = ["employees_bp"]
