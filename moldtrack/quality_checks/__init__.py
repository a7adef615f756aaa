"""Quality check blueprint; every route requires a signed-in identity."""
from __future__ import annotations

from flask import Blueprint

from ..routes.auth import require_identity


quality_checks_bp = Blueprint("quality_checks", __name__)
quality_checks_bp.before_request(require_identity)


from . import routes  # noqa: E402  # pylint: disable=wrong-import-position

__all__ = ["quality_checks_bp"]
