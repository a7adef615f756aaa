"""Authentication routes, the session gate and the role check."""
from __future__ import annotations

from collections.abc import Callable
from functools import wraps
from secrets import token_urlsafe
from typing import Any

from flask import Blueprint, current_app, g, jsonify, redirect, request, session, url_for

from ..errors import Forbidden, Unauthorized
from ..models import ROLE_CAPABILITIES, Role
from ..services.google import GoogleConfigurationError, GoogleOAuthError, build_authorization_url, sign_in


auth_bp = Blueprint("auth", __name__)

IDENTITY_KEY = "identity"
STATE_KEY = "oauth_state"


def get_current_identity() -> dict[str, Any] | None:
    """Return the identity established by a previous sign-in, if any."""

    identity = session.get(IDENTITY_KEY)
    if not isinstance(identity, dict) or not identity.get("id"):
        return None
    return identity


def require_identity() -> None:
    """``before_request`` hook for protected blueprints.

    Rejects the request with :class:`Unauthorized` before any handler runs and
    otherwise exposes the identity as ``g.identity``.
    """

    identity = get_current_identity()
    if identity is None:
        raise Unauthorized()
    g.identity = identity


def resolve_role(email: str | None) -> Role:
    """Map an email address onto a coarse role by its domain."""

    address = (email or "").strip().lower()
    admin_domain = current_app.config.get("ADMIN_EMAIL_DOMAIN", "admin.com").lower()
    manager_domain = current_app.config.get("MANAGER_EMAIL_DOMAIN", "manager.com").lower()

    if address.endswith(f"@{admin_domain}"):
        return Role.ADMIN
    if address.endswith(f"@{manager_domain}"):
        return Role.MANAGER
    return Role.STAFF


def role_allowed(role: Role, capability: str) -> bool:
    """Return whether ``role`` satisfies the named ``capability``."""

    return capability in ROLE_CAPABILITIES.get(role, frozenset())


def authorize(identity: dict[str, Any], capability: str) -> bool:
    """Decide whether ``identity`` may use ``capability``.

    Any signed-in identity is allowed unless ``ENFORCE_ROLE_DOMAINS`` is set,
    in which case the email-domain role must satisfy the capability.
    """

    role = resolve_role(identity.get("email"))
    allowed = role_allowed(role, capability)
    if current_app.config.get("ENFORCE_ROLE_DOMAINS"):
        return allowed

    if not allowed:
        current_app.logger.debug(
            "Role %s lacks %r for %s; allowed because enforcement is off",
            role.value,
            capability,
            identity.get("email"),
        )
    return True


def role_required(capability: str) -> Callable:
    """Decorator applying :func:`authorize` after the session gate."""

    def decorator(view: Callable) -> Callable:
        @wraps(view)
        def wrapped(*args: Any, **kwargs: Any) -> Any:
            identity = get_current_identity()
            if identity is None:
                raise Unauthorized()
            if not authorize(identity, capability):
                current_app.logger.warning(
                    "Denied %r to %s on %s", capability, identity.get("email"), request.path
                )
                raise Forbidden(capability)
            return view(*args, **kwargs)

        return wrapped

    return decorator


def _public_user(identity: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": identity.get("id"),
        "displayName": identity.get("displayName"),
        "email": identity.get("email"),
        "provider": identity.get("provider"),
        "role": resolve_role(identity.get("email")).value,
    }


@auth_bp.get("/google")
def google_login() -> Any:
    """Redirect the browser to Google's consent screen."""

    state = token_urlsafe(24)
    try:
        url = build_authorization_url(state)
    except GoogleConfigurationError as exc:
        current_app.logger.warning("Google sign-in unavailable: %s", exc)
        return redirect(url_for("auth.failure"))

    session[STATE_KEY] = state
    return redirect(url)


@auth_bp.get("/google/callback")
def google_callback() -> Any:
    """Finish the sign-in exchange and establish the session identity."""

    expected_state = session.pop(STATE_KEY, None)
    if request.args.get("error"):
        current_app.logger.warning("Google sign-in refused: %s", request.args["error"])
        return redirect(url_for("auth.failure"))
    if not expected_state or request.args.get("state") != expected_state:
        current_app.logger.warning("Google sign-in rejected: state mismatch")
        return redirect(url_for("auth.failure"))

    code = request.args.get("code")
    if not code:
        current_app.logger.warning("Google sign-in rejected: no authorization code")
        return redirect(url_for("auth.failure"))

    try:
        identity = sign_in(code)
    except GoogleOAuthError as exc:
        current_app.logger.error("Google sign-in failed: %s", exc)
        return redirect(url_for("auth.failure"))

    session.clear()
    session.permanent = True
    session[IDENTITY_KEY] = identity
    current_app.logger.info("Signed in %s via Google", identity.get("email"))
    return redirect(url_for("auth.success"))


@auth_bp.get("/success")
def success() -> Any:
    identity = get_current_identity()
    if identity is None:
        return jsonify({"message": "Not authenticated", "authenticated": False}), 401
    return jsonify(
        {
            "message": "Authentication successful",
            "user": _public_user(identity),
            "authenticated": True,
        }
    )


@auth_bp.get("/failure")
def failure() -> Any:
    return jsonify({"message": "Authentication failed", "authenticated": False}), 401


@auth_bp.get("/status")
def status() -> Any:
    identity = get_current_identity()
    return jsonify(
        {
            "authenticated": identity is not None,
            "user": _public_user(identity) if identity else None,
        }
    )


@auth_bp.get("/logout")
def logout() -> Any:
    """Forget the session identity."""

    identity = get_current_identity()
    if identity is not None:
        current_app.logger.info("Signed out %s", identity.get("email"))
    session.clear()
    return jsonify({"message": "Logout successful", "authenticated": False})
