"""Configuration objects for the Flask application."""
from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path


def _int_from_env(name: str, default: int) -> int:
    """Return an integer value from ``name`` or ``default`` when missing/invalid."""

    raw_value = os.environ.get(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _bool_from_env(name: str, default: bool) -> bool:
    """Return a boolean flag from ``name`` using the usual truthy spellings."""

    raw_value = os.environ.get(name)
    if raw_value is None or not raw_value.strip():
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


COOKIE_POLICIES: dict[str, tuple[str, bool]] = {
    "strict": ("Strict", False),
    "lax": ("Lax", False),
    "cross-site": ("None", True),
}


def cookie_settings(policy: str | None) -> tuple[str, bool]:
    """Return ``(samesite, secure)`` for a deployment cookie ``policy``.

    Unknown values fall back to ``lax`` so a typo never produces a cookie the
    browser silently drops.
    """

    return COOKIE_POLICIES.get((policy or "lax").strip().lower(), COOKIE_POLICIES["lax"])


_ENVIRONMENT = os.environ.get("APP_ENV", "production").strip().lower()
_SAMESITE, _SECURE = cookie_settings(os.environ.get("SESSION_COOKIE_POLICY"))


class Config:
    """Base configuration."""

    ENVIRONMENT = _ENVIRONMENT
    DEBUG = _bool_from_env("FLASK_DEBUG", False)
    SECRET_KEY = os.environ.get("SESSION_SECRET", "dev-secret-key")
    SQLALCHEMY_DATABASE_URI = (
        os.environ.get("DATABASE_URL")
        or f"sqlite:///{Path(os.environ.get('FLASK_INSTANCE_PATH', 'instance')).absolute() / 'moldtrack.db'}"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SESSION_COOKIE_POLICY = os.environ.get("SESSION_COOKIE_POLICY", "lax")
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = _SAMESITE
    SESSION_COOKIE_SECURE = _SECURE
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)

    GOOGLE_CLIENT_ID = os.environ.get("GOOGLE_CLIENT_ID")
    GOOGLE_CLIENT_SECRET = os.environ.get("GOOGLE_CLIENT_SECRET")
    GOOGLE_CALLBACK_URL = os.environ.get(
        "GOOGLE_CALLBACK_URL", "http://localhost:5000/auth/google/callback"
    )
    GOOGLE_TIMEOUT = _int_from_env("GOOGLE_TIMEOUT", 10)

    ENFORCE_ROLE_DOMAINS = _bool_from_env("ENFORCE_ROLE_DOMAINS", False)
    ADMIN_EMAIL_DOMAIN = os.environ.get("ADMIN_EMAIL_DOMAIN", "admin.com")
    MANAGER_EMAIL_DOMAIN = os.environ.get("MANAGER_EMAIL_DOMAIN", "manager.com")

    EXPOSE_ERROR_DETAILS = _bool_from_env(
        "EXPOSE_ERROR_DETAILS", _ENVIRONMENT == "development"
    )
    RECENT_CHECKS_DEFAULT = _int_from_env("RECENT_CHECKS_DEFAULT", 10)
    RECENT_CHECKS_MAX = _int_from_env("RECENT_CHECKS_MAX", 100)


class TestingConfig(Config):
    """Configuration used by the test-suite."""

    TESTING = True
    DEBUG = False
    ENVIRONMENT = "test"
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SESSION_COOKIE_SECURE = False
    GOOGLE_CLIENT_ID = "test-client-id"
    GOOGLE_CLIENT_SECRET = "test-client-secret"
    GOOGLE_CALLBACK_URL = "http://localhost/auth/google/callback"
    ENFORCE_ROLE_DOMAINS = False
    EXPOSE_ERROR_DETAILS = False
