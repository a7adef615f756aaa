"""Helper for the Google OAuth 2.0 authorization-code exchange."""
from __future__ import annotations

import json
from typing import Any
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from flask import current_app

__all__ = [
    "GoogleOAuthError",
    "GoogleConfigurationError",
    "GoogleRequestError",
    "build_authorization_url",
    "exchange_code",
    "fetch_profile",
    "sign_in",
]

AUTHORIZATION_ENDPOINT = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_ENDPOINT = "https://oauth2.googleapis.com/token"
USERINFO_ENDPOINT = "https://openidconnect.googleapis.com/v1/userinfo"
SCOPES = ("openid", "email", "profile")


class GoogleOAuthError(Exception):
    """Base exception for Google sign-in failures."""


class GoogleConfigurationError(GoogleOAuthError):
    """Raised when the OAuth client credentials are not configured."""


class GoogleRequestError(GoogleOAuthError):
    """Raised when a call to Google fails or returns an unusable payload."""


def _credentials() -> tuple[str, str, str]:
    client_id: str | None = current_app.config.get("GOOGLE_CLIENT_ID")
    client_secret: str | None = current_app.config.get("GOOGLE_CLIENT_SECRET")
    callback_url: str | None = current_app.config.get("GOOGLE_CALLBACK_URL")

    if not client_id or not client_secret or not callback_url:
        raise GoogleConfigurationError(
            "Google OAuth is not configured; set GOOGLE_CLIENT_ID, GOOGLE_CLIENT_SECRET "
            "and GOOGLE_CALLBACK_URL"
        )
    return client_id, client_secret, callback_url


def build_authorization_url(state: str) -> str:
    """Return the consent-screen URL the browser is redirected to."""

    client_id, _, callback_url = _credentials()
    query = urlencode(
        {
            "client_id": client_id,
            "redirect_uri": callback_url,
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "prompt": "select_account",
            "state": state,
        }
    )
    return f"{AUTHORIZATION_ENDPOINT}?{query}"


def _execute(request: Request) -> Any:
    """Execute ``request`` and return the decoded JSON payload."""

    timeout: int = current_app.config.get("GOOGLE_TIMEOUT", 10)

    try:
        with urlopen(request, timeout=timeout) as response:  # noqa: S310 (fixed Google URLs)
            payload = response.read()
    except HTTPError as exc:
        detail = ""
        if exc.fp is not None:
            detail = exc.fp.read().decode("utf-8", errors="replace")
        raise GoogleRequestError(f"HTTP {exc.code}: {detail or exc.reason}") from exc
    except URLError as exc:
        raise GoogleRequestError(str(exc.reason)) from exc

    try:
        return json.loads(payload)
    except json.JSONDecodeError as exc:
        raise GoogleRequestError("Google response could not be decoded as JSON") from exc


def exchange_code(code: str) -> dict[str, Any]:
    """Trade an authorization ``code`` for Google's token response."""

    client_id, client_secret, callback_url = _credentials()
    body = urlencode(
        {
            "code": code,
            "client_id": client_id,
            "client_secret": client_secret,
            "redirect_uri": callback_url,
            "grant_type": "authorization_code",
        }
    ).encode("utf-8")
    request = Request(
        TOKEN_ENDPOINT,
        data=body,
        headers={
            "Content-Type": "application/x-www-form-urlencoded",
            "Accept": "application/json",
        },
        method="POST",
    )
    payload = _execute(request)
    if not isinstance(payload, dict) or not payload.get("access_token"):
        raise GoogleRequestError("Token response did not include an access token")
    return payload


def fetch_profile(access_token: str) -> dict[str, Any]:
    """Return the signed-in user's OpenID Connect profile."""

    request = Request(
        USERINFO_ENDPOINT,
        headers={"Authorization": f"Bearer {access_token}", "Accept": "application/json"},
    )
    payload = _execute(request)
    if not isinstance(payload, dict) or not payload.get("sub"):
        raise GoogleRequestError("Unexpected userinfo response shape")
    return payload


def sign_in(code: str) -> dict[str, str | None]:
    """Run the full exchange for ``code`` and return the session identity."""

    tokens = exchange_code(code)
    profile = fetch_profile(tokens["access_token"])
    return {
        "id": str(profile["sub"]),
        "displayName": profile.get("name"),
        "email": (profile.get("email") or "").lower() or None,
        "provider": "google",
    }
