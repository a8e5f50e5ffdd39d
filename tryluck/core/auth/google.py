"""Google ID-token verification through the tokeninfo endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict

import requests
from flask import current_app

logger = logging.getLogger(__name__)

VALID_ISSUERS = ("accounts.google.com", "https://accounts.google.com")


class GoogleTokenError(Exception):
    """Raised when an ID token cannot be verified."""

    pass


def verify_id_token(id_token: str) -> Dict[str, Any]:
    """
    Verify a Google ID token and return its claims.

    Args:
        id_token: JWT issued to the client by Google Sign-In

    Returns:
        Claims dict with at least ``sub`` and ``email``

    Raises:
        GoogleTokenError: If Google rejects the token or the audience differs
    """
    config = current_app.config
    try:
        response = requests.get(
            config["GOOGLE_TOKENINFO_URL"],
            params={"id_token": id_token},
            timeout=10,
        )
    except requests.RequestException as exc:
        logger.warning("Google tokeninfo request failed: %s", exc)
        raise GoogleTokenError("tokeninfo_unreachable") from exc

    if response.status_code != 200:
        raise GoogleTokenError("token_rejected")

    claims = response.json()
    if claims.get("aud") != config.get("GOOGLE_CLIENT_ID"):
        raise GoogleTokenError("audience_mismatch")
    if claims.get("iss") and claims["iss"] not in VALID_ISSUERS:
        raise GoogleTokenError("issuer_mismatch")
    if not claims.get("sub") or not claims.get("email"):
        raise GoogleTokenError("missing_claims")
    return claims
