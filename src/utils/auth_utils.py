"""
Authentication utilities for MCP server.

Provides helpers for reading claims from Graph access tokens.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import jwt

logger = logging.getLogger(__name__)


def get_token_claims(token: str) -> Dict[str, Any]:
    """Decode an access token's claims without verifying it.

    The token was just issued to this process by the identity platform, so
    only the payload is of interest here.

    Args:
        token: Bearer token string.

    Returns:
        The decoded claims.

    Raises:
        jwt.DecodeError: If the token is not a JWT.
    """
    return jwt.decode(token, options={"verify_signature": False})


def get_token_claims_safe(token: str) -> Optional[Dict[str, Any]]:
    """Decode token claims, returning None if the token is not a JWT."""
    try:
        return get_token_claims(token)
    except jwt.DecodeError as e:
        logger.warning("Could not decode access token claims: %s", str(e))
        return None


def describe_access_token(token: str) -> Dict[str, Any]:
    """Summarize an app-only Graph access token for display.

    Args:
        token: Bearer token string.

    Returns:
        Ordered label -> value mapping (empty if the token is opaque).
    """
    claims = get_token_claims_safe(token)
    if claims is None:
        return {}

    expires = claims.get("exp")
    expires_at = (
        datetime.fromtimestamp(expires, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
        if expires
        else None
    )

    return {
        "Application": claims.get("app_displayname") or claims.get("appid"),
        "Tenant": claims.get("tid"),
        "Roles": claims.get("roles") or [],
        "Scopes": claims.get("scp"),
        "Expires": expires_at,
    }
