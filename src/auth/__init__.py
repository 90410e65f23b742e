"""
Authentication module: credential resolution and access token providers.
"""

from .credentials import (
    CredentialKind,
    Credentials,
    is_placeholder_credential,
    resolve_credentials,
)
from .token_provider import (
    DEMO_TOKEN,
    MockTokenProvider,
    RealTokenProvider,
    TokenProvider,
    select_token_provider,
)

__all__ = [
    "CredentialKind",
    "Credentials",
    "is_placeholder_credential",
    "resolve_credentials",
    "DEMO_TOKEN",
    "MockTokenProvider",
    "RealTokenProvider",
    "TokenProvider",
    "select_token_provider",
]
