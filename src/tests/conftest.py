"""
Test configuration for Microsoft Graph MCP Server tests.

Provides shared fixtures for:
- Environment isolation (.env, credential variables, config singleton, logging)
- Real and demo server configurations
- A patched ClientSecretCredential for token exchange
- Test token generation
- Mock aiohttp sessions and Graph API responses
"""

import json
import logging
import os
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock, MagicMock, patch

import jwt
import pytest
from azure.core.credentials import AccessToken

# Add the server sources to path
server_src_path = Path(__file__).parent.parent
sys.path.insert(0, str(server_src_path))


# =============================================================================
# Test Constants
# =============================================================================

TEST_TENANT_ID = "test-tenant-12345"
TEST_CLIENT_ID = "test-client-67890"
TEST_CLIENT_SECRET = "test-secret-abcdef"
TEST_SIGNING_KEY = "test-signing-key-not-a-secret-0123456789"

GRAPH_ENV_VARS = [
    "TENANT_ID",
    "CLIENT_ID",
    "CLIENT_SECRET",
    "SCOPES",
    "ALLOW_DEMO_CREDENTIALS",
    "LOG_FILE",
    "DEBUG",
    "SERVER_NAME",
    "TRANSPORT",
    "HOST",
    "PORT",
]


# =============================================================================
# Auto-use isolation fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def prevent_dotenv_loading(monkeypatch, tmp_path):
    """Prevent Pydantic settings from reading .env file during tests.

    This fixture runs automatically before each test to ensure
    environment isolation from the development .env file. The log file
    sink also lands in the temp directory.
    """
    original_cwd = os.getcwd()

    empty_env = tmp_path / ".env"
    empty_env.write_text("")

    os.chdir(tmp_path)

    yield

    os.chdir(original_cwd)


@pytest.fixture(autouse=True)
def clear_graph_env(monkeypatch):
    """Remove server configuration variables and reset the config singleton."""
    for var in GRAPH_ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    from config.settings import reset_config

    reset_config()
    yield
    reset_config()


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handler and level changes made by configure_logging()."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level

    yield

    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)


# =============================================================================
# Environment Variable Fixtures
# =============================================================================


@pytest.fixture
def mock_env_full_auth(monkeypatch):
    """Set all required credential environment variables."""
    monkeypatch.setenv("TENANT_ID", TEST_TENANT_ID)
    monkeypatch.setenv("CLIENT_ID", TEST_CLIENT_ID)
    monkeypatch.setenv("CLIENT_SECRET", TEST_CLIENT_SECRET)
    monkeypatch.setenv("SCOPES", "User.Read, Mail.Read")


@pytest.fixture
def mock_env_missing_secret(monkeypatch):
    """Set credential environment variables but leave CLIENT_SECRET unset."""
    monkeypatch.setenv("TENANT_ID", TEST_TENANT_ID)
    monkeypatch.setenv("CLIENT_ID", TEST_CLIENT_ID)


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def real_config():
    """Configuration with real-looking credentials."""
    from config.settings import MCPServerConfig

    return MCPServerConfig(
        tenant_id=TEST_TENANT_ID,
        client_id=TEST_CLIENT_ID,
        client_secret=TEST_CLIENT_SECRET,
        log_file=None,
    )


@pytest.fixture
def demo_config():
    """Configuration with no credentials and demo fallback enabled."""
    from config.settings import MCPServerConfig

    return MCPServerConfig(allow_demo_credentials=True, log_file=None)


# =============================================================================
# Token Fixtures
# =============================================================================


@pytest.fixture
def create_test_token():
    """Factory fixture to create app-only style test JWTs.

    Usage:
        token = create_test_token({"roles": ["User.Read.All"]})
    """

    def _create_token(claims: Dict[str, Any], expires_in: int = 3600) -> str:
        now = int(time.time())
        default_claims = {
            "aud": "https://graph.microsoft.com",
            "iss": f"https://sts.windows.net/{TEST_TENANT_ID}/",
            "iat": now,
            "nbf": now,
            "exp": now + expires_in,
            "appid": TEST_CLIENT_ID,
            "app_displayname": "Graph MCP Test App",
            "tid": TEST_TENANT_ID,
        }
        default_claims.update(claims)
        return jwt.encode(default_claims, TEST_SIGNING_KEY, algorithm="HS256")

    return _create_token


@pytest.fixture
def app_token(create_test_token) -> str:
    """A test token carrying application roles."""
    return create_test_token({"roles": ["User.Read.All", "Mail.Read"]})


@pytest.fixture
def mock_credential(app_token):
    """Patch ClientSecretCredential so token exchange never leaves the process.

    Yields the mocked credential class. The instance's get_token returns
    app_token unless a test overrides its side_effect.
    """
    with patch("auth.token_provider.ClientSecretCredential") as credential_cls:
        credential_cls.return_value.get_token = AsyncMock(
            return_value=AccessToken(app_token, int(time.time()) + 3600)
        )
        yield credential_cls


# =============================================================================
# Mock HTTP Fixtures
# =============================================================================


def create_mock_response(status: int = 200, body: Any = None):
    """Create a mock aiohttp response with a JSON body."""
    mock_response = AsyncMock()
    mock_response.status = status
    mock_response.json = AsyncMock(return_value=body)
    mock_response.text = AsyncMock(return_value=json.dumps(body))
    return mock_response


def create_mock_get_session(mock_response, captured: Optional[list] = None):
    """Create a properly mocked aiohttp.ClientSession for GET requests.

    Args:
        mock_response: Response yielded by session.get().
        captured: Optional list receiving {"url": ..., **kwargs} per request.
    """

    @asynccontextmanager
    async def mock_get(url, **kwargs):
        if captured is not None:
            captured.append({"url": url, **kwargs})
        yield mock_response

    mock_session = MagicMock()
    mock_session.get = mock_get

    mock_client = MagicMock()
    mock_client.return_value.__aenter__ = AsyncMock(return_value=mock_session)
    mock_client.return_value.__aexit__ = AsyncMock(return_value=None)

    return mock_client


@pytest.fixture
def graph_me_body() -> Dict[str, Any]:
    """A Graph API /me response body."""
    return {
        "id": "user-graph-id-12345",
        "displayName": "Test User",
        "mail": "testuser@example.com",
        "userPrincipalName": "testuser@example.com",
        "jobTitle": "Engineer",
        "department": None,
        "officeLocation": "Building 1",
    }
