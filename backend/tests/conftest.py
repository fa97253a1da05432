from __future__ import annotations

import base64
import time
from unittest.mock import AsyncMock, patch

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from httpx import ASGITransport, AsyncClient
from jose import jwt
from starlette.testclient import TestClient

from employee_directory.core.auth import clear_jwks_cache
from employee_directory.core.dependencies import get_current_user
from employee_directory.main import app
from employee_directory.models.auth import UserInfo
from employee_directory.models.employee import Employee, EmployeeRef

TEST_ISSUER = "https://login.example.test/directory/v2.0"
TEST_AUDIENCE = "api://employee-directory-test"
TEST_JWKS_URL = "https://login.example.test/directory/keys"
TEST_KID = "test-kid-1"

JOHN_ID = "16a596ae-edd3-4847-99fe-c4518e82c86f"
PAUL_ID = "b7839309-3348-463b-a7e3-5de1c168beb3"
RINGO_ID = "03aa1462-ffa9-4978-901b-7c001562cf6f"
PETE_ID = "62c1084e-6e34-4630-93fd-9153afb65309"
GEORGE_ID = "c0c2293d-16bd-4603-8e08-638a9d18b22c"


def make_employee(employee_id: str, *reports: str, first_name: str | None = None) -> Employee:
    return Employee(
        employee_id=employee_id,
        first_name=first_name or employee_id,
        last_name="Test",
        position="Developer",
        department="Engineering",
        direct_reports=[EmployeeRef(employee_id=r) for r in reports],
    )


def beatles() -> list[Employee]:
    return [
        make_employee(JOHN_ID, PAUL_ID, RINGO_ID, first_name="John"),
        make_employee(PAUL_ID, first_name="Paul"),
        make_employee(RINGO_ID, PETE_ID, GEORGE_ID, first_name="Ringo"),
        make_employee(PETE_ID, first_name="Pete"),
        make_employee(GEORGE_ID, first_name="George"),
    ]


def _int_to_base64url(value: int) -> str:
    byte_length = (value.bit_length() + 7) // 8
    return base64.urlsafe_b64encode(value.to_bytes(byte_length, byteorder="big")).rstrip(b"=").decode("ascii")


@pytest.fixture(autouse=True)
def _auth_settings():
    from employee_directory.core.config import settings

    original = (settings.AUTH_ISSUER, settings.AUTH_AUDIENCE, settings.AUTH_JWKS_URL)
    settings.AUTH_ISSUER = TEST_ISSUER
    settings.AUTH_AUDIENCE = TEST_AUDIENCE
    settings.AUTH_JWKS_URL = TEST_JWKS_URL
    clear_jwks_cache()
    yield
    settings.AUTH_ISSUER, settings.AUTH_AUDIENCE, settings.AUTH_JWKS_URL = original
    clear_jwks_cache()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def rsa_test_keys():
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = private_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode("utf-8")

    pub = private_key.public_key().public_numbers()
    jwk_dict = {
        "kty": "RSA",
        "kid": TEST_KID,
        "use": "sig",
        "alg": "RS256",
        "n": _int_to_base64url(pub.n),
        "e": _int_to_base64url(pub.e),
    }
    jwks_response = {"keys": [jwk_dict]}
    return private_pem, jwks_response


@pytest.fixture
def mocked_jwks(rsa_test_keys):
    private_pem, jwks_response = rsa_test_keys
    with patch("employee_directory.core.auth.get_jwks", new=AsyncMock(return_value=jwks_response)) as mock:
        yield private_pem, mock


def _make_token(
    private_pem: str,
    *,
    sub: str = "test-sub-123",
    name: str = "Test User",
    email: str = "test@directory.example",
    roles: list[str] | None = None,
    expired: bool = False,
    audience: str = TEST_AUDIENCE,
) -> str:
    now = int(time.time())
    claims = {
        "sub": sub,
        "name": name,
        "email": email,
        "roles": roles or [],
        "iss": TEST_ISSUER,
        "aud": audience,
        "exp": now - 3600 if expired else now + 3600,
        "iat": now - 60,
        "nbf": now - 60,
    }
    return jwt.encode(claims, private_pem, algorithm="RS256", headers={"kid": TEST_KID})


@pytest.fixture
def mock_user_viewer():
    return UserInfo(id="viewer-1", name="Viewer User", email="viewer@directory.example", roles=["viewer"])


@pytest.fixture
def mock_user_admin():
    return UserInfo(id="admin-1", name="Admin User", email="admin@directory.example", roles=["admin"])


@pytest.fixture
def authenticated_client(mock_user_admin):
    app.dependency_overrides[get_current_user] = lambda: mock_user_admin
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def viewer_client(mock_user_viewer):
    app.dependency_overrides[get_current_user] = lambda: mock_user_viewer
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
