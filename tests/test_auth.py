"""Registration, login lockout and bearer authentication."""
import pytest

from catalog.application.use_cases.authenticate_user import (
    LoginUserUseCase,
    RegisterUserUseCase,
    password_problems,
)
from catalog.core.security import create_access_token, decode_access_token
from catalog.domain.entities.user import UserRole
from catalog.domain.errors import (
    AccountLockedError,
    AuthenticationError,
    ConflictError,
    PermissionDeniedError,
    ValidationError,
)
from tests.conftest import DEFAULT_PASSWORD, auth_headers, create_user


# ==============================================================================
# USE CASES
# ==============================================================================

@pytest.mark.parametrize("password, expected_problems", [
    ("Secret123", 0),
    ("secret123", 1),
    ("SECRET123", 1),
    ("SecretPass", 1),
    ("Ab1", 1),
    ("abc", 3),
])
def test_password_problems(password, expected_problems):
    assert len(password_problems(password)) == expected_problems


async def test_register_creates_regular_user(repos):
    result = await RegisterUserUseCase(repos.users).execute(" New@Example.com ", "Secret123")
    assert result.user.email == "new@example.com"
    assert result.user.role == UserRole.USER
    assert decode_access_token(result.token)["sub"] == str(result.user.id)


async def test_register_rejects_duplicate_email(repos):
    await create_user(repos.users, email="taken@example.com")
    with pytest.raises(ConflictError):
        await RegisterUserUseCase(repos.users).execute("TAKEN@example.com", "Secret123")


async def test_register_reports_every_password_problem(memory_repos):
    with pytest.raises(ValidationError) as exc_info:
        await RegisterUserUseCase(memory_repos.users).execute("weak@example.com", "abc")
    errors = exc_info.value.errors
    assert len(errors) == 3
    assert {error.field for error in errors} == {"password"}


async def test_login_success_resets_attempts(repos, clock):
    user = await create_user(repos.users)
    login = LoginUserUseCase(repos.users, clock=clock)
    with pytest.raises(AuthenticationError):
        await login.execute(user.email, "Wrong123")

    result = await login.execute(user.email, DEFAULT_PASSWORD)
    assert result.user.login_attempts == 0
    assert result.user.last_login_at == clock.now


async def test_unknown_email_and_wrong_password_look_the_same(repos, clock):
    user = await create_user(repos.users)
    login = LoginUserUseCase(repos.users, clock=clock)
    with pytest.raises(AuthenticationError) as unknown:
        await login.execute("ghost@example.com", DEFAULT_PASSWORD)
    with pytest.raises(AuthenticationError) as wrong:
        await login.execute(user.email, "Wrong123")
    assert str(unknown.value) == str(wrong.value)


async def test_lockout_after_repeated_failures(repos, clock):
    user = await create_user(repos.users)
    login = LoginUserUseCase(repos.users, clock=clock)
    for _ in range(5):
        with pytest.raises(AuthenticationError) as exc_info:
            await login.execute(user.email, "Wrong123")
        assert not isinstance(exc_info.value, AccountLockedError)

    # Correct password is refused while locked
    with pytest.raises(AccountLockedError):
        await login.execute(user.email, DEFAULT_PASSWORD)

    clock.advance(minutes=119)
    with pytest.raises(AccountLockedError):
        await login.execute(user.email, DEFAULT_PASSWORD)

    clock.advance(minutes=2)
    result = await login.execute(user.email, DEFAULT_PASSWORD)
    assert result.user.locked_until is None


async def test_inactive_user_cannot_login(repos, clock):
    user = await create_user(repos.users, is_active=False)
    with pytest.raises(PermissionDeniedError):
        await LoginUserUseCase(repos.users, clock=clock).execute(user.email, DEFAULT_PASSWORD)


# ==============================================================================
# API
# ==============================================================================

def test_register_endpoint(client):
    response = client.post("/api/auth/register", json={"email": "new@example.com", "password": "Secret123"})
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["user"]["email"] == "new@example.com"
    assert body["user"]["role"] == "user"
    assert body["user"]["isActive"] is True
    assert body["token"]


def test_register_ignores_role_in_body(client):
    response = client.post(
        "/api/auth/register",
        json={"email": "sneaky@example.com", "password": "Secret123", "role": "admin"},
    )
    assert response.status_code == 201
    assert response.json()["user"]["role"] == "user"


def test_register_weak_password_is_400(client):
    response = client.post("/api/auth/register", json={"email": "new@example.com", "password": "weakpass"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["errors"][0]["field"] == "password"


def test_register_invalid_email_is_400(client):
    response = client.post("/api/auth/register", json={"email": "not-an-email", "password": "Secret123"})
    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert [error["field"] for error in body["errors"]] == ["email"]


def test_register_duplicate_is_409(client, regular_user):
    response = client.post("/api/auth/register", json={"email": regular_user.email, "password": "Secret123"})
    assert response.status_code == 409


def test_login_endpoint(client, regular_user):
    response = client.post("/api/auth/login", json={"email": regular_user.email, "password": DEFAULT_PASSWORD})
    assert response.status_code == 200
    token = response.json()["token"]
    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["user"]["id"] == regular_user.id


def test_login_wrong_password_then_locked(client, regular_user):
    for _ in range(5):
        response = client.post("/api/auth/login", json={"email": regular_user.email, "password": "Wrong123"})
        assert response.status_code == 401
    response = client.post("/api/auth/login", json={"email": regular_user.email, "password": DEFAULT_PASSWORD})
    assert response.status_code == 423


def test_me_requires_token(client):
    assert client.get("/api/auth/me").status_code == 401
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


def test_me_with_token_for_missing_user(client):
    headers = {"Authorization": f"Bearer {create_access_token(9999, 'user')}"}
    assert client.get("/api/auth/me", headers=headers).status_code == 401


@pytest.fixture
async def inactive_user(db_repos):
    return await create_user(db_repos.users, email="off@example.com", is_active=False)


def test_me_for_deactivated_user_is_403(client, inactive_user):
    assert client.get("/api/auth/me", headers=auth_headers(inactive_user)).status_code == 403


def test_logout(client, user_headers):
    response = client.post("/api/auth/logout", headers=user_headers)
    assert response.status_code == 200
    assert response.json()["success"] is True
