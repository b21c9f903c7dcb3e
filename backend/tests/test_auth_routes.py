import asyncio

import bcrypt
import pytest

from helpers import auth_headers, login, register
from invoicer.crud import user_crud
from invoicer.models.user import User


def test_first_user_becomes_admin_and_later_users_do_not(client, mock_db):
    first = register(client, "alice@example.com", name="Alice")
    assert first.status_code == 201
    assert first.json() == {"message": "Registration successful.", "isAdmin": True}

    second = register(client, "bob@example.com")
    assert second.status_code == 201
    assert second.json()["isAdmin"] is False

    alice = asyncio.run(mock_db.users.find_one({"email": "alice@example.com"}))
    bob = asyncio.run(mock_db.users.find_one({"email": "bob@example.com"}))
    assert alice["role"] == "ADMIN"
    assert bob["role"] == "USER"


def test_password_is_hashed_with_argon2(client, mock_db):
    register(client, "alice@example.com", password="secret-pass")

    user = asyncio.run(mock_db.users.find_one({"email": "alice@example.com"}))
    assert user["password"] != "secret-pass"
    assert user["password"].startswith("$argon2")


def test_duplicate_email_is_rejected_without_creating_a_user(client, mock_db):
    register(client, "alice@example.com")

    response = register(client, "alice@example.com", password="another-one")

    assert response.status_code == 400
    assert response.json()["message"] == "Email already registered."
    assert asyncio.run(mock_db.users.count_documents({"email": "alice@example.com"})) == 1


def test_register_requires_email_and_password(client):
    no_password = client.post("/api/auth/register", json={"email": "alice@example.com"})
    no_email = client.post("/api/auth/register", json={"password": "pw123456"})

    for response in (no_password, no_email):
        assert response.status_code == 400
        assert response.json()["message"] == "Email and password are required."


def test_email_is_stored_exactly_as_sent(client, mock_db):
    assert register(client, "Alice@Example.COM").status_code == 201
    assert register(client, "Alice@example.com").status_code == 201

    stored = [u["email"] for u in asyncio.run(mock_db.users.find({}).to_list(length=None))]
    assert sorted(stored) == ["Alice@Example.COM", "Alice@example.com"]

    assert login(client, "Alice@Example.COM").status_code == 200
    assert login(client, "alice@example.com").status_code == 401


@pytest.mark.parametrize("email", ["admin@localhost", "dev@company.test"])
def test_register_accepts_any_non_empty_email(client, email):
    assert register(client, email).status_code == 201


def test_bootstrap_admin_is_only_granted_once(client, mock_db):
    register(client, "alice@example.com")
    asyncio.run(mock_db.users.delete_many({}))

    # store is empty again but the bootstrap slot is already taken
    response = register(client, "bob@example.com")

    assert response.json()["isAdmin"] is False


def test_login_returns_token_and_redacted_user(client):
    register(client, "alice@example.com", name="Alice")

    response = login(client, "alice@example.com")

    assert response.status_code == 200
    body = response.json()
    assert body["token"]
    assert body["user"]["email"] == "alice@example.com"
    assert body["user"]["name"] == "Alice"
    assert body["user"]["role"] == "ADMIN"
    assert "password" not in body["user"]


def test_login_failures_are_indistinguishable(client):
    register(client, "alice@example.com")

    wrong_password = login(client, "alice@example.com", password="wrong")
    unknown_email = login(client, "nobody@example.com")

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"message": "Invalid email or password."}


def test_login_requires_both_fields(client):
    response = client.post("/api/auth/login", json={"email": "alice@example.com"})

    assert response.status_code == 400


def test_legacy_bcrypt_hash_is_accepted_and_upgraded(client, mock_db):
    legacy_hash = bcrypt.hashpw(b"old-password", bcrypt.gensalt(rounds=4)).decode("utf-8")
    user = User(email="legacy@example.com", password=legacy_hash)
    asyncio.run(mock_db.users.insert_one(user.to_document()))

    response = login(client, "legacy@example.com", password="old-password")

    assert response.status_code == 200
    stored = asyncio.run(mock_db.users.find_one({"email": "legacy@example.com"}))
    assert stored["password"].startswith("$argon2")
    assert login(client, "legacy@example.com", password="old-password").status_code == 200


def test_me_returns_current_user_without_secrets(client):
    headers = auth_headers(client, "alice@example.com")

    response = client.get("/api/auth/me", headers=headers)

    assert response.status_code == 200
    body = response.json()
    assert body["email"] == "alice@example.com"
    assert body["role"] == "ADMIN"
    assert body["id"]
    assert "password" not in body
    assert "preferences" not in body


def test_me_without_token_is_401(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json()["message"] == "Authentication required."


def test_me_with_garbage_token_is_403(client):
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not.a.token"})

    assert response.status_code == 403
    assert response.json()["message"] == "Invalid or expired token."


def test_me_for_deleted_user_is_404(client, mock_db):
    headers = auth_headers(client, "alice@example.com")
    asyncio.run(mock_db.users.delete_many({}))

    response = client.get("/api/auth/me", headers=headers)

    assert response.status_code == 404


def test_setup_admin_promotes_when_no_admin_exists(client, mock_db):
    register(client, "alice@example.com")
    asyncio.run(mock_db.users.update_many({}, {"$set": {"role": "USER"}}))

    response = client.post("/api/auth/setup-admin", json={"email": "alice@example.com"})

    assert response.status_code == 200
    assert response.json()["role"] == "ADMIN"
    assert "password" not in response.json()


def test_setup_admin_refuses_when_admin_exists(client):
    register(client, "alice@example.com")
    register(client, "bob@example.com")

    response = client.post("/api/auth/setup-admin", json={"email": "bob@example.com"})

    assert response.status_code == 400
    assert response.json()["message"] == "An admin user already exists."


def test_setup_admin_unknown_email_is_404(client, mock_db):
    register(client, "alice@example.com")
    asyncio.run(mock_db.users.update_many({}, {"$set": {"role": "USER"}}))

    response = client.post("/api/auth/setup-admin", json={"email": "ghost@example.com"})

    assert response.status_code == 404


def test_password_hashing_runs_in_threadpool(client, monkeypatch):
    offloaded = []

    async def recording_threadpool(func, *args, **kwargs):
        offloaded.append(func.__name__)
        return func(*args, **kwargs)

    monkeypatch.setattr(user_crud, "run_in_threadpool", recording_threadpool)

    register(client, "alice@example.com")
    login(client, "alice@example.com")

    assert offloaded == ["hash_password", "verify_password"]
