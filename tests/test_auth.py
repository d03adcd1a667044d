"""
Tests for registration, login and password reset.
"""
from datetime import timedelta

import pytest

from hms.auth import service as auth_service
from hms.auth.models import User
from hms.core.security import hash_token, utcnow

RESET_TOKEN = "a" * 40


@pytest.fixture
def registered(client):
    response = client.post(
        "/register",
        json={"username": "nurse1", "email": "Nurse1@Example.com ", "password": "s3cret"},
    )
    assert response.status_code == 201
    return response


@pytest.fixture
def fixed_token(monkeypatch):
    monkeypatch.setattr(auth_service, "generate_secure_reset_token", lambda: RESET_TOKEN)
    return RESET_TOKEN


def test_register(registered, db):
    assert registered.json() == {"message": "User registered successfully"}
    user = db.query(User).one()
    assert user.email == "nurse1@example.com"
    assert user.password_hash != "s3cret"


def test_register_duplicate(client, registered):
    response = client.post(
        "/register",
        json={"username": "nurse2", "email": "nurse1@example.com", "password": "other"},
    )
    assert response.status_code == 409

    response = client.post(
        "/register",
        json={"username": "nurse1", "email": "someone@example.com", "password": "other"},
    )
    assert response.status_code == 409


def test_register_missing_fields(client):
    response = client.post("/register", json={"username": "nurse1"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}


def test_login_with_username_or_email(client, registered):
    response = client.post("/login", json={"identifier": "nurse1", "password": "s3cret"})
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Login successful"
    assert data["user"]["username"] == "nurse1"
    assert "password_hash" not in data["user"]

    response = client.post("/login", json={"identifier": "NURSE1@example.com", "password": "s3cret"})
    assert response.status_code == 200


def test_login_wrong_password(client, registered):
    response = client.post("/login", json={"identifier": "nurse1", "password": "wrong"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


def test_login_unknown_user(client):
    response = client.post("/login", json={"identifier": "ghost", "password": "x"})
    assert response.status_code == 401


def test_forgot_unknown_user(client):
    response = client.post("/forgot", json={"identifier": "ghost@example.com"})
    assert response.status_code == 404


def test_forgot_stores_hashed_token_and_logs_link(client, registered, db, fixed_token, caplog):
    with caplog.at_level("INFO", logger="hms.auth.service"):
        response = client.post("/forgot", json={"identifier": "nurse1@example.com"})
    assert response.status_code == 200

    user = db.query(User).one()
    assert user.reset_token == hash_token(fixed_token)
    assert user.reset_expires > utcnow() + timedelta(minutes=55)
    assert f"http://testserver/reset.html?token={fixed_token}" in caplog.text


def test_reset_password(client, registered, fixed_token):
    client.post("/forgot", json={"identifier": "nurse1"})

    response = client.post("/reset", json={"token": fixed_token, "password": "n3w-pass"})
    assert response.status_code == 200

    assert client.post("/login", json={"identifier": "nurse1", "password": "s3cret"}).status_code == 401
    assert client.post("/login", json={"identifier": "nurse1", "password": "n3w-pass"}).status_code == 200

    # Tokens are single use
    response = client.post("/reset", json={"token": fixed_token, "password": "again"})
    assert response.status_code == 400


def test_reset_with_expired_token(client, registered, db, fixed_token):
    client.post("/forgot", json={"identifier": "nurse1"})
    user = db.query(User).one()
    user.reset_expires = utcnow() - timedelta(minutes=1)
    db.commit()

    response = client.post("/reset", json={"token": fixed_token, "password": "n3w-pass"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid or expired token"}


def test_reset_with_unknown_token(client):
    response = client.post("/reset", json={"token": "nope", "password": "n3w-pass"})
    assert response.status_code == 400
