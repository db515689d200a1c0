"""
Unit tests for signup, login and the current-user endpoint.
"""
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from expense_catalog import models
from expense_catalog.auth import SECRET_KEY, ALGORITHM, create_access_token
from expense_catalog.enums import UserRole


class TestSignup:
    def test_signup_creates_company_and_user(self, client: TestClient, db_session):
        response = client.post("/auth/signup", json={
            "email": "founder@example.com",
            "password": "s3cret-pass",
            "company_name": "Société Test",
        })

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert data["user"]["email"] == "founder@example.com"
        assert data["user"]["role"] == "user"
        assert data["company"]["name"] == "Société Test"
        assert data["user"]["company_id"] == data["company"]["id"]

        claims = jwt.decode(data["access_token"], SECRET_KEY, algorithms=[ALGORITHM])
        assert claims["sub"] == "founder@example.com"
        assert claims["tenant_id"] == str(data["company"]["id"])

        user = db_session.query(models.User).filter_by(email="founder@example.com").one()
        assert user.password_hash != "s3cret-pass"

    def test_signup_duplicate_email(self, client: TestClient, company_and_user):
        response = client.post("/auth/signup", json={
            "email": "test@example.com",
            "password": "whatever",
            "company_name": "Duplicate",
        })

        assert response.status_code == 400
        assert response.json()["detail"] == "Email already registered"

    def test_signup_invalid_email(self, client: TestClient):
        response = client.post("/auth/signup", json={
            "email": "not-an-email", "password": "x", "company_name": "Y",
        })
        assert response.status_code == 422

    def test_signup_strips_company_name(self, client: TestClient):
        response = client.post("/auth/signup", json={
            "email": "spaces@example.com", "password": "s3cret-pass", "company_name": "  Atelier Sfax  ",
        })

        assert response.status_code == 200
        assert response.json()["company"]["name"] == "Atelier Sfax"

    @pytest.mark.parametrize("overrides", [{"password": "short"}, {"company_name": ""}])
    def test_signup_rejects_weak_input(self, client: TestClient, overrides):
        payload = {"email": "new@example.com", "password": "s3cret-pass", "company_name": "Nouvelle"}
        response = client.post("/auth/signup", json={**payload, **overrides})
        assert response.status_code == 422


class TestLogin:
    def test_login_success(self, client: TestClient, company_and_user):
        response = client.post("/auth/login", json={"email": "test@example.com", "password": "testpass123"})

        assert response.status_code == 200
        assert response.json()["access_token"]
        assert response.json()["user"]["email"] == "test@example.com"

    def test_login_wrong_password(self, client: TestClient, company_and_user):
        response = client.post("/auth/login", json={"email": "test@example.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Incorrect email or password"

    def test_login_token_gives_access_to_categories(self, client: TestClient, company_and_user):
        token = client.post(
            "/auth/login", json={"email": "test@example.com", "password": "testpass123"}
        ).json()["access_token"]

        response = client.get("/expense-categories", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200


class TestTokens:
    def test_expired_token_is_rejected(self, client: TestClient, company_and_user):
        token = create_access_token(data={"sub": "test@example.com"}, expires_delta=timedelta(minutes=-1))

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_token_for_unknown_user_is_rejected(self, client: TestClient):
        token = create_access_token(data={"sub": "ghost@example.com"})

        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_role_is_read_from_the_database(self, client: TestClient, db_session, company_and_user, auth_headers):
        """A promotion applies to tokens issued before it."""
        _, user = company_and_user
        assert client.get("/admin/global-expense-categories", headers=auth_headers).status_code == 403

        user.role = UserRole.ADMIN
        db_session.commit()

        assert client.get("/admin/global-expense-categories", headers=auth_headers).status_code == 200


class TestMe:
    def test_me_returns_current_user(self, client: TestClient, company_and_user, auth_headers):
        company, _ = company_and_user
        response = client.get("/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["email"] == "test@example.com"
        assert response.json()["company_id"] == company.id

    def test_me_for_admin_without_company(self, client: TestClient, admin_headers):
        response = client.get("/auth/me", headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["role"] == "admin"
        assert response.json()["company_id"] is None
