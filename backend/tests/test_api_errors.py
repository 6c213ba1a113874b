"""
API error handling integration tests against the fully assembled app.
Every failure must come back as {"error": "<message>"} with 400/401/404.
"""
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from backend.app.database import Base, get_db, make_engine
from backend.app.main import app

# Test database setup
SQLALCHEMY_DATABASE_URL = f"sqlite:///{Path(tempfile.gettempdir()) / 'test_api_errors.db'}"
engine = make_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db
client = TestClient(app)
# Unhandled exceptions still propagate out of TestClient after the handler responds.
lenient_client = TestClient(app, raise_server_exceptions=False)


@pytest.fixture(scope="function", autouse=True)
def setup_database():
    from backend.app import models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def _register(email="user@example.com", role="parent", name="Test User", password="pw"):
    return client.post("/api/auth/register", json={
        "name": name,
        "email": email,
        "password": password,
        "role": role,
    })


class TestAuthErrors:
    def test_register_example_then_duplicate(self):
        body = {"name": "A", "email": "a@x.com", "password": "pw", "role": "parent"}
        first = client.post("/api/auth/register", json=body)
        assert first.status_code == 200
        data = first.json()
        assert data["user"] == {"id": data["user"]["id"], "name": "A", "email": "a@x.com", "role": "parent"}
        assert data["token"]

        second = client.post("/api/auth/register", json=body)
        assert second.status_code == 400
        assert second.json() == {"error": "Email already registered"}

    def test_register_invalid_role(self):
        response = _register(role="tutor")
        assert response.status_code == 400
        assert "role" in response.json()["error"].lower()

    def test_login_unknown_user(self):
        response = client.post("/api/auth/login", json={
            "email": "nonexistent@example.com",
            "password": "wrongpassword",
        })
        assert response.status_code == 400
        assert response.json() == {"error": "User not found"}

    def test_login_wrong_password(self):
        _register(email="known@example.com", password="right")
        response = client.post("/api/auth/login", json={"email": "known@example.com", "password": "nope"})
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid password"}


class TestProjectErrors:
    def setup_method(self):
        # Runs independently of the autouse fixture, so start from a clean schema here too.
        Base.metadata.drop_all(bind=engine)
        Base.metadata.create_all(bind=engine)
        response = _register(email="owner@example.com")
        self.headers = {"Authorization": f"Bearer {response.json()['token']}"}

    def test_get_nonexistent_project(self):
        response = client.get("/api/projects/99999")
        assert response.status_code == 404
        assert response.json() == {"error": "Project not found"}

    def test_create_project_missing_title(self):
        response = client.post("/api/projects", headers=self.headers, json={"budget": 10})
        assert response.status_code == 400
        assert "error" in response.json()

    def test_create_project_non_numeric_budget(self):
        response = client.post("/api/projects", headers=self.headers, json={"title": "X", "budget": "lots"})
        assert response.status_code == 400
        assert "budget" in response.json()["error"]

    def test_bid_on_missing_project(self):
        response = client.post("/api/bids", headers=self.headers, json={"project_id": 777, "amount": 5})
        assert response.status_code == 400
        assert response.json()["error"]

    @pytest.mark.parametrize("path", [
        "/api/projects/99999999999999999999",
        "/api/projects/99999999999999999999/bids",
    ])
    def test_out_of_range_id_keeps_error_shape(self, path):
        response = lenient_client.get(path, headers=self.headers)
        assert response.status_code == 400
        assert response.json()["error"]


class TestUnauthorizedAccess:
    @pytest.mark.parametrize("method, path", [
        ("post", "/api/projects"),
        ("get", "/api/my-projects"),
        ("post", "/api/bids"),
        ("get", "/api/projects/1/bids"),
    ])
    def test_protected_routes_without_token(self, method, path):
        response = getattr(client, method)(path)
        assert response.status_code == 401
        assert response.json() == {"error": "No token provided"}

    def test_wrong_scheme_is_treated_as_missing(self):
        response = client.get("/api/my-projects", headers={"Authorization": "Token abc"})
        assert response.status_code == 401

    def test_garbage_bearer_token(self):
        response = client.get("/api/my-projects", headers={"Authorization": "Bearer garbage"})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid token"}

    def test_public_routes_need_no_token(self):
        assert client.get("/api/projects").status_code == 200


class TestHealthCheck:
    def test_health_endpoint(self):
        response = client.get("/health")
        assert response.status_code == 200
        assert "status" in response.json()


class TestErrorLogging:
    """Verify errors don't crash the application"""

    def test_malformed_json(self):
        response = client.post(
            "/api/auth/register",
            content="not valid json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert "error" in response.json()

    def test_missing_required_field(self):
        response = client.post("/api/auth/register", json={"email": "test@example.com"})
        assert response.status_code == 400
        assert "error" in response.json()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
