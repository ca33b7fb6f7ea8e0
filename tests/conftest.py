import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["COOKIE_SECURE"] = "false"
os.environ["SECRET_KEY"] = "test-access-secret"
os.environ["REFRESH_SECRET_KEY"] = "test-refresh-secret"

import pytest
from fastapi.testclient import TestClient

from src.database import Base, SessionLocal, engine
from src.main import app

PASSWORD = "s3cret-pass"


@pytest.fixture(autouse=True)
def reset_database():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def register_payload(username: str, **overrides):
    payload = {
        "username": username,
        "email": f"{username.lower()}@example.com",
        "fullName": f"{username} Tester",
        "password": PASSWORD,
        "avatar": f"https://cdn.example.com/{username.lower()}.png",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_user(client):
    """Registers and logs in a user; returns its id and bearer headers."""

    def _make(username: str):
        response = client.post("/users/register", json=register_payload(username))
        assert response.status_code == 201, response.text
        user = response.json()["data"]

        response = client.post("/users/login", json={"username": username, "password": PASSWORD})
        assert response.status_code == 200, response.text
        tokens = response.json()["data"]
        # keep requests anonymous unless headers are passed explicitly
        client.cookies.clear()

        return {
            "id": user["id"],
            "username": user["username"],
            "headers": {"Authorization": f"Bearer {tokens['accessToken']}"},
            "refresh_token": tokens["refreshToken"],
        }

    return _make


@pytest.fixture
def publish_video(client):
    def _publish(owner, title="Intro to FastAPI", **overrides):
        payload = {
            "title": title,
            "description": f"{title} description",
            "videoFile": "https://cdn.example.com/v.mp4",
            "thumbnail": "https://cdn.example.com/v.jpg",
            "duration": 120.5,
        }
        payload.update(overrides)
        response = client.post("/videos", json=payload, headers=owner["headers"])
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _publish
