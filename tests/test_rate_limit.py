# tests/test_rate_limit.py
import pytest
from fastapi.testclient import TestClient

from taskboard.core.rate_limit_config import RATE_LIMIT_MESSAGE, limiter
from taskboard.main import create_app


@pytest.fixture
def limited_client(settings, container):
    limited = settings.model_copy(update={"RATE_LIMIT_ENABLED": True})
    limiter.reset()
    with TestClient(create_app(settings=limited, container=container)) as test_client:
        yield test_client
    limiter.reset()
    limiter.enabled = False


def test_registration_is_limited(limited_client):
    statuses = [
        limited_client.post(
            "/api/users",
            json={"username": f"user{i}", "email": f"user{i}@x.com", "password": "pw"},
        ).status_code
        for i in range(6)
    ]

    assert statuses[:5] == [201] * 5
    assert statuses[5] == 429


def test_limit_response(limited_client):
    for _ in range(10):
        limited_client.post("/api/login", json={"email": "a@x.com", "password": "pw"})

    response = limited_client.post("/api/login", json={"email": "a@x.com", "password": "pw"})

    assert response.status_code == 429
    assert response.text == RATE_LIMIT_MESSAGE
    assert response.headers["Retry-After"] == "60"


def test_clients_are_keyed_by_forwarded_ip(limited_client):
    for _ in range(10):
        limited_client.post(
            "/api/login",
            json={"email": "a@x.com", "password": "pw"},
            headers={"X-Forwarded-For": "10.0.0.1"},
        )

    response = limited_client.post(
        "/api/login",
        json={"email": "a@x.com", "password": "pw"},
        headers={"X-Forwarded-For": "10.0.0.2, 172.16.0.1"},
    )

    assert response.status_code == 401


def test_latest_app_decides_limiter_state(settings, container):
    create_app(settings=settings.model_copy(update={"RATE_LIMIT_ENABLED": True}), container=container)
    assert limiter.enabled is True

    with TestClient(create_app(settings=settings, container=container)) as client:
        statuses = [
            client.post(
                "/api/users",
                json={"username": f"user{i}", "email": f"user{i}@x.com", "password": "pw"},
            ).status_code
            for i in range(6)
        ]

    assert limiter.enabled is False
    assert statuses == [201] * 6
