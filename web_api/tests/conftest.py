# web_api/tests/conftest.py
"""Pytest fixtures for web API tests.

Runs the app against a fake LMS backend (httpx.MockTransport) with a small
curriculum, so API tests need no network access.
"""

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from core.config import Settings
from main import create_app


MODULES = [
    {"id": 2, "title": "Deep Learning", "description": "Neural networks", "order_index": 2},
    {"id": 1, "title": "Foundations", "description": "Start here", "order_index": 1},
]

TOPICS = {
    1: [
        {
            "id": 11,
            "title": "Welcome video",
            "content": "Watch the welcome video.",
            "resource_link": "https://youtu.be/dQw4w9WgXcQ",
            "order_index": 1,
        },
        {
            "id": 12,
            "title": "Course notes",
            "content": "Read the notes.",
            "resource_link": "https://drive.google.com/file/d/ABC123/view?usp=sharing",
            "order_index": 2,
        },
        {
            "id": 13,
            "title": "Mirror download",
            "content": None,
            "resource_link": "https://example-mediafire.com/file123",
            "order_index": 3,
        },
        {
            "id": 14,
            "title": "Reflection",
            "content": "Write down three things you learned.",
            "resource_link": None,
            "order_index": 4,
        },
    ],
    2: [
        {
            "id": 21,
            "title": "Backprop lecture",
            "content": "",
            "resource_link": "https://cdn.example.com/backprop.mp4",
            "order_index": 1,
        },
    ],
}


class FakeLMSBackend:
    """Answers the LMS endpoints the viewer uses and records requests."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.failing_paths: set[str] = set()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api/v1")

        if path in self.failing_paths:
            return httpx.Response(503, json={"detail": "Service unavailable"})

        if path.startswith("/auth/login-"):
            body = json.loads(request.content)
            if body["password"] != "secret":
                return httpx.Response(401, json={"detail": "Incorrect email or password"})
            return httpx.Response(200, json={"access_token": "acc", "refresh_token": "ref"})

        if path == "/auth/logout":
            return httpx.Response(200, json={"status": "ok"})

        if request.headers.get("Authorization") not in ("Bearer test-token", "Bearer acc"):
            return httpx.Response(401, json={"detail": "Not authenticated"})

        if path == "/modules/":
            return httpx.Response(200, json=MODULES)

        if path == "/topics/":
            module_id = int(request.url.params["module_id"])
            return httpx.Response(200, json=TOPICS.get(module_id, []))

        if path == "/profiles/upload-image":
            return httpx.Response(200, json={"profile_image_url": "/static/profile_images/sam.png"})

        if path == "/profiles/student":
            if request.method == "GET":
                return httpx.Response(200, json={"id": 1, "first_name": "Sam", "institution": "MIT"})
            return httpx.Response(200, json={"id": 1, **json.loads(request.content)})

        return httpx.Response(404, json={"detail": "Not found"})

    def count(self, path: str) -> int:
        return sum(1 for r in self.requests if r.url.path == f"/api/v1{path}")


@pytest.fixture
def backend():
    return FakeLMSBackend()


@pytest.fixture
def client(backend):
    app = create_app(
        Settings(lms_api_base_url="https://lms.test/api/v1"),
        transport=httpx.MockTransport(backend),
    )
    with TestClient(app) as test_client:
        yield test_client
