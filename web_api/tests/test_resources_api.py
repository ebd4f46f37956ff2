# web_api/tests/test_resources_api.py
"""Tests for POST /api/resources/resolve."""

import pytest


@pytest.mark.parametrize(
    "url,classification,kind",
    [
        ("https://www.youtube.com/watch?v=dQw4w9WgXcQ", "youtube", "iframe"),
        ("https://cdn.example.com/week1.mkv", "video", "native-video"),
        ("https://cdn.example.com/diagram.webp", "image", "native-image"),
        ("https://cdn.example.com/podcast.flac", "audio", "native-audio-fallback"),
        ("https://example-mediafire.com/file123", "blocked", "fallback-panel"),
        ("https://en.wikipedia.org/wiki/Learning", "webpage", "iframe"),
    ],
)
def test_resolve(client, url, classification, kind):
    response = client.post("/api/resources/resolve", json={"url": url})

    assert response.status_code == 200
    data = response.json()
    assert data["classification"] == classification
    assert data["directive"]["kind"] == kind


def test_resolve_without_url_is_text(client):
    response = client.post("/api/resources/resolve", json={"content": "Just text"})

    data = response.json()
    assert data["classification"] == "text"
    assert data["directive"]["content"] == "Just text"


def test_webpage_directive_flags_silent_failure(client):
    response = client.post("/api/resources/resolve", json={"url": "https://example.com/page"})

    directive = response.json()["directive"]
    assert directive["mayFailSilently"] is True
    assert directive["externalUrl"] == "https://example.com/page"


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}
