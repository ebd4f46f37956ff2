# core/resources/tests/test_classifier.py
"""Tests for resource URL classification."""

import pytest

from core.config import Settings
from core.resources.classifier import classify, get_extension, parse_resource_url, presentation_provider


class TestEmptyLinks:
    """Missing links are plain text topics."""

    @pytest.mark.parametrize("url", ["", None, "   "])
    def test_empty_is_text(self, url):
        assert classify(url) == "text"


class TestDenylist:
    """Denylisted hosts are blocked before any other check."""

    def test_blocked_host(self):
        assert classify("https://www.mediafire.com/file/abc/notes.pdf") == "blocked"

    def test_blocked_suffix_match(self):
        assert classify("https://example-mediafire.com/file123") == "blocked"

    def test_blocked_beats_video_extension(self):
        assert classify("https://mega.nz/file/lecture.mp4") == "blocked"

    def test_blocked_beats_provider_substring(self):
        """A denylisted host wins even when the path mentions youtube."""
        assert classify("https://4shared.com/youtube/watch?v=dQw4w9WgXcQ") == "blocked"

    def test_extra_hosts_from_settings(self):
        settings = Settings(extra_blocked_hosts=("files.example.org",))
        assert classify("https://files.example.org/a.pdf", settings) == "blocked"
        assert classify("https://files.example.org/a.pdf") == "pdf"


class TestProviders:
    """Known providers are detected from the hostname."""

    @pytest.mark.parametrize(
        "url",
        [
            "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            "https://youtu.be/dQw4w9WgXcQ",
            "https://m.youtube.com/shorts/dQw4w9WgXcQ",
            "www.youtube.com/watch?v=dQw4w9WgXcQ",
        ],
    )
    def test_youtube(self, url):
        assert classify(url) == "youtube"

    def test_vimeo(self):
        assert classify("https://vimeo.com/76979871") == "vimeo"

    def test_gdrive(self):
        assert classify("https://drive.google.com/file/d/ABC123/view?usp=sharing") == "gdrive"

    def test_gdrive_beats_extension(self):
        assert classify("https://drive.google.com/uc?id=ABC123&name=slides.pptx") == "gdrive"

    @pytest.mark.parametrize(
        "url",
        [
            "https://gamma.app/docs/Intro-to-AI-abc123",
            "https://www.canva.com/design/DAFxyz/abc/view",
            "https://docs.google.com/presentation/d/1AbC/edit#slide=id.p",
            "https://pitch.com/public/1234-abcd",
        ],
    )
    def test_smart_presentations(self, url):
        assert classify(url) == "smart_presentation"

    def test_google_docs_document_is_not_presentation(self):
        assert classify("https://docs.google.com/document/d/1AbC/edit") == "webpage"

    @pytest.mark.parametrize(
        "url",
        [
            "https://blog.example.com/why-i-left-canva.com-for-figma",
            "https://example.com/reviews/gamma.app",
            "https://news.example.com/pitch.com/funding",
            "https://example.com/docs.google.com/presentation/d/1AbC",
        ],
    )
    def test_provider_name_in_path_is_webpage(self, url):
        assert classify(url) == "webpage"

    def test_presentation_provider_reads_host_only(self):
        assert presentation_provider("www.canva.com", "/design/x") == "canva"
        assert presentation_provider("blog.example.com", "/canva.com") is None
        assert presentation_provider("docs.google.com", "/presentation/d/1AbC") == "slides"
        assert presentation_provider("docs.google.com", "/presentations-archive") is None


class TestExtensions:
    """File extensions map to content types."""

    @pytest.mark.parametrize("ext", ["mp4", "webm", "avi", "mov", "wmv", "flv", "mkv", "m4v", "3gp"])
    def test_video_extensions(self, ext):
        assert classify(f"https://cdn.example.com/lectures/week1.{ext}") == "video"

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://cdn.example.com/a.MP3", "audio"),
            ("https://cdn.example.com/a.ogg", "audio"),
            ("https://cdn.example.com/a.pdf?download=1", "pdf"),
            ("https://cdn.example.com/deck.pptx", "powerpoint"),
            ("https://cdn.example.com/deck.ppsx", "powerpoint"),
            ("https://cdn.example.com/notes.docx", "document"),
            ("https://cdn.example.com/notes.txt", "document"),
            ("https://cdn.example.com/grades.csv", "excel"),
            ("https://cdn.example.com/diagram.svg", "image"),
            ("https://cdn.example.com/photo.JPEG#top", "image"),
        ],
    )
    def test_extension_table(self, url, expected):
        assert classify(url) == expected

    def test_query_string_is_ignored(self):
        assert classify("https://cdn.example.com/watch?file=movie.mp4") == "webpage"

    def test_relative_path_uses_extension(self):
        assert classify("files/handout.pdf") == "pdf"


class TestFallbacks:
    """Unknown and malformed links degrade to webpage, never raise."""

    def test_unknown_site(self):
        assert classify("https://en.wikipedia.org/wiki/Machine_learning") == "webpage"

    def test_unknown_extension(self):
        assert classify("https://example.com/archive.zip") == "webpage"

    @pytest.mark.parametrize("url", ["http://[::1", "http://[invalid/x.mp4", "::::", "%%%"])
    def test_malformed_urls(self, url):
        assert classify(url) == "webpage"


class TestHelpers:
    def test_get_extension(self):
        assert get_extension("/a/b/File.Name.PDF") == "pdf"
        assert get_extension("/a/b/") == ""
        assert get_extension("/a/my%20notes.docx") == "docx"

    def test_parse_bare_host(self):
        parts = parse_resource_url("www.example.com/page")
        assert parts.hostname == "www.example.com"
        assert parts.scheme == "https"

    def test_parse_bare_path_uses_fallback_base(self):
        parts = parse_resource_url("files/notes.pdf", "http://localhost")
        assert parts.hostname == "localhost"
        assert parts.path == "/files/notes.pdf"

    def test_parse_invalid(self):
        assert parse_resource_url("http://[::1") is None
