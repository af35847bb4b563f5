"""
Tests for the attachment redirect endpoint.

The refresher is injected through create_app, so no network is involved.
"""

from unittest.mock import Mock, patch
from urllib.parse import quote

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.integrations.discord.client import DiscordRefreshClient, RefreshError
from app.main import create_app

CDN_URL = "https://cdn.discordapp.com/attachments/123/456/image.png"
REFRESHED_URL = "https://cdn.discordapp.com/attachments/123/456/image.png?ex=6720&is=671e&hm=a1b2c3&"


class StubRefresher:
    """Records calls and answers with a fixed URL or error."""

    def __init__(self, result=REFRESHED_URL, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def refresh(self, url: str, token: str) -> str:
        self.calls.append((url, token))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def settings():
    return Settings(token="test-token", _env_file=None)


@pytest.fixture
def refresher():
    return StubRefresher()


@pytest.fixture
def client(settings, refresher):
    return TestClient(create_app(settings=settings, refresher=refresher), follow_redirects=False)


class TestRedirectSuccess:
    """Requests that end in a redirect."""

    def test_bare_path(self, client, refresher):
        """Test that an encoded bare path redirects to the refreshed URL."""
        response = client.get("/" + quote("123/456/image.png", safe=""))

        assert response.status_code == 301
        assert response.headers["location"] == REFRESHED_URL
        assert refresher.calls == [(CDN_URL, "test-token")]

    def test_full_cdn_url(self, client, refresher):
        """Test that an encoded expired CDN URL is rebuilt without its query."""
        expired = CDN_URL + "?ex=65f0&is=65de&hm=deadbeef&"
        response = client.get("/" + quote(expired, safe=""))

        assert response.status_code == 301
        assert response.headers["location"] == REFRESHED_URL
        assert refresher.calls == [(CDN_URL, "test-token")]

    def test_location_is_upstream_value(self, settings):
        """Test that the Location header is exactly what upstream returned."""
        client = TestClient(
            create_app(settings=settings, refresher=StubRefresher(result="Y")),
            follow_redirects=False,
        )

        response = client.get("/" + quote("123/456/image.png", safe=""))

        assert response.status_code == 301
        assert response.headers["location"] == "Y"

    def test_stubbed_upstream_response(self, settings):
        """Test the full path through DiscordRefreshClient with requests.post patched."""
        upstream = Mock()
        upstream.status_code = 200
        upstream.json.return_value = {"refreshed_urls": [{"original": "X", "refreshed": "Y"}]}
        client = TestClient(
            create_app(settings=settings, refresher=DiscordRefreshClient()),
            follow_redirects=False,
        )

        with patch("app.integrations.discord.client.requests.post", return_value=upstream) as mock_post:
            response = client.get("/" + quote("123/456/image.png", safe=""))

        assert response.status_code == 301
        assert response.headers["location"] == "Y"
        assert mock_post.call_args.kwargs["headers"]["Authorization"] == "test-token"


class TestRedirectClientErrors:
    """Requests rejected with 400 before any upstream call."""

    @pytest.mark.parametrize(
        "path, message",
        [
            ("/" + quote("123/456", safe=""), "Invalid link format"),
            ("/" + quote("abc/456/image.png", safe=""), "Invalid Channel ID"),
            ("/" + quote("123/abc/image.png", safe=""), "Invalid File ID"),
            ("/" + quote("123/456/noextension", safe=""), "File name must include a file extension"),
        ],
    )
    def test_parse_errors(self, client, refresher, path, message):
        """Test that each parse failure maps to its message."""
        response = client.get(path)

        assert response.status_code == 400
        assert response.json() == {"error": message}
        assert refresher.calls == []

    def test_empty_path(self, client, refresher):
        """Test that an empty path is rejected."""
        response = client.get("/")

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid URL format"}
        assert refresher.calls == []

    @pytest.mark.parametrize("path", ["/abc%25zz", "/123%25", "/%25G0%2F456%2Fa.png"])
    def test_malformed_escape(self, client, refresher, path):
        """Test that a broken percent escape is rejected before parsing."""
        response = client.get(path)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid URL format"}
        assert refresher.calls == []


class TestRedirectUpstreamErrors:
    """Upstream failures collapse into 502."""

    @pytest.mark.parametrize(
        "error",
        [
            RefreshError("unexpected status code: 500", status_code=500),
            RefreshError("no refreshed URL returned"),
            RefreshError("failed to execute request: timed out"),
        ],
    )
    def test_refresh_error(self, settings, error):
        """Test that any refresh failure answers 502."""
        client = TestClient(
            create_app(settings=settings, refresher=StubRefresher(error=error)),
            follow_redirects=False,
        )

        response = client.get("/" + quote("123/456/image.png", safe=""))

        assert response.status_code == 502
        assert response.json() == {"error": "Failed to refresh URL"}

    @pytest.mark.parametrize(
        "status_code, body",
        [
            (500, {"refreshed_urls": [{"original": "X", "refreshed": "Y"}]}),
            (200, {"refreshed_urls": []}),
        ],
    )
    def test_stubbed_upstream_failure(self, settings, status_code, body):
        """Test 500 and empty-list upstream answers through the real client."""
        upstream = Mock()
        upstream.status_code = status_code
        upstream.json.return_value = body
        client = TestClient(
            create_app(settings=settings, refresher=DiscordRefreshClient()),
            follow_redirects=False,
        )

        with patch("app.integrations.discord.client.requests.post", return_value=upstream):
            response = client.get("/" + quote("123/456/image.png", safe=""))

        assert response.status_code == 502
        assert response.json() == {"error": "Failed to refresh URL"}


def test_health_check(client, refresher):
    """Test that /health is not treated as an attachment link."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "Attachment Refresher"}
    assert refresher.calls == []
