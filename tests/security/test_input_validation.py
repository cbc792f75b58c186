"""
Security tests for input validation and response headers.

Tests injection attempts in frame keys, output escaping on pages and the
security headers added to every response.
"""

import pytest

from tests.utils import make_annotation_row


@pytest.mark.security
@pytest.mark.asyncio
class TestFrameKeyInjection:
    """Malformed or hostile frame keys never reach the database."""

    @pytest.mark.parametrize("frame_id", [
        "A1:0 OR 1=1",
        "A1:0;DROP TABLE frame_annotations",
        "A1:3:5",
        "A1:-1",
        "A1:1e3",
        "A1:0x10",
    ])
    async def test_rejected_before_query(self, async_client, db_conn, frame_id):
        response = await async_client.get(f"/annotations/load/{frame_id}")

        assert response.status_code == 400
        assert db_conn.calls == []

    async def test_analysis_id_passed_as_parameter(self, async_client, db_conn):
        """Quotes in the analysis id are bound as a query argument, not spliced into SQL."""
        response = await async_client.get("/annotations/load/x' OR '1'='1:0")

        assert response.status_code == 200
        _, query, args = db_conn.calls[0]
        assert args == ("x' OR '1'='1", 0)
        assert "OR '1'='1" not in query


@pytest.mark.security
@pytest.mark.asyncio
class TestOutputEscaping:

    async def test_uploaded_filename_escaped(self, async_client, monkeypatch):
        from levelup import config
        monkeypatch.setattr(config, "ANALYSIS_DELAY_SECONDS", 0)

        response = await async_client.post(
            "/upload",
            files={"video": ("<img src=x onerror=alert(1)>.mp4", b"data", "video/mp4")}
        )

        assert "<img src=x" not in response.text
        assert "&lt;img src=x" in response.text

    async def test_annotation_text_returned_verbatim_as_json(self, async_client, db_conn):
        db_conn.fetch_results = [[make_annotation_row("a1", text_content="<b>sprawl</b>")]]

        response = await async_client.get("/annotations/load/A1:0")

        assert response.headers["content-type"].startswith("application/json")
        assert response.json()["groups"][0]["annotations"][0]["textContent"] == "<b>sprawl</b>"


@pytest.mark.security
@pytest.mark.asyncio
class TestSecurityHeaders:

    @pytest.mark.parametrize("path", ["/", "/health", "/annotations/load/A1:0"])
    async def test_headers_present(self, async_client, path):
        response = await async_client.get(path)

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert "frame-ancestors 'none'" in response.headers["Content-Security-Policy"]
        assert response.headers["Referrer-Policy"] == "strict-origin-when-cross-origin"

    async def test_no_hsts_over_http(self, async_client):
        response = await async_client.get("/health")

        assert "Strict-Transport-Security" not in response.headers
