from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

import pytest
import requests

BACKEND_ROOT = Path(__file__).resolve().parents[1]
if str(BACKEND_ROOT) not in sys.path:
    sys.path.insert(0, str(BACKEND_ROOT))

from app.services.analysis_client import (  # noqa: E402
    AnalysisServiceClient,
    AnalysisServiceError,
    build_params,
)


def _response(status: int, body: bytes, content_type: str = "application/json") -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response._content = body
    response.headers["content-type"] = content_type
    response.encoding = "utf-8"
    return response


class _FakeSession:
    def __init__(self, response: requests.Response | None = None, exc: Exception | None = None) -> None:
        self.response = response
        self.exc = exc
        self.calls: list[dict[str, Any]] = []

    def request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        self.calls.append({"method": method, "url": url, **kwargs})
        if self.exc is not None:
            raise self.exc
        assert self.response is not None
        return self.response

    def close(self) -> None:
        pass


def _client(session: _FakeSession) -> AnalysisServiceClient:
    return AnalysisServiceClient(
        "http://upstream:8000/",
        timeout=5.0,
        analysis_timeout=60.0,
        session=session,  # type: ignore[arg-type]
    )


def test_build_params_drops_none():
    assert build_params({"a": 1, "b": None, "c": ""}) == {"a": 1, "c": ""}
    assert build_params(None) == {}


def test_request_decodes_by_content_type():
    session = _FakeSession(_response(200, b'{"ok": true}'))
    assert _client(session).request("GET", "/x") == {"ok": True}
    assert session.calls[0]["url"] == "http://upstream:8000/x"
    assert session.calls[0]["timeout"] == 5.0

    session = _FakeSession(_response(200, b"hello", "text/plain"))
    assert _client(session).request("GET", "/x") == "hello"

    session = _FakeSession(_response(200, b"\x00\x01", "application/octet-stream"))
    assert _client(session).request("GET", "/x") == b"\x00\x01"


def test_request_honors_explicit_response_type():
    session = _FakeSession(_response(200, b'{"ok": true}'))
    assert _client(session).request("GET", "/x", response_type="text") == '{"ok": true}'


def test_request_maps_http_errors():
    session = _FakeSession(_response(500, b"boom", "text/plain"))

    with pytest.raises(AnalysisServiceError) as excinfo:
        _client(session).request("GET", "/x")

    assert excinfo.value.status_code == 500
    assert excinfo.value.detail == "boom"
    assert str(excinfo.value) == "HTTP 500: boom"


def test_request_maps_timeout_to_408():
    session = _FakeSession(exc=requests.Timeout("slow"))

    with pytest.raises(AnalysisServiceError) as excinfo:
        _client(session).request("GET", "/x")

    assert excinfo.value.status_code == 408
    assert str(excinfo.value) == "Request timeout"


def test_request_maps_connection_errors():
    session = _FakeSession(exc=requests.ConnectionError("refused"))

    with pytest.raises(AnalysisServiceError) as excinfo:
        _client(session).request("GET", "/x")

    assert excinfo.value.status_code is None


def test_analyze_shot_posts_form_and_returns_text():
    session = _FakeSession(_response(200, b'{"status": "success", "llm_analysis": "## 1. A", "cached": true}'))

    result = _client(session).analyze_shot(
        "Blooming", "2026-01-05", "shot.json", profile_description="Slow bloom",
    )

    assert result.text == "## 1. A"
    assert result.cached is True
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"].endswith("/api/shots/analyze-llm")
    assert call["timeout"] == 60.0
    assert call["data"] == {
        "profile_name": "Blooming",
        "shot_date": "2026-01-05",
        "shot_filename": "shot.json",
        "profile_description": "Slow bloom",
    }


def test_analyze_shot_force_refresh_is_never_cached():
    session = _FakeSession(_response(200, b'{"status": "success", "llm_analysis": "text", "cached": true}'))

    result = _client(session).analyze_shot("P", "d", "f", force_refresh=True)

    assert result.cached is False
    assert session.calls[0]["data"]["force_refresh"] == "true"


def test_analyze_shot_raises_upstream_message_on_failure():
    session = _FakeSession(_response(200, b'{"status": "error", "message": "LLM offline"}'))

    with pytest.raises(AnalysisServiceError, match="LLM offline"):
        _client(session).analyze_shot("P", "d", "f")


def test_get_cached_analysis_hit_and_miss():
    session = _FakeSession(_response(200, b'{"cached": true, "analysis": "## 1. A"}'))
    assert _client(session).get_cached_analysis("P", "d", "f") == "## 1. A"
    assert session.calls[0]["params"] == {"profile_name": "P", "shot_date": "d", "shot_filename": "f"}

    session = _FakeSession(_response(200, b'{"cached": false}'))
    assert _client(session).get_cached_analysis("P", "d", "f") is None
