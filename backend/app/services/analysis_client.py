"""HTTP client for the upstream shot-analysis server."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

logger = logging.getLogger(__name__)

ANALYZE_LLM_PATH = "/api/shots/analyze-llm"
LLM_CACHE_PATH = "/api/shots/llm-analysis-cache"


class AnalysisServiceError(RuntimeError):
    """Raised for any failed call to the analysis server.

    ``status_code`` is the upstream HTTP status, 408 for a timeout, or None
    when no response was received at all.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


@dataclass
class LlmAnalysis:
    text: str
    cached: bool = False


def build_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Drop ``None`` values so they are not sent as empty query fields."""
    if not params:
        return {}
    return {k: v for k, v in params.items() if v is not None}


def _coerce_body(response: requests.Response, response_type: str | None) -> Any:
    if response_type == "bytes":
        return response.content
    if response_type == "text":
        return response.text
    if response_type == "json":
        return response.json()

    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        return response.json()
    if "application/octet-stream" in content_type or "application/zip" in content_type:
        return response.content
    return response.text


def _upstream_message(payload: Any, fallback: str) -> str:
    if not isinstance(payload, dict):
        return fallback
    detail = payload.get("detail")
    if isinstance(detail, dict):
        message = detail.get("message") or detail.get("error")
        if message:
            return str(message)
    return str(payload.get("message") or fallback)


class AnalysisServiceClient:
    """Thin wrapper around ``requests`` with a default timeout and error mapping."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        analysis_timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.analysis_timeout = analysis_timeout or timeout
        self._session = session or requests.Session()

    def close(self) -> None:
        self._session.close()

    def request(
        self,
        method: str,
        path: str,
        *,
        response_type: str | None = None,
        timeout: float | None = None,
        params: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> Any:
        """Send a request and return the decoded body.

        *response_type* forces ``"json"``, ``"text"`` or ``"bytes"``;
        otherwise the body is decoded from its content type.
        """
        url = f"{self.base_url}{path}"
        try:
            response = self._session.request(
                method,
                url,
                params=build_params(params),
                timeout=timeout or self.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            logger.warning("%s %s timed out.", method, url)
            raise AnalysisServiceError("Request timeout", status_code=408) from exc
        except requests.RequestException as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise AnalysisServiceError(str(exc)) from exc

        if not response.ok:
            error_text = response.text or "Unknown error"
            raise AnalysisServiceError(
                f"HTTP {response.status_code}: {error_text}",
                status_code=response.status_code,
                detail=error_text,
            )

        try:
            return _coerce_body(response, response_type)
        except ValueError as exc:
            raise AnalysisServiceError(
                f"Invalid response body from {url}: {exc}",
                status_code=response.status_code,
            ) from exc

    # ------------------------------------------------------------------
    # Shot analysis
    # ------------------------------------------------------------------

    def analyze_shot(
        self,
        profile_name: str,
        shot_date: str,
        shot_filename: str,
        *,
        profile_description: str | None = None,
        force_refresh: bool = False,
    ) -> LlmAnalysis:
        form: dict[str, str] = {
            "profile_name": profile_name,
            "shot_date": shot_date,
            "shot_filename": shot_filename,
        }
        if profile_description:
            form["profile_description"] = profile_description
        if force_refresh:
            form["force_refresh"] = "true"

        logger.info(
            "Requesting LLM analysis for %s / %s (force_refresh=%s).",
            profile_name, shot_filename, force_refresh,
        )
        payload = self.request(
            "POST",
            ANALYZE_LLM_PATH,
            response_type="json",
            timeout=self.analysis_timeout,
            data=form,
        )
        if not isinstance(payload, dict) or payload.get("status") != "success":
            raise AnalysisServiceError(_upstream_message(payload, "LLM Analysis failed"))

        text = payload.get("llm_analysis")
        if not isinstance(text, str):
            raise AnalysisServiceError("LLM Analysis returned no text")
        # A forced refresh is always a fresh result.
        cached = bool(payload.get("cached")) and not force_refresh
        return LlmAnalysis(text=text, cached=cached)

    def get_cached_analysis(
        self,
        profile_name: str,
        shot_date: str,
        shot_filename: str,
    ) -> str | None:
        """Return the server-side cached analysis text, or None on a miss."""
        payload = self.request(
            "GET",
            LLM_CACHE_PATH,
            response_type="json",
            params={
                "profile_name": profile_name,
                "shot_date": shot_date,
                "shot_filename": shot_filename,
            },
        )
        if isinstance(payload, dict) and payload.get("cached") and payload.get("analysis"):
            logger.info("LLM analysis cache hit for %s / %s.", profile_name, shot_filename)
            return str(payload["analysis"])
        logger.info("LLM analysis cache miss for %s / %s.", profile_name, shot_filename)
        return None
