"""API routes: report parsing and proxied shot analysis."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Form, HTTPException, Query

from app.schemas.report import (
    CachedAnalysisResponse,
    ParseReportRequest,
    ReportView,
    ShotAnalysisResponse,
)
from app.services.analysis import build_report_view
from app.services.analysis_client import AnalysisServiceClient, AnalysisServiceError

logger = logging.getLogger(__name__)
router = APIRouter()

# ---------------------------------------------------------------------------
# Global client reference, set from main.py at startup
# ---------------------------------------------------------------------------
_client: AnalysisServiceClient | None = None


def set_client(client: AnalysisServiceClient | None) -> None:
    global _client
    _client = client


def get_client() -> AnalysisServiceClient:
    if _client is None:
        raise HTTPException(status_code=503, detail="Analysis server client not configured.")
    return _client


def _upstream_http_error(exc: AnalysisServiceError) -> HTTPException:
    status_code = exc.status_code if exc.status_code and exc.status_code >= 400 else 502
    return HTTPException(status_code=status_code, detail=str(exc))


# ---------------------------------------------------------------------------
# Report parsing
# ---------------------------------------------------------------------------

@router.post("/reports/parse", response_model=ReportView)
def parse_report(body: ParseReportRequest) -> ReportView:
    return build_report_view(
        body.text,
        cached=body.cached,
        profile_name=body.profile_name,
        shot_date=body.shot_date,
    )


# ---------------------------------------------------------------------------
# Shot analysis
# ---------------------------------------------------------------------------

@router.post("/shots/analyze-llm", response_model=ShotAnalysisResponse)
def analyze_shot(
    profile_name: str = Form(...),
    shot_date: str = Form(...),
    shot_filename: str = Form(...),
    profile_description: str | None = Form(None),
    force_refresh: bool = Form(False),
) -> ShotAnalysisResponse:
    client = get_client()
    try:
        analysis = client.analyze_shot(
            profile_name,
            shot_date,
            shot_filename,
            profile_description=profile_description,
            force_refresh=force_refresh,
        )
    except AnalysisServiceError as exc:
        logger.warning("LLM analysis failed for %s / %s: %s", profile_name, shot_filename, exc)
        raise _upstream_http_error(exc) from exc

    report = build_report_view(
        analysis.text,
        cached=analysis.cached,
        profile_name=profile_name,
        shot_date=shot_date,
    )
    return ShotAnalysisResponse(
        status="success",
        cached=analysis.cached,
        llm_analysis=analysis.text,
        report=report,
    )


@router.get("/shots/llm-analysis-cache", response_model=CachedAnalysisResponse)
def get_cached_analysis(
    profile_name: str = Query(...),
    shot_date: str = Query(...),
    shot_filename: str = Query(...),
) -> CachedAnalysisResponse:
    client = get_client()
    try:
        text = client.get_cached_analysis(profile_name, shot_date, shot_filename)
    except AnalysisServiceError as exc:
        logger.warning("Cache lookup failed for %s / %s: %s", profile_name, shot_filename, exc)
        raise _upstream_http_error(exc) from exc

    if text is None:
        return CachedAnalysisResponse(cached=False)

    return CachedAnalysisResponse(
        cached=True,
        analysis=text,
        report=build_report_view(
            text, cached=True, profile_name=profile_name, shot_date=shot_date,
        ),
    )
