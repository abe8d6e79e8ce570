"""Pydantic models for request / response validation."""

from __future__ import annotations

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Parsed report
# ---------------------------------------------------------------------------

class DisplayConfigResponse(BaseModel):
    icon: str
    color_token: str
    border_color_token: str


class AssessmentBadgeResponse(BaseModel):
    status: str
    tier: str  # good | acceptable | needs-improvement | problematic | unknown
    color_token: str


class SubsectionResponse(BaseModel):
    title: str
    items: list[str]


class SectionResponse(BaseModel):
    number: str
    title: str
    raw_content: str
    subsections: list[SubsectionResponse] = []
    assessment: AssessmentBadgeResponse | None = None
    display: DisplayConfigResponse
    fallback_text: str | None = None  # set when no subsection was parsed


class ReportView(BaseModel):
    structured: bool
    cached: bool = False
    profile_name: str | None = None
    shot_date: str | None = None
    sections: list[SectionResponse] = []
    raw_text: str | None = None  # set when the report has no sections


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class ParseReportRequest(BaseModel):
    text: str
    cached: bool = False
    profile_name: str | None = None
    shot_date: str | None = None


# ---------------------------------------------------------------------------
# Shot analysis (proxied from the analysis server)
# ---------------------------------------------------------------------------

class ShotAnalysisResponse(BaseModel):
    status: str = "success"
    cached: bool = False
    llm_analysis: str
    report: ReportView


class CachedAnalysisResponse(BaseModel):
    cached: bool
    analysis: str | None = None
    report: ReportView | None = None
