"""Report view builder: parsed sections plus display metadata.

Turns the raw analysis text into the JSON the front end renders: one card
per section with its icon and colors, an optional assessment badge, and the
verbatim fallbacks for text the parser could not structure.
"""

from __future__ import annotations

import logging

from app.parsing.report_parser import Section, parse_structured_analysis
from app.rendering.display import badge_color_for_tier, resolve_display_config
from app.schemas.report import (
    AssessmentBadgeResponse,
    DisplayConfigResponse,
    ReportView,
    SectionResponse,
    SubsectionResponse,
)

logger = logging.getLogger(__name__)


def _section_to_response(section: Section) -> SectionResponse:
    display = resolve_display_config(section.title)

    badge = None
    if section.assessment is not None:
        badge = AssessmentBadgeResponse(
            status=section.assessment.status,
            tier=section.assessment.tier,
            color_token=badge_color_for_tier(section.assessment.tier),
        )

    return SectionResponse(
        number=section.number,
        title=section.title,
        raw_content=section.raw_content,
        subsections=[
            SubsectionResponse(title=sub.title, items=list(sub.items))
            for sub in section.subsections
        ],
        assessment=badge,
        display=DisplayConfigResponse(
            icon=display.icon,
            color_token=display.color_token,
            border_color_token=display.border_color_token,
        ),
        fallback_text=None if section.is_structured else section.raw_content,
    )


def build_report_view(
    text: str,
    *,
    cached: bool = False,
    profile_name: str | None = None,
    shot_date: str | None = None,
) -> ReportView:
    """Parse *text* and return the renderable report.

    When no section header is found the view is unstructured and carries the
    whole trimmed text for verbatim rendering.
    """
    sections = parse_structured_analysis(text)
    logger.debug("Parsed analysis into %d section(s).", len(sections))

    if not sections:
        logger.info("Analysis has no recognized sections, rendering raw text.")
        return ReportView(
            structured=False,
            cached=cached,
            profile_name=profile_name,
            shot_date=shot_date,
            raw_text=text.strip(),
        )

    return ReportView(
        structured=True,
        cached=cached,
        profile_name=profile_name,
        shot_date=shot_date,
        sections=[_section_to_response(s) for s in sections],
    )
