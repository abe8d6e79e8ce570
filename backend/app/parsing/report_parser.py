"""Structured-report parser: turns the LLM shot analysis into sections.

The analysis text follows a light markdown convention:

    ## 1. Shot Performance
    **What Happened:**
    - Fast flow
    **Assessment:** [Good]

Numbered ``##`` headers delimit sections, ``**Label:**`` runs delimit
subsections, and each subsection body is a list of bullet lines. The parser
tolerates any string: input that does not follow the convention simply
yields fewer (or zero) structured parts and the caller renders the raw text.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------

_SECTION_HEADER_RE = re.compile(r"^[ \t]*## (\d+)\.[ \t]+(.+)$", re.MULTILINE)
_SUBSECTION_LABEL_RE = re.compile(r"\*\*([^*\n]+):\*\*")
_ASSESSMENT_RE = re.compile(r"\*\*Assessment:\*\*\s*\[?([^\]\n]+)\]?", re.IGNORECASE)
_ASSESSMENT_LABEL_RE = re.compile(r"\*\*Assessment:\*\*", re.IGNORECASE)
_BULLET_MARKER_RE = re.compile(r"^[-•]\s*")

_EMPHASIS_MARKER = "**"

# ---------------------------------------------------------------------------
# Assessment tiers
# ---------------------------------------------------------------------------

TIER_GOOD = "good"
TIER_ACCEPTABLE = "acceptable"
TIER_NEEDS_IMPROVEMENT = "needs-improvement"
TIER_PROBLEMATIC = "problematic"
TIER_UNKNOWN = "unknown"

TIERS = (TIER_GOOD, TIER_ACCEPTABLE, TIER_NEEDS_IMPROVEMENT, TIER_PROBLEMATIC, TIER_UNKNOWN)

# Checked in order; the first phrase found in the status wins.
_TIER_KEYWORDS: tuple[tuple[str, str], ...] = (
    ("good", TIER_GOOD),
    ("acceptable", TIER_ACCEPTABLE),
    ("needs improvement", TIER_NEEDS_IMPROVEMENT),
    ("problematic", TIER_PROBLEMATIC),
)


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RawSection:
    number: str
    title: str
    raw_content: str


@dataclass(frozen=True)
class RawSubsection:
    title: str
    body: str
    label: str = ""  # the matched `**Label:**` run, as written


@dataclass(frozen=True)
class Subsection:
    title: str
    items: tuple[str, ...]


@dataclass(frozen=True)
class AssessmentBadge:
    status: str
    tier: str


@dataclass(frozen=True)
class Section:
    """One numbered block of the report.

    ``raw_content`` is always populated; renderers show it verbatim when
    ``subsections`` is empty.
    """

    number: str
    title: str
    raw_content: str
    subsections: tuple[Subsection, ...] = ()
    assessment: AssessmentBadge | None = None

    @property
    def is_structured(self) -> bool:
        return bool(self.subsections)


# ---------------------------------------------------------------------------
# Segmenters and extractors
# ---------------------------------------------------------------------------

def segment_sections(text: str) -> list[RawSection]:
    """Split *text* into sections at ``## <n>. <heading>`` lines.

    Returns an empty list when the text has no recognized header. Numbers
    are taken as written: duplicates and gaps are kept.
    """
    matches = list(_SECTION_HEADER_RE.finditer(text))
    sections: list[RawSection] = []
    for idx, match in enumerate(matches):
        end = matches[idx + 1].start() if idx + 1 < len(matches) else len(text)
        number = match.group(1)
        sections.append(
            RawSection(
                number=number,
                title=f"{number}. {match.group(2).strip()}",
                raw_content=text[match.end():end].strip(),
            )
        )
    return sections


def segment_subsections(section_content: str) -> list[RawSubsection]:
    """Split a section body at ``**Label:**`` runs, in document order."""
    matches = list(_SUBSECTION_LABEL_RE.finditer(section_content))
    subsections: list[RawSubsection] = []
    for idx, match in enumerate(matches):
        end = matches[idx + 1].start() if idx + 1 < len(matches) else len(section_content)
        subsections.append(
            RawSubsection(
                title=match.group(1).strip(),
                body=section_content[match.end():end].strip(),
                label=match.group(0),
            )
        )
    return subsections


def extract_items(body: str) -> list[str]:
    """Return the bullet lines of a subsection body with markers stripped."""
    items: list[str] = []
    for line in body.split("\n"):
        item = _BULLET_MARKER_RE.sub("", line.strip(), count=1).strip()
        # A leftover label means the segmenter missed it; never show it as a bullet.
        if not item or item.startswith(_EMPHASIS_MARKER):
            continue
        items.append(item)
    return items


def classify_tier(status: str) -> str:
    lowered = status.lower()
    for keyword, tier in _TIER_KEYWORDS:
        if keyword in lowered:
            return tier
    return TIER_UNKNOWN


def extract_assessment(section_content: str) -> AssessmentBadge | None:
    """Find the first ``**Assessment:** [status]`` annotation of a section."""
    match = _ASSESSMENT_RE.search(section_content)
    if match is None:
        return None
    status = match.group(1).strip()
    return AssessmentBadge(status=status, tier=classify_tier(status))


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------

def _parse_section(raw: RawSection) -> Section:
    subsections: list[Subsection] = []
    for raw_sub in segment_subsections(raw.raw_content):
        # The assessment label still ends the previous subsection's body,
        # but it is shown as the section badge, not as its own card. Only the
        # exact label the badge pattern reads is skipped; variants such as
        # `**Assessment :**` stay as ordinary subsections.
        if _ASSESSMENT_LABEL_RE.fullmatch(raw_sub.label):
            continue
        items = extract_items(raw_sub.body)
        if items:
            subsections.append(Subsection(title=raw_sub.title, items=tuple(items)))

    return Section(
        number=raw.number,
        title=raw.title,
        raw_content=raw.raw_content,
        subsections=tuple(subsections),
        assessment=extract_assessment(raw.raw_content),
    )


def parse_structured_analysis(document: str) -> list[Section]:
    """Parse an analysis report into ordered, renderable sections.

    An empty result means the document is unstructured and should be shown
    as-is. Never raises for string input.
    """
    if not isinstance(document, str):
        raise TypeError(f"document must be a str, not {type(document).__name__}")
    return [_parse_section(raw) for raw in segment_sections(document)]
