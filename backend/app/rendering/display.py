"""Display metadata for report sections and assessment badges."""

from __future__ import annotations

from dataclasses import dataclass

from app.parsing.report_parser import (
    TIER_ACCEPTABLE,
    TIER_GOOD,
    TIER_NEEDS_IMPROVEMENT,
    TIER_PROBLEMATIC,
    TIER_UNKNOWN,
)


@dataclass(frozen=True)
class DisplayConfig:
    icon: str
    color_token: str
    border_color_token: str


# Keyed by the exact section title the analysis prompt asks the model for.
SECTION_DISPLAY_CONFIG: dict[str, DisplayConfig] = {
    "1. Shot Performance": DisplayConfig(
        icon="target",
        color_token="text-blue-600 dark:text-blue-400",
        border_color_token="border-blue-500/30",
    ),
    "2. Root Cause Analysis": DisplayConfig(
        icon="alert-circle",
        color_token="text-amber-600 dark:text-amber-400",
        border_color_token="border-amber-500/30",
    ),
    "3. Setup Recommendations": DisplayConfig(
        icon="wrench",
        color_token="text-green-600 dark:text-green-400",
        border_color_token="border-green-500/30",
    ),
    "4. Profile Recommendations": DisplayConfig(
        icon="trending-up",
        color_token="text-purple-600 dark:text-purple-400",
        border_color_token="border-purple-500/30",
    ),
    "5. Profile Design Observations": DisplayConfig(
        icon="lightbulb",
        color_token="text-cyan-600 dark:text-cyan-400",
        border_color_token="border-cyan-500/30",
    ),
}

DEFAULT_DISPLAY_CONFIG = DisplayConfig(
    icon="info",
    color_token="text-gray-600 dark:text-gray-400",
    border_color_token="border-gray-500/30",
)

TIER_BADGE_COLORS: dict[str, str] = {
    TIER_GOOD: "bg-green-500",
    TIER_ACCEPTABLE: "bg-yellow-500",
    TIER_NEEDS_IMPROVEMENT: "bg-orange-500",
    TIER_PROBLEMATIC: "bg-red-500",
    TIER_UNKNOWN: "bg-gray-500",
}


def resolve_display_config(title: str) -> DisplayConfig:
    """Look up a section title; exact match only, default otherwise."""
    return SECTION_DISPLAY_CONFIG.get(title, DEFAULT_DISPLAY_CONFIG)


def badge_color_for_tier(tier: str) -> str:
    return TIER_BADGE_COLORS.get(tier, TIER_BADGE_COLORS[TIER_UNKNOWN])
