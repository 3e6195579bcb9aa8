"""Mapping from spherical camera coordinates to cinematographic prompt vocabulary."""
from __future__ import annotations

import math
from bisect import bisect_right
from dataclasses import dataclass

TWO_PI = 2.0 * math.pi

DEFAULT_SUBJECT = "character"

# Horizontal sectors in rotational order, each centred on a multiple of 45 degrees.
VIEW_LABELS: tuple[str, ...] = (
    "front view",
    "front-right three-quarter view",
    "right side profile",
    "back-right three-quarter view",
    "back view",
    "back-left three-quarter view",
    "left side profile",
    "front-left three-quarter view",
)
VIEW_BOUNDARIES_DEG: tuple[float, ...] = tuple(22.5 + 45.0 * k for k in range(8))

# Polar bands, from above the subject (0) to below it (180).
ANGLE_LABELS: tuple[str, ...] = (
    "overhead bird's-eye view",
    "high angle shot",
    "eye-level shot",
    "low angle shot",
    "worm's-eye view",
)
ANGLE_THRESHOLDS_DEG: tuple[float, ...] = (30.0, 75.0, 105.0, 150.0)

# (framing, technical) per distance band. The lens follows the framing.
FRAMING_BANDS: tuple[tuple[str, str], ...] = (
    ("extreme close-up", "macro lens, f/2.8"),
    ("close-up portrait", "85mm lens, f/1.8, bokeh"),
    ("medium shot", "50mm lens"),
    ("long shot", "35mm lens"),
    ("wide angle shot", "24mm lens, deep depth of field"),
    ("extreme long shot", "16mm wide angle lens"),
)
FRAMING_BREAKPOINTS: tuple[float, ...] = (2.5, 4.0, 7.0, 12.0, 20.0)


@dataclass(frozen=True)
class PromptParts:
    """Prompt fragments derived from a camera position."""
    view: str
    angle: str
    framing: str
    technical: str

    def __str__(self) -> str:
        return format_full_prompt(self)


def normalize_azimuth(azimuth: float) -> float:
    """Wrap an azimuth in radians into [0, 2pi)."""
    az = azimuth % TWO_PI
    # -tiny % 2pi rounds up to 2pi
    return 0.0 if az >= TWO_PI else az


def classify_view(azimuth_deg: float) -> str:
    """Horizontal descriptor for an azimuth in degrees (any value, wrapped)."""
    deg = azimuth_deg % 360.0
    return VIEW_LABELS[bisect_right(VIEW_BOUNDARIES_DEG, deg) % len(VIEW_LABELS)]


def classify_angle(polar_deg: float) -> str:
    """Vertical descriptor for a polar angle in degrees. Boundaries go to the higher band."""
    return ANGLE_LABELS[bisect_right(ANGLE_THRESHOLDS_DEG, polar_deg)]


def classify_framing(distance: float) -> tuple[str, str]:
    """(framing, technical) pair for a camera-to-subject distance."""
    return FRAMING_BANDS[bisect_right(FRAMING_BREAKPOINTS, distance)]


def derive_prompt(azimuth: float, polar: float, distance: float) -> PromptParts:
    """
    Derive prompt fragments from spherical camera coordinates.

    :param azimuth: Horizontal angle in radians, unrestricted
    :param polar: Vertical angle in radians, 0 above the subject, pi below
    :param distance: Camera to subject distance
    :return: PromptParts
    """
    azimuth_deg = math.degrees(normalize_azimuth(azimuth))
    framing, technical = classify_framing(distance)
    return PromptParts(
        view=classify_view(azimuth_deg),
        angle=classify_angle(math.degrees(polar)),
        framing=framing,
        technical=technical,
    )


def format_full_prompt(parts: PromptParts, subject: str = DEFAULT_SUBJECT) -> str:
    """Single-line prompt, used verbatim for the clipboard."""
    return f"{parts.framing}, {parts.angle}, {parts.view} of {subject}, {parts.technical}"
