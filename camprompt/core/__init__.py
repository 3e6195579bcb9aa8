"""Core components layer - shared, view-independent functionality."""

from camprompt.core.prompt_mapper import (
    PromptParts,
    classify_angle,
    classify_framing,
    classify_view,
    derive_prompt,
    format_full_prompt,
)
from camprompt.core.geometry_utils import (
    calculate_distance,
    direction_vector,
    normalize_vector,
    offset_to_spherical,
    spherical_to_offset,
)

__all__ = [
    "PromptParts",
    "classify_angle",
    "classify_framing",
    "classify_view",
    "derive_prompt",
    "format_full_prompt",
    "calculate_distance",
    "direction_vector",
    "normalize_vector",
    "offset_to_spherical",
    "spherical_to_offset",
]
