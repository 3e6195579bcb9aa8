"""Camera state value objects, separated from UI concerns."""
from __future__ import annotations

import math
from dataclasses import dataclass, replace

from camprompt.core.prompt_mapper import (
    DEFAULT_SUBJECT,
    PromptParts,
    derive_prompt,
    format_full_prompt,
)


@dataclass(frozen=True)
class CameraState:
    """Immutable spherical camera position around the orbit target (radians)."""
    azimuth: float
    polar: float
    distance: float

    def merged(self, request: PresetRequest) -> CameraState:
        """Return a copy with the fields provided by the request."""
        changes = {k: v for k, v in request.as_dict().items() if v is not None}
        return replace(self, **changes)

    def __str__(self) -> str:
        return (f"Azimuth: {math.degrees(self.azimuth):.1f}, "
                f"Polar: {math.degrees(self.polar):.1f}, "
                f"Distance: {self.distance:.2f}")


@dataclass(frozen=True)
class PresetRequest:
    """
    Partial camera state describing a programmatic move.

    Fields left as None are not touched when the request is applied.
    """
    azimuth: float | None = None
    polar: float | None = None
    distance: float | None = None

    @classmethod
    def from_state(cls, state: CameraState) -> PresetRequest:
        return cls(azimuth=state.azimuth, polar=state.polar, distance=state.distance)

    def as_dict(self) -> dict[str, float | None]:
        return {"azimuth": self.azimuth, "polar": self.polar, "distance": self.distance}

    @property
    def is_empty(self) -> bool:
        return self.azimuth is None and self.polar is None and self.distance is None


@dataclass(frozen=True)
class CameraSnapshot:
    """A camera state published together with the prompt derived from it."""
    state: CameraState
    prompt: PromptParts

    @classmethod
    def derive(cls, state: CameraState) -> CameraSnapshot:
        return cls(state, derive_prompt(state.azimuth, state.polar, state.distance))

    def prompt_text(self, subject: str = DEFAULT_SUBJECT) -> str:
        return format_full_prompt(self.prompt, subject)


# Front view, eye level, long shot.
DEFAULT_CAMERA_STATE = CameraState(azimuth=0.0, polar=math.pi / 2, distance=9.0)

VIEW_PRESETS: dict[str, PresetRequest] = {
    "front": PresetRequest.from_state(DEFAULT_CAMERA_STATE),
    "side": PresetRequest(azimuth=-math.pi / 2, polar=math.pi / 2, distance=5.0),
    "top": PresetRequest(azimuth=0.0, polar=0.1, distance=8.0),
    "iso": PresetRequest(azimuth=math.pi / 4, polar=math.pi / 3, distance=7.0),
}
