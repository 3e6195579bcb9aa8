"""
Conversions between canonical camera units and the sidebar controls.

Sliders work in whole degrees: azimuth in [0, 360), a vertical value in
[-90, 90] (0 eye level, +90 overhead, -90 underfoot) and the raw distance.
Named buttons issue fixed preset requests and are highlighted when the
current readout falls inside their own tolerance window. The windows are
hand-tuned and independent of the prompt vocabulary bands.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, TYPE_CHECKING

from camprompt.viewers.camera.camera_state import CameraState, PresetRequest

if TYPE_CHECKING:
    from camprompt.viewers.camera.orbit_controller import OrbitSyncController

logger = logging.getLogger(__name__)

AZIMUTH_SLIDER_RANGE = (0, 360)
VERTICAL_SLIDER_RANGE = (-90, 90)
DISTANCE_SLIDER_RANGE = (2, 15)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +inf."""
    return math.floor(value + 0.5)


def to_deg(rad: float) -> int:
    """Radians to whole degrees, rounding halves up."""
    return round_half_up(math.degrees(rad))


def azimuth_display_deg(azimuth: float) -> int:
    """Azimuth for display, always in [0, 360) whatever the stored wrap."""
    return to_deg(azimuth) % 360


def vertical_ui_value(polar: float) -> int:
    """Polar angle to the vertical slider value (90 - polar degrees)."""
    return 90 - to_deg(polar)


def polar_from_vertical(value: float) -> float:
    """Vertical slider value back to a polar angle in radians."""
    value = min(VERTICAL_SLIDER_RANGE[1], max(VERTICAL_SLIDER_RANGE[0], value))
    return math.radians(90 - value)


def clamp_distance(distance: float, min_distance: float, max_distance: float) -> float:
    return min(max_distance, max(min_distance, distance))


@dataclass(frozen=True)
class UiReadout:
    """Camera state expressed in sidebar units."""
    azimuth_deg: int
    vertical: int
    distance: float


def readout_from_state(state: CameraState) -> UiReadout:
    return UiReadout(
        azimuth_deg=azimuth_display_deg(state.azimuth),
        vertical=vertical_ui_value(state.polar),
        distance=state.distance,
    )


@dataclass(frozen=True)
class PresetButton:
    key: str
    label: str
    request: PresetRequest
    is_active: Callable[[UiReadout], bool]


HORIZONTAL_BUTTONS: tuple[PresetButton, ...] = (
    PresetButton("front", "Front", PresetRequest(azimuth=0.0),
                 lambda r: r.azimuth_deg >= 355 or r.azimuth_deg <= 5),
    PresetButton("front_left", "Front Left", PresetRequest(azimuth=math.pi / 4),
                 lambda r: 40 <= r.azimuth_deg <= 50),
    PresetButton("left", "Left", PresetRequest(azimuth=math.pi / 2),
                 lambda r: 85 <= r.azimuth_deg <= 95),
    PresetButton("front_right", "Front Right", PresetRequest(azimuth=-math.pi / 4),
                 lambda r: 310 <= r.azimuth_deg <= 320),
    PresetButton("right", "Right", PresetRequest(azimuth=-math.pi / 2),
                 lambda r: 265 <= r.azimuth_deg <= 275),
)

VERTICAL_BUTTONS: tuple[PresetButton, ...] = (
    PresetButton("high_angle", "High Angle", PresetRequest(polar=math.pi / 3),
                 lambda r: r.vertical > 20),
    PresetButton("eye_level", "Eye Level", PresetRequest(polar=math.pi / 2),
                 lambda r: abs(r.vertical) <= 10),
    PresetButton("low_angle", "Low Angle", PresetRequest(polar=2 * math.pi / 3),
                 lambda r: r.vertical < -20),
)

DISTANCE_BUTTONS: tuple[PresetButton, ...] = (
    PresetButton("close_up", "Close-up", PresetRequest(distance=3.0),
                 lambda r: r.distance < 4),
    PresetButton("medium_shot", "Medium Shot", PresetRequest(distance=6.0),
                 lambda r: 4 <= r.distance < 8),
    PresetButton("full_shot", "Full Shot", PresetRequest(distance=9.0),
                 lambda r: r.distance >= 8),
)

PRESET_BUTTONS: dict[str, PresetButton] = {
    b.key: b for b in HORIZONTAL_BUTTONS + VERTICAL_BUTTONS + DISTANCE_BUTTONS
}


def active_keys(readout: UiReadout) -> set[str]:
    """Keys of every button whose tolerance window contains the readout."""
    return {key for key, button in PRESET_BUTTONS.items() if button.is_active(readout)}


class PresetAdapter:
    """Issues preset requests from sidebar units and reads the canonical state back."""

    def __init__(self, controller: OrbitSyncController) -> None:
        self.controller = controller

    def readout(self) -> UiReadout:
        return readout_from_state(self.controller.state)

    def active_keys(self) -> set[str]:
        return active_keys(self.readout())

    def press(self, key: str) -> None:
        """Apply the preset of a named button."""
        try:
            button = PRESET_BUTTONS[key]
        except KeyError:
            raise KeyError(f"Unknown preset button: {key}") from None
        logger.info("Preset button: %s", key)
        self.controller.apply_preset(button.request)

    def set_azimuth_deg(self, value: float) -> None:
        self.controller.apply_preset(PresetRequest(azimuth=math.radians(value)))

    def set_vertical(self, value: float) -> None:
        self.controller.apply_preset(PresetRequest(polar=polar_from_vertical(value)))

    def set_distance(self, value: float) -> None:
        distance = clamp_distance(value, self.controller.min_distance, self.controller.max_distance)
        self.controller.apply_preset(PresetRequest(distance=distance))

    def apply_view_preset(self, name: str) -> None:
        self.controller.apply_view_preset(name)
