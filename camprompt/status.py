from dataclasses import dataclass
from typing import Callable

from camprompt.core.preset_adapter import azimuth_display_deg, vertical_ui_value


@dataclass
class StatusField:
    """
    Represents a status field containing a label, format, formatter function, and a value.

    The formatter receives the raw value and returns the text shown in the
    status bar. When no formatter is given, ``fmt`` is applied with
    ``str.format``.

    :ivar label: The label/name of the status field.
    :type label: str
    :ivar fmt: The format string used for formatting the field's value.
    :type fmt: str
    :ivar formatter: Callable function to format the field value.
    :type formatter: Callable[[any], str]
    :ivar value: The numerical value associated with the status field.
    :type value: float | int
    :ivar visible: Whether the field gets a label in the status bar.
    :type visible: bool
    """
    label: str
    fmt: str = "{}"
    formatter: Callable[[any], str] = None
    value: float | int = 0.0
    visible: bool = True

    def __post_init__(self):
        if self.formatter is None:
            self.formatter = lambda v, fmt=self.fmt, label=self.label: f"{label} {fmt.format(v)}"


def format_azimuth(azimuth: float) -> str:
    """Format the canonical azimuth (radians) as display degrees in [0, 360)."""
    return f"Azimuth {azimuth_display_deg(azimuth)}°"


def format_vertical(polar: float) -> str:
    """
    Format the polar angle (radians) as the vertical slider value.
    + -> above eye level
    - -> below eye level
    """
    value = vertical_ui_value(polar)
    return f"Vertical {value:+d}°"


# If you want to add a new value, add a field here and update it from
# MainWindow._on_snapshot_changed.
STATUS_FIELDS = {
    "azimuth": StatusField(label="Azimuth", formatter=format_azimuth),
    "polar": StatusField(label="Vertical", formatter=format_vertical),
    "distance": StatusField(label="Distance", fmt="{:.2f}"),
}
