from __future__ import annotations
from dataclasses import dataclass, asdict, field
from enum import Enum
from typing import Any, Dict
from PySide6.QtCore import QSettings
import logging

from camprompt.core.prompt_mapper import DEFAULT_SUBJECT

logger = logging.getLogger(__name__)

ORG_DOMAIN = "camprompt.org"
APP_NAME = "CamPrompt"

SECTIONS = ("general", "camera", "prompt", "view")


class RunMode(str, Enum):
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    VERBOSE = "verbose"

    def __str__(self):
        return self.value
    def __repr__(self):
        return self.value


# ----------------------
# Default settings
# ----------------------
DEFAULTS: Dict[str, Any] = {
    "general": {
        "run_mode": RunMode.PRODUCTION.value,
        "logging_level": "INFO",  # "DEBUG", "INFO", "WARNING", "ERROR"
    },
    "camera": {
        "min_distance": 2.0,
        "max_distance": 20.0,
    },
    "prompt": {
        "subject": DEFAULT_SUBJECT,
    },
    "view": {
        "idle_animation": True,
    },
}

# ---------------------
# Data model
# ---------------------
@dataclass
class GeneralConfig:
    run_mode: RunMode = RunMode.PRODUCTION
    logging_level: str = "INFO"

@dataclass
class CameraConfig:
    min_distance: float = 2.0
    max_distance: float = 20.0

@dataclass
class PromptConfig:
    subject: str = DEFAULT_SUBJECT

@dataclass
class ViewConfig:
    idle_animation: bool = True

@dataclass
class AppSettingsData:
    general: GeneralConfig = field(default_factory=GeneralConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)
    prompt: PromptConfig = field(default_factory=PromptConfig)
    view: ViewConfig = field(default_factory=ViewConfig)

# ----------------------
# Utility
# ----------------------
def _truthy(s: str) -> bool:
    return s.strip().lower() in ("1", "true", "yes", "on")


def _validate_run_mode(v: Any) -> RunMode:
    if isinstance(v, RunMode):
        return v
    mode = str(v).strip().lower()
    try:
        return RunMode(mode)
    except ValueError:
        return RunMode(DEFAULTS["general"]["run_mode"])

def _validate_logging_level(v: str) -> str:
    v = str(v).upper()
    return v if v in ("DEBUG", "INFO", "WARNING", "ERROR") else "INFO"

def _validate_distance_range(lo: Any, hi: Any) -> tuple[float, float]:
    """Both limits must be positive with min < max, otherwise both fall back."""
    default = (DEFAULTS["camera"]["min_distance"], DEFAULTS["camera"]["max_distance"])
    try:
        lo_f, hi_f = float(lo), float(hi)
    except (TypeError, ValueError):
        return default
    if not (0 < lo_f < hi_f):
        return default
    return lo_f, hi_f

def _validate_subject(v: Any) -> str:
    s = str(v).strip() if v is not None else ""
    return s or DEFAULTS["prompt"]["subject"]

def _validate_bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    return _truthy(str(v))


# ---------------------
# AppSettingManager
# ---------------------
class AppSettingsManager:
    """
    Manages general application settings.

    Values start from DEFAULTS in code and are overridden by QSettings.
    Everything is validated on load; out-of-range values fall back.
    set_* writes to QSettings immediately.
    Camera state itself is never stored here.
    """
    def __init__(self, org_domain: str = ORG_DOMAIN, app_name: str = APP_NAME):
        self._settings = QSettings(org_domain, app_name)
        self._data = self._load_effective()

    # Reading
    @property
    def data(self) -> AppSettingsData:
        return self._data

    @property
    def run_mode(self) -> RunMode:
        return self._data.general.run_mode

    @property
    def dev_mode(self) -> bool:
        """Boolean view of the run mode."""
        return self.run_mode is RunMode.DEVELOPMENT

    @property
    def logging_level(self) -> str:
        return self._data.general.logging_level

    @property
    def min_distance(self) -> float:
        return self._data.camera.min_distance

    @property
    def max_distance(self) -> float:
        return self._data.camera.max_distance

    @property
    def subject(self) -> str:
        return self._data.prompt.subject

    @property
    def idle_animation(self) -> bool:
        return self._data.view.idle_animation

    # Writing
    def set_run_mode(self, v: str | RunMode) -> None:
        mode = _validate_run_mode(v)
        self._settings.setValue("general/run_mode", mode.value)
        self._data.general.run_mode = mode

    def set_logging_level(self, v: str) -> None:
        level = _validate_logging_level(v)
        self._settings.setValue("general/logging_level", level)
        self._data.general.logging_level = level

    def set_distance_range(self, min_distance: float, max_distance: float) -> None:
        lo, hi = _validate_distance_range(min_distance, max_distance)
        self._settings.setValue("camera/min_distance", lo)
        self._settings.setValue("camera/max_distance", hi)
        self._data.camera.min_distance = lo
        self._data.camera.max_distance = hi

    def set_subject(self, v: str) -> None:
        subject = _validate_subject(v)
        self._settings.setValue("prompt/subject", subject)
        self._data.prompt.subject = subject

    def set_idle_animation(self, v: bool) -> None:
        enabled = _validate_bool(v)
        self._settings.setValue("view/idle_animation", enabled)
        self._data.view.idle_animation = enabled

    # Reset
    def reset_all_to_default(self) -> None:
        """Remove all user settings (shortcuts are managed separately)."""
        for section in SECTIONS:
            self._settings.remove(section)
        self._data = self._load_effective()

    def reset_section(self, section: str) -> None:
        """Reset a single section to its defaults."""
        if section not in SECTIONS:
            raise ValueError(f"Invalid section: {section}")
        self._settings.remove(section)
        self._data = self._load_effective()

    def to_dict(self) -> dict[str, Any]:
        data = {
            "general": asdict(self._data.general),
            "camera": asdict(self._data.camera),
            "prompt": asdict(self._data.prompt),
            "view": asdict(self._data.view),
        }
        data["general"]["run_mode"] = self._data.general.run_mode.value
        return data

    # ---------- Internals ---------------
    def _load_effective(self) -> AppSettingsData:
        """Apply QSettings overrides on top of DEFAULTS, validate and build the model."""
        merged = self._apply_qsettings_overrides(DEFAULTS)
        return self._make_model_from(merged)

    def _apply_qsettings_overrides(self, base: dict[str, Any]) -> dict[str, Any]:
        """
        Read the dict based settings and apply QSettings overrides.
        :param base:
        :return: apply QSettings overrides
        """
        merged: dict[str, Any] = {}
        for section in SECTIONS:
            values = dict(base.get(section, {}))
            for key in values:
                v = self._settings.value(f"{section}/{key}", None)
                if v is not None:
                    values[key] = v
            merged[section] = values
        return merged

    def _make_model_from(self, merged: dict[str, Any]) -> AppSettingsData:
        """
        making model from merged dict and returning merged AppSettingsData
        :param merged:
        :return: merged AppSettingsData
        """
        g = merged.get("general", {})
        c = merged.get("camera", {})
        p = merged.get("prompt", {})
        vw = merged.get("view", {})
        lo, hi = _validate_distance_range(
            c.get("min_distance", DEFAULTS["camera"]["min_distance"]),
            c.get("max_distance", DEFAULTS["camera"]["max_distance"]),
        )
        return AppSettingsData(
            general=GeneralConfig(
                run_mode=_validate_run_mode(g.get("run_mode", DEFAULTS["general"]["run_mode"])),
                logging_level=_validate_logging_level(g.get("logging_level", DEFAULTS["general"]["logging_level"])),
            ),
            camera=CameraConfig(min_distance=lo, max_distance=hi),
            prompt=PromptConfig(subject=_validate_subject(p.get("subject", DEFAULTS["prompt"]["subject"]))),
            view=ViewConfig(
                idle_animation=_validate_bool(vw.get("idle_animation", DEFAULTS["view"]["idle_animation"]))
            ),
        )
