from __future__ import annotations

import sys
from pathlib import Path


def app_base_dir() -> Path:
    """
    Return base directory for bundled resources

    - In PyInstaller onefile/onedir: use sys._MEIPASS (temporary extraction dir).
    - Otherwise: the camprompt package directory (where `settings/` lives).
    """
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        return Path(sys._MEIPASS) / "camprompt"  # type: ignore[attr-defined]
    # camprompt/utils/resource_paths.py -> parents[1] is the package directory.
    return Path(__file__).resolve().parents[1]


def settings_dir() -> Path:
    """Return the directory for settings files (e.g., shortcuts.json)."""
    return app_base_dir() / "settings"
