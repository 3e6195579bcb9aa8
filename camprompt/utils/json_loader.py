from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional


class SettingsError(RuntimeError):
    """Raised when strict settings loading fails (dev/CI)."""


def _fail(
        msg: str,
        *,
        strict: bool,
        warnings: list[str],
        logger: logging.Logger | None = None,
        exc: Exception | None = None,
        level: str = "warning",
) -> Optional[dict[str, Any]]:
    """Record a warning, log it at ``level`` and raise SettingsError when strict.
    Returns None in non-strict mode so the caller falls back to defaults.
    """
    if strict:
        raise SettingsError(msg) from exc
    warnings.append(msg)
    if logger is not None:
        if exc is not None and level == "exception":
            logger.exception(msg)
        else:
            getattr(logger, level, logger.warning)(msg)
    return None


def _parse_json(text: str, path: Path) -> dict[str, Any]:
    """Parse JSON text; the top-level value must be an object."""
    data = json.loads(text)
    if not isinstance(data, dict):
        raise SettingsError(f"JSON must be an object at top-level: {path}")
    return data


def read_json_dict(
        path: Path,
        *,
        strict: bool,
        warnings: list[str] | None = None,
        logger: logging.Logger | None = None,
) -> Optional[dict[str, Any]]:
    """
    Read JSON file and return dict.

    Behavior:
    - strict=True: missing/broken/non-dict -> raise SettingsError
    - strict=False: return None and record warnings (and log if logger given)
    """
    warnings = [] if warnings is None else warnings
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        return _fail(f"JSON file missing: {path}",
                     strict=strict, warnings=warnings, logger=logger, exc=e)
    except OSError as e:
        return _fail(f"Failed to read JSON from {path}: ({e})",
                     strict=strict, warnings=warnings, logger=logger, exc=e,
                     level="exception")

    try:
        return _parse_json(text, path)
    except json.JSONDecodeError as e:
        return _fail(f"Failed to parse JSON from {path}: ({e})",
                     strict=strict, warnings=warnings, logger=logger, exc=e)
    except SettingsError as e:
        return _fail(str(e), strict=strict, warnings=warnings, logger=logger, exc=e, level="error")
