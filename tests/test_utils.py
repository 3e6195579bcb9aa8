import json
import logging

import numpy as np
import pytest

from camprompt.core import geometry_utils
from camprompt.utils.json_loader import SettingsError, read_json_dict
from camprompt.utils.log_util import level_from_name, log_io
from camprompt.utils.resource_paths import settings_dir


# =====================================================
# json_loader
# =====================================================

def test_read_json_dict(tmp_path):
    path = tmp_path / "a.json"
    path.write_text(json.dumps({"k": "v"}), encoding="utf-8")
    assert read_json_dict(path, strict=True) == {"k": "v"}


def test_read_json_dict_missing(tmp_path):
    warnings = []
    assert read_json_dict(tmp_path / "none.json", strict=False, warnings=warnings) is None
    assert "missing" in warnings[0]
    with pytest.raises(SettingsError):
        read_json_dict(tmp_path / "none.json", strict=True)


def test_read_json_dict_not_an_object(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert read_json_dict(path, strict=False) is None
    with pytest.raises(SettingsError):
        read_json_dict(path, strict=True)


def test_read_json_dict_broken_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{oops", encoding="utf-8")
    warnings = []
    assert read_json_dict(path, strict=False, warnings=warnings) is None
    assert "Failed to parse" in warnings[0]
    assert path.exists()
    with pytest.raises(SettingsError):
        read_json_dict(path, strict=True)


def test_bundled_shortcuts_file_exists():
    assert (settings_dir() / "shortcuts.json").is_file()


# =====================================================
# log_util
# =====================================================

@pytest.mark.parametrize("value, expected", [
    ("debug", logging.DEBUG),
    (" WARNING ", logging.WARNING),
    ("40", 40),
    (logging.ERROR, logging.ERROR),
    ("verbose", logging.INFO),
    (None, logging.INFO),
    (True, logging.INFO),
])
def test_level_from_name(value, expected):
    assert level_from_name(value) == expected


def test_log_io_masks_and_logs(caplog):
    caplog.set_level(logging.DEBUG, logger="camprompt")

    @log_io(mask=("token",))
    def call(path, token):
        return path.upper()

    assert call("img.png", token="secret") == "IMG.PNG"
    assert "path='img.png'" in caplog.text
    assert "secret" not in caplog.text
    assert "'IMG.PNG'" in caplog.text


def test_log_io_reraises(caplog):
    @log_io()
    def fail():
        raise ValueError("bad")

    with pytest.raises(ValueError):
        fail()
    assert "Exception in" in caplog.text


# =====================================================
# geometry_utils
# =====================================================

def test_spherical_round_trip_convention():
    offset = geometry_utils.spherical_to_offset(np.pi / 2, np.pi / 2, 4.0)
    assert offset == pytest.approx([4.0, 0.0, 0.0], abs=1e-12)
    azimuth, polar, radius = geometry_utils.offset_to_spherical(offset)
    assert (azimuth, polar, radius) == pytest.approx((np.pi / 2, np.pi / 2, 4.0))


def test_offset_to_spherical_zero():
    assert geometry_utils.offset_to_spherical((0, 0, 0)) == (0.0, 0.0, 0.0)


def test_normalize_and_distance():
    assert geometry_utils.normalize_vector((0, 0, 0)) is None
    assert geometry_utils.normalize_vector((0, 3, 4)) == pytest.approx([0, 0.6, 0.8])
    assert geometry_utils.calculate_distance((1, 1, 1), (1, 4, 5)) == pytest.approx(5.0)
