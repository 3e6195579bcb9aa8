import pytest

from camprompt.app.app_settings_manager import AppSettingsManager, DEFAULTS, RunMode


def test_defaults():
    mgr = AppSettingsManager()
    assert mgr.run_mode is RunMode.PRODUCTION
    assert mgr.dev_mode is False
    assert mgr.logging_level == "INFO"
    assert (mgr.min_distance, mgr.max_distance) == (2.0, 20.0)
    assert mgr.subject == "character"
    assert mgr.idle_animation is True
    assert mgr.to_dict() == DEFAULTS


def test_setters_persist(tmp_settings):
    mgr = AppSettingsManager()
    mgr.set_run_mode("development")
    mgr.set_logging_level("debug")
    mgr.set_distance_range(3, 15)
    mgr.set_subject("  astronaut ")
    mgr.set_idle_animation(False)

    reloaded = AppSettingsManager()
    assert reloaded.run_mode is RunMode.DEVELOPMENT
    assert reloaded.dev_mode is True
    assert reloaded.logging_level == "DEBUG"
    assert (reloaded.min_distance, reloaded.max_distance) == (3.0, 15.0)
    assert reloaded.subject == "astronaut"
    assert reloaded.idle_animation is False


@pytest.mark.parametrize("key, raw, attr, expected", [
    ("general/run_mode", "nonsense", "run_mode", RunMode.PRODUCTION),
    ("general/run_mode", " Verbose ", "run_mode", RunMode.VERBOSE),
    ("general/logging_level", "TRACE", "logging_level", "INFO"),
    ("prompt/subject", "   ", "subject", "character"),
    ("view/idle_animation", "false", "idle_animation", False),
    ("view/idle_animation", "yes", "idle_animation", True),
])
def test_invalid_or_string_values_are_validated(tmp_settings, key, raw, attr, expected):
    tmp_settings.setValue(key, raw)
    assert getattr(AppSettingsManager(), attr) == expected


@pytest.mark.parametrize("lo, hi", [
    ("5", "1"),
    ("0", "10"),
    ("near", "far"),
    ("-2", "20"),
])
def test_invalid_distance_range_falls_back(tmp_settings, lo, hi):
    tmp_settings.setValue("camera/min_distance", lo)
    tmp_settings.setValue("camera/max_distance", hi)
    mgr = AppSettingsManager()
    assert (mgr.min_distance, mgr.max_distance) == (2.0, 20.0)


def test_reset_section():
    mgr = AppSettingsManager()
    mgr.set_subject("robot")
    mgr.set_logging_level("ERROR")
    mgr.reset_section("prompt")
    assert mgr.subject == "character"
    assert mgr.logging_level == "ERROR"


def test_reset_section_invalid():
    with pytest.raises(ValueError):
        AppSettingsManager().reset_section("shortcuts")


def test_reset_all_to_default():
    mgr = AppSettingsManager()
    mgr.set_run_mode("verbose")
    mgr.set_distance_range(4, 8)
    mgr.reset_all_to_default()
    assert mgr.to_dict() == DEFAULTS
