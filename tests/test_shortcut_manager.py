import json
import logging
import pytest

from pathlib import Path

from PySide6 import QtWidgets
from PySide6.QtCore import QSettings

from camprompt.app import shortcut_manager as sm
from camprompt.app.app_settings_manager import APP_NAME, ORG_DOMAIN
from camprompt.utils.json_loader import SettingsError


@pytest.fixture(autouse=True)
def stub_error_notifier(monkeypatch, stub_notifier):
    """Record notifications instead of showing dialogs."""
    monkeypatch.setattr(sm, "ErrorNotifier", stub_notifier)
    yield stub_notifier


@pytest.fixture
def config_dir(tmp_path: Path):
    """Temporary shortcuts.json"""
    cfg = tmp_path / "settings"
    cfg.mkdir(parents=True, exist_ok=True)
    defaults = {
        "front_view": "1",
        "copy_prompt": "Ctrl+Shift+C",
    }
    (cfg / "shortcuts.json").write_text(json.dumps(defaults), encoding="utf-8")
    return cfg


@pytest.fixture
def main_window(qapp):
    win = QtWidgets.QMainWindow()
    win.setWindowTitle("Test")
    yield win
    win.close()


def test_registers_actions_and_callbacks(config_dir, main_window):
    mgr = sm.ShortcutManager(main_window, config_dir)
    assert set(mgr._actions) == {"front_view", "copy_prompt"}
    assert mgr._actions["front_view"].shortcut().toString() == "1"
    assert mgr._actions["front_view"].text() == "Front View"

    called = {"front": 0}

    def cb():
        called["front"] += 1

    mgr.add_callback("front_view", cb)
    mgr._actions["front_view"].trigger()
    assert called["front"] == 1


def test_add_callback_unknown_command(config_dir, main_window):
    mgr = sm.ShortcutManager(main_window, config_dir)
    with pytest.raises(KeyError):
        mgr.add_callback("back_view", lambda: None)


def test_unregistered_shortcut_notifier(config_dir, main_window, stub_notifier):
    mgr = sm.ShortcutManager(main_window, config_dir)
    mgr._on_action_triggered("nonexistent")
    assert len(stub_notifier.calls) == 1
    note = stub_notifier.calls[0]
    assert note["title"].startswith("Unregistered")
    assert "not registered" in note["msg"]


def test_development_mode_raises_after_notify(config_dir, main_window, stub_notifier):
    settings_manager = sm.AppSettingsManager()
    settings_manager.set_run_mode("development")
    mgr = sm.ShortcutManager(main_window, config_dir, settings_manager=settings_manager)

    def bad():
        raise RuntimeError("boom")

    mgr.add_callback("front_view", bad)
    with pytest.raises(RuntimeError):
        mgr._on_action_triggered("front_view")
    # Notified before re-raising
    assert stub_notifier.calls
    assert "Error" in stub_notifier.calls[0]["title"]


def test_production_mode_swallows_and_continues(config_dir, main_window, stub_notifier):
    settings_manager = sm.AppSettingsManager()
    settings_manager.set_run_mode("production")
    mgr = sm.ShortcutManager(main_window, config_dir, settings_manager=settings_manager)

    def bad():
        raise ValueError("bad")

    mgr.add_callback("front_view", bad)
    mgr._on_action_triggered("front_view")
    assert stub_notifier.calls


def test_update_shortcut_conflict(config_dir, main_window):
    mgr = sm.ShortcutManager(main_window, config_dir)
    existing = mgr._actions["front_view"].shortcut().toString()
    assert mgr.update_shortcut("copy_prompt", existing) is False
    assert mgr._actions["copy_prompt"].shortcut().toString() == "Ctrl+Shift+C"


def test_update_shortcut_is_persisted(config_dir, main_window, tmp_settings):
    mgr = sm.ShortcutManager(main_window, config_dir)
    assert mgr.update_shortcut("front_view", "F") is True
    assert mgr._actions["front_view"].shortcut().toString() == "F"
    assert tmp_settings.value("shortcuts/front_view") == "F"
    assert mgr.update_shortcut("unknown", "G") is False


def test_user_overrides_are_loaded(config_dir, main_window):
    s = QSettings(ORG_DOMAIN, APP_NAME)
    s.setValue("shortcuts/front_view", "a")
    mgr = sm.ShortcutManager(main_window, config_dir)
    # Registered in upper case.
    assert mgr._actions["front_view"].shortcut().toString() == "A"


def test_reset_to_default(config_dir, main_window, tmp_settings):
    mgr = sm.ShortcutManager(main_window, config_dir)
    mgr.update_shortcut("front_view", "F")
    mgr.reset_to_default()
    assert mgr._actions["front_view"].shortcut().toString() == "1"
    assert tmp_settings.value("shortcuts/front_view") is None


def test_missing_file_production_has_no_actions(tmp_path, main_window):
    mgr = sm.ShortcutManager(main_window, tmp_path / "missing")
    assert list(mgr.actions()) == []


def test_missing_file_development_raises(tmp_path, main_window):
    settings_manager = sm.AppSettingsManager()
    settings_manager.set_run_mode("development")
    with pytest.raises(SettingsError):
        sm.ShortcutManager(main_window, tmp_path / "missing", settings_manager=settings_manager)


def test_bundled_shortcuts_cover_all_commands(main_window):
    mgr = sm.ShortcutManager(main_window)
    expected = {
        "open_image", "copy_prompt", "reset_camera",
        "front_view", "side_view", "top_view", "iso_view",
        "high_angle", "eye_level", "low_angle",
        "close_up", "medium_shot", "full_shot",
    }
    assert set(mgr._actions) == expected


def test_info_logging_contains_command_and_callback(config_dir, main_window, caplog):
    caplog.set_level(logging.INFO, logger=sm.__name__)
    mgr = sm.ShortcutManager(main_window, config_dir)

    def cb():
        pass

    mgr.add_callback("front_view", cb)
    mgr._on_action_triggered("front_view")
    text = caplog.text
    assert "Shortcut triggered: front_view" in text
    assert "cb" in text
