import sys
import logging

from pathlib import Path
from typing import Callable, Optional
from PySide6.QtWidgets import QMainWindow
from PySide6.QtGui import QKeySequence, QAction
from PySide6.QtCore import QSettings

from camprompt.ui.error_notifier import ErrorNotifier
from camprompt.app.app_settings_manager import APP_NAME, ORG_DOMAIN, AppSettingsManager
from camprompt.utils.json_loader import read_json_dict
from camprompt.utils.resource_paths import settings_dir


logger = logging.getLogger(__name__)


class ShortcutManager:
    """
    Manage keyboard shortcuts for camera presets and prompt actions.
    -------------------------
    Defaults come from `shortcuts.json` in the settings directory; user
    overrides are kept in QSettings under `shortcuts/*`.
    add_callback: Add a callback function for a shortcut.
    update_shortcut: Update the shortcut for a command.
    reset_to_default: Reset all shortcuts to default.
    actions: Return all actions.
    --------------------------
    - Call add_callback to bind a command name from the settings file to a callable.
    - In development run mode a missing or broken `shortcuts.json` raises,
      and errors raised by callbacks are re-raised after the user is notified.
    """
    def __init__(self, parent: QMainWindow, config_path: Path | None = None,
                 settings_manager: Optional[AppSettingsManager] = None):
        self.parent = parent
        self.config_path = config_path or settings_dir()
        self._shortcut_settings = QSettings(ORG_DOMAIN, APP_NAME)
        self._settings_manager: AppSettingsManager = settings_manager or AppSettingsManager()

        self._actions: dict[str, QAction] = {}
        self._callbacks: dict[str, Callable] = {}
        self._file_defaults = self._load_default_shortcut()
        self._shortcuts = dict(self._file_defaults)
        self._load_user_overrides()
        self._register_actions()

        logger.debug(
            "ShortcutManager initialized run mode: %s",
            self._settings_manager.run_mode.value,
        )

    def _load_default_shortcut(self) -> dict[str, str]:
        """
        Load the default config from `shortcuts.json`.
        File format example:
        {
            "front_view": "1",
            "copy_prompt": "Ctrl+Shift+C"
        }
        :return: dict[str, str]
        """
        path = self.config_path / "shortcuts.json"
        logger.debug(f"Loading default shortcuts: {path}")
        data = read_json_dict(
            path,
            strict=self._settings_manager.dev_mode,
            logger=logger,
        )
        if data is None:
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _load_user_overrides(self):
        """
        Override default shortcuts with user-defined shortcuts.
        """
        for cmd, default_seq in self._file_defaults.items():
            user_seq = self._shortcut_settings.value(f"shortcuts/{cmd}", default_seq)
            if user_seq:
                self._shortcuts[cmd] = str(user_seq)

    def _register_actions(self):
        """
        Register an action for each command.
        """
        for cmd, seq in self._shortcuts.items():
            action = QAction(cmd.replace("_", " ").title(), self.parent)
            action.setShortcut(QKeySequence(seq))
            action.triggered.connect(lambda checked=False, c=cmd: self._on_action_triggered(c))
            self.parent.addAction(action)
            self._actions[cmd] = action

    def _on_action_triggered(self, cmd: str):
        """
        Trigger the callback function for the given command.
        :param cmd: Command name.(e.g., "front_view")
        """
        logger.debug("Action triggered: %s", cmd)
        cb = self._callbacks.get(cmd)
        if cb is None:
            ErrorNotifier.instance().notify(
                title="Unregistered Shortcut",
                msg=f"Command '{cmd}' is not registered.",
                severity="error",
                dedup_seconds=1.0,
            )
            return

        func_name = getattr(cb, "__qualname__", repr(cb))
        func_module = getattr(cb, "__module__", "")
        logger.info("Shortcut triggered: %s -> %s.%s",
                    cmd, func_module, func_name)
        try:
            cb()
        except Exception:
            ErrorNotifier.instance().notify(
                title="Shortcut Error",
                msg=f"Error in shortcut callback for '{cmd}'",
                exc_info=sys.exc_info(),
                severity="error",
                dedup_seconds=1.0,
            )
            if self._settings_manager.dev_mode:
                raise

    def add_callback(self, command_name: str, callback: Callable):
        """
        Add a callback function for a shortcut.
        :param command_name: Command name (e.g., "front_view").
        :param callback: Callback function.
        """
        if command_name not in self._actions:
            raise KeyError(f"Command '{command_name}' not found in registered actions.")
        self._callbacks[command_name] = callback

    def update_shortcut(self, cmd: str, new_seq: str) -> bool:
        action = self._actions.get(cmd)
        if not action:
            return False
        normalized = QKeySequence(new_seq).toString()
        if any(a.shortcut().toString() == normalized
               for c, a in self._actions.items() if c != cmd):
            logger.warning("Shortcut %s already in use, not assigned to %s", new_seq, cmd)
            return False
        action.setShortcut(QKeySequence(new_seq))
        self._shortcut_settings.setValue(f"shortcuts/{cmd}", new_seq)
        self._shortcuts[cmd] = new_seq
        return True

    def reset_to_default(self):
        self._shortcut_settings.remove("shortcuts")
        self._shortcuts = dict(self._file_defaults)
        for cmd, action in self._actions.items():
            action.setShortcut(QKeySequence(self._shortcuts[cmd]))

    def actions(self):
        return self._actions.values()
