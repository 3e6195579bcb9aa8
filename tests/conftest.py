import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from pathlib import Path

import pytest
from PySide6.QtCore import QSettings

from camprompt.app.app_settings_manager import APP_NAME, ORG_DOMAIN


@pytest.fixture(autouse=True)
def tmp_settings(tmp_path: Path):
    """Switch QSettings to INI files in a temporary folder so tests never touch user settings."""
    QSettings.setDefaultFormat(QSettings.IniFormat)
    QSettings.setPath(QSettings.IniFormat, QSettings.UserScope, str(tmp_path / "qsettings"))
    s = QSettings(ORG_DOMAIN, APP_NAME)
    s.clear()
    yield s
    s.clear()


class StubNotifier:
    calls = []

    @classmethod
    def instance(cls):
        return cls

    @classmethod
    def notify(cls, **kwargs):
        cls.calls.append(kwargs)


@pytest.fixture
def stub_notifier():
    StubNotifier.calls.clear()
    yield StubNotifier
    StubNotifier.calls.clear()
