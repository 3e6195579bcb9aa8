import logging
import sys

from PySide6 import QtWidgets

from camprompt.app.app_settings_manager import AppSettingsManager
from camprompt.app.logging_setup import (LogSystem, apply_logging_policy, install_crash_handlers,
                                         install_qt_message_handler)
from camprompt.ui.error_notifier import ErrorNotifier
from camprompt.ui.mainwindow import MainWindow

APP_NAME = "camprompt"

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv if argv is None else argv

    # Logging must be up before QApplication exists.
    logs = LogSystem(APP_NAME)
    install_crash_handlers(APP_NAME, logs.log_file.parent)
    install_qt_message_handler()

    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication(argv)

    logger.info("App start")
    settings_mgr = AppSettingsManager()
    apply_logging_policy(logs, settings_mgr)
    ErrorNotifier.configure(settings_mgr)

    main_window = MainWindow(settings_mgr)
    # Optional image path on the command line.
    if len(argv) > 1:
        main_window.load_image(argv[1])

    # Stop the log listener when Qt quits.
    app.aboutToQuit.connect(logs.stop)
    try:
        rc = app.exec()
        logger.info("App exit (rc=%s)", rc)
        return rc
    finally:
        logs.stop()


if __name__ == "__main__":
    sys.exit(main())
