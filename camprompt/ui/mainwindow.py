import copy
import logging
import sys

from PySide6.QtWidgets import (QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel,
                               QFileDialog)

from camprompt.app.app_settings_manager import AppSettingsManager
from camprompt.app.shortcut_manager import ShortcutManager
from camprompt.status import STATUS_FIELDS, StatusField
from camprompt.ui.error_notifier import ErrorNotifier
from camprompt.ui.prompt_bar import PromptBar
from camprompt.ui.sidebar import Sidebar
from camprompt.utils.log_util import log_io
from camprompt.viewers.camera.camera_state import CameraSnapshot
from camprompt.viewers.orbit_viewer import OrbitViewer
from camprompt.viewers.subject_scene import SubjectLoadError

logger = logging.getLogger(__name__)

IMAGE_FILTER = "Images (*.png *.jpg *.jpeg *.bmp *.tif *.tiff);;All files (*)"


class MainWindow(QMainWindow):
    """Main application window: sidebar, orbit viewer and prompt bar."""

    def __init__(self, settings_mgr: AppSettingsManager | None = None):
        """
        Initialize the main window.

        :param settings_mgr: Application settings manager.
        """
        super().__init__()

        self.setting = settings_mgr or AppSettingsManager()

        # Setup shortcuts
        self.shortcut_mgr = ShortcutManager(
            parent=self,
            settings_manager=self.setting,
        )

        # Status fields
        self.status_fields: dict[str, StatusField] = {
            k: copy.deepcopy(v) for k, v in STATUS_FIELDS.items()
        }
        self._status_label: dict[str, QLabel | None] = {}

        # Setup UI
        self.setWindowTitle("CamPrompt - Camera Angle Studio")
        self._setup_ui()
        self._setup_menus()
        self._setup_status_bar()

        self._register_shortcuts()

        self._on_snapshot_changed(self.orbit_viewer.snapshot)
        self.show()

    def _setup_ui(self) -> None:
        """Setup the main UI layout"""
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        main_layout = QHBoxLayout(central_widget)

        self.orbit_viewer = OrbitViewer(
            settings_manager=self.setting,
            parent=central_widget,
        )
        self.sidebar = Sidebar(self.orbit_viewer.preset_adapter, parent=central_widget)
        self.prompt_bar = PromptBar(subject=self.setting.subject, parent=central_widget)

        right = QVBoxLayout()
        right.addWidget(self.orbit_viewer, 1)
        right.addWidget(self.prompt_bar)

        main_layout.addWidget(self.sidebar)
        main_layout.addLayout(right, 1)
        self.setGeometry(100, 100, 1280, 800)

        # Connect signals
        self.orbit_viewer.snapshotChanged.connect(self._on_snapshot_changed)
        self.orbit_viewer.subjectChanged.connect(self._on_subject_changed)
        self.sidebar.imageRequested.connect(self.open_image)
        self.sidebar.clearImageRequested.connect(self.clear_image)
        self.prompt_bar.copied.connect(self._on_prompt_copied)

    def _setup_menus(self) -> None:
        """Create the menus for the main window."""
        menubar = self.menuBar()

        # File menu
        file_menu = menubar.addMenu("&File")
        file_menu.addAction("&Open Image...", self.open_image)
        file_menu.addAction("&Clear Image", self.clear_image)
        file_menu.addSeparator()
        file_menu.addAction("&Quit", self.close)

        # View menu
        view_menu = menubar.addMenu("&View")
        view_menu.addAction("Front view", lambda: self.orbit_viewer.apply_view_preset("front"))
        view_menu.addAction("Side view", lambda: self.orbit_viewer.apply_view_preset("side"))
        view_menu.addAction("Top view", lambda: self.orbit_viewer.apply_view_preset("top"))
        view_menu.addAction("Isometric view", lambda: self.orbit_viewer.apply_view_preset("iso"))
        view_menu.addSeparator()
        view_menu.addAction("&Reset Camera", self.orbit_viewer.reset_camera)

        # Edit menu
        edit_menu = menubar.addMenu("&Edit")
        edit_menu.addAction("&Copy Prompt", self.prompt_bar.copy_to_clipboard)

    def _setup_status_bar(self) -> None:
        """Setup the status bar."""
        status_bar = self.statusBar()

        for key, field in self.status_fields.items():
            if not field.visible:
                self._status_label[key] = None
                continue
            label = QLabel("", self)
            status_bar.addPermanentWidget(label)
            self._status_label[key] = label

    def _register_shortcuts(self) -> None:
        """Register keyboard shortcuts."""
        viewer = self.orbit_viewer
        for name in ("front", "side", "top", "iso"):
            self.shortcut_mgr.add_callback(
                f"{name}_view", lambda n=name: viewer.apply_view_preset(n))
        for key in ("high_angle", "eye_level", "low_angle",
                    "close_up", "medium_shot", "full_shot"):
            self.shortcut_mgr.add_callback(key, lambda k=key: viewer.press_preset(k))
        self.shortcut_mgr.add_callback("reset_camera", viewer.reset_camera)
        self.shortcut_mgr.add_callback("copy_prompt", self.prompt_bar.copy_to_clipboard)
        self.shortcut_mgr.add_callback("open_image", self.open_image)

    # =====================================================
    # Menu Actions
    # =====================================================

    @log_io(level=logging.INFO)
    def open_image(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, "Open Image", "", IMAGE_FILTER)
        if not path:
            return
        self.load_image(path)

    def load_image(self, path: str) -> bool:
        """Load ``path`` as the subject, notifying the user on failure."""
        try:
            self.orbit_viewer.load_image(path)
        except SubjectLoadError as e:
            ErrorNotifier.instance().notify(
                title="Open Image",
                msg=str(e),
                exc_info=sys.exc_info(),
                severity="error",
            )
            return False
        return True

    def clear_image(self) -> None:
        self.orbit_viewer.clear_image()

    # =====================================================
    # Signal Handlers
    # =====================================================

    def _on_snapshot_changed(self, snapshot: CameraSnapshot) -> None:
        """
        Handle a new camera snapshot.

        :param snapshot: Published camera state and prompt
        """
        self.sidebar.refresh(snapshot)
        self.prompt_bar.set_snapshot(snapshot)
        self._update_status("azimuth", snapshot.state.azimuth)
        self._update_status("polar", snapshot.state.polar)
        self._update_status("distance", snapshot.state.distance)

    def _on_subject_changed(self, path) -> None:
        self.sidebar.set_has_image(path is not None)
        if path is not None:
            self.statusBar().showMessage(f"Loaded {path.name}", 5000)

    def _on_prompt_copied(self, text: str) -> None:
        self.statusBar().showMessage("Prompt copied to clipboard", 2000)

    def _update_status(self, key: str, value) -> None:
        """Update status bar label."""
        label = self._status_label.get(key)
        if label is None:
            return

        field = self.status_fields.get(key)
        if field is None:
            return

        field.value = value
        try:
            text = field.formatter(value)
            label.setText(text)
        except Exception as e:
            logger.warning(f"Error formatting status field {key}: {e}")
            label.setText(str(value))

    def closeEvent(self, event) -> None:
        self.orbit_viewer.close()
        super().closeEvent(event)
