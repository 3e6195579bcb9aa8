"""VTK orbit viewer: renders the subject and keeps the camera in sync with the prompt state."""
from __future__ import annotations

import logging
import time
from pathlib import Path

import vtk
from PySide6 import QtWidgets, QtCore

from camprompt.app.app_settings_manager import AppSettingsManager
from camprompt.core import geometry_utils
from camprompt.core.preset_adapter import PresetAdapter
from camprompt.ui.error_notifier import ErrorNotifier
from camprompt.viewers.camera.camera_state import CameraSnapshot, DEFAULT_CAMERA_STATE
from camprompt.viewers.camera.orbit_controller import OrbitSyncController
from camprompt.viewers.camera.vtk_orbit_surface import VtkOrbitSurface
from camprompt.viewers.interactor_styles.orbit_interactor_style import OrbitInteractorStyle
from camprompt.viewers.subject_scene import SubjectScene

logger = logging.getLogger(__name__)

CAMERA_VIEW_ANGLE = 40.0
IDLE_INTERVAL_MS = 33


class OrbitViewer(QtWidgets.QWidget):
    """
    Widget hosting the orbit scene.

    Provides:
    - VTK rendering of the subject, rings and floor grid
    - An OrbitSyncController over the active camera
    - A PresetAdapter used by the sidebar and shortcuts
    - Idle animation of the placeholder figure

    Every published snapshot re-renders the scene and is re-emitted as
    ``snapshotChanged``.
    """

    # Signals
    snapshotChanged = QtCore.Signal(object)
    subjectChanged = QtCore.Signal(object)  # Path | None

    def __init__(
            self,
            settings_manager: AppSettingsManager | None = None,
            parent: QtWidgets.QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setting = settings_manager or AppSettingsManager()
        self._setup_ui()
        self._setup_vtk_rendering()

        self.scene = SubjectScene(self.renderer)

        camera = self.renderer.GetActiveCamera()
        camera.SetViewAngle(CAMERA_VIEW_ANGLE)
        camera.SetPosition(*geometry_utils.spherical_to_offset(
            DEFAULT_CAMERA_STATE.azimuth, DEFAULT_CAMERA_STATE.polar, DEFAULT_CAMERA_STATE.distance))
        self.surface = VtkOrbitSurface(
            camera,
            min_distance=self.setting.min_distance,
            max_distance=self.setting.max_distance,
        )
        self.orbit_controller = OrbitSyncController(self.surface)
        self.preset_adapter = PresetAdapter(self.orbit_controller)
        self.orbit_controller.subscribe(self._on_snapshot)

        self.setup_interactor_style()
        self.interactor.Initialize()

        self._clock_start = time.monotonic()
        self._idle_timer = QtCore.QTimer(self)
        self._idle_timer.setInterval(IDLE_INTERVAL_MS)
        self._idle_timer.timeout.connect(self._on_idle_tick)
        self.set_idle_animation(self.setting.idle_animation)

    def _setup_ui(self) -> None:
        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        from vtkmodules.qt.QVTKRenderWindowInteractor import QVTKRenderWindowInteractor
        self.vtk_widget = QVTKRenderWindowInteractor(self)
        layout.addWidget(self.vtk_widget)

        self.setLayout(layout)

        logger.debug("Orbit viewer UI created.")

    def _setup_vtk_rendering(self) -> None:
        render_window = self.vtk_widget.GetRenderWindow()
        self.renderer = vtk.vtkRenderer()
        render_window.AddRenderer(self.renderer)
        self.interactor = render_window.GetInteractor()

        logger.debug("VTK rendering components initialized.")

    def setup_interactor_style(self) -> None:
        style = OrbitInteractorStyle(self)
        self.interactor.SetInteractorStyle(style)

    # =====================================================
    # Camera
    # =====================================================

    @property
    def snapshot(self) -> CameraSnapshot:
        return self.orbit_controller.snapshot

    def _on_snapshot(self, snapshot: CameraSnapshot) -> None:
        self.renderer.ResetCameraClippingRange()
        self.update_view()
        self.snapshotChanged.emit(snapshot)

    def apply_view_preset(self, name: str) -> None:
        try:
            self.preset_adapter.apply_view_preset(name)
        except KeyError as e:
            self._notify_unknown_preset(e)

    def press_preset(self, key: str) -> None:
        try:
            self.preset_adapter.press(key)
        except KeyError as e:
            self._notify_unknown_preset(e)

    def _notify_unknown_preset(self, error: KeyError) -> None:
        ErrorNotifier.instance().notify(
            title="Camera Preset",
            msg=str(error.args[0]) if error.args else "Unknown preset",
            severity="warning",
        )

    def reset_camera(self) -> None:
        self.orbit_controller.reset()

    # =====================================================
    # Subject
    # =====================================================

    def load_image(self, path: str | Path) -> None:
        """
        Show an image as the subject and return to the front view.
        :raises SubjectLoadError: when the file cannot be read
        """
        self.scene.load_image(path)
        self.reset_camera()
        self.update_view()
        self.subjectChanged.emit(self.scene.image_path)

    def clear_image(self) -> None:
        self.scene.clear_image()
        self.reset_camera()
        self.update_view()
        self.subjectChanged.emit(None)

    # =====================================================
    # Idle animation
    # =====================================================

    def set_idle_animation(self, enabled: bool) -> None:
        if enabled:
            self._idle_timer.start()
        else:
            self._idle_timer.stop()

    def _on_idle_tick(self) -> None:
        if self.scene.has_image or not self.isVisible():
            return
        self.scene.animate(time.monotonic() - self._clock_start)
        self.update_view()

    # =====================================================
    # Rendering
    # =====================================================

    def update_view(self) -> None:
        """Trigger a render."""
        if self.isVisible():
            self.vtk_widget.GetRenderWindow().Render()

    # =====================================================
    # Lifecycle
    # =====================================================

    def closeEvent(self, event) -> None:
        self._idle_timer.stop()
        self.orbit_controller.unsubscribe()
        self.vtk_widget.Finalize()
        super().closeEvent(event)
