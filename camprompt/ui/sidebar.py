"""Camera control panel: subject upload, preset buttons and sliders."""
from __future__ import annotations

import logging

from PySide6 import QtCore
from PySide6.QtWidgets import (QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel,
                               QPushButton, QSlider, QGroupBox)

from camprompt.core.preset_adapter import (
    AZIMUTH_SLIDER_RANGE,
    DISTANCE_BUTTONS,
    DISTANCE_SLIDER_RANGE,
    HORIZONTAL_BUTTONS,
    VERTICAL_BUTTONS,
    VERTICAL_SLIDER_RANGE,
    PresetAdapter,
    PresetButton,
    active_keys,
    readout_from_state,
    round_half_up,
)
from camprompt.viewers.camera.camera_state import CameraSnapshot

logger = logging.getLogger(__name__)

SIDEBAR_WIDTH = 320


class Sidebar(QWidget):
    """
    Left panel of the main window.

    Buttons and sliders only issue preset requests through the adapter;
    their displayed state always comes back from ``refresh``.
    """

    # Signals
    imageRequested = QtCore.Signal()
    clearImageRequested = QtCore.Signal()

    def __init__(self, adapter: PresetAdapter, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.adapter = adapter
        self.buttons: dict[str, QPushButton] = {}
        self.setFixedWidth(SIDEBAR_WIDTH)
        self._setup_ui()
        self.refresh(self.adapter.controller.snapshot)

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)

        title = QLabel("<b>Camera Angle Studio</b>", self)
        layout.addWidget(title)

        upload_row = QHBoxLayout()
        self.upload_button = QPushButton("Upload Image", self)
        self.upload_button.clicked.connect(self.imageRequested.emit)
        self.clear_button = QPushButton("Clear", self)
        self.clear_button.setEnabled(False)
        self.clear_button.clicked.connect(self.clearImageRequested.emit)
        upload_row.addWidget(self.upload_button, 1)
        upload_row.addWidget(self.clear_button)
        layout.addLayout(upload_row)

        self.azimuth_slider = self._make_slider(AZIMUTH_SLIDER_RANGE)
        self.azimuth_slider.valueChanged.connect(self._on_azimuth_slider)
        layout.addWidget(self._make_group(
            "Horizontal Orbit", HORIZONTAL_BUTTONS, self.azimuth_slider,
            ("0°", "180°", "360°"), columns=3))

        self.vertical_slider = self._make_slider(VERTICAL_SLIDER_RANGE)
        self.vertical_slider.valueChanged.connect(self._on_vertical_slider)
        layout.addWidget(self._make_group(
            "Vertical Angle", VERTICAL_BUTTONS, self.vertical_slider,
            ("Low (-90°)", "Eye (0°)", "High (90°)"), columns=3))

        self.distance_slider = self._make_slider(DISTANCE_SLIDER_RANGE)
        self.distance_slider.valueChanged.connect(self._on_distance_slider)
        layout.addWidget(self._make_group(
            "Distance", DISTANCE_BUTTONS, self.distance_slider,
            ("Near", "", "Far"), columns=3))

        layout.addStretch(1)
        self.setLayout(layout)

    def _make_slider(self, value_range: tuple[int, int]) -> QSlider:
        slider = QSlider(QtCore.Qt.Horizontal, self)
        slider.setRange(*value_range)
        slider.setSingleStep(1)
        return slider

    def _make_group(self, title: str, buttons: tuple[PresetButton, ...], slider: QSlider,
                    scale_labels: tuple[str, str, str], columns: int) -> QGroupBox:
        group = QGroupBox(title, self)
        layout = QVBoxLayout(group)

        grid = QGridLayout()
        for i, button in enumerate(buttons):
            widget = QPushButton(button.label, group)
            widget.setCheckable(True)
            widget.clicked.connect(lambda checked=False, key=button.key: self._on_button_clicked(key))
            grid.addWidget(widget, i // columns, i % columns)
            self.buttons[button.key] = widget
        layout.addLayout(grid)

        layout.addWidget(slider)

        scale = QHBoxLayout()
        for text, align in zip(scale_labels, (QtCore.Qt.AlignLeft, QtCore.Qt.AlignHCenter,
                                              QtCore.Qt.AlignRight)):
            label = QLabel(text, group)
            label.setAlignment(align)
            scale.addWidget(label)
        layout.addLayout(scale)
        return group

    # =====================================================
    # Requests
    # =====================================================

    def _on_button_clicked(self, key: str) -> None:
        self.adapter.press(key)
        # The camera may already be at the preset, in which case nothing is published.
        self.refresh(self.adapter.controller.snapshot)

    def _on_azimuth_slider(self, value: int) -> None:
        self.adapter.set_azimuth_deg(value)
        self.refresh(self.adapter.controller.snapshot)

    def _on_vertical_slider(self, value: int) -> None:
        self.adapter.set_vertical(value)
        self.refresh(self.adapter.controller.snapshot)

    def _on_distance_slider(self, value: int) -> None:
        self.adapter.set_distance(value)
        self.refresh(self.adapter.controller.snapshot)

    # =====================================================
    # State
    # =====================================================

    def refresh(self, snapshot: CameraSnapshot) -> None:
        """Show ``snapshot`` on every control without issuing requests."""
        readout = readout_from_state(snapshot.state)
        active = active_keys(readout)
        for key, widget in self.buttons.items():
            widget.setChecked(key in active)

        for slider, value in ((self.azimuth_slider, readout.azimuth_deg),
                              (self.vertical_slider, readout.vertical),
                              (self.distance_slider, round_half_up(readout.distance))):
            slider.blockSignals(True)
            slider.setValue(value)
            slider.blockSignals(False)

    def set_has_image(self, has_image: bool) -> None:
        self.clear_button.setEnabled(has_image)
