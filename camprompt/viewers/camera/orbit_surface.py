"""Orbit surfaces: a camera constrained to a sphere around a fixed target."""
from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Callable, Sequence

import numpy as np

from camprompt.core import geometry_utils
from camprompt.core.geometry_utils import Vector3

logger = logging.getLogger(__name__)

DEFAULT_MIN_DISTANCE = 2.0
DEFAULT_MAX_DISTANCE = 20.0


class OrbitSurface(ABC):
    """
    Base class for an interactive orbit around a fixed target.

    The camera position is the only stored degree of freedom; azimuth, polar
    and distance are always read back from it (Y up, azimuth from +Z towards
    +X). Setters move the camera but do not notify; ``update()`` applies the
    polar and distance constraints and fires the change callbacks when the
    camera moved since the last notification.

    Subclasses implement:
    - get_position(): current camera position
    - _write_position(): move the camera
    """

    EPS = 1e-6

    def __init__(self,
                 target: Sequence[float] = (0.0, 0.0, 0.0),
                 min_distance: float = DEFAULT_MIN_DISTANCE,
                 max_distance: float = DEFAULT_MAX_DISTANCE) -> None:
        if not 0 < min_distance <= max_distance:
            raise ValueError(f"Invalid distance range: [{min_distance}, {max_distance}]")
        self._target = np.asarray(target, dtype=float)
        self.min_distance = float(min_distance)
        self.max_distance = float(max_distance)
        self._last_position: np.ndarray | None = None
        self._on_change_callbacks: list[Callable[[], None]] = []

    # =====================================================
    # Backend
    # =====================================================

    @abstractmethod
    def get_position(self) -> Vector3:
        """Current camera position."""

    @abstractmethod
    def _write_position(self, position: np.ndarray) -> None:
        """Move the camera to ``position`` keeping it aimed at the target."""

    # =====================================================
    # Reading
    # =====================================================

    def get_target(self) -> Vector3:
        return geometry_utils.to_tuple(self._target)

    def _spherical(self) -> tuple[float, float, float]:
        offset = geometry_utils.direction_vector(self._target, self.get_position())
        return geometry_utils.offset_to_spherical(offset)

    def get_azimuthal_angle(self) -> float:
        """Azimuth in radians, in (-pi, pi]."""
        return self._spherical()[0]

    def get_polar_angle(self) -> float:
        """Polar angle in radians, 0 above the target."""
        return self._spherical()[1]

    def get_distance(self) -> float:
        return self._spherical()[2]

    # =====================================================
    # Writing
    # =====================================================

    def set_position(self, position: Sequence[float]) -> None:
        self._write_position(np.asarray(position, dtype=float))

    def set_azimuthal_angle(self, azimuth: float) -> None:
        _, polar, radius = self._spherical()
        self._move_to(azimuth, polar, radius)

    def set_polar_angle(self, polar: float) -> None:
        azimuth, _, radius = self._spherical()
        self._move_to(azimuth, polar, radius)

    def rotate(self, delta_azimuth: float, delta_polar: float) -> bool:
        """Orbit by angle deltas in radians and notify."""
        azimuth, polar, radius = self._spherical()
        self._move_to(azimuth + delta_azimuth, polar + delta_polar, radius)
        return self.update()

    def dolly(self, scale: float) -> bool:
        """Multiply the distance by ``scale`` along the current view ray and notify."""
        azimuth, polar, radius = self._spherical()
        self._move_to(azimuth, polar, radius * scale)
        return self.update()

    def _move_to(self, azimuth: float, polar: float, radius: float) -> None:
        polar = min(math.pi - self.EPS, max(self.EPS, polar))
        radius = min(self.max_distance, max(self.min_distance, radius))
        offset = geometry_utils.spherical_to_offset(azimuth, polar, radius)
        self._write_position(self._target + offset)

    def update(self) -> bool:
        """
        Apply constraints and fire change callbacks if the camera moved.

        :return: True if a change was notified
        """
        azimuth, polar, radius = self._spherical()
        if radius == 0:
            # Degenerate: camera on the target, fall back to the front direction.
            azimuth, polar = 0.0, math.pi / 2
        self._move_to(azimuth, polar, radius)

        position = np.asarray(self.get_position(), dtype=float)
        if self._last_position is not None and \
                float(np.sum((position - self._last_position) ** 2)) <= self.EPS:
            return False
        self._last_position = position
        self._notify_changed()
        return True

    # =====================================================
    # Callbacks
    # =====================================================

    def add_change_callback(self, callback: Callable[[], None]) -> None:
        """
        Add a callback fired on every camera movement.

        Callback signature: callback() -> None
        """
        self._on_change_callbacks.append(callback)

    def remove_change_callback(self, callback: Callable[[], None]) -> None:
        self._on_change_callbacks.remove(callback)

    def _notify_changed(self) -> None:
        for callback in self._on_change_callbacks:
            try:
                callback()
            except Exception as e:
                logger.exception(f"Error in orbit change callback: {e}")


class SphericalOrbitSurface(OrbitSurface):
    """Orbit surface holding the camera position in memory."""

    def __init__(self,
                 position: Sequence[float] = (0.0, 0.0, 9.0),
                 target: Sequence[float] = (0.0, 0.0, 0.0),
                 min_distance: float = DEFAULT_MIN_DISTANCE,
                 max_distance: float = DEFAULT_MAX_DISTANCE) -> None:
        super().__init__(target, min_distance, max_distance)
        self._position = np.asarray(position, dtype=float)

    def get_position(self) -> Vector3:
        return geometry_utils.to_tuple(self._position)

    def _write_position(self, position: np.ndarray) -> None:
        self._position = np.array(position, dtype=float)
