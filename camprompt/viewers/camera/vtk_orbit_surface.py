"""Orbit surface backed by a VTK camera."""
from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
import vtk

from camprompt.core import geometry_utils
from camprompt.core.geometry_utils import Vector3
from camprompt.viewers.camera.orbit_surface import (
    DEFAULT_MAX_DISTANCE,
    DEFAULT_MIN_DISTANCE,
    OrbitSurface,
)

logger = logging.getLogger(__name__)

VIEW_UP: Vector3 = (0.0, 1.0, 0.0)


class VtkOrbitSurface(OrbitSurface):
    """Drives a vtkCamera so that it always looks at the orbit target with +Y up."""

    def __init__(self,
                 camera: vtk.vtkCamera,
                 target: Sequence[float] = (0.0, 0.0, 0.0),
                 min_distance: float = DEFAULT_MIN_DISTANCE,
                 max_distance: float = DEFAULT_MAX_DISTANCE) -> None:
        super().__init__(target, min_distance, max_distance)
        self.camera = camera
        self.camera.SetFocalPoint(*self.get_target())
        self.camera.SetViewUp(*VIEW_UP)
        logger.debug("VtkOrbitSurface attached, camera at %s", self.get_position())

    def get_position(self) -> Vector3:
        return geometry_utils.to_tuple(self.camera.GetPosition())

    def _write_position(self, position: np.ndarray) -> None:
        self.camera.SetPosition(*geometry_utils.to_tuple(position))
        self.camera.SetFocalPoint(*self.get_target())
        self.camera.SetViewUp(*VIEW_UP)
