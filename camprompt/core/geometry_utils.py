"""Geometry utility functions for orbit camera positions."""
from __future__ import annotations

import math
from typing import Sequence, Tuple

import numpy as np

Vector3 = Tuple[float, float, float]


def direction_vector(start_point: Sequence[float], end_point: Sequence[float]) -> np.ndarray:
    """Calculate the direction vector between two points."""
    return np.asarray(end_point, dtype=float) - np.asarray(start_point, dtype=float)


def calculate_distance(start_point: Sequence[float], end_point: Sequence[float]) -> float:
    """
    Calculate the distance between two points.

    :param start_point: Starting point (x, y, z)
    :param end_point: Ending point (x, y, z)
    :return: Distance between the two points
    """
    return float(np.linalg.norm(direction_vector(start_point, end_point)))


def normalize_vector(vector: Sequence[float]) -> np.ndarray | None:
    """
    Normalize a 3D vector.

    :param vector: Vector (x, y, z)
    :return: Unit vector, or None for a zero-length vector
    """
    v = np.asarray(vector, dtype=float)
    norm = np.linalg.norm(v)
    if norm == 0:
        return None
    return v / norm


def spherical_to_offset(azimuth: float, polar: float, radius: float) -> np.ndarray:
    """
    Offset from the orbit target for spherical coordinates (Y up).

    azimuth is measured from +Z towards +X, polar from +Y.
    """
    sin_polar = math.sin(polar)
    return np.array([
        radius * sin_polar * math.sin(azimuth),
        radius * math.cos(polar),
        radius * sin_polar * math.cos(azimuth),
    ])


def offset_to_spherical(offset: Sequence[float]) -> tuple[float, float, float]:
    """
    Inverse of spherical_to_offset.

    :return: (azimuth, polar, radius); azimuth in (-pi, pi]
    """
    x, y, z = (float(c) for c in offset)
    radius = math.sqrt(x * x + y * y + z * z)
    if radius == 0:
        return 0.0, 0.0, 0.0
    azimuth = math.atan2(x, z)
    polar = math.acos(min(1.0, max(-1.0, y / radius)))
    return azimuth, polar, radius


def to_tuple(vector: Sequence[float]) -> Vector3:
    return float(vector[0]), float(vector[1]), float(vector[2])
