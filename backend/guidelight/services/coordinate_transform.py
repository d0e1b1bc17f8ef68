"""
Passage repère carte ↔ repère AR à partir d'un point de calibration

Rotation 2D sur le plan (X, Z) autour de la position calibrée, Y conservé à 0.
"""

import numpy as np

from ..geometry import normalize_angle, rotate_point
from ..models import CalibrationData, Vec3


def map_to_ar(map_position, calibration: CalibrationData) -> Vec3:
    """map_position: (x, z) sur le plan de la carte"""
    relative = np.asarray(map_position, dtype=float) - np.asarray(calibration.user_position, dtype=float)
    x, z = rotate_point(relative, calibration.heading)
    return Vec3(float(x), 0.0, float(z))


def ar_to_map(ar_position: Vec3, calibration: CalibrationData) -> np.ndarray:
    rotated = rotate_point(ar_position.floor_position, -calibration.heading)
    return rotated + np.asarray(calibration.user_position, dtype=float)


def map_heading_to_ar(heading: float, calibration: CalibrationData) -> float:
    return normalize_angle(heading + calibration.heading)


def ar_heading_to_map(heading: float, calibration: CalibrationData) -> float:
    return normalize_angle(heading - calibration.heading)
