"""
Outils géométriques (numpy) pour le calcul d'itinéraire et le guidage

Conventions:
- plan horizontal = (X, Z), Y vertical ignoré pour le cap
- cap 0 = axe +Z, angle positif = vers +X (virage à droite)
"""

import math
from typing import Sequence

import numpy as np

from .models.position import Vec3


def distance(a: Vec3, b: Vec3) -> float:
    return float(np.linalg.norm(b.as_array() - a.as_array()))


def horizontal_distance(a: Vec3, b: Vec3) -> float:
    return float(np.linalg.norm(b.floor_position - a.floor_position))


def point_to_segment_distance(point: Vec3, start: Vec3, end: Vec3) -> float:
    """Distance d'un point au segment [start, end] (projection bornée au segment)"""
    p = point.as_array()
    a = start.as_array()
    line = end.as_array() - a
    length = np.linalg.norm(line)

    if length <= 0:
        return float(np.linalg.norm(p - a))

    unit = line / length
    projection = float(np.dot(p - a, unit))
    projection = max(0.0, min(length, projection))
    closest = a + unit * projection
    return float(np.linalg.norm(p - closest))


def polyline_length(points: Sequence[Vec3]) -> float:
    """Somme des segments droits entre points consécutifs"""
    if len(points) < 2:
        return 0.0
    coords = np.array([p.as_array() for p in points])
    return float(np.linalg.norm(np.diff(coords, axis=0), axis=1).sum())


def normalize_angle(angle: float) -> float:
    """Ramène un angle (radians) dans (-π, π]"""
    if not math.isfinite(angle):
        return 0.0
    normalized = math.fmod(angle, 2 * math.pi)
    if normalized > math.pi:
        normalized -= 2 * math.pi
    elif normalized <= -math.pi:
        normalized += 2 * math.pi
    return normalized


def bearing(origin: Vec3, target: Vec3) -> float:
    """Cap absolu de origin vers target sur le plan X/Z"""
    delta = target.floor_position - origin.floor_position
    return math.atan2(float(delta[0]), float(delta[1]))


def relative_bearing(origin: Vec3, target: Vec3, heading: float) -> float:
    """Angle à tourner depuis le cap courant (positif = droite)"""
    return normalize_angle(bearing(origin, target) - heading)


def rotate_point(point: np.ndarray, angle: float) -> np.ndarray:
    """Rotation 2D d'un point (x, z) autour de l'origine"""
    c, s = math.cos(angle), math.sin(angle)
    rotation = np.array([[c, -s], [s, c]])
    return rotation @ np.asarray(point, dtype=float)
