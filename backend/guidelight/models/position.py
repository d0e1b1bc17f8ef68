"""
Modèle de position 3D (repère monde AR, en mètres)
"""

from dataclasses import dataclass
from typing import Dict
import math

import numpy as np


@dataclass(frozen=True)
class Vec3:
    """Position 3D : X/Z = plan horizontal, Y = hauteur"""
    x: float
    y: float
    z: float

    @classmethod
    def from_dict(cls, data: Dict) -> 'Vec3':
        return cls(float(data['x']), float(data['y']), float(data['z']))

    def to_dict(self) -> Dict[str, float]:
        return {'x': self.x, 'y': self.y, 'z': self.z}

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    @property
    def floor_position(self) -> np.ndarray:
        """Projection sur le plan horizontal (X, Z)"""
        return np.array([self.x, self.z], dtype=float)

    def distance_to(self, other: 'Vec3') -> float:
        """Distance euclidienne 3D en mètres"""
        return math.sqrt(
            (self.x - other.x) ** 2 + (self.y - other.y) ** 2 + (self.z - other.z) ** 2
        )

    def horizontal_distance_to(self, other: 'Vec3') -> float:
        """Distance sur le plan X/Z (Y ignoré)"""
        return math.hypot(self.x - other.x, self.z - other.z)

    def is_finite(self) -> bool:
        return all(math.isfinite(v) for v in (self.x, self.y, self.z))

