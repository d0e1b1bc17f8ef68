"""
Modèles pour les itinéraires et leurs waypoints
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple
import uuid

from .position import Vec3


class WaypointType(Enum):
    START = 'start'
    INTERMEDIATE = 'intermediate'
    DOORWAY = 'doorway'
    DESTINATION = 'destination'


@dataclass(frozen=True)
class NavigationWaypoint:
    """Étape d'un itinéraire planifié"""
    position: Vec3
    type: WaypointType
    name: str
    room_id: Optional[str] = None
    doorway_id: Optional[str] = None
    audio_instruction: Optional[str] = None
    id: str = field(default_factory=lambda: uuid.uuid4().hex)


@dataclass(frozen=True)
class NavigationPath:
    """Itinéraire complet, remplacé (jamais modifié) au changement de destination"""
    waypoints: Tuple[NavigationWaypoint, ...]
    total_distance: float
    estimated_time: float  # secondes
    rooms_traversed: Tuple[str, ...] = ()

    @property
    def waypoint_count(self) -> int:
        return len(self.waypoints)

    def distance_from(self, index: int) -> float:
        """Distance restante en suivant les waypoints à partir de index"""
        if index < 0:
            index = 0
        if index >= len(self.waypoints) - 1:
            return 0.0
        return sum(
            self.waypoints[i].position.distance_to(self.waypoints[i + 1].position)
            for i in range(index, len(self.waypoints) - 1)
        )

    def segment_distance(self, index: int) -> Optional[float]:
        """Longueur du segment index → index+1 (None pour le dernier waypoint)"""
        if index < 0 or index >= len(self.waypoints) - 1:
            return None
        return self.waypoints[index].position.distance_to(self.waypoints[index + 1].position)
