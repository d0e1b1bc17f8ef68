"""
Service de sélection des waypoints intermédiaires

Responsabilités:
- Règle de connectivité (même salle) : waypoints reliant les balises de départ/arrivée,
  sous le même plafond de détour que le trajet direct
- Règle de trajet direct (segments inter-salles) : waypoints proches du segment
  et sans détour notable, pour ne pas "aimanter" l'itinéraire vers une balise voisine
"""

import logging
from typing import Collection, List, Optional

from ..config import CONFIG
from ..geometry import distance, point_to_segment_distance
from ..models import IndoorMap, Vec3, Waypoint

logger = logging.getLogger(__name__)


class WaypointSelector:
    """Choisit les waypoints à insérer sur un segment d'itinéraire"""

    def __init__(self, indoor_map: IndoorMap, settings: dict = None):
        self.map = indoor_map
        settings = settings or CONFIG.PATHFINDING_SETTINGS
        self.max_distance = settings['direct_path_max_distance']
        self.max_detour_ratio = settings['max_detour_ratio']
        self.min_connected = settings['min_connected_beacons']
        self.min_segment_length = settings['min_segment_length']

    def connecting_waypoints(
        self,
        start: Vec3,
        beacon_b: str,
        beacon_a: Optional[str] = None,
        end: Optional[Vec3] = None
    ) -> List[Waypoint]:
        """
        Règle de connectivité: waypoints accessibles déclarés entre deux balises

        Sans beacon_a (départ = position live), il suffit que le waypoint
        soit relié à la balise de destination. Avec end, le waypoint doit
        aussi rester sous le détour maximal du segment start → end.
        """
        relevant = []
        for waypoint in self.map.waypoints:
            if not waypoint.is_accessible or len(waypoint.connected_beacons) < self.min_connected:
                continue
            if beacon_b not in waypoint.connected_beacons:
                continue
            if beacon_a is not None and beacon_a not in waypoint.connected_beacons:
                continue
            if end is not None and not self._within_detour(start, waypoint, end):
                logger.debug(f"     Waypoint écarté (détour): {waypoint.name}")
                continue
            relevant.append(waypoint)
            logger.debug(f"     Waypoint de liaison: {waypoint.name} (→ {beacon_b})")

        relevant.sort(key=lambda wp: distance(start, wp.coordinates))
        return relevant

    def detour_ratio(self, start: Vec3, waypoint: Waypoint, end: Vec3) -> float:
        """Allongement relatif du segment start → end en passant par le waypoint"""
        segment_length = distance(start, end)
        via = distance(start, waypoint.coordinates) + distance(waypoint.coordinates, end)
        return via / segment_length

    def _within_detour(self, start: Vec3, waypoint: Waypoint, end: Vec3) -> bool:
        if distance(start, end) < self.min_segment_length:
            return False
        return self.detour_ratio(start, waypoint, end) < self.max_detour_ratio

    def direct_path_waypoints(
        self,
        start: Vec3,
        end: Vec3,
        exclude: Collection[str] = ()
    ) -> List[Waypoint]:
        """Règle de trajet direct: waypoints à moins de 2 m du segment et <10% de détour"""
        segment_length = distance(start, end)
        if segment_length < self.min_segment_length:
            return []

        relevant = []
        for waypoint in self.map.waypoints:
            if not waypoint.is_accessible or waypoint.id in exclude:
                continue

            if point_to_segment_distance(waypoint.coordinates, start, end) >= self.max_distance:
                continue

            detour_ratio = self.detour_ratio(start, waypoint, end)
            if detour_ratio < self.max_detour_ratio:
                relevant.append(waypoint)
                logger.debug(f"     Waypoint sur le trajet: {waypoint.name} (détour {detour_ratio:.2f})")

        relevant.sort(key=lambda wp: distance(start, wp.coordinates))
        return relevant
