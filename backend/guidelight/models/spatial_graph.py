"""
Index spatial de la carte : graphe d'adjacence des salles, balises par salle

Il n'existe pas de géométrie de murs : la salle d'une position est celle de
la balise la plus proche sur le plan horizontal.
"""

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

from .indoor_map import Beacon, Doorway, IndoorMap, Waypoint
from .position import Vec3

logger = logging.getLogger(__name__)

# Arête orientée du graphe : (porte franchie, salle atteinte)
RoomEdge = Tuple[Doorway, str]
RoomGraph = Dict[str, List[RoomEdge]]


def build_adjacency(doorways: Sequence[Doorway]) -> RoomGraph:
    """Graphe multi-arêtes salle → [(porte, salle voisine)], portes accessibles uniquement"""
    graph: RoomGraph = {}
    for doorway in doorways:
        if not doorway.is_accessible:
            continue
        room_a = doorway.connects_rooms.room_a
        room_b = doorway.connects_rooms.room_b
        graph.setdefault(room_a, []).append((doorway, room_b))
        graph.setdefault(room_b, []).append((doorway, room_a))
    return graph


class SpatialGraphIndex:
    """Index construit une fois par carte chargée"""

    def __init__(self, indoor_map: IndoorMap, heuristic_fallback: float = 10.0):
        self.map = indoor_map
        self.heuristic_fallback = heuristic_fallback
        self.adjacency: RoomGraph = build_adjacency(indoor_map.doorways)

        self._beacons_by_room: Dict[str, List[Beacon]] = {}
        for beacon in indoor_map.beacons:
            self._beacons_by_room.setdefault(beacon.room_id, []).append(beacon)

        self._waypoints_by_room: Dict[str, List[Waypoint]] = {}
        for waypoint in indoor_map.waypoints:
            self._waypoints_by_room.setdefault(waypoint.room_id, []).append(waypoint)

        logger.debug(
            f"🗺️  Index spatial '{indoor_map.name}': {len(indoor_map.rooms)} salles, "
            f"{len(indoor_map.beacons)} balises, {len(indoor_map.doorways)} portes, "
            f"{len(indoor_map.waypoints)} waypoints"
        )

    def nearest_beacon(self, point: Vec3) -> Optional[Beacon]:
        """Balise la plus proche (3D), la première rencontrée en cas d'égalité"""
        nearest = None
        min_distance = math.inf
        for beacon in self.map.beacons:
            d = beacon.position.distance_to(point)
            if d < min_distance:
                min_distance = d
                nearest = beacon
        return nearest

    def room_containing(self, point: Vec3) -> Optional[str]:
        """Salle de la balise la plus proche sur le plan X/Z"""
        closest = None
        min_distance = math.inf
        for beacon in self.map.beacons:
            d = beacon.position.horizontal_distance_to(point)
            if d < min_distance:
                min_distance = d
                closest = beacon
        return closest.room_id if closest else None

    def nearest_beacon_in_room(self, point: Vec3, room_id: str) -> Optional[Beacon]:
        candidates = self.beacons_in_room(room_id)
        if not candidates:
            return None
        return min(candidates, key=lambda b: b.position.distance_to(point))

    def beacons_in_room(self, room_id: str) -> List[Beacon]:
        return list(self._beacons_by_room.get(room_id, []))

    def waypoints_in_room(self, room_id: str) -> List[Waypoint]:
        return list(self._waypoints_by_room.get(room_id, []))

    def neighbors(self, room_id: str) -> List[RoomEdge]:
        return list(self.adjacency.get(room_id, []))

    def room_centroid(self, room_id: str) -> Optional[Tuple[float, float]]:
        """Position moyenne (X, Z) des balises d'une salle"""
        beacons = self._beacons_by_room.get(room_id)
        if not beacons:
            return None
        xs = [b.position.x for b in beacons]
        zs = [b.position.z for b in beacons]
        return (sum(xs) / len(xs), sum(zs) / len(zs))

    def estimate_distance(self, room_a: str, room_b: str) -> float:
        """Heuristique A* : distance entre centres de salles (constante si salle vide)"""
        center_a = self.room_centroid(room_a)
        center_b = self.room_centroid(room_b)
        if center_a is None or center_b is None:
            logger.debug(
                f"⚠️  Heuristique par défaut {self.heuristic_fallback} "
                f"({room_a} → {room_b}): salle sans balise"
            )
            return self.heuristic_fallback
        return math.hypot(center_a[0] - center_b[0], center_a[1] - center_b[1])
