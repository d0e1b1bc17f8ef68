"""
Service de calcul d'itinéraire

Responsabilités:
- A* sur le graphe des salles (coût = largeur de porte, heuristique = distance
  entre centres de balises), borné à un budget d'itérations
- Développement de la séquence de portes en waypoints navigables
- Itinéraire direct avec waypoints de liaison quand départ et arrivée sont
  dans la même salle

Les échecs sont renvoyés dans un PlanningResult, jamais levés.

Départage A*: plus petit fScore, puis première (ré)insertion dans l'ensemble
ouvert. L'ordre reste déterministe mais n'est pas une garantie d'API.
"""

import heapq
import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..config import CONFIG
from ..geometry import polyline_length
from ..models import (
    Beacon, Doorway, IndoorMap, NavigationPath, NavigationWaypoint,
    SpatialGraphIndex, Vec3, WaypointType
)
from .door_guidance import doorway_instruction
from .waypoint_selector import WaypointSelector

logger = logging.getLogger(__name__)


class PlanningError(Enum):
    BEACON_UNKNOWN = 'beacon_unknown'
    ROOM_UNKNOWN = 'room_unknown'
    NO_ROUTE_FOUND = 'no_route_found'
    SEARCH_BUDGET_EXCEEDED = 'search_budget_exceeded'

    @property
    def is_no_route(self) -> bool:
        """Le budget dépassé se présente comme une absence d'itinéraire"""
        return self in (PlanningError.NO_ROUTE_FOUND, PlanningError.SEARCH_BUDGET_EXCEEDED)


@dataclass(frozen=True)
class PlanningResult:
    path: Optional[NavigationPath] = None
    error: Optional[PlanningError] = None
    message: str = ''

    @property
    def ok(self) -> bool:
        return self.path is not None

    @classmethod
    def failure(cls, error: PlanningError, message: str) -> 'PlanningResult':
        logger.warning(f"❌ {message}")
        return cls(error=error, message=message)


class PathPlanner:
    """Calcule un NavigationPath de la position live vers une balise"""

    def __init__(self, indoor_map: IndoorMap, settings: dict = None):
        self.map = indoor_map
        self.settings = settings or CONFIG.PATHFINDING_SETTINGS
        self.index = SpatialGraphIndex(indoor_map, self.settings['heuristic_fallback'])
        self.selector = WaypointSelector(indoor_map, self.settings)
        self.walking_speed = self.settings['walking_speed']
        self.max_iterations = self.settings['max_iterations']

    def plan(self, start: Vec3, destination_id: str) -> PlanningResult:
        """
        Calcule l'itinéraire complet

        Returns:
            PlanningResult avec path, ou error parmi PlanningError
        """
        destination = self.map.beacon(destination_id)
        if destination is None:
            return PlanningResult.failure(
                PlanningError.BEACON_UNKNOWN, f"Balise inconnue: {destination_id}"
            )

        logger.info(f"🎯 Itinéraire vers {destination.name} depuis ({start.x:.1f}, {start.z:.1f})")

        start_room = self.index.room_containing(start)
        dest_room = destination.room_id

        if start_room is None:
            return PlanningResult.failure(
                PlanningError.ROOM_UNKNOWN, "Impossible de déterminer la salle de départ"
            )

        if start_room == dest_room:
            logger.info(f"✅ Même salle ({self.map.room_name(dest_room)}) - trajet direct")
            return PlanningResult(path=self._build_direct_path(start, destination, start_room))

        doorways, error = self.find_doorway_path(start_room, dest_room)
        if error is not None:
            return PlanningResult.failure(
                error,
                f"Aucun passage entre {self.map.room_name(start_room)} "
                f"et {self.map.room_name(dest_room)} ({error.value})"
            )

        logger.info(f"🚪 Séquence de {len(doorways)} porte(s) trouvée")
        return PlanningResult(path=self._build_cross_room_path(start, destination, start_room, doorways))

    def find_path(self, start: Vec3, destination: Beacon) -> Optional[NavigationPath]:
        """Variante simple: None si aucun itinéraire"""
        return self.plan(start, destination.id).path

    # ------------------------------------------------------------------
    # A* sur le graphe des salles
    # ------------------------------------------------------------------

    def find_doorway_path(
        self,
        start_room: str,
        dest_room: str
    ) -> Tuple[Optional[List[Doorway]], Optional[PlanningError]]:
        """Séquence ordonnée de portes de start_room à dest_room"""
        if start_room == dest_room:
            return [], None

        graph = self.index.adjacency
        if start_room not in graph or dest_room not in graph:
            return None, PlanningError.NO_ROUTE_FOUND

        counter = itertools.count()
        g_score: Dict[str, float] = {start_room: 0.0}
        f_score: Dict[str, float] = {start_room: self.index.estimate_distance(start_room, dest_room)}
        came_from: Dict[str, Tuple[Doorway, str]] = {}
        open_heap = [(f_score[start_room], next(counter), start_room)]
        in_open = {start_room}

        iterations = 0
        while in_open and iterations < self.max_iterations:
            f, _, current = heapq.heappop(open_heap)
            if current not in in_open or f != f_score[current]:
                continue  # entrée périmée

            iterations += 1
            logger.debug(f"     A* examine {self.map.room_name(current)} (itération {iterations})")

            if current == dest_room:
                return self._reconstruct(came_from, start_room, dest_room), None

            in_open.discard(current)

            for doorway, neighbor in graph.get(current, []):
                tentative = g_score[current] + doorway.width
                if tentative < g_score.get(neighbor, float('inf')):
                    came_from[neighbor] = (doorway, current)
                    g_score[neighbor] = tentative
                    f_score[neighbor] = tentative + self.index.estimate_distance(neighbor, dest_room)
                    heapq.heappush(open_heap, (f_score[neighbor], next(counter), neighbor))
                    in_open.add(neighbor)

        if in_open:
            logger.warning(f"⚠️  A* a dépassé le budget de {self.max_iterations} itérations")
            return None, PlanningError.SEARCH_BUDGET_EXCEEDED
        return None, PlanningError.NO_ROUTE_FOUND

    def _reconstruct(
        self,
        came_from: Dict[str, Tuple[Doorway, str]],
        start_room: str,
        dest_room: str
    ) -> List[Doorway]:
        path = []
        current = dest_room
        while current != start_room:
            doorway, previous = came_from[current]
            path.insert(0, doorway)
            current = previous
        logger.debug(f"   Portes: {' → '.join(d.name for d in path)}")
        return path

    # ------------------------------------------------------------------
    # Construction des waypoints
    # ------------------------------------------------------------------

    def _build_direct_path(self, start: Vec3, destination: Beacon, room_id: str) -> NavigationPath:
        waypoints = [NavigationWaypoint(start, WaypointType.START, "Start", room_id=room_id)]

        for waypoint in self.selector.connecting_waypoints(start, destination.id, end=destination.position):
            waypoints.append(self._intermediate(waypoint))

        waypoints.append(self._destination(destination))
        return self._finalize(waypoints, (room_id,))

    def _build_cross_room_path(
        self,
        start: Vec3,
        destination: Beacon,
        start_room: str,
        doorways: List[Doorway]
    ) -> NavigationPath:
        waypoints = [NavigationWaypoint(start, WaypointType.START, "Start Position", room_id=start_room)]
        rooms = [start_room]
        used = set()
        current_pos = start
        current_room = start_room

        for doorway in doorways:
            next_room = doorway.connects_rooms.other_room(current_room) or current_room

            for waypoint in self.selector.direct_path_waypoints(current_pos, doorway.position, exclude=used):
                waypoints.append(self._intermediate(waypoint))
                used.add(waypoint.id)

            waypoints.append(NavigationWaypoint(
                doorway.position,
                WaypointType.DOORWAY,
                doorway.name,
                room_id=current_room,
                doorway_id=doorway.id,
                audio_instruction=doorway_instruction(doorway, current_room, next_room, self.map),
            ))

            current_pos = doorway.position
            current_room = next_room
            if current_room not in rooms:
                rooms.append(current_room)

        for waypoint in self.selector.direct_path_waypoints(current_pos, destination.position, exclude=used):
            waypoints.append(self._intermediate(waypoint))

        waypoints.append(self._destination(destination))
        path = self._finalize(waypoints, tuple(rooms))
        logger.info(
            f"✅ Itinéraire: {path.waypoint_count} waypoints, {path.total_distance:.1f}m, "
            f"~{int(path.estimated_time)}s "
            f"({' → '.join(self.map.room_name(r) for r in path.rooms_traversed)})"
        )
        return path

    @staticmethod
    def _intermediate(waypoint) -> NavigationWaypoint:
        return NavigationWaypoint(
            waypoint.coordinates,
            WaypointType.INTERMEDIATE,
            waypoint.name,
            room_id=waypoint.room_id,
            audio_instruction=waypoint.audio_landmark,
        )

    @staticmethod
    def _destination(beacon: Beacon) -> NavigationWaypoint:
        return NavigationWaypoint(
            beacon.position,
            WaypointType.DESTINATION,
            beacon.name,
            room_id=beacon.room_id,
            audio_instruction=f"You have arrived at {beacon.name}",
        )

    def _finalize(self, waypoints: List[NavigationWaypoint], rooms: Tuple[str, ...]) -> NavigationPath:
        total = polyline_length([w.position for w in waypoints])
        return NavigationPath(
            waypoints=tuple(waypoints),
            total_distance=total,
            estimated_time=total / self.walking_speed,
            rooms_traversed=rooms,
        )
