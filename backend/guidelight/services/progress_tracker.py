"""
Service de suivi de progression

Responsabilités:
- Distance au prochain waypoint, distance restante, pourcentage accompli
- Erreur de cap signée (positif = droite) pour le guidage en position horaire
- Détection d'arrivée, d'écart d'itinéraire, annonces d'approche et d'arrivée

Ne lève jamais d'exception : les valeurs non finies sont ramenées à 0 et
l'index est borné au dernier waypoint.
"""

import logging
import math
from typing import Optional

from ..config import CONFIG
from ..geometry import bearing, horizontal_distance, normalize_angle
from ..models import NavigationPath, NavigationProgress, NavigationWaypoint, Vec3, WaypointType

logger = logging.getLogger(__name__)


def _finite(value: float, default: float = 0.0) -> float:
    return value if math.isfinite(value) else default


class ProgressTracker:
    """Convertit (itinéraire, index, position, cap) en progression et consignes"""

    def __init__(self, settings: dict = None, walking_speed: float = None):
        self.settings = settings or CONFIG.PROGRESS_SETTINGS
        self.walking_speed = walking_speed or CONFIG.walking_speed()

    def update(
        self,
        path: NavigationPath,
        waypoint_index: int,
        live_position: Vec3,
        live_heading: float
    ) -> NavigationProgress:
        heading = normalize_angle(_finite(live_heading))

        if not path.waypoints:
            return NavigationProgress(
                current_waypoint_index=0,
                distance_to_next_waypoint=0.0,
                total_distance_remaining=0.0,
                estimated_time_remaining=0.0,
                current_heading=heading,
                target_heading=heading,
                heading_error=0.0,
                total_path_distance=0.0,
            )

        index = max(0, min(waypoint_index, len(path.waypoints) - 1))
        target = path.waypoints[index]

        if live_position.is_finite():
            to_next = horizontal_distance(live_position, target.position)
            target_heading = bearing(live_position, target.position)
        else:
            to_next, target_heading = 0.0, heading

        remaining = _finite(to_next + path.distance_from(index))
        heading_error = normalize_angle(target_heading - heading)

        return NavigationProgress(
            current_waypoint_index=index,
            distance_to_next_waypoint=_finite(to_next),
            total_distance_remaining=remaining,
            estimated_time_remaining=remaining / self.walking_speed,
            current_heading=heading,
            target_heading=target_heading,
            heading_error=heading_error,
            total_path_distance=_finite(path.total_distance),
        )

    def has_arrived(self, live_position: Vec3, waypoint: NavigationWaypoint) -> bool:
        return horizontal_distance(live_position, waypoint.position) < self.settings['arrival_threshold']

    def should_recalculate(self, live_position: Vec3, expected: NavigationWaypoint) -> bool:
        """Utilisateur à plus de 2 m du point attendu"""
        return horizontal_distance(live_position, expected.position) > self.settings['off_route_threshold']

    def meters_to_steps(self, meters: float) -> int:
        step = max(self.settings['min_step_length'], self.settings['step_length'])
        return max(1, int(math.floor(meters / step + 0.5)))

    def approach_announcement(self, path: NavigationPath, waypoint_index: int, distance_to_waypoint: float) -> Optional[str]:
        """Annonce "Approaching X in N steps." dans la fenêtre 1.0–2.5 m, sinon None"""
        if not 0 <= waypoint_index < len(path.waypoints):
            return None
        if not self.settings['approach_min_distance'] <= distance_to_waypoint <= self.settings['approach_max_distance']:
            return None

        waypoint = path.waypoints[waypoint_index]
        steps = self.meters_to_steps(distance_to_waypoint)
        if waypoint.type is WaypointType.DESTINATION:
            name = waypoint.name or "your destination"
        else:
            name = waypoint.name or _fallback_label(waypoint, "your next waypoint")
        return f"Approaching {name} in {steps} steps."

    def arrival_message(self, path: NavigationPath, waypoint_index: int) -> str:
        """Message prononcé en atteignant le waypoint waypoint_index"""
        waypoints = path.waypoints
        if not waypoints or waypoint_index >= len(waypoints) - 1:
            return "Arrived"

        waypoint = waypoints[waypoint_index]
        following = waypoints[waypoint_index + 1:]

        if waypoint.type is WaypointType.START:
            nxt = following[0]
            return f"Proceed to {nxt.name or _fallback_label(nxt, 'the next waypoint')}"

        arrived = f"Arrived at {waypoint.name}" if waypoint.name else "Arrived"

        # Priorité au prochain intermédiaire nommé, puis à la destination
        next_name = next(
            (w.name for w in following if w.type is WaypointType.INTERMEDIATE and w.name),
            None
        )
        if next_name is None:
            dest = next((w for w in following if w.type is WaypointType.DESTINATION), None)
            if dest is not None:
                next_name = dest.name or "destination"
            else:
                next_name = following[0].name or "next waypoint"

        return f"{arrived}, now proceed to {next_name}"


def _fallback_label(waypoint: NavigationWaypoint, default: str) -> str:
    if waypoint.type is WaypointType.DOORWAY:
        return "the doorway"
    if waypoint.type is WaypointType.INTERMEDIATE:
        return "the next point"
    return default
