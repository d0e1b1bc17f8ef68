"""
Opérations exposées à l'application hôte

Fonctions pures : la carte, l'itinéraire et les mesures sont passés en
argument, aucun état partagé entre appels.
"""

from typing import Sequence, Tuple

from .models import BeaconMeasurement, CalibrationData, IndoorMap, NavigationPath, NavigationProgress, Vec3
from .services import PathPlanner, PlanningResult, ProgressTracker
from .services import export_path as _export_path
from .services import score_calibration as _score_calibration


def plan_path(indoor_map: IndoorMap, start_position: Vec3, destination_id: str) -> PlanningResult:
    """Itinéraire de start_position vers la balise destination_id"""
    return PathPlanner(indoor_map).plan(start_position, destination_id)


def score_calibration(
    measurements: Sequence[BeaconMeasurement],
    user_position: Tuple[float, float] = (0.0, 0.0),
    heading: float = 0.0
) -> CalibrationData:
    return _score_calibration(measurements, user_position, heading)


def update_progress(
    path: NavigationPath,
    waypoint_index: int,
    live_position: Vec3,
    live_heading: float
) -> NavigationProgress:
    return ProgressTracker().update(path, waypoint_index, live_position, live_heading)


def export_path(path: NavigationPath) -> dict:
    return _export_path(path)
