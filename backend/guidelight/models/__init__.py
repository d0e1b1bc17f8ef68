"""
Modèles pour le moteur de navigation GuideLight
"""

from .position import Vec3
from .indoor_map import (
    IndoorMap, Room, Beacon, Doorway, Waypoint, ConnectedRooms, DoorActions,
    DoorAction, DoorwayType, BeaconCategory, RoomType, FloorSurface,
    PhysicalProperties, BoundingBox, ObstacleType, WaypointKind, MapStats
)
from .spatial_graph import SpatialGraphIndex, build_adjacency
from .path import NavigationPath, NavigationWaypoint, WaypointType
from .calibration import (
    BeaconMeasurement, CalibrationData, CalibrationQuality,
    CalibrationState, CalibrationStep
)
from .progress import NavigationProgress, AlignmentQuality, clock_position_for
from .navigation_state import NavigationState, NavigationPhase

__all__ = [
    'Vec3',
    'IndoorMap',
    'Room',
    'Beacon',
    'Doorway',
    'Waypoint',
    'ConnectedRooms',
    'DoorActions',
    'DoorAction',
    'DoorwayType',
    'BeaconCategory',
    'RoomType',
    'FloorSurface',
    'PhysicalProperties',
    'BoundingBox',
    'ObstacleType',
    'WaypointKind',
    'MapStats',
    'SpatialGraphIndex',
    'build_adjacency',
    'NavigationPath',
    'NavigationWaypoint',
    'WaypointType',
    'BeaconMeasurement',
    'CalibrationData',
    'CalibrationQuality',
    'CalibrationState',
    'CalibrationStep',
    'NavigationProgress',
    'AlignmentQuality',
    'clock_position_for',
    'NavigationState',
    'NavigationPhase'
]
