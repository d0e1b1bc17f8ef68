"""
Services du moteur de navigation
"""

from .waypoint_selector import WaypointSelector
from .path_planner import PathPlanner, PlanningError, PlanningResult
from .calibration_scorer import score_calibration
from .progress_tracker import ProgressTracker
from .path_exporter import export_path, export_debug_path, load_exported_path
from .door_guidance import doorway_instruction
from .coordinate_transform import map_to_ar, ar_to_map, map_heading_to_ar, ar_heading_to_map

__all__ = [
    'WaypointSelector',
    'PathPlanner',
    'PlanningError',
    'PlanningResult',
    'score_calibration',
    'ProgressTracker',
    'export_path',
    'export_debug_path',
    'load_exported_path',
    'doorway_instruction',
    'map_to_ar',
    'ar_to_map',
    'map_heading_to_ar',
    'ar_heading_to_map'
]
