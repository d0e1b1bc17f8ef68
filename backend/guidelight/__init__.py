"""
GuideLight - Moteur de navigation intérieure pour personnes aveugles

Calcul d'itinéraire entre salles, notation de la calibration AR et
suivi de progression avec consignes en position d'horloge.
"""

from .errors import GuideLightError, MapFormatError, InvalidTransitionError, NavigationInactiveError
from .models import IndoorMap, NavigationPath, NavigationProgress, CalibrationData, Vec3
from .navigation import plan_path, score_calibration, update_progress, export_path
from .services import PlanningError, PlanningResult
from .session import NavigationSession, SessionUpdate

__version__ = "1.0.0"

__all__ = [
    'GuideLightError',
    'MapFormatError',
    'InvalidTransitionError',
    'NavigationInactiveError',
    'IndoorMap',
    'NavigationPath',
    'NavigationProgress',
    'CalibrationData',
    'Vec3',
    'plan_path',
    'score_calibration',
    'update_progress',
    'export_path',
    'PlanningError',
    'PlanningResult',
    'NavigationSession',
    'SessionUpdate'
]
