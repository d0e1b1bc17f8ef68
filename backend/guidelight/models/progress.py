"""
Progression de navigation et guidage en position horaire

Tout le texte de guidage se déduit uniquement des champs de NavigationProgress.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict
import math

from ..config import CONFIG


class AlignmentQuality(Enum):
    EXCELLENT = 'excellent'
    GOOD = 'good'
    FAIR = 'fair'
    POOR = 'poor'
    VERY_POOR = 'very_poor'


def _round_half_away(value: float) -> int:
    # round() de Python arrondit au pair : 75° doit donner 3h, pas 2h
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def clock_position_for(degrees: float) -> int:
    """Position horaire 1-12 pour une erreur de cap en degrés (positif = droite)"""
    if not math.isfinite(degrees) or abs(degrees) <= 15:
        return 12
    if abs(degrees) >= 165:
        return 6

    if degrees > 0:
        hour = _round_half_away(degrees / 30.0)
    else:
        hour = 12 + _round_half_away(degrees / 30.0)

    if hour <= 0 or hour > 12:
        return 12
    return hour


def alignment_quality_for(degrees: float) -> AlignmentQuality:
    absolute = abs(degrees)
    if absolute < 15.0:
        return AlignmentQuality.EXCELLENT
    if absolute < 30.0:
        return AlignmentQuality.GOOD
    if absolute < 60.0:
        return AlignmentQuality.FAIR
    if absolute < 120.0:
        return AlignmentQuality.POOR
    return AlignmentQuality.VERY_POOR


@dataclass(frozen=True)
class NavigationProgress:
    """Progression à un instant donné (valeurs toujours finies)"""
    current_waypoint_index: int
    distance_to_next_waypoint: float
    total_distance_remaining: float
    estimated_time_remaining: float
    current_heading: float
    target_heading: float
    heading_error: float  # radians, positif = tourner à droite
    total_path_distance: float

    @property
    def percent_complete(self) -> float:
        """Remplissage 0.0…1.0 de la barre de progression"""
        if not self.total_path_distance > 0:
            return 0.0
        completed = max(0.0, self.total_path_distance - self.total_distance_remaining)
        return min(1.0, completed / self.total_path_distance)

    @property
    def heading_error_degrees(self) -> float:
        return math.degrees(self.heading_error)

    @property
    def degrees_to_turn(self) -> int:
        return int(abs(self.heading_error_degrees))

    @property
    def turn_direction(self) -> str:
        return 'right' if self.heading_error > 0 else 'left'

    @property
    def is_aligned(self) -> bool:
        return abs(self.heading_error_degrees) < CONFIG.PROGRESS_SETTINGS['aligned_degrees']

    @property
    def alignment_quality(self) -> AlignmentQuality:
        return alignment_quality_for(self.heading_error_degrees)

    @property
    def clock_position(self) -> int:
        return clock_position_for(self.heading_error_degrees)

    @property
    def clock_instruction_text(self) -> str:
        degrees = abs(self.heading_error_degrees)
        if degrees <= 5:
            return "12 o'clock - Keep going straight"
        if degrees <= 15:
            return f"Slight turn to your {self.turn_direction}"
        if degrees >= 165:
            return "Turn around - behind you"
        return f"Turn to your {self.clock_position} o'clock"

    @property
    def degree_helper_text(self) -> str:
        degrees = int(self.heading_error_degrees)
        if degrees == 0:
            return "(0°)"
        if degrees > 0:
            return f"({degrees}° right)"
        return f"({-degrees}° left)"

    @property
    def arrow_color(self) -> str:
        degrees = abs(self.heading_error_degrees)
        if degrees <= 30:
            return 'green'
        if degrees <= 75:
            return 'yellow'
        if degrees <= 135:
            return 'orange'
        return 'red'

    @property
    def alignment_description(self) -> str:
        degrees = self.degrees_to_turn
        if degrees < 15:
            return "Aligned"
        if degrees < 30:
            return "Slight turn needed"
        if degrees < 75:
            return "Minor turn needed"
        if degrees < 135:
            return "Major turn needed"
        return "Turn around"

    def to_dict(self) -> Dict:
        return {
            'currentWaypointIndex': self.current_waypoint_index,
            'distanceToNextWaypoint': self.distance_to_next_waypoint,
            'totalDistanceRemaining': self.total_distance_remaining,
            'estimatedTimeRemaining': self.estimated_time_remaining,
            'currentHeading': self.current_heading,
            'targetHeading': self.target_heading,
            'headingError': self.heading_error,
            'headingErrorDegrees': self.heading_error_degrees,
            'percentComplete': self.percent_complete,
            'clockPosition': self.clock_position,
            'alignmentQuality': self.alignment_quality.value,
            'isAligned': self.is_aligned,
            'instruction': self.clock_instruction_text,
        }
