"""
États d'une session de navigation
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class NavigationPhase(Enum):
    NOT_STARTED = 'not_started'
    CALIBRATING = 'calibrating'
    SELECTING_DESTINATION = 'selecting_destination'
    COMPUTING_PATH = 'computing_path'
    NAVIGATING = 'navigating'
    ARRIVED = 'arrived'
    PAUSED = 'paused'
    FAILED = 'failed'


# Transitions autorisées (FAILED et NOT_STARTED, annulation, sont atteignables depuis tout état)
ALLOWED_TRANSITIONS = {
    NavigationPhase.NOT_STARTED: {NavigationPhase.CALIBRATING},
    NavigationPhase.CALIBRATING: {NavigationPhase.SELECTING_DESTINATION},
    NavigationPhase.SELECTING_DESTINATION: {NavigationPhase.COMPUTING_PATH},
    NavigationPhase.COMPUTING_PATH: {
        NavigationPhase.NAVIGATING,
        NavigationPhase.SELECTING_DESTINATION,
    },
    NavigationPhase.NAVIGATING: {
        NavigationPhase.NAVIGATING,
        NavigationPhase.PAUSED,
        NavigationPhase.ARRIVED,
        NavigationPhase.SELECTING_DESTINATION,
    },
    NavigationPhase.PAUSED: {NavigationPhase.NAVIGATING, NavigationPhase.SELECTING_DESTINATION},
    NavigationPhase.ARRIVED: {NavigationPhase.SELECTING_DESTINATION},
    NavigationPhase.FAILED: {NavigationPhase.NOT_STARTED, NavigationPhase.SELECTING_DESTINATION},
}


@dataclass(frozen=True)
class NavigationState:
    phase: NavigationPhase
    current_waypoint: int = 0
    total_waypoints: int = 0
    reason: Optional[str] = None

    @classmethod
    def navigating(cls, current_waypoint: int, total_waypoints: int) -> 'NavigationState':
        return cls(NavigationPhase.NAVIGATING, current_waypoint, total_waypoints)

    @classmethod
    def failed(cls, reason: str) -> 'NavigationState':
        return cls(NavigationPhase.FAILED, reason=reason)

    @property
    def is_active(self) -> bool:
        return self.phase is NavigationPhase.NAVIGATING

    def can_transition_to(self, phase: NavigationPhase) -> bool:
        if phase in (NavigationPhase.FAILED, NavigationPhase.NOT_STARTED):
            return True
        return phase in ALLOWED_TRANSITIONS[self.phase]

    def __str__(self) -> str:
        if self.phase is NavigationPhase.NAVIGATING:
            return f"navigating({self.current_waypoint}/{self.total_waypoints})"
        if self.phase is NavigationPhase.FAILED:
            return f"failed({self.reason})"
        return self.phase.value


NOT_STARTED = NavigationState(NavigationPhase.NOT_STARTED)
