"""
Session de navigation côté hôte

Machine d'état: not_started → calibrating → selecting_destination →
computing_path → navigating(index, total) → arrived, avec paused ↔ navigating
et failed(raison) depuis n'importe quel état. Le suivi de progression n'est
appelé qu'en état navigating.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from .errors import InvalidTransitionError, NavigationInactiveError
from .models import (
    BeaconMeasurement, CalibrationData, CalibrationState, CalibrationStep,
    IndoorMap, NavigationPath, NavigationPhase, NavigationProgress,
    NavigationState, Vec3, WaypointType
)
from .models.navigation_state import NOT_STARTED
from .services import PathPlanner, PlanningResult, ProgressTracker, score_calibration

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUpdate:
    """Résultat d'un tick de navigation"""
    progress: NavigationProgress
    arrival_message: Optional[str] = None
    approach_announcement: Optional[str] = None
    off_route: bool = False


class NavigationSession:
    """Orchestration calibration → itinéraire → guidage pour une carte"""

    def __init__(self, indoor_map: IndoorMap, planner: PathPlanner = None, tracker: ProgressTracker = None):
        self.map = indoor_map
        self.planner = planner or PathPlanner(indoor_map)
        self.tracker = tracker or ProgressTracker()
        self.state: NavigationState = NOT_STARTED
        self.calibration_state = CalibrationState(CalibrationStep.WAITING_FOR_AR)
        self.calibration: Optional[CalibrationData] = None
        self.path: Optional[NavigationPath] = None
        self.waypoint_index = 0
        self._measurements: List[BeaconMeasurement] = []
        self._expected_measurements = 0
        self._approach_spoken: Set[int] = set()
        self._last_distance: Optional[float] = None

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _transition(self, state: NavigationState):
        if not self.state.can_transition_to(state.phase):
            raise InvalidTransitionError(self.state, state)
        logger.debug(f"   Session: {self.state} → {state}")
        self.state = state

    def fail(self, reason: str):
        logger.warning(f"❌ Navigation en échec: {reason}")
        self._transition(NavigationState.failed(reason))

    def cancel(self):
        self._transition(NOT_STARTED)
        self.path = None
        self.waypoint_index = 0
        self._last_distance = None
        logger.info("❌ Navigation annulée")

    def pause(self):
        self._transition(NavigationState(NavigationPhase.PAUSED))

    def resume(self):
        if self.path is None:
            raise InvalidTransitionError(self.state, NavigationPhase.NAVIGATING)
        self._transition(NavigationState.navigating(self.waypoint_index, self.path.waypoint_count))

    # ------------------------------------------------------------------
    # Calibration
    # ------------------------------------------------------------------

    def start_calibration(self, beacon_count: int):
        self._transition(NavigationState(NavigationPhase.CALIBRATING))
        self._measurements = []
        self._expected_measurements = beacon_count
        self.calibration_state = CalibrationState.measuring(0, beacon_count)

    def record_measurement(self, measurement: BeaconMeasurement):
        if self.state.phase is not NavigationPhase.CALIBRATING:
            raise InvalidTransitionError(self.state, 'record_measurement')
        self._measurements.append(measurement)
        index = min(len(self._measurements), max(self._expected_measurements - 1, 0))
        self.calibration_state = CalibrationState.measuring(index, self._expected_measurements)

    def finish_calibration(self, user_position: Tuple[float, float], heading: float) -> CalibrationData:
        """Note la calibration; une note 'poor' n'empêche pas de continuer"""
        if self.state.phase is not NavigationPhase.CALIBRATING:
            raise InvalidTransitionError(self.state, NavigationPhase.SELECTING_DESTINATION)
        self.calibration = score_calibration(self._measurements, user_position, heading)
        self.calibration_state = CalibrationState.completed(self.calibration)
        if not self.calibration.is_trusted:
            logger.warning("⚠️  Calibration peu fiable, itinéraires à prendre avec prudence")
        self._transition(NavigationState(NavigationPhase.SELECTING_DESTINATION))
        return self.calibration

    @property
    def calibration_trusted(self) -> bool:
        return self.calibration is not None and self.calibration.is_trusted

    # ------------------------------------------------------------------
    # Itinéraire et guidage
    # ------------------------------------------------------------------

    def select_destination(self, start: Vec3, destination_id: str) -> PlanningResult:
        if self.state.phase in (NavigationPhase.NAVIGATING, NavigationPhase.PAUSED,
                                NavigationPhase.ARRIVED, NavigationPhase.FAILED):
            self._transition(NavigationState(NavigationPhase.SELECTING_DESTINATION))
        self._transition(NavigationState(NavigationPhase.COMPUTING_PATH))

        result = self.planner.plan(start, destination_id)
        if not result.ok:
            self.fail(result.message or "Could not find path to destination")
            return result

        self.path = result.path
        self.waypoint_index = 0
        self._approach_spoken = set()
        self._last_distance = None
        self._transition(NavigationState.navigating(0, self.path.waypoint_count))
        return result

    @property
    def route_announcement(self) -> Optional[str]:
        """Phrase d'introduction: destination finale et première étape"""
        if self.path is None:
            return None
        waypoints = self.path.waypoints
        final_name = next(
            (w.name for w in reversed(waypoints) if w.type is WaypointType.DESTINATION),
            "destination"
        )
        if len(waypoints) > 1:
            nxt = waypoints[1]
            if nxt.name:
                next_name = nxt.name
            elif nxt.type is WaypointType.DOORWAY:
                next_name = "the doorway"
            elif nxt.type is WaypointType.INTERMEDIATE:
                next_name = "the next point"
            else:
                next_name = "the next waypoint"
        else:
            next_name = "next waypoint"
        return f"Route to {final_name}. To begin, proceed to {next_name}."

    def update(self, live_position: Vec3, live_heading: float) -> SessionUpdate:
        """Un tick de navigation: progression, annonces, avance du waypoint"""
        if not self.state.is_active or self.path is None:
            raise NavigationInactiveError(f"Session inactive: {self.state}")

        path = self.path
        index = self.waypoint_index
        progress = self.tracker.update(path, index, live_position, live_heading)
        distance = progress.distance_to_next_waypoint

        approach = None
        if index not in self._approach_spoken:
            approach = self.tracker.approach_announcement(path, index, distance)
            if approach is not None:
                self._approach_spoken.add(index)

        off_route = (
            self._last_distance is not None
            and self._last_distance < distance
            and self.tracker.should_recalculate(live_position, path.waypoints[index])
        )
        if off_route:
            logger.warning("⚠️  L'utilisateur s'écarte de l'itinéraire")

        arrival = None
        if self.tracker.has_arrived(live_position, path.waypoints[index]):
            arrival = self.tracker.arrival_message(path, index)
            logger.info(f"✅ Waypoint atteint: {path.waypoints[index].name}")
            self.waypoint_index += 1
            self._last_distance = None
            if self.waypoint_index >= path.waypoint_count:
                self._transition(NavigationState(NavigationPhase.ARRIVED))
                logger.info("🏁 Destination finale atteinte")
            else:
                self._transition(NavigationState.navigating(self.waypoint_index, path.waypoint_count))
        else:
            self._last_distance = distance

        return SessionUpdate(
            progress=progress,
            arrival_message=arrival,
            approach_announcement=approach,
            off_route=off_route,
        )
