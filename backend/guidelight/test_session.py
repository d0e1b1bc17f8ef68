"""
Tests de la session de navigation (machine d'état)
"""

import pytest

from guidelight.errors import InvalidTransitionError, NavigationInactiveError
from guidelight.models import (
    BeaconMeasurement, CalibrationQuality, CalibrationStep, NavigationPhase, Vec3
)
from guidelight.session import NavigationSession

START = Vec3(0.0, 0.0, 0.1)


def _measure(beacon_id, confidence):
    return BeaconMeasurement(beacon_id, Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 1.0), 2.0, confidence)


@pytest.fixture
def session(home_map):
    session = NavigationSession(home_map)
    session.start_calibration(3)
    for beacon_id, confidence in (('fridge', 0.9), ('stove', 0.92), ('coat-rack', 0.88)):
        session.record_measurement(_measure(beacon_id, confidence))
    session.finish_calibration((0.0, 0.1), 0.0)
    return session


def test_calibration_flow(session):
    assert session.state.phase is NavigationPhase.SELECTING_DESTINATION
    assert session.calibration.quality_rating is CalibrationQuality.EXCELLENT
    assert session.calibration_state.step is CalibrationStep.COMPLETED
    assert session.calibration_trusted


def test_poor_calibration_still_allows_navigation(home_map):
    session = NavigationSession(home_map)
    session.start_calibration(2)
    session.record_measurement(_measure('fridge', 0.2))
    session.record_measurement(_measure('stove', 1.0))
    session.finish_calibration((0.0, 0.0), 0.0)

    assert not session.calibration_trusted
    assert session.select_destination(START, 'stove').ok


def test_select_destination_starts_at_first_waypoint(session):
    result = session.select_destination(START, 'coat-rack')

    assert result.ok
    assert session.state.phase is NavigationPhase.NAVIGATING
    assert session.state.current_waypoint == 0
    assert session.state.total_waypoints == 4
    assert str(session.state) == 'navigating(0/4)'
    assert session.route_announcement == 'Route to Coat Rack. To begin, proceed to Kitchen Door.'


def test_walk_to_destination(session):
    session.select_destination(START, 'coat-rack')

    messages = [
        session.update(position, 0.0).arrival_message
        for position in (START, Vec3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, 7.5), Vec3(0.0, 0.0, 10.0))
    ]

    assert messages == [
        'Proceed to Kitchen Door',
        'Arrived at Kitchen Door, now proceed to Hall Center',
        'Arrived at Hall Center, now proceed to Coat Rack',
        'Arrived',
    ]
    assert session.state.phase is NavigationPhase.ARRIVED
    with pytest.raises(NavigationInactiveError):
        session.update(Vec3(0.0, 0.0, 10.0), 0.0)


def test_approach_announced_once(session):
    session.select_destination(START, 'coat-rack')
    session.update(START, 0.0)

    first = session.update(Vec3(0.0, 0.0, 3.5), 0.0)
    second = session.update(Vec3(0.0, 0.0, 3.6), 0.0)

    assert first.approach_announcement == 'Approaching Kitchen Door in 2 steps.'
    assert second.approach_announcement is None
    assert first.arrival_message is None


def test_moving_away_flags_off_route(session):
    session.select_destination(START, 'coat-rack')
    session.update(START, 0.0)

    assert not session.update(Vec3(0.0, 0.0, 2.0), 0.0).off_route
    update = session.update(Vec3(0.0, 0.0, 1.0), 0.0)
    assert update.off_route
    assert update.progress.current_waypoint_index == 1


def test_pause_and_resume(session):
    session.select_destination(START, 'coat-rack')
    session.update(START, 0.0)
    session.pause()

    with pytest.raises(NavigationInactiveError):
        session.update(START, 0.0)

    session.resume()
    assert str(session.state) == 'navigating(1/4)'


def test_planning_failure_moves_to_failed(session):
    result = session.select_destination(START, 'piano')

    assert not result.ok
    assert session.state.phase is NavigationPhase.FAILED
    assert session.state.reason == result.message

    # nouvelle destination possible depuis l'échec
    assert session.select_destination(START, 'stove').ok
    assert session.state.phase is NavigationPhase.NAVIGATING


def test_cancel_returns_to_not_started(session):
    session.select_destination(START, 'coat-rack')
    session.cancel()

    assert session.state.phase is NavigationPhase.NOT_STARTED
    assert session.path is None
    assert session.route_announcement is None


def test_invalid_transitions(home_map):
    session = NavigationSession(home_map)

    with pytest.raises(InvalidTransitionError):
        session.select_destination(START, 'stove')
    with pytest.raises(InvalidTransitionError):
        session.record_measurement(_measure('fridge', 0.9))
    with pytest.raises(InvalidTransitionError):
        session.resume()
    with pytest.raises(NavigationInactiveError):
        session.update(START, 0.0)

    session.start_calibration(1)
    with pytest.raises(InvalidTransitionError):
        session.start_calibration(1)
