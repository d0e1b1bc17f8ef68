"""
Tests du suivi de progression et du guidage en position d'horloge
"""

import math

import pytest

from guidelight.config import CONFIG
from guidelight.geometry import bearing, normalize_angle, point_to_segment_distance, relative_bearing
from guidelight.models import (
    AlignmentQuality, NavigationPath, NavigationProgress, NavigationWaypoint, Vec3,
    WaypointType, clock_position_for
)
from guidelight.services import ProgressTracker


@pytest.fixture
def straight_path():
    waypoints = (
        NavigationWaypoint(Vec3(0.0, 0.0, 0.0), WaypointType.START, "Start"),
        NavigationWaypoint(Vec3(0.0, 0.0, 5.0), WaypointType.DOORWAY, "Front Door"),
        NavigationWaypoint(Vec3(0.0, 0.0, 10.0), WaypointType.DESTINATION, "Sofa"),
    )
    return NavigationPath(waypoints=waypoints, total_distance=10.0, estimated_time=10.0 / 1.2)


def _progress(error_degrees):
    return NavigationProgress(
        current_waypoint_index=0,
        distance_to_next_waypoint=1.0,
        total_distance_remaining=1.0,
        estimated_time_remaining=1.0,
        current_heading=0.0,
        target_heading=math.radians(error_degrees),
        heading_error=math.radians(error_degrees),
        total_path_distance=2.0,
    )


@pytest.mark.parametrize('degrees, hour', [
    (0, 12), (10, 12), (-15, 12), (30, 1), (-30, 11), (75, 3),
    (90, 3), (-90, 9), (135, 5), (180, 6), (-170, 6), (float('nan'), 12),
])
def test_clock_position(degrees, hour):
    assert clock_position_for(degrees) == hour


def test_heading_sign_convention():
    origin = Vec3(0.0, 0.0, 0.0)
    assert math.isclose(bearing(origin, Vec3(1.0, 0.0, 0.0)), math.pi / 2)
    # cap vers +Z, cible à +X : tourner à droite
    assert relative_bearing(origin, Vec3(1.0, 0.0, 0.0), 0.0) > 0
    assert math.isclose(normalize_angle(-math.pi), math.pi)


def test_point_to_segment_distance_clamps_to_ends():
    start, end = Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, 4.0)
    assert math.isclose(point_to_segment_distance(Vec3(1.0, 0.0, 2.0), start, end), 1.0)
    assert math.isclose(point_to_segment_distance(Vec3(0.0, 0.0, 7.0), start, end), 3.0)


def test_update_facing_next_waypoint(straight_path):
    progress = ProgressTracker().update(straight_path, 1, Vec3(0.0, 1.6, 2.0), 0.0)

    assert progress.current_waypoint_index == 1
    assert math.isclose(progress.distance_to_next_waypoint, 3.0)
    assert math.isclose(progress.total_distance_remaining, 8.0)
    assert math.isclose(progress.estimated_time_remaining, 8.0 / 1.2)
    assert progress.heading_error == 0.0
    assert progress.clock_position == 12
    assert progress.is_aligned
    assert progress.clock_instruction_text == "12 o'clock - Keep going straight"
    assert math.isclose(progress.percent_complete, 0.2)


def test_update_turn_right(straight_path):
    # cible droit devant sur +Z, utilisateur tourné vers -X
    progress = ProgressTracker().update(straight_path, 1, Vec3(0.0, 0.0, 2.0), -math.pi / 2)

    assert math.isclose(progress.heading_error_degrees, 90.0)
    assert progress.turn_direction == 'right'
    assert progress.clock_position == 3
    assert progress.clock_instruction_text == "Turn to your 3 o'clock"
    assert progress.degree_helper_text == "(90° right)"
    assert progress.arrow_color == 'orange'


def test_update_clamps_index(straight_path):
    tracker = ProgressTracker()
    high = tracker.update(straight_path, 42, Vec3(0.0, 0.0, 9.0), 0.0)
    low = tracker.update(straight_path, -3, Vec3(0.0, 0.0, 0.0), 0.0)

    assert high.current_waypoint_index == 2
    assert math.isclose(high.total_distance_remaining, 1.0)
    assert low.current_waypoint_index == 0
    assert math.isclose(low.total_distance_remaining, 10.0)


def test_update_with_non_finite_input(straight_path):
    progress = ProgressTracker().update(
        straight_path, 1, Vec3(float('nan'), 0.0, 0.0), float('inf')
    )
    values = progress.to_dict()
    assert all(
        math.isfinite(v) for v in values.values()
        if isinstance(v, float)
    )
    assert progress.distance_to_next_waypoint == 0.0


def test_update_on_empty_path():
    empty = NavigationPath(waypoints=(), total_distance=0.0, estimated_time=0.0)
    progress = ProgressTracker().update(empty, 0, Vec3(0.0, 0.0, 0.0), 0.0)
    assert progress.total_distance_remaining == 0.0
    assert progress.percent_complete == 0.0


def test_alignment_quality():
    assert _progress(5).alignment_quality is AlignmentQuality.EXCELLENT
    assert _progress(-20).alignment_quality is AlignmentQuality.GOOD
    assert _progress(-20).turn_direction == 'left'
    assert _progress(170).alignment_quality is AlignmentQuality.VERY_POOR
    assert _progress(170).clock_instruction_text == "Turn around - behind you"


def test_arrival_and_off_route(straight_path):
    tracker = ProgressTracker()
    door = straight_path.waypoints[1]
    assert tracker.has_arrived(Vec3(0.2, 0.0, 5.2), door)
    assert not tracker.has_arrived(Vec3(0.0, 0.0, 4.0), door)
    assert tracker.should_recalculate(Vec3(0.0, 0.0, 2.5), door)
    assert not tracker.should_recalculate(Vec3(0.0, 0.0, 3.5), door)


def test_approach_announcement(straight_path):
    tracker = ProgressTracker()
    assert tracker.approach_announcement(straight_path, 1, 1.5) == "Approaching Front Door in 2 steps."
    assert tracker.approach_announcement(straight_path, 1, 3.0) is None
    assert tracker.approach_announcement(straight_path, 1, 0.5) is None
    assert tracker.meters_to_steps(0.1) == 1


def test_arrival_messages(straight_path):
    tracker = ProgressTracker()
    assert tracker.arrival_message(straight_path, 0) == "Proceed to Front Door"
    assert tracker.arrival_message(straight_path, 1) == "Arrived at Front Door, now proceed to Sofa"
    assert tracker.arrival_message(straight_path, 2) == "Arrived"


@pytest.mark.parametrize('degrees, description', [
    (10, "Aligned"), (-20, "Slight turn needed"), (45, "Minor turn needed"),
    (-100, "Major turn needed"), (150, "Turn around"),
])
def test_alignment_description(degrees, description):
    assert _progress(degrees).alignment_description == description


def test_aligned_threshold_follows_settings(monkeypatch):
    assert _progress(12).is_aligned
    assert not _progress(20).is_aligned

    monkeypatch.setitem(CONFIG.PROGRESS_SETTINGS, 'aligned_degrees', 10.0)
    assert not _progress(12).is_aligned
    assert not _progress(12).to_dict()['isAligned']
