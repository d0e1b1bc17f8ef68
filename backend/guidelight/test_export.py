"""
Tests de l'export d'itinéraire
"""

import json
import math

import pytest

from guidelight.errors import MapFormatError
from guidelight.models import Vec3
from guidelight.services import PathPlanner, export_debug_path, export_path, load_exported_path


@pytest.fixture
def cross_room_path(home_map):
    return PathPlanner(home_map).plan(Vec3(0.0, 0.0, 0.1), 'coat-rack').path


def test_export_format(cross_room_path):
    record = export_path(cross_room_path)

    assert record['totalSteps'] == 4
    assert record['startNode'] == 'Start Position'
    assert record['endNode'] == 'Coat Rack'
    assert record['roomsTraversed'] == ['kitchen', 'hall']
    assert [node['step'] for node in record['path']] == [1, 2, 3, 4]
    assert [node['nodeType'] for node in record['path']] == ['start', 'doorway', 'intermediate', 'destination']

    door = record['path'][1]
    assert door['doorwayId'] == 'kitchen-door'
    assert door['roomId'] == 'kitchen'
    assert door['audioInstruction'] == 'Left-hinged door, push to enter Hall'
    assert math.isclose(door['distanceToNext'], 2.5)
    assert 'distanceToNext' not in record['path'][-1]

    # sérialisable tel quel
    json.dumps(record)


def test_debug_export_adds_door_rooms(cross_room_path, home_map):
    record = export_debug_path(cross_room_path, home_map)
    door = record['path'][1]

    assert door['from_room_id'] == 'kitchen'
    assert door['to_room_id'] == 'hall'
    assert 'from_room_id' not in record['path'][0]


def test_load_exported_path(cross_room_path):
    loaded = load_exported_path(export_path(cross_room_path))

    assert [w.name for w in loaded.waypoints] == [w.name for w in cross_room_path.waypoints]
    assert loaded.rooms_traversed == ('kitchen', 'hall')
    assert math.isclose(loaded.total_distance, cross_room_path.total_distance)


def test_load_invalid_export():
    with pytest.raises(MapFormatError):
        load_exported_path({'path': [{'step': 1, 'nodeName': 'Start'}]})
