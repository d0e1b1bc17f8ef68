"""
Tests du chargement de carte et de l'index spatial
"""

import math

import pytest

from guidelight.errors import MapFormatError
from guidelight.models import (
    DoorAction, DoorActions, FloorSurface, IndoorMap, RoomType, SpatialGraphIndex, Vec3
)


def test_map_loads_from_json(home_map):
    assert home_map.name == 'Home'
    assert home_map.room('kitchen').type is RoomType.KITCHEN
    assert home_map.room('kitchen').floor_surface is FloorSurface.TILE
    assert home_map.beacon_named('fridge').id == 'fridge'
    assert home_map.waypoints[0].connected_beacons == ('fridge', 'stove')

    stats = home_map.stats
    assert stats.room_count == 3
    assert stats.beacon_count == 4
    assert stats.doorway_count == 1
    assert stats.waypoint_count == 2
    assert stats.accessible_beacons == 4
    assert stats.obstacle_beacons == 0


def test_doorway_action_depends_on_direction(home_map):
    door = home_map.doorway('kitchen-door')
    assert door.action('kitchen') is DoorAction.PUSH
    assert door.action('hall') is DoorAction.PULL
    assert door.action('garage') is DoorAction.WALK_THROUGH


def test_invalid_map_raises_format_error(map_data):
    del map_data['doorways'][0]['width']
    with pytest.raises(MapFormatError):
        IndoorMap.from_dict(map_data)

    with pytest.raises(MapFormatError):
        IndoorMap.from_dict(['not', 'a', 'map'])


def test_adjacency_is_symmetric(home_map):
    index = SpatialGraphIndex(home_map)
    assert [room for _, room in index.neighbors('kitchen')] == ['hall']
    assert [room for _, room in index.neighbors('hall')] == ['kitchen']
    assert index.neighbors('closet') == []


def test_inaccessible_doorway_is_not_an_edge(map_data):
    map_data['doorways'][0]['isAccessible'] = False
    index = SpatialGraphIndex(IndoorMap.from_dict(map_data))
    assert index.adjacency == {}


def test_room_containing_uses_nearest_beacon(home_map):
    index = SpatialGraphIndex(home_map)
    assert index.room_containing(Vec3(0.1, 0.0, 0.2)) == 'kitchen'
    # la hauteur est ignorée
    assert index.room_containing(Vec3(1.5, 30.0, 9.0)) == 'hall'


def test_room_containing_empty_map():
    index = SpatialGraphIndex(IndoorMap(name='Empty'))
    assert index.room_containing(Vec3(0.0, 0.0, 0.0)) is None
    assert index.nearest_beacon(Vec3(0.0, 0.0, 0.0)) is None


def test_estimate_distance_between_centroids(home_map):
    index = SpatialGraphIndex(home_map)
    assert index.room_centroid('kitchen') == (1.0, 0.0)
    assert math.isclose(index.estimate_distance('kitchen', 'hall'), 10.0)


def test_estimate_distance_fallback_for_room_without_beacons(home_map):
    index = SpatialGraphIndex(home_map, heuristic_fallback=10.0)
    assert index.room_centroid('closet') is None
    assert index.estimate_distance('kitchen', 'closet') == 10.0


def test_nearest_beacon_in_room(home_map):
    index = SpatialGraphIndex(home_map)
    beacon = index.nearest_beacon_in_room(Vec3(1.8, 0.0, 0.0), 'kitchen')
    assert beacon.id == 'stove'
    assert index.nearest_beacon_in_room(Vec3(0.0, 0.0, 0.0), 'closet') is None
    assert [w.id for w in index.waypoints_in_room('hall')] == ['hall-center']


def test_room_and_beacon_helpers(home_map):
    assert home_map.room('kitchen').floor_surface.echo_level == 'high echo'
    assert home_map.room('hall').floor_surface.echo_level == 'low echo'
    assert home_map.beacon('stairs').floor_position == (2.0, 10.0)
    assert [d.id for d in home_map.doorways_connecting('hall')] == ['kitchen-door']
    assert home_map.doorways_connecting('closet') == []


def test_door_action_constructors():
    pushed_from_a = DoorActions.hinged_door(push_from_room_a=True)
    assert (pushed_from_a.from_room_a, pushed_from_a.from_room_b) == (DoorAction.PUSH, DoorAction.PULL)

    pulled_from_a = DoorActions.hinged_door(push_from_room_a=False)
    assert (pulled_from_a.from_room_a, pulled_from_a.from_room_b) == (DoorAction.PULL, DoorAction.PUSH)

    sliding = DoorActions.symmetrical(DoorAction.SLIDE)
    assert sliding.from_room_a is sliding.from_room_b is DoorAction.SLIDE
