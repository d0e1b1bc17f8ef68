"""
Fixtures communes: petite carte Kitchen / Hall reliée par une porte
"""

import copy

import pytest

from guidelight.app import create_app
from guidelight.models import IndoorMap


MAP_DATA = {
    'id': 'map-home',
    'mapName': 'Home',
    'rooms': [
        {'id': 'kitchen', 'name': 'Kitchen', 'type': 'kitchen', 'floorSurface': 'tile'},
        {'id': 'hall', 'name': 'Hall', 'type': 'hallway'},
        {'id': 'closet', 'name': 'Closet', 'type': 'storage'},
    ],
    'beacons': [
        {'id': 'fridge', 'name': 'Fridge', 'roomId': 'kitchen',
         'coordinates': {'x': 0.0, 'y': 0.0, 'z': 0.0}, 'category': 'appliance'},
        {'id': 'stove', 'name': 'Stove', 'roomId': 'kitchen',
         'coordinates': {'x': 2.0, 'y': 0.0, 'z': 0.0}, 'category': 'appliance'},
        {'id': 'coat-rack', 'name': 'Coat Rack', 'roomId': 'hall',
         'coordinates': {'x': 0.0, 'y': 0.0, 'z': 10.0}, 'category': 'furniture'},
        {'id': 'stairs', 'name': 'Stairs', 'roomId': 'hall',
         'coordinates': {'x': 2.0, 'y': 0.0, 'z': 10.0}, 'category': 'destination'},
    ],
    'doorways': [
        {
            'id': 'kitchen-door',
            'name': 'Kitchen Door',
            'position': {'x': 0.0, 'y': 0.0, 'z': 5.0},
            'width': 0.9,
            'doorType': 'hinged_left',
            'connectsRooms': {'roomA': 'kitchen', 'roomB': 'hall'},
            'doorActions': {'fromRoomA': 'push', 'fromRoomB': 'pull'},
        },
    ],
    'waypoints': [
        {'id': 'island', 'name': 'Island', 'roomId': 'kitchen',
         'coordinates': {'x': 1.0, 'y': 0.0, 'z': 0.5},
         'connected_beacons': ['fridge', 'stove']},
        {'id': 'hall-center', 'name': 'Hall Center', 'roomId': 'hall',
         'coordinates': {'x': 0.0, 'y': 0.0, 'z': 7.5},
         'connected_beacons': ['coat-rack', 'stairs']},
    ],
}


@pytest.fixture
def map_data():
    return copy.deepcopy(MAP_DATA)


@pytest.fixture
def home_map(map_data):
    return IndoorMap.from_dict(map_data)


@pytest.fixture
def client():
    app = create_app({'TESTING': True})
    with app.test_client() as test_client:
        yield test_client
