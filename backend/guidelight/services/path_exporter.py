"""
Service d'export des itinéraires

Format stable (journalisation, débogage, scripts vocaux):

    {
        "totalSteps": int,
        "totalDistance": float,          # mètres
        "estimatedTime": float,          # secondes
        "startNode": str,
        "endNode": str,
        "roomsTraversed": [str],
        "path": [
            {
                "step": int,             # à partir de 1
                "nodeId": str,
                "nodeName": str,
                "nodeType": "start" | "intermediate" | "doorway" | "destination",
                "position": {"x": float, "y": float, "z": float},
                "roomId": str,           # si connu
                "doorwayId": str,        # portes uniquement
                "audioInstruction": str, # si présent
                "distanceToNext": float  # absent pour le dernier nœud
            }
        ]
    }
"""

import logging
from typing import Dict, List

from ..errors import MapFormatError
from ..models import IndoorMap, NavigationPath, NavigationWaypoint, Vec3, WaypointType

logger = logging.getLogger(__name__)


def export_path(path: NavigationPath) -> Dict:
    """Description ordonnée des étapes de l'itinéraire"""
    nodes: List[Dict] = []

    for index, waypoint in enumerate(path.waypoints):
        node = {
            'step': index + 1,
            'nodeId': waypoint.id,
            'nodeName': waypoint.name,
            'nodeType': waypoint.type.value,
            'position': waypoint.position.to_dict(),
        }
        if waypoint.room_id is not None:
            node['roomId'] = waypoint.room_id
        if waypoint.doorway_id is not None:
            node['doorwayId'] = waypoint.doorway_id
        if waypoint.audio_instruction:
            node['audioInstruction'] = waypoint.audio_instruction

        to_next = path.segment_distance(index)
        if to_next is not None:
            node['distanceToNext'] = to_next

        nodes.append(node)

    return {
        'totalSteps': len(path.waypoints),
        'totalDistance': path.total_distance,
        'estimatedTime': path.estimated_time,
        'startNode': path.waypoints[0].name if path.waypoints else '',
        'endNode': path.waypoints[-1].name if path.waypoints else '',
        'roomsTraversed': list(path.rooms_traversed),
        'path': nodes,
    }


def export_debug_path(path: NavigationPath, indoor_map: IndoorMap) -> Dict:
    """Export enrichi: salles de départ/arrivée déduites pour chaque porte"""
    record = export_path(path)

    for index, (node, waypoint) in enumerate(zip(record['path'], path.waypoints)):
        if waypoint.type is not WaypointType.DOORWAY or waypoint.doorway_id is None:
            continue

        from_room = path.waypoints[index - 1].room_id if index > 0 else None
        to_room = path.waypoints[index + 1].room_id if index < len(path.waypoints) - 1 else None

        doorway = indoor_map.doorway(waypoint.doorway_id)
        if doorway is not None and (from_room is None or to_room is None):
            rooms = doorway.connects_rooms
            if from_room is None and to_room is not None:
                from_room = rooms.other_room(to_room) or rooms.room_a
            elif to_room is None and from_room is not None:
                to_room = rooms.other_room(from_room) or rooms.room_b
            elif from_room is None and to_room is None:
                from_room, to_room = rooms.room_a, rooms.room_b

        if from_room is not None:
            node['from_room_id'] = from_room
        if to_room is not None:
            node['to_room_id'] = to_room

    return record


def load_exported_path(record: Dict) -> NavigationPath:
    """
    Reconstruit un NavigationPath depuis le format d'export

    Raises:
        MapFormatError: enregistrement invalide
    """
    try:
        waypoints = tuple(
            NavigationWaypoint(
                position=Vec3.from_dict(node['position']),
                type=WaypointType(node['nodeType']),
                name=node['nodeName'],
                room_id=node.get('roomId'),
                doorway_id=node.get('doorwayId'),
                audio_instruction=node.get('audioInstruction'),
                id=node.get('nodeId') or f"step-{node['step']}",
            )
            for node in sorted(record['path'], key=lambda n: n['step'])
        )
        total = float(record.get('totalDistance', 0.0))
        return NavigationPath(
            waypoints=waypoints,
            total_distance=total,
            estimated_time=float(record.get('estimatedTime', 0.0)),
            rooms_traversed=tuple(record.get('roomsTraversed', [])),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise MapFormatError(f"Itinéraire exporté invalide: {e!r}") from e
