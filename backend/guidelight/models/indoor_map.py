"""
Carte intérieure : salles, balises, portes, waypoints

Structure lue depuis le format JSON des cartes GuideLight (mapName, rooms,
beacons, doorways, waypoints). La carte est en lecture seule pour tout le
moteur de navigation.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple
import uuid

from .position import Vec3
from ..errors import MapFormatError


class RoomType(Enum):
    GENERAL = 'general'
    KITCHEN = 'kitchen'
    LIVING = 'living'
    BEDROOM = 'bedroom'
    BATHROOM = 'bathroom'
    HALLWAY = 'hallway'
    OFFICE = 'office'
    LAUNDRY = 'laundry'
    GARAGE = 'garage'
    LOBBY = 'lobby'
    STAIRWELL = 'stairwell'
    ELEVATOR = 'elevator'
    STORAGE = 'storage'
    CLASSROOM = 'classroom'
    LAB = 'lab'
    CAFETERIA = 'cafeteria'
    AUDITORIUM = 'auditorium'
    ENTRANCE = 'entrance'


class FloorSurface(Enum):
    CARPET = 'carpet'
    HARDWOOD = 'hardwood'
    TILE = 'tile'
    MARBLE = 'marble'
    CONCRETE = 'concrete'
    LINOLEUM = 'linoleum'

    @property
    def echo_level(self) -> str:
        """Indice sonore perçu en marchant sur ce sol"""
        if self in (FloorSurface.TILE, FloorSurface.MARBLE, FloorSurface.CONCRETE):
            return 'high echo'
        if self is FloorSurface.HARDWOOD:
            return 'medium echo'
        return 'low echo'


class BeaconCategory(Enum):
    DESTINATION = 'destination'
    LANDMARK = 'landmark'
    FURNITURE = 'furniture'
    APPLIANCE = 'appliance'
    FIXTURE = 'fixture'


class ObstacleType(Enum):
    FURNITURE = 'furniture'
    EQUIPMENT = 'equipment'
    FIXTURE = 'fixture'
    TEMPORARY = 'temporary'


class DoorAction(Enum):
    """Geste physique pour franchir une porte"""
    PUSH = 'push'
    PULL = 'pull'
    SLIDE = 'slide'
    AUTOMATIC = 'automatic'
    WALK_THROUGH = 'walk_through'


class DoorwayType(Enum):
    HINGED_LEFT = 'hinged_left'
    HINGED_RIGHT = 'hinged_right'
    SWINGING_BOTH = 'swinging_both'
    SLIDING = 'sliding'
    AUTOMATIC = 'automatic'
    OPEN_DOORWAY = 'open_doorway'
    DOUBLE_DOOR = 'double_door'


class WaypointKind(Enum):
    NAVIGATION = 'navigation'
    SAFETY = 'safety'
    ACCESSIBILITY = 'accessibility'


@dataclass(frozen=True)
class Room:
    """Salle de la carte (sans géométrie de murs)"""
    id: str
    name: str
    type: RoomType = RoomType.GENERAL
    floor_surface: FloorSurface = FloorSurface.CARPET
    description: Optional[str] = None
    address: Optional[str] = None
    floor_of_building: Optional[str] = None


@dataclass(frozen=True)
class BoundingBox:
    width: float
    depth: float
    height: float


@dataclass(frozen=True)
class PhysicalProperties:
    """Emprise physique d'une balise obstacle"""
    bounding_box: BoundingBox
    avoidance_radius: float
    is_obstacle: bool = True
    can_route_around: bool = True
    obstacle_type: ObstacleType = ObstacleType.FURNITURE


@dataclass(frozen=True)
class Beacon:
    """Point d'intérêt nommé : destination et ancre de salle"""
    id: str
    name: str
    position: Vec3
    room_id: str
    category: BeaconCategory = BeaconCategory.DESTINATION
    is_accessible: bool = True
    description: Optional[str] = None
    audio_landmark: Optional[str] = None
    accessibility_notes: Optional[str] = None
    physical_properties: Optional[PhysicalProperties] = None

    @property
    def is_obstacle(self) -> bool:
        return self.physical_properties is not None and self.physical_properties.is_obstacle

    @property
    def floor_position(self) -> Tuple[float, float]:
        return (self.position.x, self.position.z)


@dataclass(frozen=True)
class ConnectedRooms:
    room_a: str
    room_b: str

    def contains(self, room_id: str) -> bool:
        return room_id == self.room_a or room_id == self.room_b

    def other_room(self, room_id: str) -> Optional[str]:
        if room_id == self.room_a:
            return self.room_b
        if room_id == self.room_b:
            return self.room_a
        return None


@dataclass(frozen=True)
class DoorActions:
    """Action requise dans chaque sens de passage"""
    from_room_a: DoorAction
    from_room_b: DoorAction

    @classmethod
    def hinged_door(cls, push_from_room_a: bool) -> 'DoorActions':
        if push_from_room_a:
            return cls(DoorAction.PUSH, DoorAction.PULL)
        return cls(DoorAction.PULL, DoorAction.PUSH)

    @classmethod
    def symmetrical(cls, action: DoorAction) -> 'DoorActions':
        return cls(action, action)


@dataclass(frozen=True)
class Doorway:
    """Porte entre deux salles, avec une action par sens"""
    id: str
    name: str
    position: Vec3
    width: float
    connects_rooms: ConnectedRooms
    door_actions: DoorActions
    door_type: DoorwayType = DoorwayType.HINGED_RIGHT
    height: float = 2.1
    is_accessible: bool = True
    description: Optional[str] = None
    audio_landmark: Optional[str] = None

    def action(self, from_room_id: str) -> DoorAction:
        """Action pour traverser depuis from_room_id (walk_through par défaut)"""
        if from_room_id == self.connects_rooms.room_a:
            return self.door_actions.from_room_a
        if from_room_id == self.connects_rooms.room_b:
            return self.door_actions.from_room_b
        return DoorAction.WALK_THROUGH


@dataclass(frozen=True)
class Waypoint:
    """Point de guidage intermédiaire, éventuellement lié à des balises"""
    id: str
    name: str
    coordinates: Vec3
    room_id: str
    waypoint_type: WaypointKind = WaypointKind.NAVIGATION
    is_accessible: bool = True
    connected_beacons: Tuple[str, ...] = ()
    description: Optional[str] = None
    audio_landmark: Optional[str] = None


@dataclass(frozen=True)
class MapStats:
    room_count: int
    beacon_count: int
    doorway_count: int
    waypoint_count: int
    accessible_beacons: int
    obstacle_beacons: int


@dataclass(frozen=True)
class IndoorMap:
    """Carte complète d'un bâtiment"""
    name: str
    rooms: Tuple[Room, ...] = ()
    beacons: Tuple[Beacon, ...] = ()
    doorways: Tuple[Doorway, ...] = ()
    waypoints: Tuple[Waypoint, ...] = ()
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    description: Optional[str] = None

    def room(self, room_id: str) -> Optional[Room]:
        return next((r for r in self.rooms if r.id == room_id), None)

    def room_name(self, room_id: str) -> str:
        """Nom lisible d'une salle, l'identifiant à défaut"""
        room = self.room(room_id)
        return room.name if room else room_id

    def beacon(self, beacon_id: str) -> Optional[Beacon]:
        return next((b for b in self.beacons if b.id == beacon_id), None)

    def beacon_named(self, name: str) -> Optional[Beacon]:
        return next((b for b in self.beacons if b.name.lower() == name.lower()), None)

    def doorway(self, doorway_id: str) -> Optional[Doorway]:
        return next((d for d in self.doorways if d.id == doorway_id), None)

    def beacons_in_room(self, room_id: str) -> List[Beacon]:
        return [b for b in self.beacons if b.room_id == room_id]

    def doorways_connecting(self, room_id: str) -> List[Doorway]:
        return [d for d in self.doorways if d.connects_rooms.contains(room_id)]

    @property
    def stats(self) -> MapStats:
        return MapStats(
            room_count=len(self.rooms),
            beacon_count=len(self.beacons),
            doorway_count=len(self.doorways),
            waypoint_count=len(self.waypoints),
            accessible_beacons=sum(1 for b in self.beacons if b.is_accessible),
            obstacle_beacons=sum(1 for b in self.beacons if b.is_obstacle),
        )

    @classmethod
    def from_dict(cls, data: Dict) -> 'IndoorMap':
        """
        Construit une carte depuis le format JSON GuideLight

        Raises:
            MapFormatError: champ obligatoire manquant ou valeur invalide
        """
        if not isinstance(data, dict):
            raise MapFormatError("La carte doit être un objet JSON")
        try:
            return cls(
                id=str(data.get('id') or uuid.uuid4().hex),
                name=data.get('mapName') or data.get('name') or 'Untitled map',
                description=data.get('description'),
                rooms=tuple(_room_from_dict(r) for r in data.get('rooms', [])),
                beacons=tuple(_beacon_from_dict(b) for b in data.get('beacons', [])),
                doorways=tuple(_doorway_from_dict(d) for d in data.get('doorways', [])),
                waypoints=tuple(_waypoint_from_dict(w) for w in data.get('waypoints', [])),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise MapFormatError(f"Carte invalide: {e!r}") from e


def _room_from_dict(data: Dict) -> Room:
    return Room(
        id=str(data['id']),
        name=data['name'],
        type=RoomType(data.get('type', 'general')),
        floor_surface=FloorSurface(data.get('floorSurface', 'carpet')),
        description=data.get('description'),
        address=data.get('address'),
        floor_of_building=data.get('floor_of_build'),
    )


def _beacon_from_dict(data: Dict) -> Beacon:
    props = data.get('physicalProperties')
    physical = None
    if props:
        box = props['boundingBox']
        physical = PhysicalProperties(
            bounding_box=BoundingBox(float(box['width']), float(box['depth']), float(box['height'])),
            avoidance_radius=float(props['avoidanceRadius']),
            is_obstacle=props.get('isObstacle', True),
            can_route_around=props.get('canRouteAround', True),
            obstacle_type=ObstacleType(props.get('obstacleType', 'furniture')),
        )

    return Beacon(
        id=str(data['id']),
        name=data['name'],
        position=Vec3.from_dict(data['coordinates']),
        room_id=str(data['roomId']),
        category=BeaconCategory(data.get('category', 'destination')),
        is_accessible=data.get('isAccessible', True),
        description=data.get('description'),
        audio_landmark=data.get('audioLandmark'),
        accessibility_notes=data.get('accessibilityNotes'),
        physical_properties=physical,
    )


def _doorway_from_dict(data: Dict) -> Doorway:
    rooms = data['connectsRooms']
    actions = data['doorActions']
    return Doorway(
        id=str(data['id']),
        name=data['name'],
        position=Vec3.from_dict(data['position']),
        width=float(data['width']),
        height=float(data.get('height', 2.1)),
        connects_rooms=ConnectedRooms(str(rooms['roomA']), str(rooms['roomB'])),
        door_type=DoorwayType(data.get('doorType', 'hinged_right')),
        door_actions=DoorActions(
            from_room_a=DoorAction(actions['fromRoomA']),
            from_room_b=DoorAction(actions['fromRoomB']),
        ),
        is_accessible=data.get('isAccessible', True),
        description=data.get('description'),
        audio_landmark=data.get('audioLandmark'),
    )


def _waypoint_from_dict(data: Dict) -> Waypoint:
    return Waypoint(
        id=str(data['id']),
        name=data['name'],
        coordinates=Vec3.from_dict(data['coordinates']),
        room_id=str(data['roomId']),
        waypoint_type=WaypointKind(data.get('waypointType', 'navigation')),
        is_accessible=data.get('isAccessible', True),
        connected_beacons=tuple(str(b) for b in data.get('connected_beacons', [])),
        description=data.get('description'),
        audio_landmark=data.get('audioLandmark'),
    )
