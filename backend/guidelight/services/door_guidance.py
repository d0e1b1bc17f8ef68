"""
Consignes vocales de franchissement de porte
"""

from ..models import DoorAction, Doorway, DoorwayType, IndoorMap

_HINGE_TEXT = {
    DoorwayType.HINGED_LEFT: "Left-hinged",
    DoorwayType.HINGED_RIGHT: "Right-hinged",
}


def doorway_instruction(doorway: Doorway, from_room_id: str, to_room_id: str, indoor_map: IndoorMap) -> str:
    """Phrase courte : type de porte + geste requis + salle d'arrivée"""
    target = indoor_map.room_name(to_room_id)
    action = doorway.action(from_room_id)
    hinge = _HINGE_TEXT.get(doorway.door_type)

    if action in (DoorAction.PUSH, DoorAction.PULL):
        if hinge is None:
            verb = "Push" if action is DoorAction.PUSH else "Pull"
            return f"{verb} to enter {target}"
        verb = "push" if action is DoorAction.PUSH else "pull"
        return f"{hinge} door, {verb} to enter {target}"
    if action is DoorAction.SLIDE:
        return f"Slide door to enter {target}"
    if action is DoorAction.AUTOMATIC:
        return f"Automatic door, walk through to {target}"
    return f"Walk through to {target}"
