# =============================================================================
# core/rooms.py - Room registry
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Maps the human room names callers use ("valdi-sdg-h100") to the NetData
#   Cloud room IDs the API wants.  The table is static for the life of the
#   process.
#
# UNKNOWN NAMES:
#   get_room_id() returns None instead of raising.  The tool layer turns that
#   into a "not found, available rooms: ..." reply without touching the
#   network.
# =============================================================================

ROOM_IDS: dict[str, str] = {
    "valdi-sdg-h100": "016d43f2-d5c0-4a78-913c-a0bc91e245ed",
    "colo-he-nucs": "2421c260-1423-4f1a-bb47-ad5dc9e765fd",
    "colo-he-proxmox2": "2d177350-fe36-4f06-a211-364ba9b02abe",
    "evergreen-rtx-4090": "36629903-e073-4df9-836f-2e1512b4871e",
    "cato-v100": "72789f00-8cc4-48e3-90a0-3ea87170eb6a",
    "all-nodes": "93e19508-b494-4999-957f-802b48a2ba0d",
    "valdi-wdc-h100": "b62ef6bd-2007-4a7a-a633-b8b62caf1e9e",
    "colo-he-proxmox": "bbf6d7ac-faf7-4037-9b44-db1e2404bab1",
    "nebulablock-dfw-4090": "fb090f13-2e25-494f-960a-04a751f7bd0e",
    "coreweave-sandbox": "ffc6dce8-079f-4dc4-9b34-2a6f1e95a467",
}


def get_room_id(room_name: str) -> str | None:
    """Room ID for ``room_name``, or None if the name is not registered."""
    return ROOM_IDS.get(room_name)


def list_available_rooms() -> list[str]:
    return list(ROOM_IDS)


def room_not_found_message(room_name: str) -> str:
    return f'Room "{room_name}" not found. Available rooms: {", ".join(list_available_rooms())}'
