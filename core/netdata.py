# =============================================================================
# core/netdata.py - NetData Cloud inventory
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Thin, structured wrappers around the NetData Cloud resources the tools
#   need (spaces, rooms, per-room metric contexts, per-room nodes) plus the
#   infrastructure overview analysis.
#
#   Fetchers raise ConfigError / UpstreamError; the tool layer decides how to
#   report them.  analyze_infrastructure() is pure.
# =============================================================================

from typing import Any

from core.http_client import ApiClient
from core.models import InfrastructureOverview

GPU_MARKERS = ("h100", "v100", "4090")
HOSTING_PROVIDERS = ("valdi", "coreweave", "nebulablock", "colo")


def as_result_list(data: Any, key: str = "results") -> list[Any]:
    """Unwrap ``{"results": [...]}`` envelopes; bare lists pass through."""
    if isinstance(data, dict):
        data = data.get(key, [])
    return data if isinstance(data, list) else []


async def fetch_spaces(client: ApiClient) -> list[Any]:
    return as_result_list(await client.cloud_get("/spaces"))


async def fetch_rooms(client: ApiClient) -> list[dict[str, Any]]:
    rooms = as_result_list(await client.cloud_get(client.space_path("/rooms")))
    return [room for room in rooms if isinstance(room, dict)]


async def fetch_room_contexts(client: ApiClient, room_id: str) -> list[str]:
    """Metric context names available in a room.

    The API returns either plain strings or objects; objects contribute their
    ``id`` (or ``context``) field.
    """
    data = await client.cloud_get(client.space_path(f"/rooms/{room_id}/contexts"))
    contexts: list[str] = []
    for item in as_result_list(data):
        if isinstance(item, str):
            contexts.append(item)
        elif isinstance(item, dict):
            name = item.get("id") or item.get("context")
            if name:
                contexts.append(str(name))
    return contexts


async def fetch_room_nodes(client: ApiClient, room_id: str) -> list[dict[str, Any]]:
    nodes = as_result_list(await client.cloud_get(client.space_path(f"/rooms/{room_id}/nodes")))
    return [node for node in nodes if isinstance(node, dict)]


def _node_count(room: dict[str, Any]) -> int:
    try:
        return int(room.get("node_count") or 0)
    except (TypeError, ValueError):
        return 0


def analyze_infrastructure(spaces: list[Any], rooms: list[dict[str, Any]]) -> InfrastructureOverview:
    """Summarize room inventory: GPU rooms, hosting-provider breakdown, sizes."""

    def name_of(room: dict[str, Any]) -> str:
        return str(room.get("name") or "").lower()

    gpu_rooms = [room for room in rooms if any(marker in name_of(room) for marker in GPU_MARKERS)]
    total_nodes = sum(_node_count(room) for room in rooms)
    gpu_nodes = sum(_node_count(room) for room in gpu_rooms)

    return InfrastructureOverview(
        total_spaces=len(spaces),
        total_rooms=len(rooms),
        total_nodes=total_nodes,
        gpu_focused_rooms=len(gpu_rooms),
        gpu_nodes=gpu_nodes,
        compute_percentage=round(gpu_nodes / total_nodes * 100) if total_nodes else 0,
        gpu_breakdown={
            f"{marker}_rooms": sum(1 for room in gpu_rooms if marker in name_of(room))
            for marker in GPU_MARKERS
        },
        provider_breakdown={
            provider: sum(1 for room in rooms if provider in name_of(room))
            for provider in HOSTING_PROVIDERS
        },
        rooms_by_size=sorted(
            (
                {
                    "name": room.get("name"),
                    "node_count": _node_count(room),
                    "description": room.get("description"),
                }
                for room in rooms
            ),
            key=lambda room: room["node_count"],
            reverse=True,
        ),
    )
