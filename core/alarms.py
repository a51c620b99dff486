# =============================================================================
# core/alarms.py - Alarm aggregator
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Builds one AlarmSummary for the configured NetData space:
#
#     1. Fetch the per-room alarm counters and the room list (in parallel).
#     2. Map room IDs to names.  Counter entries for rooms we cannot name are
#        dropped.
#     3. Keep ONLY the "All nodes" room.  Every node is a member of "All nodes"
#        and usually of one or more other rooms as well, so summing every room
#        counts the same alarm several times.  "All nodes" is the one
#        canonical view.
#     4. For kept rooms with critical alarms, list the room's nodes, pick the
#        ones with critical counters, and ask each node's agent for its active
#        alarms.  Unreachable rooms and nodes are skipped.
#     5. Sum totals over the kept rooms only.
#
# FAILURE POLICY:
#   get_alarm_summary() never raises.  If a primary fetch fails the caller
#   gets AlarmSummary.failed(message): all zeros plus the error text.
# =============================================================================

import logging
from typing import Any

from core.concurrency import gather_settled
from core.errors import MonitorError
from core.http_client import ApiClient
from core.models import AlarmSummary, AlarmTotals, CriticalAlarm, RoomAlarm
from core.netdata import as_result_list, fetch_room_nodes

logger = logging.getLogger(__name__)

ALL_NODES_ROOM = "All nodes"


def _counters(record: dict[str, Any], key: str) -> dict[str, Any]:
    counters = record.get(key)
    return counters if isinstance(counters, dict) else {}


def _count(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def build_room_alarms(alarm_entries: list[Any], room_id_to_name: dict[str, str]) -> list[RoomAlarm]:
    """Counter entries that are non-zero, nameable and in the aggregate room."""
    retained: list[RoomAlarm] = []
    for entry in alarm_entries:
        if not isinstance(entry, dict):
            continue
        counter = _counters(entry, "alarmCounter")
        warnings = _count(counter.get("warning"))
        critical = _count(counter.get("critical"))
        unreachable = _count(entry.get("unreachableCount"))
        if not (warnings or critical or unreachable):
            continue
        room_id = entry.get("roomID")
        room_name = room_id_to_name.get(room_id) if isinstance(room_id, str) else None
        if room_name != ALL_NODES_ROOM:
            continue
        retained.append(
            RoomAlarm(
                room_id=room_id,
                room_name=room_name,
                warnings=warnings,
                critical=critical,
                unreachable=unreachable,
            )
        )
    return retained


def extract_critical_alarms(alarms_body: Any, host: str, room_name: str) -> list[CriticalAlarm]:
    """CRITICAL entries (any case) from an agent's ``/api/v1/alarms`` body."""
    alarms = alarms_body.get("alarms") if isinstance(alarms_body, dict) else None
    if not isinstance(alarms, dict):
        return []
    found: list[CriticalAlarm] = []
    for key, alarm in alarms.items():
        if not isinstance(alarm, dict):
            continue
        status = str(alarm.get("status") or "")
        if status.upper() != "CRITICAL":
            continue
        found.append(
            CriticalAlarm(
                host=host,
                alert_name=alarm.get("name") or key,
                status=status,
                description=alarm.get("info") or "Critical alert detected",
                chart=alarm.get("chart") or "Unknown",
                room=room_name,
            )
        )
    return found


async def _node_critical_alarms(client: ApiClient, host: str, room_name: str) -> list[CriticalAlarm]:
    body = await client.agent_get(host, "/api/v1/alarms", params={"active": "true"})
    return extract_critical_alarms(body, host, room_name)


async def fetch_critical_alarm_details(client: ApiClient, rooms: list[RoomAlarm]) -> list[CriticalAlarm]:
    """Drill into every node with critical alarms, straight from its agent."""
    details: list[CriticalAlarm] = []
    for room in rooms:
        try:
            nodes = await fetch_room_nodes(client, room.room_id)
        except MonitorError as exc:
            logger.debug("skipping room %s: %s", room.room_name, exc)
            continue

        hosts = [
            str(node["name"])
            for node in nodes
            if node.get("name") and _count(_counters(node, "alarmCounters").get("critical")) > 0
        ]
        outcomes = await gather_settled(_node_critical_alarms(client, host, room.room_name) for host in hosts)
        for host, outcome in zip(hosts, outcomes):
            if isinstance(outcome, BaseException):
                logger.debug("skipping unreachable node %s: %s", host, outcome)
                continue
            details.extend(outcome)
    return details


async def get_alarm_summary(client: ApiClient) -> AlarmSummary:
    """Alarm totals and critical detail for the space.  Never raises."""
    try:
        alarms_path = client.space_path("/alarms")
        rooms_path = client.space_path("/rooms")
        alarms_data, rooms_data = await gather_settled(
            [client.cloud_get(alarms_path), client.cloud_get(rooms_path)]
        )
        for outcome in (alarms_data, rooms_data):
            if isinstance(outcome, BaseException):
                raise outcome

        alarm_entries = as_result_list(alarms_data)
        room_id_to_name = {
            room["id"]: room.get("name")
            for room in as_result_list(rooms_data)
            if isinstance(room, dict) and isinstance(room.get("id"), str)
        }

        rooms_with_alarms = build_room_alarms(alarm_entries, room_id_to_name)
        rooms_with_criticals = [room for room in rooms_with_alarms if room.critical > 0]
        critical_details = await fetch_critical_alarm_details(client, rooms_with_criticals) if rooms_with_criticals else []

        return AlarmSummary(
            totals=AlarmTotals(
                warnings=sum(room.warnings for room in rooms_with_alarms),
                critical=sum(room.critical for room in rooms_with_alarms),
                unreachable=sum(room.unreachable for room in rooms_with_alarms),
                total_rooms=len(alarm_entries),
                rooms_with_issues=len(rooms_with_alarms),
            ),
            rooms_with_alarms=rooms_with_alarms,
            critical_alarm_details=critical_details,
            all_rooms=alarm_entries,
        )
    except Exception as exc:
        logger.warning("alarm summary unavailable: %s", exc)
        return AlarmSummary.failed(str(exc) or exc.__class__.__name__)
