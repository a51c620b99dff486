# =============================================================================
# tools/netdata_tools.py - NetData tools
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Thin async wrappers around core/ for the NetData Cloud API and the
#   per-node agents.  Each handler:
#     1. logs the request,
#     2. checks that required string arguments are non-empty,
#     3. resolves room names through the static registry (an unknown name is
#        answered locally, with no network call),
#     4. calls core/ and formats the result as ONE text reply.
#
#   Failures never escape a handler: MonitorError and anything unexpected
#   become an "Error <doing X>: ..." reply.
#
# TOOL NAMING CONVENTIONS:
#   get_*   -> read-only retrieval
#   test_*  -> live activity probes against the sandbox agent (still
#              read-only, but they send many small requests)
# =============================================================================

from core.alarms import get_alarm_summary
from core.categories import METRIC_CATEGORIES, filter_by_category, list_categories
from core.errors import MonitorError, UnknownCategoryError
from core.metric_reports import (
    format_activity_summary,
    format_category_activity,
    format_connection_info,
    format_infrastructure_overview,
    format_json_listing,
)
from core.netdata import analyze_infrastructure, fetch_room_contexts, fetch_room_nodes, fetch_rooms, fetch_spaces
from core.prober import probe_metrics, sample_category_activity
from core.reports import format_alarm_summary
from core.rooms import get_room_id, room_not_found_message
from tools.deps import generated_at, get_client
from tools.logging_utils import log_failure, log_request, log_response, log_status
from tools.registry import ToolSpec

ROOM_NAME_PROPERTY = {"type": "string", "description": "Room name (e.g., 'valdi-sdg-h100')"}


def _required(name: str) -> str:
    return f"Error: {name} parameter is required"


# =============================================================================
# Inventory
# =============================================================================
async def get_space_info() -> str:
    """Basic information about the NetData spaces visible to the token."""
    log_request("get_space_info")
    try:
        spaces = await fetch_spaces(get_client())
    except MonitorError as exc:
        return log_failure("get_space_info", "fetching space info", exc)
    except Exception as exc:
        return log_failure("get_space_info", "fetching space info", exc, unexpected=True)
    return log_response("get_space_info", format_json_listing("NetData Space Information", spaces))


async def get_nodes_info() -> str:
    """Rooms (and their node counts) in the configured space."""
    log_request("get_nodes_info")
    try:
        rooms = await fetch_rooms(get_client())
    except MonitorError as exc:
        return log_failure("get_nodes_info", "fetching nodes info", exc)
    except Exception as exc:
        return log_failure("get_nodes_info", "fetching nodes info", exc, unexpected=True)
    return log_response("get_nodes_info", format_json_listing("NetData Nodes Information", rooms))


async def get_infrastructure_overview() -> str:
    """GPU rooms, hosting-provider breakdown and rooms by size."""
    log_request("get_infrastructure_overview")
    try:
        client = get_client()
        spaces = await fetch_spaces(client)
        rooms = await fetch_rooms(client)
        log_status(f"Analyzing {len(rooms)} rooms")
        overview = analyze_infrastructure(spaces, rooms)
    except MonitorError as exc:
        return log_failure("get_infrastructure_overview", "analyzing infrastructure", exc)
    except Exception as exc:
        return log_failure("get_infrastructure_overview", "analyzing infrastructure", exc, unexpected=True)
    return log_response("get_infrastructure_overview", format_infrastructure_overview(overview))


async def get_room_contexts(room_name: str = "") -> str:
    """Every metric context available in a room."""
    log_request("get_room_contexts", room_name=room_name)
    if not room_name:
        return _required("room_name")
    room_id = get_room_id(room_name)
    if room_id is None:
        return room_not_found_message(room_name)

    try:
        contexts = await fetch_room_contexts(get_client(), room_id)
    except MonitorError as exc:
        return log_failure("get_room_contexts", "getting room contexts", exc)
    except Exception as exc:
        return log_failure("get_room_contexts", "getting room contexts", exc, unexpected=True)
    title = f'Room Contexts for "{room_name}" ({len(contexts)} contexts found)'
    return log_response("get_room_contexts", format_json_listing(title, contexts))


async def get_room_nodes(room_name: str = "") -> str:
    """Every node in a room, as reported by the Cloud API."""
    log_request("get_room_nodes", room_name=room_name)
    if not room_name:
        return _required("room_name")
    room_id = get_room_id(room_name)
    if room_id is None:
        return room_not_found_message(room_name)

    try:
        nodes = await fetch_room_nodes(get_client(), room_id)
    except MonitorError as exc:
        return log_failure("get_room_nodes", "getting room nodes", exc)
    except Exception as exc:
        return log_failure("get_room_nodes", "getting room nodes", exc, unexpected=True)
    title = f'Room Nodes for "{room_name}" ({len(nodes)} nodes found)'
    return log_response("get_room_nodes", format_json_listing(title, nodes))


async def get_infrastructure_alarms() -> str:
    """Active alarm totals plus the details of every critical alert."""
    log_request("get_infrastructure_alarms")
    try:
        summary = await get_alarm_summary(get_client())
    except MonitorError as exc:
        return log_failure("get_infrastructure_alarms", "fetching infrastructure alarms", exc)
    except Exception as exc:
        return log_failure("get_infrastructure_alarms", "fetching infrastructure alarms", exc, unexpected=True)
    return log_response("get_infrastructure_alarms", format_alarm_summary(summary, generated_at()))


async def get_connection_info() -> str:
    """Effective connection settings, secrets reduced to presence flags."""
    log_request("get_connection_info")
    try:
        description = get_client().settings.describe()
    except MonitorError as exc:
        return log_failure("get_connection_info", "reading connection settings", exc)
    except Exception as exc:
        return log_failure("get_connection_info", "reading connection settings", exc, unexpected=True)
    return log_response("get_connection_info", format_connection_info(description))


# =============================================================================
# Metric activity
# =============================================================================
async def _category_activity(tool_name: str, room_name: str, category: str) -> str:
    room_id = get_room_id(room_name)
    if room_id is None:
        return room_not_found_message(room_name)

    action = f"testing {category} metrics activity"
    try:
        if category not in METRIC_CATEGORIES:
            raise UnknownCategoryError(category, list_categories())
        client = get_client()
        contexts = filter_by_category(await fetch_room_contexts(client, room_id), category)
        if not contexts:
            return log_response(tool_name, f'No {category} contexts found in room "{room_name}"')
        log_status(f"Probing {len(contexts)} {category} contexts on {client.settings.sandbox_host}")
        batch = await probe_metrics(client, contexts)
    except MonitorError as exc:
        return log_failure(tool_name, action, exc)
    except Exception as exc:
        return log_failure(tool_name, action, exc, unexpected=True)

    report = format_category_activity(category, room_name, client.settings.sandbox_host, batch, generated_at())
    return log_response(tool_name, report)


async def test_category_metrics_activity(room_name: str = "", category: str = "") -> str:
    """Probe every context of one category in a room for recent data."""
    log_request("test_category_metrics_activity", room_name=room_name, category=category)
    if not room_name or not category:
        return "Error: room_name and category parameters are required"
    return await _category_activity("test_category_metrics_activity", room_name, category)


async def test_network_metrics_activity(room_name: str = "") -> str:
    """Shortcut for the network category."""
    log_request("test_network_metrics_activity", room_name=room_name)
    if not room_name:
        return _required("room_name")
    return await _category_activity("test_network_metrics_activity", room_name, "network")


async def get_active_metrics_summary(room_name: str = "", sample_size: int = 10) -> str:
    """Sample each category of a room and report activity rates."""
    log_request("get_active_metrics_summary", room_name=room_name, sample_size=sample_size)
    if not room_name:
        return _required("room_name")
    room_id = get_room_id(room_name)
    if room_id is None:
        return room_not_found_message(room_name)

    try:
        client = get_client()
        contexts = await fetch_room_contexts(client, room_id)
        log_status(f"Sampling up to {sample_size} contexts per category from {len(contexts)}")
        categories = await sample_category_activity(client, contexts, sample_size)
    except MonitorError as exc:
        return log_failure("get_active_metrics_summary", "generating active metrics summary", exc)
    except Exception as exc:
        return log_failure("get_active_metrics_summary", "generating active metrics summary", exc, unexpected=True)

    report = format_activity_summary(
        room_name,
        client.settings.sandbox_host,
        sample_size,
        len(contexts),
        categories,
        generated_at(),
    )
    return log_response("get_active_metrics_summary", report)


# =============================================================================
# Tool table
# =============================================================================
_NO_ARGS = {"type": "object", "properties": {}}

TOOLS = [
    ToolSpec(
        name="get_space_info",
        description="Get basic information about your NetData space",
        handler=get_space_info,
        input_schema=_NO_ARGS,
    ),
    ToolSpec(
        name="get_nodes_info",
        description="Get information about nodes/rooms in your NetData space",
        handler=get_nodes_info,
        input_schema=_NO_ARGS,
    ),
    ToolSpec(
        name="get_infrastructure_overview",
        description="Get comprehensive overview of entire NetData infrastructure",
        handler=get_infrastructure_overview,
        input_schema=_NO_ARGS,
    ),
    ToolSpec(
        name="get_room_contexts",
        description="Get all available metric contexts for a specific room",
        handler=get_room_contexts,
        input_schema={
            "type": "object",
            "properties": {"room_name": ROOM_NAME_PROPERTY},
            "required": ["room_name"],
        },
    ),
    ToolSpec(
        name="get_room_nodes",
        description="Get all nodes in a specific room",
        handler=get_room_nodes,
        input_schema={
            "type": "object",
            "properties": {"room_name": ROOM_NAME_PROPERTY},
            "required": ["room_name"],
        },
    ),
    ToolSpec(
        name="get_infrastructure_alarms",
        description="Get active NetData alarm totals and critical alert details across the infrastructure",
        handler=get_infrastructure_alarms,
        input_schema=_NO_ARGS,
    ),
    ToolSpec(
        name="get_connection_info",
        description="Show the effective API connection settings (secrets are reported as present/absent only)",
        handler=get_connection_info,
        input_schema=_NO_ARGS,
    ),
    ToolSpec(
        name="test_category_metrics_activity",
        description="Test metric activity for a specific category using direct agent queries on sandbox host",
        handler=test_category_metrics_activity,
        input_schema={
            "type": "object",
            "properties": {
                "room_name": {"type": "string", "description": "Room name to get contexts from"},
                "category": {
                    "type": "string",
                    "description": f"Metric category to test ({', '.join(METRIC_CATEGORIES)})",
                    "enum": list(METRIC_CATEGORIES),
                },
            },
            "required": ["room_name", "category"],
        },
    ),
    ToolSpec(
        name="test_network_metrics_activity",
        description="Comprehensive test of network metric activity using direct agent queries",
        handler=test_network_metrics_activity,
        input_schema={
            "type": "object",
            "properties": {"room_name": {"type": "string", "description": "Room name to analyze"}},
            "required": ["room_name"],
        },
    ),
    ToolSpec(
        name="get_active_metrics_summary",
        description="Get summary of active metrics across all categories using intelligent sampling",
        handler=get_active_metrics_summary,
        input_schema={
            "type": "object",
            "properties": {
                "room_name": {"type": "string", "description": "Room name to analyze"},
                "sample_size": {
                    "type": "integer",
                    "description": "Number of metrics to test per category (default: 10)",
                    "default": 10,
                },
            },
            "required": ["room_name"],
        },
    ),
]
