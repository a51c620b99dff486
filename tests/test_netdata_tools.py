import logging

import pytest

from core.errors import UpstreamError
from core.rooms import ROOM_IDS
from tools import deps, netdata_tools

CATO = ROOM_IDS["cato-v100"]
CONTEXTS_PATH = f"/spaces/space-1/rooms/{CATO}/contexts"
SANDBOX = "216.153.63.25"


@pytest.mark.asyncio
async def test_unknown_room_answers_locally_with_every_room(fake_client):
    text = await netdata_tools.get_room_contexts("nope")

    assert "not found" in text
    for name in ROOM_IDS:
        assert name in text
    assert fake_client.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "call",
    [
        lambda: netdata_tools.get_room_nodes("nope"),
        lambda: netdata_tools.test_network_metrics_activity("nope"),
        lambda: netdata_tools.get_active_metrics_summary("nope"),
    ],
)
async def test_every_room_tool_rejects_unknown_rooms(fake_client, call):
    assert "not found" in await call()
    assert fake_client.calls == []


@pytest.mark.asyncio
async def test_empty_room_name_is_rejected(fake_client):
    assert await netdata_tools.get_room_nodes("") == "Error: room_name parameter is required"


@pytest.mark.asyncio
async def test_room_contexts_lists_names(fake_client):
    fake_client.cloud[CONTEXTS_PATH] = {"results": ["net.eth0", {"id": "system.cpu"}]}

    text = await netdata_tools.get_room_contexts("cato-v100")

    assert text.startswith('Room Contexts for "cato-v100" (2 contexts found):')
    assert '"system.cpu"' in text


@pytest.mark.asyncio
async def test_upstream_failure_becomes_error_text(fake_client):
    fake_client.cloud[CONTEXTS_PATH] = UpstreamError("NetData Cloud API", "HTTP 502")

    text = await netdata_tools.get_room_contexts("cato-v100")

    assert text == "Error getting room contexts: NetData Cloud API error: HTTP 502"


@pytest.mark.asyncio
async def test_unknown_category_is_rejected_before_any_call(fake_client):
    text = await netdata_tools.test_category_metrics_activity("cato-v100", "gpu")

    assert text.startswith("Error testing gpu metrics activity: Unknown category: gpu")
    assert "netdata_internal" in text
    assert fake_client.calls == []


@pytest.mark.asyncio
async def test_category_without_contexts_says_so(fake_client):
    fake_client.cloud[CONTEXTS_PATH] = {"results": ["net.eth0"]}

    text = await netdata_tools.test_category_metrics_activity("cato-v100", "nvidia")

    assert text == 'No nvidia contexts found in room "cato-v100"'


@pytest.mark.asyncio
async def test_network_activity_probes_the_sandbox_agent(fake_client, pauses):
    fake_client.cloud[CONTEXTS_PATH] = {"results": ["net.eth0", "net.eth1", "system.cpu"]}
    fake_client.agent[(SANDBOX, "/api/v1/data")] = lambda params: (
        {"data": [[1, 2], [0, 1]]} if params["context"] == "net.eth0" else {"data": []}
    )

    text = await netdata_tools.test_network_metrics_activity("cato-v100")

    assert "METRIC ACTIVITY ANALYSIS - NETWORK CATEGORY" in text
    assert "✅ net.eth0 (2 data points)" in text
    assert "❌ net.eth1" in text
    assert "system.cpu" not in text


@pytest.mark.asyncio
async def test_active_metrics_summary(fake_client, pauses):
    fake_client.cloud[CONTEXTS_PATH] = {"results": ["net.eth0", "system.cpu"]}
    fake_client.agent[(SANDBOX, "/api/v1/data")] = {"data": [[1, 1]]}

    text = await netdata_tools.get_active_metrics_summary("cato-v100", sample_size=5)

    assert "Total contexts available: 2" in text
    assert "Overall activity rate: 100.0%" in text
    assert "Application monitoring: No application contexts found" in text


@pytest.mark.asyncio
async def test_infrastructure_overview(fake_client):
    fake_client.cloud["/spaces"] = [{"id": "space-1"}]
    fake_client.cloud["/spaces/space-1/rooms"] = [
        {"name": "valdi-sdg-h100", "node_count": 3},
        {"name": "colo-he-nucs", "node_count": 1},
    ]

    text = await netdata_tools.get_infrastructure_overview()

    assert '"gpu_nodes": 3' in text
    assert '"compute_percentage": 75' in text
    assert '"valdi": 1' in text


@pytest.mark.asyncio
async def test_alarm_tool_reports_fetch_failure(fake_client):
    fake_client.cloud["/spaces/space-1/alarms"] = UpstreamError("NetData Cloud API", "HTTP 503")
    fake_client.cloud["/spaces/space-1/rooms"] = []

    text = await netdata_tools.get_infrastructure_alarms()

    assert "Error fetching NetData alarms: NetData Cloud API error: HTTP 503" in text


@pytest.mark.asyncio
async def test_connection_info_hides_tokens(fake_client):
    text = await netdata_tools.get_connection_info()

    assert '"api_token_present": true' in text
    assert "cloud-token" not in text
    assert "gh-token" not in text


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "call, action",
    [
        (netdata_tools.get_infrastructure_alarms, "fetching infrastructure alarms"),
        (netdata_tools.get_connection_info, "reading connection settings"),
    ],
)
async def test_malformed_environment_becomes_error_text(monkeypatch, call, action):
    monkeypatch.setattr(deps, "_client", None)
    monkeypatch.setenv("NETDATA_AGENT_PORT", "abc")

    text = await call()

    assert text.startswith(f"Error {action}: NETDATA_AGENT_PORT must be an integer")


@pytest.mark.asyncio
async def test_network_shortcut_logs_one_request_line(fake_client, caplog):
    caplog.set_level(logging.INFO)

    await netdata_tools.test_network_metrics_activity("nope")

    requests = [record for record in caplog.records if "called with" in record.getMessage()]
    assert len(requests) == 1
    assert "test_network_metrics_activity" in requests[0].getMessage()
