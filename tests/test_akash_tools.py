import pytest

from core.errors import UpstreamError
from tools import akash_tools
from tools.registry import build_registry

EMPTY_FEEDS = {
    "/gpuissues": {"gpu_issues": []},
    "/issues/res/cpu": {"nodes_with_issues": []},
    "/issues/res/memory": {"nodes_with_issues": []},
    "/providers/down": {"down_providers": []},
    "/providers/partialfailures": {"providers_with_partial_failures": []},
}

QUIET_SPACE = {
    "/spaces/space-1/alarms": {"results": []},
    "/spaces/space-1/rooms": [{"id": "r-all", "name": "All nodes"}],
}


@pytest.mark.asyncio
async def test_gpu_issues_tool(fake_client):
    fake_client.provider["/gpuissues"] = {
        "gpu_issues": [{"host": "gpu.example", "node": "n1", "allocatable": 8, "allocated": 9, "capacity": 8}]
    }

    text = await akash_tools.get_akash_gpu_issues()

    assert "GPU Issues Detected: 1" in text
    assert "🔴 HOST: gpu.example" in text
    assert "Capacity: 8" in text


@pytest.mark.asyncio
async def test_single_feed_failure_is_error_text(fake_client):
    fake_client.provider["/issues/res/memory"] = UpstreamError("Akash Provider API", "HTTP 500")

    text = await akash_tools.get_akash_memory_issues()

    assert text == "Error fetching memory issues: Akash Provider API error: HTTP 500"


@pytest.mark.asyncio
async def test_down_providers_empty_state(fake_client):
    fake_client.provider.update(EMPTY_FEEDS)

    text = await akash_tools.get_akash_providers_down()

    assert text.startswith("✅ All Akash providers are currently operational")


@pytest.mark.asyncio
async def test_all_issues_report_when_everything_is_quiet(fake_client):
    fake_client.provider.update(EMPTY_FEEDS)
    fake_client.cloud.update(QUIET_SPACE)

    result = await build_registry().dispatch("get_akash_all_issues_report")

    text = result["content"][0]["text"]
    assert "isError" not in result
    assert "Combined Status: ✅ ALL SYSTEMS OPERATIONAL" in text


@pytest.mark.asyncio
async def test_all_issues_report_survives_partial_outages(fake_client):
    fake_client.provider.update(EMPTY_FEEDS)
    fake_client.provider["/providers/down"] = UpstreamError("Akash Provider API", "timed out")
    fake_client.cloud["/spaces/space-1/alarms"] = {"results": []}
    fake_client.cloud["/spaces/space-1/rooms"] = UpstreamError("NetData Cloud API", "HTTP 503")

    text = await akash_tools.get_akash_all_issues_report()

    assert "Error fetching NetData alarms: NetData Cloud API error: HTTP 503" in text
    assert "Error fetching data: Akash Provider API error: timed out" in text
    assert "No GPU allocation issues detected" in text
    assert "🚨 ATTENTION REQUIRED" in text
