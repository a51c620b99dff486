# =============================================================================
# tools/akash_tools.py - Akash provider health tools
# =============================================================================
# One tool per provider-monitor feed, plus the combined report that also
# pulls in NetData alarms.  The single-feed tools report a failed fetch as
# an error reply; the combined report never fails as a whole and marks
# unavailable sections inline instead.
# =============================================================================

import asyncio

from core.alarms import get_alarm_summary
from core.errors import MonitorError
from core.providers import (
    fetch_cpu_issues,
    fetch_down_providers,
    fetch_gpu_issues,
    fetch_memory_issues,
    fetch_partial_failures,
    fetch_provider_report,
)
from core.reports import (
    format_all_issues_report,
    format_down_providers,
    format_partial_failures,
    format_resource_issues,
)
from tools.deps import generated_at, get_client
from tools.logging_utils import log_failure, log_request, log_response, log_status
from tools.registry import ToolSpec


async def get_akash_providers_down() -> str:
    log_request("get_akash_providers_down")
    try:
        providers = await fetch_down_providers(get_client())
    except MonitorError as exc:
        return log_failure("get_akash_providers_down", "fetching down providers", exc)
    except Exception as exc:
        return log_failure("get_akash_providers_down", "fetching down providers", exc, unexpected=True)
    return log_response("get_akash_providers_down", format_down_providers(providers))


async def _resource_tool(tool_name: str, kind: str, fetch) -> str:
    log_request(tool_name)
    action = f"fetching {kind if kind != 'Memory' else 'memory'} issues"
    try:
        issues = await fetch(get_client())
    except MonitorError as exc:
        return log_failure(tool_name, action, exc)
    except Exception as exc:
        return log_failure(tool_name, action, exc, unexpected=True)
    return log_response(tool_name, format_resource_issues(kind, issues))


async def get_akash_gpu_issues() -> str:
    return await _resource_tool("get_akash_gpu_issues", "GPU", fetch_gpu_issues)


async def get_akash_cpu_issues() -> str:
    return await _resource_tool("get_akash_cpu_issues", "CPU", fetch_cpu_issues)


async def get_akash_memory_issues() -> str:
    return await _resource_tool("get_akash_memory_issues", "Memory", fetch_memory_issues)


async def get_akash_partial_failures() -> str:
    log_request("get_akash_partial_failures")
    try:
        failures = await fetch_partial_failures(get_client())
    except MonitorError as exc:
        return log_failure("get_akash_partial_failures", "fetching partial failures", exc)
    except Exception as exc:
        return log_failure("get_akash_partial_failures", "fetching partial failures", exc, unexpected=True)
    return log_response("get_akash_partial_failures", format_partial_failures(failures))


async def get_akash_all_issues_report() -> str:
    """NetData alarms and all five provider feeds, fetched in parallel."""
    log_request("get_akash_all_issues_report")
    try:
        client = get_client()
        log_status("Fetching NetData alarms and 5 provider feeds in parallel")
        alarms, providers = await asyncio.gather(get_alarm_summary(client), fetch_provider_report(client))
        if providers.errors:
            log_status(f"Unavailable provider sections: {', '.join(providers.errors)}")
        report = format_all_issues_report(alarms, providers, generated_at())
    except MonitorError as exc:
        return log_failure("get_akash_all_issues_report", "generating comprehensive issues report", exc)
    except Exception as exc:
        return log_failure("get_akash_all_issues_report", "generating comprehensive issues report", exc, unexpected=True)
    return log_response("get_akash_all_issues_report", report)


_NO_ARGS = {"type": "object", "properties": {}}

TOOLS = [
    ToolSpec(
        name="get_akash_providers_down",
        description="Get list of Akash providers that are currently down",
        handler=get_akash_providers_down,
        input_schema=_NO_ARGS,
    ),
    ToolSpec(
        name="get_akash_gpu_issues",
        description="Get list of Akash providers with GPU allocation issues",
        handler=get_akash_gpu_issues,
        input_schema=_NO_ARGS,
    ),
    ToolSpec(
        name="get_akash_cpu_issues",
        description="Get list of Akash providers with CPU allocation issues",
        handler=get_akash_cpu_issues,
        input_schema=_NO_ARGS,
    ),
    ToolSpec(
        name="get_akash_memory_issues",
        description="Get list of Akash providers with memory allocation issues",
        handler=get_akash_memory_issues,
        input_schema=_NO_ARGS,
    ),
    ToolSpec(
        name="get_akash_partial_failures",
        description="Get list of Akash providers with partial failures",
        handler=get_akash_partial_failures,
        input_schema=_NO_ARGS,
    ),
    ToolSpec(
        name="get_akash_all_issues_report",
        description=(
            "Get comprehensive report of all infrastructure and Akash provider issues "
            "(NetData alarms, GPU, CPU, memory, down providers, partial failures)"
        ),
        handler=get_akash_all_issues_report,
        input_schema=_NO_ARGS,
    ),
]
