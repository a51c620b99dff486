# =============================================================================
# core/providers.py - Akash provider monitor
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Fetches the five issue feeds of the Akash provider monitor and turns the
#   loosely-typed records into the typed structures in core/models.py.
#
#     feed      endpoint                     list key
#     ------    --------------------------   --------------------------------
#     gpu       /gpuissues                   gpu_issues
#     cpu       /issues/res/cpu              nodes_with_issues
#     memory    /issues/res/memory           nodes_with_issues
#     down      /providers/down              down_providers
#     partial   /providers/partialfailures   providers_with_partial_failures
#
#   A missing or non-list key means "no issues", not an error.
# =============================================================================

import logging
from typing import Any, Callable, TypeVar

from core.concurrency import gather_settled
from core.http_client import ApiClient
from core.models import DownProvider, PartialFailure, ProviderIssueReport, ResourceIssue

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _records(body: Any, key: str, parse: Callable[[dict[str, Any]], T]) -> list[T]:
    items = body.get(key) if isinstance(body, dict) else None
    if not isinstance(items, list):
        return []
    return [parse(item) for item in items if isinstance(item, dict)]


async def fetch_gpu_issues(client: ApiClient) -> list[ResourceIssue]:
    return _records(await client.provider_get("/gpuissues"), "gpu_issues", ResourceIssue.from_record)


async def fetch_cpu_issues(client: ApiClient) -> list[ResourceIssue]:
    return _records(await client.provider_get("/issues/res/cpu"), "nodes_with_issues", ResourceIssue.from_record)


async def fetch_memory_issues(client: ApiClient) -> list[ResourceIssue]:
    return _records(await client.provider_get("/issues/res/memory"), "nodes_with_issues", ResourceIssue.from_record)


async def fetch_down_providers(client: ApiClient) -> list[DownProvider]:
    return _records(await client.provider_get("/providers/down"), "down_providers", DownProvider.from_record)


async def fetch_partial_failures(client: ApiClient) -> list[PartialFailure]:
    return _records(
        await client.provider_get("/providers/partialfailures"),
        "providers_with_partial_failures",
        PartialFailure.from_record,
    )


async def fetch_provider_report(client: ApiClient) -> ProviderIssueReport:
    """All five feeds in parallel.  A failed feed is recorded, not raised."""
    fetchers = {
        "gpu": fetch_gpu_issues,
        "cpu": fetch_cpu_issues,
        "memory": fetch_memory_issues,
        "down": fetch_down_providers,
        "partial": fetch_partial_failures,
    }
    outcomes = await gather_settled(fetch(client) for fetch in fetchers.values())

    report = ProviderIssueReport()
    for section, outcome in zip(fetchers, outcomes):
        if isinstance(outcome, BaseException):
            logger.warning("provider feed %s failed: %s", section, outcome)
            report.errors[section] = str(outcome) or outcome.__class__.__name__
        else:
            setattr(report, section, outcome)
    return report
