# =============================================================================
# core/prober.py - Metric activity prober
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Answers "which of these metric contexts are actually collecting data?"
#   by asking a NetData agent directly (the Cloud API only lists contexts,
#   it does not say whether they are live).
#
#   The agent on the sandbox host stands in for the whole fleet: every node
#   runs the same collector configuration, and the sandbox is safe to load.
#
# PACING:
#   probe_metrics() sends at most ``batch_size`` requests at a time and pauses
#   ``settings.rate_limit_delay`` seconds between batches.
#
# CLASSIFICATION (per settled probe):
#   error set        -> errors
#   zero data points -> inactive
#   otherwise        -> active
# =============================================================================

import logging

from core.categories import METRIC_CATEGORIES, filter_by_category
from core.concurrency import pause, run_in_batches
from core.errors import MonitorError
from core.http_client import ApiClient
from core.models import CategoryActivity, MetricActivityBatch, MetricProbeResult

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 5
DEFAULT_LOOKBACK_SECONDS = -300


async def probe_metric(
    client: ApiClient,
    context: str,
    after_seconds: int = DEFAULT_LOOKBACK_SECONDS,
) -> MetricProbeResult:
    """Ask the sandbox agent for recent points of ``context``.  Never raises."""
    try:
        body = await client.agent_get(
            client.settings.sandbox_host,
            "/api/v1/data",
            params={"context": context, "after": after_seconds, "before": 0},
        )
    except MonitorError as exc:
        return MetricProbeResult(context=context, active=False, error=str(exc))

    body = body if isinstance(body, dict) else {}
    data = body.get("data")
    points = data if isinstance(data, list) else []
    labels = body.get("labels")
    return MetricProbeResult(
        context=context,
        active=bool(points),
        sample_count=len(points),
        labels=tuple(str(label) for label in labels) if isinstance(labels, list) else (),
        last_value=points[0] if points else None,
    )


async def probe_metrics(
    client: ApiClient,
    contexts: list[str],
    batch_size: int = DEFAULT_BATCH_SIZE,
    delay: float | None = None,
) -> MetricActivityBatch:
    """Probe every context in paced batches and group the results.

    ``batch_size`` <= 0 probes everything in a single batch.  ``delay``
    defaults to the configured rate-limit delay.
    """
    if delay is None:
        delay = client.settings.rate_limit_delay

    batch = MetricActivityBatch()
    batch.summary.total = len(contexts)

    outcomes = await run_in_batches(
        contexts,
        lambda context: probe_metric(client, context),
        batch_size,
        delay,
    )
    for context, outcome in zip(contexts, outcomes):
        if isinstance(outcome, BaseException):
            # probe_metric absorbs expected failures; this is a bug.
            logger.error("probe of %s failed unexpectedly", context, exc_info=outcome)
            outcome = MetricProbeResult(context=context, active=False, error=str(outcome) or repr(outcome))
        batch.record(outcome)

    logger.debug(
        "probed %d contexts: %d active, %d inactive, %d errors",
        batch.summary.tested,
        batch.summary.active_count,
        batch.summary.inactive_count,
        batch.summary.error_count,
    )
    return batch


async def sample_category_activity(
    client: ApiClient,
    contexts: list[str],
    sample_size: int = 10,
) -> list[CategoryActivity]:
    """Probe up to ``sample_size`` contexts of every category present.

    Categories with no matching context are left out.  ``sample_size`` <= 0
    probes every matching context.  Categories run one after another with the
    rate-limit pause in between.
    """
    results: list[CategoryActivity] = []
    for category in METRIC_CATEGORIES:
        matching = filter_by_category(contexts, category)
        if not matching:
            continue
        if results:
            await pause(client.settings.rate_limit_delay)
        sample = matching[:sample_size] if sample_size > 0 else matching
        batch = await probe_metrics(client, sample)
        results.append(
            CategoryActivity(
                category=category,
                total_available=len(matching),
                tested=batch.summary.tested,
                active=batch.summary.active_count,
            )
        )
    return results
