# =============================================================================
# core/metric_reports.py - NetData inventory and metric-activity reports
# =============================================================================
#
# Pure text builders for the NetData tools.  Same conventions as
# core/reports.py: timestamps come in as arguments and an empty section is
# replaced by a one-line empty state, never an empty table.
# =============================================================================

import json
from typing import Any

from core.models import CategoryActivity, InfrastructureOverview, MetricActivityBatch

INACTIVE_LISTING_LIMIT = 20

NEXT_STEPS = (
    "Use get_room_contexts to see metrics for specific rooms",
    "Use get_room_nodes for detailed hardware information",
    "Focus on GPU clusters for specialized monitoring requirements",
)


def format_json_listing(title: str, data: Any) -> str:
    """``title`` followed by ``data`` pretty-printed as JSON."""
    return f"{title}:\n{json.dumps(data, indent=2, default=str)}"


def format_infrastructure_overview(overview: InfrastructureOverview) -> str:
    analysis = {
        "infrastructure_summary": {
            "total_spaces": overview.total_spaces,
            "total_rooms": overview.total_rooms,
            "total_nodes": overview.total_nodes,
            "gpu_focused_rooms": overview.gpu_focused_rooms,
            "gpu_nodes": overview.gpu_nodes,
            "compute_percentage": overview.compute_percentage,
        },
        "gpu_infrastructure": overview.gpu_breakdown,
        "provider_breakdown": overview.provider_breakdown,
        "rooms_by_size": overview.rooms_by_size,
        "next_steps": list(NEXT_STEPS),
    }
    return format_json_listing("NetData Infrastructure Analysis", analysis)


def format_category_activity(
    category: str,
    room_name: str,
    sandbox_host: str,
    batch: MetricActivityBatch,
    generated_at: str,
) -> str:
    """Detailed active / inactive / error listing for one category."""
    summary = batch.summary
    lines = [
        f"METRIC ACTIVITY ANALYSIS - {category.upper()} CATEGORY",
        f"Room: {room_name} (analyzed via sandbox host extrapolation)",
        f"Sandbox Host: {sandbox_host}",
        "Analysis Method: Direct agent queries on representative infrastructure",
        f"Date: {generated_at}",
        "",
        "SUMMARY:",
        f"- Total {category} contexts: {summary.total}",
        f"- Active metrics: {summary.active_count}",
        f"- Inactive metrics: {summary.inactive_count}",
        f"- Errors: {summary.error_count}",
        f"- Success rate: {summary.success_rate:.1f}%",
        "",
        f"ACTIVE METRICS ({len(batch.active)}):",
    ]
    if batch.active:
        lines += [f"✅ {r.context} ({r.sample_count} data points)" for r in batch.active]
    else:
        lines.append("No active metrics detected")

    if batch.inactive:
        lines += ["", f"INACTIVE METRICS ({len(batch.inactive)}):"]
        lines += [f"❌ {r.context}" for r in batch.inactive[:INACTIVE_LISTING_LIMIT]]
        hidden = len(batch.inactive) - INACTIVE_LISTING_LIMIT
        if hidden > 0:
            lines.append(f"... and {hidden} more")

    if batch.errors:
        lines += ["", f"ERRORS ({len(batch.errors)}):"]
        lines += [f"⚠️ {r.context}: {r.error}" for r in batch.errors]

    lines += [
        "",
        "METHODOLOGY:",
        "- Infrastructure Assumption: Uniform configuration across all nodes",
        f"- Representative Testing: Sandbox host ({sandbox_host}) as safe test target",
        "- Extrapolation: Results apply to all infrastructure due to identical setup",
        "- Safety: Zero impact on production systems",
    ]
    return "\n".join(lines)


def _insight(stats: dict[str, CategoryActivity], category: str, label: str) -> str:
    if category not in stats:
        return f"No {label} contexts found"
    return f"{stats[category].active_rate:.1f}% active"


def format_activity_summary(
    room_name: str,
    sandbox_host: str,
    sample_size: int,
    total_contexts: int,
    categories: list[CategoryActivity],
    generated_at: str,
) -> str:
    """Per-category sampling overview for a room."""
    total_tested = sum(c.tested for c in categories)
    total_active = sum(c.active for c in categories)
    overall = total_active / total_tested * 100 if total_tested else 0.0
    stats = {c.category: c for c in categories}
    sample_label = f"Up to {sample_size} metrics per category" if sample_size > 0 else "All metrics in each category"

    lines = [
        "COMPREHENSIVE METRIC ACTIVITY SUMMARY",
        f"Room: {room_name} (analyzed via sandbox host extrapolation)",
        f"Analysis Method: Intelligent sampling via sandbox host ({sandbox_host})",
        f"Sample Size: {sample_label}",
        "Infrastructure Assumption: Uniform configuration across all nodes",
        f"Date: {generated_at}",
        "",
        "OVERALL SUMMARY:",
        f"- Total contexts available: {total_contexts}",
        f"- Total tested: {total_tested}",
        f"- Total active: {total_active}",
        f"- Overall activity rate: {overall:.1f}%",
        "",
        "CATEGORY BREAKDOWN:",
    ]
    if categories:
        lines += [
            f"{c.category:<15}: {c.active}/{c.tested} active ({c.active_rate:.1f}%) of {c.total_available} available"
            for c in categories
        ]
    else:
        lines.append("No contexts in this room match a known category")

    lines += [
        "",
        "KEY INSIGHTS:",
        f"- Network monitoring: {_insight(stats, 'network', 'network')}",
        f"- System monitoring: {_insight(stats, 'system', 'system')}",
        f"- Application monitoring: {_insight(stats, 'applications', 'application')}",
        "",
        "For detailed analysis of specific categories, use test_category_metrics_activity.",
    ]
    return "\n".join(lines)


def format_connection_info(description: dict[str, Any]) -> str:
    return format_json_listing("NetData / Akash / Wiki connection settings", description)
