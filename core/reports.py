# =============================================================================
# core/reports.py - Provider and alarm report formatters
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns ProviderIssueReport pieces and AlarmSummary into the plain-text
#   reports the tools return.  Every function is pure: no network, no clock
#   (timestamps are passed in), same input -> same text.
#
# LAYOUT CONVENTION:
#   banner, then a detail block (or an empty-state line when there is nothing
#   to list), then a summary block.
# =============================================================================

import re
from typing import Sequence

from core.models import AlarmSummary, DownProvider, PartialFailure, ProviderIssueReport, ResourceIssue

RESOURCE_DEFAULT_ISSUES = {
    "GPU": "GPU capacity vs. allocatable mismatch",
    "CPU": "CPU over-allocation detected",
    "Memory": "Memory over-allocation detected",
}

_DURATION_UNITS = {"d": 86400, "h": 3600, "m": 60, "s": 1}
_DURATION_TOKEN = re.compile(r"(\d+(?:\.\d+)?)\s*([dhms])", re.IGNORECASE)


def _value(value: object, missing: str) -> str:
    return missing if value is None or value == "" else str(value)


def format_utilization(issue: ResourceIssue) -> str:
    percent = issue.utilization()
    return "Unknown" if percent is None else f"{percent:.1f}%"


def duration_seconds(text: str | None) -> float | None:
    """Seconds in a duration like ``"2d 3h"`` or ``"72h15m0s"``; None if unparseable."""
    if not text:
        return None
    tokens = _DURATION_TOKEN.findall(text)
    if not tokens:
        return None
    return sum(float(amount) * _DURATION_UNITS[unit.lower()] for amount, unit in tokens)


def longest_outage(providers: Sequence[DownProvider]) -> str:
    best: tuple[float, str] | None = None
    for provider in providers:
        seconds = duration_seconds(provider.failure_duration)
        if seconds is not None and (best is None or seconds > best[0]):
            best = (seconds, provider.failure_duration or "")
    return best[1] if best else "Unknown"


# =============================================================================
# Single-feed reports
# =============================================================================
def format_down_providers(providers: Sequence[DownProvider]) -> str:
    if not providers:
        return "✅ All Akash providers are currently operational - no down providers detected."

    lines = [
        "🚨 AKASH PROVIDERS DOWN ALERT",
        "",
        f"Currently Down Providers: {len(providers)}",
        "",
        "DETAILS:",
    ]
    for provider in providers:
        failures = f"{provider.failures:,}" if provider.failures is not None else "Unknown"
        lines += [
            f"❌ {provider.display_host}",
            f"   • Severity: {_value(provider.severity, 'Unknown')}",
            f"   • Down Duration: {_value(provider.failure_duration, 'Unknown')}",
            f"   • Total Failures: {failures}",
            "   • Status: Critical Infrastructure Issue",
            "",
        ]
    critical = sum(1 for p in providers if p.severity == "Critical")
    lines += [
        "SUMMARY:",
        f"- Total affected providers: {len(providers)}",
        f"- Critical severity issues: {critical}",
        f"- Longest outage: {longest_outage(providers)}",
        "",
        "⚠️ These providers are currently unavailable for new deployments.",
    ]
    return "\n".join(lines)


def format_resource_issues(kind: str, issues: Sequence[ResourceIssue]) -> str:
    """Report for one resource feed; ``kind`` is "GPU", "CPU" or "Memory"."""
    if not issues:
        return f"✅ No {kind if kind != 'Memory' else 'memory'} allocation issues detected across Akash provider network."

    default_issue = RESOURCE_DEFAULT_ISSUES[kind]
    lines = [
        f"⚠️ AKASH {kind.upper()} ALLOCATION ISSUES",
        "",
        f"{kind} Issues Detected: {len(issues)}",
        "",
        "DETAILED BREAKDOWN:",
    ]
    for issue in issues:
        lines += [
            f"🔴 HOST: {issue.display_host}",
            f"   • Node: {_value(issue.node, 'N/A')}",
            f"   • Allocatable: {_value(issue.allocatable, 'Unknown')}",
            f"   • Allocated: {_value(issue.allocated, 'Unknown')}",
        ]
        if kind == "GPU":
            lines.append(f"   • Capacity: {_value(issue.capacity, 'Unknown')}")
        else:
            lines.append(f"   • Utilization: {format_utilization(issue)}")
        lines += [f"   • Issue: {issue.describe_issue(default_issue)}", ""]

    noun = "providers" if kind == "GPU" else "nodes"
    lines += [
        "SUMMARY:",
        f"- Total {noun} with {kind if kind != 'Memory' else 'memory'} issues: {len(issues)}",
        f"- Issue type: {default_issue}",
        "- Impact: May affect deployment scheduling and availability",
    ]
    return "\n".join(lines)


def format_partial_failures(failures: Sequence[PartialFailure]) -> str:
    if not failures:
        return "✅ No partial provider failures detected across Akash provider network."

    lines = [
        "⚠️ AKASH PARTIAL PROVIDER FAILURES",
        "",
        f"Partial Failures Detected: {len(failures)}",
        "",
        "DETAILED BREAKDOWN:",
    ]
    for failure in failures:
        failed_ips = len(failure.failed_ips) if failure.failed_ips is not None else "Unknown"
        lines += [
            f"🟡 HOST: {failure.display_host}",
            f"   • Failed IPs: {failed_ips}",
            f"   • Issue: {failure.issue or 'DNS resolution failures (partial gRPC failures)'}",
            "   • Status: Partially operational",
            "",
        ]
    lines += [
        "SUMMARY:",
        f"- Total providers with partial failures: {len(failures)}",
        "- Issue type: DNS resolution failures, partial gRPC connectivity",
        "- Impact: Reduced capacity, some services may be unavailable",
    ]
    return "\n".join(lines)


# =============================================================================
# Alarms
# =============================================================================
def _alarm_row(room_name: str, warnings: int, critical: int, unreachable: int) -> str:
    return f"{room_name:<30} {warnings:<10} {critical:<10} {unreachable:<12}".rstrip()


def _alarm_block(summary: AlarmSummary) -> list[str]:
    if summary.error:
        return [f"Error fetching NetData alarms: {summary.error}"]
    if summary.issue_count == 0:
        return [
            "No active alerts detected across all infrastructure ✅",
            f"- Total rooms monitored: {summary.totals.total_rooms}",
            "- All systems operational",
        ]

    lines = [
        "ALERT SUMMARY:",
        f"- Total Warnings: {summary.totals.warnings}",
        f"- Total Critical: {summary.totals.critical}",
        f"- Total Unreachable: {summary.totals.unreachable}",
        "",
        f"{'ROOM':<30} {'WARNINGS':<10} {'CRITICAL':<10} UNREACHABLE",
    ]
    lines += [_alarm_row(r.room_name, r.warnings, r.critical, r.unreachable) for r in summary.rooms_with_alarms]
    if summary.critical_alarm_details:
        lines += ["", f"CRITICAL ALERT DETAILS ({len(summary.critical_alarm_details)}):"]
        for alarm in summary.critical_alarm_details:
            lines.append(f"🔴 {alarm.host} - {alarm.alert_name} [{alarm.status}] chart={alarm.chart}: {alarm.description}")
    elif summary.totals.critical:
        lines += ["", "Critical alert details unavailable (affected agents unreachable)."]
    return lines


def format_alarm_summary(summary: AlarmSummary, generated_at: str) -> str:
    lines = ["===== NETDATA INFRASTRUCTURE ALERTS =====", f"Generated: {generated_at}", ""]
    lines += _alarm_block(summary)
    return "\n".join(lines)


# =============================================================================
# Combined report
# =============================================================================
_TABLE_HEADER = f"{'HOST':<40} {'NODE':<10} {'ALLOCATABLE':<13} {'ALLOCATED':<11} {'CAPACITY':<9} ISSUE"

_SECTION_TITLES = {
    "gpu": "AKASH GPU ALLOCATION ISSUES",
    "cpu": "AKASH CPU ALLOCATION ISSUES",
    "memory": "AKASH MEMORY ALLOCATION ISSUES",
    "down": "AKASH DOWN PROVIDERS",
    "partial": "AKASH PARTIAL PROVIDER FAILURES",
}

_EMPTY_STATES = {
    "gpu": "No GPU allocation issues detected",
    "cpu": "No CPU allocation issues detected",
    "memory": "No memory allocation issues detected",
    "down": "No down providers detected",
    "partial": "No partial provider failures detected",
}


def _resource_row(issue: ResourceIssue, default_issue: str, with_capacity: bool) -> str:
    capacity = _value(issue.capacity, "-") if with_capacity else "-"
    return (
        f"{issue.display_host:<40} {_value(issue.node, 'N/A'):<10} "
        f"{_value(issue.allocatable, '-'):<13} {_value(issue.allocated, '-'):<11} "
        f"{capacity:<9} {issue.describe_issue(default_issue) if with_capacity else default_issue}"
    )


def _section_rows(section: str, report: ProviderIssueReport) -> list[str]:
    if section == "gpu":
        return [_TABLE_HEADER] + [_resource_row(i, RESOURCE_DEFAULT_ISSUES["GPU"], True) for i in report.gpu]
    if section == "cpu":
        return [_TABLE_HEADER] + [_resource_row(i, RESOURCE_DEFAULT_ISSUES["CPU"], False) for i in report.cpu]
    if section == "memory":
        return [_TABLE_HEADER] + [_resource_row(i, RESOURCE_DEFAULT_ISSUES["Memory"], False) for i in report.memory]
    if section == "down":
        return [f"{'HOST':<40} {'SEVERITY':<10} FAILURE_DURATION"] + [
            f"{p.display_host:<40} {_value(p.severity, ''):<10} {_value(p.failure_duration, '')}".rstrip()
            for p in report.down
        ]
    return [f"{'HOST':<40} {'FAILED_IPS':<11} ISSUE"] + [
        f"{f.display_host:<40} {len(f.failed_ips or ()):<11} {f.issue or 'DNS resolution failures'}"
        for f in report.partial
    ]


def format_all_issues_report(alarms: AlarmSummary, providers: ProviderIssueReport, generated_at: str) -> str:
    """Infra alarms, then GPU, CPU, memory, down, partial, then the overall summary."""
    lines = [
        "===== INFRASTRUCTURE & PROVIDER COMPREHENSIVE ISSUES REPORT =====",
        f"Generated: {generated_at}",
        "",
        "===== NETDATA INFRASTRUCTURE ALERTS =====",
    ]
    lines += _alarm_block(alarms)

    for section, title in _SECTION_TITLES.items():
        lines += ["", f"===== {title} ====="]
        if section in providers.errors:
            lines.append(f"Error fetching data: {providers.errors[section]}")
        elif getattr(providers, section):
            lines += _section_rows(section, providers)
        else:
            lines.append(_EMPTY_STATES[section])

    infra_issues = alarms.issue_count
    provider_issues = providers.issue_count
    infra_healthy = alarms.healthy
    provider_healthy = providers.healthy

    if infra_healthy:
        infra_status = "✅ All Infrastructure Operational"
    elif alarms.error:
        infra_status = "⚠️ Infrastructure Status Unknown (alarm data unavailable)"
    else:
        infra_status = "⚠️ Infrastructure Issues Detected"

    if provider_healthy:
        provider_status = "✅ All Providers Operational"
    elif providers.issue_count == 0:
        provider_status = "⚠️ Provider Status Unknown (some feeds unavailable)"
    else:
        provider_status = "⚠️ Provider Issues Detected"

    combined = "✅ ALL SYSTEMS OPERATIONAL" if infra_healthy and provider_healthy else "🚨 ATTENTION REQUIRED - Issues Detected"

    lines += [
        "",
        "===== COMPREHENSIVE SUMMARY =====",
        "INFRASTRUCTURE MONITORING (NetData):",
        f"- Warning Alerts: {alarms.totals.warnings}",
        f"- Critical Alerts: {alarms.totals.critical}",
        f"- Unreachable Nodes: {alarms.totals.unreachable}",
        f"- Total Infrastructure Issues: {infra_issues}",
        "",
        "PROVIDER NETWORK MONITORING (Akash):",
        f"- GPU Issues: {len(providers.gpu)}",
        f"- CPU Issues: {len(providers.cpu)}",
        f"- Memory Issues: {len(providers.memory)}",
        f"- Down Providers: {len(providers.down)}",
        f"- Partial Failures: {len(providers.partial)}",
        f"- Total Provider Issues: {provider_issues}",
        "",
        "OVERALL HEALTH STATUS:",
        f"Total Issues Detected: {infra_issues + provider_issues}",
        f"Infrastructure Health: {infra_status}",
        f"Provider Network Health: {provider_status}",
        f"Combined Status: {combined}",
    ]
    return "\n".join(lines)
