import pytest

from core.metric_reports import format_activity_summary, format_category_activity
from core.models import (
    AlarmSummary,
    AlarmTotals,
    CategoryActivity,
    CriticalAlarm,
    DownProvider,
    MetricActivityBatch,
    MetricProbeResult,
    PartialFailure,
    ProviderIssueReport,
    ResourceIssue,
    RoomAlarm,
)
from core.reports import (
    duration_seconds,
    format_all_issues_report,
    format_alarm_summary,
    format_down_providers,
    format_partial_failures,
    format_resource_issues,
    longest_outage,
)

NOW = "2026-01-01T00:00:00+00:00"


def alarming_summary() -> AlarmSummary:
    return AlarmSummary(
        totals=AlarmTotals(warnings=2, critical=1, unreachable=0, total_rooms=5, rooms_with_issues=1),
        rooms_with_alarms=[RoomAlarm("r-all", "All nodes", 2, 1, 0)],
        critical_alarm_details=[
            CriticalAlarm("node-a", "disk_space_usage", "CRITICAL", "Disk almost full", "disk_space._", "All nodes")
        ],
    )


@pytest.mark.parametrize(
    "kind, expected",
    [
        ("GPU", "✅ No GPU allocation issues detected across Akash provider network."),
        ("CPU", "✅ No CPU allocation issues detected across Akash provider network."),
        ("Memory", "✅ No memory allocation issues detected across Akash provider network."),
    ],
)
def test_empty_resource_feed_renders_empty_state(kind, expected):
    assert format_resource_issues(kind, []) == expected


def test_empty_down_and_partial_feeds_render_empty_state():
    assert "no down providers detected" in format_down_providers([])
    assert "No partial provider failures detected" in format_partial_failures([])


def test_non_numeric_utilization_renders_unknown():
    text = format_resource_issues("CPU", [ResourceIssue(host="h.example", allocatable="lots", allocated=4)])

    assert "Utilization: Unknown" in text
    assert "CPU over-allocation detected" in text


def test_non_finite_utilization_renders_unknown():
    text = format_resource_issues("GPU", [ResourceIssue(host="h.example", allocatable="nan", allocated="inf")])

    assert "Utilization: Unknown" in text
    assert "nan%" not in text


def test_numeric_utilization_is_a_percentage():
    text = format_resource_issues("Memory", [ResourceIssue(host="h.example", allocatable=200, allocated=250)])

    assert "Utilization: 125.0%" in text


def test_down_providers_report_details_and_summary():
    text = format_down_providers(
        [
            DownProvider(host="a.example", severity="Critical", failure_duration="2h", failures=1234),
            DownProvider(provider="b.example", severity="Warning", failure_duration="1d 3h"),
        ]
    )

    assert "❌ a.example" in text
    assert "❌ b.example" in text
    assert "Total Failures: 1,234" in text
    assert "Critical severity issues: 1" in text
    assert "Longest outage: 1d 3h" in text


def test_partial_failures_count_failed_ips():
    text = format_partial_failures([PartialFailure(host="p.example", failed_ips=("1.1.1.1", "2.2.2.2"))])

    assert "Failed IPs: 2" in text


@pytest.mark.parametrize(
    "text, seconds",
    [("45m", 2700), ("1d 3h", 97200), ("72h15m0s", 260100), ("1.5h", 5400), ("forever", None), (None, None)],
)
def test_duration_seconds(text, seconds):
    assert duration_seconds(text) == seconds


def test_longest_outage_unknown_when_nothing_parses():
    assert longest_outage([DownProvider(failure_duration="ages")]) == "Unknown"


def test_alarm_summary_lists_critical_details():
    text = format_alarm_summary(alarming_summary(), NOW)

    assert "Total Critical: 1" in text
    assert "🔴 node-a - disk_space_usage [CRITICAL]" in text


def test_all_issues_report_healthy_uses_empty_states_not_tables():
    text = format_all_issues_report(AlarmSummary(), ProviderIssueReport(), NOW)

    for line in (
        "No active alerts detected across all infrastructure ✅",
        "No GPU allocation issues detected",
        "No CPU allocation issues detected",
        "No memory allocation issues detected",
        "No down providers detected",
        "No partial provider failures detected",
    ):
        assert line in text
    assert "ALLOCATABLE" not in text
    assert "Infrastructure Health: ✅ All Infrastructure Operational" in text
    assert "Provider Network Health: ✅ All Providers Operational" in text
    assert "Combined Status: ✅ ALL SYSTEMS OPERATIONAL" in text


def test_all_issues_report_section_order():
    providers = ProviderIssueReport(gpu=[ResourceIssue(host="g.example", allocatable=8, allocated=8, capacity=7)])

    text = format_all_issues_report(alarming_summary(), providers, NOW)

    positions = [
        text.index(banner)
        for banner in (
            "NETDATA INFRASTRUCTURE ALERTS",
            "AKASH GPU ALLOCATION ISSUES",
            "AKASH CPU ALLOCATION ISSUES",
            "AKASH MEMORY ALLOCATION ISSUES",
            "AKASH DOWN PROVIDERS",
            "AKASH PARTIAL PROVIDER FAILURES",
            "COMPREHENSIVE SUMMARY",
        )
    ]
    assert positions == sorted(positions)
    assert "g.example" in text
    assert "Total Issues Detected: 4" in text
    assert "Combined Status: 🚨 ATTENTION REQUIRED - Issues Detected" in text


def test_failed_provider_section_marks_provider_health_unhealthy():
    providers = ProviderIssueReport(errors={"cpu": "Akash Provider API error: HTTP 500"})

    text = format_all_issues_report(AlarmSummary(), providers, NOW)

    assert "Error fetching data: Akash Provider API error: HTTP 500" in text
    assert "All Providers Operational" not in text
    assert "Infrastructure Health: ✅ All Infrastructure Operational" in text
    assert "ALL SYSTEMS OPERATIONAL" not in text


def test_failed_alarm_fetch_marks_infrastructure_unhealthy():
    text = format_all_issues_report(AlarmSummary.failed("NetData Cloud API error: HTTP 503"), ProviderIssueReport(), NOW)

    assert "Error fetching NetData alarms: NetData Cloud API error: HTTP 503" in text
    assert "All Infrastructure Operational" not in text
    assert "Provider Network Health: ✅ All Providers Operational" in text
    assert "ATTENTION REQUIRED" in text


def test_category_activity_truncates_inactive_listing():
    batch = MetricActivityBatch()
    batch.summary.total = 23
    batch.record(MetricProbeResult("net.up", True, sample_count=3))
    for i in range(21):
        batch.record(MetricProbeResult(f"net.idle{i}", False))
    batch.record(MetricProbeResult("net.err", False, error="boom"))

    text = format_category_activity("network", "cato-v100", "10.0.0.1", batch, NOW)

    assert "✅ net.up (3 data points)" in text
    assert "INACTIVE METRICS (21):" in text
    assert "... and 1 more" in text
    assert "net.idle20" not in text
    assert "⚠️ net.err: boom" in text
    assert "Success rate: 4.3%" in text


def test_activity_summary_breakdown_and_insights():
    categories = [CategoryActivity("network", 12, 10, 8), CategoryActivity("disk", 2, 2, 0)]

    text = format_activity_summary("cato-v100", "10.0.0.1", 10, 40, categories, NOW)

    assert f"{'network':<15}: 8/10 active (80.0%) of 12 available" in text
    assert "Overall activity rate: 66.7%" in text
    assert "Network monitoring: 80.0% active" in text
    assert "System monitoring: No system contexts found" in text
