# =============================================================================
# core/models.py - Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of every structured result that flows
# between the fetchers, the prober, the aggregator and the report
# formatters.  Nothing here talks to the network.
#
# DESIGN PRINCIPLE - "Format once":
#   Core functions return these objects; text is produced exactly once, by
#   core/reports.py or core/metric_reports.py, right before a tool replies.
#   No tool ever parses another tool's rendered text.
# =============================================================================

import math
from dataclasses import dataclass, field
from typing import Any, Mapping


# -----------------------------------------------------------------------------
# Metric activity probing
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class MetricProbeResult:
    """Outcome of asking one agent whether one metric context has recent data."""

    context: str
    active: bool
    sample_count: int = 0
    labels: tuple[str, ...] = ()
    last_value: Any = None
    error: str | None = None


@dataclass
class ActivitySummary:
    total: int = 0
    tested: int = 0
    active_count: int = 0
    inactive_count: int = 0
    error_count: int = 0

    @property
    def success_rate(self) -> float:
        """Percentage of tested contexts that were active (0.0 if none tested)."""
        if not self.tested:
            return 0.0
        return self.active_count / self.tested * 100


@dataclass
class MetricActivityBatch:
    """Probe results grouped as active / inactive / errored.

    Built incrementally: the prober calls record() once per settled probe.
    """

    active: list[MetricProbeResult] = field(default_factory=list)
    inactive: list[MetricProbeResult] = field(default_factory=list)
    errors: list[MetricProbeResult] = field(default_factory=list)
    summary: ActivitySummary = field(default_factory=ActivitySummary)

    def record(self, result: MetricProbeResult) -> None:
        self.summary.tested += 1
        if result.error:
            self.errors.append(result)
            self.summary.error_count += 1
        elif result.active:
            self.active.append(result)
            self.summary.active_count += 1
        else:
            self.inactive.append(result)
            self.summary.inactive_count += 1


@dataclass(frozen=True)
class CategoryActivity:
    """Sampled activity for one metric category."""

    category: str
    total_available: int
    tested: int
    active: int

    @property
    def active_rate(self) -> float:
        if not self.tested:
            return 0.0
        return self.active / self.tested * 100


# -----------------------------------------------------------------------------
# Cloud inventory
# -----------------------------------------------------------------------------
@dataclass
class InfrastructureOverview:
    total_spaces: int
    total_rooms: int
    total_nodes: int
    gpu_focused_rooms: int
    gpu_nodes: int
    compute_percentage: int
    gpu_breakdown: dict[str, int] = field(default_factory=dict)
    provider_breakdown: dict[str, int] = field(default_factory=dict)
    rooms_by_size: list[dict[str, Any]] = field(default_factory=list)


# -----------------------------------------------------------------------------
# Alarms
# -----------------------------------------------------------------------------
@dataclass
class AlarmTotals:
    warnings: int = 0
    critical: int = 0
    unreachable: int = 0
    total_rooms: int = 0
    rooms_with_issues: int = 0


@dataclass(frozen=True)
class RoomAlarm:
    room_id: str
    room_name: str
    warnings: int
    critical: int
    unreachable: int


@dataclass(frozen=True)
class CriticalAlarm:
    host: str
    alert_name: str
    status: str
    description: str
    chart: str
    room: str


@dataclass
class AlarmSummary:
    """Normalized alarm picture for the space.

    When either primary fetch fails, ``error`` is set and every count is zero;
    callers never see an exception from the aggregator.
    """

    totals: AlarmTotals = field(default_factory=AlarmTotals)
    rooms_with_alarms: list[RoomAlarm] = field(default_factory=list)
    critical_alarm_details: list[CriticalAlarm] = field(default_factory=list)
    all_rooms: list[Any] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def failed(cls, message: str) -> "AlarmSummary":
        return cls(error=message)

    @property
    def issue_count(self) -> int:
        return self.totals.warnings + self.totals.critical + self.totals.unreachable

    @property
    def healthy(self) -> bool:
        return self.error is None and self.issue_count == 0


# -----------------------------------------------------------------------------
# Akash provider issues
# -----------------------------------------------------------------------------
# The provider monitor returns loosely-typed records: any field may be absent
# and resource amounts arrive as numbers or strings.  Each issue kind gets its
# own structure so the formatters never poke at raw dicts.
#
# Host fallback chain (display_host): ``host`` -> ``provider`` -> "".
# -----------------------------------------------------------------------------
def _text(record: Mapping[str, Any], key: str) -> str | None:
    value = record.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _amount(record: Mapping[str, Any], key: str) -> float | int | str | None:
    value = record.get(key)
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, (int, float, str)):
        return value
    return str(value)


def _as_number(value: float | int | str | None) -> float | None:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class ResourceIssue:
    """A GPU, CPU or memory allocation problem on one provider node."""

    host: str | None = None
    provider: str | None = None
    node: str | None = None
    allocatable: float | int | str | None = None
    allocated: float | int | str | None = None
    capacity: float | int | str | None = None
    issue: str | None = None
    issue_type: str | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "ResourceIssue":
        return cls(
            host=_text(record, "host"),
            provider=_text(record, "provider"),
            node=_text(record, "node"),
            allocatable=_amount(record, "allocatable"),
            allocated=_amount(record, "allocated"),
            capacity=_amount(record, "capacity"),
            issue=_text(record, "issue"),
            issue_type=_text(record, "issue_type"),
        )

    @property
    def display_host(self) -> str:
        return self.host or self.provider or ""

    def describe_issue(self, default: str) -> str:
        return self.issue or self.issue_type or default

    def utilization(self) -> float | None:
        """allocated / allocatable as a percentage.

        None when either amount is missing or not a finite number, or
        when allocatable is zero.
        """
        allocated = _as_number(self.allocated)
        allocatable = _as_number(self.allocatable)
        if allocated is None or not allocatable:
            return None
        return allocated / allocatable * 100


@dataclass(frozen=True)
class DownProvider:
    host: str | None = None
    provider: str | None = None
    severity: str | None = None
    failure_duration: str | None = None
    failures: int | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "DownProvider":
        failures = record.get("failures")
        try:
            failures = int(failures) if failures is not None else None
        except (TypeError, ValueError):
            failures = None
        return cls(
            host=_text(record, "host"),
            provider=_text(record, "provider"),
            severity=_text(record, "severity"),
            failure_duration=_text(record, "failureDuration"),
            failures=failures,
        )

    @property
    def display_host(self) -> str:
        return self.host or self.provider or ""


@dataclass(frozen=True)
class PartialFailure:
    host: str | None = None
    provider: str | None = None
    failed_ips: tuple[str, ...] | None = None
    issue: str | None = None

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "PartialFailure":
        ips = record.get("failed_ips")
        return cls(
            host=_text(record, "host"),
            provider=_text(record, "provider"),
            failed_ips=tuple(str(ip) for ip in ips) if isinstance(ips, list) else None,
            issue=_text(record, "issue"),
        )

    @property
    def display_host(self) -> str:
        return self.host or self.provider or ""


# Section keys used in ProviderIssueReport.errors and by the formatters.
PROVIDER_SECTIONS = ("gpu", "cpu", "memory", "down", "partial")


@dataclass
class ProviderIssueReport:
    """All five provider-monitor issue lists, fetched together.

    A section whose fetch failed stays empty and its message is stored in
    ``errors`` under the section key.
    """

    gpu: list[ResourceIssue] = field(default_factory=list)
    cpu: list[ResourceIssue] = field(default_factory=list)
    memory: list[ResourceIssue] = field(default_factory=list)
    down: list[DownProvider] = field(default_factory=list)
    partial: list[PartialFailure] = field(default_factory=list)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def issue_count(self) -> int:
        return len(self.gpu) + len(self.cpu) + len(self.memory) + len(self.down) + len(self.partial)

    @property
    def healthy(self) -> bool:
        return not self.errors and self.issue_count == 0


# -----------------------------------------------------------------------------
# Wiki
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class WikiSearchHit:
    page: str
    preview: str


@dataclass
class RpcInfo:
    endpoints: list[str] = field(default_factory=list)
    nodes: list[str] = field(default_factory=list)
    pages_searched: list[str] = field(default_factory=list)
