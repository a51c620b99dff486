# =============================================================================
# core/categories.py - Metric category rules
# =============================================================================
#
# A metric context belongs to a category when its name starts with any of the
# category's prefixes.  Prefix order does not matter, and a context may fall
# into more than one category (e.g. "netdata.network" is both "network" and
# "netdata_internal").
# =============================================================================

from core.errors import UnknownCategoryError

METRIC_CATEGORIES: dict[str, tuple[str, ...]] = {
    "network": (
        "net.", "ip.", "ipv4.", "ipv6.", "system.net", "netfilter.",
        "k8s.cgroup.net_", "netdata.network",
    ),
    "system": (
        "system.cpu", "system.ram", "system.load", "system.processes",
        "system.entropy", "system.uptime", "system.interrupts",
    ),
    "disk": ("disk.", "system.io"),
    "memory": ("mem.", "system.pgpgio"),
    "docker": ("docker.", "cgroup."),
    "kubernetes": ("k8s.",),
    "applications": ("app.", "user.", "usergroup."),
    "sensors": ("sensors.", "system.hw.sensor"),
    "nvidia": ("nvidia_smi.",),
    "netdata_internal": ("netdata.",),
}


def list_categories() -> list[str]:
    return list(METRIC_CATEGORIES)


def filter_by_category(contexts: list[str], category: str) -> list[str]:
    """Contexts matching ``category``, in their original order.

    Raises:
        UnknownCategoryError: ``category`` is not in METRIC_CATEGORIES.
    """
    prefixes = METRIC_CATEGORIES.get(category)
    if prefixes is None:
        raise UnknownCategoryError(category, list_categories())
    return [context for context in contexts if context.startswith(prefixes)]
