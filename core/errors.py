# =============================================================================
# core/errors.py - Error taxonomy
# =============================================================================
#
# Every failure the core layer raises on purpose derives from MonitorError so
# a tool handler can turn it into a readable text reply with a single except
# clause.  UnknownToolError is the odd one out: the router lets it escape so
# the MCP layer reports it as a protocol-level fault.
# =============================================================================


class MonitorError(Exception):
    """Base class for expected failures in the monitoring adapters."""


class ConfigError(MonitorError):
    """A required setting (token, space ID) is missing or malformed."""


class UpstreamError(MonitorError):
    """An outbound call failed: non-2xx status, timeout or transport error."""

    def __init__(self, api: str, message: str, status_code: int | None = None):
        super().__init__(f"{api} error: {message}")
        self.api = api
        self.status_code = status_code


class UnknownCategoryError(MonitorError):
    def __init__(self, category: str, available: list[str]):
        super().__init__(f"Unknown category: {category}. Available: {', '.join(available)}")
        self.category = category
        self.available = available


class UnknownToolError(MonitorError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class DuplicateToolError(MonitorError):
    """Two tool tables register the same tool name."""

    def __init__(self, name: str):
        super().__init__(f"Tool name registered more than once: {name}")
        self.name = name
