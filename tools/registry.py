# =============================================================================
# tools/registry.py - Tool registry and router
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Holds every tool the server exposes, keyed by name.  The registry is
#   built ONCE from the per-service tool tables (netdata_tools, akash_tools,
#   wiki_tools); a name that appears in two tables stops the server at
#   startup with DuplicateToolError.
#
#   The same ToolSpec objects feed two consumers:
#     - mcp_server.py registers each handler with FastMCP.
#     - dispatch() routes a (name, arguments) call directly; main.py uses
#       it for "--call" from the command line, and tests use it too.
#
# DISPATCH RESULT:
#   {"content": [{"type": "text", "text": ...}]}            on success
#   {"content": [...], "isError": True}                      handler bug, or an
#                                                            argument it cannot
#                                                            do without
#   Keys the handler does not accept are dropped before the call.
#   An unknown tool name raises UnknownToolError instead: that is a
#   protocol-level fault, not a tool result.
# =============================================================================

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable

from core.errors import DuplicateToolError, UnknownToolError

Handler = Callable[..., Awaitable[str]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    handler: Handler
    input_schema: dict[str, Any] = field(default_factory=lambda: {"type": "object", "properties": {}})


def accepted_arguments(handler: Handler, arguments: dict[str, Any]) -> dict[str, Any]:
    """``arguments`` without the keys ``handler`` does not accept."""
    params = inspect.signature(handler).parameters
    if any(p.kind is inspect.Parameter.VAR_KEYWORD for p in params.values()):
        return dict(arguments)
    ignored = sorted(set(arguments) - set(params))
    if ignored:
        logging.debug("ignoring unknown arguments for %s: %s", handler.__name__, ", ".join(ignored))
    return {key: value for key, value in arguments.items() if key in params}


def text_result(text: str, is_error: bool = False) -> dict[str, Any]:
    result: dict[str, Any] = {"content": [{"type": "text", "text": text}]}
    if is_error:
        result["isError"] = True
    return result


class ToolRegistry:
    """Name -> ToolSpec mapping with uniqueness enforced at construction."""

    def __init__(self, *tables: Iterable[ToolSpec]):
        self._tools: dict[str, ToolSpec] = {}
        for table in tables:
            for spec in table:
                if spec.name in self._tools:
                    raise DuplicateToolError(spec.name)
                self._tools[spec.name] = spec

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def names(self) -> list[str]:
        return list(self._tools)

    def specs(self) -> list[ToolSpec]:
        return list(self._tools.values())

    def get(self, name: str) -> ToolSpec:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def catalog(self) -> list[dict[str, Any]]:
        """Tool listing in MCP ``tools/list`` shape."""
        return [
            {"name": spec.name, "description": spec.description, "inputSchema": spec.input_schema}
            for spec in self._tools.values()
        ]

    async def dispatch(self, name: str, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
        spec = self.get(name)
        arguments = accepted_arguments(spec.handler, arguments or {})
        try:
            inspect.signature(spec.handler).bind(**arguments)
        except TypeError as exc:
            return text_result(f"Error: invalid arguments for {name}: {exc}", is_error=True)

        try:
            text = await spec.handler(**arguments)
        except Exception as exc:
            logging.exception("tool %s raised", name)
            return text_result(f"Error running {name}: {exc}", is_error=True)
        return text_result(text)


def build_registry() -> ToolRegistry:
    """Registry over every service's tool table."""
    from tools.akash_tools import TOOLS as AKASH_TOOLS
    from tools.netdata_tools import TOOLS as NETDATA_TOOLS
    from tools.wiki_tools import TOOLS as WIKI_TOOLS

    return ToolRegistry(NETDATA_TOOLS, AKASH_TOOLS, WIKI_TOOLS)
