# =============================================================================
# tools/mcp_server.py - FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Creates the FastMCP server and registers every tool in the registry with
#   it.  The tool bodies live in netdata_tools.py, akash_tools.py and
#   wiki_tools.py; this file only wires them to the protocol.
#
# HOW IT WORKS (the flow):
#   1. An MCP client lists tools; FastMCP answers with each ToolSpec's name,
#      description and hand-written input schema.
#   2. The client calls a tool by name, e.g. "get_akash_gpu_issues".
#   3. FastMCP routes the call to the handler, which calls core/ and returns
#      one text report.
#   4. FastMCP wraps the text into the MCP result envelope.
#
# RUNNING THIS SERVER:
#     a) python main.py                (stdio, the usual MCP client setup)
#     b) python -m tools.mcp_server
# =============================================================================

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.tools import Tool

from core.config import load_settings
from tools.logging_utils import configure_logging
from tools.registry import ToolRegistry, ToolSpec, build_registry

SERVER_NAME = "infra-health-monitor"

load_dotenv()

# Logging goes to STDERR: STDOUT is the MCP transport.
configure_logging(load_settings().log_level)


def as_mcp_tool(spec: ToolSpec) -> Tool:
    """FastMCP tool for ``spec`` that advertises its declared input schema."""
    tool = Tool.from_function(spec.handler, name=spec.name, description=spec.description)
    return tool.model_copy(update={"parameters": spec.input_schema})


def create_server(registry: ToolRegistry | None = None) -> FastMCP:
    registry = registry or build_registry()
    server = FastMCP(SERVER_NAME)
    for spec in registry.specs():
        server.add_tool(as_mcp_tool(spec))
    return server


registry = build_registry()
mcp = create_server(registry)


if __name__ == "__main__":
    mcp.run()
