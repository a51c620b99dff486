# =============================================================================
# tools/__init__.py
# =============================================================================
# This package is the MCP translation layer.
#
# ARCHITECTURAL ROLE:
#   tools/ sits between the MCP protocol and core/.  Each service file
#   (netdata_tools, akash_tools, wiki_tools):
#     1. Imports pure functions from core/
#     2. Validates presence of required string arguments
#     3. Turns every failure into a readable "Error ..." reply
#     4. Returns exactly one text report per call
#
#   registry.py collects the per-service tool tables; mcp_server.py hands
#   them to FastMCP.
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT contain business logic or report layouts (that's core/)
#   - They do NOT parse each other's output
# =============================================================================
