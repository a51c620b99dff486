# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL domain logic for the infrastructure health server:
# the HTTP facade for the NetData Cloud, NetData agents, the Akash provider
# monitor and the GitHub wiki, plus the prober, the alarm aggregator and the
# report formatters.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  Every public function here
#   either returns a dataclass from core/models.py or a formatted string.
#   The tools/ layer decides which of them become MCP tools.
# =============================================================================
