# =============================================================================
# main.py - Entry Point for the Infrastructure Health MCP Server
# =============================================================================
#
# HOW TO RUN:
#   python main.py                      serve over stdio (what MCP clients spawn)
#   python main.py --transport http     serve over streamable HTTP
#   python main.py --list-tools         print the tool catalog as JSON
#   python main.py --call get_akash_gpu_issues
#   python main.py --call get_room_nodes --args '{"room_name": "cato-v100"}'
#
# CONFIGURATION:
#   Everything comes from environment variables; a .env file in the working
#   directory is loaded first.  See core/config.py for the full list.
# =============================================================================

import argparse
import asyncio
import json
import sys

from dotenv import load_dotenv

# Load .env BEFORE importing the server: it reads LOG_LEVEL at import time,
# and the shared ApiClient reads the rest of the settings on first use.
load_dotenv()

from core.errors import MonitorError
from tools.mcp_server import mcp, registry


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="NetData / Akash / wiki infrastructure health MCP server")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--list-tools", action="store_true", help="print the tool catalog and exit")
    mode.add_argument("--call", metavar="TOOL", help="call one tool, print its reply and exit")
    parser.add_argument("--args", default="{}", help="JSON object of tool arguments (with --call)")
    parser.add_argument("--transport", choices=("stdio", "http"), default="stdio")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    return parser.parse_args(argv)


def call_tool(name: str, raw_args: str) -> int:
    """Run one tool through the registry; exit status 1 on an error result."""
    try:
        arguments = json.loads(raw_args)
    except json.JSONDecodeError as exc:
        print(f"--args is not valid JSON: {exc}", file=sys.stderr)
        return 2
    if not isinstance(arguments, dict):
        print("--args must be a JSON object", file=sys.stderr)
        return 2

    try:
        result = asyncio.run(registry.dispatch(name, arguments))
    except MonitorError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    for item in result["content"]:
        print(item["text"])
    return 1 if result.get("isError") else 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    if args.list_tools:
        print(json.dumps(registry.catalog(), indent=2))
        return 0
    if args.call:
        return call_tool(args.call, args.args)

    if args.transport == "http":
        mcp.run(transport="http", host=args.host, port=args.port)
    else:
        mcp.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
