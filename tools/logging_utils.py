# =============================================================================
# tools/logging_utils.py - Colour-coded tool call logging
# =============================================================================
# Root-logger helpers; configure_logging() sends them to STDERR because
# STDOUT is the stdio MCP transport.  Colours: cyan in, yellow progress,
# green out, red failure.
# =============================================================================

import logging
import sys

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

LOG_FORMAT = "%(asctime)s [MCP] %(message)s"
LOG_DATEFMT = "%H:%M:%S"

# Long reports are cut in the log line only, never in the reply.
_PREVIEW_CHARS = 160


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
        stream=sys.stderr,
    )


def log_request(tool_name: str, **arguments) -> None:
    shown = ", ".join(f"{name}={value!r}" for name, value in arguments.items()) or "no arguments"
    logging.info(f"{_CYAN}{tool_name} called with: {shown}{_RESET}")


def log_status(progress: str) -> None:
    logging.info(f"{_YELLOW}  … {progress}{_RESET}")


def log_response(tool_name: str, text: str) -> str:
    """Log the size and first line of a reply in GREEN, then return it."""
    first_line = text.splitlines()[0] if text else ""
    if len(first_line) > _PREVIEW_CHARS:
        first_line = first_line[:_PREVIEW_CHARS] + "..."
    logging.info(f"{_GREEN}  ← {tool_name} response ({len(text)} chars): {first_line}{_RESET}")
    return text


def log_failure(tool_name: str, action: str, exc: Exception, unexpected: bool = False) -> str:
    """Log a handled failure in RED and return the ``Error <action>: ...`` reply.

    ``unexpected`` adds the traceback; use it for anything that is not a
    MonitorError.
    """
    message = f"Error {action}: {exc}"
    logging.error(f"{_RED}  ✗ {tool_name}: {message}{_RESET}", exc_info=exc if unexpected else None)
    return message
