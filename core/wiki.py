# =============================================================================
# core/wiki.py - GitHub wiki access
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the operations wiki (raw markdown served by GitHub) and answers
#   three kinds of question about it: "which pages exist", "which pages
#   mention X", and "which RPC / API endpoints are documented".
#
# PAGE DISCOVERY:
#   GitHub has no API that lists wiki pages, so discovery probes a fixed list
#   of candidate page names.  Each candidate is fetched once; pages that exist
#   and are non-empty are kept together with their content, so search and RPC
#   extraction never fetch a page twice.  Probes run in small paced batches
#   like the metric prober.
# =============================================================================

import logging
import re

from core.concurrency import run_in_batches
from core.errors import ConfigError
from core.http_client import ApiClient
from core.models import RpcInfo, WikiSearchHit

logger = logging.getLogger(__name__)

FALLBACK_WIKI_PAGES = (
    "Home", "Overview", "Index", "README",
    "RPC-Nodes", "RPC_Nodes", "RPC", "Nodes",
    "Infrastructure", "Servers", "Providers",
    "Network", "Deployment", "Configuration",
    "Monitoring", "Operations", "Maintenance",
    "DevOps-Phone-Numbers", "Contact", "Engineers",
)

SUBDIRECTORY_PAGES = (
    "engineering/Overclock-Managed-Providers-on-Akash-Network",
    "engineering/OCL-Providers",
    "engineering/Providers",
    "engineering/Contact",
    "engineering/Infrastructure",
    "engineering/RPC-Nodes",
    "docs/Home",
    "docs/Overview",
    "operations/Monitoring",
    "operations/Maintenance",
)

# Known pages first, then the generic names, then sub-directories.
CANDIDATE_PAGES = tuple(
    dict.fromkeys(("Home", "DevOps-Phone-Numbers") + FALLBACK_WIKI_PAGES + SUBDIRECTORY_PAGES)
)

DEFAULT_SUGGESTIONS = ("Home", "Overview", "DevOps-Phone-Numbers")

DISCOVERY_BATCH_SIZE = 5
PREVIEW_LENGTH = 200

_ENDPOINT_RE = re.compile(r"(https?://[^\s)]*(?:rpc|api|grpc)[^\s)]*)", re.IGNORECASE)
_NODE_MARKERS = ("rpc:", "api:", "grpc:")


async def fetch_page(client: ApiClient, page_name: str) -> str | None:
    """Markdown of ``page_name``, or None when the page does not exist."""
    return await client.wiki_raw(page_name)


async def discover_pages(client: ApiClient) -> dict[str, str]:
    """Probe CANDIDATE_PAGES; ``{page: content}`` for every non-empty page found."""
    outcomes = await run_in_batches(
        list(CANDIDATE_PAGES),
        lambda page: fetch_page(client, page),
        DISCOVERY_BATCH_SIZE,
        client.settings.rate_limit_delay,
    )
    pages: dict[str, str] = {}
    for page, outcome in zip(CANDIDATE_PAGES, outcomes):
        if isinstance(outcome, ConfigError):
            # Missing token: every probe fails the same way.
            raise outcome
        if isinstance(outcome, BaseException):
            logger.debug("skipping wiki page %s: %s", page, outcome)
            continue
        if outcome and outcome.strip():
            pages[page] = outcome
    logger.debug("discovered %d wiki pages", len(pages))
    return pages


def find_matches(pages: dict[str, str], query: str) -> list[WikiSearchHit]:
    """Pages containing ``query`` (case-insensitive), in discovery order."""
    needle = query.lower()
    return [
        WikiSearchHit(page=page, preview=content[:PREVIEW_LENGTH] + "...")
        for page, content in pages.items()
        if needle in content.lower()
    ]


async def search_wiki(client: ApiClient, query: str) -> list[WikiSearchHit]:
    return find_matches(await discover_pages(client), query)


def is_rpc_page(page: str) -> bool:
    lowered = page.lower()
    return "rpc" in lowered or "node" in lowered or page in ("Home", "Overview")


def extract_rpc_info(pages: dict[str, str]) -> RpcInfo:
    """Endpoint URLs and ``rpc:``/``api:``/``grpc:`` lines from RPC-related pages."""
    info = RpcInfo()
    for page, content in pages.items():
        if not is_rpc_page(page):
            continue
        info.pages_searched.append(page)
        for url in _ENDPOINT_RE.findall(content):
            if url not in info.endpoints:
                info.endpoints.append(url)
        for line in content.splitlines():
            if any(marker in line.lower() for marker in _NODE_MARKERS):
                info.nodes.append(line.strip())
    return info


# =============================================================================
# Formatting
# =============================================================================
def format_search_results(query: str, hits: list[WikiSearchHit]) -> str:
    if not hits:
        return f'No wiki pages found containing "{query}"'
    lines = [f'Found {len(hits)} wiki page(s) containing "{query}":', ""]
    for hit in hits:
        lines += [f"📄 Page: {hit.page}", hit.preview, ""]
    return "\n".join(lines).rstrip()


def format_page(page_name: str, content: str) -> str:
    return f'Content from wiki page "{page_name}":\n\n{content}'


def format_page_not_found(page_name: str, known_pages: list[str]) -> str:
    suggestions = ", ".join(known_pages or DEFAULT_SUGGESTIONS)
    return f'Wiki page "{page_name}" not found. Available pages: {suggestions}'


def format_page_list(pages: list[str]) -> str:
    if not pages:
        return (
            "Unable to discover wiki pages.\n\n"
            f"Fallback - Common wiki pages to try:\n{', '.join(FALLBACK_WIKI_PAGES)}\n\n"
            "Note: Use get_wiki_page or search_wiki tools to access specific content."
        )

    root_pages = [page for page in pages if "/" not in page]
    sub_pages = [page for page in pages if "/" in page]
    lines = [f"✅ Discovered {len(pages)} wiki pages", ""]
    if root_pages:
        lines += [f"📁 Root Level Pages ({len(root_pages)}):", ", ".join(root_pages), ""]
    if sub_pages:
        lines += [f"📂 Subdirectory Pages ({len(sub_pages)}):", ", ".join(sub_pages), ""]
    lines.append("Use get_wiki_page tool with any of these page names to retrieve content.")
    return "\n".join(lines)


def format_rpc_info(info: RpcInfo) -> str:
    lines = [
        "RPC Nodes Information:",
        "",
        f"Total endpoints: {len(info.endpoints)}",
        f"Total node entries: {len(info.nodes)}",
        f"Pages searched: {', '.join(info.pages_searched) if info.pages_searched else 'none'}",
        "",
        "ENDPOINTS:",
    ]
    lines += [f"- {url}" for url in info.endpoints] or ["No RPC endpoints found"]
    lines += ["", "NODE ENTRIES:"]
    lines += [f"- {node}" for node in info.nodes] or ["No RPC node entries found"]
    return "\n".join(lines)
