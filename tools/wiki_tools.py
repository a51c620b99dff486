# =============================================================================
# tools/wiki_tools.py - GitHub wiki tools
# =============================================================================

from core.errors import MonitorError
from core.wiki import (
    discover_pages,
    extract_rpc_info,
    fetch_page,
    format_page,
    format_page_list,
    format_page_not_found,
    format_rpc_info,
    format_search_results,
    search_wiki as search_wiki_pages,
)
from tools.deps import get_client
from tools.logging_utils import log_failure, log_request, log_response, log_status
from tools.registry import ToolSpec


async def search_wiki(query: str = "") -> str:
    log_request("search_wiki", query=query)
    if not query:
        return "Error: query parameter is required"
    try:
        hits = await search_wiki_pages(get_client(), query)
    except MonitorError as exc:
        return log_failure("search_wiki", "searching wiki", exc)
    except Exception as exc:
        return log_failure("search_wiki", "searching wiki", exc, unexpected=True)
    return log_response("search_wiki", format_search_results(query, hits))


async def get_wiki_page(page_name: str = "") -> str:
    """Raw markdown of one page; suggests discovered pages when it is missing."""
    log_request("get_wiki_page", page_name=page_name)
    if not page_name:
        return "Error: page_name parameter is required"
    try:
        client = get_client()
        content = await fetch_page(client, page_name)
        if not content:
            log_status(f"{page_name} not found, discovering alternatives")
            known = list(await discover_pages(client))
            return log_response("get_wiki_page", format_page_not_found(page_name, known))
    except MonitorError as exc:
        return log_failure("get_wiki_page", "getting wiki page", exc)
    except Exception as exc:
        return log_failure("get_wiki_page", "getting wiki page", exc, unexpected=True)
    return log_response("get_wiki_page", format_page(page_name, content))


async def list_rpc_nodes() -> str:
    log_request("list_rpc_nodes")
    try:
        pages = await discover_pages(get_client())
        info = extract_rpc_info(pages)
    except MonitorError as exc:
        return log_failure("list_rpc_nodes", "extracting RPC nodes", exc)
    except Exception as exc:
        return log_failure("list_rpc_nodes", "extracting RPC nodes", exc, unexpected=True)
    return log_response("list_rpc_nodes", format_rpc_info(info))


async def get_wiki_pages_list() -> str:
    log_request("get_wiki_pages_list")
    try:
        pages = await discover_pages(get_client())
    except MonitorError as exc:
        return log_failure("get_wiki_pages_list", "discovering wiki pages", exc)
    except Exception as exc:
        return log_failure("get_wiki_pages_list", "discovering wiki pages", exc, unexpected=True)
    return log_response("get_wiki_pages_list", format_page_list(list(pages)))


TOOLS = [
    ToolSpec(
        name="search_wiki",
        description="Search across GitHub wiki pages for specific content",
        handler=search_wiki,
        input_schema={
            "type": "object",
            "properties": {"query": {"type": "string", "description": "Search term to look for in wiki pages"}},
            "required": ["query"],
        },
    ),
    ToolSpec(
        name="get_wiki_page",
        description="Retrieve content from a specific GitHub wiki page",
        handler=get_wiki_page,
        input_schema={
            "type": "object",
            "properties": {
                "page_name": {
                    "type": "string",
                    "description": "Name of the wiki page to retrieve (e.g., 'Home', 'engineering/PageName')",
                }
            },
            "required": ["page_name"],
        },
    ),
    ToolSpec(
        name="list_rpc_nodes",
        description="Extract and list all RPC node information from the engineering wiki",
        handler=list_rpc_nodes,
        input_schema={"type": "object", "properties": {}},
    ),
    ToolSpec(
        name="get_wiki_pages_list",
        description="Get list of all available wiki pages (discovered by probing known page names)",
        handler=get_wiki_pages_list,
        input_schema={"type": "object", "properties": {}},
    ),
]
