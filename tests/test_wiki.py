import pytest

from core.errors import UpstreamError
from core.wiki import (
    CANDIDATE_PAGES,
    FALLBACK_WIKI_PAGES,
    discover_pages,
    extract_rpc_info,
    find_matches,
    format_page_list,
)
from tests.conftest import make_settings
from tools import wiki_tools

RPC_PAGE = """# RPC Nodes
Mainnet rpc: https://rpc.example.net:443
grpc: grpc.example.net:9090
See https://rpc.example.net:443 and [docs](https://api.example.net/v1)
Unrelated https://status.example.net
"""


def test_candidates_are_unique_and_start_with_known_pages():
    assert len(CANDIDATE_PAGES) == len(set(CANDIDATE_PAGES))
    assert CANDIDATE_PAGES[:2] == ("Home", "DevOps-Phone-Numbers")
    assert "engineering/RPC-Nodes" in CANDIDATE_PAGES


@pytest.mark.asyncio
async def test_discovery_keeps_non_empty_pages_and_skips_failures(fake_client, pauses):
    fake_client.wiki.update(
        {
            "Home": "# Welcome",
            "Overview": "   ",
            "Servers": UpstreamError("GitHub wiki", "HTTP 500"),
            "engineering/OCL-Providers": "providers",
        }
    )

    pages = await discover_pages(fake_client)

    assert pages == {"Home": "# Welcome", "engineering/OCL-Providers": "providers"}
    assert len([call for call in fake_client.calls if call[0] == "wiki"]) == len(CANDIDATE_PAGES)


def test_extract_rpc_info_from_rpc_related_pages():
    pages = {"RPC-Nodes": RPC_PAGE, "Contact": "api: https://api.contact.example"}

    info = extract_rpc_info(pages)

    assert info.pages_searched == ["RPC-Nodes"]
    assert info.endpoints == ["https://rpc.example.net:443", "https://api.example.net/v1"]
    assert info.nodes == ["Mainnet rpc: https://rpc.example.net:443", "grpc: grpc.example.net:9090"]


def test_find_matches_is_case_insensitive_with_preview():
    pages = {"Home": "x" * 300 + "Provider", "Contact": "nothing here"}

    hits = find_matches(pages, "PROVIDER")

    assert [hit.page for hit in hits] == ["Home"]
    assert hits[0].preview == "x" * 200 + "..."


def test_page_list_groups_root_and_subdirectory_pages():
    text = format_page_list(["Home", "engineering/Contact"])

    assert "Root Level Pages (1):\nHome" in text
    assert "Subdirectory Pages (1):\nengineering/Contact" in text


def test_empty_page_list_falls_back_to_common_names():
    text = format_page_list([])

    assert ", ".join(FALLBACK_WIKI_PAGES) in text


@pytest.mark.asyncio
async def test_get_wiki_page_returns_content(fake_client):
    fake_client.wiki["Home"] = "# Welcome"

    text = await wiki_tools.get_wiki_page("Home")

    assert text == 'Content from wiki page "Home":\n\n# Welcome'


@pytest.mark.asyncio
async def test_missing_page_suggests_discovered_pages(fake_client, pauses):
    fake_client.wiki["DevOps-Phone-Numbers"] = "call us"

    text = await wiki_tools.get_wiki_page("Nope")

    assert text == 'Wiki page "Nope" not found. Available pages: DevOps-Phone-Numbers'


@pytest.mark.asyncio
async def test_search_requires_query(fake_client):
    assert await wiki_tools.search_wiki("") == "Error: query parameter is required"
    assert fake_client.calls == []


@pytest.mark.asyncio
async def test_search_and_rpc_tools(fake_client, pauses):
    fake_client.wiki.update({"Home": "Akash provider runbook", "RPC-Nodes": RPC_PAGE})

    search = await wiki_tools.search_wiki("runbook")
    rpc = await wiki_tools.list_rpc_nodes()

    assert search.startswith('Found 1 wiki page(s) containing "runbook":')
    assert "📄 Page: Home" in search
    assert "- https://api.example.net/v1" in rpc
    assert "Pages searched: Home, RPC-Nodes" in rpc


@pytest.mark.asyncio
async def test_missing_token_is_reported(fake_client, pauses):
    fake_client.settings = make_settings(github_token=None)

    text = await wiki_tools.get_wiki_pages_list()

    assert text.startswith("Error discovering wiki pages: GitHub token is not configured")
