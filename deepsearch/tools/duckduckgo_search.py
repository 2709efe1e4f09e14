from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx
from bs4 import BeautifulSoup

from deepsearch.config import settings

DUCKDUCKGO_HTML_URL = "https://html.duckduckgo.com/html/"


@dataclass
class SearchResult:
    title: str
    snippet: str


async def search(
    query: str,
    *,
    max_results: int = 3,
) -> list[SearchResult]:
    """Run a keyword search against DuckDuckGo's HTML endpoint (no API key needed)."""
    async with httpx.AsyncClient(timeout=settings.search_timeout_seconds) as client:
        response = await client.get(
            DUCKDUCKGO_HTML_URL,
            params={"q": query},
            headers={"User-Agent": settings.search_user_agent},
        )
        response.raise_for_status()
        html = response.text

    return parse_results(html, max_results=max_results)


def parse_results(html: str, *, max_results: int = 3) -> list[SearchResult]:
    soup = BeautifulSoup(html, "html.parser")
    mapped: list[SearchResult] = []
    for anchor in soup.select("a.result__a"):
        if len(mapped) >= max_results:
            break
        title = anchor.get_text(" ", strip=True)
        if not title:
            continue
        container = anchor.find_parent(class_="result")
        snippet_node = container.select_one(".result__snippet") if container else None
        snippet = snippet_node.get_text(" ", strip=True) if snippet_node else ""
        mapped.append(SearchResult(title=title, snippet=snippet))
    return mapped


def results_to_dicts(results: list[SearchResult]) -> list[dict[str, Any]]:
    """Convert SearchResult list to JSON-serializable dicts."""
    return [{"title": r.title, "snippet": r.snippet} for r in results]
