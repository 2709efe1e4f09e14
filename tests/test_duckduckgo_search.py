from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from deepsearch.tools import duckduckgo_search

RESULTS_HTML = """
<html><body>
  <div class="result results_links web-result">
    <h2><a class="result__a" href="https://a.example">First <b>Result</b></a></h2>
    <a class="result__snippet" href="https://a.example">Snippet one</a>
  </div>
  <div class="result results_links web-result">
    <h2><a class="result__a" href="https://b.example">Second</a></h2>
  </div>
  <div class="result results_links web-result">
    <h2><a class="result__a" href="https://c.example">Third</a></h2>
    <a class="result__snippet" href="https://c.example">Snippet three</a>
  </div>
  <div class="result results_links web-result">
    <h2><a class="result__a" href="https://d.example">Fourth</a></h2>
  </div>
</body></html>
"""


def test_parse_results_pairs_titles_with_their_own_snippets():
    results = duckduckgo_search.parse_results(RESULTS_HTML, max_results=3)

    assert [r.title for r in results] == ["First Result", "Second", "Third"]
    assert [r.snippet for r in results] == ["Snippet one", "", "Snippet three"]


def test_parse_results_handles_pages_without_results():
    assert duckduckgo_search.parse_results("<html><body>No results.</body></html>") == []


def test_results_to_dicts():
    results = [duckduckgo_search.SearchResult(title="T", snippet="S")]
    assert duckduckgo_search.results_to_dicts(results) == [{"title": "T", "snippet": "S"}]


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            request = httpx.Request("GET", duckduckgo_search.DUCKDUCKGO_HTML_URL)
            raise httpx.HTTPStatusError(
                "error",
                request=request,
                response=httpx.Response(self.status_code, request=request),
            )


class FakeClient:
    def __init__(self, response: FakeResponse):
        self.response = response
        self.calls: list[tuple[tuple, dict]] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        return None

    async def get(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        return self.response


@pytest.mark.asyncio
async def test_search_queries_html_endpoint():
    client = FakeClient(FakeResponse(RESULTS_HTML))
    with patch("deepsearch.tools.duckduckgo_search.httpx.AsyncClient", return_value=client):
        results = await duckduckgo_search.search("solar power", max_results=2)

    assert [r.title for r in results] == ["First Result", "Second"]
    args, kwargs = client.calls[0]
    assert args[0] == duckduckgo_search.DUCKDUCKGO_HTML_URL
    assert kwargs["params"] == {"q": "solar power"}
    assert "User-Agent" in kwargs["headers"]


@pytest.mark.asyncio
async def test_search_raises_on_http_error():
    client = FakeClient(FakeResponse("", status_code=503))
    with patch("deepsearch.tools.duckduckgo_search.httpx.AsyncClient", return_value=client):
        with pytest.raises(httpx.HTTPStatusError):
            await duckduckgo_search.search("solar power")
