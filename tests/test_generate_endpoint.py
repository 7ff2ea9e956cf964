import json
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from link_suggester.main import app
from link_suggester.api.dependencies import get_embedder, get_llm_client, get_page_fetcher
from link_suggester.embeddings.embedder import Embedder
from link_suggester.llm.client import LLMClient
from link_suggester.web.fetcher import PageFetcher

TARGET_HTML = """
<html><head><title>Target Post</title></head><body><article>
<p>The target post explains soil preparation for vegetable gardens in detail.</p>
</article></body></html>
"""

TWO_SUGGESTIONS = json.dumps([
    {"originalText": "a", "suggestedChange": '<a href="https://b.example/post">click here</a> a'},
    {"originalText": "b", "suggestedChange": '<a href="https://b.example/post">click here</a> b'},
])

PAYLOAD = {
    "sourceUrl": "https://a.example/article",
    "targetUrl": "https://b.example/post",
    "anchorText": "click here",
}


@pytest.fixture
def mock_fetcher(article_html):
    mock = AsyncMock(spec=PageFetcher)
    mock.fetch_many.return_value = [article_html, TARGET_HTML]
    return mock


@pytest.fixture
def mock_embedder():
    mock = AsyncMock(spec=Embedder)

    async def _embed(texts):
        return [[0.1] * 8 for _ in texts]

    mock.embed.side_effect = _embed
    return mock


@pytest.fixture
def mock_llm():
    mock = AsyncMock(spec=LLMClient)
    mock.complete.return_value = TWO_SUGGESTIONS
    return mock


@pytest.fixture
def client(mock_fetcher, mock_embedder, mock_llm):
    app.dependency_overrides[get_page_fetcher] = lambda: mock_fetcher
    app.dependency_overrides[get_embedder] = lambda: mock_embedder
    app.dependency_overrides[get_llm_client] = lambda: mock_llm

    with TestClient(app, raise_server_exceptions=False) as c:
        yield c

    app.dependency_overrides = {}


def test_generate_returns_suggestions(client):
    resp = client.post("/api/generate", json=PAYLOAD)

    assert resp.status_code == 200
    data = resp.json()
    assert len(data["suggestions"]) == 2
    assert data["suggestions"][0] == {
        "originalText": "a",
        "suggestedChange": '<a href="https://b.example/post">click here</a> a',
    }


def test_generate_empty_suggestions_is_success(client, mock_llm):
    mock_llm.complete.return_value = "no json here"

    resp = client.post("/api/generate", json=PAYLOAD)

    assert resp.status_code == 200
    assert resp.json() == {"suggestions": []}


def test_invalid_url_returns_400_without_network(client, mock_fetcher, mock_embedder, mock_llm):
    resp = client.post("/api/generate", json={**PAYLOAD, "sourceUrl": "javascript:alert(1)"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid URLs"}
    mock_fetcher.fetch_many.assert_not_called()
    mock_embedder.embed.assert_not_called()
    mock_llm.complete.assert_not_called()


@pytest.mark.parametrize("field, url", [
    ("sourceUrl", "http://exa mple.com/"),
    ("targetUrl", "https://a<b>.com"),
])
def test_malformed_host_returns_400_without_network(client, mock_fetcher, field, url):
    resp = client.post("/api/generate", json={**PAYLOAD, field: url})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid URLs"}
    mock_fetcher.fetch_many.assert_not_called()


def test_non_http_target_returns_400(client):
    resp = client.post("/api/generate", json={**PAYLOAD, "targetUrl": "ftp://x.com"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid URLs"}


@pytest.mark.parametrize("body", [
    {"sourceUrl": "https://a.example/article"},
    {**PAYLOAD, "anchorText": ""},
    {**PAYLOAD, "sourceUrl": 123},
])
def test_bad_body_returns_400(client, body):
    resp = client.post("/api/generate", json=body)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Invalid request body"}


def test_non_json_body_returns_400(client):
    resp = client.post(
        "/api/generate",
        content="not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400


def test_no_paragraphs_returns_400(client, mock_fetcher):
    mock_fetcher.fetch_many.return_value = ["<html><body></body></html>", TARGET_HTML]

    resp = client.post("/api/generate", json=PAYLOAD)

    assert resp.status_code == 400
    assert resp.json() == {"error": "No valid paragraphs found in source article"}


def test_source_timeout_returns_500(client, article_html):
    def handler(request):
        if request.url.host == "a.example":
            raise httpx.ConnectTimeout("timed out", request=request)
        return httpx.Response(200, text=TARGET_HTML)

    fetcher = PageFetcher(transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_page_fetcher] = lambda: fetcher

    resp = client.post("/api/generate", json=PAYLOAD)

    assert resp.status_code == 500
    assert "timed out" in resp.json()["error"]


def test_model_failure_returns_500(client, mock_llm):
    from link_suggester.core.errors import ModelCallError

    mock_llm.complete.side_effect = ModelCallError("Completion request failed: 401")

    resp = client.post("/api/generate", json=PAYLOAD)

    assert resp.status_code == 500
    assert resp.json() == {"error": "Completion request failed: 401"}


def test_unexpected_error_returns_500(client, mock_embedder):
    mock_embedder.embed.side_effect = RuntimeError("boom")

    resp = client.post("/api/generate", json=PAYLOAD)

    assert resp.status_code == 500
    assert resp.json() == {"error": "boom"}


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"
