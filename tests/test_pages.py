"""
Tests for the rendered site.

Covers:
- Landing page, /api and /health
- Docs pages: breadcrumbs, titles, cleaned-up code blocks
- Route metadata merging
- /api/format
"""
from unittest.mock import AsyncMock, patch

import pytest

from src.docsite import format_code
from src.docsite.format_code import FormatterError
from src.docsite.navigation import DEFAULT_METADATA, create_metadata, get_route_metadata, section_for


# --- Landing ---

@pytest.mark.asyncio
async def test_landing_page_returns_html(client):
    """GET / lists the sections that have pages."""
    resp = await client.get("/")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "Steel Docs" in resp.text
    assert 'href="/overview/quickstart"' in resp.text
    assert "API Reference" in resp.text
    assert "/llms-full.txt" in resp.text


@pytest.mark.asyncio
async def test_api_root_returns_json(client):
    resp = await client.get("/api")
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "Steel Docs"
    assert data["llms"] == "/llms-full.txt"


@pytest.mark.asyncio
async def test_health(client):
    resp = await client.get("/health")
    assert resp.json() == {"status": "ok"}


# --- Docs pages ---

@pytest.mark.asyncio
async def test_docs_page_renders_breadcrumbs(client):
    resp = await client.get("/integrations/claude-computer-use/setup")
    assert resp.status_code == 200
    assert '<nav class="breadcrumb"' in resp.text
    assert '<a href="/integrations">Integrations</a>' in resp.text
    assert '<a href="/integrations/claude-computer-use">Claude Computer Use</a>' in resp.text
    assert '<span class="current">Setup</span>' in resp.text
    assert "<h1>Computer Use Setup</h1>" in resp.text


@pytest.mark.asyncio
async def test_api_reference_page_breadcrumbs(client):
    """The reference segment and the operation are left out of the trail."""
    resp = await client.get("/apis/sessions-api/reference/create-session")
    assert resp.status_code == 200
    assert '<a href="/apis">APIS</a>' in resp.text
    assert '<span class="current">Sessions API</span>' in resp.text
    assert ">Reference<" not in resp.text


@pytest.mark.asyncio
async def test_docs_page_code_blocks_cleaned(client):
    resp = await client.get("/overview/quickstart")
    assert resp.status_code == 200
    assert '<code class="language-python">client = Steel()\n\nsession' in resp.text
    # Body already has a # heading, so no second title
    assert resp.text.count("<h1>") == 1


@pytest.mark.asyncio
async def test_unsupported_language_block_untouched(client):
    resp = await client.get("/integrations/claude-computer-use/setup")
    assert '<code class="language-bash">npm install   </code>' in resp.text


@pytest.mark.asyncio
async def test_docs_page_description(client):
    resp = await client.get("/overview")
    assert '<p class="page-description">What Steel is</p>' in resp.text
    assert '<meta name="description" content="What Steel is">' in resp.text


@pytest.mark.asyncio
async def test_unknown_page_404(client):
    resp = await client.get("/nope/nothing-here")
    assert resp.status_code == 404


# --- Metadata ---

def test_route_metadata_by_prefix():
    assert get_route_metadata("/cookbook/playwright")["title"] == "Cookbook"
    assert get_route_metadata("/overview")["title"] == "Steel Documentation"
    assert get_route_metadata("/apis/sessions-api") == {}


def test_create_metadata_merges_nested():
    merged = create_metadata({"title": "Cookbook", "openGraph": {"title": "Cookbook"}})
    assert merged["title"] == "Cookbook"
    assert merged["openGraph"]["title"] == "Cookbook"
    # Untouched nested fields come from the defaults
    assert merged["openGraph"]["siteName"] == DEFAULT_METADATA["openGraph"]["siteName"]
    assert merged["twitter"] == DEFAULT_METADATA["twitter"]


def test_create_metadata_does_not_mutate_defaults():
    create_metadata({"openGraph": {"title": "Changed"}})
    assert DEFAULT_METADATA["openGraph"]["title"] == "Steel Docs"


def test_section_for():
    assert section_for("/cookbook/playwright")["title"] == "Cookbook"
    assert section_for("/apis")["title"] == "API Reference"
    assert section_for("/apisx") is None


# --- /api/format ---

@pytest.mark.asyncio
async def test_format_endpoint_json(client):
    resp = await client.post("/api/format", json={"code": '{"a":1,  "b":2}', "language": "json"})
    assert resp.status_code == 200
    assert resp.json()["code"] == '{\n  "a": 1,\n  "b": 2\n}\n'


@pytest.mark.asyncio
async def test_format_endpoint_sync_is_cleanup_only(client):
    resp = await client.post(
        "/api/format",
        json={"code": '{"a":1}   \n\n\n\n', "language": "json", "sync": True},
    )
    assert resp.json()["code"] == '{"a":1}'


@pytest.mark.asyncio
async def test_format_endpoint_engine_failure_returns_input(client):
    engine = AsyncMock()
    engine.format.side_effect = FormatterError("no prettier")
    with patch.dict(format_code.ENGINES, {"babel": engine}):
        resp = await client.post("/api/format", json={"code": "const a=1  \n\n\n", "language": "js"})
    assert resp.status_code == 200
    assert resp.json()["code"] == "const a=1  \n\n\n"


@pytest.mark.asyncio
async def test_format_endpoint_requires_code(client):
    resp = await client.post("/api/format", json={"language": "js"})
    assert resp.status_code == 422
