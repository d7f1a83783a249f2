"""
Shared test fixtures.

Every test that needs pages gets its own content directory under tmp_path,
so tests are isolated from the real content/ folder and from each other.
"""
import pytest
from httpx import AsyncClient, ASGITransport

from src.docsite.content import ContentSource, get_source
from src.docsite.main import app


# Relative path → file text. A small docs tree covering each section.
SAMPLE_PAGES = {
    "index.md": "---\ntitle: Steel Docs\n---\nWelcome.\n",
    "overview/index.md": (
        "---\n"
        "title: Overview\n"
        "description: What Steel is\n"
        "---\n"
        "Steel is a browser API.\n"
    ),
    "overview/quickstart.md": (
        "# Quickstart\n"
        "\n"
        "```python\n"
        "client = Steel()   \n"
        "\n"
        "\n"
        "\n"
        "session = client.sessions.create()\n"
        "```\n"
    ),
    "integrations/claude-computer-use/setup.md": (
        "---\n"
        "title: Computer Use Setup\n"
        "---\n"
        "```bash\n"
        "npm install   \n"
        "```\n"
    ),
    "apis/sessions-api/index.md": "---\ntitle: Sessions API\n---\nSession endpoints.\n",
    "apis/sessions-api/reference/create-session.md": "---\ntitle: Create Session\n---\n`POST /v1/sessions`\n",
    "changelog/v1-0-0.md": "---\ntitle: v1.0.0\n---\nFirst release.\n",
}


def write_pages(root, pages):
    """Helper: write {relative path: text} under root."""
    for relative, text in pages.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    return root


@pytest.fixture
def content_dir(tmp_path):
    """A content directory populated with SAMPLE_PAGES."""
    return write_pages(tmp_path / "content", SAMPLE_PAGES)


@pytest.fixture
def source(content_dir):
    return ContentSource(content_dir)


@pytest.fixture
async def client(source):
    """
    HTTP test client with the content source overridden to use our test pages.
    """
    app.dependency_overrides[get_source] = lambda: source

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
