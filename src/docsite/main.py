"""
Steel Docs — main FastAPI application.

Serves the documentation site: markdown pages rendered to HTML, a
breadcrumb trail on every page, and the docs exported as plain text
for LLMs.
"""
import logging
from contextlib import asynccontextmanager
from html import escape as html_escape

from fastapi import Depends, FastAPI
from fastapi.responses import HTMLResponse

from src.docsite.config import LOG_LEVEL, SITE_DESCRIPTION, SITE_NAME
from src.docsite.content import ContentSource, get_source
from src.docsite.html import wrap_page
from src.docsite.navigation import NAV_SECTIONS, create_metadata, get_route_metadata, section_for
from src.docsite.routers import api, docs, llms

logger = logging.getLogger(__name__)


def setup_logging():
    """Configure app-wide logging once, at startup."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


@asynccontextmanager
async def lifespan(app):
    """Set up logging on startup."""
    setup_logging()
    logger.info(f"{SITE_NAME} starting")
    yield


app = FastAPI(
    title=SITE_NAME,
    description=SITE_DESCRIPTION,
    version="0.1.0",
    lifespan=lifespan,
    # /docs belongs to the site, not to Swagger
    docs_url="/api/swagger",
    redoc_url=None,
)

# Mount routers. docs goes last: its catch-all path matches everything
app.include_router(api.router)
app.include_router(llms.router)


# ---------------------------------------------------------------------------
# Landing page — sections and the pages in each
# ---------------------------------------------------------------------------

LANDING_PAGE_CSS = """
    .hero {
        text-align: center;
        padding: 40px 0 24px;
    }
    .hero h1 { font-size: 32px; margin-bottom: 12px; }
    .hero .tagline { font-size: 18px; color: #4b5563; }
    .sections {
        display: grid;
        grid-template-columns: 1fr 1fr;
        gap: 16px;
        margin: 24px 0;
    }
    @media (max-width: 600px) {
        .sections { grid-template-columns: 1fr; }
    }
    .section-card {
        border: 1px solid #e5e7eb;
        border-radius: 8px;
        padding: 16px 20px;
    }
    .section-card h3 { margin-top: 0; }
    .section-card ul { margin-left: 18px; font-size: 14px; }
"""


def _landing_body(source: ContentSource) -> str:
    grouped = {section["url"]: [] for section in NAV_SECTIONS}
    for page in source.get_pages():
        section = section_for(page.url)
        if section is not None:
            grouped[section["url"]].append(page)

    cards = []
    for section in NAV_SECTIONS:
        pages = grouped[section["url"]]
        if not pages:
            continue
        links = "".join(
            f'<li><a href="{page.url}">{html_escape(page.title)}</a></li>' for page in pages
        )
        cards.append(
            f'<div class="section-card"><h3><a href="{section["url"]}">'
            f'{html_escape(section["title"])}</a></h3><ul>{links}</ul></div>'
        )

    cards_html = "".join(cards)
    return f"""
<div class="hero">
    <h1>{html_escape(SITE_NAME)}</h1>
    <p class="tagline">{html_escape(SITE_DESCRIPTION)}</p>
</div>
<div class="sections">
    {cards_html}
</div>
<p class="muted">Working with an LLM? Give it <a href="/llms-full.txt">/llms-full.txt</a>.</p>
"""


@app.get("/", response_class=HTMLResponse)
async def landing_page(source: ContentSource = Depends(get_source)):
    """Landing page — the front door, linking every section."""
    metadata = create_metadata(get_route_metadata("/"))
    return wrap_page(
        metadata["title"],
        _landing_body(source),
        extra_css=LANDING_PAGE_CSS,
        description=metadata["description"],
    )


@app.get("/api")
async def api_root():
    """API root — JSON welcome for programmatic access."""
    return {
        "name": SITE_NAME,
        "version": "0.1.0",
        "description": SITE_DESCRIPTION,
        "llms": "/llms-full.txt",
        "swagger": "/api/swagger",
    }


@app.get("/health")
async def health():
    """Health check for monitoring."""
    return {"status": "ok"}


app.include_router(docs.router)
