"""
Docs router — rendered HTML for every content page.

GET /{slug}  → The page at that URL, with breadcrumbs and section metadata.
               404 if there's no page.

Mounted last: the catch-all path would shadow every other route.
"""
import logging
from html import escape as html_escape

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import HTMLResponse

from src.docsite.breadcrumb import build_breadcrumbs
from src.docsite.content import ContentSource, Page, get_source
from src.docsite.format_code import format_markdown_code_blocks
from src.docsite.html import markdown_to_html, render_breadcrumbs, wrap_page
from src.docsite.navigation import create_metadata, get_route_metadata

logger = logging.getLogger(__name__)

router = APIRouter(tags=["docs"])


def _starts_with_title(markdown: str) -> bool:
    for line in markdown.split("\n"):
        if line.strip():
            return line.startswith("# ")
    return False


def render_page(page: Page) -> str:
    """
    Render a content page to a full HTML document.

    Input: a Page
    Output: HTML with top nav, breadcrumbs, title, description and body
    """
    metadata = create_metadata(get_route_metadata(page.url))
    body_md = format_markdown_code_blocks(page.content)

    parts = [render_breadcrumbs(build_breadcrumbs(page.url))]
    if not _starts_with_title(body_md):
        parts.append(markdown_to_html(f"# {page.title}"))
        if page.description:
            parts.append(f'<p class="page-description">{html_escape(page.description)}</p>')
    parts.append(markdown_to_html(body_md))

    title = page.title if page.title == metadata["title"] else f"{page.title} | {metadata['title']}"
    return wrap_page(
        title,
        "\n".join(parts),
        description=page.description or metadata["description"],
        current_path=page.url,
    )


@router.get("/{slug:path}", response_class=HTMLResponse)
async def docs_page(slug: str, source: ContentSource = Depends(get_source)):
    """A docs page by URL."""
    page = source.get_page(slug)
    if page is None:
        logger.debug(f"No page for /{slug}")
        raise HTTPException(status_code=404, detail="Page not found")
    return render_page(page)
